"""
Template engine wrapper for type generation.

Wraps a Jinja2 environment configured for declaration output: block tags
leave no stray whitespace and undefined variables are errors.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    select_autoescape,
)
from jinja2.exceptions import TemplateError as JinjaTemplateError


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Jinja2 environment over packaged templates plus in-memory overrides."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Args:
            template_dir: Directory containing template files; in-memory
                templates added later take precedence over its files.
        """
        self.template_dir = template_dir
        self._overrides = DictLoader({})

        loaders = [self._overrides]
        if template_dir and template_dir.exists():
            loaders.append(FileSystemLoader(str(template_dir)))

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Raises:
            TemplateError: If the template is missing or fails to render
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        try:
            return self._env.from_string(template_string).render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def template_exists(self, template_name: str) -> bool:
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    def add_template(self, name: str, content: str):
        """Register an in-memory template, shadowing a packaged one of the same name."""
        self._overrides.mapping[name] = content
        if self._env.cache is not None:
            self._env.cache.clear()


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally bound to a template directory."""
    return TemplateEngine(template_dir)
