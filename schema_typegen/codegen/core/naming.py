"""
Naming conventions for type generation.

Every synthesized type or field name is derived here, so the string
conventions shared by the resolver and the emitter live in one place.
"""

import re
import textwrap
from typing import List

from .generator import SchemaContractError

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("“", "&ldquo;"),
    ("”", "&rdquo;"),
    ("‘", "&lsquo;"),
    ("’", "&rsquo;"),
    ("…", "&hellip;"),
)


def capitalize(value: str) -> str:
    """Upper-case the first character only (``dateTime`` -> ``DateTime``)."""
    return value[:1].upper() + value[1:]


def is_lower_case(value: str) -> bool:
    """True when the first character is not an upper-case letter."""
    return bool(value) and value[0] == value[0].lower()


def strip_version(url: str) -> str:
    """Remove a trailing ``|version`` suffix from a canonical URL."""
    return url.split("|", 1)[0]


def content_reference_name(owner: str, field_name: str, reference: str) -> str:
    """
    Derive the type name a content reference points at.

    ``#Bundle.link`` and ``http://.../Bundle#Bundle.link`` both give
    ``BundleLink``.

    Raises:
        SchemaContractError: If the reference has no usable fragment path.
    """
    fragment = reference.split("#", 1)[1] if "#" in reference else reference
    segments = fragment.split(".")
    if not fragment or any(not segment for segment in segments):
        raise SchemaContractError(
            f"Malformed content reference {reference!r} on {owner}.{field_name}"
        )
    return "".join(capitalize(segment) for segment in segments)


def choice_field_name(base_name: str, type_code: str) -> str:
    """Name of one expanded alternative of a choice field (``valueQuantity``)."""
    return base_name + capitalize(type_code)


def nested_type_name(owner: str, field_name: str) -> str:
    """Name of the inline structure declared by ``owner.field_name``."""
    return owner + capitalize(field_name)


def target_type_name(profile: str) -> str:
    """Type name of a target profile URL (its last path segment)."""
    return profile.rstrip("/").split("/")[-1]


def identifiers(expression: str) -> List[str]:
    """Identifiers appearing in a type expression, in order of appearance."""
    return _IDENTIFIER.findall(expression)


def escape_html(unsafe: str) -> str:
    """Escape characters that must not appear raw in doc comments."""
    for char, entity in _HTML_ESCAPES:
        unsafe = unsafe.replace(char, entity)
    return unsafe


def word_wrap(text: str, width: int) -> List[str]:
    """Wrap one line of text on word boundaries; blank input gives ``[""]``."""
    lines = textwrap.wrap(
        text,
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    )
    return lines or [""]


def doc_comment_lines(text: str | None, width: int = 70) -> List[str]:
    """Render a block doc comment, one list entry per output line."""
    if not text:
        return []

    lines = ["/**"]
    for text_line in text.split("\n"):
        for wrapped in word_wrap(text_line, width):
            lines.append(" " + ("* " + escape_html(wrapped)).strip())
    lines.append(" */")
    return lines
