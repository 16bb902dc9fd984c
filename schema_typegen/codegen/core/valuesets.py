"""
Enumeration flattening.

Turns a value set or code system reference into the ordered list of codes
it allows, following ``compose.include`` rules and nested concepts.
"""

from typing import Any, Dict, List, Mapping, Optional, Set

from ...logging_config import get_logger
from .naming import strip_version

logger = get_logger(__name__)


class ValueSetResolver:
    """Flattens enumerations from a URL-keyed corpus, memoizing results."""

    def __init__(self, corpus: Optional[Mapping[str, Dict[str, Any]]] = None):
        """
        Args:
            corpus: Mapping of canonical URL (without version) to a CodeSystem
                or ValueSet resource.
        """
        self.corpus = corpus or {}
        self._cache: Dict[str, List[str]] = {}

    def resolve(self, url: str) -> List[str]:
        """
        Return the codes of an enumeration, in declaration order.

        Codes are not deduplicated. Unknown URLs give an empty list.
        """
        key = strip_version(url)
        if key not in self._cache:
            result: List[str] = []
            self._expand(key, result, set())
            self._cache[key] = result
        return list(self._cache[key])

    def is_cached(self, url: str) -> bool:
        return strip_version(url) in self._cache

    def _expand(self, url: str, result: List[str], chain: Set[str]) -> None:
        url = strip_version(url)

        resource = self.corpus.get(url)
        if resource is None:
            logger.debug("Enumeration not found: %s", url)
            return

        if url in chain:
            logger.warning("Circular enumeration reference skipped: %s", url)
            return

        chain = chain | {url}
        resource_type = resource.get("resourceType")

        if resource_type == "ValueSet":
            self._expand_compose(resource.get("compose"), result, chain)
        elif resource_type == "CodeSystem":
            self._expand_concepts(resource.get("concept"), result)

    def _expand_compose(
        self, compose: Optional[Dict[str, Any]], result: List[str], chain: Set[str]
    ) -> None:
        if not compose:
            return

        for include in compose.get("include") or []:
            if include.get("concept") is not None:
                for concept in include["concept"]:
                    if concept.get("code"):
                        result.append(concept["code"])
            elif include.get("system"):
                self._expand(include["system"], result, chain)

    def _expand_concepts(self, concepts: Optional[List[Dict[str, Any]]], result: List[str]) -> None:
        for concept in concepts or []:
            if concept.get("code"):
                result.append(concept["code"])
            self._expand_concepts(concept.get("concept"), result)
