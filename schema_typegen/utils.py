"""Utility functions for loading the input corpora and writing output files.

Schema indexes and enumeration corpora are plain JSON documents produced by
an upstream indexing step; this module reads them with proper error handling
and normalizes their shape.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .logging_config import get_logger

logger = get_logger(__name__)

VALUE_SET_RESOURCE_TYPES = ("CodeSystem", "ValueSet")


class JSONLoaderError(Exception):
    """Custom exception for JSON loading errors."""

    pass


def load_json_from_file(file_path: str | Path) -> Any:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Parsed JSON data.

    Raises:
        FileNotFoundError: If file doesn't exist.
        JSONLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load JSON from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Successfully loaded JSON from {file_path}")
        return data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise JSONLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e


def normalize_schema_index(data: Any, source: str = "<memory>") -> Dict[str, Dict[str, Any]]:
    """Return the ``type name -> schema record`` mapping of a schema index.

    Accepts either ``{"types": {...}}`` or the bare mapping.
    """
    if isinstance(data, dict) and isinstance(data.get("types"), dict):
        data = data["types"]

    if not isinstance(data, dict):
        raise JSONLoaderError(f"Schema index must be a JSON object: {source}")

    for name, record in data.items():
        if not isinstance(record, dict):
            raise JSONLoaderError(
                f"Schema entry '{name}' in {source} must be a JSON object"
            )
    return data


def normalize_value_sets(data: Any, source: str = "<memory>") -> Dict[str, Dict[str, Any]]:
    """Return the ``url -> CodeSystem/ValueSet resource`` mapping of a corpus.

    Accepts a FHIR Bundle, a JSON list of resources, or a ``{url: resource}``
    object. Resources other than CodeSystem and ValueSet are ignored.
    """
    if isinstance(data, dict) and data.get("resourceType") == "Bundle":
        resources = [entry.get("resource") for entry in data.get("entry") or []]
    elif isinstance(data, list):
        resources = data
    elif isinstance(data, dict):
        resources = list(data.values())
    else:
        raise JSONLoaderError(f"Unsupported enumeration corpus format: {source}")

    corpus: Dict[str, Dict[str, Any]] = {}
    for resource in resources:
        if not isinstance(resource, dict):
            continue
        if resource.get("resourceType") not in VALUE_SET_RESOURCE_TYPES:
            continue
        url = resource.get("url")
        if url:
            corpus[url] = resource
    logger.debug("Collected %d enumerations from %s", len(corpus), source)
    return corpus


def load_schema_index(paths: Iterable[str | Path]) -> Dict[str, Dict[str, Any]]:
    """Load and merge schema index files; later files override earlier ones."""
    merged: Dict[str, Dict[str, Any]] = {}
    for path in paths:
        merged.update(normalize_schema_index(load_json_from_file(path), str(path)))
    return merged


def load_value_sets(paths: Iterable[str | Path]) -> Dict[str, Dict[str, Any]]:
    """Load and merge enumeration corpus files."""
    merged: Dict[str, Dict[str, Any]] = {}
    for path in paths:
        merged.update(normalize_value_sets(load_json_from_file(path), str(path)))
    return merged


def write_units(units: Iterable[Any], output_dir: str | Path) -> List[Path]:
    """Write rendered emission units into ``output_dir``.

    Any OSError is propagated so the caller aborts the run.

    Returns:
        Paths of the written files, in write order.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for unit in units:
        path = output_dir / unit.file_name
        path.write_text(unit.content, encoding="utf-8")
        written.append(path)

    logger.info("Wrote %d files to %s", len(written), output_dir)
    return written
