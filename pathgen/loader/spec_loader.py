"""
Spec Loader - Reads OpenAPI documents from disk or over HTTP.

Features:
- YAML and JSON files (JSON is parsed as YAML)
- Remote specs fetched with requests
- Optional dereferencing of $ref nodes, with graceful fallback
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests
import yaml

from pathgen.loader.dereferencer import Dereferencer, RefResolutionError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


class SpecLoadError(RuntimeError):
    """Raised when a specification cannot be read or parsed."""


class InvalidSpecError(SpecLoadError):
    """Raised when a parsed document is not a usable OpenAPI specification."""


@dataclass
class LoadedSpec:
    """A parsed OpenAPI document and how it was obtained."""

    document: Dict[str, Any]
    source: str
    dereferenced: bool = False

    @property
    def path_count(self) -> int:
        """Number of path entries in the document."""
        return len(self.document.get("paths") or {})


def is_url(source: Union[str, Path]) -> bool:
    """Check if the source is an http(s) URL."""
    return str(source).startswith(("http://", "https://"))


def parse_document(text: str, source: str) -> Dict[str, Any]:
    """
    Parse YAML/JSON text into a mapping

    Raises:
        SpecLoadError: If the text is not valid YAML or not a mapping
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SpecLoadError(f"Could not parse {source}: {e}") from e

    if not isinstance(document, dict):
        raise SpecLoadError(f"{source} does not contain a mapping at the top level")
    return document


def load_document(source: Union[str, Path], timeout: int = 30) -> Dict[str, Any]:
    """
    Load an OpenAPI document from a file path or URL

    Args:
        source: Path to a .yaml/.yml/.json file, or an http(s) URL
        timeout: HTTP request timeout in seconds

    Returns:
        Parsed document

    Raises:
        SpecLoadError: If the source cannot be read or parsed
    """
    if is_url(source):
        return _fetch_document(str(source), timeout)

    path = Path(source)
    if path.suffix and path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise SpecLoadError(f"Unsupported specification format: {path.suffix}")

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SpecLoadError(f"File not found: {path}") from e
    except OSError as e:
        raise SpecLoadError(f"Could not read {path}: {e}") from e

    logger.debug(f"Read {len(text)} characters from {path}")
    return parse_document(text, str(path))


def _fetch_document(url: str, timeout: int) -> Dict[str, Any]:
    """Fetch and parse a remote specification."""
    try:
        logger.debug(f"Fetching specification: {url}")
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise SpecLoadError(f"Could not fetch {url}: {e}") from e

    logger.info(f"Successfully fetched specification from {url}")
    return parse_document(response.text, url)


def load_openapi(
    source: Union[str, Path],
    dereference: bool = True,
    timeout: int = 30,
) -> LoadedSpec:
    """
    Load an OpenAPI specification ready for scanning

    Args:
        source: File path or URL
        dereference: Replace $ref nodes with their targets when possible
        timeout: HTTP request timeout in seconds

    Returns:
        LoadedSpec with the (possibly dereferenced) document

    Raises:
        SpecLoadError: If the source cannot be loaded
        InvalidSpecError: If the document has no `paths` mapping
    """
    document = load_document(source, timeout=timeout)

    if not isinstance(document.get("paths"), dict):
        raise InvalidSpecError(f"Invalid OpenAPI specification - missing paths: {source}")

    loaded = LoadedSpec(document=document, source=str(source))
    if not dereference:
        return loaded

    base_path: Optional[Path] = None if is_url(source) else Path(source)
    try:
        loaded.document = Dereferencer(base_path=base_path, loader=load_document).dereference(document)
        loaded.dereferenced = True
        logger.info(f"Dereferenced specification {source}")
    except RefResolutionError as e:
        logger.warning(f"Could not dereference all references, using document as loaded: {e}")

    return loaded
