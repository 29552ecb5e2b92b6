"""
Dereferencer - Replaces $ref nodes with the objects they point to.

Works on a deep copy of the document:
- Local refs ("#/components/schemas/User") resolve against the document
- Relative-file refs ("common.yaml#/User") load the file next to the
  referring one, which bundles multi-file specifications
- URL refs are left untouched

Each reference target is materialised once and shared, so a recursive
schema turns into a cyclic object graph instead of an endless expansion.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Set, Tuple

from pathgen.introspection.ref_resolver import decode_pointer_token

logger = logging.getLogger(__name__)

DocumentLoader = Callable[[Path], Dict[str, Any]]


class RefResolutionError(ValueError):
    """Raised when a $ref cannot be resolved."""


def _looks_like_url(ref: str) -> bool:
    return "://" in ref


def json_pointer_get(document: Any, pointer: str, ref: str) -> Any:
    """
    Resolve a JSON Pointer (fragment without '#') against a document

    Raises:
        RefResolutionError: If a segment cannot be followed
    """
    if pointer == "":
        return document
    if not pointer.startswith("/"):
        raise RefResolutionError(f"Unsupported JSON pointer in $ref '{ref}'")

    node = document
    for raw_token in pointer[1:].split("/"):
        token = decode_pointer_token(raw_token)
        if isinstance(node, dict) and token in node:
            node = node[token]
        elif isinstance(node, list):
            try:
                node = node[int(token)]
            except (ValueError, IndexError) as e:
                raise RefResolutionError(f"Bad list index '{token}' in $ref '{ref}'") from e
        else:
            raise RefResolutionError(f"Key '{token}' not found while resolving $ref '{ref}'")
    return node


class Dereferencer:
    """
    Dereferences an OpenAPI document

    Usage:
    ```python
    dereferencer = Dereferencer(base_path=Path("spec/api.yaml"), loader=load_document)
    document = dereferencer.dereference(raw_document)
    ```
    """

    def __init__(self, base_path: Optional[Path] = None, loader: Optional[DocumentLoader] = None):
        """
        Initialize Dereferencer

        Args:
            base_path: File the document was read from; needed for relative-file refs
            loader: Callable that loads another specification file
        """
        self.base_path = Path(base_path).resolve() if base_path else None
        self.loader = loader
        self._documents: Dict[str, Any] = {}
        self._targets: Dict[Tuple[str, str], Any] = {}
        self._walked: Set[int] = set()

    def dereference(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Return a dereferenced copy of document

        Raises:
            RefResolutionError: If any reference cannot be resolved
        """
        root = copy.deepcopy(document)
        root_key = str(self.base_path) if self.base_path else ""
        self._documents[root_key] = root

        result = self._walk(root, root_key)
        logger.debug(f"Resolved {len(self._targets)} distinct references")
        return result

    def _walk(self, node: Any, doc_key: str) -> Any:
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str) and not _looks_like_url(ref):
                return self._replace(node, ref, doc_key)

            if id(node) in self._walked:
                return node
            self._walked.add(id(node))
            for key, value in node.items():
                node[key] = self._walk(value, doc_key)
            return node

        if isinstance(node, list):
            if id(node) in self._walked:
                return node
            self._walked.add(id(node))
            for index, value in enumerate(node):
                node[index] = self._walk(value, doc_key)
            return node

        return node

    def _replace(self, node: Dict[str, Any], ref: str, doc_key: str) -> Any:
        target_key, pointer = self._locate(ref, doc_key)
        cache_key = (target_key, pointer)

        if cache_key in self._targets:
            target = self._targets[cache_key]
        else:
            target = json_pointer_get(self._document(target_key), pointer, ref)
            # Registered before walking so self-references reuse the same object
            self._targets[cache_key] = target
            target = self._walk(target, target_key)
            self._targets[cache_key] = target

        siblings = {key: value for key, value in node.items() if key != "$ref"}
        if siblings and isinstance(target, dict):
            merged = dict(target)
            for key, value in siblings.items():
                merged[key] = self._walk(value, doc_key)
            return merged
        return target

    def _locate(self, ref: str, doc_key: str) -> Tuple[str, str]:
        """Split a ref into (document key, pointer) relative to the referring file."""
        if "#" in ref:
            file_part, pointer = ref.split("#", 1)
        else:
            file_part, pointer = ref, ""

        if file_part == "":
            return doc_key, pointer

        if not doc_key:
            raise RefResolutionError(f"Cannot resolve file reference '{ref}' without a base path")
        target = (Path(doc_key).parent / file_part).resolve()
        return str(target), pointer

    def _document(self, doc_key: str) -> Any:
        if doc_key in self._documents:
            return self._documents[doc_key]
        if self.loader is None:
            raise RefResolutionError(f"No loader available for referenced file {doc_key}")

        try:
            document = self.loader(Path(doc_key))
        except RuntimeError as e:
            raise RefResolutionError(f"Could not load referenced file {doc_key}: {e}") from e

        logger.debug(f"Loaded referenced file {doc_key}")
        self._documents[doc_key] = document
        return document
