"""
Reference Resolver - Resolves local $ref strings against an OpenAPI document.

Supports:
- Local JSON Pointer refs (#/components/schemas/Name)
- RFC 6901 token unescaping (~1 -> /, ~0 -> ~)
- Array index segments (#/paths/~1users/get/parameters/0)

Anything else (relative-file refs, URLs, malformed pointers) is treated as
unresolvable and yields None instead of raising.
"""

import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

LOCAL_REF_PREFIX = "#/"


def decode_pointer_token(token: str) -> str:
    """Unescape a single JSON Pointer token."""
    return token.replace("~1", "/").replace("~0", "~")


def split_ref(ref: str) -> Optional[List[str]]:
    """Split a local $ref into decoded path segments, or None if not local."""
    if not isinstance(ref, str) or not ref.startswith(LOCAL_REF_PREFIX):
        return None
    return [decode_pointer_token(token) for token in ref[len(LOCAL_REF_PREFIX):].split("/")]


def resolve(document: Any, ref: str) -> Optional[Any]:
    """
    Resolve a local $ref by walking the document segment by segment

    Args:
        document: Root OpenAPI document (parsed mapping)
        ref: Reference string, e.g. "#/components/schemas/User"

    Returns:
        The referenced node, or None if any segment cannot be followed
    """
    segments = split_ref(ref)
    if segments is None:
        logger.debug(f"Not a local reference: {ref!r}")
        return None

    node = document
    for segment in segments:
        if isinstance(node, dict):
            if segment not in node:
                logger.debug(f"Unresolved reference {ref}: missing segment '{segment}'")
                return None
            node = node[segment]
        elif isinstance(node, list):
            try:
                node = node[int(segment)]
            except (ValueError, IndexError):
                logger.debug(f"Unresolved reference {ref}: bad index '{segment}'")
                return None
        else:
            return None

    if node is None:
        return None
    return node
