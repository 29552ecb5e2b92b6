"""Path Grouper - Groups document paths by operation tags."""

import logging
from typing import Any, Dict, List, Set

from pathgen.introspection.operation_scanner import DEFAULT_GROUP, iter_operations, operation_groups

logger = logging.getLogger(__name__)


def extract_group_paths(document: Any, default_group: str = DEFAULT_GROUP) -> Dict[str, List[str]]:
    """
    Group path strings by the tags declared on their operations

    A path joins every group tagged on any of its operations; untagged
    operations put their path in default_group. Only `tags` is read.

    Args:
        document: Parsed OpenAPI document
        default_group: Group name for untagged operations

    Returns:
        Mapping of group name to sorted, de-duplicated paths
    """
    group_paths: Dict[str, Set[str]] = {}

    for path, _method, operation in iter_operations(document):
        for group in operation_groups(operation, default_group):
            group_paths.setdefault(group, set()).add(path)

    logger.debug(f"Grouped paths into {len(group_paths)} groups")
    return {group: sorted(group_paths[group]) for group in sorted(group_paths)}
