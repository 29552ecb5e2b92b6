"""Models shared by the OpenAPI scanning core."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

# HTTP methods scanned on every path item, in scan order
HTTP_METHODS = ("get", "post", "put", "delete", "patch", "head", "options")


class ScanLocation(str, Enum):
    """Part of an operation where a field was searched."""

    REQUEST = "request"
    RESPONSE = "response"


@dataclass(frozen=True)
class ScanContext:
    """Where the finder is currently looking, for finding reports."""

    path: str
    method: str
    location: ScanLocation


@dataclass(frozen=True)
class FieldFinding:
    """A direct match of a target field in a schema's properties."""

    path: str
    method: str
    field: str
    location: ScanLocation
    nested: bool = False


# Optional sink for findings; never influences scan results
FindingReporter = Callable[[FieldFinding], None]


@dataclass
class FieldPathResult:
    """Paths where each target field was found, overall and per tag group."""

    field_paths: Dict[str, List[str]] = field(default_factory=dict)
    group_field_paths: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)

    @property
    def fields(self) -> List[str]:
        """Field names in the order they were requested."""
        return list(self.field_paths.keys())

    def paths_for(self, field_name: str, group: Optional[str] = None) -> List[str]:
        """Return the paths for a field, optionally restricted to one group."""
        if group is None:
            return self.field_paths.get(field_name, [])
        return self.group_field_paths.get(field_name, {}).get(group, [])

    def is_empty(self) -> bool:
        """True when no field was requested."""
        return not self.field_paths

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary representation."""
        return {
            "fieldPaths": {k: list(v) for k, v in self.field_paths.items()},
            "groupFieldPaths": {
                k: {g: list(p) for g, p in groups.items()}
                for k, groups in self.group_field_paths.items()
            },
        }
