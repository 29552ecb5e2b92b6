"""Specification loading and dereferencing."""

from .dereferencer import Dereferencer, RefResolutionError
from .spec_loader import (
    InvalidSpecError,
    LoadedSpec,
    SpecLoadError,
    load_document,
    load_openapi,
)

__all__ = [
    "Dereferencer",
    "InvalidSpecError",
    "LoadedSpec",
    "RefResolutionError",
    "SpecLoadError",
    "load_document",
    "load_openapi",
]
