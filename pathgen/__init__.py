"""OpenAPI path constant generator."""

__version__ = "0.1.0"
