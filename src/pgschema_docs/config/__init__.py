"""Configuration management for pgschema-docs."""
from .export import ExportConfig

__all__ = [
    "ExportConfig",
]
