"""Error types raised by the schema documentation exporter."""
from __future__ import annotations
from pathlib import Path


class SchemaDocsError(Exception):
    """Base class for all exporter errors."""


class ConfigurationError(SchemaDocsError):
    """Required endpoint or credential is missing or invalid."""


class RPCError(SchemaDocsError):
    """A single remote procedure call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchError(SchemaDocsError):
    """Every attempt to fetch schema info failed.

    Attributes:
        last_error: Error observed on the final attempt
        attempts: Number of attempts made
    """

    def __init__(self, message: str, last_error: BaseException | None, attempts: int) -> None:
        super().__init__(message)
        self.last_error = last_error
        self.attempts = attempts


class TableNotFoundError(SchemaDocsError):
    """Requested table is not present in the fetched schema."""

    def __init__(self, table_name: str) -> None:
        super().__init__(f"Table '{table_name}' not found in schema")
        self.table_name = table_name


class WriteError(SchemaDocsError):
    """An output artifact could not be written."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to write {path}: {cause}")
        self.path = path


class InstallError(SchemaDocsError):
    """The introspection function could not be installed."""
