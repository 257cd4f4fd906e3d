"""Artifact writer.

Writes the JSON, Markdown and SQL renderings of a schema (or of one table)
into a directory, in that order, stopping at the first failure.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from pgschema_docs.errors import WriteError
from pgschema_docs.introspect.models import SchemaInfo, TableInfo
from pgschema_docs.render.json_doc import render_json
from pgschema_docs.render.markdown import render_markdown, render_table_markdown
from pgschema_docs.render.sql_ddl import render_sql, render_table_sql

logger = logging.getLogger(__name__)

SCHEMA_JSON = "schema_info.json"
SCHEMA_MARKDOWN = "schema_docs.md"
SCHEMA_SQL = "schema.sql"

TABLE_JSON = "table_info.json"
TABLE_MARKDOWN = "README.md"
TABLE_SQL = "table.sql"

TABLES_SUBDIR = "tables"


@dataclass
class WrittenArtifact:
    """One file produced by a write run."""
    name: str
    path: Path
    size_bytes: int


def write_schema_artifacts(schema: SchemaInfo, directory: Path) -> list[WrittenArtifact]:
    """Write schema_info.json, schema_docs.md and schema.sql.

    Args:
        schema: Normalized schema snapshot
        directory: Target directory, created if missing

    Returns:
        Written artifacts in write order

    Raises:
        WriteError: On the first file that cannot be written
    """
    return _write_all(directory, [
        (SCHEMA_JSON, lambda: render_json(schema)),
        (SCHEMA_MARKDOWN, lambda: render_markdown(schema)),
        (SCHEMA_SQL, lambda: render_sql(schema)),
    ])


def write_table_artifacts(table: TableInfo, directory: Path) -> list[WrittenArtifact]:
    """Write table_info.json, README.md and table.sql for a single table.

    Args:
        table: Table to document
        directory: Target directory (usually <output>/tables/<table_name>)

    Returns:
        Written artifacts in write order

    Raises:
        WriteError: On the first file that cannot be written
    """
    return _write_all(directory, [
        (TABLE_JSON, lambda: render_json(table)),
        (TABLE_MARKDOWN, lambda: render_table_markdown(table)),
        (TABLE_SQL, lambda: render_table_sql(table)),
    ])


def table_directory(output_dir: Path, table_name: str) -> Path:
    return output_dir / TABLES_SUBDIR / table_name


def _write_all(
    directory: Path,
    artifacts: list[tuple[str, Callable[[], str]]],
) -> list[WrittenArtifact]:
    logger.info(f"Writing to directory: {directory}")
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteError(directory, e) from e

    written = []
    for name, render in artifacts:
        path = directory / name
        content = render()
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
            size = path.stat().st_size
        except OSError as e:
            logger.error(f"Failed to write {name}: {e}")
            raise WriteError(path, e) from e

        logger.debug(f"{name} written ({size} bytes)")
        written.append(WrittenArtifact(name=name, path=path, size_bytes=size))

    return written
