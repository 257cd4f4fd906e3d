"""
Documentation rendering module.

Renders a schema snapshot to JSON, Markdown and SQL DDL and writes the
resulting artifacts to disk.
"""

from pgschema_docs.render.json_doc import render_json
from pgschema_docs.render.markdown import render_markdown, render_table_markdown
from pgschema_docs.render.sql_ddl import render_sql, render_table_sql
from pgschema_docs.render.writer import (
    WrittenArtifact,
    write_schema_artifacts,
    write_table_artifacts,
    table_directory,
)

__all__ = [
    "render_json",
    "render_markdown",
    "render_table_markdown",
    "render_sql",
    "render_table_sql",
    "WrittenArtifact",
    "write_schema_artifacts",
    "write_table_artifacts",
    "table_directory",
]
