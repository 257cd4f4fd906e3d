"""SQL DDL renderer.

Reconstructs a DDL script from a schema snapshot. Functions come first since
triggers may reference them. Constraints whose definition starts with
PRIMARY KEY are skipped, so primary keys are absent from the output.
"""
from __future__ import annotations

from pgschema_docs.introspect.models import SchemaInfo, TableColumn, TableInfo, ViewInfo

BANNER = "-- Database Schema\n\n"


def render_sql(schema: SchemaInfo) -> str:
    """Render the full schema as a DDL script.

    Args:
        schema: Normalized schema snapshot

    Returns:
        SQL text: banner, functions, tables, then views
    """
    parts = [BANNER]

    if schema.functions:
        parts.append("-- Functions\n")
        for func in schema.functions:
            parts.append(f"-- Function: {func.function_name}\n")
            parts.append(f"{func.definition}\n\n")

    for table in schema.tables:
        parts.extend(_table_ddl(table))

    if schema.views:
        parts.append("-- Views\n")
        for view in schema.views:
            parts.append(_view_ddl(view))

    return "".join(parts)


def render_table_sql(table: TableInfo) -> str:
    """Render a self-contained DDL script for one table.

    Unlike the block inside the full schema script, the header is followed
    by a blank line.
    """
    return "".join(_table_ddl(table, header_gap=True))


def _column_ddl(col: TableColumn) -> str:
    ddl = f"  {col.column_name} {col.data_type}"
    if col.is_nullable == "NO":
        ddl += " NOT NULL"
    if col.column_default:
        ddl += f" DEFAULT {col.column_default}"
    return ddl


def _table_ddl(table: TableInfo, header_gap: bool = False) -> list[str]:
    name = table.table_name
    header = f"-- Table: {name}\n\n" if header_gap else f"-- Table: {name}\n"
    parts = [header, f"CREATE TABLE IF NOT EXISTS {name} (\n"]
    parts.append(",\n".join(_column_ddl(col) for col in table.columns))
    parts.append("\n);\n\n")

    if table.constraints:
        parts.append("-- Constraints\n")
        for constraint in table.constraints:
            if constraint.definition.startswith("PRIMARY KEY"):
                continue
            parts.append(
                f"ALTER TABLE {name} ADD CONSTRAINT {constraint.constraint_name} "
                f"{constraint.definition};\n"
            )
        parts.append("\n")

    if table.indexes:
        parts.append("-- Indexes\n")
        for idx in table.indexes:
            parts.append(f"{idx.indexdef};\n")
        parts.append("\n")

    if table.triggers:
        parts.append("-- Triggers\n")
        for trigger in table.triggers:
            parts.append(f"CREATE TRIGGER {trigger.trigger_name}\n")
            parts.append(f"  {trigger.action_timing} {trigger.event_manipulation}\n")
            parts.append(f"  ON {name}\n")
            parts.append(f"  {trigger.action_statement};\n\n")

    if table.policies:
        parts.append("-- Row Level Security Policies\n")
        parts.append(f"ALTER TABLE {name} ENABLE ROW LEVEL SECURITY;\n")
        for policy in table.policies:
            # Postgres applies a policy without roles to PUBLIC
            roles = ", ".join(policy.roles or []) or "public"
            parts.append(f'CREATE POLICY "{policy.policyname}" ON {name}\n')
            parts.append(f"  FOR {policy.command}\n")
            parts.append(f"  TO {roles}\n")
            if policy.using:
                parts.append(f"  USING ({policy.using})\n")
            if policy.with_check:
                parts.append(f"  WITH CHECK ({policy.with_check})\n")
            parts.append(";\n")
        parts.append("\n")

    return parts


def _view_ddl(view: ViewInfo) -> str:
    body = view.definition.strip().rstrip(";")
    return f"CREATE OR REPLACE VIEW {view.view_name} AS\n{body};\n\n"
