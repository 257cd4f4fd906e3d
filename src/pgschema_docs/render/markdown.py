"""
Markdown Documentation Renderer

Generates human-readable Markdown for a whole schema or for a single table.
Both share the same per-table traversal; only the heading depth differs.
"""

from pgschema_docs.introspect.models import (
    DatabaseFunction,
    SchemaInfo,
    TableInfo,
    ViewInfo,
)


def _cell(value: object) -> str:
    """Make a value safe to put inside a pipe-table cell."""
    text = str(value)
    return text.replace("|", "\\|").replace("\r\n", " ").replace("\n", " ")


def _anchor(name: str) -> str:
    return name.lower()


def render_markdown(schema: SchemaInfo) -> str:
    """Render the full schema documentation.

    Args:
        schema: Normalized schema snapshot

    Returns:
        Markdown text with overview, table of contents, tables, views
        (when present) and functions
    """
    lines = []

    lines.append("# Database Schema Documentation")
    lines.append("")

    # Overview
    lines.append("## Overview")
    lines.append("")
    lines.append(f"- Total Tables: {len(schema.tables)}")
    lines.append(f"- Total Functions: {len(schema.functions)}")
    if schema.views:
        lines.append(f"- Total Views: {len(schema.views)}")
    lines.append("")

    # Table of contents
    lines.append("## Table of Contents")
    lines.append("")
    lines.append("### Tables")
    for table in schema.tables:
        lines.append(f"- [{table.table_name}](#{_anchor(table.table_name)})")
    lines.append("")
    if schema.views:
        lines.append("### Views")
        for view in schema.views:
            lines.append(f"- [{view.view_name}](#{_anchor(view.view_name)})")
        lines.append("")
    lines.append("### Functions")
    for func in schema.functions:
        lines.append(f"- [{func.function_name}](#{_anchor(func.function_name)})")
    lines.append("")

    # Tables
    lines.append("## Tables")
    lines.append("")
    for table in schema.tables:
        lines.append(f"### {table.table_name}")
        lines.append("")
        lines.extend(_table_sections(table, level=4))

    # Views
    if schema.views:
        lines.append("## Views")
        lines.append("")
        for view in schema.views:
            lines.extend(_view_section(view))

    # Functions
    lines.append("## Functions")
    lines.append("")
    for func in schema.functions:
        lines.extend(_function_section(func))

    return "\n".join(lines)


def render_table_markdown(table: TableInfo) -> str:
    """Render documentation for a single table (used as its README)."""
    lines = [f"# Table: {table.table_name}", ""]
    lines.extend(_table_sections(table, level=2))
    return "\n".join(lines)


def _table_sections(table: TableInfo, level: int) -> list[str]:
    """Columns table plus every non-empty sub-section for one table."""
    h = "#" * level
    lines = []

    lines.append(f"{h} Columns")
    lines.append("")
    lines.append("| Name | Type | Nullable | Default | Description |")
    lines.append("|------|------|----------|----------|-------------|")
    for col in table.columns:
        lines.append(
            f"| {_cell(col.column_name)} | {_cell(col.data_type)} | {_cell(col.is_nullable)} | "
            f"{_cell(col.column_default or 'NULL')} | {_cell(col.description or '-')} |"
        )
    lines.append("")

    if table.constraints:
        lines.append(f"{h} Constraints")
        lines.append("")
        lines.append("| Name | Type | Columns | Definition |")
        lines.append("|------|------|---------|------------|")
        for constraint in table.constraints:
            columns = ", ".join(constraint.column_names or [])
            lines.append(
                f"| {_cell(constraint.constraint_name)} | {_cell(constraint.constraint_type)} | "
                f"{_cell(columns)} | {_cell(constraint.definition)} |"
            )
        lines.append("")

    if table.foreign_keys:
        lines.append(f"{h} Foreign Keys")
        lines.append("")
        lines.append("| Column | References | Constraint Name |")
        lines.append("|--------|------------|----------------|")
        for fk in table.foreign_keys:
            lines.append(
                f"| {_cell(fk.column_name)} | "
                f"{_cell(fk.foreign_table_name)}({_cell(fk.foreign_column_name)}) | "
                f"{_cell(fk.constraint_name)} |"
            )
        lines.append("")

    if table.indexes:
        lines.append(f"{h} Indexes")
        lines.append("")
        lines.append("| Name | Definition |")
        lines.append("|------|------------|")
        for idx in table.indexes:
            lines.append(f"| {_cell(idx.indexname)} | {_cell(idx.indexdef)} |")
        lines.append("")

    if table.triggers:
        lines.append(f"{h} Triggers")
        lines.append("")
        for trigger in table.triggers:
            lines.append(f"{h}# {trigger.trigger_name}")
            lines.append(f"- Timing: {trigger.action_timing}")
            lines.append(f"- Event: {trigger.event_manipulation}")
            lines.append(f"- Statement: {trigger.action_statement}")
            if trigger.function_definition:
                lines.append("```sql")
                lines.append(trigger.function_definition)
                lines.append("```")
            lines.append("")

    if table.policies:
        lines.append(f"{h} Row Level Security Policies")
        lines.append("")
        lines.append("| Name | Command | Permissive | Roles | Using | With Check |")
        lines.append("|------|---------|------------|-------|-------|------------|")
        for policy in table.policies:
            roles = ", ".join(policy.roles or [])
            lines.append(
                f"| {_cell(policy.policyname)} | {_cell(policy.command)} | {_cell(policy.permissive)} | "
                f"{_cell(roles)} | {_cell(policy.using or '-')} | {_cell(policy.with_check or '-')} |"
            )
        lines.append("")

    return lines


def _view_section(view: ViewInfo) -> list[str]:
    lines = [f"### {view.view_name}", ""]
    if view.columns:
        lines.append("| Name | Type | Description |")
        lines.append("|------|------|-------------|")
        for name, info in view.columns.items():
            lines.append(
                f"| {_cell(name)} | {_cell(info.get('data_type') or '-')} | "
                f"{_cell(info.get('description') or '-')} |"
            )
        lines.append("")
    lines.append("```sql")
    lines.append(view.definition.strip())
    lines.append("```")
    lines.append("")
    return lines


def _function_section(func: DatabaseFunction) -> list[str]:
    lines = [f"### {func.function_name}", ""]
    lines.append(f"- Language: {func.language or '-'}")
    lines.append(f"- Returns: {func.return_type or '-'}")
    lines.append(f"- Arguments: {func.argument_types}")
    if func.description:
        lines.append(f"- Description: {func.description}")
    lines.append("")
    lines.append("```sql")
    lines.append(func.definition)
    lines.append("```")
    lines.append("")
    return lines
