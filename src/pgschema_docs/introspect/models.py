"""
Pydantic models for the schema snapshot returned by get_schema_info.

Null or absent collections are normalized to empty lists here, once, so the
renderers never need to guard against None. The bundled SQL function
aggregates with jsonb_object_agg, so collections may also arrive as objects
keyed by name; those are flattened into lists with the key written back into
the record's name field.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _keyed_to_list(value: Any, key_field: str) -> Any:
    """Turn {name: {...}} into [{key_field: name, ...}]; pass lists through."""
    if value is None:
        return []
    if isinstance(value, dict):
        return [
            {key_field: key, **(item if isinstance(item, dict) else {})}
            for key, item in value.items()
        ]
    return value


class CatalogModel(BaseModel):
    """Base for catalog records; keeps unknown keys so JSON output round-trips."""
    model_config = ConfigDict(extra="allow")


class TableColumn(CatalogModel):
    column_name: str
    data_type: str
    is_nullable: str = "YES"
    column_default: Optional[str] = None
    description: Optional[str] = None


class TableConstraint(CatalogModel):
    constraint_name: str
    constraint_type: str
    column_names: Optional[list[str]] = None
    definition: str = ""


class ForeignKey(CatalogModel):
    column_name: str
    foreign_table_name: str
    foreign_column_name: str
    constraint_name: str


class TableIndex(CatalogModel):
    indexname: str
    indexdef: str


class TableTrigger(CatalogModel):
    trigger_name: str
    action_timing: str
    event_manipulation: str
    action_statement: str
    function_definition: Optional[str] = None


class TablePolicy(CatalogModel):
    policyname: str
    command: str
    permissive: str
    roles: Optional[list[str]] = None
    using: Optional[str] = None
    with_check: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_qual(cls, data: Any) -> Any:
        """pg_policies names the USING expression 'qual'."""
        if isinstance(data, dict) and "using" not in data and "qual" in data:
            data = dict(data)
            data["using"] = data.pop("qual")
        return data


class DatabaseFunction(CatalogModel):
    function_name: str
    # pg_get_function_result() is NULL for procedures
    language: Optional[str] = None
    return_type: Optional[str] = None
    argument_types: str = ""
    definition: str = ""
    description: Optional[str] = None

    @field_validator("argument_types", "definition", mode="before")
    @classmethod
    def none_to_blank(cls, v: Any) -> Any:
        return "" if v is None else v


class ViewInfo(CatalogModel):
    view_name: str
    definition: str = ""
    columns: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @field_validator("columns", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class TableInfo(CatalogModel):
    """One table with all of its catalog sub-records."""
    table_name: str
    columns: list[TableColumn] = Field(default_factory=list)
    constraints: list[TableConstraint] = Field(default_factory=list)
    foreign_keys: list[ForeignKey] = Field(default_factory=list)
    indexes: list[TableIndex] = Field(default_factory=list)
    triggers: list[TableTrigger] = Field(default_factory=list)
    policies: list[TablePolicy] = Field(default_factory=list)

    @field_validator("columns", mode="before")
    @classmethod
    def normalize_columns(cls, v: Any) -> Any:
        return _keyed_to_list(v, "column_name")

    @field_validator("constraints", mode="before")
    @classmethod
    def normalize_constraints(cls, v: Any) -> Any:
        return _keyed_to_list(v, "constraint_name")

    @field_validator("foreign_keys", mode="before")
    @classmethod
    def normalize_foreign_keys(cls, v: Any) -> Any:
        return _keyed_to_list(v, "constraint_name")

    @field_validator("indexes", mode="before")
    @classmethod
    def normalize_indexes(cls, v: Any) -> Any:
        return _keyed_to_list(v, "indexname")

    @field_validator("triggers", mode="before")
    @classmethod
    def normalize_triggers(cls, v: Any) -> Any:
        return _keyed_to_list(v, "trigger_name")

    @field_validator("policies", mode="before")
    @classmethod
    def normalize_policies(cls, v: Any) -> Any:
        return _keyed_to_list(v, "policyname")


class SchemaInfo(CatalogModel):
    """Complete schema snapshot: tables, functions and views."""
    tables: list[TableInfo] = Field(default_factory=list)
    functions: list[DatabaseFunction] = Field(default_factory=list)
    views: list[ViewInfo] = Field(default_factory=list)

    @field_validator("tables", "functions", "views", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @classmethod
    def empty(cls) -> "SchemaInfo":
        return cls(tables=[], functions=[])

    def find_table(self, table_name: str) -> Optional[TableInfo]:
        """Return the table with an exact name match, or None."""
        return next((t for t in self.tables if t.table_name == table_name), None)
