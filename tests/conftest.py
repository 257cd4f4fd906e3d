"""Shared pytest fixtures for all tests."""
import pytest

from pgschema_docs.introspect.models import SchemaInfo, TableInfo


@pytest.fixture
def users_payload():
    """Raw RPC payload for a schema with two tables and one function."""
    return {
        "tables": [
            {
                "table_name": "users",
                "columns": [
                    {"column_name": "id", "data_type": "uuid", "is_nullable": "NO",
                     "column_default": "gen_random_uuid()", "description": "Primary key"},
                    {"column_name": "email", "data_type": "text", "is_nullable": "NO",
                     "column_default": None, "description": None},
                    {"column_name": "nickname", "data_type": "text", "is_nullable": "YES",
                     "column_default": None, "description": None},
                ],
                "constraints": [
                    {"constraint_name": "users_pkey", "constraint_type": "PRIMARY KEY",
                     "column_names": ["id"], "definition": "PRIMARY KEY (id)"},
                    {"constraint_name": "users_email_key", "constraint_type": "UNIQUE",
                     "column_names": ["email"], "definition": "UNIQUE (email)"},
                ],
                "foreign_keys": None,
                "indexes": [
                    {"indexname": "users_email_idx",
                     "indexdef": "CREATE INDEX users_email_idx ON public.users USING btree (email)"},
                ],
                "triggers": [
                    {"trigger_name": "users_touch", "action_timing": "BEFORE",
                     "event_manipulation": "UPDATE",
                     "action_statement": "EXECUTE FUNCTION touch_updated_at()",
                     "function_definition": "CREATE FUNCTION touch_updated_at() RETURNS trigger"},
                ],
                "policies": [
                    {"policyname": "Users read own row", "command": "SELECT",
                     "permissive": "PERMISSIVE", "roles": ["authenticated"],
                     "using": "(auth.uid() = id)", "with_check": None},
                ],
            },
            {
                "table_name": "orders",
                "columns": [
                    {"column_name": "id", "data_type": "bigint", "is_nullable": "NO",
                     "column_default": None, "description": None},
                    {"column_name": "user_id", "data_type": "uuid", "is_nullable": "YES",
                     "column_default": None, "description": None},
                ],
                "constraints": None,
                "foreign_keys": [
                    {"column_name": "user_id", "foreign_table_name": "users",
                     "foreign_column_name": "id", "constraint_name": "orders_user_id_fkey"},
                ],
                "indexes": None,
                "triggers": None,
                "policies": None,
            },
        ],
        "functions": [
            {"function_name": "touch_updated_at", "language": "plpgsql",
             "return_type": "trigger", "argument_types": "",
             "definition": "CREATE OR REPLACE FUNCTION public.touch_updated_at() ...",
             "description": None},
        ],
    }


@pytest.fixture
def schema(users_payload):
    return SchemaInfo.model_validate(users_payload)


@pytest.fixture
def users_table(schema):
    return schema.find_table("users")


@pytest.fixture
def minimal_users_table():
    """Single integer column, nothing else."""
    return TableInfo.model_validate({
        "table_name": "users",
        "columns": [{"column_name": "id", "data_type": "integer", "is_nullable": "NO",
                     "column_default": None, "description": None}],
        "constraints": None,
        "foreign_keys": None,
        "indexes": None,
        "triggers": None,
        "policies": None,
    })
