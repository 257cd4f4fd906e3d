"""Tests for the SQL DDL renderer."""
from pgschema_docs.introspect.models import DatabaseFunction, SchemaInfo, TableInfo, ViewInfo
from pgschema_docs.render.sql_ddl import render_sql, render_table_sql


def test_empty_schema_is_banner_only():
    assert render_sql(SchemaInfo.empty()) == "-- Database Schema\n\n"


def test_single_table_exact_output(minimal_users_table):
    schema = SchemaInfo(tables=[minimal_users_table], functions=[])

    assert render_sql(schema) == (
        "-- Database Schema\n\n"
        "-- Table: users\n"
        "CREATE TABLE IF NOT EXISTS users (\n"
        "  id integer NOT NULL\n"
        ");\n\n"
    )


def test_table_script_has_blank_line_after_header(minimal_users_table):
    assert render_table_sql(minimal_users_table) == (
        "-- Table: users\n\n"
        "CREATE TABLE IF NOT EXISTS users (\n"
        "  id integer NOT NULL\n"
        ");\n\n"
    )


def test_column_defaults_and_nullability(users_table):
    sql = render_table_sql(users_table)

    assert "  id uuid NOT NULL DEFAULT gen_random_uuid(),\n" in sql
    assert "  email text NOT NULL,\n" in sql
    assert "  nickname text\n);" in sql


class TestConstraints:

    def test_primary_key_skipped_others_emitted(self, users_table):
        sql = render_table_sql(users_table)

        assert "users_pkey" not in sql
        assert sql.count("ADD CONSTRAINT") == 1
        assert "ALTER TABLE users ADD CONSTRAINT users_email_key UNIQUE (email);\n" in sql

    def test_each_non_pk_constraint_once(self):
        table = TableInfo.model_validate({
            "table_name": "items",
            "columns": [{"column_name": "price", "data_type": "numeric", "is_nullable": "NO"}],
            "constraints": [
                {"constraint_name": "items_pkey", "constraint_type": "PRIMARY KEY",
                 "definition": "PRIMARY KEY (id)"},
                {"constraint_name": "items_price_check", "constraint_type": "CHECK",
                 "definition": "CHECK ((price > (0)::numeric))"},
                {"constraint_name": "items_sku_key", "constraint_type": "UNIQUE",
                 "definition": "UNIQUE (sku)"},
                {"constraint_name": "items_cat_fkey", "constraint_type": "FOREIGN KEY",
                 "definition": "FOREIGN KEY (cat_id) REFERENCES categories(id)"},
            ],
        })

        sql = render_table_sql(table)

        assert sql.count("ADD CONSTRAINT") == 3
        for name in ("items_price_check", "items_sku_key", "items_cat_fkey"):
            assert sql.count(f"ADD CONSTRAINT {name} ") == 1
        assert "items_pkey" not in sql


def test_indexes_verbatim(users_table):
    sql = render_table_sql(users_table)

    assert "-- Indexes\nCREATE INDEX users_email_idx ON public.users USING btree (email);\n\n" in sql


def test_trigger_reconstruction(users_table):
    sql = render_table_sql(users_table)

    assert (
        "-- Triggers\n"
        "CREATE TRIGGER users_touch\n"
        "  BEFORE UPDATE\n"
        "  ON users\n"
        "  EXECUTE FUNCTION touch_updated_at();\n\n"
    ) in sql


class TestPolicies:

    def test_rls_enabled_and_policy_created(self, users_table):
        sql = render_table_sql(users_table)

        assert "ALTER TABLE users ENABLE ROW LEVEL SECURITY;\n" in sql
        assert (
            'CREATE POLICY "Users read own row" ON users\n'
            "  FOR SELECT\n"
            "  TO authenticated\n"
            "  USING ((auth.uid() = id))\n"
            ";\n"
        ) in sql
        assert "WITH CHECK" not in sql

    def test_with_check_only(self):
        table = TableInfo.model_validate({
            "table_name": "posts",
            "policies": [{"policyname": "insert own", "command": "INSERT",
                          "permissive": "PERMISSIVE", "roles": None,
                          "using": None, "with_check": "(auth.uid() = author_id)"}],
        })

        sql = render_table_sql(table)

        assert "  TO public\n" in sql
        assert "USING" not in sql
        assert "  WITH CHECK ((auth.uid() = author_id))\n;\n" in sql

    def test_no_policies_no_rls(self, schema):
        sql = render_table_sql(schema.find_table("orders"))
        assert "ROW LEVEL SECURITY" not in sql


def test_functions_before_tables(schema):
    sql = render_sql(schema)

    assert sql.startswith("-- Database Schema\n\n-- Functions\n-- Function: touch_updated_at\n")
    assert sql.index("-- Function: touch_updated_at") < sql.index("-- Table: users")
    assert sql.index("-- Table: users") < sql.index("-- Table: orders")


def test_table_script_omits_functions(users_table):
    assert "-- Function" not in render_table_sql(users_table)


def test_dangling_references_tolerated():
    table = TableInfo.model_validate({
        "table_name": "orphans",
        "foreign_keys": [{"column_name": "x", "foreign_table_name": "missing",
                          "foreign_column_name": "id", "constraint_name": "orphans_x_fkey"}],
    })
    assert render_table_sql(table).startswith("-- Table: orphans\n")


def test_views_appended():
    schema = SchemaInfo(
        tables=[],
        functions=[DatabaseFunction(function_name="f", language="sql", return_type="int",
                                    definition="CREATE FUNCTION f() ...")],
        views=[ViewInfo(view_name="active_users", definition=" SELECT id\n   FROM users;")],
    )

    sql = render_sql(schema)

    assert sql.endswith("-- Views\nCREATE OR REPLACE VIEW active_users AS\nSELECT id\n   FROM users;\n\n")
