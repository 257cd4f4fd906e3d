"""Tests for the JSON renderer."""
import json

from pgschema_docs.introspect.models import SchemaInfo, TableInfo
from pgschema_docs.render.json_doc import render_json


def test_schema_parses_back_equal(schema):
    restored = SchemaInfo.model_validate(json.loads(render_json(schema)))
    assert restored.model_dump() == schema.model_dump()


def test_table_parses_back_equal(users_table):
    restored = TableInfo.model_validate(json.loads(render_json(users_table)))
    assert restored.model_dump() == users_table.model_dump()


def test_null_collections_serialized_as_empty_lists(schema):
    orders = json.loads(render_json(schema))["tables"][1]

    assert orders["constraints"] == []
    assert orders["indexes"] == []
    assert orders["columns"][1]["column_default"] is None


def test_two_space_indentation():
    text = render_json(SchemaInfo.empty())
    assert text.startswith('{\n  "tables": [],\n  "functions": []')


def test_non_ascii_kept():
    table = TableInfo.model_validate({
        "table_name": "café",
        "columns": [{"column_name": "naïve", "data_type": "text", "description": "日本語"}],
    })
    text = render_json(table)
    assert "café" in text
    assert "日本語" in text
