"""JSON renderer: pretty-printed dump of a normalized snapshot."""
from __future__ import annotations
import json

from pydantic import BaseModel


def render_json(model: BaseModel) -> str:
    """Serialize a SchemaInfo or TableInfo with 2-space indentation.

    Loading the result with json.loads and validating it against the same
    model class yields an equal model.
    """
    return json.dumps(model.model_dump(mode="json"), indent=2, ensure_ascii=False)
