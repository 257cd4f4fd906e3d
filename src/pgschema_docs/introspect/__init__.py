"""
Schema introspection module.

Fetches catalog metadata from the get_schema_info() RPC with retry, and
normalizes it into typed models.
"""

from pgschema_docs.introspect.models import (
    SchemaInfo,
    TableInfo,
    TableColumn,
    TableConstraint,
    ForeignKey,
    TableIndex,
    TableTrigger,
    TablePolicy,
    DatabaseFunction,
    ViewInfo,
)
from pgschema_docs.introspect.retry import RetryPolicy, RetryOutcome, run_with_retry
from pgschema_docs.introspect.rpc_client import SupabaseRPCClient
from pgschema_docs.introspect.fetcher import SchemaFetcher
from pgschema_docs.introspect.installer import install_schema_function

__all__ = [
    "SchemaInfo",
    "TableInfo",
    "TableColumn",
    "TableConstraint",
    "ForeignKey",
    "TableIndex",
    "TableTrigger",
    "TablePolicy",
    "DatabaseFunction",
    "ViewInfo",
    "RetryPolicy",
    "RetryOutcome",
    "run_with_retry",
    "SupabaseRPCClient",
    "SchemaFetcher",
    "install_schema_function",
]
