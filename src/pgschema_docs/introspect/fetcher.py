"""Schema fetcher.

Calls the introspection RPC under a retry policy, optionally dumps the raw
payload for debugging, and normalizes it into a SchemaInfo.
"""
from __future__ import annotations
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from pydantic import ValidationError

from pgschema_docs.config import ExportConfig
from pgschema_docs.errors import FetchError, RPCError
from pgschema_docs.introspect.models import SchemaInfo, TableInfo
from pgschema_docs.introspect.retry import RetryPolicy, Sleep, run_with_retry
from pgschema_docs.introspect.rpc_client import SupabaseRPCClient

logger = logging.getLogger(__name__)


class RPCClient(Protocol):
    async def call(self, function_name: str, params: dict[str, Any] | None = None) -> Any:
        ...


class SchemaFetcher:
    """Fetches the full schema snapshot from the database."""

    def __init__(
        self,
        client: RPCClient,
        rpc_function: str = "get_schema_info",
        policy: RetryPolicy | None = None,
        debug_path: Path | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.client = client
        self.rpc_function = rpc_function
        self.policy = policy or RetryPolicy()
        self.debug_path = debug_path
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: ExportConfig) -> SchemaFetcher:
        """Build a fetcher wired to the Supabase endpoint in config."""
        client = SupabaseRPCClient(config.supabase_url, config.service_key, timeout=config.timeout)
        return cls(
            client,
            rpc_function=config.rpc_function,
            policy=RetryPolicy(max_attempts=config.max_attempts),
            debug_path=config.debug_path,
        )

    async def fetch(self) -> SchemaInfo:
        """Fetch and normalize the schema.

        Returns:
            SchemaInfo; empty when the RPC succeeded but returned null

        Raises:
            FetchError: If all attempts failed or the payload is malformed
        """
        logger.info(f"Calling {self.rpc_function}...")

        outcome = await run_with_retry(
            lambda: self.client.call(self.rpc_function),
            self.policy,
            sleep=self._sleep,
            retry_on=(RPCError,),
        )

        if not outcome.succeeded:
            if outcome.last_error is not None:
                raise FetchError(
                    f"Error executing {self.rpc_function} after {outcome.attempts} attempts: "
                    f"{outcome.last_error}",
                    last_error=outcome.last_error,
                    attempts=outcome.attempts,
                ) from outcome.last_error
            logger.warning(f"No data returned from {self.rpc_function}")
            return SchemaInfo.empty()

        payload = outcome.value
        self._write_debug_dump(payload)

        try:
            schema = SchemaInfo.model_validate(payload)
        except ValidationError as e:
            raise FetchError(
                f"Malformed payload from {self.rpc_function}: {e}",
                last_error=e,
                attempts=outcome.attempts,
            ) from e

        logger.info(
            f"Fetched schema info: {len(schema.tables)} tables, "
            f"{len(schema.functions)} functions"
        )
        return schema

    async def fetch_table(self, table_name: str) -> Optional[TableInfo]:
        """Fetch the schema and pick out a single table.

        Args:
            table_name: Exact table name

        Returns:
            TableInfo, or None when the table does not exist
        """
        schema = await self.fetch()
        table = schema.find_table(table_name)
        if table is None:
            logger.warning(f"Table '{table_name}' not found in schema")
        return table

    def _write_debug_dump(self, payload: Any) -> None:
        if self.debug_path is None:
            return
        try:
            self.debug_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.debug_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            logger.info(f"Debug output written to {self.debug_path}")
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write debug output to {self.debug_path}: {e}")
