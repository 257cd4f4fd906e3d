"""Supabase (PostgREST) RPC client.

Invokes a database function through the PostgREST /rest/v1/rpc/<name> endpoint.
"""
from __future__ import annotations
import logging
from typing import Any

import httpx

from pgschema_docs.errors import RPCError

logger = logging.getLogger(__name__)


class SupabaseRPCClient:
    """Calls no-argument database functions exposed by PostgREST."""

    def __init__(self, base_url: str, service_key: str, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def call(self, function_name: str, params: dict[str, Any] | None = None) -> Any:
        """Invoke a database function and return its decoded JSON result.

        Args:
            function_name: Name of the function in the exposed schema
            params: Named arguments (default: none)

        Returns:
            Decoded JSON body, or None when the function returned null

        Raises:
            RPCError: On HTTP status errors, transport errors or a body
                that is not JSON
        """
        url = f"{self.base_url}/rest/v1/rpc/{function_name}"
        logger.debug(f"POST {url}")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(url, headers=self._headers(), json=params or {})
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise RPCError(
                    f"RPC {function_name} failed with HTTP {e.response.status_code}: {e}",
                    status_code=e.response.status_code,
                ) from e
            except httpx.HTTPError as e:
                raise RPCError(f"RPC {function_name} failed: {e}") from e

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RPCError(f"RPC {function_name} returned invalid JSON: {e}") from e
