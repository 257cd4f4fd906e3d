"""Install the get_schema_info() introspection function into a database."""
from __future__ import annotations
import logging
from pathlib import Path

import asyncpg

from pgschema_docs.errors import InstallError

logger = logging.getLogger(__name__)

FUNCTION_SQL_PATH = Path(__file__).with_name("get_schema_info.sql")


async def install_schema_function(database_url: str, sql_path: Path = FUNCTION_SQL_PATH) -> None:
    """Create or replace get_tables(), get_functions() and get_schema_info().

    Args:
        database_url: PostgreSQL connection string with DDL privileges
        sql_path: SQL file to execute (default: bundled function source)

    Raises:
        InstallError: If the SQL file is missing or the database rejects it
    """
    if not sql_path.exists():
        raise InstallError(f"Function SQL not found at {sql_path}")

    sql = sql_path.read_text(encoding="utf-8")

    try:
        conn = await asyncpg.connect(dsn=database_url)
    except (asyncpg.PostgresError, OSError) as e:
        raise InstallError(f"Failed to connect to database: {e}") from e

    try:
        await conn.execute(sql)
        logger.info("Installed get_schema_info() and helper functions")
    except asyncpg.PostgresError as e:
        raise InstallError(f"Failed to execute function SQL: {e}") from e
    finally:
        await conn.close()
