from __future__ import annotations
import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from dotenv import load_dotenv

from pgschema_docs.config import ExportConfig
from pgschema_docs.errors import ConfigurationError, SchemaDocsError, TableNotFoundError
from pgschema_docs.introspect.fetcher import SchemaFetcher
from pgschema_docs.introspect.installer import install_schema_function
from pgschema_docs.render.writer import (
    WrittenArtifact,
    table_directory,
    write_schema_artifacts,
    write_table_artifacts,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgschema-docs",
        description="Export database schema documentation as JSON, Markdown and SQL"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    # Full export
    export = sub.add_parser("export", help="Export documentation for the whole schema")
    export.add_argument("--output-dir", default=None,
                        help="Output directory (default: $SCHEMA_DOCS_OUTPUT_DIR or Documentations)")

    # Single table
    table = sub.add_parser("table", help="Export documentation for one table")
    table.add_argument("table_name", nargs="?", help="Name of the table to export")
    table.add_argument("--output-dir", default=None,
                       help="Output root; files go to <output-dir>/tables/<table_name>")

    # Install the introspection function
    install = sub.add_parser("install-function",
                             help="Install get_schema_info() into the target database")
    install.add_argument("--database-url", default=None,
                         help="PostgreSQL connection string (default: $DATABASE_URL)")

    return parser


def run(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    # Load environment variables first
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else os.getenv("SCHEMA_DOCS_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    # Usage errors exit 1, not argparse's 2
    if args.cmd == "table" and not args.table_name:
        print("Please provide a table name as an argument", file=sys.stderr)
        print("Usage: pgschema-docs table <table_name>", file=sys.stderr)
        sys.exit(1)

    try:
        if args.cmd == "export":
            config = ExportConfig.from_env()
            logger.debug(f"Configuration: {config.log_redacted()}")
            output_dir = Path(args.output_dir) if args.output_dir else config.output_dir
            asyncio.run(export_schema(config, output_dir))
        elif args.cmd == "table":
            config = ExportConfig.from_env()
            logger.debug(f"Configuration: {config.log_redacted()}")
            output_dir = Path(args.output_dir) if args.output_dir else config.output_dir
            asyncio.run(export_table(config, args.table_name, output_dir))
        elif args.cmd == "install-function":
            database_url = args.database_url or os.getenv("DATABASE_URL")
            if not database_url:
                raise ConfigurationError("Missing required DATABASE_URL (or --database-url)")
            asyncio.run(install_function(database_url))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except TableNotFoundError as e:
        logger.warning(str(e))
        print(f"{e}; nothing written", file=sys.stderr)
    except SchemaDocsError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


async def export_schema(config: ExportConfig, output_dir: Path) -> list[WrittenArtifact]:
    """Fetch the whole schema and write schema_info.json, schema_docs.md, schema.sql.

    Args:
        config: Export configuration
        output_dir: Directory for the three artifacts

    Raises:
        FetchError: If the RPC keeps failing
        WriteError: If an artifact cannot be written
    """
    fetcher = SchemaFetcher.from_config(config)
    schema = await fetcher.fetch()

    written = write_schema_artifacts(schema, output_dir)
    _print_written(written)
    print("\n✓ Schema files created successfully")
    return written


async def export_table(config: ExportConfig, table_name: str, output_dir: Path) -> list[WrittenArtifact]:
    """Fetch one table and write table_info.json, README.md, table.sql.

    Args:
        config: Export configuration
        table_name: Exact table name
        output_dir: Output root; files go under tables/<table_name>

    Raises:
        TableNotFoundError: If the table is not in the schema
        FetchError: If the RPC keeps failing
        WriteError: If an artifact cannot be written
    """
    fetcher = SchemaFetcher.from_config(config)
    table = await fetcher.fetch_table(table_name)
    if table is None:
        raise TableNotFoundError(table_name)

    directory = table_directory(output_dir, table_name)
    written = write_table_artifacts(table, directory)
    _print_written(written)
    print(f"\n✓ Table documentation created successfully in {directory}")
    return written


async def install_function(database_url: str) -> None:
    """Install the bundled get_schema_info() function.

    Raises:
        InstallError: If the database rejects the SQL
    """
    await install_schema_function(database_url)
    print("✓ get_schema_info() installed successfully")


def _print_written(written: list[WrittenArtifact]) -> None:
    for artifact in written:
        print(f"✓ {artifact.name} written ({artifact.size_bytes} bytes)")
