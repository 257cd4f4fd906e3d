"""Export configuration loading and validation.

Builds a single ExportConfig from environment variables (optionally primed
from a .env file) which is then passed explicitly to the fetcher and writer.
"""
from __future__ import annotations
import os
from pathlib import Path
from typing import Mapping, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator

from pgschema_docs.errors import ConfigurationError


URL_VARS = ("VITE_SUPABASE_URL", "SUPABASE_URL")
KEY_VAR = "SUPABASE_SERVICE_KEY"


class ExportConfig(BaseModel):
    """Settings for one export run."""
    supabase_url: str = Field(..., description="Supabase/PostgREST endpoint URL")
    service_key: str = Field(..., description="Service role key used for the RPC call")
    rpc_function: str = Field("get_schema_info", description="Introspection function name")
    output_dir: Path = Field(Path("Documentations"), description="Root directory for artifacts")
    debug_path: Optional[Path] = Field(Path("schema-debug.json"), description="Raw payload dump")
    timeout: float = Field(30.0, gt=0, description="HTTP timeout in seconds")
    max_attempts: int = Field(3, ge=1, le=10, description="RPC attempts before giving up")

    @field_validator("supabase_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate endpoint URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("supabase_url must start with 'http://' or 'https://'")
        return v.rstrip("/")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ExportConfig:
        """Load configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Validated ExportConfig instance

        Raises:
            ConfigurationError: If the endpoint or credential is missing,
                or any value is invalid
        """
        env = os.environ if environ is None else environ

        url = next((env[name] for name in URL_VARS if env.get(name)), None)
        key = env.get(KEY_VAR)
        missing = []
        if not url:
            missing.append(URL_VARS[0])
        if not key:
            missing.append(KEY_VAR)
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        data: dict[str, object] = {"supabase_url": url, "service_key": key}
        optional = {
            "SCHEMA_DOCS_RPC_FUNCTION": "rpc_function",
            "SCHEMA_DOCS_OUTPUT_DIR": "output_dir",
            "SCHEMA_DOCS_TIMEOUT": "timeout",
            "SCHEMA_DOCS_MAX_ATTEMPTS": "max_attempts",
        }
        for var, field_name in optional.items():
            if env.get(var):
                data[field_name] = env[var]

        # An explicitly empty SCHEMA_DOCS_DEBUG_PATH disables the dump
        if "SCHEMA_DOCS_DEBUG_PATH" in env:
            data["debug_path"] = env["SCHEMA_DOCS_DEBUG_PATH"] or None

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def log_redacted(self) -> dict:
        """Get configuration dict with secrets redacted for logging.

        Returns:
            Dictionary with sensitive values redacted
        """
        config_dict = self.model_dump(mode="json")
        config_dict["service_key"] = "***"
        return config_dict
