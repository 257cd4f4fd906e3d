"""Command-line interface for pgschema-docs."""
