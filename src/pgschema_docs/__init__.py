"""pgschema-docs: export database catalog metadata as JSON, Markdown and SQL."""

__version__ = "0.1.0"
