"""Logging setup: formatters, context and file rotation."""
