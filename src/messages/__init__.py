"""Typed wire schema for the Messages API."""
