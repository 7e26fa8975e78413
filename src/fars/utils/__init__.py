"""Shared helpers: logging setup and value coercion."""
