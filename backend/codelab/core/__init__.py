"""Core infrastructure: error types and logging setup."""
