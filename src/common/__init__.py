"""Shared helpers: logging configuration and error types."""
