"""Shared helpers: logging and small utilities."""
