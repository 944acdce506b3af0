"""Shared telemetry: logging setup."""

from bizdesk.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
