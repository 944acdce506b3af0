"""Shared utilities: datetime and ID generation."""

from bizdesk.shared.utils.datetime import ensure_utc, utc_now
from bizdesk.shared.utils.generators import generate_document_id

__all__ = ["generate_document_id", "utc_now", "ensure_utc"]
