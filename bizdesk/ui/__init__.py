"""Server-rendered UI primitives (HTML markup via Jinja)."""

from bizdesk.ui.avatar import Avatar, gravatar_hash, gravatar_url, initials
from bizdesk.ui.card import card, card_content, card_header, card_title
from bizdesk.ui.input import text_input

__all__ = [
    "Avatar",
    "card",
    "card_content",
    "card_header",
    "card_title",
    "gravatar_hash",
    "gravatar_url",
    "initials",
    "text_input",
]
