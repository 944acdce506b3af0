"""Card container primitives.

Each function wraps children in an element with fixed base classes; a
caller's class_name is appended after them and never replaces them.
"""

from __future__ import annotations

from typing import Any

from markupsafe import Markup

from bizdesk.ui._templates import join_classes, render

CARD_CLASSES = (
    "bg-white dark:bg-zinc-900 border border-zinc-200 dark:border-zinc-800 "
    "rounded-lg shadow-sm"
)
CARD_HEADER_CLASSES = "p-6"
CARD_CONTENT_CLASSES = "px-6 pb-6"
CARD_TITLE_CLASSES = "text-2xl font-semibold text-foreground"


def _box(tag: str, base: str, children: Any, class_name: str) -> Markup:
    return render("box", tag=tag, classes=join_classes(base, class_name), children=children)


def card(children: Any, class_name: str = "") -> Markup:
    return _box("div", CARD_CLASSES, children, class_name)


def card_header(children: Any, class_name: str = "") -> Markup:
    return _box("div", CARD_HEADER_CLASSES, children, class_name)


def card_content(children: Any, class_name: str = "") -> Markup:
    return _box("div", CARD_CONTENT_CLASSES, children, class_name)


def card_title(children: Any, class_name: str = "") -> Markup:
    return _box("h2", CARD_TITLE_CLASSES, children, class_name)
