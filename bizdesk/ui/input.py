"""Labeled text input with an optional, externally computed error message."""

from __future__ import annotations

from typing import Any

from markupsafe import Markup

from bizdesk.ui._templates import join_classes, render

INPUT_BASE_CLASSES = (
    "w-full px-4 py-2 border rounded-lg focus:outline-none focus:ring-2 "
    "focus:ring-foreground/20 transition-colors"
)
INPUT_SURFACE_CLASSES = "bg-white dark:bg-zinc-900 text-foreground"
ERROR_BORDER_CLASSES = "border-red-500"
DEFAULT_BORDER_CLASSES = "border-zinc-300 dark:border-zinc-700"


def attribute_name(keyword: str) -> str:
    """Python keyword -> HTML attribute: ``type_`` -> ``type``, ``aria_label`` -> ``aria-label``."""
    return keyword.rstrip("_").replace("_", "-")


def html_attributes(attrs: dict[str, Any]) -> list[tuple[str, Any]]:
    """Attribute pairs in call order. True is a bare attribute; False/None are dropped."""
    return [
        (attribute_name(key), value)
        for key, value in attrs.items()
        if value is not None and value is not False
    ]


def text_input(
    label: str | None = None,
    error: str | None = None,
    class_name: str = "",
    **attrs: Any,
) -> Markup:
    """Render label, input and error paragraph.

    Every other keyword is forwarded to the <input> element. A non-empty
    error switches the border to the error style and is shown under the field.
    """
    border = ERROR_BORDER_CLASSES if error else DEFAULT_BORDER_CLASSES
    return render(
        "input",
        label=label,
        label_for=attrs.get("id"),
        classes=join_classes(INPUT_BASE_CLASSES, border, INPUT_SURFACE_CLASSES, class_name),
        attrs=html_attributes(attrs),
        error=error,
    )
