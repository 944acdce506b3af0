"""Component markup: template key -> Jinja source, compiled once.

Autoescaping is on, so plain strings passed as children or attribute values
are escaped and markupsafe.Markup passes through unchanged.
"""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, Template
from markupsafe import Markup

_TEMPLATES: dict[str, str] = {
    "box": '<{{ tag }} class="{{ classes }}">{{ children }}</{{ tag }}>',
    "input": (
        '<div class="w-full">'
        "{% if label %}"
        '<label class="block text-sm font-medium text-foreground mb-2"'
        '{% if label_for %} for="{{ label_for }}"{% endif %}>{{ label }}</label>'
        "{% endif %}"
        '<input class="{{ classes }}"'
        "{% for name, value in attrs %} {{ name }}"
        '{% if value is not sameas true %}="{{ value }}"{% endif %}{% endfor %}>'
        '{% if error %}<p class="mt-1 text-sm text-red-500">{{ error }}</p>{% endif %}'
        "</div>"
    ),
    "avatar": (
        '<div class="{{ classes }}" style="width: {{ size }}px; height: {{ size }}px"'
        ' data-avatar data-placeholder="{{ placeholder_url }}">'
        '<img src="{{ src }}" alt="{{ alt }}" width="{{ size }}" height="{{ size }}"'
        ' class="object-cover">'
        '<div class="absolute inset-0 flex items-center justify-center'
        ' text-foreground/60 text-xs font-medium" data-avatar-initials'
        '{% if not show_initials %} hidden{% endif %}>{{ initials }}</div>'
        "</div>"
    ),
}

_env = Environment(autoescape=True)
_compiled: dict[str, Template] = {
    key: _env.from_string(source) for key, source in _TEMPLATES.items()
}


def join_classes(*parts: str) -> str:
    """Space-join the non-empty class strings, in order."""
    return " ".join(p.strip() for p in parts if p and p.strip())


def render(template_key: str, **context: Any) -> Markup:
    """Render a component template. Raises KeyError if the key is unknown."""
    return Markup(_compiled[template_key].render(**context))
