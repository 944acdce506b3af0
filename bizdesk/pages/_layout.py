"""Shared HTML shell for server-rendered pages (Tailwind via CDN)."""

from __future__ import annotations

from jinja2 import Environment
from markupsafe import Markup

ID_TOKEN_COOKIE = "bizdesk_id_token"

_env = Environment(autoescape=True)

_PAGE = _env.from_string(
    """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }} · {{ app_name }}</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <script>
        tailwind.config = { theme: { extend: { colors: { foreground: "#18181b" } } } };
    </script>
</head>
<body class="min-h-screen bg-zinc-50 dark:bg-black text-foreground">
    {% if nav %}
    <header class="border-b border-zinc-200 dark:border-zinc-800 bg-white dark:bg-zinc-900">
        <nav class="max-w-5xl mx-auto px-6 py-4 flex items-center gap-6 text-sm">
            <span class="font-semibold">{{ app_name }}</span>
            <a href="/workspace/clients" class="hover:underline">Clients</a>
            <a href="/workspace/jobs" class="hover:underline">Jobs</a>
            <span class="ml-auto flex items-center gap-3">{{ nav }}</span>
            <a href="/" data-sign-out class="text-zinc-500 hover:underline">Sign out</a>
        </nav>
    </header>
    {% endif %}
    <main class="max-w-5xl mx-auto px-6 py-10">{{ body }}</main>
    <script>
        (function () {
            function avatarFallback(img) {
                var box = img.parentElement;
                if (img.getAttribute("src") !== box.dataset.placeholder) {
                    img.src = box.dataset.placeholder;
                } else {
                    box.querySelector("[data-avatar-initials]").hidden = false;
                }
            }
            document.querySelectorAll("[data-avatar] img").forEach(function (img) {
                img.addEventListener("error", function () { avatarFallback(img); });
                // Already failed before this script ran.
                if (img.complete && img.naturalWidth === 0) {
                    avatarFallback(img);
                }
            });
            document.querySelectorAll("[data-sign-out]").forEach(function (a) {
                a.addEventListener("click", function () {
                    document.cookie = "{{ cookie_name }}=; Max-Age=0; Path=/; SameSite=Strict";
                });
            });
        })();
    </script>
    {% if script %}<script>{{ script }}</script>{% endif %}
</body>
</html>
"""
)


def render_page(
    app_name: str,
    title: str,
    body: Markup,
    nav: Markup | None = None,
    script: Markup | None = None,
) -> str:
    """Wrap body in the page shell. nav (e.g. the user's avatar) enables the header."""
    return _PAGE.render(
        app_name=app_name,
        title=title,
        body=body,
        nav=nav,
        script=script,
        cookie_name=ID_TOKEN_COOKIE,
    )
