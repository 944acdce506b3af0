"""Workspace pages: client list and job list for the signed-in tenant."""

from __future__ import annotations

from jinja2 import Environment
from markupsafe import Markup

from bizdesk.application.dtos.client import ClientResult
from bizdesk.application.dtos.job import JobWithClientResult
from bizdesk.application.dtos.user import CurrentUser
from bizdesk.pages._layout import render_page
from bizdesk.ui import Avatar, card, card_content, card_header, card_title, text_input

_env = Environment(autoescape=True)

_CLIENT_ROW = _env.from_string(
    '<li class="flex items-center gap-4 py-3">'
    "{{ avatar }}"
    '<div class="min-w-0"><p class="font-medium">{{ client.name }}'
    '{% if not client.is_active %} <span class="text-xs text-zinc-500">(inactive)</span>{% endif %}'
    "</p>"
    '{% if client.email %}<p class="text-sm text-zinc-500">{{ client.email }}</p>{% endif %}'
    "</div>"
    '{% if client.phone %}<span class="ml-auto text-sm text-zinc-500">{{ client.phone }}</span>{% endif %}'
    "</li>"
)

_JOB_ROW = _env.from_string(
    '<li class="flex items-center gap-4 py-3">'
    '<div class="min-w-0"><p class="font-medium">{{ job.title }}'
    '{% if job.reference %} <span class="text-xs text-zinc-500">{{ job.reference }}</span>{% endif %}'
    '</p><p class="text-sm text-zinc-500">{{ job.client_name }}</p></div>'
    '<span class="ml-auto text-xs uppercase tracking-wide text-zinc-500">{{ job.status.value }}</span>'
    "</li>"
)

_LIST = Markup('<ul class="divide-y divide-zinc-200 dark:divide-zinc-800">{}</ul>')
_EMPTY = Markup('<p class="text-sm text-zinc-500">{}</p>')


def _user_nav(user: CurrentUser) -> Markup:
    avatar = Avatar(email=user.email, size=32).render()
    return avatar + Markup('<span class="text-zinc-500">{}</span>').format(user.email)


def _client_avatar(client: ClientResult) -> Markup:
    return Avatar(email=client.email or "", display_name=client.name).render()


def render_clients_page(
    app_name: str,
    user: CurrentUser,
    clients: list[ClientResult],
    search: str | None = None,
) -> str:
    search_form = Markup('<form method="get" class="mb-4">{}</form>').format(
        text_input(name="q", type_="search", value=search, placeholder="Search name or email")
    )
    if clients:
        rows = Markup("").join(
            Markup(_CLIENT_ROW.render(client=c, avatar=_client_avatar(c))) for c in clients
        )
        listing = _LIST.format(rows)
    else:
        listing = _EMPTY.format("No clients found.")
    body = card(card_header(card_title("Clients")) + card_content(search_form + listing))
    return render_page(app_name, "Clients", body, nav=_user_nav(user))


def render_jobs_page(
    app_name: str,
    user: CurrentUser,
    jobs: list[JobWithClientResult],
) -> str:
    if jobs:
        rows = Markup("").join(Markup(_JOB_ROW.render(job=j)) for j in jobs)
        listing = _LIST.format(rows)
    else:
        listing = _EMPTY.format("No jobs yet.")
    body = card(card_header(card_title("Jobs")) + card_content(listing))
    return render_page(app_name, "Jobs", body, nav=_user_nav(user))
