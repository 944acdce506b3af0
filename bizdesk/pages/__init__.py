"""Server-rendered HTML pages."""

from bizdesk.pages.root import render_root_page
from bizdesk.pages.workspace import render_clients_page, render_jobs_page

__all__ = ["render_clients_page", "render_jobs_page", "render_root_page"]
