"""
Viewer session management for the web host.

The app keeps one ViewController per process on ``app.state.viewer``.
Requests are served from a thread pool, so every load or selection goes
through ViewerSession.lock; the controller itself is single-threaded.

There is one viewing session per process, not one per browser.  Every
client shares the same selection: a ``GET /`` from one client resets the
active entry that another client sees in its next sidebar swap.

get_viewer() is the FastAPI dependency routes use to reach it.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from urllib.parse import quote

from fastapi import Request

from utils.config import AppConfig
from utils.http import RetryStrategy, SessionManager
from viewer.controller import ViewController
from viewer.loader import SemanticMapLoader


def detail_url(var_name: str) -> str:
    """Path of the detail partial for *var_name*."""
    return f"/partials/detail/{quote(var_name, safe='')}"


def htmx_entry_attrs(var_name: str) -> dict[str, str]:
    """Click wiring for a sidebar entry: swap the detail partial into #content."""
    return {
        "hx-get": detail_url(var_name),
        "hx-target": "#content",
        "hx-swap": "innerHTML",
    }


class ViewerSession:
    """One controller plus the lock that serializes access to it."""

    def __init__(self, controller: ViewController) -> None:
        self.controller = controller
        self.lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "ViewerSession":
        sessions = SessionManager(RetryStrategy(max_retries=cfg.fetch_retries))
        loader = SemanticMapLoader(cfg.data_source, sessions, timeout=cfg.fetch_timeout)
        return cls(ViewController(loader, entry_attrs=htmx_entry_attrs))

    @contextmanager
    def locked(self) -> Iterator[ViewController]:
        with self.lock:
            yield self.controller

    def close(self) -> None:
        self.controller.loader.close()


def get_viewer(request: Request) -> ViewerSession:
    """FastAPI dependency: the app's ViewerSession."""
    return request.app.state.viewer
