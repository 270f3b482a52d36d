"""
View controller: the page regions, the view state, and the load lifecycle.

Provides:
  - Phase / ViewState: the one piece of mutable page state, held as an
    immutable value that the controller swaps out on every transition.
  - select_variable(): the pure selection transition.
  - Region / Page: the five host-supplied regions (loading, error, groups,
    content, header_meta).  Each supports show/hide and full replacement.
  - ViewController: owns one Page and one ViewState; load_and_render() is the
    single entry point, select() is the click callback.

Lifecycle per load_and_render() call::

    LOADING ──ok──▶ SUCCESS   header + list rendered, first variable selected
       │
       └──error──▶ FAILED     error shown, list and detail left empty

A new call always starts over from LOADING and re-selects the first
variable; earlier selections are not carried over.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum

from utils.config import DOCUMENT_NAME
from viewer.errors import RenderError, SemanticMapError
from viewer.grouping import first_variable, group_by_aesthetic_label
from viewer.loader import SemanticMapLoader
from viewer.models import Dataset, GroupTable, Variable
from viewer.nodes import Child
from viewer.rendering import (
    EntryAttrs,
    build_detail,
    build_group_list,
    header_summary,
    set_active_entry,
)

logger = logging.getLogger(__name__)


# ── View state ────────────────────────────────────────────────────────────────


class Phase(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ViewState:
    """Snapshot of everything the page shows."""

    phase: Phase = Phase.LOADING
    dataset: Dataset | None = None
    groups: GroupTable | None = None
    selected: str | None = None
    error: str | None = None


def select_variable(state: ViewState, name: str) -> ViewState:
    """Return *state* with *name* selected.

    Raises:
        KeyError: If no dataset is loaded or it has no variable *name*.
    """
    if state.dataset is None or name not in state.dataset.variables:
        raise KeyError(name)
    return replace(state, selected=name)


# ── Page regions ──────────────────────────────────────────────────────────────


@dataclass
class Region:
    """One addressable area of the page."""

    name: str
    visible: bool = True
    children: list[Child] = field(default_factory=list)

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def replace(self, children: Child | Iterable[Child]) -> None:
        """Discard the current content and install *children*."""
        if isinstance(children, str) or not isinstance(children, Iterable):
            self.children = [children]
        else:
            self.children = list(children)

    def clear(self) -> None:
        self.children = []

    @property
    def is_empty(self) -> bool:
        return not self.children


@dataclass
class Page:
    loading: Region = field(default_factory=lambda: Region("loading", visible=True))
    error: Region = field(default_factory=lambda: Region("error", visible=False))
    groups: Region = field(default_factory=lambda: Region("groups"))
    content: Region = field(default_factory=lambda: Region("content"))
    header_meta: Region = field(default_factory=lambda: Region("header_meta"))


# ── Controller ────────────────────────────────────────────────────────────────


class ViewController:
    """Drives one Page from one SemanticMapLoader.

    Args:
        loader: Source of the Dataset.
        page: Regions to render into (default: a fresh Page).
        entry_attrs: Optional factory of extra attributes for each sidebar
            entry; the web host uses it to attach its click handler.
    """

    def __init__(self, loader: SemanticMapLoader, page: Page | None = None,
                 entry_attrs: EntryAttrs | None = None) -> None:
        self.loader = loader
        self.page = page or Page()
        self.entry_attrs = entry_attrs
        self.state = ViewState()

    # ── lifecycle ─────────────────────────────────────────────────────────

    def _start_loading(self) -> None:
        self.state = ViewState()
        self.page.loading.show()
        self.page.error.hide()
        self.page.error.clear()
        self.page.groups.clear()
        self.page.content.clear()
        self.page.header_meta.clear()

    def _fail(self, exc: SemanticMapError) -> None:
        message = f"Failed to load {DOCUMENT_NAME}: {exc}"
        logger.error("load failed: %s", exc, exc_info=exc)
        self.page.groups.clear()
        self.page.content.clear()
        self.page.header_meta.clear()
        self.page.loading.hide()
        self.page.error.replace(message)
        self.page.error.show()
        self.state = ViewState(phase=Phase.FAILED, error=message)

    def _render_success(self, dataset: Dataset) -> None:
        try:
            groups = group_by_aesthetic_label(dataset.variables)
            self.state = ViewState(phase=Phase.SUCCESS, dataset=dataset, groups=groups)
            self.page.loading.hide()
            self.page.error.hide()
            self.page.header_meta.replace(header_summary(dataset))
            self.render_list(groups, dataset.variables)
        except SemanticMapError:
            raise
        except Exception as exc:
            raise RenderError(str(exc) or type(exc).__name__) from exc
        logger.info("load succeeded variables=%d groups=%d selected=%s",
                    dataset.variable_count, len(groups), self.state.selected)

    def load_and_render(self) -> ViewState:
        """Load the document and render every region.

        Never raises for transport, parse, or render failures; they end in
        the FAILED phase with a message on the error region.

        Returns:
            The resulting ViewState (SUCCESS or FAILED).
        """
        self._start_loading()
        logger.info("load started source=%s", self.loader.source)
        try:
            dataset = self.loader.load()
            self._render_success(dataset)
        except SemanticMapError as exc:
            self._fail(exc)
        return self.state

    # ── rendering ─────────────────────────────────────────────────────────

    def render_list(self, groups: GroupTable, variables: Mapping[str, Variable]) -> None:
        """Rebuild the sidebar and auto-select its first entry."""
        self.page.groups.replace(build_group_list(groups, variables, self.entry_attrs))
        first = first_variable(groups)
        if first is not None:
            self.select(first)

    def render_detail(self, name: str, variable: Variable) -> None:
        """Replace the detail panel with *variable*'s cards."""
        self.page.content.replace(build_detail(name, variable))

    def select(self, name: str) -> ViewState:
        """Click callback: select *name*, mark its entry, render its detail.

        Raises:
            KeyError: If *name* is not a variable of the loaded dataset.
        """
        self.state = select_variable(self.state, name)
        set_active_entry(self.page.groups.children, name)
        self.render_detail(name, self.state.dataset.variables[name])
        return self.state
