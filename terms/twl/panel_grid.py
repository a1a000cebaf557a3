"""A grid of panels split recursively into two-pane containers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from .paned import Paned, make_twl_paned
from .panel import Panel
from .widget import Bin, Orientation, Propagation, Widget, grab_focus_child, signal_accumulator_propagation

__all__ = ["PanelGrid"]

log = logging.getLogger(__name__)

W = TypeVar("W", bound=Widget)

ClosePanelCallback = Callable[["PanelGrid", Panel], Propagation]


def _walk(widget: Widget) -> Iterator[Widget]:
    yield widget
    for child in widget.iter_children():
        yield from _walk(child)


class PanelGrid(Widget):
    """Panels laid out by splitting the selected panel in two."""

    CSS_NAME = "panel_grid"

    def __init__(self) -> None:
        super().__init__()
        self.inner = Bin()
        self.append_child(self.inner)
        self._selected: Panel | None = None
        self._wide_handle = False
        self._show_panel_headers = False
        self._close_handlers: list[ClosePanelCallback] = []
        self._notify_handlers: list[tuple[str, Callable[[str], Any]]] = []

    # -- notification -------------------------------------------------------

    def connect_notify(self, prop: str, callback: Callable[[str], Any]) -> None:
        """Call callback(prop) whenever prop changes."""
        self._notify_handlers.append((prop, callback))

    def _notify(self, prop: str) -> None:
        for wanted, callback in list(self._notify_handlers):
            if wanted == prop:
                callback(prop)

    # -- properties ---------------------------------------------------------

    @property
    def selected(self) -> Panel | None:
        """The panel that splits and focus act on."""
        return self._selected

    @selected.setter
    def selected(self, panel: Panel | None) -> None:
        if self._selected is panel:
            return
        self._selected = panel
        self._notify("selected")

    @property
    def wide_handle(self) -> bool:
        """Whether the split handles are wide."""
        return self._wide_handle

    @wide_handle.setter
    def wide_handle(self, wide_handle: bool) -> None:
        self._wide_handle = wide_handle
        for paned in self._all(Paned):
            if paned.is_twl_paned():
                paned.wide_handle = wide_handle

    @property
    def show_panel_headers(self) -> bool:
        """Whether panel headers show when there is more than one panel."""
        return self._show_panel_headers

    @show_panel_headers.setter
    def show_panel_headers(self, show: bool) -> None:
        self._show_panel_headers = show
        self._update_headers_visibility()

    @property
    def n_panels(self) -> int:
        """The number of panels in the grid."""
        return len(self.panels())

    # -- tree queries -------------------------------------------------------

    def _all(self, kind: type[W]) -> list[W]:
        return [widget for widget in _walk(self.inner) if isinstance(widget, kind)]

    def panels(self) -> list[Panel]:
        """Every panel, in depth-first order."""
        return self._all(Panel)

    def is_empty(self) -> bool:
        """Whether the grid has no panels."""
        return not self.panels()

    def panel(self, widget: Widget) -> Panel | None:
        """The panel holding widget, if it lies in this grid."""
        current: Widget | None = widget
        while current is not None:
            if isinstance(current, Panel):
                return current
            if current is self:
                return None
            current = current.parent
        return None

    # -- layout -------------------------------------------------------------

    def _update_headers_visibility(self) -> None:
        panels = self.panels()
        if len(panels) == 1:
            panels[0].show_header = False
        else:
            for panel in panels:
                panel.show_header = self._show_panel_headers

    def _layout_changed(self) -> None:
        self._update_headers_visibility()
        self._notify("n-panels")

    def _create_panel(self, child: Widget) -> Panel:
        panel = Panel(child)

        def on_close_request(p: Panel) -> Propagation:
            self.close_panel(p)
            return Propagation.STOP

        panel.connect_close_request(on_close_request)
        return panel

    def set_initial_child(self, child: Widget) -> Panel:
        """Replace the whole grid with a single panel around child."""
        panel = self._create_panel(child)
        self.inner.child = panel
        self._layout_changed()
        return panel

    def split(self, child: Widget, orientation: Orientation | None = None) -> Panel:
        """Split the selected (or first) panel, putting child in the new half."""
        selected = self._selected
        if selected is None:
            panels = self.panels()
            selected = panels[0] if panels else None
        log.debug("active panel %r", selected)

        if selected is None:
            return self.set_initial_child(child)
        panel = self._create_panel(child)
        self._split_panel(selected, panel, orientation)
        return panel

    @staticmethod
    def _preferred_orientation(panel: Panel) -> Orientation:
        if panel.allocation.width > panel.allocation.height:
            return Orientation.HORIZONTAL
        return Orientation.VERTICAL

    def _create_paned(self, orientation: Orientation) -> Paned:
        paned = make_twl_paned(orientation)
        paned.wide_handle = self._wide_handle
        return paned

    def _split_panel(self, panel: Panel, new_panel: Panel, orientation: Orientation | None) -> None:
        new_paned = self._create_paned(orientation or self._preferred_orientation(panel))
        parent = panel.parent
        if isinstance(parent, Paned):
            parent.replace(panel, new_paned)
        else:
            self.inner.child = new_paned
        new_paned.start_child = panel
        new_paned.end_child = new_panel
        self._layout_changed()

    # -- closing ------------------------------------------------------------

    def connect_panel_close(self, callback: ClosePanelCallback) -> None:
        """Call callback(grid, panel) when a panel is asked to close.

        Returning STOP keeps the panel; the handler then decides by calling
        close_panel_finish. PROCEED lets the grid close it right away.
        """
        self._close_handlers.append(callback)

    def _emit_close_panel(self, panel: Panel) -> None:
        for callback in list(self._close_handlers):
            result = callback(self, panel) is Propagation.PROCEED
            _, proceed = signal_accumulator_propagation(result)
            if not proceed:
                return
        self.close_panel_finish(panel)

    def close_panel(self, panel: Panel) -> None:
        """Ask to close a panel; ignored while it is already closing."""
        log.debug("request to close panel: %r", panel)
        if panel.closing:
            log.warning("Panel %r is already closing", panel)
            return
        panel.closing = True
        self._emit_close_panel(panel)

    def close_other_panels(self, panel: Panel) -> None:
        """Ask to close every panel but one."""
        for other in self.panels():
            if other is not panel:
                self.close_panel(other)

    def close_panel_finish(self, panel: Panel) -> None:
        """Remove a closing panel, letting its sibling take its place."""
        if not panel.closing:
            log.warning("Will not finish closing a panel that was not in closing state")
            return
        was_selected = self._selected is panel

        paned = panel.parent
        if isinstance(paned, Paned):
            sibling = paned.sibling(panel)
            paned.start_child = None
            paned.end_child = None
            grandparent = paned.parent
            if isinstance(grandparent, Paned):
                grandparent.replace(paned, sibling)
            else:
                self.inner.child = sibling
            if was_selected:
                self.selected = sibling if isinstance(sibling, Panel) else None
        else:
            self.inner.child = None
            if was_selected:
                self.selected = None

        self._layout_changed()

    # -- focus --------------------------------------------------------------

    def grab_focus(self) -> bool:
        """Focus the selected panel, or the first child that takes it."""
        if self._selected is not None:
            result = self._selected.grab_focus()
        else:
            result = grab_focus_child(self)
        focus = self.focus
        if result and focus is not None:
            panel = self.panel(focus)
            if panel is not None:
                self.selected = panel
        return result