"""Panels: a child widget with a revealable header carrying a fading title label."""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Callable
from typing import Any

from .widget import Bin, Orientation, Propagation, Rect, TextDirection, Widget, signal_accumulator_propagation

__all__ = ["FadingLabel", "PanelHeader", "Panel", "DEFAULT_FADE_WIDTH"]

log = logging.getLogger(__name__)

DEFAULT_FADE_WIDTH = 18.0
_F32_EPSILON = 1.1920929e-07

Measurement = tuple[int, int, int, int]


def _measure(widget: Widget | None, orientation: Orientation, for_size: int) -> Measurement:
    measure = getattr(widget, "measure", None)
    if measure is None:
        return 0, 0, -1, -1
    return measure(orientation, for_size)


class _Notifying:
    """Property change callbacks."""

    def _init_notify(self) -> None:
        self._notify_handlers: list[tuple[str, Callable[[str], Any]]] = []

    def connect_notify(self, prop: str, callback: Callable[[str], Any]) -> None:
        """Call callback(prop) whenever prop changes."""
        self._notify_handlers.append((prop, callback))

    def _notify(self, prop: str) -> None:
        for wanted, callback in list(self._notify_handlers):
            if wanted == prop:
                callback(prop)


class FadingLabel(_Notifying, Widget):
    """A single-line label that may shrink to nothing, fading out what it clips."""

    CHAR_WIDTH = 8
    LINE_HEIGHT = 16

    def __init__(self, label: str | None = None) -> None:
        Widget.__init__(self)
        self._init_notify()
        self._label = label or ""
        self._align = 0.0
        self._fade_width = DEFAULT_FADE_WIDTH
        self.css_classes: set[str] = set()
        self.valign = "fill"

    @property
    def label(self) -> str:
        """The text shown."""
        return self._label

    @label.setter
    def label(self, label: str) -> None:
        if label == self._label:
            return
        self._label = label
        self._notify("label")

    @property
    def align(self) -> float:
        """Horizontal alignment of the text, from 0 (start) to 1 (end)."""
        return self._align

    @align.setter
    def align(self, align: float) -> None:
        align = min(max(align, 0.0), 1.0)
        if abs(self._align - align) <= _F32_EPSILON:
            return
        self._align = align
        self._notify("align")

    @property
    def fade_width(self) -> float:
        """Width of the fade at a clipped edge."""
        return self._fade_width

    @fade_width.setter
    def fade_width(self, fade_width: float) -> None:
        if abs(self._fade_width - fade_width) <= _F32_EPSILON:
            return
        self._fade_width = fade_width
        self._notify("fade-width")

    def _natural_width(self) -> int:
        return len(self._label) * self.CHAR_WIDTH

    def measure(self, orientation: Orientation, for_size: int) -> Measurement:
        """Sizes of the text; horizontally the minimum is always zero."""
        if orientation is Orientation.HORIZONTAL:
            return 0, self._natural_width(), -1, -1
        return self.LINE_HEIGHT, self.LINE_HEIGHT, -1, -1

    def is_rtl(self) -> bool:
        """Whether the text reads right to left, judged by its first strong character."""
        for char in self._label:
            kind = unicodedata.bidirectional(char)
            if kind in ("R", "AL"):
                return True
            if kind == "L":
                return False
        return self.direction is TextDirection.RTL

    def child_offset(self, width: float) -> float:
        """Horizontal offset of the text when the label is given width."""
        align = 1.0 - self._align if self.is_rtl() else self._align
        return (width - self._natural_width()) * align


class PanelHeader(Widget):
    """The header of a panel, showing a title widget."""

    def __init__(self, title: str | None = None) -> None:
        super().__init__()
        self._title: str | None = None
        self._title_container = Bin()
        self.append_child(self._title_container)
        self._close_handlers: list[Callable[[PanelHeader], Any]] = []
        self.title = title

    @property
    def title(self) -> str | None:
        """The title text, if a title was set."""
        return self._title

    @title.setter
    def title(self, title: str | None) -> None:
        self._title = title
        if title is None:
            self.title_widget = None
        else:
            label = FadingLabel(title)
            label.css_classes.add("title")
            label.valign = "center"
            self.title_widget = label

    @property
    def title_widget(self) -> Widget | None:
        """The widget shown as title."""
        return self._title_container.child

    @title_widget.setter
    def title_widget(self, widget: Widget | None) -> None:
        self._title_container.child = widget

    def measure(self, orientation: Orientation, for_size: int) -> Measurement:
        """The sizes of the title widget."""
        return _measure(self.title_widget, orientation, for_size)

    def connect_close(self, callback: Callable[[PanelHeader], Any]) -> None:
        """Call callback(header) when the header asks to close."""
        self._close_handlers.append(callback)

    def emit_close(self) -> None:
        """Ask to close."""
        for callback in list(self._close_handlers):
            callback(self)


class _Revealer(Bin):
    def __init__(self, child: Widget) -> None:
        super().__init__(child)
        self.reveal_child = True

    def measure(self, orientation: Orientation, for_size: int) -> Measurement:
        if not self.reveal_child:
            return 0, 0, -1, -1
        return _measure(self.child, orientation, for_size)


class Panel(_Notifying, Widget):
    """A child widget stacked under a header that can be hidden."""

    def __init__(self, child: Widget, header: Widget | None = None) -> None:
        Widget.__init__(self)
        self._init_notify()
        self._child = child
        self._header = header if header is not None else PanelHeader()
        self.needs_attention = False
        self.icon: Any = None
        self.tooltip: str | None = None
        self.closing = False
        self.selected = False
        self.header_style = "flat"
        self._header_height = -1
        self._close_handlers: list[Callable[[Panel], Propagation]] = []
        self._revealer = _Revealer(self._header)
        self.append_child(child)
        self.append_child(self._revealer)

    @property
    def child(self) -> Widget:
        """The content widget."""
        return self._child

    @property
    def header(self) -> Widget:
        """The header widget."""
        return self._header

    @property
    def header_height(self) -> int:
        """The height given to the header at the last allocation, or -1."""
        return self._header_height

    @property
    def show_header(self) -> bool:
        """Whether the header is revealed."""
        return self._revealer.reveal_child

    @show_header.setter
    def show_header(self, show: bool) -> None:
        self._revealer.reveal_child = show

    def connect_close_request(self, callback: Callable[[Panel], Propagation]) -> None:
        """Call callback(panel) on a close request; STOP ends the emission."""
        self._close_handlers.append(callback)

    def close(self) -> bool:
        """Emit the close request; returns the last handler's accumulated answer."""
        accumulated = False
        for callback in list(self._close_handlers):
            result = callback(self) is Propagation.PROCEED
            accumulated, proceed = signal_accumulator_propagation(result)
            if not proceed:
                break
        return accumulated

    def measure(self, orientation: Orientation, for_size: int) -> Measurement:
        """Header and child stacked: widest across, summed down."""
        header_min, header_nat, _, _ = self._revealer.measure(orientation, for_size)
        child_min, child_nat, _, _ = _measure(self._child, orientation, for_size)
        if orientation is Orientation.HORIZONTAL:
            return max(child_min, header_min), max(child_nat, header_nat), -1, -1
        return child_min + header_min, child_nat + header_nat, -1, -1

    def size_allocate(self, width: int, height: int, baseline: int) -> None:
        """Give the header what the child can spare, within its size range."""
        header_min, header_nat, _, _ = self._revealer.measure(Orientation.VERTICAL, -1)
        child_min = max(0, _measure(self._child, Orientation.VERTICAL, -1)[0])
        header_height = min(max(height - child_min, header_min), header_nat)

        if self._header_height != header_height:
            self._header_height = header_height
            self._notify("header-height")

        self.allocation = Rect(self.allocation.x, self.allocation.y, width, height)
        self._revealer.allocation = Rect(0, 0, width, header_height)
        self._child.allocation = Rect(0, header_height, width, height - header_height)

    def grab_focus(self) -> bool:
        """Pass the focus to the child."""
        return self._child.grab_focus()