"""A box with separate start, centre and end regions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .widget import Orientation, Widget

__all__ = ["PackBox"]


class _Box(Widget):
    """A plain linear container."""

    def __init__(self, orientation: Orientation = Orientation.HORIZONTAL) -> None:
        super().__init__()
        self.orientation = orientation

    def append(self, child: Widget) -> None:
        self.append_child(child)


class PackBox(Widget):
    """Children packed at the start, in the expanding centre, or at the end."""

    CSS_NAME = "pack_box"

    def __init__(self, orientation: Orientation = Orientation.HORIZONTAL) -> None:
        super().__init__()
        self._notify_handlers: list[tuple[str, Callable[[str], Any]]] = []
        self._container = _Box(orientation)
        self._start = _Box()
        self._center = _Box()
        self._end = _Box()

        self.append_child(self._container)
        self.focus_child = self._container
        self._container.hexpand = True
        self._container.vexpand = True

        self._container.append(self._start)
        self._container.append(self._center)
        self._container.append(self._end)

        self._center.hexpand = True
        self._center.vexpand = True
        self._apply_orientation()

    def connect_notify(self, prop: str, callback: Callable[[str], Any]) -> None:
        """Call callback(prop) whenever prop changes."""
        self._notify_handlers.append((prop, callback))

    def _notify(self, prop: str) -> None:
        for wanted, callback in list(self._notify_handlers):
            if wanted == prop:
                callback(prop)

    @property
    def orientation(self) -> Orientation:
        """The packing axis."""
        return self._container.orientation

    @orientation.setter
    def orientation(self, orientation: Orientation) -> None:
        if self._container.orientation is orientation:
            return
        self._container.orientation = orientation
        self._apply_orientation()
        self._notify("orientation")

    def _apply_orientation(self) -> None:
        orientation = self.orientation
        horizontal = orientation is Orientation.HORIZONTAL
        for region in (self._start, self._end):
            region.orientation = orientation
            region.hexpand = not horizontal
            region.vexpand = horizontal
        self._center.orientation = orientation

    @property
    def start(self) -> Widget:
        """The region packed at the start."""
        return self._start

    @property
    def center(self) -> Widget:
        """The expanding middle region."""
        return self._center

    @property
    def end(self) -> Widget:
        """The region packed at the end."""
        return self._end

    @property
    def start_children(self) -> list[Widget]:
        """Children packed at the start."""
        return list(self._start.iter_children())

    @property
    def center_children(self) -> list[Widget]:
        """Children in the centre."""
        return list(self._center.iter_children())

    @property
    def end_children(self) -> list[Widget]:
        """Children packed at the end."""
        return list(self._end.iter_children())

    def pack_start(self, child: Widget) -> None:
        """Add a child to the start region."""
        self._start.append(child)

    def append(self, child: Widget) -> None:
        """Add a child to the centre region."""
        self._center.append(child)

    def pack_end(self, child: Widget) -> None:
        """Add a child to the end region."""
        self._end.append(child)

    def add_child(self, child: Any, type_: str | None = None) -> None:
        """Add a child by type: 'start', 'end', or anything else for the centre."""
        if not isinstance(child, Widget):
            raise TypeError(f"cannot add {child!r} to a PackBox")
        if type_ == "start":
            self.pack_start(child)
        elif type_ == "end":
            self.pack_end(child)
        else:
            self.append(child)

    def compute_expand(self, orientation: Orientation) -> bool:
        """Expand if set explicitly, or if any region expands."""
        flag = self.hexpand if orientation is Orientation.HORIZONTAL else self.vexpand
        if flag is not None:
            return flag
        return any(child.compute_expand(orientation) for child in self._container.iter_children())