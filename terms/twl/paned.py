"""A two-pane container whose panes can be swapped out and looked up by sibling."""

from __future__ import annotations

import logging

from .widget import Orientation, Widget

__all__ = ["TWL_PANED_CSS_CLASS", "Paned", "make_twl_paned"]

log = logging.getLogger(__name__)

TWL_PANED_CSS_CLASS = "twl-paned"


class Paned(Widget):
    """Holds a start child and an end child side by side along an axis."""

    def __init__(self, orientation: Orientation = Orientation.HORIZONTAL, twl: bool = False) -> None:
        super().__init__()
        self.orientation = orientation
        self.wide_handle = False
        self.css_classes: set[str] = set()
        if twl:
            self.css_classes.add(TWL_PANED_CSS_CLASS)
        self._start: Widget | None = None
        self._end: Widget | None = None

    def is_twl_paned(self) -> bool:
        """Whether this paned was made by make_twl_paned."""
        return TWL_PANED_CSS_CLASS in self.css_classes

    @property
    def start_child(self) -> Widget | None:
        """The child in the start pane."""
        if self._start is not None and self._start.parent is self:
            return self._start
        return None

    @start_child.setter
    def start_child(self, widget: Widget | None) -> None:
        current = self.start_child
        if widget is current:
            return
        if current is not None:
            current.unparent()
        self._start = None
        if widget is not None:
            self.append_child(widget)
            self._children.remove(widget)
            self._children.insert(0, widget)
            self._start = widget

    @property
    def end_child(self) -> Widget | None:
        """The child in the end pane."""
        if self._end is not None and self._end.parent is self:
            return self._end
        return None

    @end_child.setter
    def end_child(self, widget: Widget | None) -> None:
        current = self.end_child
        if widget is current:
            return
        if current is not None:
            current.unparent()
        self._end = None
        if widget is not None:
            self.append_child(widget)
            self._end = widget

    def replace(self, child: Widget | None, new_child: Widget | None) -> bool:
        """Put new_child in the pane that holds child; False if child is not here."""
        log.debug("Paned.replace %r with %r", child, new_child)
        if self.start_child is child:
            self.start_child = new_child
            return True
        if self.end_child is child:
            self.end_child = new_child
            return True
        log.warning("Not a parent of child %r", child)
        return False

    def sibling(self, child: Widget | None) -> Widget | None:
        """The child in the other pane, or None if child is not here."""
        log.debug("Paned.sibling %r", child)
        if self.start_child is child:
            return self.end_child
        if self.end_child is child:
            return self.start_child
        log.warning("Not a parent of child %r", child)
        return None


def make_twl_paned(orientation: Orientation) -> Paned:
    """A paned marked as one of the panel grid's own."""
    return Paned(orientation, twl=True)