"""A small widget tree with focus tracking, bounds and expand propagation."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = [
    "Orientation",
    "DirectionType",
    "TextDirection",
    "Propagation",
    "Rect",
    "Widget",
    "Bin",
    "orthogonal",
    "signal_accumulator_propagation",
    "compute_expand",
    "grab_focus_child",
]


class Orientation(Enum):
    """Layout axis."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class DirectionType(Enum):
    """Direction of a keyboard focus move."""

    TAB_FORWARD = "tab-forward"
    TAB_BACKWARD = "tab-backward"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class TextDirection(Enum):
    """Reading direction of a widget."""

    NONE = "none"
    LTR = "ltr"
    RTL = "rtl"


class Propagation(Enum):
    """Whether a signal handler lets emission continue."""

    PROCEED = "proceed"
    STOP = "stop"

    @classmethod
    def from_bool(cls, stop: bool) -> Propagation:
        """STOP for True, PROCEED for False."""
        return cls.STOP if stop else cls.PROCEED

    def __bool__(self) -> bool:
        return self is Propagation.STOP


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle."""

    x: float
    y: float
    width: float
    height: float


def orthogonal(orientation: Orientation) -> Orientation:
    """The other axis."""
    if orientation is Orientation.HORIZONTAL:
        return Orientation.VERTICAL
    return Orientation.HORIZONTAL


def signal_accumulator_propagation(handler_return: Any) -> tuple[Any, bool]:
    """Accumulate a handler's return value.

    Returns the new accumulated value and whether emission continues; a
    non-boolean return counts as True.
    """
    stop = handler_return if isinstance(handler_return, bool) else True
    return handler_return, bool(Propagation.from_bool(stop))


class Widget:
    """A node in a widget tree with an allocation relative to its parent."""

    def __init__(self) -> None:
        self.parent: Widget | None = None
        self._children: list[Widget] = []
        self.allocation = Rect(0.0, 0.0, 0.0, 0.0)
        self.mapped = True
        self.sensitive = True
        self.focusable = False
        self.hexpand: bool | None = None
        self.vexpand: bool | None = None
        self.direction = TextDirection.LTR
        self.is_native = False
        self.focus_child: Widget | None = None
        self._focus: Widget | None = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} at {id(self):#x}>"

    def append_child(self, child: Widget) -> None:
        """Add a child after the existing ones."""
        if child.parent is not None:
            raise ValueError("widget already has a parent")
        if child is self or self.is_ancestor(child):
            raise ValueError("cannot add a widget inside itself")
        if child._focus is not None:
            _clear_focus_chain(child._focus)
            child._focus = None
        child.parent = self
        self._children.append(child)

    def unparent(self) -> None:
        """Remove this widget from its parent."""
        parent = self.parent
        if parent is None:
            return
        root = self.root()
        focus = root._focus
        if focus is not None and (focus is self or focus.is_ancestor(self)):
            _clear_focus_chain(focus)
            root._focus = None
        parent._children.remove(self)
        if parent.focus_child is self:
            parent.focus_child = None
        self.parent = None

    def iter_children(self) -> Iterator[Widget]:
        """The children, first to last."""
        return iter(list(self._children))

    def _ancestors(self) -> Iterator[Widget]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def is_ancestor(self, other: Widget) -> bool:
        """Whether other is a proper ancestor of this widget."""
        return any(node is other for node in self._ancestors())

    def root(self) -> Widget:
        """The topmost ancestor, or this widget if it has no parent."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def native(self) -> Widget | None:
        """The nearest native widget at or above this one."""
        node: Widget | None = self
        while node is not None:
            if node.is_native:
                return node
            node = node.parent
        return None

    @property
    def focus(self) -> Widget | None:
        """The widget holding the keyboard focus in this widget's tree."""
        return self.root()._focus

    def has_focus(self) -> bool:
        """Whether this widget holds the keyboard focus."""
        return self.root()._focus is self

    def _origin(self) -> tuple[float, float]:
        x, y = self.allocation.x, self.allocation.y
        for node in self._ancestors():
            x += node.allocation.x
            y += node.allocation.y
        return x, y

    def compute_bounds(self, target: Widget) -> Rect | None:
        """This widget's rectangle in target's coordinates, if they share a tree."""
        if self.root() is not target.root():
            return None
        sx, sy = self._origin()
        tx, ty = target._origin()
        return Rect(sx - tx, sy - ty, self.allocation.width, self.allocation.height)

    def compute_expand(self, orientation: Orientation) -> bool:
        """Whether the widget wants extra space along an axis."""
        flag = self.hexpand if orientation is Orientation.HORIZONTAL else self.vexpand
        if flag is not None:
            return flag
        return any(child.compute_expand(orientation) for child in self._children)

    def _set_focus(self) -> None:
        root = self.root()
        if root._focus is not None:
            _clear_focus_chain(root._focus)
        root._focus = self
        node = self
        while node.parent is not None:
            node.parent.focus_child = node
            node = node.parent

    def grab_focus(self) -> bool:
        """Take the focus, or pass it to the first child that accepts it."""
        if self.focusable and self.sensitive:
            self._set_focus()
            return True
        return grab_focus_child(self)

    def child_focus(self, direction: DirectionType) -> bool:
        """Move the focus into or within this widget; False when it should leave."""
        if not (self.mapped and self.sensitive):
            return False
        if self.focusable and not self.has_focus() and self.focus_child is None:
            self._set_focus()
            return True
        children = [c for c in self._children if c.mapped and c.sensitive]
        if direction in (DirectionType.TAB_BACKWARD, DirectionType.UP, DirectionType.LEFT):
            children.reverse()
        current = self.focus_child
        if current is not None and current in children:
            if current.child_focus(direction):
                return True
            children = children[children.index(current) + 1 :]
        return any(child.child_focus(direction) for child in children)


def _clear_focus_chain(widget: Widget) -> None:
    node = widget
    while node.parent is not None:
        if node.parent.focus_child is node:
            node.parent.focus_child = None
        node = node.parent


def compute_expand(widget: Widget) -> tuple[bool, bool]:
    """Whether any child expands horizontally, and vertically."""
    children = list(widget.iter_children())
    hexpand = any(child.compute_expand(Orientation.HORIZONTAL) for child in children)
    vexpand = any(child.compute_expand(Orientation.VERTICAL) for child in children)
    return hexpand, vexpand


def grab_focus_child(widget: Widget) -> bool:
    """Give the focus to the first child that takes it."""
    return any(child.grab_focus() for child in widget.iter_children())


class Bin(Widget):
    """A widget with at most one child that passes focus on to it."""

    def __init__(self, child: Widget | None = None) -> None:
        super().__init__()
        if child is not None:
            self.append_child(child)

    @property
    def child(self) -> Widget | None:
        """The single child, if any."""
        return self._children[0] if self._children else None

    @child.setter
    def child(self, widget: Widget | None) -> None:
        if widget is self.child:
            return
        if self.child is not None:
            self.child.unparent()
        if widget is not None:
            self.append_child(widget)

    def append_child(self, child: Widget) -> None:
        if self._children:
            raise ValueError("a Bin holds only one child")
        super().append_child(child)

    def grab_focus(self) -> bool:
        return grab_focus_child(self)

    def move_focus(self, direction: DirectionType) -> bool:
        """Move the focus among the children in a direction."""
        from .focus import move_focus

        return move_focus(self, direction)