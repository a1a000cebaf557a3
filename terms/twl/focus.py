"""Directional keyboard focus navigation among a widget's children."""

from __future__ import annotations

import sys
from functools import cmp_to_key

from .widget import DirectionType, Orientation, Rect, TextDirection, Widget, orthogonal

__all__ = ["axis_info", "axis_compare", "find_old_focus", "focus_sort", "move_focus"]

_F32_EPSILON = 1.1920929e-07
_F64_EPSILON = sys.float_info.epsilon


def _approx_eq(a: float, b: float, epsilon: float) -> bool:
    return abs(a - b) <= epsilon


def _compare(a: float, b: float, reverse: bool, epsilon: float) -> int:
    inv = -1 if reverse else 1
    if a < b:
        return -inv
    if _approx_eq(a, b, epsilon):
        return 0
    return inv


def axis_info(bounds: Rect, orientation: Orientation) -> tuple[float, float]:
    """The start and length of a rectangle along an axis."""
    if orientation is Orientation.HORIZONTAL:
        return bounds.x, bounds.width
    return bounds.y, bounds.height


def axis_compare(
    widget: Widget,
    child1: Widget,
    child2: Widget,
    x: float,
    y: float,
    reverse: bool,
    orientation: Orientation,
) -> int:
    """Order two children by their centres along an axis.

    Children centred at the same place are ordered by the distance of their
    centre on the other axis from x.
    """
    bounds1 = child1.compute_bounds(widget)
    bounds2 = child2.compute_bounds(widget)
    if bounds1 is None or bounds2 is None:
        return 0

    start1, size1 = axis_info(bounds1, orientation)
    start2, size2 = axis_info(bounds2, orientation)
    center1 = start1 + size1 / 2.0
    center2 = start2 + size2 / 2.0

    if center1 == center2:
        other = orthogonal(orientation)
        o_start1, o_size1 = axis_info(bounds1, other)
        o_start2, o_size2 = axis_info(bounds2, other)
        key1 = abs(o_start1 + o_size1 / 2.0 - x)
        key2 = abs(o_start2 + o_size2 / 2.0 - x)
    else:
        key1, key2 = center1, center2

    return _compare(key1, key2, reverse, _F32_EPSILON)


def find_old_focus(widget: Widget, children: list[Widget]) -> Widget | None:
    """The first child lying on the path between the focus and widget."""
    for child in children:
        node = child
        found = True
        while node.parent is not None:
            parent = node.parent
            if parent is widget:
                break
            if parent.focus_child is not None and parent.focus_child is not node:
                found = False
                break
            node = parent
        if found:
            return child
    return None


def _old_focus_coords(widget: Widget) -> Rect | None:
    focus = widget.root().focus
    if focus is None:
        return None
    return focus.compute_bounds(widget)


def _focus_sort_tab(widget: Widget, children: list[Widget], direction: DirectionType) -> list[Widget]:
    backward = direction is DirectionType.TAB_BACKWARD
    reverse_x = (widget.direction is TextDirection.RTL) != backward

    def compare(child1: Widget, child2: Widget) -> int:
        bounds1 = child1.compute_bounds(child1.parent) if child1.parent is not None else None
        bounds2 = child2.compute_bounds(child2.parent) if child2.parent is not None else None
        if bounds1 is None or bounds2 is None:
            return 0
        y1 = bounds1.y + bounds1.height / 2.0
        y2 = bounds2.y + bounds2.height / 2.0
        if _approx_eq(y1, y2, _F64_EPSILON):
            x1 = bounds1.x + bounds1.width / 2.0
            x2 = bounds2.x + bounds2.width / 2.0
            return _compare(x1, x2, reverse_x, _F64_EPSILON)
        ordering = -1 if y1 < y2 else 1
        return -ordering if backward else ordering

    return sorted(children, key=cmp_to_key(compare))


def _outside(lo: float, hi: float, compare_lo: float, compare_hi: float) -> bool:
    return (
        _approx_eq(hi, compare_lo, _F32_EPSILON)
        or hi < compare_lo
        or _approx_eq(lo, compare_hi, _F32_EPSILON)
        or lo > compare_hi
    )


def _focus_sort_left_right(widget: Widget, children: list[Widget], direction: DirectionType) -> list[Widget]:
    old_focus = widget.focus_child or find_old_focus(widget, children)
    old_bounds = old_focus.compute_bounds(widget) if old_focus is not None else None

    if old_focus is not None and old_bounds is not None:
        compare_y1 = old_bounds.y
        compare_y2 = old_bounds.y + old_bounds.height
        edge = old_bounds.x if direction is DirectionType.LEFT else old_bounds.x + old_bounds.width

        def keep(child: Widget) -> bool:
            if child is old_focus:
                return True
            bounds = child.compute_bounds(widget)
            if bounds is None:
                return False
            if _outside(bounds.y, bounds.y + bounds.height, compare_y1, compare_y2):
                return False
            if direction is DirectionType.RIGHT and bounds.x + bounds.width < edge:
                return False
            if direction is DirectionType.LEFT and bounds.x > edge:
                return False
            return True

        children = [child for child in children if keep(child)]
        compare_x = old_bounds.x + old_bounds.width / 2.0
        compare_y = (compare_y1 + compare_y2) / 2.0
    else:
        reference = widget.parent if widget.parent is not None else widget
        bounds = widget.compute_bounds(reference) or Rect(0.0, 0.0, 0.0, 0.0)
        focus_bounds = _old_focus_coords(widget)
        native = widget.native()
        if focus_bounds is not None:
            compare_y = focus_bounds.y + focus_bounds.height / 2.0
        elif native is None:
            compare_y = bounds.y + bounds.height / 2.0
        else:
            compare_y = bounds.height / 2.0
        if native is None:
            compare_x = bounds.x if direction is DirectionType.RIGHT else bounds.x + bounds.width
        else:
            compare_x = 0.0 if direction is DirectionType.LEFT else bounds.width

    reverse = direction is DirectionType.LEFT
    return sorted(
        children,
        key=cmp_to_key(
            lambda a, b: axis_compare(widget, a, b, compare_x, compare_y, reverse, Orientation.HORIZONTAL)
        ),
    )


def _focus_sort_up_down(widget: Widget, children: list[Widget], direction: DirectionType) -> list[Widget]:
    old_focus = widget.focus_child or find_old_focus(widget, children)
    old_bounds = old_focus.compute_bounds(widget) if old_focus is not None else None

    if old_focus is not None and old_bounds is not None:
        compare_x1 = old_bounds.x
        compare_x2 = old_bounds.x + old_bounds.width
        edge = old_bounds.y if direction is DirectionType.UP else old_bounds.y + old_bounds.height

        def keep(child: Widget) -> bool:
            if child is old_focus:
                return True
            bounds = child.compute_bounds(widget)
            if bounds is None:
                return False
            if _outside(bounds.x, bounds.x + bounds.width, compare_x1, compare_x2):
                return False
            if direction is DirectionType.DOWN and bounds.y + bounds.height < edge:
                return False
            if direction is DirectionType.UP and bounds.y > edge:
                return False
            return True

        children = [child for child in children if keep(child)]
        compare_x = (compare_x1 + compare_x2) / 2.0
        compare_y = old_bounds.y + old_bounds.height / 2.0
    else:
        reference = widget.parent if widget.parent is not None else widget
        bounds = widget.compute_bounds(reference) or Rect(0.0, 0.0, 0.0, 0.0)
        focus_bounds = _old_focus_coords(widget)
        native = widget.native()
        if focus_bounds is not None:
            compare_x = focus_bounds.x + focus_bounds.width / 2.0
        elif native is None:
            compare_x = bounds.x + bounds.width / 2.0
        else:
            compare_x = bounds.width / 2.0
        if native is None:
            compare_y = bounds.y if direction is DirectionType.DOWN else bounds.y + bounds.height
        else:
            compare_y = 0.0 if direction is DirectionType.DOWN else bounds.height

    reverse = direction is DirectionType.UP
    return sorted(
        children,
        key=cmp_to_key(
            lambda a, b: axis_compare(widget, a, b, compare_x, compare_y, reverse, Orientation.VERTICAL)
        ),
    )


def focus_sort(widget: Widget, direction: DirectionType) -> list[Widget]:
    """The mapped, sensitive children in the order focus visits them."""
    children = [c for c in widget.iter_children() if c.mapped and c.sensitive]
    if direction in (DirectionType.TAB_FORWARD, DirectionType.TAB_BACKWARD):
        return _focus_sort_tab(widget, children, direction)
    if direction in (DirectionType.UP, DirectionType.DOWN):
        return _focus_sort_up_down(widget, children, direction)
    if direction in (DirectionType.LEFT, DirectionType.RIGHT):
        return _focus_sort_left_right(widget, children, direction)
    raise ValueError(f"unknown direction type: {direction!r}")


def move_focus(widget: Widget, direction: DirectionType) -> bool:
    """Offer the focus to each candidate child in order; the last answer wins."""
    focus_child = widget.focus_child
    result = False
    for child in focus_sort(widget, direction):
        if child is focus_child or (child.mapped and child.is_ancestor(widget)):
            result = child.child_focus(direction)
    return result