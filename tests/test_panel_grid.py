import pytest

from terms.twl.paned import Paned
from terms.twl.panel import Panel
from terms.twl.panel_grid import PanelGrid
from terms.twl.widget import Orientation, Propagation, Rect, Widget


def focusable() -> Widget:
    widget = Widget()
    widget.focusable = True
    return widget


def test_new_grid_is_empty():
    grid = PanelGrid()
    assert grid.is_empty()
    assert grid.panels() == []
    assert grid.n_panels == 0


def test_set_initial_child_wraps_child_in_panel():
    grid = PanelGrid()
    child = Widget()
    panel = grid.set_initial_child(child)
    assert panel.child is child
    assert grid.panels() == [panel]
    assert grid.inner.child is panel
    assert panel.show_header is False


def test_split_on_empty_grid_sets_initial_child():
    grid = PanelGrid()
    panel = grid.split(Widget())
    assert grid.inner.child is panel
    assert grid.panels() == [panel]


def test_split_builds_twl_paned():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    second = grid.split(Widget(), Orientation.VERTICAL)
    root = grid.inner.child
    assert isinstance(root, Paned)
    assert root.is_twl_paned()
    assert root.orientation is Orientation.VERTICAL
    assert root.start_child is first
    assert root.end_child is second
    assert grid.n_panels == 2


def test_split_preferred_orientation_follows_panel_shape():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    first.allocation = Rect(0, 0, 200, 100)
    grid.split(Widget())
    assert grid.inner.child.orientation is Orientation.HORIZONTAL

    grid2 = PanelGrid()
    tall = grid2.set_initial_child(Widget())
    tall.allocation = Rect(0, 0, 100, 200)
    grid2.split(Widget())
    assert grid2.inner.child.orientation is Orientation.VERTICAL


def test_split_uses_selected_panel():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    second = grid.split(Widget(), Orientation.HORIZONTAL)
    grid.selected = second
    third = grid.split(Widget(), Orientation.VERTICAL)
    root = grid.inner.child
    assert root.start_child is first
    inner = root.end_child
    assert isinstance(inner, Paned)
    assert inner.start_child is second
    assert inner.end_child is third


def test_header_visibility_follows_setting():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    second = grid.split(Widget())
    assert [p.show_header for p in (first, second)] == [False, False]
    grid.show_panel_headers = True
    assert [p.show_header for p in (first, second)] == [True, True]


def test_single_panel_hides_header_even_when_enabled():
    grid = PanelGrid()
    grid.show_panel_headers = True
    panel = grid.set_initial_child(Widget())
    assert panel.show_header is False


def test_close_panel_default_closes_immediately():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    second = grid.split(Widget())
    grid.close_panel(second)
    assert grid.panels() == [first]
    assert grid.inner.child is first
    assert second.parent is None


def test_closing_last_panel_empties_grid():
    grid = PanelGrid()
    panel = grid.set_initial_child(Widget())
    grid.selected = panel
    grid.close_panel(panel)
    assert grid.is_empty()
    assert grid.inner.child is None
    assert grid.selected is None


def test_closing_selected_panel_selects_sibling():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    second = grid.split(Widget())
    grid.selected = second
    grid.close_panel(second)
    assert grid.selected is first


def test_handler_stop_defers_closing():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    second = grid.split(Widget())
    requests = []

    def handler(g, panel):
        requests.append(panel)
        return Propagation.STOP

    grid.connect_panel_close(handler)
    grid.close_panel(second)
    assert requests == [second]
    assert second.closing is True
    assert set(map(id, grid.panels())) == {id(first), id(second)}

    grid.close_panel_finish(second)
    assert grid.panels() == [first]


def test_handler_proceed_lets_grid_close():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    second = grid.split(Widget())
    grid.connect_panel_close(lambda g, p: Propagation.PROCEED)
    grid.close_panel(first)
    assert grid.panels() == [second]


def test_close_panel_twice_is_ignored():
    grid = PanelGrid()
    grid.set_initial_child(Widget())
    second = grid.split(Widget())
    calls = []
    grid.connect_panel_close(lambda g, p: calls.append(p) or Propagation.STOP)
    grid.close_panel(second)
    grid.close_panel(second)
    assert calls == [second]


def test_close_panel_finish_requires_closing_state():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    second = grid.split(Widget())
    grid.close_panel_finish(second)
    assert len(grid.panels()) == 2
    assert second.parent is grid.inner.child
    assert first.closing is False


def test_close_other_panels():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    grid.split(Widget())
    grid.split(Widget())
    grid.close_other_panels(first)
    assert grid.panels() == [first]
    assert grid.inner.child is first


def test_close_nested_panel_collapses_paned():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    second = grid.split(Widget())
    third = grid.split(Widget())
    root = grid.inner.child
    assert third.parent is root.start_child
    grid.close_panel(third)
    assert root.start_child is first
    assert root.end_child is second
    assert first.parent is root


def test_panel_close_request_goes_through_grid():
    grid = PanelGrid()
    first = grid.set_initial_child(Widget())
    second = grid.split(Widget())
    second.close()
    assert grid.panels() == [first]


def test_panel_lookup():
    grid = PanelGrid()
    child = Widget()
    panel = grid.set_initial_child(child)
    assert grid.panel(child) is panel
    assert grid.panel(Widget()) is None
    assert grid.panel(grid.inner) is None


def test_wide_handle_propagates_to_paneds():
    grid = PanelGrid()
    grid.set_initial_child(Widget())
    grid.split(Widget())
    grid.wide_handle = True
    assert grid.inner.child.wide_handle is True
    grid.split(Widget())
    assert all(p.wide_handle for p in grid._all(Paned))


def test_n_panels_notifications():
    grid = PanelGrid()
    events = []
    grid.connect_notify("n-panels", events.append)
    grid.set_initial_child(Widget())
    grid.split(Widget())
    assert events == ["n-panels", "n-panels"]


def test_selected_notifies_only_on_change():
    grid = PanelGrid()
    panel = grid.set_initial_child(Widget())
    events = []
    grid.connect_notify("selected", events.append)
    grid.selected = panel
    grid.selected = panel
    assert events == ["selected"]


def test_grab_focus_uses_selected_panel():
    grid = PanelGrid()
    first_child, second_child = focusable(), focusable()
    grid.set_initial_child(first_child)
    second = grid.split(second_child)
    grid.selected = second
    assert grid.grab_focus() is True
    assert second_child.has_focus()


def test_grab_focus_selects_focused_panel():
    grid = PanelGrid()
    first_child = focusable()
    first = grid.set_initial_child(first_child)
    grid.split(focusable())
    assert grid.selected is None
    assert grid.grab_focus() is True
    assert first_child.has_focus()
    assert grid.selected is first


@pytest.mark.parametrize("orientation", [Orientation.HORIZONTAL, Orientation.VERTICAL])
def test_split_keeps_all_panels_reachable(orientation):
    grid = PanelGrid()
    created = [grid.set_initial_child(Widget())]
    for _ in range(3):
        created.append(grid.split(Widget(), orientation))
    assert {id(p) for p in grid.panels()} == {id(p) for p in created}
    assert all(isinstance(p, Panel) for p in grid.panels())