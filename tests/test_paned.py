import pytest

from terms.twl.paned import TWL_PANED_CSS_CLASS, Paned, make_twl_paned
from terms.twl.widget import Orientation, Widget


def test_make_twl_paned_is_marked():
    paned = make_twl_paned(Orientation.VERTICAL)
    assert paned.is_twl_paned()
    assert TWL_PANED_CSS_CLASS in paned.css_classes
    assert paned.orientation is Orientation.VERTICAL


def test_plain_paned_is_not_twl():
    assert not Paned(Orientation.HORIZONTAL).is_twl_paned()


def test_children_are_ordered_start_then_end():
    paned = Paned()
    start, end = Widget(), Widget()
    paned.end_child = end
    paned.start_child = start
    assert list(paned.iter_children()) == [start, end]
    assert start.parent is paned
    assert end.parent is paned


def test_replacing_slot_unparents_old_child():
    paned = Paned()
    old, new = Widget(), Widget()
    paned.start_child = old
    paned.start_child = new
    assert old.parent is None
    assert paned.start_child is new


def test_child_with_parent_is_rejected():
    other = Paned()
    child = Widget()
    other.start_child = child
    with pytest.raises(ValueError):
        Paned().end_child = child


def test_replace_start_child():
    paned = Paned()
    start, end, new = Widget(), Widget(), Widget()
    paned.start_child = start
    paned.end_child = end
    assert paned.replace(start, new) is True
    assert paned.start_child is new
    assert paned.end_child is end
    assert start.parent is None


def test_replace_end_child_with_none():
    paned = Paned()
    start, end = Widget(), Widget()
    paned.start_child = start
    paned.end_child = end
    assert paned.replace(end, None) is True
    assert paned.end_child is None
    assert list(paned.iter_children()) == [start]


def test_replace_unknown_child_changes_nothing():
    paned = Paned()
    start, end = Widget(), Widget()
    paned.start_child = start
    paned.end_child = end
    assert paned.replace(Widget(), Widget()) is False
    assert paned.start_child is start
    assert paned.end_child is end


def test_sibling():
    paned = Paned()
    start, end = Widget(), Widget()
    paned.start_child = start
    paned.end_child = end
    assert paned.sibling(start) is end
    assert paned.sibling(end) is start
    assert paned.sibling(Widget()) is None


def test_child_removed_externally_frees_slot():
    paned = Paned()
    start = Widget()
    paned.start_child = start
    start.unparent()
    assert paned.start_child is None