import pytest

from terms.twl.zoom_controls import ZoomControls


def test_default_value_and_label():
    controls = ZoomControls()
    assert controls.value == 100
    assert controls.label == "100%"


def test_setting_value_updates_label():
    controls = ZoomControls()
    controls.value = 150
    assert controls.value == 150
    assert controls.label == "150%"


def test_constructor_value():
    controls = ZoomControls(75)
    assert controls.label == "75%"


def test_negative_value_rejected():
    controls = ZoomControls()
    with pytest.raises(ValueError):
        controls.value = -1
    assert controls.value == 100


@pytest.mark.parametrize(
    "signal, action",
    [
        ("zoom-in", ZoomControls.zoom_in),
        ("zoom-out", ZoomControls.zoom_out),
        ("zoom-reset", ZoomControls.zoom_reset),
    ],
)
def test_buttons_emit_their_signal_only(signal, action):
    controls = ZoomControls()
    seen = []
    for name in ("zoom-in", "zoom-out", "zoom-reset"):
        controls.connect(name, lambda c, name=name: seen.append((name, c)))
    action(controls)
    assert seen == [(signal, controls)]


def test_multiple_handlers_called_in_order():
    controls = ZoomControls()
    order = []
    controls.connect("zoom-in", lambda c: order.append(1))
    controls.connect("zoom-in", lambda c: order.append(2))
    controls.zoom_in()
    controls.zoom_in()
    assert order == [1, 2, 1, 2]


def test_unknown_signal_raises():
    controls = ZoomControls()
    with pytest.raises(ValueError):
        controls.connect("zoom-sideways", lambda c: None)