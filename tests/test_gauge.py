import math

import pytest

from gauge import (
    ARC_END,
    GaugeGeometry,
    GaugeRenderer,
    NAME_LABEL_ANGLE,
    VALUE_LABEL_ANGLE,
)
from helpers import Point


def test_configure_scales_radii_with_side():
    renderer = GaugeRenderer()
    geometry = renderer.configure(200)
    assert geometry.center == Point(100, 100)
    assert geometry.outer_radius == pytest.approx(86.0)
    assert geometry.view_radius == pytest.approx(81.4)
    assert geometry.name_label_radius == pytest.approx(82.8)
    assert geometry.value_label_radius == pytest.approx(80.0)


def test_configure_same_side_keeps_geometry():
    renderer = GaugeRenderer()
    first = renderer.configure(200)
    assert renderer.configure(200) is first
    assert renderer.configure(300) is not first


@pytest.mark.parametrize("side", [0, -50, float("nan")])
def test_degenerate_side_gives_zero_geometry(side):
    geometry = GaugeGeometry(side)
    assert geometry.side == 0
    assert geometry.center == Point(0, 0)
    assert geometry.view_radius == 0


def test_background_arc_is_fixed():
    renderer = GaugeRenderer()
    assert renderer.background_arc()[:2] == (315, 85)
    renderer.configure(200)
    arc = renderer.background_arc()
    assert (arc.start, arc.sweep) == (315, 85)
    assert arc.radius == pytest.approx(81.4)


def test_value_arc_sweeps_for_reading_sequence():
    renderer = GaugeRenderer()
    sweeps = [renderer.value_arc(r, 160).sweep for r in (0, 80, 160, 200)]
    assert sweeps == pytest.approx([0, 42.5, 85, 85])


@pytest.mark.parametrize("reading", [160, 161, 1e6])
def test_value_arc_full_scale(reading):
    assert GaugeRenderer().value_arc(reading).sweep == 85


@pytest.mark.parametrize("reading", [0, -0.5, -300])
def test_value_arc_empty(reading):
    assert GaugeRenderer().value_arc(reading).sweep == 0


@pytest.mark.parametrize("reading", [-10, 0, 12.5, 48, 159.9, 160, 500])
def test_value_arc_ends_at_fixed_point(reading):
    arc = GaugeRenderer().value_arc(reading)
    assert arc.start + arc.sweep == pytest.approx(400)
    assert ARC_END == 400


def test_value_arc_defaults_to_stored_reading():
    renderer = GaugeRenderer(max_scale=100)
    renderer.update(50)
    assert renderer.value_arc().sweep == pytest.approx(42.5)


def test_value_arc_non_positive_scale_is_empty():
    assert GaugeRenderer().value_arc(50, 0).sweep == 0


def test_label_rotations():
    renderer = GaugeRenderer()
    renderer.configure(200)
    assert renderer.label_placement(307, 80, False).rotation == 397
    assert renderer.label_placement(53, 80, True).rotation == 323


def test_label_position_on_circle():
    renderer = GaugeRenderer()
    renderer.configure(200)
    label = renderer.label_placement(90, 50)
    assert label.position.x == pytest.approx(100)
    assert label.position.y == pytest.approx(150)


def test_value_and_name_labels():
    renderer = GaugeRenderer()
    renderer.configure(200)
    renderer.update(48.7)

    value = renderer.value_label("μT")
    assert value.text == "48μT"
    assert value.rotation == 90 + VALUE_LABEL_ANGLE
    theta = math.radians(VALUE_LABEL_ANGLE)
    assert value.position.x == pytest.approx(100 + 80 * math.cos(theta))
    assert value.position.y == pytest.approx(100 + 80 * math.sin(theta))

    name = renderer.name_label("Magnetic field")
    assert name.text == "Magnetic field"
    assert name.rotation == 270 + NAME_LABEL_ANGLE


def test_negative_reading_label_truncates_toward_zero():
    renderer = GaugeRenderer()
    renderer.update(-3.7)
    assert renderer.value_label("").text == "-3"


def test_north_marker_disabled():
    renderer = GaugeRenderer()
    renderer.configure(200)
    assert renderer.north_marker(False) is None
    assert renderer.north_marker() is None


def test_north_marker_triangle():
    renderer = GaugeRenderer()
    renderer.configure(200)
    marker = renderer.north_marker(True)
    # 100 - 86 + 12 - 2
    assert tuple(marker.apex) == pytest.approx((100, 24))
    assert tuple(marker.left) == pytest.approx((94, 12))
    assert tuple(marker.right) == pytest.approx((106, 12))


def test_north_marker_cached_until_resize():
    renderer = GaugeRenderer(show_circle=True)
    renderer.configure(200)
    marker = renderer.north_marker()
    assert renderer.north_marker() is marker
    renderer.configure(200)
    assert renderer.north_marker() is marker
    renderer.configure(400)
    assert renderer.north_marker() is not marker
    assert renderer.north_marker().apex.x == 200


def test_show_and_hide_circle():
    renderer = GaugeRenderer()
    renderer.configure(200)
    renderer.show_circle()
    assert renderer.circle_shown
    assert renderer.frame().north_marker is not None
    renderer.hide_circle()
    frame = renderer.frame()
    assert frame.north_marker is None
    assert frame.outer_radius is None


def test_update_ignores_sub_unit_changes():
    renderer = GaugeRenderer()
    assert renderer.update(12.1)
    assert not renderer.update(12.9)
    assert renderer.reading == 12.1
    assert renderer.update(13.0)
    assert renderer.reading == 13.0


def test_update_initial_state():
    renderer = GaugeRenderer()
    assert renderer.reading == 0
    assert not renderer.dirty
    assert not renderer.update(0.9)
    assert not renderer.update(-0.9)
    assert renderer.reading == 0


@pytest.mark.parametrize("reading", [float("nan"), float("inf"), -float("inf")])
def test_update_ignores_non_finite(reading):
    renderer = GaugeRenderer()
    assert not renderer.update(reading)
    assert not renderer.dirty


def test_frame_consumes_dirty():
    renderer = GaugeRenderer()
    renderer.configure(200)
    renderer.update(80)
    assert renderer.dirty
    frame = renderer.frame("μT", "Magnetic field")
    assert not renderer.dirty
    assert frame.value.sweep == pytest.approx(42.5)
    assert frame.background.sweep == 85
    assert frame.value_label.text == "80μT"
    assert frame.name_label.text == "Magnetic field"


def test_mark_clean():
    renderer = GaugeRenderer()
    renderer.update(5)
    renderer.mark_clean()
    assert not renderer.dirty
    assert not renderer.update(5.5)
    assert not renderer.dirty
