# magfield-gauge: Magnetic field gauge for cairo.
#
# Copyright (C) 2020  Brandon Lewis
#
# This program is free software: you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public License
# as published by the Free Software Foundation, either version 3 of
# the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this program.  If not, see
# <https://www.gnu.org/licenses/>.

"""Geometry of the magnetic field gauge.

The gauge is drawn inside a square. A fixed background arc spans 85
degrees starting at 315 degrees; the value arc always ends where the
background arc ends and grows backward from there as the reading
rises. Angles are in degrees, measured clockwise from the positive x
axis, since the y axis of the drawing surface points down.

Nothing in this module touches cairo: it turns a side length and a
reading into points, angles and strings, which `painter.GaugePainter`
then strokes.
"""

from collections import namedtuple
import logging
import math

from helpers import Point


log = logging.getLogger(__name__)


OUTER_RADIUS = 0.43
VIEW_RADIUS = 0.407
NAME_LABEL_RADIUS = 0.414
VALUE_LABEL_RADIUS = 0.4

ARC_START = 315.0
ARC_SWEEP = 85.0
ARC_END = ARC_START + ARC_SWEEP
MAX_SCALE = 160

VALUE_LABEL_ANGLE = 307.0
NAME_LABEL_ANGLE = 53.0

# dp
MARKER_LENGTH = 12.0
MARKER_INSET = 2.0


ArcSpan = namedtuple("ArcSpan", "start sweep radius")
ArcSpan.__doc__ = """An arc as a start angle and a sweep, in degrees."""

LabelPlacement = namedtuple("LabelPlacement", "position rotation text")
LabelPlacement.__doc__ = """Where to anchor a label, and how far to rotate it."""

NorthMarker = namedtuple("NorthMarker", "apex left right")
NorthMarker.__doc__ = """Triangle pointing down at the top of the outer circle."""

GaugeFrame = namedtuple(
    "GaugeFrame",
    "center background value outer_radius north_marker value_label name_label")
GaugeFrame.__doc__ = """Everything needed to draw the gauge once.

`outer_radius` and `north_marker` are None while the circle is hidden.
"""


class GaugeGeometry(object):

    """Center and radii derived from the side of the bounding square."""

    def __init__(self, side):
        side = float(side) if side > 0 else 0.0
        self.side = side
        self.center = Point(side / 2, side / 2)
        self.outer_radius = side * OUTER_RADIUS
        self.view_radius = side * VIEW_RADIUS
        self.name_label_radius = side * NAME_LABEL_RADIUS
        self.value_label_radius = side * VALUE_LABEL_RADIUS

    def __repr__(self):
        return "GaugeGeometry(side=%g)" % self.side


def value_sweep(reading, max_scale=MAX_SCALE):
    """Degrees of the background arc covered by `reading`."""
    if max_scale <= 0:
        return 0.0
    percent = min(1.0, max(0.0, reading / max_scale))
    return percent * ARC_SWEEP


def truncate(reading):
    """Integer part of `reading`, or None when it has none."""
    if not math.isfinite(reading):
        return None
    return math.trunc(reading)


class GaugeRenderer(object):

    """Turns a reading into the arcs and labels of the gauge.

    One renderer is built by the host and handed to whatever draws it.
    The host reports size changes through `configure()` and readings
    through `update()`; `update()` says whether a redraw is owed, and
    `frame()` hands out the primitives and settles the debt.

    The renderer does no locking. All calls must come from the thread
    that owns the drawing surface.
    """

    def __init__(self, max_scale=MAX_SCALE, show_circle=False):
        self.max_scale = max_scale
        self.reading = 0.0
        self.dirty = False
        self.geometry = GaugeGeometry(0)
        self._show_circle = show_circle
        self._north_marker = None

    def configure(self, side):
        """Lay the gauge out in a square of edge `side`.

        Geometry is only replaced when `side` changes.
        """
        side = float(side) if side > 0 else 0.0
        if side == self.geometry.side:
            return self.geometry
        self.geometry = GaugeGeometry(side)
        self._north_marker = None
        log.debug("configure: %r", self.geometry)
        return self.geometry

    def background_arc(self):
        return ArcSpan(ARC_START, ARC_SWEEP, self.geometry.view_radius)

    def value_arc(self, reading=None, max_scale=None):
        """The filled part of the gauge.

        The reading is clamped to [0, max_scale]. The arc always ends at
        the end of the background arc, so `start + sweep` is constant.
        """
        if reading is None:
            reading = self.reading
        if max_scale is None:
            max_scale = self.max_scale
        sweep = value_sweep(reading, max_scale)
        return ArcSpan(ARC_END - sweep, sweep, self.geometry.view_radius)

    def label_placement(self, angle, radius, inverted=False, text=""):
        """Anchor point at `angle` on a circle of `radius`.

        Labels are rotated to run tangent to the circle; `inverted`
        turns them half way round, for labels on the lower half which
        would otherwise read upside down.
        """
        position = self.geometry.center + Point.from_polar(radius, angle)
        rotation = (270.0 if inverted else 90.0) + angle
        return LabelPlacement(position, rotation, text)

    def value_label(self, unit):
        return self.label_placement(
            VALUE_LABEL_ANGLE,
            self.geometry.value_label_radius,
            False,
            "%d%s" % (truncate(self.reading), unit))

    def name_label(self, caption):
        return self.label_placement(
            NAME_LABEL_ANGLE,
            self.geometry.name_label_radius,
            True,
            caption)

    def north_marker(self, enabled=None):
        if enabled is None:
            enabled = self._show_circle
        if not enabled:
            return None
        if self._north_marker is None:
            center = self.geometry.center
            apex = Point(
                center.x,
                center.y - self.geometry.outer_radius
                + MARKER_LENGTH - MARKER_INSET)
            base = apex.y - MARKER_LENGTH
            self._north_marker = NorthMarker(
                apex,
                Point(apex.x - MARKER_LENGTH / 2, base),
                Point(apex.x + MARKER_LENGTH / 2, base))
        return self._north_marker

    def show_circle(self):
        self._show_circle = True

    def hide_circle(self):
        self._show_circle = False

    @property
    def circle_shown(self):
        return self._show_circle

    def update(self, reading):
        """Store `reading` if its integer part differs from the last one.

        Returns True when the caller must redraw. Sub-unit jitter is
        dropped without touching the stored reading.
        """
        new = truncate(reading)
        if new is None or new == truncate(self.reading):
            return False
        log.debug("update: %g -> %g", self.reading, reading)
        self.reading = float(reading)
        self.dirty = True
        return True

    def mark_clean(self):
        self.dirty = False

    def frame(self, unit="", caption=""):
        """Snapshot every primitive of the gauge and clear the dirty flag."""
        self.mark_clean()
        shown = self._show_circle
        return GaugeFrame(
            self.geometry.center,
            self.background_arc(),
            self.value_arc(),
            self.geometry.outer_radius if shown else None,
            self.north_marker(shown),
            self.value_label(unit),
            self.name_label(caption))
