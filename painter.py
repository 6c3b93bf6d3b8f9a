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

"""Draws a GaugeRenderer's primitives onto a cairo context."""

import logging
import math

import cairo

from helpers import Helper, Point


log = logging.getLogger(__name__)


class GaugePainter(object):

    """Strokes one frame of the gauge.

    `style` is the dict returned by `params.gauge_style().getValues()`.
    The renderer works in dp; `scale` maps dp to device units.
    """

    def __init__(self, renderer, style):
        self.renderer = renderer
        self.style = style

    def draw(self, cr, scale=Point(1, 1)):
        helpers = Helper(cr)
        style = self.style
        frame = self.renderer.frame(style["unit"], style["caption"])
        log.debug("draw: %r", frame.value)

        with helpers.save():
            cr.scale(scale.x, scale.y)
            cr.set_line_cap(cairo.LineCap.ROUND)
            cr.set_line_width(style["arc_width"])

            cr.set_source(style["background_color"])
            self.stroke_arc(helpers, frame.center, frame.background)

            cr.set_source(style["field_color"])
            self.stroke_arc(helpers, frame.center, frame.value)

            cr.set_source(style["text_color"])
            self.draw_label(helpers, frame.value_label)
            self.draw_label(helpers, frame.name_label)

            if frame.outer_radius is not None:
                cr.set_line_width(style["outer_circle_width"])
                cr.set_source(style["outer_circle_color"])
                helpers.circle(frame.center, frame.outer_radius)
                cr.stroke()

            if frame.north_marker is not None:
                cr.set_source(style["north_mark_color"])
                helpers.polygon(*frame.north_marker)
                cr.fill()

        return frame

    def stroke_arc(self, helpers, center, span):
        # A zero sweep would leave a round-capped dot behind.
        if span.sweep <= 0 or span.radius <= 0:
            return
        helpers.arc(center, span.radius, span.start, span.sweep)
        helpers.cr.stroke()

    def draw_label(self, helpers, label):
        if not label.text:
            return
        with helpers.save():
            helpers.cr.translate(*label.position)
            helpers.cr.rotate(math.radians(label.rotation))
            helpers.cr.move_to(0, 0)
            helpers.center_text(
                label.text, self.style["font"], self.style["text_size"])
        helpers.cr.new_path()
