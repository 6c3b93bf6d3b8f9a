#! /usr/bin/python3
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


"""Offline rendering of the magnetic field gauge.

Renders the gauge to a file as determined by the given options.

Intended mainly for batch processing workflows (documentation, unit
tests, etc).

The following modes of operation are supported:
- nostdin    -- do not read from stdin, draw the value of --reading.
- oneshot    -- draw a single reading read from stdin.
- sequence   -- draw each redraw-worthy reading on stdin as a separate
                PNG file in the given directory.

Readings on stdin are JSON objects, one per line: {"field": 48.2}
"""

import argparse
import logging
import os
import sys

import cairo

from gauge import GaugeRenderer
from helpers import Box, Point, Rect, Save
from painter import GaugePainter
from prefs import Prefs
from sources import parse_reading
import params


log = logging.getLogger(__name__)

# dp are defined at 160 dpi.
DP_DPI = 160.0


def pt_to_pixel(pts, dpi):
    return int(pts * dpi / 72.0)

def mm_to_in(mm):
    return mm / 25.4

def in_to_pt(inches):
    return inches * 72

def parse_unit(value):
    """Convert a length with an optional mm, in or pt suffix to points.

    A bare number is taken to be in points.
    """
    if value.endswith("mm"):
        return in_to_pt(mm_to_in(float(value[:-2])))
    elif value.endswith("in"):
        return in_to_pt(float(value[:-2]))
    elif value.endswith("pt"):
        return float(value[:-2])
    else:
        return float(value)


class UserError(Exception):
    pass


class SurfaceWrapper:

    """Abstract the different output formats cairo supports.

    There are some wierd asymmetries in the cairo API. This family of
    classes attempts to smooth this over.

    In particular, there's no obvious way to create a "blank" PNG
    surface for painting. Rather, one creates an ImageSurface and writes
    it as a .png file.

    While we're here, we also abstract over the different supported
    modes of operation.
    """

    @classmethod
    def from_args(self, args):
        fmt = args.format
        if   fmt == "png": return PngSurfaceWrapper(args)
        elif fmt == "ps":  return VectorSurfaceWrapper(cairo.PSSurface, args)
        elif fmt == "pdf": return VectorSurfaceWrapper(cairo.PDFSurface, args)
        elif fmt == "svg": return VectorSurfaceWrapper(cairo.SVGSurface, args)
        raise UserError("Unsupported format: %s" % fmt)

    def configure(self, renderer):
        """Fit the gauge into the largest square of the output."""
        side = self.window.square().width / self.scale.x
        renderer.configure(side)

    def render(self, painter):
        # sequences reuse the surface, so wipe the previous frame.
        with Save(self.cr):
            self.cr.set_operator(cairo.OPERATOR_CLEAR)
            self.cr.paint()
        with Box(self.cr, self.window.square()):
            return painter.draw(self.cr, self.scale)

    def nostdin(self, painter, reading):
        painter.renderer.update(reading)
        try:
            self.render(painter)
        finally:
            self.write()

    def oneshot(self, painter, stdin):
        try:
            painter.renderer.update(parse_reading(stdin.readline()))
            self.render(painter)
        finally:
            self.write()

    def sequence(self, painter, stdin):
        raise UserError("Only PNG output supports sequences.")

    def write(self):
        """Defined by all subclasses."""
        raise NotImplementedError


class PngSurfaceWrapper(SurfaceWrapper):

    def __init__(self, args):
        width, height = args.size
        if args.dpi <= 0:
            raise UserError("DPI must be positive, not %d." % args.dpi)

        self.pixels = (pt_to_pixel(width, args.dpi), pt_to_pixel(height, args.dpi))
        self.surface = cairo.ImageSurface(cairo.Format.ARGB32, *self.pixels)
        self.window = Rect.from_top_left(Point(0, 0), *self.pixels)
        self.scale = Point(args.dpi / DP_DPI, args.dpi / DP_DPI)
        self.cr = cairo.Context(self.surface)

        if args.output is None:
            # The only reason for this is that `cairo_surface_write_to_png_stream`
            # is not exposed by pycairo.
            raise UserError("PNG does not support streaming to stdout.")
        elif args.mode == "sequence":
            self.output_dir = args.output
            self.index = -1
            os.makedirs(self.output_dir, exist_ok=True)
            self.next_image()
        else:
            self.output = args.output

    def sequence(self, painter, stdin):
        drawn = False
        for line in stdin:
            if not line.strip():
                continue
            changed = painter.renderer.update(parse_reading(line))
            # the first frame is always drawn, even at a reading of zero.
            if changed or not drawn:
                self.render(painter)
                self.write()
                self.next_image()
                drawn = True
        return self.index

    def write(self):
        log.info("writing %s", self.output)
        self.surface.write_to_png(self.output)

    def next_image(self):
        self.index += 1
        self.output = os.path.join(self.output_dir, "%d.png" % self.index)


class VectorSurfaceWrapper(SurfaceWrapper):

    """PDF, PostScript and SVG, which are all sized in points."""

    def __init__(self, surface_type, args):
        width, height = args.size

        self.output = args.output if args.output is not None else sys.stdout.buffer
        self.surface = surface_type(self.output, width, height)
        self.window = Rect.from_top_left(Point(0, 0), width, height)
        self.scale = Point(72.0 / DP_DPI, 72.0 / DP_DPI)
        self.cr = cairo.Context(self.surface)

    def write(self):
        log.info("writing %s", getattr(self.output, "name", self.output))
        self.surface.finish()


def make_parser():
    desc = "Render the magnetic field gauge to an image file."
    parser = argparse.ArgumentParser(description=desc)

    parser.add_argument(
        "-m", "--mode",
        help="Specifies output mode",
        metavar="MODE",
        choices=("nostdin", "oneshot", "sequence"),
        default="nostdin"
    )

    parser.add_argument(
        "-f", "--format",
        help="Output file format",
        metavar="FMT",
        choices=("png", "ps", "pdf", "svg"),
        required=True
    )

    parser.add_argument(
        "-o", "--output",
        help="The output file path (defaults to `stdout`)",
        metavar="FILE",
        type=str
    )

    parser.add_argument(
        "-s", "--size",
        help="The width and height of the output image in physical units",
        nargs=2,
        type=parse_unit,
        required=True
    )

    parser.add_argument(
        "-d", "--dpi",
        help="Override default DPI (PNG only).",
        metavar="DPI",
        default=96,
        type=int,
    )

    parser.add_argument(
        "-r", "--reading",
        help="Field strength to draw in nostdin mode.",
        default=0.0,
        type=float,
    )

    parser.add_argument(
        "--max-scale",
        help="Reading at which the gauge is full (overrides GAUGE_MAX_SCALE).",
        type=float,
    )

    parser.add_argument(
        "-n", "--north",
        help="Draw the outer circle and the north mark.",
        action="store_true",
    )

    parser.add_argument("--unit", help="Unit suffix of the readout.")
    parser.add_argument("--caption", help="Caption next to the gauge.")

    parser.add_argument(
        "-p", "--prefs",
        help="Preferences file to take the theme color from.",
        metavar="FILE",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
    )

    return parser


def build_painter(args, environ=None):
    style = params.gauge_style(environ).getValues()
    if args.unit is not None:
        style["unit"] = args.unit
    if args.caption is not None:
        style["caption"] = args.caption
    if args.prefs is not None:
        style = params.apply_theme(style, Prefs(args.prefs).get_theme_color())

    max_scale = args.max_scale if args.max_scale is not None else style["max_scale"]
    renderer = GaugeRenderer(
        max_scale=max_scale,
        show_circle=args.north or style["show_north"])
    return GaugePainter(renderer, style)


def main(argv=None, stdin=None):
    args = make_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S')
    stdin = stdin if stdin is not None else sys.stdin

    try:
        painter = build_painter(args)
        wrapper = SurfaceWrapper.from_args(args)
        wrapper.configure(painter.renderer)

        if   args.mode == "nostdin":  wrapper.nostdin(painter, args.reading)
        elif args.mode == "oneshot":  wrapper.oneshot(painter, stdin)
        elif args.mode == "sequence": wrapper.sequence(painter, stdin)
    except (UserError, ValueError) as e:
        print(e, file=sys.stderr)
        return -1
    return 0


if __name__ == "__main__":
    sys.exit(main())
