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


import math


class Helper(object):

    """Wraps a cairo context in a higher-level API.

    New Primitives:
    - circle
    - arc in degrees, clockwise from the positive x axis
    - polygon
    - center text

    Transform Context Managers (so you cannot forget `restore()`):
    - save

    Wrapper methods which take Point objects instead of x/y pairs:
    - move_to
    - line_to
    """

    def __init__(self, cr):
        self.cr = cr

    def circle(self, center, radius):
        self.cr.new_sub_path()
        self.cr.arc(center.x, center.y, radius, 0, 2 * math.pi)

    def arc(self, center, radius, start, sweep):
        """Add an arc given as a start angle and a sweep, both in degrees.

        Cairo's y axis points down, so positive angles run clockwise on
        screen, which is the convention ArcSpan uses.
        """
        self.cr.new_sub_path()
        self.cr.arc(
            center.x, center.y, radius,
            math.radians(start),
            math.radians(start + sweep))

    def polygon(self, *points, close=True):
        self.move_to(points[0])
        for point in points[1:]:
            self.line_to(point)
        if close:
            self.cr.close_path()

    def center_text(self, text, font, size):
        """Show `text` horizontally centered on the current point.

        The current point is the baseline of the text, so labels sit on
        their anchor the same way regardless of glyph height.
        """
        with self.save():
            self.cr.select_font_face(font)
            self.cr.set_font_size(size)
            extents = self.cr.text_extents(text)
            x, y = self.cr.get_current_point()
            self.cr.move_to(x - extents.x_advance * 0.5, y)
            self.cr.show_text(text)

    def move_to(self, point):
        self.cr.move_to(*point)

    def line_to(self, point):
        self.cr.line_to(*point)

    def save(self):
        return Save(self.cr)


class Point(object):

    """Reasonably terse 2D Point class."""

    def __init__(self, x, y): self.x = float(x) ; self.y = float(y)
    def __eq__(self, o):
        return isinstance(o, Point) and (self.x, self.y) == (o.x, o.y)
    def __repr__(self):       return "(%g,%g)" % (self.x, self.y)
    def __iter__(self):       yield  self.x ; yield self.y
    def __hash__(self):       return hash((self.x, self.y))

    def binop(func):
        def impl(self, x):
            o = x if isinstance(x, Point) else Point(x, x)
            return Point(func(self.x, o.x), func(self.y, o.y))
        return impl

    __add__ = binop(lambda a, b: a + b)

    @classmethod
    def from_polar(cls, r, degrees):
        """Point at distance `r` and angle `degrees` from the origin."""
        theta = math.radians(degrees)
        return Point(r * math.cos(theta), r * math.sin(theta))


class Rect(object):

    """Rectangle operations for layout."""

    def __init__(self, center, width, height):
        self.center = center
        self.width = width
        self.height = height

    @classmethod
    def from_top_left(self, top_left, width, height):
        return Rect(
            Point(top_left.x + width * 0.5, top_left.y + height * 0.5),
            width, height
        )

    def __repr__(self):
        return "(%s, %g, %g)" % (self.center, self.width, self.height)

    def northwest(self):
        return self.center + Point(-0.5 * self.width, -0.5 * self.height)

    def square(self):
        """The largest square sharing this rectangle's top-left corner."""
        side = min(self.width, self.height)
        return Rect.from_top_left(self.northwest(), side, side)


class Save(object):

    """A context manager which Keeps calls to save() and restore() balanced."""

    def __init__(self, cr):
        self.cr = cr

    def __enter__(self):
        self.cr.save()

    def __exit__(self, unused1, unused2, unused3):
        self.cr.restore()


class Box(object):

    """A context manager which translates to the given rectangle.

    Implicitly calls save() / and restore. If clip is True, also clips
    to the rectangle. Inside the block the origin is the rectangle's
    top-left corner.
    """

    def __init__(self, cr, bounds, clip=True):
        self.cr = cr
        self.bounds = Rect.from_top_left(Point(0, 0), bounds.width, bounds.height)
        (self.x, self.y) = bounds.northwest()
        self.width = bounds.width
        self.height = bounds.height
        self.clip = clip

    def __enter__(self):
        self.cr.save()
        if self.clip:
            self.cr.rectangle(self.x, self.y, self.width, self.height)
            self.cr.clip()
        self.cr.translate(self.x, self.y)
        return self.bounds

    def __exit__(self, unused1, unused2, unused3):
        self.cr.restore()
