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

"""Style parameters for the gauge, overridable from the environment.

Each parameter has a default. Setting `GAUGE_<NAME>` in the
environment replaces it; the text is parsed by the parameter type, so
`GAUGE_FIELD_COLOR=ff00c8a0` or `GAUGE_SHOW_NORTH=true` work as
expected.
"""

from collections import OrderedDict
import logging
import os

import cairo


log = logging.getLogger(__name__)


class Parameter(object):

    """A uniform interface for creating parameters from the environment."""

    def require(self, value, allowed_types):
        """Raise an error if `value` is not one of `allowed_types`.

        `allowed_types` may be a tuple or a single type.
        """

        if not isinstance(allowed_types, tuple):
            allowed_types = (allowed_types,)

        if not isinstance(value, allowed_types):
            raise TypeError("Expected one of %s, got %r." % (
                ", ".join(repr(t) for t in allowed_types),
                value
            ))

    def parse(self, text):
        raise NotImplementedError


class ColorParameter(Parameter):

    """An RGBA Color value."""

    def __init__(self, r=0, g=0, b=0, a=1.0):
        self.require(r, (int, float))
        self.require(g, (int, float))
        self.require(b, (int, float))
        self.require(a, (int, float))
        self.default = cairo.SolidPattern(r, g, b, a)

    def parse(self, text):
        # AARRGGBB, alpha first.
        text = text.lstrip("#")
        if not len(text) == 8:
            raise ValueError("Could not parse as color: " + text)

        a = int(text[0:2], 16) / 0xFF
        r = int(text[2:4], 16) / 0xFF
        g = int(text[4:6], 16) / 0xFF
        b = int(text[6:8], 16) / 0xFF
        return cairo.SolidPattern(r, g, b, a)


class FontParameter(Parameter):

    """A font family name for the cairo toy text API."""

    def __init__(self, default="sans-serif"):
        self.require(default, str)
        self.default = default

    def parse(self, text):
        return text


class NumericParameter(Parameter):

    """A scalar numeric value, with a finite range."""

    def __init__(self, lower, upper, default):
        allowed = (int, float)
        self.require(lower, allowed)
        self.require(upper, allowed)
        self.require(default, allowed)
        if not lower <= default <= upper:
            raise ValueError(
                "{} not in range [{}, {}]".format(default, lower, upper))
        self.lower = lower
        self.upper = upper
        self.default = default

    def parse(self, text):
        value = type(self.default)(text)
        if self.lower <= value <= self.upper:
            return value
        else:
            raise ValueError(
                "{} not in range [{}, {}]".format(value, self.lower, self.upper)
            )


class TextParameter(Parameter):

    """An arbitrary text string."""

    def __init__(self, default=""):
        self.require(default, str)
        self.default = default

    def parse(self, text):
        return text


class ToggleParameter(Parameter):

    """A parameter representing a binary choice."""

    def __init__(self, default):
        self.require(default, bool)
        self.default = default

    def parse(self, text):
        if text == "true":
            return True
        elif text == "false":
            return False

        raise ValueError("Could not parse {} as bool".format(text))


class ParameterGroup(object):

    """Manages the parameters a painter or host reads its style from."""

    def __init__(self, prefix="GAUGE_", environ=None):
        self.params = OrderedDict()
        self.prefix = prefix
        self.environ = os.environ if environ is None else environ

    def define(self, name, param):
        """Define a new parameter."""

        if name in self.params:
            raise ValueError("Parameter %s already defined" % name)
        self.params[name] = param

    def getValues(self):
        """Get the current value for each parameter, as dict."""
        return {
            name: self.getParamValue(name, param)
            for name, param in self.params.items()
        }

    def getParamValue(self, name, param):
        key = self.prefix + name.upper()
        if key in self.environ:
            log.debug("%s overridden from environment", key)
            return param.parse(self.environ[key])
        else:
            return param.default


def gauge_style(environ=None):
    """The parameters `painter.GaugePainter` draws with."""
    params = ParameterGroup(environ=environ)
    params.define("outer_circle_color", ColorParameter(0.62, 0.62, 0.62))
    params.define("background_color", ColorParameter(0.26, 0.26, 0.26))
    params.define("text_color", ColorParameter(0.88, 0.88, 0.88))
    params.define("field_color", ColorParameter(0.0, 0.78, 0.63))
    params.define("north_mark_color", ColorParameter(0.9, 0.22, 0.21))
    params.define("outer_circle_width", NumericParameter(0.0, 20.0, 1.0))
    params.define("arc_width", NumericParameter(0.0, 40.0, 6.0))
    params.define("text_size", NumericParameter(1.0, 72.0, 10.0))
    params.define("font", FontParameter("sans-serif"))
    params.define("unit", TextParameter("μT"))
    params.define("caption", TextParameter("Magnetic field"))
    params.define("max_scale", NumericParameter(1, 10000, 160))
    params.define("show_north", ToggleParameter(False))
    return params


# Field colors selectable from the preferences' theme position.
THEME_COLORS = (
    (0.0, 0.78, 0.63),
    (0.13, 0.59, 0.95),
    (1.0, 0.6, 0.0),
    (0.61, 0.15, 0.69),
    (0.3, 0.69, 0.31),
)


def apply_theme(style, position):
    """Replace the field color of `style` with the theme at `position`.

    Positions outside the palette fall back to the first theme.
    """
    if type(position) is not int or not 0 <= position < len(THEME_COLORS):
        log.warning("unknown theme position %r", position)
        position = 0
    style = dict(style)
    style["field_color"] = cairo.SolidPattern(*THEME_COLORS[position])
    return style
