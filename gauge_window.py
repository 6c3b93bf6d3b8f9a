#!/usr/bin/python3
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


"""
Live magnetic field gauge.

Reads field strengths as JSON lines on stdin and shows them on the
gauge. Try:

    ./fake_field.py | ./gauge_window.py
"""

import argparse
import logging

import gi
gi.require_version("Gtk", "3.0")
gi.require_foreign("cairo")
from gi.repository import GLib
from gi.repository import Gtk

from gauge import GaugeRenderer
from painter import GaugePainter
from prefs import Prefs
from sources import FileWatcher, ReaderThread, RedrawOnChange
import params


log = logging.getLogger(__name__)


class GUI(object):

    """Gtk window hosting one gauge."""

    def __init__(self, prefs, style):
        self.prefs = prefs
        self.base_style = style
        self.renderer = GaugeRenderer(
            max_scale=style["max_scale"],
            show_circle=style["show_north"])
        self.painter = GaugePainter(self.renderer, style)

        self.da = Gtk.DrawingArea()
        self.da.connect('draw', self.draw)
        self.da.set_size_request(160, 160)

        self.reader = ReaderThread(
            RedrawOnChange(self.renderer, self.da.queue_draw),
            post=GLib.idle_add)
        self.fw = FileWatcher()
        self.fw.watchFile(str(prefs.path), self.onPrefsChanged)

        self.window = Gtk.Window()
        self.window.set_title("Magnetic field")
        self.window.connect("destroy", Gtk.main_quit)
        self.window.add(self.da)
        self.window.resize(480, 480)

        if prefs.is_first_run():
            log.info("first run, preferences at %s", prefs.path)
            prefs.first_run_executed()
        self.applyPrefs()
        self.window.show_all()

    def applyPrefs(self):
        self.painter.style = params.apply_theme(
            self.base_style, self.prefs.get_theme_color())
        self.da.queue_draw()
        return False

    def onPrefsChanged(self):
        # runs on the observer thread; prefs are only touched on the main loop.
        GLib.idle_add(self.reloadPrefs)

    def reloadPrefs(self):
        log.info("reloading: %s", self.prefs.path)
        self.prefs.reload()
        return self.applyPrefs()

    def run(self):
        self.fw.start()
        self.reader.start()
        Gtk.main()

    def draw(self, widget, cr):
        alloc = widget.get_allocation()
        # the gauge always fills a square.
        self.renderer.configure(min(alloc.width, alloc.height))
        self.painter.draw(cr)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.split("\n\n")[0].strip())
    parser.add_argument("-p", "--prefs", help="Preferences file", metavar="FILE")
    parser.add_argument("-n", "--north", action="store_true",
                        help="Show the outer circle and north mark.")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S')

    style = params.gauge_style().getValues()
    if args.north:
        style["show_north"] = True
    GUI(Prefs(args.prefs), style).run()


if __name__ == "__main__":
    main()
