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



"""Where the live gauge's updates come from.

Readings arrive as JSON lines on a stream, and preference changes
arrive as file system events. Nothing here needs Gtk; the host decides
how callbacks reach its main loop.
"""

import json
import logging
import os
import sys
import threading

from watchdog.observers import Observer
from watchdog.events import LoggingEventHandler


log = logging.getLogger(__name__)


def parse_reading(line):
    """Return the field strength of one `{"field": 48.2}` line.

    Raises ValueError for anything else.
    """
    try:
        return float(json.loads(line)["field"])
    except (ValueError, TypeError, KeyError) as e:
        raise ValueError("Bad reading %r: %s" % (line.strip(), e))


def call(callback, *args):
    return callback(*args)


class ReaderThread(threading.Thread):

    """Reads readings from `stream` and hands them to `callback`.

    `post` decides which thread runs the callback. The default calls it
    right away, on the reader thread.
    """

    daemon = True

    def __init__(self, callback, stream=None, post=call):
        super().__init__()
        self.callback = callback
        self.stream = stream if stream is not None else sys.stdin
        self.post = post

    def run(self):
        for line in self.stream:
            if not line.strip():
                continue
            try:
                field = parse_reading(line)
            except ValueError as e:
                log.warning("skipping %s", e)
                continue
            self.post(self.callback, field)


class RedrawOnChange(object):

    """Feed readings to a renderer, redrawing only when one is due."""

    def __init__(self, renderer, queue_draw):
        self.renderer = renderer
        self.queue_draw = queue_draw

    def __call__(self, field):
        if self.renderer.update(field):
            self.queue_draw()
        # returning False removes the idle source.
        return False


class FileWatcher(object):

    """Fire a callback when the specified file changes."""

    def __init__(self):
        self.callbacks = {}
        self.ev_handler = LoggingEventHandler()
        self.ev_handler.on_any_event = self.modified
        self.observer = Observer()
        self.observer.daemon = True

    def start(self):
        self.observer.start()

    def watchFile(self, path, callback):
        # unlike inotify, `watchdog` cannot watch a single file for
        # changes directly. instead we must watch the parent directory
        # for all events, and filter out the ones we don't care about.
        path = os.path.abspath(path)
        parent = os.path.split(path)[0]
        self.observer.schedule(self.ev_handler, parent, recursive=False)
        self.callbacks[path] = callback

    def modified(self, event):
        if event.is_directory:
            return
        if event.event_type in ("modified", "created"):
            path = event.src_path
        elif event.event_type == "moved":
            # editors often save by renaming a temporary file.
            path = event.dest_path
        else:
            return
        path = os.fsdecode(path)
        if path in self.callbacks:
            self.callbacks[path]()
