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

"""Application preferences, kept in a JSON file.

There is no shared instance: whoever needs preferences is handed a
`Prefs` built by the host.
"""

import json
import logging
import pathlib


log = logging.getLogger(__name__)

DEFAULT_PATH = pathlib.Path.home() / ".magfield_gauge.json"

KEY_IS_FIRST_RUN = "is_first_run"
KEY_THEME_COLOR = "theme_color"
KEY_KEEP_SCREEN_ON = "keep_screen_on"
KEY_ENERGY_SAVING_MODE = "is_energy_saving_mode"


class Prefs(object):

    """Key-value preferences backed by the JSON file at `path`.

    Every setter writes the file straight away.
    """

    def __init__(self, path=None):
        self.path = pathlib.Path(path) if path is not None else DEFAULT_PATH
        self.values = {}
        self.reload()

    def reload(self):
        """Re-read the file. A missing or unreadable file means defaults."""
        if not self.path.exists():
            self.values = {}
            return
        try:
            values = json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            log.warning("ignoring unreadable prefs %s: %s", self.path, e)
            values = {}
        if not isinstance(values, dict):
            log.warning("ignoring prefs %s: not a JSON object", self.path)
            values = {}
        self.values = values

    def save(self):
        self.path.write_text(json.dumps(self.values, indent=2))

    def put(self, key, value):
        self.values[key] = value
        self.save()

    def get(self, key, default):
        """The value at `key`, or `default` when it is missing or mistyped."""
        value = self.values.get(key, default)
        # exact match, so a bool never passes for a theme position.
        if type(value) is not type(default):
            log.warning("ignoring %s=%r in %s: expected %s",
                        key, value, self.path, type(default).__name__)
            return default
        return value

    def is_first_run(self):
        return self.get(KEY_IS_FIRST_RUN, True)

    def first_run_executed(self):
        self.put(KEY_IS_FIRST_RUN, False)

    def set_app_theme_color(self, position):
        self.put(KEY_THEME_COLOR, int(position))

    def get_theme_color(self):
        return self.get(KEY_THEME_COLOR, 0)

    def set_keep_screen_on(self, on):
        self.put(KEY_KEEP_SCREEN_ON, bool(on))

    def is_keep_screen_on(self):
        return self.get(KEY_KEEP_SCREEN_ON, False)

    def set_energy_saving_mode(self, on):
        self.put(KEY_ENERGY_SAVING_MODE, bool(on))

    def is_energy_saving_mode(self):
        return self.get(KEY_ENERGY_SAVING_MODE, False)
