# This file is part of Promptline.
#
# Promptline is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the
# Free Software Foundation, either version 3 of the License, (or at your
# option) any later version.
#
# Promptline is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
# for more details.
#
# You should have received a copy of the GNU General Public License
# along with Promptline.  If not, see <https://www.gnu.org/licenses/>.

from enum import Enum

import promptline.object.renderable


class Glyph(Enum):
    RIGHT = '>'
    LEFT = '<'
    NONE = '|'

    def __str__(self):
        return self.name

    # Characters that end a segment, each selecting the glyph drawn after it.
    @staticmethod
    def delimiters():
        return '<>|'

    @staticmethod
    def of(delimiter):
        return (Glyph.RIGHT if delimiter == '>' else
                Glyph.LEFT if delimiter == '<' else
                Glyph.NONE)


class Segment(promptline.object.renderable.Renderable):
    """One colored, glyph-terminated unit of prompt output.

    foreground and background are color tokens, empty when unspecified. value is the
    value expression as written (delimiter escapes removed), and expression is its
    parsed form, a promptline.object.value.Value. end is the Glyph drawn between this
    segment and the next one.
    """

    def __init__(self, foreground, background, value, expression, end):
        self.__dict__.update(foreground=foreground,
                             background=background,
                             value=value,
                             expression=expression,
                             end=end)

    def __setattr__(self, key, value):
        raise AttributeError(f'Segment is immutable, cannot set {key}')

    def __eq__(self, other):
        return (isinstance(other, Segment) and
                self.foreground == other.foreground and
                self.background == other.background and
                self.value == other.value and
                self.end == other.end)

    def __hash__(self):
        return hash((self.foreground, self.background, self.value, self.end))

    def render_compact(self):
        return f'Segment(fg={self.foreground}, bg={self.background}, value={self.value!r}, end={self.end})'
