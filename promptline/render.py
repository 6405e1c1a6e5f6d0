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

import promptline.dialect
from promptline.object.segment import Glyph

ESCAPED_NEWLINE = '\\n'
NEWLINE = '\n'


def expand(text):
    return text.replace(ESCAPED_NEWLINE, NEWLINE)


class RenderState(object):

    def __init__(self):
        self.foreground = ''
        self.background = ''
        self.last_glyph = Glyph.NONE
        # captures[i] is assigned to slot i + 1.
        self.captures = []

    def __repr__(self):
        return (f'RenderState(fg={self.foreground}, bg={self.background}, '
                f'last={self.last_glyph}, captures={self.captures})')


class Renderer(object):
    """Renders segments, in order, into dialect-specific text.

    Each segment's output depends on its predecessor: the glyph closing the previous
    segment is drawn at the start of this one, and color changes are only emitted
    when a color actually changes. So one Renderer must see every segment of a prompt,
    in order, exactly once.
    """

    def __init__(self, dialect=None, separator=' ', trace=None):
        self.dialect = dialect if dialect else promptline.dialect.ZshDialect()
        self.separator = separator
        self.trace = trace
        self.state = RenderState()

    def __repr__(self):
        return f'Renderer({self.dialect}, {self.state})'

    # Registers a captured expression, returning its slot.
    def capture(self, expression):
        self.state.captures.append(expression)
        slot = len(self.state.captures)
        if self.tracing():
            self.trace.write('CAPTURE', expression, slot)
        return slot

    def render_descriptor(self, segments):
        return ''.join(self.render(segment) for segment in segments)

    def render(self, segment):
        resolved = segment.expression.resolve(self)
        value = expand(resolved.rendered)
        sep = self.separator
        end = self.boundary(segment)
        fore = self.change_foreground(segment.foreground)
        if value == NEWLINE:
            back = self.change_foreground(segment.background)
            fragment = f'{end}{fore}{value}{back}'
        elif resolved.condition is None:
            back = self.change_foreground(segment.background)
            fragment = f'{end}{fore}{sep}{value}{sep}{back}'
        elif resolved.else_rendered is None:
            back = self.change_foreground(segment.background)
            fragment = self.dialect.conditional(resolved.condition.render(self.dialect),
                                                f'{end}{fore}{sep}{value}{sep}{back}')
        else:
            condition = self.dialect.conditional(resolved.condition.render(self.dialect),
                                                 value,
                                                 resolved.else_rendered)
            back = self.change_foreground(segment.background)
            fragment = f'{end}{fore}{sep}{condition}{sep}{back}'
        if self.tracing():
            self.trace.write('RENDER', segment, repr(fragment))
        return fragment

    def script(self, fragments):
        return self.dialect.script(fragments, self.state.captures)

    # The transition from the previous segment's background to this one's, with the
    # previous segment's glyph drawn in between.
    def boundary(self, segment):
        glyph = self.dialect.glyph(self.state.last_glyph)
        if self.state.last_glyph is Glyph.LEFT:
            # The glyph points back, so it is drawn in the new background color.
            boundary = (self.change_foreground(segment.background) +
                        glyph +
                        self.change_background(segment.background))
        else:
            boundary = self.change_background(segment.background) + glyph
        self.state.last_glyph = segment.end
        return boundary

    # Color changes are idempotent: nothing is emitted for an unspecified color or for the
    # color already in effect.

    def change_foreground(self, color):
        if color == '' or color == self.state.foreground:
            return ''
        self.state.foreground = color
        return self.dialect.foreground(color)

    def change_background(self, color):
        if color == '' or color == self.state.background:
            return ''
        self.state.background = color
        return self.dialect.background(color)

    def tracing(self):
        return self.trace is not None and self.trace.is_enabled()
