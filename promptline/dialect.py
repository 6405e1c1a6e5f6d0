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

"""Target-shell syntax.

The renderer decides what to emit and in what order. A Dialect decides how it is
spelled: color changes, capture placeholders, conditional tests, glyph characters,
and the script that installs the prompt.
"""

import promptline.object.color
from promptline.object.segment import Glyph


class Dialect(object):

    GLYPHS = {
        Glyph.RIGHT: '\ue0b0',
        Glyph.LEFT: '\ue0b2',
        Glyph.NONE: ''
    }

    def __repr__(self):
        return self.__class__.__name__

    def glyph(self, glyph):
        return Dialect.GLYPHS[glyph]

    def foreground(self, color):
        assert False

    def background(self, color):
        assert False

    # Text standing in for the output of a captured command, assigned to slot (1-based).
    def placeholder(self, slot, expression):
        assert False

    def capture_condition(self, slot):
        assert False

    def variable_condition(self, index, test):
        assert False

    def conditional(self, condition, if_true, if_false=None):
        assert False

    # Returns the lines of output installing the prompt. fragments contains the rendered text
    # of each descriptor, captures contains the captured expressions in slot order.
    def script(self, fragments, captures):
        assert False


class ZshDialect(Dialect):

    PROMPT_VAR = 'PROMPT'

    def foreground(self, color):
        return f'%F{{{color}}}'

    def background(self, color):
        return f'%K{{{color}}}'

    def placeholder(self, slot, expression):
        return f'%{slot}v'

    def capture_condition(self, slot):
        return f'{slot}(v'

    def variable_condition(self, index, test):
        return f'{index}({test}'

    def conditional(self, condition, if_true, if_false=None):
        return (f'%{condition}.{if_true}.)' if if_false is None else
                f'%{condition}.{if_true}.{if_false})')

    def script(self, fragments, captures):
        lines = [f"{ZshDialect.PROMPT_VAR}='';"]
        for fragment in fragments:
            lines.append(f"{ZshDialect.PROMPT_VAR}+=$'{fragment}';")
        # psvar is 1-based, the locals are 0-based: a0 feeds %1v.
        lines.append('precmd() {')
        for i, capture in enumerate(captures):
            lines.append(f'local a{i}={capture};')
        psvar = ' '.join(f'$a{i}' for i in range(len(captures)))
        lines.append(f'export psvar=({psvar});')
        lines.append('}')
        return lines


class AnsiDialect(Dialect):
    """Renders a prompt for immediate display on a terminal.

    Nothing is evaluated: a capture shows its command, and a conditional shows the
    branch taken when its condition holds.
    """

    ESC = '\033['
    RESET = '\033[0m'

    def foreground(self, color):
        return f'{AnsiDialect.ESC}{promptline.object.color.Color(color).sgr_foreground()}m'

    def background(self, color):
        return f'{AnsiDialect.ESC}{promptline.object.color.Color(color).sgr_background()}m'

    def placeholder(self, slot, expression):
        return expression

    def capture_condition(self, slot):
        return ''

    def variable_condition(self, index, test):
        return ''

    def conditional(self, condition, if_true, if_false=None):
        return if_true

    def script(self, fragments, captures):
        return [''.join(fragments) + AnsiDialect.RESET]


DIALECTS = {
    'zsh': ZshDialect,
    'ansi': AnsiDialect
}
