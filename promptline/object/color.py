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

import promptline.exception


class ColorError(promptline.exception.KillCommandException):

    def __init__(self, message):
        super().__init__(message)


class Color:
    """A color token as written in a descriptor's color group.

    The token is passed through untouched to dialects that understand it natively (zsh).
    Parsing is only needed to render SGR escape sequences, e.g. for a preview. Accepted
    forms are the eight standard color names, default, a palette number 0-255, and #rrggbb.
    """

    PLAIN = 0x0
    BOLD = 0x1
    ITALIC = 0x2

    DEFAULT = 'default'
    NAMES = {
        'black': 0,
        'red': 1,
        'green': 2,
        'yellow': 3,
        'blue': 4,
        'magenta': 5,
        'cyan': 6,
        'white': 7
    }

    def __init__(self, token, style=PLAIN):
        if style < 0 or style > (Color.BOLD | Color.ITALIC):
            raise ColorError(f'Bad color style for {token}: {style}')
        self.token = token
        self.style = style
        self.code = None
        self.rgb = None
        self.named = False
        self.parse()

    def __repr__(self):
        bold = self.bold()
        italic = self.italic()
        style = (', BOLD | ITALIC' if bold and italic else
                 ', BOLD' if bold else
                 ', ITALIC' if italic else
                 '')
        return f'Color({self.token}{style})'

    def __eq__(self, other):
        return isinstance(other, Color) and self.token == other.token and self.style == other.style

    def __hash__(self):
        return hash((self.token, self.style))

    def bold(self):
        return self.style & Color.BOLD != 0

    def italic(self):
        return self.style & Color.ITALIC != 0

    def is_default(self):
        return self.token == Color.DEFAULT

    def sgr_foreground(self):
        return self.sgr(30, 38)

    def sgr_background(self):
        return self.sgr(40, 48)

    # r, g, b are each in the range 0-5.
    @staticmethod
    def cube(r, g, b, style=PLAIN):
        if min(r, g, b) < 0 or max(r, g, b) > 5:
            raise ColorError(f'Bad color definition (r={r}, g={g}, b={b})')
        # See https://unix.stackexchange.com/questions/124407/what-color-codes-can-i-use-in-my-ps1-prompt
        return Color(str(16 + r * 36 + g * 6 + b), style)

    # Internal

    def parse(self):
        token = self.token.strip().lower()
        if token == Color.DEFAULT:
            self.token = token
        elif token in Color.NAMES:
            self.token = token
            self.code = Color.NAMES[token]
            self.named = True
        elif token.isdigit():
            code = int(token)
            if code > 255:
                raise ColorError(f'Color number out of range 0-255: {self.token}')
            self.code = code
        elif token.startswith('#') and len(token) == 7:
            try:
                self.rgb = tuple(int(token[i:i + 2], 16) for i in (1, 3, 5))
            except ValueError:
                raise ColorError(f'Malformed color: {self.token}')
        else:
            raise ColorError(f'Unknown color: {self.token}')

    def sgr(self, base, extended):
        return (str(base + 9) if self.is_default() else
                f'{base + self.code}' if self.named else
                f'{extended};2;{self.rgb[0]};{self.rgb[1]};{self.rgb[2]}' if self.rgb else
                f'{extended};5;{self.code}')
