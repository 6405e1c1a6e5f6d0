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

import sys

import promptline.object.color

ERROR_COLOR = promptline.object.color.Color.cube(5, 0, 0, promptline.object.color.Color.BOLD)


def colorize(s, color):
    if color is None:
        return s
    bold = color.bold()
    italic = color.italic()
    style = ('\033[1m\033[3m' if bold and italic else
             '\033[1m' if bold else
             '\033[3m' if italic else
             '\033[0m')
    return f'{style}\033[{color.sgr_foreground()}m{s}\033[0m'


# Utility to print to stderr, flushing stdout first, to minimize weird ordering due to buffering.
def print_to_stderr(message, color=ERROR_COLOR):
    sys.stdout.flush()
    message = str(message)
    if color and sys.stderr.isatty():
        message = colorize(message, color)
    print(message, file=sys.stderr, flush=True)
