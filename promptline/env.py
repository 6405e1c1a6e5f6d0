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

import os
import sys

import promptline.cliargs
import promptline.dialect
import promptline.exception
import promptline.version

USAGE = '''Usage: promptline [OPTION]... DESCRIPTOR...

Compile prompt descriptors into zsh code installing a powerline-style prompt:

    eval "$(promptline '(white;blue)%n>' '(black;green)%~>' '(;default)>')"

Options:
    -s, --separator VALUE    Text around each segment's value (default: one space).
    -d, --dialect NAME       Output dialect: zsh (default) or ansi.
    -p, --preview            Display the prompt on this terminal instead.
    -t, --trace FILE         Append a trace of compilation to FILE (- for stderr).
    -V, --version            Print the version.
    -h, --help               Print this message.
    --                       Treat all remaining arguments as descriptors.

Environment:
    PROMPTLINE_SEPARATOR, PROMPTLINE_DIALECT, PROMPTLINE_TRACE supply defaults
    for --separator, --dialect, and --trace.'''


class Environment(object):
    """Configuration of one run, resolved from the command line and environment variables."""

    def __init__(self, descriptors, separator=' ', dialect='zsh', preview=False, trace=None):
        if preview:
            dialect = 'ansi'
        try:
            dialect_class = promptline.dialect.DIALECTS[dialect]
        except KeyError:
            raise promptline.exception.KillShellException(
                f'Unknown dialect: {dialect}. Choose one of: {", ".join(sorted(promptline.dialect.DIALECTS))}')
        self.descriptors = descriptors
        self.separator = separator
        self.dialect = dialect_class()
        self.preview = preview or dialect == 'ansi'
        self.trace = trace if trace else Trace()

    def __repr__(self):
        return (f'Environment(separator={self.separator!r}, dialect={self.dialect}, '
                f'descriptors={self.descriptors})')

    @classmethod
    def create(cls, argv):
        command_line = promptline.cliargs.CommandLine(
            USAGE,
            separator=promptline.cliargs.flag('-s', '--separator',
                                              default=os.getenv('PROMPTLINE_SEPARATOR', ' '),
                                              aliases=('--seperator',)),
            dialect=promptline.cliargs.flag('-d', '--dialect',
                                            default=os.getenv('PROMPTLINE_DIALECT', 'zsh')),
            preview=promptline.cliargs.boolean_flag('-p', '--preview'),
            trace=promptline.cliargs.flag('-t', '--trace',
                                          default=os.getenv('PROMPTLINE_TRACE')),
            version=promptline.cliargs.boolean_flag('-V', '--version'),
            help=promptline.cliargs.boolean_flag('-h', '--help'),
            descriptors=promptline.cliargs.anon())
        values = command_line.parse(argv)
        if values['help']:
            print(USAGE)
            raise promptline.exception.ExitException()
        if values['version']:
            print(promptline.version.VERSION)
            raise promptline.exception.ExitException()
        trace = Trace()
        if values['trace']:
            trace.enable(sys.stderr if values['trace'] == '-' else values['trace'])
        try:
            env = cls(descriptors=values['descriptors'],
                      separator=values['separator'],
                      dialect=values['dialect'],
                      preview=values['preview'],
                      trace=trace)
        except promptline.exception.KillShellException:
            trace.disable()
            raise
        for ignored in command_line.ignored:
            if trace.is_enabled():
                trace.write('IGNORE', ignored)
        return env


class Trace(object):

    def __init__(self):
        self.tracefile = None
        self.description = None

    def is_enabled(self):
        return self.tracefile is not None

    def enable(self, target):
        if target is sys.stderr:
            self.tracefile = sys.stderr
            self.description = 'stderr'
        else:
            try:
                self.tracefile = open(target, 'a')
                self.description = target
            except OSError as e:
                raise promptline.exception.KillShellException(
                    f'Unable to start tracing to {target}: {e}')

    def disable(self):
        if self.tracefile and self.tracefile is not sys.stderr:
            self.tracefile.close()
        self.tracefile = None
        self.description = None

    # output: result of the phase, for the subject.
    def write(self, phase, subject, output=None):
        assert self.tracefile
        if output is None:
            print(f'{phase} {subject}', file=self.tracefile, flush=True)
        else:
            print(f'{phase} {subject} -> {output}', file=self.tracefile, flush=True)
