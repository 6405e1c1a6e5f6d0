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

END_OF_FLAGS = '--'


class Arg(object):

    def __init__(self, default):
        self.var = None  # Set by CommandLine
        self.default = default

    def is_anon(self):
        return False

    def takes_value(self):
        return False

    def has_flag(self, flag):
        return False


class AnonArg(Arg):

    def __init__(self):
        super().__init__(default=None)

    def __repr__(self):
        return 'anon()'

    def is_anon(self):
        return True


class FlagArg(Arg):

    def __init__(self, flags, default):
        super().__init__(default)
        for flag in flags:
            if len(flag) < 2 or flag[0] != '-' or flag in ('-', END_OF_FLAGS):
                raise promptline.exception.KillShellException(f'Invalid flag: {flag}')
        self.flags = flags

    def __repr__(self):
        return '|'.join(self.flags)

    def takes_value(self):
        return True

    def has_flag(self, flag):
        return flag in self.flags


class BooleanFlagArg(FlagArg):

    def __repr__(self):
        return f'boolean_flag({super().__repr__()})'

    def takes_value(self):
        return False


class CommandLine(object):
    """Parses argv into a dict keyed by the names given to the flags.

    Flags not known to the CommandLine are skipped, and collected in ignored. Everything that
    isn't a flag, or a flag's value, goes to the anon() arg, in order. A flag that takes
    a value consumes the next token, even one that looks like a flag.
    """

    def __init__(self, usage, **var_arg):
        self.usage = usage
        self.var_arg = var_arg
        self.ignored = []
        for var, arg in var_arg.items():
            arg.var = var

    def parse(self, argv):
        values = {arg.var: arg.default for arg in self.var_arg.values()}
        anon = []
        flags_done = False
        tokens = iter(argv)
        for token in tokens:
            if flags_done or not CommandLine.isflag(token):
                anon.append(token)
            elif token == END_OF_FLAGS:
                # Everything after -- is anonymous, e.g. descriptors starting with -
                flags_done = True
            else:
                arg = self.arg_of(token)
                if arg is None:
                    self.ignored.append(token)
                elif arg.takes_value():
                    value = next(tokens, None)
                    if value is None:
                        self.report_error(f'Value missing for flag: {token}')
                    values[arg.var] = value
                else:
                    values[arg.var] = True
        for arg in self.var_arg.values():
            if arg.is_anon():
                values[arg.var] = anon
        return values

    def arg_of(self, flag):
        for arg in self.var_arg.values():
            if arg.has_flag(flag):
                return arg
        return None

    def report_error(self, message):
        raise promptline.exception.KillShellException(f'{message}\n{self.usage}')

    @staticmethod
    def isflag(token):
        return len(token) > 1 and token.startswith('-')


def flag(*flags, default=None, aliases=()):
    return FlagArg(flags + tuple(aliases), default)


def boolean_flag(*flags):
    return BooleanFlagArg(flags, False)


def anon():
    return AnonArg()
