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

"""Exceptions that terminate a promptline run.

Nothing is written to stdout once one of these has been raised: the
prompt script is assembled completely before any of it is printed, so a
failure leaves the consuming shell's prompt untouched.
"""


# Exception for terminating compilation of the prompt. By extending BaseException,
# this exception cannot be caught by "except Exception".
class KillCommandException(BaseException):

    def __init__(self, cause):
        super().__init__(cause)
        self.cause = cause

    def __str__(self):
        return str(self.cause)


# Bad command line or environment. Raised before any descriptor is looked at.
class KillShellException(BaseException):

    def __init__(self, cause):
        super().__init__(cause)
        self.cause = cause

    def __str__(self):
        return str(self.cause)


# Raised by --help and --version, after their output has been printed.
class ExitException(BaseException):
    pass
