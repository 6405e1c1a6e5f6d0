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

import promptline.object.renderable


# ----------------------------------------------------------------------------------------------------------------------

# Conditions. A condition is rendered by a dialect, since the syntax of a conditional
# test belongs to the target shell.

class CaptureCondition(promptline.object.renderable.Renderable):

    def __init__(self, slot):
        self.slot = slot

    def __eq__(self, other):
        return isinstance(other, CaptureCondition) and self.slot == other.slot

    def __hash__(self):
        return hash(self.slot)

    def render_compact(self):
        return f'CaptureCondition({self.slot})'

    def render(self, dialect):
        return dialect.capture_condition(self.slot)


class VariableCondition(promptline.object.renderable.Renderable):

    def __init__(self, index, test):
        self.index = index
        self.test = test

    def __eq__(self, other):
        return isinstance(other, VariableCondition) and (self.index, self.test) == (other.index, other.test)

    def __hash__(self):
        return hash((self.index, self.test))

    def render_compact(self):
        return f'VariableCondition({self.index}, {self.test!r})'

    def render(self, dialect):
        return dialect.variable_condition(self.index, self.test)


# ----------------------------------------------------------------------------------------------------------------------

# Value expressions

class ResolvedValue(promptline.object.renderable.Renderable):

    def __init__(self, rendered, condition=None, else_rendered=None):
        self.rendered = rendered
        self.condition = condition
        # An empty else-branch is no else-branch.
        self.else_rendered = else_rendered if else_rendered else None

    def render_compact(self):
        buffer = [repr(self.rendered)]
        if self.condition is not None:
            buffer.append(f'if {self.condition}')
        if self.else_rendered is not None:
            buffer.append(f'else {self.else_rendered!r}')
        return ' '.join(buffer)


class Value(promptline.object.renderable.Renderable):

    def __init__(self, source):
        self.source = source

    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __hash__(self):
        return hash(self.source)

    def render_compact(self):
        return f'{self.__class__.__name__}({self.source!r})'

    # renderer supplies the dialect and allocates capture slots.
    def resolve(self, renderer):
        assert False


class Literal(Value):

    def resolve(self, renderer):
        return ResolvedValue(self.source)


# Expanded by the consuming shell, so it renders verbatim, like a literal.
class ShellVar(Literal):
    pass


class CommandCapture(Value):

    def resolve(self, renderer):
        slot = renderer.capture(self.source)
        return ResolvedValue(renderer.dialect.placeholder(slot, self.source))


# ?ELSE$(command): show the command's output if it is non-empty, ELSE otherwise.
class GuardedCapture(Value):

    def __init__(self, source, command, else_text):
        super().__init__(source)
        self.command = command
        self.else_text = else_text

    def resolve(self, renderer):
        slot = renderer.capture(self.command)
        return ResolvedValue(renderer.dialect.placeholder(slot, self.command),
                             CaptureCondition(slot),
                             self.else_text)


# ?Ntest;TRUE[;FALSE]
class Conditional(Value):

    def __init__(self, source, index, test, if_true, if_false=None):
        super().__init__(source)
        self.index = index
        self.test = test
        self.if_true = if_true
        self.if_false = if_false

    def resolve(self, renderer):
        # Only the rendered text of each branch is used. Conditions nested inside a branch
        # are not composed into this one.
        rendered = self.if_true.resolve(renderer).rendered
        else_rendered = self.if_false.resolve(renderer).rendered if self.if_false else None
        return ResolvedValue(rendered, VariableCondition(self.index, self.test), else_rendered)
