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
import promptline.object.value
from promptline.object.segment import Glyph, Segment


# ----------------------------------------------------------------------------------------------------------------------

# Parsing errors

class DescriptorError(promptline.exception.KillCommandException):
    SNIPPET_SIZE = 10

    def __init__(self, descriptor, position, message):
        super().__init__(message)
        self.descriptor = descriptor
        self.position = position
        self.message = message

    def __str__(self):
        if self.position is None:
            return f'{self.message}: "{self.descriptor}"'
        else:
            snippet_start = max(self.position - DescriptorError.SNIPPET_SIZE, 0)
            snippet_end = self.position + DescriptorError.SNIPPET_SIZE + 1
            snippet = self.descriptor[snippet_start:snippet_end]
            if snippet_start > 0:
                snippet = '...' + snippet
            if snippet_end < len(self.descriptor):
                snippet = snippet + '...'
            return f'Error at position {self.position} of "{snippet}": {self.message}'


class MalformedDescriptor(DescriptorError):

    def __init__(self, descriptor):
        super().__init__(descriptor, None, 'Empty descriptor')


class UnterminatedColorGroup(DescriptorError):

    def __init__(self, descriptor, position):
        super().__init__(descriptor, position, 'Color group is missing its closing )')


class EmptySegment(DescriptorError):

    def __init__(self, descriptor, position):
        super().__init__(descriptor, position, 'Segment has no value')


class MalformedCondition(DescriptorError):

    def __init__(self, descriptor, position):
        super().__init__(descriptor, position, 'Condition must start with a numeric index')


class IncompleteExpression(DescriptorError):

    def __init__(self, descriptor, position):
        super().__init__(descriptor, position, 'Conditional needs at least a condition and a value, separated by ;')


# ----------------------------------------------------------------------------------------------------------------------

# Symbols of the descriptor language

ESCAPE_CHAR = '\\'
OPEN = '('
CLOSE = ')'
COLOR_SEPARATOR = ';'
FIELD_SEPARATOR = ';'
GUARD = '?'
VARIABLE = '$'
DIGITS = '0123456789'
CAPTURE = '$('
DELIMITERS = Glyph.delimiters()


def escaped(text, i):
    return i > 0 and text[i - 1] == ESCAPE_CHAR


def unescape(text):
    for delimiter in DELIMITERS:
        text = text.replace(ESCAPE_CHAR + delimiter, delimiter)
    return text


class Source(object):

    def __init__(self, text, position=0):
        self.text = text
        self.start = position
        self.end = position

    def __repr__(self):
        buffer = [self.__class__.__name__, '(']
        if self.text is not None:
            buffer.append('[')
            buffer.append(str(self.start))
            buffer.append(':')
            buffer.append(str(self.end))
            buffer.append(']')
            buffer.append(self.text[self.start:self.end])
        buffer.append(')')
        return ''.join(buffer)

    def more(self):
        return self.end < len(self.text)

    def peek(self, n=1):
        start = self.end
        end = self.end + n
        return self.text[start:end] if end <= len(self.text) else None

    def next_char(self):
        c = None
        if self.end < len(self.text):
            c = self.text[self.end]
            self.end += 1
        return c

    def match(self, symbol):
        return self.peek(len(symbol)) == symbol

    def raw(self):
        return self.text[self.start:self.end]

    def rest(self):
        return self.text[self.end:]


# ----------------------------------------------------------------------------------------------------------------------

# Tokenizing: descriptor -> raw parts

class RawPart(object):

    def __init__(self, descriptor, position, text):
        self.descriptor = descriptor
        self.position = position
        self.text = text

    def __repr__(self):
        return f'RawPart({self.position}: {self.text})'


class Tokenizer(Source):
    """Splits a descriptor after each unescaped delimiter.

    The delimiter stays attached to the part it terminates. The last part may lack
    a delimiter.
    """

    def __init__(self, descriptor):
        super().__init__(descriptor)

    def parts(self):
        if len(self.text) == 0:
            raise MalformedDescriptor(self.text)
        parts = []
        while self.more():
            self.start = self.end
            self.scan_part()
            parts.append(RawPart(self.text, self.start, self.raw()))
        return parts

    def scan_part(self):
        while True:
            c = self.next_char()
            if c is None:
                break
            elif c in DELIMITERS and not escaped(self.text, self.end - 1):
                break


# ----------------------------------------------------------------------------------------------------------------------

# Parsing a raw part

class PartParser(Source):

    def __init__(self, raw_part):
        super().__init__(raw_part.text)
        self.descriptor = raw_part.descriptor
        self.offset = raw_part.position

    def parse(self):
        foreground, background = self.color_group()
        body_position = self.offset + self.end
        body = self.rest()
        if len(body) == 0:
            raise EmptySegment(self.descriptor, body_position)
        last = len(body) - 1
        if body[last] in DELIMITERS and not escaped(body, last):
            end = Glyph.of(body[last])
            body = body[:last]
        else:
            end = Glyph.NONE
        value = unescape(body)
        expression = ValueParser(self.descriptor, value, body_position).parse()
        return Segment(foreground, background, value, expression, end)

    # Returns (foreground, background), empty strings for colors not specified.
    def color_group(self):
        if not self.match(OPEN):
            return '', ''
        close = self.text.find(CLOSE)
        if close < 0:
            raise UnterminatedColorGroup(self.descriptor, self.offset)
        colors = self.text[1:close]
        self.end = close + 1
        foreground, _, background = colors.partition(COLOR_SEPARATOR)
        return foreground, background


# ----------------------------------------------------------------------------------------------------------------------

# Parsing a value expression
#
# Grammar, alternatives tried in order:
#
#     value:
#             capture
#             guarded_capture
#             conditional
#             variable
#             literal
#
#     capture:
#             $( ...)
#
#     guarded_capture:
#             ? literal capture        (no ; before the $()
#
#     conditional:
#             ? digits test ; value [; value]
#
#     variable:
#             $ ...
#
#     literal:
#             anything else
#
# ; splits conditional fields except inside a $( ... ). Fields after the third are dropped.

class ValueParser(Source):

    def __init__(self, descriptor, text, offset):
        super().__init__(text)
        self.descriptor = descriptor
        self.offset = offset

    def parse(self):
        if self.match(CAPTURE):
            return promptline.object.value.CommandCapture(self.text)
        elif self.match(GUARD):
            capture = self.guarded_capture_start()
            return (self.conditional() if capture is None else
                    promptline.object.value.GuardedCapture(self.text,
                                                           self.text[capture:],
                                                           self.text[1:capture]))
        elif self.match(VARIABLE):
            return promptline.object.value.ShellVar(self.text)
        else:
            return promptline.object.value.Literal(self.text)

    # Position of the $( of a guarded capture, or None if this isn't one.
    def guarded_capture_start(self):
        capture = self.text.find(CAPTURE)
        separator = self.text.find(FIELD_SEPARATOR)
        return capture if capture >= 0 and (separator < 0 or capture < separator) else None

    def conditional(self):
        c = self.next_char()
        assert c == GUARD
        self.start = self.end
        while self.more() and self.peek() in DIGITS:
            self.next_char()
        index = self.raw()
        if len(index) == 0:
            raise MalformedCondition(self.descriptor, self.offset + self.end)
        fields = self.fields()
        if len(fields) < 2:
            raise IncompleteExpression(self.descriptor, self.offset)
        test = fields[0][1]
        if_true = self.branch(fields[1])
        if_false = self.branch(fields[2]) if len(fields) == 3 else None
        return promptline.object.value.Conditional(self.text, index, test, if_true, if_false)

    def branch(self, field):
        position, text = field
        return ValueParser(self.descriptor, text, self.offset + position).parse()

    # Splits the rest of the text into (position, field) pairs, at most three.
    def fields(self):
        fields = []
        depth = 0  # Nesting of $( ... ), inside which ; belongs to the command
        self.start = self.end
        while True:
            c = self.next_char()
            if c is None:
                break
            elif c == VARIABLE and self.peek() == OPEN:
                self.next_char()
                depth += 1
            elif c == OPEN and depth > 0:
                depth += 1
            elif c == CLOSE and depth > 0:
                depth -= 1
            elif c == FIELD_SEPARATOR and depth == 0:
                fields.append((self.start, self.text[self.start:self.end - 1]))
                self.start = self.end
        fields.append((self.start, self.raw()))
        return fields[:3]


# ----------------------------------------------------------------------------------------------------------------------

def parse_descriptor(descriptor, trace=None):
    """Parses one descriptor into its list of Segments."""
    raw_parts = Tokenizer(descriptor).parts()
    if trace and trace.is_enabled():
        trace.write('TOKENIZE', repr(descriptor), [raw_part.text for raw_part in raw_parts])
    segments = []
    for raw_part in raw_parts:
        segment = PartParser(raw_part).parse()
        if trace and trace.is_enabled():
            trace.write('PARSE', repr(raw_part.text), segment)
        segments.append(segment)
    return segments
