"""Line source for the parser.

Reader wraps any iterable of text (or bytes) lines and hands them out one at
a time, with one-line lookahead and push-back.  The underlying iterable is
consumed lazily and never restarted.
"""

import io

from basicyaml.error import Mark, ReaderError, ScannerError


def strip_comment(text):
    """Remove a '#' and everything after it. Quotes are not honoured."""
    pos = text.find('#')
    if pos != -1:
        return text[:pos]
    return text


class Line:
    """One physical source line.

    Attributes:
        number: 1-based line number
        raw: the line without its line terminator
        text: the line with any trailing comment removed
        content: text with surrounding whitespace removed
    """

    __slots__ = ('name', 'number', 'raw', 'text', 'content', '_indent')

    def __init__(self, name, number, raw):
        self.name = name
        self.number = number
        self.raw = raw
        self.text = strip_comment(raw)
        self.content = self.text.strip(' \t')
        self._indent = None

    @property
    def blank(self):
        return not self.content

    @property
    def indent(self):
        """Number of leading spaces; a tab in the indentation is an error."""
        if self._indent is None:
            indent = 0
            for ch in self.text:
                if ch == ' ':
                    indent += 1
                elif ch == '\t':
                    raise ScannerError(
                        None, None,
                        "found a tab character in indentation; "
                        "tabs are not allowed", self.mark(indent))
                else:
                    break
            self._indent = indent
        return self._indent

    def mark(self, column=None):
        pointer = column if column is not None and column <= len(self.raw) else None
        return Mark(self.name, None, self.number - 1, column,
                    buffer=self.raw if pointer is not None else None,
                    pointer=pointer)

    def __repr__(self):
        return "Line(%d, %r)" % (self.number, self.raw)


class Reader:
    """Hands out Line objects from a lazy line iterable."""

    def __init__(self, lines, name='<string>', encoding='utf-8'):
        self.name = name
        self.encoding = encoding
        self._lines = iter(lines)
        self._number = 0
        self._pending = []

    @classmethod
    def from_string(cls, text, name='<string>'):
        return cls(io.StringIO(text), name=name)

    def _decode(self, raw):
        if isinstance(raw, bytes):
            try:
                raw = raw.decode(self.encoding)
            except UnicodeDecodeError as exc:
                raise ReaderError(
                    None, None,
                    "cannot decode line as %s: %s" % (self.encoding, exc.reason),
                    Mark(self.name, None, self._number - 1, None)) from exc
        return raw.rstrip('\r\n')

    def next_line(self):
        """Return the next Line, or None at end of input."""
        if self._pending:
            return self._pending.pop()
        try:
            raw = next(self._lines)
        except StopIteration:
            return None
        self._number += 1
        return Line(self.name, self._number, self._decode(raw))

    def push_back(self, line):
        """Return a line to the reader; it will be handed out next."""
        self._pending.append(line)

    def peek_content(self):
        """Return the next non-blank line without consuming anything."""
        skipped = []
        line = self.next_line()
        while line is not None and line.blank:
            skipped.append(line)
            line = self.next_line()
        if line is not None:
            self.push_back(line)
        for blank in reversed(skipped):
            self.push_back(blank)
        return line

    def __iter__(self):
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line
