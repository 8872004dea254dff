"""Error classes for basicyaml.

Provides YAMLError, MarkedYAMLError and Mark, following PyYAML's API so
callers that already handle PyYAML errors can handle ours the same way.
"""


class Mark:
    """Represents a position in a YAML stream.

    Attributes:
        name: The name of the stream (e.g., filename or '<string>')
        index: Character index in the stream, or None when unknown
        line: Line number (0-indexed)
        column: Column number (0-indexed), or None when unknown
        buffer: Optional source line containing the mark
        pointer: Optional pointer into the buffer
    """

    def __init__(self, name, index, line, column, buffer=None, pointer=None):
        self.name = name
        self.index = index
        self.line = line
        self.column = column
        self.buffer = buffer
        self.pointer = pointer

    def get_snippet(self, indent=4, max_length=75):
        """Return the source line with a caret under the marked column.

        The buffer is a single source line; a line longer than max_length
        is cut around the pointer and the cut sides are shown as ' ... '.
        """
        if self.buffer is None or self.pointer is None:
            return None
        half = max_length // 2
        start = max(self.pointer - half, 0)
        end = min(self.pointer + half, len(self.buffer))
        head = ' ... ' if start else ''
        tail = ' ... ' if end < len(self.buffer) else ''
        caret = indent + len(head) + self.pointer - start
        return '%s%s%s%s\n%s^' % (' ' * indent, head, self.buffer[start:end],
                                  tail, ' ' * caret)

    def __str__(self):
        where = '  in "%s", line %d' % (self.name, self.line + 1)
        if self.column is not None:
            where += ', column %d' % (self.column + 1)
        snippet = self.get_snippet()
        if snippet is None:
            return where
        return where + ':\n' + snippet

    def __repr__(self):
        return "Mark(%r, line=%d, column=%r)" % (
            self.name, self.line + 1,
            None if self.column is None else self.column + 1)


class YAMLError(Exception):
    """Base exception for basicyaml errors."""
    pass


class MarkedYAMLError(YAMLError):
    """YAML error with position marks.

    Attributes:
        context: Description of the parsing context
        context_mark: Mark pointing to the context
        problem: Description of the problem
        problem_mark: Mark pointing to the problem
        note: Additional note about the error
    """

    def __init__(self, context=None, context_mark=None,
                 problem=None, problem_mark=None, note=None):
        super().__init__(problem if problem is not None else context)
        self.context = context
        self.context_mark = context_mark
        self.problem = problem
        self.problem_mark = problem_mark
        self.note = note

    @property
    def line(self):
        """1-based line number of the problem, or None."""
        mark = self.problem_mark or self.context_mark
        if mark is None:
            return None
        return mark.line + 1

    @property
    def column(self):
        """1-based column of the problem, or None when not meaningful."""
        mark = self.problem_mark or self.context_mark
        if mark is None or mark.column is None:
            return None
        return mark.column + 1

    def _shows_context_mark(self):
        if self.context_mark is None:
            return False
        if self.problem is None or self.problem_mark is None:
            return True
        context, problem = self.context_mark, self.problem_mark
        return (context.name, context.line, context.column) != \
            (problem.name, problem.line, problem.column)

    def __str__(self):
        parts = [
            self.context,
            self.context_mark if self._shows_context_mark() else None,
            self.problem,
            self.problem_mark,
            self.note,
        ]
        return '\n'.join(str(part) for part in parts if part is not None)


class ReaderError(MarkedYAMLError):
    """A line source could not be opened or decoded."""
    pass


class NodeTypeError(YAMLError):
    """A throwing accessor was used on a node of the wrong kind."""
    pass


class ScannerError(MarkedYAMLError):
    """YAML scanner error (tabs, block scalar headers, quoting)."""
    pass


class ParserError(MarkedYAMLError):
    """YAML parser error (structure, indentation, flow punctuation)."""
    pass
