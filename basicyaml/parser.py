"""Indentation stack machine.

The parser reads the source one line at a time and keeps a stack of frames,
each pairing an open container with the indentation of the line that opened
it.  Indentation deltas and the leading punctuation of each line decide
whether it adds a mapping entry, a sequence item, continues the previous
plain scalar, or opens a nested block.  Block scalars and flow collections
are handed off to the scanner and flow modules.
"""

import logging

from basicyaml.composer import Composer, MAPPING, SCALAR, SEQUENCE
from basicyaml.error import ParserError
from basicyaml.flow import is_flow_collection, parse_flow
from basicyaml.reader import Reader
from basicyaml.scanner import (
    is_block_header,
    parse_block_header,
    scan_block_scalar,
    unquote,
)


logger = logging.getLogger(__name__)


def is_sequence_item(content):
    """A sequence item starts with '-' followed by whitespace or nothing."""
    return content[:1] == '-' and (len(content) == 1 or content[1] in ' \t')


def find_entry_colon(content):
    """Return the position of a 'key: value' colon, or -1.

    The colon must be followed by whitespace or end the text; quoted and
    flow scalars never start an entry.
    """
    if content[:1] in ('"', '\'', '[', '{'):
        return -1
    pos = content.find(':')
    while pos != -1:
        if pos + 1 == len(content) or content[pos + 1] in ' \t':
            return pos
        pos = content.find(':', pos + 1)
    return -1


class Frame:
    """An open container on the parser stack.

    indent is the indentation of the line that opened the container; lines
    belonging to it must be indented deeper.  child_indent is fixed by the
    first line resolved into the container.  A compact frame is a sequence
    opened by ``key:`` whose items may sit at the key's own indentation.
    """

    __slots__ = ('index', 'indent', 'child_indent', 'compact')

    def __init__(self, index, indent, child_indent=None, compact=False):
        self.index = index
        self.indent = indent
        self.child_indent = child_indent
        self.compact = compact

    def __repr__(self):
        return "Frame(%d, indent=%d, child_indent=%r)" % (
            self.index, self.indent, self.child_indent)


class Parser:
    """Parses the lines of one document into a Mapping-rooted node tree."""

    def __init__(self, reader):
        self.reader = reader
        self.composer = Composer()
        self.root = self.composer.new_collection(MAPPING)
        self.frames = [Frame(self.root, -1)]
        self.last_scalar = None

    def parse(self):
        """Consume the whole input and return the frozen root MappingNode."""
        lines = 0
        for line in self.reader:
            if line.blank:
                continue
            lines += 1
            self.parse_line(line)
        root = self.composer.freeze(self.root)
        logger.debug("parsed %s: %d content lines, %d nodes",
                     self.reader.name, lines, len(self.composer.drafts))
        return root

    def parse_line(self, line):
        indent = line.indent
        content = line.content
        item = is_sequence_item(content)

        self.pop_frames(indent, item)

        if self.last_scalar is not None and not item and ':' not in content:
            self.composer.extend_scalar(self.last_scalar, '\n' + content)
            return
        self.last_scalar = None

        frame = self.frames[-1]
        if frame.child_indent is None:
            frame.child_indent = indent
        elif indent != frame.child_indent:
            raise ParserError(
                "while parsing a block collection",
                self.composer.mark(frame.index),
                "found inconsistent indentation: expected %d spaces, found %d"
                % (frame.child_indent, indent), line.mark(indent))

        if item:
            self.parse_sequence_item(line, frame)
        else:
            self.parse_mapping_entry(line, content, indent, frame.index)

    def pop_frames(self, indent, item):
        frames = self.frames
        while len(frames) > 1:
            top = frames[-1]
            if indent > top.indent:
                break
            if indent == top.indent and item and top.compact:
                break
            frames.pop()

    def push_frame(self, index, indent, child_indent=None, compact=False):
        self.frames.append(Frame(index, indent, child_indent, compact))
        logger.debug("push %s frame at indent %d (depth %d)",
                     self.composer.kind(index), indent, len(self.frames) - 1)

    def parse_sequence_item(self, line, frame):
        composer = self.composer
        container = frame.index
        indent = line.indent
        kind = composer.kind(container)
        if kind is None:
            composer.promote(container, SEQUENCE)
        elif kind != SEQUENCE:
            raise ParserError(
                "while parsing a block mapping", composer.mark(container),
                "expected a mapping entry, but found a sequence item",
                line.mark(indent))

        content = line.content
        rest = content[1:].lstrip(' \t')
        column = indent + len(content) - len(rest)

        if not rest:
            child = composer.new_collection(None, line.mark(indent))
            composer.append(container, child)
            self.promote_from_next_line(child, indent, compact=False)
            self.push_frame(child, indent)
        elif find_entry_colon(rest) != -1:
            # the item is a mapping whose further keys line up with this one
            child = composer.new_collection(MAPPING, line.mark(column))
            composer.append(container, child)
            self.push_frame(child, indent, child_indent=column)
            self.parse_mapping_entry(line, rest, column, child)
        else:
            composer.append(container, self.parse_value(line, rest, column))

    def parse_mapping_entry(self, line, content, indent, container):
        """Handle ``key: value`` whose key starts at column *indent*."""
        composer = self.composer
        colon = content.find(':')
        if colon == -1:
            raise ParserError(
                None, None,
                "could not find expected ':' in mapping entry %r" % content,
                line.mark(indent))
        key, _ = unquote(content[:colon].strip(' \t'))
        if not key:
            raise ParserError(
                None, None, "found a mapping entry with an empty key",
                line.mark(indent))

        kind = composer.kind(container)
        if kind is None:
            composer.promote(container, MAPPING)
        elif kind != MAPPING:
            raise ParserError(
                "while parsing a block sequence", composer.mark(container),
                "expected a sequence item, but found a mapping entry",
                line.mark(indent))

        rest = content[colon + 1:]
        value = rest.strip(' \t')
        column = indent + colon + 1 + len(rest) - len(rest.lstrip(' \t'))

        if is_block_header(value):
            style, chomp = parse_block_header(value, line, column)
            text = scan_block_scalar(self.reader, indent, style, chomp)
            composer.set_entry(container, key, composer.new_scalar(
                text, line.mark(column), style))
        elif value:
            child = self.parse_value(line, value, column, check_colon=True)
            composer.set_entry(container, key, child)
            if composer.kind(child) == SCALAR:
                self.last_scalar = child
        else:
            child = composer.new_collection(None, line.mark(indent))
            composer.set_entry(container, key, child)
            self.promote_from_next_line(child, indent, compact=True)
            self.push_frame(child, indent,
                            compact=composer.kind(child) == SEQUENCE)

    def parse_value(self, line, value, column, check_colon=False):
        """Turn inline value text into a scalar or flow collection draft."""
        text, quoted = unquote(value)
        if is_flow_collection(text) or (not quoted and text[:1] in '[{'):
            node = parse_flow(text, line, column + 1 if quoted else column)
            return self.composer.add_node(node)
        if check_colon and not quoted and ': ' in text:
            raise ParserError(
                "while scanning a plain scalar", line.mark(column),
                "found ambiguous ': ' in an unquoted value; "
                "quote the value", line.mark(column + text.index(': ')))
        return self.composer.new_scalar(text, line.mark(column))

    def promote_from_next_line(self, index, indent, compact):
        """Type a placeholder by looking at the next content line.

        A child line (deeper, or for a key a '-' item at the same indent)
        starting with '-' makes a sequence; anything else a mapping.
        """
        kind = MAPPING
        peeked = self.reader.peek_content()
        if peeked is not None:
            item = is_sequence_item(peeked.content)
            next_indent = peeked.indent
            if item and (next_indent > indent
                         or (compact and next_indent == indent)):
                kind = SEQUENCE
        self.composer.promote(index, kind)
        logger.debug("promoted node at line %s to %s",
                     self.composer.mark(index).line + 1, kind)


def parse(lines, name='<string>', encoding='utf-8'):
    """Parse an iterable of lines and return the root MappingNode."""
    if not isinstance(lines, Reader):
        lines = Reader(lines, name=name, encoding=encoding)
    return Parser(lines).parse()
