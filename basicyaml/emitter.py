"""Fixed-format emission of node trees.

Emitter writes a tree back out in block layout that the parser reads back
to an equal tree: small collections of plain scalars use flow style,
literal and folded scalars keep their ``|``/``>`` form where the text
allows it, and scalars the parser would misread are double-quoted.
print_tree() writes an indented display form meant for people, not for
reparsing.
"""

import io
import sys

from basicyaml.flow import is_flow_collection
from basicyaml.nodes import ScalarNode, SequenceNode, MappingNode, ScalarStyle


FLOW_LIMIT = 5

ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\t': '\\t',
}

_FLOW_SPECIAL = set(',[]{}:#"\'')


def quote(text):
    return '"' + ''.join(ESCAPES.get(ch, ch) for ch in text) + '"'


def needs_quotes(text, flow=False):
    """Return True if *text* must be quoted to read back unchanged."""
    if not text or text != text.strip(' \t'):
        return True
    if '\n' in text or '\t' in text or '#' in text or ': ' in text:
        return True
    if text[0] in '"\'[{|>' or text == '-' or text.startswith('- '):
        return True
    if text.endswith(':'):
        return True
    if flow and _FLOW_SPECIAL.intersection(text):
        return True
    return False


def format_scalar(text, flow=False):
    return quote(text) if needs_quotes(text, flow) else text


def format_key(key):
    if ':' in key or needs_quotes(key):
        return quote(key)
    return key


def _is_plain_scalar(node):
    return isinstance(node, ScalarNode) and node.style is ScalarStyle.PLAIN


def _is_flow_text(node):
    """Scalar text the parser would read back as a flow collection."""
    return isinstance(node, ScalarNode) and is_flow_collection(node.value)


def _block_lines(text, style):
    """Return (header, lines) for a literal/folded scalar, or None.

    None means the text cannot be written as a block scalar that reads back
    unchanged, and the caller falls back to a quoted scalar.
    """
    body = text.rstrip('\n')
    if not body or body.startswith('\n') or '#' in text or '\r' in text:
        return None
    pieces = body.split('\n')
    content = [piece for piece in pieces if piece]
    if any(not piece.strip(' ') or piece.lstrip(' ').startswith('\t')
           for piece in content):
        return None
    if min(len(piece) - len(piece.lstrip(' ')) for piece in content):
        return None
    trailing = len(text) - len(body)
    if trailing == 0:
        chomp = '-'
    elif trailing == 1:
        chomp = ''
    else:
        chomp = '+'
    if style is ScalarStyle.FOLDED:
        if any(piece != piece.rstrip(' \t') for piece in pieces):
            return None
        # every newline of folded text is one blank source line
        lines = [pieces[0]]
        for piece in pieces[1:]:
            lines.append('')
            if piece:
                lines.append(piece)
    else:
        lines = pieces
    return style.value + chomp, lines + [''] * max(trailing - 1, 0)


class Emitter:
    """Writes a node tree to a text stream in block layout."""

    def __init__(self, stream, indent=2, flow_limit=FLOW_LIMIT):
        self.stream = stream
        self.indent = indent
        self.flow_limit = flow_limit

    def write(self, text):
        self.stream.write(text)

    def emit(self, node):
        """Emit a document; the root must be a mapping."""
        if isinstance(node, MappingNode):
            self.emit_mapping(node, 0)
        elif isinstance(node, SequenceNode):
            self.emit_sequence(node, 0)
        else:
            self.write(format_scalar(node.value) + '\n')

    def use_flow(self, node):
        if not node.value:
            return True
        if isinstance(node, SequenceNode):
            # block items cannot hold bracketed text, flow items can
            if any(_is_flow_text(item) for item in node.value):
                return True
            values = node.value
        else:
            values = node.value.values()
        return len(node.value) <= self.flow_limit \
            and all(_is_plain_scalar(value) for value in values)

    def flow(self, node):
        if isinstance(node, ScalarNode):
            return format_scalar(node.value, flow=True)
        if isinstance(node, SequenceNode):
            return '[' + ', '.join(self.flow(item) for item in node.value) + ']'
        return '{' + ', '.join(
            '%s: %s' % (format_key(key) if not _FLOW_SPECIAL.intersection(key)
                        else quote(key),
                        self.flow(value))
            for key, value in node.value.items()) + '}'

    def emit_mapping(self, node, level):
        pad = ' ' * level
        for key, value in node.value.items():
            key = format_key(key)
            if isinstance(value, ScalarNode):
                block = None
                if value.style is not ScalarStyle.PLAIN:
                    block = _block_lines(value.value, value.style)
                elif _is_flow_text(value):
                    block = _block_lines(value.value, ScalarStyle.LITERAL)
                if block is None:
                    self.write('%s%s: %s\n' % (pad, key,
                                               format_scalar(value.value)))
                else:
                    header, lines = block
                    self.write('%s%s: %s\n' % (pad, key, header))
                    inner = ' ' * (level + self.indent)
                    for line in lines:
                        self.write(inner + line + '\n' if line else '\n')
            elif self.use_flow(value):
                self.write('%s%s: %s\n' % (pad, key, self.flow(value)))
            else:
                self.write('%s%s:\n' % (pad, key))
                self.emit_collection(value, level + self.indent)

    def emit_sequence(self, node, level):
        pad = ' ' * level
        for item in node.value:
            if isinstance(item, ScalarNode):
                self.write('%s- %s\n' % (pad, format_scalar(item.value)))
            elif self.use_flow(item):
                self.write('%s- %s\n' % (pad, self.flow(item)))
            else:
                self.write('%s-\n' % pad)
                self.emit_collection(item, level + self.indent)

    def emit_collection(self, node, level):
        if isinstance(node, MappingNode):
            self.emit_mapping(node, level)
        else:
            self.emit_sequence(node, level)


def dump(node, stream=None, **kwargs):
    """Emit *node* to *stream*, or return the text when stream is None."""
    if stream is None:
        stream = io.StringIO()
        Emitter(stream, **kwargs).emit(node)
        return stream.getvalue()
    Emitter(stream, **kwargs).emit(node)
    return None


def dumps(node, **kwargs):
    """Return the emitted text of *node*."""
    return dump(node, None, **kwargs)


def print_tree(node, stream=None, level=0):
    """Write an indented display of *node*, two spaces per level."""
    if stream is None:
        stream = sys.stdout
    pad = '  ' * level
    if isinstance(node, ScalarNode):
        if node.style is ScalarStyle.PLAIN:
            stream.write(pad + node.value + '\n')
        else:
            stream.write(pad + node.style.value + '\n')
            for line in node.value.splitlines():
                stream.write('  ' * (level + 1) + line + '\n')
    elif isinstance(node, SequenceNode):
        for item in node.value:
            if isinstance(item, ScalarNode):
                stream.write('%s- %s\n' % (pad, item.value))
            else:
                stream.write(pad + '-\n')
                print_tree(item, stream, level + 1)
    else:
        for key, value in node.value.items():
            if isinstance(value, ScalarNode) \
                    and value.style is ScalarStyle.PLAIN:
                stream.write('%s%s: %s\n' % (pad, key, value.value))
            else:
                stream.write('%s%s:\n' % (pad, key))
                print_tree(value, stream, level + 1)
