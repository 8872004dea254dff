"""Scalar scanning helpers.

Quote stripping and escape handling shared by block and flow values, and
the block scalar extractor for literal (``|``) and folded (``>``) text.
"""

import logging

from basicyaml.error import ScannerError
from basicyaml.nodes import ScalarStyle


logger = logging.getLogger(__name__)


CHOMP_CLIP = ''
CHOMP_STRIP = '-'
CHOMP_KEEP = '+'

BLOCK_INDICATORS = {
    '|': ScalarStyle.LITERAL,
    '>': ScalarStyle.FOLDED,
}

ESCAPE_REPLACEMENTS = {
    'n': '\n',
    't': '\t',
    '\\': '\\',
    '\'': '\'',
    '"': '"',
}


def unescape(text):
    """Resolve \\n, \\t, \\\\, \\' and \\" escapes.

    Any other escaped character stands for itself.
    """
    if '\\' not in text:
        return text
    chunks = []
    i = 0
    end = len(text)
    while i < end:
        ch = text[i]
        if ch == '\\' and i + 1 < end:
            i += 1
            ch = text[i]
            chunks.append(ESCAPE_REPLACEMENTS.get(ch, ch))
        else:
            chunks.append(ch)
        i += 1
    return ''.join(chunks)


def unquote(text):
    """Strip one matching pair of surrounding quotes and unescape.

    Returns a (value, was_quoted) pair; unquoted text is returned unchanged.
    """
    if len(text) > 1 and text[0] in '"\'' and text[-1] == text[0]:
        return unescape(text[1:-1]), True
    return text, False


def is_block_header(value):
    return value[:1] in BLOCK_INDICATORS


def parse_block_header(value, line, column):
    """Split a ``|``/``>`` header into (style, chomp).

    The header may carry a single chomping indicator; anything else after
    it is an error.
    """
    style = BLOCK_INDICATORS[value[0]]
    rest = value[1:]
    chomp = CHOMP_CLIP
    if rest[:1] in (CHOMP_STRIP, CHOMP_KEEP):
        chomp = rest[0]
        rest = rest[1:]
    if rest.strip(' \t'):
        raise ScannerError(
            "while scanning a block scalar", line.mark(column),
            "expected a chomping indicator or end of line, but found %r"
            % rest.strip(' \t')[0], line.mark(column + len(value) - len(rest)))
    return style, chomp


def fold_lines(lines):
    """Fold block lines: newlines between text lines become spaces.

    Blank lines (None) each stay a literal newline.
    """
    chunks = []
    joined = False
    for text in lines:
        if text is None:
            chunks.append('\n')
            joined = False
            continue
        if joined:
            chunks.append(' ')
        chunks.append(text.rstrip(' \t'))
        joined = True
    return ''.join(chunks)


def chomp_text(text, chomp):
    """Apply the chomping indicator to extracted block text."""
    if chomp == CHOMP_KEEP:
        return text
    body = text.rstrip('\n')
    if chomp == CHOMP_STRIP or not body:
        return body
    return body + '\n'


def scan_block_scalar(reader, indent, style, chomp):
    """Consume the lines of a block scalar whose header sits at *indent*.

    Every following line indented deeper than the header belongs to the
    block, blank lines included.  The first non-blank line at or left of the
    header indent ends the block and is pushed back to the reader.
    """
    lines = []
    content = []
    while True:
        line = reader.next_line()
        if line is None:
            break
        if line.blank:
            # leading blank lines are dropped
            if content:
                lines.append(None)
            continue
        if line.indent <= indent:
            reader.push_back(line)
            break
        content.append(line)
        lines.append(line)

    if not content:
        return ''

    strip = min(line.indent for line in content)
    trailing = 0
    while lines[-1 - trailing] is None:
        trailing += 1
    body = [None if line is None else line.text[strip:]
            for line in lines[:len(lines) - trailing]]

    if style is ScalarStyle.FOLDED:
        text = fold_lines(body)
    else:
        text = '\n'.join('' if piece is None else piece for piece in body)
    text += '\n' * (trailing + 1)
    logger.debug("block scalar at line %d: %d lines, style=%s, chomp=%r",
                 content[0].number, len(body), style.name, chomp)
    return chomp_text(text, chomp)
