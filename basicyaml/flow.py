"""Single-line flow collections: ``[a, b]`` and ``{k: v}``.

Items are split on commas at bracket depth zero and outside quotes, so flow
collections may nest (``{list: [1, {x: 10}]}``).  Flow content never spans
more than one source line.
"""

from basicyaml.error import ParserError
from basicyaml.nodes import ScalarNode, SequenceNode, MappingNode
from basicyaml.scanner import unquote


FLOW_PAIRS = {
    '[': ']',
    '{': '}',
}


def is_flow_collection(value):
    """Return True when value is bracket- or brace-delimited."""
    return len(value) > 1 and value[0] in FLOW_PAIRS \
        and value[-1] == FLOW_PAIRS[value[0]]


def _opens_quote(text, pos):
    """A quote opens a scalar only at the start of an item, key or value."""
    prefix = text[:pos].rstrip(' \t')
    return not prefix or prefix[-1] in ',:[{'


def split_flow(text, line, column):
    """Split flow content on top-level commas.

    Returns a list of (column, item) pairs, item text unstripped.  Raises
    ParserError on unbalanced brackets or an unterminated quote.
    """
    items = []
    stack = []
    quote = None
    escape = False
    start = 0
    for pos, ch in enumerate(text):
        if quote:
            if escape:
                escape = False
            elif ch == '\\':
                escape = True
            elif ch == quote:
                quote = None
            continue
        if ch in '"\'' and _opens_quote(text, pos):
            quote = ch
        elif ch in FLOW_PAIRS:
            stack.append((ch, pos))
        elif ch in ']}':
            if not stack or FLOW_PAIRS[stack[-1][0]] != ch:
                raise ParserError(
                    "while parsing a flow collection", line.mark(column - 1),
                    "found unmatched %r" % ch, line.mark(column + pos))
            stack.pop()
        elif ch == ',' and not stack:
            items.append((column + start, text[start:pos]))
            start = pos + 1
    if quote:
        raise ParserError(
            "while parsing a flow collection", line.mark(column - 1),
            "found unterminated quoted scalar", line.mark(column + len(text)))
    if stack:
        opener, pos = stack[-1]
        raise ParserError(
            "while parsing a flow collection", line.mark(column - 1),
            "expected %r to close %r" % (FLOW_PAIRS[opener], opener),
            line.mark(column + pos))
    items.append((column + start, text[start:]))
    return items


def _find_colon(text):
    quote = None
    escape = False
    depth = 0
    for pos, ch in enumerate(text):
        if quote:
            if escape:
                escape = False
            elif ch == '\\':
                escape = True
            elif ch == quote:
                quote = None
        elif ch in '"\'' and _opens_quote(text, pos):
            quote = ch
        elif ch in FLOW_PAIRS:
            depth += 1
        elif ch in ']}':
            depth -= 1
        elif ch == ':' and depth == 0:
            return pos
    return -1


def _flow_node(text, line, column):
    if is_flow_collection(text):
        return parse_flow(text, line, column)
    value, _ = unquote(text)
    return ScalarNode(value, start_mark=line.mark(column))


def parse_flow(text, line, column=0):
    """Parse a ``[...]`` or ``{...}`` literal into a frozen node.

    *column* is the 0-based position of the opening bracket on *line*.
    """
    opener = text[0]
    if not is_flow_collection(text):
        raise ParserError(
            "while parsing a flow collection", line.mark(column),
            "expected %r to close %r" % (FLOW_PAIRS.get(opener, ']'), opener),
            line.mark(column + len(text)))
    mark = line.mark(column)
    items = split_flow(text[1:-1], line, column + 1)

    if opener == '[':
        values = []
        for item_column, item in items:
            stripped = item.strip(' \t')
            if not stripped:
                continue
            offset = item_column + len(item) - len(item.lstrip(' \t'))
            values.append(_flow_node(stripped, line, offset))
        return SequenceNode(values, start_mark=mark, flow_style=True)

    mapping = {}
    for item_column, item in items:
        if not item.strip(' \t'):
            continue
        offset = item_column + len(item) - len(item.lstrip(' \t'))
        item = item.strip(' \t')
        colon = _find_colon(item)
        if colon == -1:
            raise ParserError(
                "while parsing a flow mapping", mark,
                "found a flow mapping entry without a value: %r" % item,
                line.mark(offset))
        key, _ = unquote(item[:colon].strip(' \t'))
        if not key:
            raise ParserError(
                "while parsing a flow mapping", mark,
                "found an empty key", line.mark(offset))
        value = item[colon + 1:]
        value_column = offset + colon + 1 + len(value) - len(value.lstrip(' \t'))
        mapping[key] = _flow_node(value.strip(' \t'), line, value_column)
    return MappingNode(mapping, start_mark=mark, flow_style=True)
