"""Scalar type inference.

classify_scalar() deduces a Python value from raw scalar text using a fixed
precedence: int, float, bool, null, str.  The to_bool/to_int/to_float
helpers perform the same coercions one type at a time on a node and return
None instead of raising.
"""

import re

from basicyaml.nodes import ScalarNode


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

BOOL_TRUE = frozenset(('yes', 'true', 'on'))
BOOL_FALSE = frozenset(('no', 'false', 'off'))
NULL_VALUES = frozenset(('null', '~', ''))

_INT_REGEXP = re.compile(r'[-+]?[0-9]+\Z')
_FLOAT_REGEXP = re.compile(
    r'''[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?\Z
       |[-+]?(?:inf|infinity|nan)\Z''',
    re.X | re.I)


def is_null(text):
    """Return True for the null spellings: null (any case), ~ and ''."""
    return text.lower() in NULL_VALUES


def parse_int(text):
    """Parse a signed 64-bit integer, or return None."""
    if not _INT_REGEXP.match(text):
        return None
    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def parse_float(text):
    """Parse a floating point number, or return None."""
    if not _FLOAT_REGEXP.match(text):
        return None
    return float(text)


def parse_bool(text):
    """Parse a boolean spelling (yes/true/on, no/false/off), or return None."""
    lowered = text.lower()
    if lowered in BOOL_TRUE:
        return True
    if lowered in BOOL_FALSE:
        return False
    return None


def classify_scalar(text):
    """Deduce the typed value of raw scalar text.

    Returns an int, float, bool, None (for null, ~ and the empty string) or
    the text itself, trying each in that order.

    >>> classify_scalar('42'), classify_scalar('3.14'), classify_scalar('On')
    (42, 3.14, True)
    """
    value = parse_int(text)
    if value is not None:
        return value
    value = parse_float(text)
    if value is not None:
        return value
    value = parse_bool(text)
    if value is not None:
        return value
    if is_null(text):
        return None
    return text


def _scalar_text(node):
    if not isinstance(node, ScalarNode):
        return None
    if is_null(node.value):
        return None
    return node.value


def to_bool(node):
    """Return the boolean value of a scalar node, or None."""
    text = _scalar_text(node)
    if text is None:
        return None
    return parse_bool(text)


def to_int(node):
    """Return the 64-bit integer value of a scalar node, or None."""
    text = _scalar_text(node)
    if text is None:
        return None
    return parse_int(text)


def to_float(node):
    """Return the floating point value of a scalar node, or None."""
    text = _scalar_text(node)
    if text is None:
        return None
    return parse_float(text)
