"""Document tree node classes.

A parsed document is a tree of ScalarNode, SequenceNode and MappingNode.
Nodes are frozen once the parser hands them out; collection values are a
tuple (sequences) or a read-only mapping (mappings).
"""

import enum
from types import MappingProxyType


class ScalarStyle(enum.Enum):
    """Presentation style of a scalar. Never affects its value."""
    PLAIN = ''
    LITERAL = '|'
    FOLDED = '>'


class Node:
    """Base class for YAML nodes."""

    __slots__ = ('value', 'start_mark')

    id = None

    def __init__(self, value, start_mark=None):
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, 'start_mark', start_mark)

    def __setattr__(self, name, value):
        raise AttributeError("%s is immutable" % type(self).__name__)

    def __delattr__(self, name):
        raise AttributeError("%s is immutable" % type(self).__name__)

    def __repr__(self):
        return "%s(value=%r)" % (type(self).__name__, self.value)


class ScalarNode(Node):
    """Scalar node holding the raw text of the value."""

    __slots__ = ('style',)

    id = 'scalar'

    def __init__(self, value, start_mark=None, style=ScalarStyle.PLAIN):
        object.__setattr__(self, 'style', style)
        super().__init__(value, start_mark)

    def __eq__(self, other):
        if not isinstance(other, ScalarNode):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash(('scalar', self.value))

    def __repr__(self):
        if self.style is ScalarStyle.PLAIN:
            return "ScalarNode(value=%r)" % (self.value,)
        return "ScalarNode(value=%r, style=%s)" % (self.value, self.style.name)


class CollectionNode(Node):
    """Base class for collection nodes."""

    __slots__ = ('flow_style',)

    def __init__(self, value, start_mark=None, flow_style=False):
        object.__setattr__(self, 'flow_style', flow_style)
        super().__init__(value, start_mark)

    def __len__(self):
        return len(self.value)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    __hash__ = None


class SequenceNode(CollectionNode):
    """Sequence node (ordered items)."""

    __slots__ = ()

    id = 'sequence'

    def __init__(self, value=(), start_mark=None, flow_style=False):
        super().__init__(tuple(value), start_mark, flow_style)

    def __iter__(self):
        return iter(self.value)


class MappingNode(CollectionNode):
    """Mapping node with string keys."""

    __slots__ = ()

    id = 'mapping'

    def __init__(self, value=None, start_mark=None, flow_style=False):
        super().__init__(MappingProxyType(dict(value or {})),
                         start_mark, flow_style)

    def __iter__(self):
        return iter(self.value)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return dict(self.value) == dict(other.value)

    __hash__ = None
