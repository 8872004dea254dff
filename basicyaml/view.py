"""Read-only query layer over a parsed tree.

NodeView is a lightweight, non-owning handle on a node.  Looking up a
missing key, an out-of-range index or a path step that does not resolve
gives the empty view instead of raising, so lookups can be chained:

    view["a"]["b"][1].to_int()      # 2, or None anywhere along the way
    view.value("a.d", 99)           # 99 when a.d is missing
"""

import re

from basicyaml.constructor import construct_document
from basicyaml.error import NodeTypeError
from basicyaml.nodes import ScalarNode, SequenceNode, MappingNode
from basicyaml.resolver import to_bool, to_int, to_float


_PATH_TOKEN = re.compile(r'\.|\[([0-9]*)\]|[^.\[]+')


def parse_path(path):
    """Split 'a.b[2].c' into ['a', 'b', 2, 'c'].

    Returns None for a malformed path (e.g. an unterminated or empty index).
    """
    steps = []
    pos = 0
    while pos < len(path):
        match = _PATH_TOKEN.match(path, pos)
        if match is None:
            return None
        token = match.group(0)
        if token.startswith('['):
            if not match.group(1):
                return None
            steps.append(int(match.group(1)))
        elif token != '.':
            steps.append(token)
        pos = match.end()
    return steps


class NodeView:
    """A non-owning view of a node, or the empty view."""

    __slots__ = ('node',)

    def __init__(self, node=None):
        self.node = node

    def __bool__(self):
        return self.node is not None

    def __repr__(self):
        if self.node is None:
            return "NodeView()"
        return "NodeView(%r)" % (self.node,)

    def __eq__(self, other):
        if isinstance(other, NodeView):
            return self.node == other.node
        return NotImplemented

    __hash__ = None

    # Type predicates

    def is_scalar(self):
        return isinstance(self.node, ScalarNode)

    def is_map(self):
        return isinstance(self.node, MappingNode)

    def is_seq(self):
        return isinstance(self.node, SequenceNode)

    # Navigation

    def __getitem__(self, key):
        if isinstance(key, str):
            if self.is_map():
                return NodeView(self.node.value.get(key))
        elif isinstance(key, int) and not isinstance(key, bool):
            if self.is_seq() and 0 <= key < len(self.node.value):
                return NodeView(self.node.value[key])
        return NodeView()

    def get(self, key, default=None):
        view = self[key]
        return view if view else default

    def at_path(self, path):
        """Resolve a dotted/bracketed path such as 'a.b[2].c'.

        Any step that does not resolve gives the empty view.
        """
        steps = parse_path(path)
        if steps is None:
            return NodeView()
        view = self
        for step in steps:
            view = view[step]
            if not view:
                return view
        return view

    def value(self, path, default):
        """Resolve *path* and coerce it to the type of *default*.

        Supports bool, int, float and str defaults; returns *default* when
        the path does not resolve or the value does not coerce.
        """
        view = self.at_path(path)
        if not view:
            return default
        if isinstance(default, bool):
            result = view.to_bool()
        elif isinstance(default, int):
            result = view.to_int()
        elif isinstance(default, float):
            result = view.to_float()
        elif isinstance(default, str):
            result = view.node.value if view.is_scalar() else None
        else:
            result = None
        return default if result is None else result

    # Typed coercions

    def to_bool(self):
        return to_bool(self.node)

    def to_int(self):
        return to_int(self.node)

    def to_float(self):
        return to_float(self.node)

    def to_python(self):
        """Convert the viewed subtree to plain Python objects."""
        if self.node is None:
            return None
        return construct_document(self.node)

    # Throwing accessors

    def as_str(self):
        if not self.is_scalar():
            raise NodeTypeError("node is not a scalar")
        return self.node.value

    def as_map(self):
        if not self.is_map():
            raise NodeTypeError("node is not a mapping")
        return self.node.value

    def as_seq(self):
        if not self.is_seq():
            raise NodeTypeError("node is not a sequence")
        return self.node.value

    # Container protocol

    def __len__(self):
        if self.is_map() or self.is_seq():
            return len(self.node.value)
        return 0

    def __iter__(self):
        """Iterate over keys of a mapping or item views of a sequence."""
        if self.is_map():
            return iter(self.node.value)
        if self.is_seq():
            return (NodeView(item) for item in self.node.value)
        return iter(())

    def __contains__(self, key):
        return bool(self[key])

    def keys(self):
        return list(self.node.value) if self.is_map() else []

    def values(self):
        if not self.is_map():
            return []
        return [NodeView(node) for node in self.node.value.values()]

    def items(self):
        if not self.is_map():
            return []
        return [(key, NodeView(node)) for key, node in self.node.value.items()]


class Document:
    """A parsed document: owns the root node and hands out views."""

    __slots__ = ('root', 'name')

    def __init__(self, root, name='<string>'):
        self.root = root
        self.name = name

    def __repr__(self):
        return "Document(%r, %d keys)" % (self.name, len(self.root))

    def view(self):
        return NodeView(self.root)

    def __getitem__(self, key):
        return self.view()[key]

    def __contains__(self, key):
        return key in self.view()

    def __len__(self):
        return len(self.root)

    def __iter__(self):
        return iter(self.root)

    def at_path(self, path):
        return self.view().at_path(path)

    def value(self, path, default):
        return self.view().value(path, default)

    def to_python(self):
        return construct_document(self.root)
