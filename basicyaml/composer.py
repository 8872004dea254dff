"""Parse-time node arena.

The parser never holds references into the tree it is building.  Every node
under construction is a Draft stored in the Composer's arena and addressed
by its integer index; frames on the parser stack hold indices only.  Once the
parse finishes, freeze() turns the drafts into immutable Node objects.
"""

from basicyaml.error import MarkedYAMLError
from basicyaml.nodes import ScalarNode, SequenceNode, MappingNode, ScalarStyle


class ComposerError(MarkedYAMLError):
    """Internal tree construction error."""
    pass


SCALAR = ScalarNode.id
SEQUENCE = SequenceNode.id
MAPPING = MappingNode.id
FINISHED = 'finished'


class Draft:
    """A node under construction.

    kind is None for an untyped placeholder until it is promoted.
    """

    __slots__ = ('kind', 'mark', 'text', 'style', 'items', 'entries', 'node')

    def __init__(self, kind, mark=None):
        self.kind = kind
        self.mark = mark
        self.text = None
        self.style = ScalarStyle.PLAIN
        self.items = None
        self.entries = None
        self.node = None
        if kind == SEQUENCE:
            self.items = []
        elif kind == MAPPING:
            self.entries = {}


class Composer:
    """Arena of Draft objects addressed by index."""

    def __init__(self):
        self.drafts = []

    def _add(self, draft):
        self.drafts.append(draft)
        return len(self.drafts) - 1

    def new_collection(self, kind=None, mark=None):
        """Add a sequence, mapping or untyped placeholder draft."""
        return self._add(Draft(kind, mark))

    def new_scalar(self, text, mark=None, style=ScalarStyle.PLAIN):
        draft = Draft(SCALAR, mark)
        draft.text = text
        draft.style = style
        return self._add(draft)

    def add_node(self, node):
        """Add an already finished node (e.g. a parsed flow collection)."""
        draft = Draft(FINISHED, node.start_mark)
        draft.node = node
        return self._add(draft)

    def kind(self, index):
        return self.drafts[index].kind

    def mark(self, index):
        return self.drafts[index].mark

    def promote(self, index, kind):
        """Resolve an untyped placeholder into a sequence or mapping.

        Happens at most once per draft, before any child is attached.
        """
        draft = self.drafts[index]
        if draft.kind is not None:
            raise ComposerError(
                None, None,
                "cannot promote a %s node to %s" % (draft.kind, kind),
                draft.mark)
        draft.kind = kind
        if kind == SEQUENCE:
            draft.items = []
        else:
            draft.entries = {}

    def append(self, index, child):
        self.drafts[index].items.append(child)

    def set_entry(self, index, key, child):
        # last write wins
        self.drafts[index].entries[key] = child

    def extend_scalar(self, index, text):
        self.drafts[index].text += text

    def children(self, index):
        draft = self.drafts[index]
        if draft.kind == SEQUENCE:
            return draft.items
        if draft.kind == MAPPING:
            return list(draft.entries.values())
        return ()

    def build(self, index):
        """Make the node for one draft whose children are already frozen."""
        draft = self.drafts[index]
        if draft.kind == SCALAR:
            return ScalarNode(draft.text, start_mark=draft.mark,
                              style=draft.style)
        if draft.kind == SEQUENCE:
            return SequenceNode([self.drafts[child].node
                                 for child in draft.items],
                                start_mark=draft.mark)
        # untyped placeholders without children become empty mappings
        entries = draft.entries or {}
        return MappingNode(
            {key: self.drafts[child].node for key, child in entries.items()},
            start_mark=draft.mark)

    def freeze(self, index):
        """Build the immutable node tree rooted at the draft *index*.

        Walks the arena in post-order with an explicit stack, so nesting
        depth is not limited by the interpreter's recursion limit.
        """
        stack = [(index, False)]
        while stack:
            current, expanded = stack.pop()
            draft = self.drafts[current]
            if draft.node is not None:
                continue
            if expanded:
                draft.node = self.build(current)
                continue
            stack.append((current, True))
            stack.extend((child, False) for child in self.children(current))
        return self.drafts[index].node
