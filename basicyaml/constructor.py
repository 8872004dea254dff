"""Conversion of node trees to native Python objects.

Scalars are typed with classify_scalar() regardless of their presentation
style; sequences become lists and mappings become dicts.
"""

from basicyaml.error import MarkedYAMLError
from basicyaml.nodes import ScalarNode, SequenceNode, MappingNode
from basicyaml.resolver import classify_scalar


class ConstructorError(MarkedYAMLError):
    """Node tree could not be converted."""
    pass


class Constructor:
    """Builds Python objects from a node tree.

    Subclasses may override construct_scalar() to change how scalar text is
    typed, e.g. to keep every scalar as a string.
    """

    def construct_document(self, node):
        """Construct a Python object from a root node."""
        return self.construct_object(node)

    def construct_object(self, node):
        """Construct a Python object from a node, dispatching on its kind."""
        if isinstance(node, ScalarNode):
            return self.construct_scalar(node)
        if isinstance(node, SequenceNode):
            return self.construct_sequence(node)
        if isinstance(node, MappingNode):
            return self.construct_mapping(node)
        raise ConstructorError(
            None, None,
            "expected a node, but found %s" % type(node).__name__,
            getattr(node, 'start_mark', None))

    def construct_scalar(self, node):
        return classify_scalar(node.value)

    def construct_sequence(self, node):
        return [self.construct_object(child) for child in node.value]

    def construct_mapping(self, node):
        return {key: self.construct_object(value)
                for key, value in node.value.items()}


class StringConstructor(Constructor):
    """Keeps every scalar as its raw text."""

    def construct_scalar(self, node):
        return node.value


def construct_document(node, constructor=None):
    """Convert *node* and its children to plain Python objects."""
    if constructor is None:
        constructor = Constructor()
    return constructor.construct_document(node)
