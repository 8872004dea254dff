"""Tests for the parse-time node arena."""

import pytest

import basicyaml
from basicyaml import MappingNode, ScalarNode, SequenceNode
from basicyaml.composer import (
    Composer,
    ComposerError,
    MAPPING,
    SCALAR,
    SEQUENCE,
)


def test_freeze_builds_tree():
    composer = Composer()
    root = composer.new_collection(MAPPING)
    seq = composer.new_collection(SEQUENCE)
    composer.set_entry(root, 'items', seq)
    composer.append(seq, composer.new_scalar('a'))
    composer.append(seq, composer.new_scalar('b'))
    node = composer.freeze(root)
    assert node == MappingNode({'items': SequenceNode(
        [ScalarNode('a'), ScalarNode('b')])})


def test_promote_once():
    composer = Composer()
    index = composer.new_collection()
    assert composer.kind(index) is None
    composer.promote(index, SEQUENCE)
    assert composer.kind(index) == SEQUENCE
    with pytest.raises(ComposerError):
        composer.promote(index, MAPPING)


def test_untyped_draft_freezes_to_empty_mapping():
    composer = Composer()
    node = composer.freeze(composer.new_collection())
    assert isinstance(node, MappingNode)
    assert len(node) == 0


def test_scalar_extension():
    composer = Composer()
    index = composer.new_scalar('first')
    composer.extend_scalar(index, '\nsecond')
    assert composer.kind(index) == SCALAR
    assert composer.freeze(index).value == 'first\nsecond'


def test_finished_nodes_are_kept():
    composer = Composer()
    flow = SequenceNode([ScalarNode('1')], flow_style=True)
    index = composer.add_node(flow)
    assert composer.freeze(index) is flow


def test_deep_nesting_freezes_without_recursion():
    depth = 1200
    composer = Composer()
    root = composer.new_collection(MAPPING)
    parent = root
    for level in range(depth):
        child = composer.new_collection(SEQUENCE if level % 2 else MAPPING)
        if composer.kind(parent) == MAPPING:
            composer.set_entry(parent, 'k', child)
        else:
            composer.append(parent, child)
        parent = child
    node = composer.freeze(root)
    for _ in range(depth):
        node = node.value['k'] if isinstance(node, MappingNode) \
            else node.value[0]
    assert len(node) == 0


def test_deeply_nested_document_parses():
    depth = 1200
    yaml = ''.join(' ' * i + 'k%d:\n' % i for i in range(depth))
    yaml += ' ' * depth + 'leaf: 1\n'
    doc = basicyaml.loads(yaml)
    path = '.'.join('k%d' % i for i in range(depth)) + '.leaf'
    assert doc.value(path, 0) == 1
