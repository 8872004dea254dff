"""Tests for single-line flow collections."""

import math

import pytest

import basicyaml
from basicyaml.flow import is_flow_collection, split_flow
from basicyaml.reader import Line


class TestFlowSequence:

    def test_typed_items(self):
        doc = basicyaml.loads("scores: [85, 92.5, 78]")
        scores = doc["scores"]
        assert scores.is_seq()
        assert len(scores) == 3
        assert scores.to_python() == [85, 92.5, 78]
        assert scores[1].to_float() == 92.5

    def test_empty(self):
        doc = basicyaml.loads("a: []\nb: {}\n")
        assert doc["a"].is_seq() and len(doc["a"]) == 0
        assert doc["b"].is_map() and len(doc["b"]) == 0

    def test_blank_items_skipped(self):
        doc = basicyaml.loads("a: [x, , y, ]")
        assert doc["a"].to_python() == ["x", "y"]

    def test_quoted_items(self):
        doc = basicyaml.loads('a: [plain, "with, comma", \'it\\\'s\']')
        assert doc["a"].to_python() == ["plain", "with, comma", "it's"]

    def test_as_sequence_item(self):
        doc = basicyaml.loads("rows:\n  - [1, 2]\n  - {k: v}\n")
        assert doc.to_python() == {'rows': [[1, 2], {'k': 'v'}]}

    def test_special_floats(self):
        doc = basicyaml.loads("a: [inf, -inf, nan]")
        values = doc["a"].to_python()
        assert values[0] == math.inf
        assert values[1] == -math.inf
        assert math.isnan(values[2])


class TestFlowMapping:

    def test_simple(self):
        doc = basicyaml.loads("limits: {cpu: 2, memory: 512, name: small}")
        assert doc["limits"].to_python() == {'cpu': 2, 'memory': 512,
                                              'name': 'small'}
        assert doc.value("limits.cpu", 0) == 2

    def test_value_with_colon(self):
        doc = basicyaml.loads('a: {url: "http://x:1", b: c:d}')
        assert doc["a"].to_python() == {'url': 'http://x:1', 'b': 'c:d'}

    def test_quoted_key(self):
        doc = basicyaml.loads('a: {"k, 1": v}')
        assert doc["a"].to_python() == {'k, 1': 'v'}

    def test_nested(self):
        doc = basicyaml.loads("a: {list: [1, {x: 10}], empty: []}")
        assert doc["a"].to_python() == {'list': [1, {'x': 10}], 'empty': []}
        assert doc.value("a.list[1].x", 0) == 10

    def test_quoted_flow_text_is_flow(self):
        """Dequoted text that is bracket-delimited still parses as flow."""
        doc = basicyaml.loads('a: "[1, 2]"')
        assert doc["a"].is_seq()

    def test_flow_nodes_marked_flow_style(self):
        doc = basicyaml.loads("a: {b: [1]}")
        node = doc.root.value["a"]
        assert node.flow_style
        assert node.value["b"].flow_style


class TestFlowErrors:

    def test_mapping_item_without_value(self):
        with pytest.raises(basicyaml.ParserError) as excinfo:
            basicyaml.loads("a: 1\nk: {a: 1, b}\n")
        assert excinfo.value.line == 2
        assert excinfo.value.column == 11
        assert "without a value" in str(excinfo.value)

    def test_empty_key(self):
        with pytest.raises(basicyaml.ParserError):
            basicyaml.loads("k: {: 1}")

    def test_unclosed(self):
        with pytest.raises(basicyaml.ParserError) as excinfo:
            basicyaml.loads("k: [1, 2")
        assert excinfo.value.line == 1

    def test_unmatched_closer(self):
        with pytest.raises(basicyaml.ParserError) as excinfo:
            basicyaml.loads("k: [1, 2]]")
        assert "unmatched" in str(excinfo.value)

    def test_mismatched_brackets(self):
        with pytest.raises(basicyaml.ParserError):
            basicyaml.loads("k: [1, {a: 2]}")

    def test_unterminated_quote(self):
        with pytest.raises(basicyaml.ParserError) as excinfo:
            basicyaml.loads('k: [a, "b]')
        assert "unterminated" in str(excinfo.value)


def test_is_flow_collection():
    assert is_flow_collection("[]")
    assert is_flow_collection("{a: 1}")
    assert not is_flow_collection("[")
    assert not is_flow_collection("[a}")
    assert not is_flow_collection("plain")


def test_split_flow_respects_nesting_and_quotes():
    line = Line('<test>', 1, 'x')
    items = split_flow('a, [b, c], {d: e}, "f, g"', line, 0)
    assert [item.strip() for _, item in items] == \
        ['a', '[b, c]', '{d: e}', '"f, g"']
    assert [column for column, _ in items] == [0, 2, 10, 18]


def test_apostrophe_inside_plain_item():
    """A quote that does not start an item is part of the text."""
    doc = basicyaml.loads("a: [don't, stop]")
    assert doc["a"].to_python() == ["don't", "stop"]
