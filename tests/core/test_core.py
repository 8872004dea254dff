"""
Core parser tests for basicyaml.

Run with: python3 -m pytest tests/
Or: python3 tests/core/test_core.py
"""

import unittest
import basicyaml
from basicyaml import MappingNode, ScalarNode, SequenceNode, ScalarStyle


class TestLoads(unittest.TestCase):
    """Test block mapping and sequence parsing."""

    def test_simple_dict(self):
        doc = basicyaml.loads("name: Alice\nage: 30")
        self.assertEqual(doc['name'].as_str(), 'Alice')
        self.assertEqual(doc['age'].to_int(), 30)
        self.assertEqual(len(doc), 2)

    def test_root_is_always_mapping(self):
        """Empty and comment-only input still give a mapping root."""
        for text in ("", "\n\n", "# only a comment\n"):
            doc = basicyaml.loads(text)
            self.assertIsInstance(doc.root, MappingNode)
            self.assertEqual(len(doc.root), 0)

    def test_nested_mapping(self):
        yaml = (
            "user:\n"
            "  name: Bob\n"
            "  address:\n"
            "    city: Paris\n"
            "    zip: 75001\n"
            "  age: 25\n"
            "active: true\n"
        )
        doc = basicyaml.loads(yaml)
        self.assertEqual(doc.to_python(), {
            'user': {
                'name': 'Bob',
                'address': {'city': 'Paris', 'zip': 75001},
                'age': 25,
            },
            'active': True,
        })

    def test_indented_sequence(self):
        doc = basicyaml.loads("items:\n  - apple\n  - banana\n  - cherry\n")
        items = doc['items']
        self.assertTrue(items.is_seq())
        self.assertEqual([item.as_str() for item in items],
                         ['apple', 'banana', 'cherry'])

    def test_compact_sequence(self):
        """Items of a key's sequence may sit at the key's own indentation."""
        doc = basicyaml.loads("items:\n- a\n- b\nother: 1\n")
        self.assertEqual(doc.to_python(), {'items': ['a', 'b'], 'other': 1})

    def test_compact_sequence_nested(self):
        yaml = (
            "outer:\n"
            "  inner:\n"
            "  - 1\n"
            "  - 2\n"
            "  after: x\n"
        )
        doc = basicyaml.loads(yaml)
        self.assertEqual(doc.to_python(),
                         {'outer': {'inner': [1, 2], 'after': 'x'}})

    def test_sequence_of_mappings(self):
        """Inline '- key: value' items take further keys at the same column."""
        yaml = (
            "servers:\n"
            "  - name: a\n"
            "    port: 1\n"
            "  - name: b\n"
            "    port: 2\n"
            "    tags: [x]\n"
        )
        doc = basicyaml.loads(yaml)
        self.assertEqual(doc.to_python(), {'servers': [
            {'name': 'a', 'port': 1},
            {'name': 'b', 'port': 2, 'tags': ['x']},
        ]})

    def test_sequence_item_nested_collection(self):
        yaml = (
            "matrix:\n"
            "  -\n"
            "    - 1\n"
            "    - 2\n"
            "  -\n"
            "    x: 3\n"
        )
        doc = basicyaml.loads(yaml)
        self.assertEqual(doc.to_python(), {'matrix': [[1, 2], {'x': 3}]})

    def test_sequence_item_nested_under_inline_key(self):
        yaml = (
            "jobs:\n"
            "  - name: build\n"
            "    steps:\n"
            "      - make\n"
            "      - make test\n"
            "  - name: deploy\n"
        )
        doc = basicyaml.loads(yaml)
        self.assertEqual(doc.to_python(), {'jobs': [
            {'name': 'build', 'steps': ['make', 'make test']},
            {'name': 'deploy'},
        ]})

    def test_empty_value_is_empty_mapping(self):
        doc = basicyaml.loads("empty:\nnext: 1\n")
        self.assertTrue(doc['empty'].is_map())
        self.assertEqual(len(doc['empty']), 0)
        self.assertEqual(doc.value('next', 0), 1)

    def test_empty_value_at_end_of_input(self):
        doc = basicyaml.loads("last:")
        self.assertEqual(doc.to_python(), {'last': {}})

    def test_duplicate_key_last_wins(self):
        doc = basicyaml.loads("a: 1\nb: 2\na: 3\n")
        self.assertEqual(doc.to_python(), {'a': 3, 'b': 2})

    def test_comments_and_blank_lines(self):
        yaml = (
            "# header\n"
            "\n"
            "a: 1   # trailing comment\n"
            "   \n"
            "b:\n"
            "  # inside\n"
            "  c: 2\n"
        )
        doc = basicyaml.loads(yaml)
        self.assertEqual(doc.to_python(), {'a': 1, 'b': {'c': 2}})

    def test_crlf_line_endings(self):
        doc = basicyaml.loads("a: 1\r\nb:\r\n  - x\r\n")
        self.assertEqual(doc.to_python(), {'a': 1, 'b': ['x']})

    def test_colon_without_space_is_not_entry(self):
        doc = basicyaml.loads("url: http://example.com:8080/path\n"
                              "list:\n  - http://example.com\n")
        self.assertEqual(doc['url'].as_str(), 'http://example.com:8080/path')
        self.assertEqual(doc['list'][0].as_str(), 'http://example.com')


class TestScalars(unittest.TestCase):
    """Test quoting, escapes and multi-line plain scalars."""

    def test_quoted_values(self):
        doc = basicyaml.loads('a: "hello: world"\nb: \'single\'\nc: ""\n')
        self.assertEqual(doc['a'].as_str(), 'hello: world')
        self.assertEqual(doc['b'].as_str(), 'single')
        self.assertEqual(doc['c'].as_str(), '')

    def test_escapes(self):
        doc = basicyaml.loads(r'a: "line\nnext\ttab \\ \" \' \q"')
        self.assertEqual(doc['a'].as_str(), 'line\nnext\ttab \\ " \' q')

    def test_quoted_key(self):
        doc = basicyaml.loads('"my key": 1\n')
        self.assertEqual(doc.value('my key', 0), 1)

    def test_quoted_number_still_typed_on_conversion(self):
        """Quoting is presentation only; typing goes by the text."""
        doc = basicyaml.loads('a: "42"')
        self.assertEqual(doc['a'].as_str(), '42')
        self.assertEqual(doc['a'].to_int(), 42)

    def test_plain_continuation(self):
        doc = basicyaml.loads("msg: first part\n  second part\nnext: 1\n")
        self.assertEqual(doc['msg'].as_str(), 'first part\nsecond part')
        self.assertEqual(doc.value('next', 0), 1)

    def test_scalar_nodes_are_plain(self):
        doc = basicyaml.loads("a: x")
        node = doc.root.value['a']
        self.assertIsInstance(node, ScalarNode)
        self.assertIs(node.style, ScalarStyle.PLAIN)

    def test_start_marks(self):
        doc = basicyaml.loads("a:\n  b: value\n")
        mark = doc.root.value['a'].value['b'].start_mark
        self.assertEqual(mark.line, 1)
        self.assertEqual(mark.column, 5)


class TestNodes(unittest.TestCase):
    """Test the frozen node tree."""

    def test_nodes_are_immutable(self):
        doc = basicyaml.loads("a: [1, 2]\nb: x\n")
        with self.assertRaises(AttributeError):
            doc.root.value['b'].value = 'y'
        with self.assertRaises(TypeError):
            doc.root.value['c'] = ScalarNode('z')
        self.assertIsInstance(doc.root.value['a'].value, tuple)

    def test_node_equality(self):
        self.assertEqual(ScalarNode('1'), ScalarNode('1', style=ScalarStyle.LITERAL))
        self.assertEqual(SequenceNode([ScalarNode('a')]),
                         SequenceNode([ScalarNode('a')], flow_style=True))
        self.assertNotEqual(SequenceNode(), MappingNode())
        self.assertEqual(MappingNode({'k': ScalarNode('v')}),
                         MappingNode({'k': ScalarNode('v')}))

    def test_flow_style_recorded(self):
        doc = basicyaml.loads("a: [1]\nb:\n  - 1\n")
        self.assertTrue(doc.root.value['a'].flow_style)
        self.assertFalse(doc.root.value['b'].flow_style)

    def test_documents_are_independent(self):
        first = basicyaml.loads("a: 1")
        second = basicyaml.loads("b: 2")
        self.assertEqual(list(first), ['a'])
        self.assertEqual(list(second), ['b'])


if __name__ == '__main__':
    unittest.main()
