"""
basicyaml - a small, strict YAML subset parser for configuration files

Parses indentation-structured mappings, sequences, scalars, block scalars
(``|`` and ``>``) and single-line flow collections into an immutable node
tree, and offers a read-only query layer on top of it.

Key features:
- The document root is always a mapping
- Path lookup with typed defaults: doc.value("server.port", 8080)
- Scalar type inference: int, float, bool, null, str
- Structural errors carry 1-based line and column numbers
- Fixed-format emission back to text: dumps()

Example:
    >>> import basicyaml
    >>> doc = basicyaml.loads("name: Alice\\nports: [80, 443]")
    >>> doc["name"].as_str()
    'Alice'
    >>> doc.value("ports[1]", 0)
    443
    >>> doc.to_python()
    {'name': 'Alice', 'ports': [80, 443]}
"""

import io as _io
import json as _json

from basicyaml.constructor import Constructor, StringConstructor, construct_document
from basicyaml.emitter import Emitter, dump, dumps, print_tree
from basicyaml.error import (
    Mark,
    YAMLError,
    MarkedYAMLError,
    ReaderError,
    ScannerError,
    ParserError,
    NodeTypeError,
)
from basicyaml.nodes import (
    Node,
    ScalarNode,
    SequenceNode,
    MappingNode,
    CollectionNode,
    ScalarStyle,
)
from basicyaml.parser import Parser, parse
from basicyaml.reader import Reader
from basicyaml.resolver import classify_scalar, to_bool, to_int, to_float
from basicyaml.view import Document, NodeView


def loads(text, name='<string>'):
    """
    Parse YAML text into a Document.

    Args:
        text: YAML source as str (or bytes, decoded as UTF-8)
        name: Stream name used in error messages

    Returns:
        Document whose root is always a mapping

    Raises:
        ScannerError, ParserError: on the first structural problem
    """
    if isinstance(text, (bytes, bytearray)):
        return load(_io.BytesIO(bytes(text)), name=name)
    return Document(parse(_io.StringIO(text), name=name), name=name)


def load(stream, name=None, encoding='utf-8'):
    """
    Parse YAML from a file-like object yielding text or bytes lines.

    The stream is read lazily, one line at a time, and is not closed.

    Args:
        stream: Open file-like object (text or binary mode)
        name: Stream name used in error messages; defaults to stream.name
        encoding: Encoding used for binary streams

    Returns:
        Document whose root is always a mapping
    """
    if name is None:
        name = getattr(stream, 'name', '<stream>')
        if not isinstance(name, str):
            name = '<stream>'
    return Document(parse(stream, name=name, encoding=encoding), name=name)


def load_file(path, encoding='utf-8'):
    """
    Parse a YAML file into a Document.

    Raises:
        ReaderError: if the file cannot be opened
    """
    try:
        stream = open(path, 'rb')
    except OSError as exc:
        raise ReaderError(
            None, None,
            "cannot open file %r: %s" % (str(path), exc.strerror)) from exc
    with stream:
        return load(stream, name=str(path), encoding=encoding)


def _to_python(obj):
    if isinstance(obj, (Document, NodeView)):
        return obj.to_python()
    if isinstance(obj, Node):
        return construct_document(obj)
    return obj


# JSON Serialization Support
def json_dumps(obj, **kwargs):
    """
    Serialize obj to a JSON formatted string, with node support.

    Documents, views and nodes are converted with to_python() first.

    Example:
        >>> import basicyaml
        >>> basicyaml.json_dumps(basicyaml.loads("name: Alice\\nage: 30"))
        '{"name": "Alice", "age": 30}'
    """
    return _json.dumps(_to_python(obj), **kwargs)


def json_dump(obj, fp, **kwargs):
    """
    Serialize obj to JSON and write it to a file-like object.

    Documents, views and nodes are converted with to_python() first.
    """
    return _json.dump(_to_python(obj), fp, **kwargs)


__version__ = "0.9.0"

__all__ = [
    "Document",
    "NodeView",
    "Node",
    "ScalarNode",
    "SequenceNode",
    "MappingNode",
    "CollectionNode",
    "ScalarStyle",
    "Mark",
    "YAMLError",
    "MarkedYAMLError",
    "ReaderError",
    "ScannerError",
    "ParserError",
    "NodeTypeError",
    "Reader",
    "Parser",
    "Emitter",
    "Constructor",
    "StringConstructor",
    "parse",
    "load",
    "loads",
    "load_file",
    "dump",
    "dumps",
    "print_tree",
    "classify_scalar",
    "construct_document",
    "to_bool",
    "to_int",
    "to_float",
    "json_dumps",
    "json_dump",
]
