"""
Load a YAML file and print it back.

Usage:
    python3 -m basicyaml <file.yaml> [--path P] [--json] [--raw] [--tree]

Without options the parsed document is re-emitted in fixed block layout.
--path prints only the node at a dotted path such as servers[0].host.
"""

import argparse
import logging
import sys

import basicyaml
from basicyaml.constructor import StringConstructor, construct_document


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='basicyaml', description='Parse a YAML file and print it')
    parser.add_argument('file', help='YAML file to load')
    parser.add_argument('--path', '-p', help='Only print the node at this path')
    parser.add_argument('--json', '-j', action='store_true',
                        help='Print as JSON instead of YAML')
    parser.add_argument('--raw', '-r', action='store_true',
                        help='With --json, keep every scalar as a string')
    parser.add_argument('--tree', '-t', action='store_true',
                        help='Print an indented tree display')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log parser progress to stderr')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(name)s: %(message)s')

    try:
        doc = basicyaml.load_file(args.file)
    except basicyaml.YAMLError as e:
        print("%s: %s" % (args.file, e), file=sys.stderr)
        return 1

    view = doc.view()
    if args.path is not None:
        view = doc.at_path(args.path)
        if not view:
            print("%s: path not found: %s" % (args.file, args.path),
                  file=sys.stderr)
            return 1

    if args.json:
        if args.raw:
            data = construct_document(view.node, StringConstructor())
        else:
            data = view.to_python()
        print(basicyaml.json_dumps(data, indent=2))
    elif args.tree:
        basicyaml.print_tree(view.node, sys.stdout)
    elif view.is_scalar():
        print(view.as_str())
    else:
        basicyaml.dump(view.node, sys.stdout)
    return 0


if __name__ == '__main__':
    sys.exit(main())
