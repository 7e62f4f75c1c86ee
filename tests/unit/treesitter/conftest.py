"""Fixtures for tree-sitter front end tests."""

import pytest
from tree_sitter_language_pack import get_parser

from perevod_core.treesitter.literals import to_literal


@pytest.fixture(scope="module")
def js_parser():
    """JavaScript parser from tree-sitter-language-pack."""
    return get_parser("javascript")


@pytest.fixture
def parse_arguments(js_parser):
    """Parse ``f(<code>);`` and return (argument nodes, source bytes)."""

    def _parse(code):
        source = f"f({code});".encode("utf-8")
        tree = js_parser.parse(source)
        call = tree.root_node.named_children[0].named_children[0]
        arguments = call.child_by_field_name("arguments")
        return [child for child in arguments.named_children if child.type != "comment"], source

    return _parse


@pytest.fixture
def literal(parse_arguments):
    """Classify the single argument of ``f(<code>);``."""

    def _literal(code):
        nodes, source = parse_arguments(code)
        assert len(nodes) == 1
        return to_literal(nodes[0], source)

    return _literal
