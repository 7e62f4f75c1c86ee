"""
Literal recognition for JavaScript/TypeScript call arguments.

Reduces tree-sitter expression nodes to LiteralArgument values:

- string literals and template strings without substitutions -> text
  (escape sequences cooked)
- ``a + b`` chains made only of text literals (through parentheses) ->
  one folded text literal
- ``null``, ``undefined`` and numeric zero -> omitted marker
- object literals -> structured, with their ``key: value`` members
- anything else -> other

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List, Optional

from tree_sitter import Node

from perevod_core.messages.models import LiteralArgument, ObjectProperty

TEXT_NODE_TYPES = frozenset({"string", "template_string"})
OMITTED_NODE_TYPES = frozenset({"null", "undefined"})
PROPERTY_KEY_TYPES = frozenset({"property_identifier", "identifier", "string", "number"})

_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})
_SURROGATE = re.compile("[\ud800-\udfff]")


def node_text(node: Node, source: bytes) -> str:
    """Return the exact source text of a node."""
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def to_literal(node: Node, source: bytes) -> LiteralArgument:
    """
    Classify an expression node as a literal argument.

    Args:
        node: Expression node (a call argument or object property value).
        source: Source bytes the tree was parsed from.

    Returns:
        The literal shape of the expression.
    """
    raw = node_text(node, source)

    folded = fold_string_addition(node, source)
    if folded is not None:
        return LiteralArgument.text_literal(folded, source=raw)

    text = text_literal_value(node, source)
    if text is not None:
        return LiteralArgument.text_literal(text, source=raw)

    if node.type in OMITTED_NODE_TYPES or (node.type == "identifier" and raw == "undefined"):
        return LiteralArgument.omitted(source=raw)

    if node.type == "number" and is_zero_number(raw):
        return LiteralArgument.omitted(source=raw)

    if node.type == "object":
        return LiteralArgument.structured(object_properties(node, source), source=raw)

    return LiteralArgument.other(source=raw)


def text_literal_value(node: Node, source: bytes) -> Optional[str]:
    """Return the cooked value of a string or plain template literal, else None."""
    if node.type == "string":
        return cook_string(node_text(node, source)[1:-1])

    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.children):
            return None
        raw = node_text(node, source)[1:-1]
        return cook_string(raw.replace("\r\n", "\n").replace("\r", "\n"))

    return None


def fold_string_addition(node: Node, source: bytes) -> Optional[str]:
    """
    Fold a ``+`` expression of text literals into one string.

    Returns None if the node is not an addition, or if any operand is
    neither a text literal nor another foldable addition.

    Example:
        ``'Hello, ' + ("big" + ' world')`` folds to ``'Hello, big world'``.
    """
    addition = _addition_expression(node)
    if addition is None:
        return None

    parts: List[str] = []
    if _collect_addition(addition, source, parts):
        return "".join(parts)
    return None


def object_properties(node: Node, source: bytes) -> List[ObjectProperty]:
    """
    Read the ``key: value`` members of an object literal, in source order.

    Shorthand, spread, method and computed-key members are not comment
    content and are left out.
    """
    properties: List[ObjectProperty] = []
    for child in node.named_children:
        if child.type != "pair":
            continue

        key_node = child.child_by_field_name("key")
        value_node = child.child_by_field_name("value")
        if key_node is None or value_node is None or key_node.type not in PROPERTY_KEY_TYPES:
            continue

        if key_node.type == "string":
            key = cook_string(node_text(key_node, source)[1:-1])
        else:
            key = node_text(key_node, source)

        properties.append(ObjectProperty(key=key, value=to_literal(value_node, source)))
    return properties


def is_zero_number(raw: str) -> bool:
    """
    Check whether a numeric literal denotes zero.

    BigInt literals (``0n``) are not numbers here.

    Examples:
        >>> is_zero_number("0"), is_zero_number("0.0"), is_zero_number("0x0")
        (True, True, True)
        >>> is_zero_number("1"), is_zero_number("0n")
        (False, False)
    """
    literal = raw.replace("_", "").lower()
    if literal.endswith("n"):
        return False
    try:
        if literal.startswith(("0x", "0o", "0b")):
            return int(literal, 0) == 0
        return float(literal) == 0
    except ValueError:
        return False


def cook_string(raw: str) -> str:
    """
    Resolve JavaScript escape sequences in the body of a string literal.

    Handles the single-character escapes, \\xHH, \\uHHHH, \\u{H...} and line
    continuations. Escaped surrogate pairs are joined into one character.
    """
    cooked = _ESCAPE.sub(_unescape, raw)
    if _SURROGATE.search(cooked):
        cooked = cooked.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")
    return cooked


def _unescape(match: "re.Match[str]") -> str:
    sequence = match.group(1)
    if sequence in _LINE_CONTINUATIONS:
        return ""
    if sequence.startswith("u{"):
        code_point = int(sequence[2:-1], 16)
        return chr(code_point) if code_point <= 0x10FFFF else match.group(0)
    if len(sequence) > 1 and sequence[0] in ("u", "x"):
        return chr(int(sequence[1:], 16))
    return _SIMPLE_ESCAPES.get(sequence, sequence)


def _unwrap_parentheses(node: Node) -> Node:
    while node.type == "parenthesized_expression" and node.named_child_count == 1:
        node = node.named_children[0]
    return node


def _addition_expression(node: Node) -> Optional[Node]:
    node = _unwrap_parentheses(node)
    if node.type != "binary_expression":
        return None
    operator = node.child_by_field_name("operator")
    if operator is None or operator.type != "+":
        return None
    return node


def _collect_addition(addition: Node, source: bytes, parts: List[str]) -> bool:
    for side in ("left", "right"):
        operand = addition.child_by_field_name(side)
        if operand is None:
            return False

        text = text_literal_value(operand, source)
        if text is not None:
            parts.append(text)
            continue

        nested = _addition_expression(operand)
        if nested is None or not _collect_addition(nested, source, parts):
            return False
    return True


__all__ = [
    "to_literal",
    "text_literal_value",
    "fold_string_addition",
    "object_properties",
    "is_zero_number",
    "cook_string",
    "node_text",
]
