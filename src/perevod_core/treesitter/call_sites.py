"""
Call site scanning for JavaScript/TypeScript trees.

Walks a parsed tree and turns every ``call_expression`` into a CallSite:
the callee reduced to a dotted name and the arguments reduced to literals.
Unlike the call graph walk of a function body, the scan covers the whole
file, nested functions and class bodies included.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Iterator, List, Optional

import structlog
from tree_sitter import Node, Tree

from .literals import cook_string, node_text, to_literal
from .models import ASTNodeLocation, CallSite

logger = structlog.get_logger(__name__)

CALL_NODE_TYPES = frozenset({"call_expression"})
SKIPPED_ARGUMENT_TYPES = frozenset({"comment"})


class CallSiteScanner:
    """
    Finds call sites in a JavaScript, TypeScript or TSX tree.

    Example:
        >>> from tree_sitter_language_pack import get_parser
        >>> source = b"i18n.t('Hello', null, {comment: 'Greeting'});"
        >>> tree = get_parser("javascript").parse(source)
        >>> site = next(CallSiteScanner().scan(tree, source))
        >>> site.callee_name, [arg.kind.value for arg in site.arguments]
        ('i18n.t', ['text-literal', 'omitted-marker', 'structured'])
    """

    def __init__(self) -> None:
        self._log = logger.bind(scanner="CallSiteScanner")

    def scan(
        self,
        tree: Tree,
        source: bytes,
        file_path: Optional[str] = None,
    ) -> Iterator[CallSite]:
        """
        Yield call sites in source order (outer calls before their arguments).

        Args:
            tree: Parsed tree-sitter AST.
            source: Source bytes the tree was parsed from.
            file_path: Path recorded on each call site for references.
        """
        count = 0
        for node in self._iter_call_nodes(tree.root_node):
            site = self.parse_call(node, source, file_path)
            if site is not None:
                count += 1
                yield site

        self._log.debug("scan_complete", file_path=file_path, call_sites=count)

    def parse_call(
        self,
        call_node: Node,
        source: bytes,
        file_path: Optional[str] = None,
    ) -> Optional[CallSite]:
        """
        Build a CallSite from a call_expression node.

        Returns None for tagged templates (``t`hello```), whose arguments
        are not an argument list.
        """
        args_node = call_node.child_by_field_name("arguments")
        if args_node is None or args_node.type != "arguments":
            return None

        func_node = call_node.child_by_field_name("function")
        callee_name = self.callee_name(func_node, source) if func_node is not None else None

        arguments = [
            to_literal(child, source)
            for child in args_node.named_children
            if child.type not in SKIPPED_ARGUMENT_TYPES
        ]

        return CallSite(
            callee_name=callee_name,
            arguments=arguments,
            location=self._create_location(call_node),
            file_path=file_path,
        )

    def callee_name(self, func_node: Node, source: bytes) -> Optional[str]:
        """
        Reduce a callee expression to a dotted name.

        ``_`` -> "_", ``this.t`` -> "this.t", ``app.i18n.t`` -> "app.i18n.t".
        Optional chaining (``i18n?.t``) and string subscripts (``i18n["t"]``)
        read the same as ``i18n.t``.
        Returns None for any other callee shape.
        """
        parts: List[str] = []
        node: Optional[Node] = func_node

        while node is not None and node.type in ("member_expression", "subscript_expression"):
            if node.type == "member_expression":
                property_node = node.child_by_field_name("property")
                if property_node is None or property_node.type not in (
                    "property_identifier",
                    "private_property_identifier",
                ):
                    return None
                parts.append(node_text(property_node, source))
            else:
                index_node = node.child_by_field_name("index")
                if index_node is None or index_node.type != "string":
                    return None
                parts.append(cook_string(node_text(index_node, source)[1:-1]))
            node = node.child_by_field_name("object")

        if node is None or node.type not in ("identifier", "this"):
            return None

        parts.append(node_text(node, source))
        return ".".join(reversed(parts))

    def _iter_call_nodes(self, root: Node) -> Iterator[Node]:
        # Explicit stack: generated bundles nest deeper than the recursion limit.
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type in CALL_NODE_TYPES:
                yield node
            stack.extend(reversed(node.children))

    def _create_location(self, node: Node) -> ASTNodeLocation:
        return ASTNodeLocation(
            start_line=node.start_point[0],
            end_line=node.end_point[0],
            start_column=node.start_point[1],
            end_column=node.end_point[1],
            start_byte=node.start_byte,
            end_byte=node.end_byte,
        )


__all__ = [
    "CallSiteScanner",
    "CALL_NODE_TYPES",
]
