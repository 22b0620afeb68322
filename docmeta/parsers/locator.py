"""Declaration locator for tree-sitter JavaScript/TypeScript syntax trees.

Walks a parsed tree, finds every named function declaration and pairs
it with the raw text of the comments directly in front of it.
"""

import logging
from enum import Enum
from typing import Callable, Optional

import tree_sitter

from docmeta.parsers.structure import DeclarationSite, SourceLocation

logger = logging.getLogger(__name__)

# Node types that represent named function declarations. function_signature
# covers TypeScript overloads and ambient ('declare function') declarations.
_FUNC_TYPES = {
    "function_declaration",
    "generator_function_declaration",
    "function_signature",
}
_COMMENT_TYPE = "comment"
# Wrappers whose leading comments belong to the declaration they contain.
_WRAPPER_TYPES = {"export_statement", "ambient_declaration"}


class NodeKind(Enum):
    """The node kinds the locator distinguishes."""

    FUNCTION_DECLARATION = "function_declaration"
    OTHER = "other"


def classify(node: tree_sitter.Node) -> NodeKind:
    """Classify a node for the locator's visitor.

    Function declarations without a name (such as
    'export default function () {}') are classified as OTHER.

    Args:
        node: Any tree-sitter node.

    Returns:
        The NodeKind of the node.
    """
    if node.type in _FUNC_TYPES and node.child_by_field_name("name") is not None:
        return NodeKind.FUNCTION_DECLARATION
    return NodeKind.OTHER


class DeclarationLocator:
    """Finds named function declarations and their leading comments.

    Declarations are reported in document order: a depth-first,
    pre-order walk that visits a parent before its children and
    siblings left to right, so nested declarations follow the
    declaration that contains them.
    """

    def __init__(self) -> None:
        self._visitors: dict[
            NodeKind,
            Callable[[tree_sitter.Node, bytes], Optional[DeclarationSite]],
        ] = {
            NodeKind.FUNCTION_DECLARATION: self._visit_function,
        }

    def locate(
        self, root: tree_sitter.Node, source_bytes: bytes
    ) -> list[DeclarationSite]:
        """Collect every named function declaration under a node.

        Args:
            root: Root node of the parsed tree (usually 'program').
            source_bytes: The UTF-8 encoded source the tree was parsed from.

        Returns:
            One DeclarationSite per declaration, in document order.
        """
        sites: list[DeclarationSite] = []
        stack = [root]
        while stack:
            node = stack.pop()
            visit = self._visitors.get(classify(node))
            if visit is not None:
                site = visit(node, source_bytes)
                if site is not None:
                    sites.append(site)
            stack.extend(reversed(node.children))

        logger.debug("Located %d function declarations", len(sites))
        return sites

    def _visit_function(
        self, node: tree_sitter.Node, source_bytes: bytes
    ) -> Optional[DeclarationSite]:
        """Build the DeclarationSite for a function declaration node.

        Args:
            node: A function declaration node.
            source_bytes: Source as bytes.

        Returns:
            A DeclarationSite, or None if the node has no name.
        """
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None

        return DeclarationSite(
            name=_node_text(name_node, source_bytes),
            location=node_location(name_node, source_bytes),
            raw_comment=self._leading_comment(node, source_bytes),
        )

    def _leading_comment(self, node: tree_sitter.Node, source_bytes: bytes) -> str:
        """Return the comments directly preceding a declaration.

        The 'export' and 'declare' keywords belong to the declaration, so
        for wrapped functions the comments in front of the wrapper are used.
        Comments that share a line with the end of the previous statement
        trail that statement and are not collected.

        Args:
            node: A function declaration node.
            source_bytes: Source as bytes.

        Returns:
            The comments in source order joined by newlines, or ''.
        """
        anchor = node
        while anchor.parent is not None and anchor.parent.type in _WRAPPER_TYPES:
            anchor = anchor.parent

        comments: list[tree_sitter.Node] = []
        prev = anchor.prev_sibling
        while prev is not None and prev.type == _COMMENT_TYPE:
            comments.append(prev)
            prev = prev.prev_sibling

        if prev is not None:
            boundary_row = prev.end_point.row
            comments = [c for c in comments if c.start_point.row != boundary_row]

        return "\n".join(_node_text(c, source_bytes) for c in reversed(comments))


def _node_text(node: tree_sitter.Node, source_bytes: bytes) -> str:
    """Extract the text content of a tree-sitter node."""
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8")


def node_location(node: tree_sitter.Node, source_bytes: bytes) -> SourceLocation:
    """Return the 1-based line and character column where a node starts.

    tree-sitter reports columns in bytes, so the line prefix is decoded
    to count characters.
    """
    line_start = node.start_byte - node.start_point.column
    prefix = source_bytes[line_start : node.start_byte].decode("utf-8")
    return SourceLocation(line=node.start_point.row + 1, column=len(prefix) + 1)
