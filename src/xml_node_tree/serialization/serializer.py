"""Tree serialization for xml_node_tree.

Converts a node and its subtree into markup. Children of an element are
pretty-printed (one per line, indented) only when none of them is a text or
entity node: inserting whitespace next to character data would change the
document, since ``a<b>b</b>`` is not the same as ``a <b>b</b>``.

The traversal uses an explicit work stack instead of recursion, so very deep
trees do not hit the interpreter's recursion limit. ``SerializerConfig.max_depth``
can be set to reject them instead.
"""

import io
from typing import List, Optional, TextIO, Tuple, Union

from xml_node_tree.shared.config import SerializerConfig
from xml_node_tree.shared.errors import SerializationDepthError
from xml_node_tree.shared.logging import get_logger
from xml_node_tree.tree.nodes import NodeKind, XmlNode

from .escaping import add_escaped

XML_HEADER = '<?xml version="1.0" encoding="UTF-8" ?>\n'
"""Declaration for callers writing a complete XML document."""

_TEXT_LIKE = (NodeKind.TEXT, NodeKind.ENTITY)

# (node, indent, depth) or a literal string still to be written
_WorkItem = Union[str, Tuple[XmlNode, int, int]]


def _has_mixed_content(children: List[XmlNode]) -> bool:
    """Check whether any child is character data (text or entity)."""
    return any(child.kind in _TEXT_LIKE for child in children)


class XmlSerializer:
    """Serializer bound to a ``SerializerConfig``."""

    def __init__(
        self,
        config: Optional[SerializerConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or SerializerConfig()
        self.logger = get_logger(__name__, correlation_id, "serializer")

    def serialize_into(
        self,
        out: TextIO,
        node: Optional[XmlNode],
        indent: Optional[int] = None,
        indent_width: Optional[int] = None,
    ) -> None:
        """Append the textual representation of ``node`` to ``out``.

        Args:
            out: Writable text buffer; previous content is kept
            node: Node to write; None writes nothing
            indent: Indentation of ``node`` itself (default from config)
            indent_width: Extra indentation per level (default from config)

        Raises:
            SerializationDepthError: If the tree is deeper than ``max_depth``
        """
        if node is None:
            self.logger.debug("Skipping serialization of absent node")
            return

        level = self.config.indent_level if indent is None else indent
        width = self.config.indent_width if indent_width is None else indent_width
        max_depth = self.config.max_depth

        stack: List[_WorkItem] = [(node, level, 1)]
        nodes_written = 0

        while stack:
            item = stack.pop()
            if isinstance(item, str):
                out.write(item)
                continue

            current, current_indent, depth = item
            if max_depth is not None and depth > max_depth:
                raise SerializationDepthError(depth, max_depth)
            nodes_written += 1

            kind = current.kind
            if kind is NodeKind.ELEMENT:
                stack.extend(reversed(
                    self._write_element(out, current, current_indent, width, depth)
                ))
            elif kind is NodeKind.TEXT:
                add_escaped(out, current.text)
            elif kind is NodeKind.COMMENT:
                out.write("<!-- ")
                add_escaped(out, current.text)
                out.write(" -->")
            elif kind is NodeKind.CDATA:
                out.write("<![CDATA[")
                out.write(current.text)
                out.write("]]>")
            elif kind is NodeKind.ENTITY:
                out.write("&")
                out.write(current.text)
                out.write(";")

        self.logger.debug(
            "Serialized tree",
            extra={"root_kind": node.kind.value, "nodes_written": nodes_written},
        )

    def _write_element(
        self,
        out: TextIO,
        element: XmlNode,
        indent: int,
        width: int,
        depth: int,
    ) -> List[_WorkItem]:
        """Write the start tag of ``element`` and return the remaining work."""
        tag = element.tag
        out.write("<")
        out.write(tag)

        attributes = element.attributes
        if attributes is not None:
            for key, value in attributes.items():
                out.write(" ")
                out.write(key)
                out.write('="')
                add_escaped(out, value)
                out.write('"')

        children = element.children
        if not children:
            out.write(" />")
            return []
        out.write(">")

        child_indent = indent + width
        pending: List[_WorkItem] = []
        if len(children) == 1 or _has_mixed_content(children):
            for child in children:
                pending.append((child, child_indent, depth + 1))
        else:
            line_break = "\n" + " " * child_indent
            for child in children:
                pending.append(line_break)
                pending.append((child, child_indent, depth + 1))
            pending.append("\n" + " " * indent)

        pending.append(f"</{tag}>")
        return pending

    def serialize(
        self,
        node: Optional[XmlNode],
        indent: Optional[int] = None,
        indent_width: Optional[int] = None,
    ) -> str:
        """Return the textual representation of ``node`` without a declaration."""
        buffer = io.StringIO()
        self.serialize_into(buffer, node, indent, indent_width)
        return buffer.getvalue()

    def serialize_document(
        self,
        node: Optional[XmlNode],
        indent: Optional[int] = None,
        indent_width: Optional[int] = None,
    ) -> str:
        """Return ``XML_HEADER`` followed by the representation of ``node``."""
        buffer = io.StringIO()
        buffer.write(XML_HEADER)
        self.serialize_into(buffer, node, indent, indent_width)
        return buffer.getvalue()

    def render(self, node: Optional[XmlNode]) -> str:
        """Serialize ``node``, as a document if ``config.include_header`` is set."""
        if self.config.include_header:
            return self.serialize_document(node)
        return self.serialize(node)


_default_serializer = XmlSerializer()


def serialize_into(
    out: TextIO,
    node: Optional[XmlNode],
    indent: int = 0,
    indent_width: int = 2,
) -> None:
    """Append the textual representation of ``node`` to ``out``."""
    _default_serializer.serialize_into(out, node, indent, indent_width)


def serialize(node: Optional[XmlNode], indent: int = 0, indent_width: int = 2) -> str:
    """Convert ``node`` into its string representation.

    No ``<?xml ...?>`` declaration is produced, so that the produced fragments
    are composable.
    """
    return _default_serializer.serialize(node, indent, indent_width)


def serialize_document(
    node: Optional[XmlNode], indent: int = 0, indent_width: int = 2
) -> str:
    """Convert ``node`` into a complete document starting with ``XML_HEADER``."""
    return _default_serializer.serialize_document(node, indent, indent_width)
