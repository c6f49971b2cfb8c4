"""Tests for tree serialization.

Covers per-kind rendering, the self-closing form, attribute output, the
single-child / mixed-content / pretty-printed child policies, indentation
parameters, buffer accumulation and the depth guard.
"""

import io
import logging

import pytest

from xml_node_tree.serialization import (
    XML_HEADER,
    XmlSerializer,
    serialize,
    serialize_document,
    serialize_into,
)
from xml_node_tree.shared import SerializationDepthError, SerializerConfig
from xml_node_tree.tree import (
    new_cdata,
    new_comment,
    new_element,
    new_entity,
    new_text,
    new_xml_tree,
)


def _list(*items: str):
    """Build ``<ul>`` with one ``<li>`` per item."""
    return new_xml_tree("ul", [new_xml_tree("li", [new_text(i)]) for i in items])


class TestLeafRendering:
    """Test rendering of leaf nodes."""

    def test_text_is_escaped(self) -> None:
        """Test text content is escaped with no surrounding markers."""
        assert serialize(new_text('1 < 2 & "x"')) == "1 &lt; 2 &amp; &quot;x&quot;"

    def test_comment(self) -> None:
        """Test comments are wrapped and their content escaped."""
        assert serialize(new_comment("a < b")) == "<!-- a &lt; b -->"

    def test_cdata_is_verbatim(self) -> None:
        """Test CDATA content is not escaped."""
        assert serialize(new_cdata("<x>&</x>")) == "<![CDATA[<x>&</x>]]>"

    def test_entity_is_verbatim(self) -> None:
        """Test entity nodes render as references."""
        assert serialize(new_entity("nbsp")) == "&nbsp;"


class TestElementRendering:
    """Test element rendering rules."""

    def test_empty_element_self_closes_with_space(self) -> None:
        """Test zero children gives ``<tag />``."""
        assert serialize(new_element("br")) == "<br />"

    def test_single_text_child_has_no_whitespace(self) -> None:
        """Test an element wrapping one text node stays on one line."""
        assert serialize(new_xml_tree("p", [new_text("hi")])) == "<p>hi</p>"

    def test_single_element_child_has_no_whitespace(self) -> None:
        """Test an element wrapping one element stays adjacent."""
        tree = new_xml_tree("head", [new_xml_tree("title", [new_text("T")])])

        assert serialize(tree) == "<head><title>T</title></head>"

    def test_mixed_content_suppresses_whitespace(self) -> None:
        """Test a text sibling disables pretty-printing."""
        tree = new_xml_tree("a", [
            new_text("x"),
            new_xml_tree("b", [new_text("y")]),
        ])

        assert serialize(tree) == "<a>x<b>y</b></a>"

    def test_text_among_many_elements_suppresses_whitespace(self) -> None:
        """Test one text child among several elements is enough."""
        tree = new_xml_tree("p", [
            new_element("br"),
            new_element("hr"),
            new_text("tail"),
        ])

        assert serialize(tree) == "<p><br /><hr />tail</p>"

    def test_entity_child_suppresses_whitespace(self) -> None:
        """Test an entity sibling counts as mixed content."""
        tree = new_xml_tree("p", [new_element("b"), new_entity("amp")])

        assert serialize(tree) == "<p><b />&amp;</p>"

    def test_only_text_children_suppress_whitespace(self) -> None:
        """Test several text runs are written back to back."""
        tree = new_xml_tree("p", [new_text("a"), new_text("b")])

        assert serialize(tree) == "<p>ab</p>"

    def test_element_children_are_pretty_printed(self) -> None:
        """Test pure element content is indented one child per line."""
        assert serialize(_list("one", "two")) == (
            "<ul>\n"
            "  <li>one</li>\n"
            "  <li>two</li>\n"
            "</ul>"
        )

    def test_comment_and_cdata_children_are_pretty_printed(self) -> None:
        """Test comments and CDATA do not count as mixed content."""
        tree = new_xml_tree("r", [new_comment("c"), new_cdata("d")])

        assert serialize(tree) == "<r>\n  <!-- c -->\n  <![CDATA[d]]>\n</r>"

    def test_nested_indentation(self) -> None:
        """Test closing tags align with their opening tag at every level."""
        tree = new_xml_tree("html", [
            new_xml_tree("head", [new_xml_tree("title", [new_text("T")])]),
            new_xml_tree("body", [
                new_xml_tree("p", [new_text("a")]),
                new_xml_tree("p", [new_text("b")]),
            ]),
        ])

        assert serialize(tree) == (
            "<html>\n"
            "  <head><title>T</title></head>\n"
            "  <body>\n"
            "    <p>a</p>\n"
            "    <p>b</p>\n"
            "  </body>\n"
            "</html>"
        )

    def test_single_child_passes_indent_down(self) -> None:
        """Test a single child is rendered one indent level deeper."""
        tree = new_xml_tree("div", [_list("a", "b")])

        assert serialize(tree) == (
            "<div><ul>\n"
            "    <li>a</li>\n"
            "    <li>b</li>\n"
            "  </ul></div>"
        )

    def test_indent_arguments(self) -> None:
        """Test explicit indent level and width."""
        assert serialize(_list("one", "two"), indent=4, indent_width=3) == (
            "<ul>\n"
            "       <li>one</li>\n"
            "       <li>two</li>\n"
            "    </ul>"
        )


class TestAttributeRendering:
    """Test attribute output."""

    def test_attribute_with_children(self) -> None:
        """Test attributes appear in the start tag."""
        tree = new_xml_tree("a", [new_text("x")], {"href": "http://x"})

        assert serialize(tree) == '<a href="http://x">x</a>'

    def test_attribute_values_are_escaped(self) -> None:
        """Test attribute values use the escaping rules."""
        tree = new_xml_tree("a", [], {"title": 'say "hi" & <bye>'})

        assert serialize(tree) == (
            '<a title="say &quot;hi&quot; &amp; &lt;bye&gt;" />'
        )

    def test_attributes_follow_mapping_order(self) -> None:
        """Test attributes are written in the mapping's iteration order."""
        attributes = {"src": "a.png", "alt": "A"}
        tree = new_xml_tree("img", [], attributes)

        expected = "<img" + "".join(
            f' {key}="{value}"' for key, value in attributes.items()
        ) + " />"
        assert serialize(tree) == expected

    def test_empty_mapping_writes_nothing(self) -> None:
        """Test an attached but empty mapping adds no attribute text."""
        tree = new_element("br")
        tree.attributes = {}

        assert serialize(tree) == "<br />"


class TestSerializeContract:
    """Test buffers, absent nodes, determinism and the declaration."""

    def test_none_produces_nothing(self) -> None:
        """Test serializing an absent node is a no-op."""
        assert serialize(None) == ""

    def test_serialize_into_none_leaves_buffer(self) -> None:
        """Test an absent node leaves the buffer untouched."""
        buffer = io.StringIO()
        buffer.write("keep")

        serialize_into(buffer, None)

        assert buffer.getvalue() == "keep"

    def test_serialize_into_accumulates(self) -> None:
        """Test repeated calls build up a larger document."""
        buffer = io.StringIO()

        serialize_into(buffer, new_element("a"))
        serialize_into(buffer, new_text(" & "))
        serialize_into(buffer, new_element("b"))

        assert buffer.getvalue() == "<a /> &amp; <b />"

    def test_repeated_serialization_is_identical(self) -> None:
        """Test the same tree always produces the same output."""
        tree = new_xml_tree("r", [_list("a"), new_comment("c")], {"x": "1", "y": "2"})

        assert serialize(tree) == serialize(tree)

    def test_no_declaration_by_default(self) -> None:
        """Test fragments never carry the XML declaration."""
        assert not serialize(new_element("r")).startswith("<?xml")

    def test_serialize_document_prepends_header(self) -> None:
        """Test the document form starts with the declaration."""
        assert XML_HEADER == '<?xml version="1.0" encoding="UTF-8" ?>\n'
        assert serialize_document(new_element("r")) == XML_HEADER + "<r />"

    def test_str_matches_serialize(self) -> None:
        """Test str() of a node is its serialization."""
        tree = _list("one", "two")

        assert str(tree) == serialize(tree)


class TestXmlSerializer:
    """Test the configured serializer."""

    def test_config_indent_width(self) -> None:
        """Test the configured indent width is used by default."""
        serializer = XmlSerializer(SerializerConfig(indent_width=4))

        assert serializer.serialize(_list("a", "b")) == (
            "<ul>\n    <li>a</li>\n    <li>b</li>\n</ul>"
        )

    def test_config_indent_level(self) -> None:
        """Test the configured starting indentation."""
        serializer = XmlSerializer(SerializerConfig(indent_level=2))

        assert serializer.serialize(_list("a", "b")) == (
            "<ul>\n    <li>a</li>\n    <li>b</li>\n  </ul>"
        )

    def test_render_respects_include_header(self) -> None:
        """Test render adds the declaration only when configured."""
        tree = new_element("r")

        assert XmlSerializer().render(tree) == "<r />"
        assert XmlSerializer(SerializerConfig(include_header=True)).render(tree) == (
            XML_HEADER + "<r />"
        )

    def test_max_depth_rejects_deep_trees(self) -> None:
        """Test trees deeper than max_depth raise."""
        serializer = XmlSerializer(SerializerConfig(max_depth=2))
        shallow = new_xml_tree("a", [new_element("b")])
        deep = new_xml_tree("a", [new_xml_tree("b", [new_element("c")])])

        assert serializer.serialize(shallow) == "<a><b /></a>"
        with pytest.raises(SerializationDepthError) as exc_info:
            serializer.serialize(deep)
        assert exc_info.value.depth == 3
        assert exc_info.value.max_depth == 2

    def test_deep_tree_without_limit(self) -> None:
        """Test deep nesting does not exhaust the interpreter stack."""
        depth = 3000
        root = new_element("d")
        current = root
        for _ in range(depth - 1):
            child = new_element("d")
            current.add(child)
            current = child

        output = serialize(root)

        assert output.count("<d>") == depth - 1
        assert output.count("<d />") == 1
        assert output.endswith("</d></d>")

    def test_debug_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a debug record is emitted per serialized tree."""
        caplog.set_level(logging.DEBUG, logger="xml_node_tree.serialization.serializer")

        XmlSerializer(correlation_id="abc").serialize(_list("a"))

        records = [r for r in caplog.records if r.getMessage() == "Serialized tree"]
        assert len(records) == 1
        assert records[0].correlation_id == "abc"
        assert records[0].nodes_written == 3
