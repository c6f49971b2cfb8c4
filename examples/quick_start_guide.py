#!/usr/bin/env python3
"""
Quick Start Guide for xml_node_tree.

Builds a small document three ways (node constructors, inline helpers and an
ElementTree import) and prints the serialized output.
"""

import sys

from xml_node_tree import (
    E,
    XML_HEADER,
    SerializerConfig,
    XmlSerializer,
    new_element,
    new_entity,
    new_text,
    new_xml_tree,
    serialize,
)
from xml_node_tree.api import get_adapter


def constructor_example():
    """Build a tree bottom-up with the node constructors."""
    print("Step 1: Node constructors")
    print("-" * 30)

    book = new_element("book")
    book.attributes = {"id": "123", "genre": "fiction"}
    book.add(new_xml_tree("title", [new_text("My Book")]))
    book.add(new_xml_tree("author", [new_text("Jane Doe")]))
    book.add(new_xml_tree("price", [new_text("19.99")], {"currency": "USD"}))

    print(XML_HEADER + serialize(book))


def inline_example():
    """Build the same kind of tree with the E factory."""
    print("\nStep 2: Inline construction and mixed content")
    print("-" * 30)

    paragraph = E.p(
        "Fish ", new_entity("amp"), " chips are ", E.em("cheap"), "."
    )
    print(serialize(paragraph))

    menu = E.ul(E.li("one"), E.li("two"), class_="menu")
    print(XmlSerializer(SerializerConfig(indent_width=4)).serialize(menu))


def adapter_example():
    """Import a tree parsed by ElementTree and re-serialize it."""
    print("\nStep 3: Reformatting parsed XML")
    print("-" * 30)

    adapter = get_adapter("etree")
    tree = adapter.parse_string("<config><!--generated--><opt>a</opt><opt>b</opt></config>")
    print(serialize(tree))


def main():
    """Main function."""
    constructor_example()
    inline_example()
    adapter_example()
    return 0


if __name__ == "__main__":
    sys.exit(main())
