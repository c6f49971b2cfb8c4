"""In-memory XML tree model.

Key Components:
    XmlNode: Common base with kind, client tag and kind-restricted accessors
    XmlElement: Element with tag, ordered children and optional attributes
    XmlText, XmlComment, XmlCData, XmlEntity: Leaf nodes
    xml_tree, E: Inline construction helpers
"""

from .builder import E, ElementFactory, attributes_of, xml_tree
from .nodes import (
    NodeKind,
    XmlAttributes,
    XmlCData,
    XmlComment,
    XmlElement,
    XmlEntity,
    XmlNode,
    XmlText,
    add,
    new_cdata,
    new_comment,
    new_element,
    new_entity,
    new_text,
    new_xml_tree,
    node_from_dict,
)

__all__ = [
    "E",
    "ElementFactory",
    "attributes_of",
    "xml_tree",
    "NodeKind",
    "XmlAttributes",
    "XmlCData",
    "XmlComment",
    "XmlElement",
    "XmlEntity",
    "XmlNode",
    "XmlText",
    "add",
    "new_cdata",
    "new_comment",
    "new_element",
    "new_entity",
    "new_text",
    "new_xml_tree",
    "node_from_dict",
]
