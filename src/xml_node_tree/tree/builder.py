"""Inline construction helpers for XML trees.

These helpers turn call sites such as::

    E.a("Nim rules.", href="http://force7.de/nimrod")

into plain ``new_xml_tree`` calls, producing::

    <a href="http://force7.de/nimrod">Nim rules.</a>
"""

from typing import Any, Dict, Iterable, Tuple, Union

from .nodes import XmlElement, XmlNode, XmlText, new_xml_tree

TreeItem = Union[XmlNode, str]


def attributes_of(*pairs: Tuple[str, str], **kwargs: str) -> Dict[str, str]:
    """Build an attribute mapping from ``(key, value)`` pairs and keywords.

    Later keys overwrite earlier ones; keywords are applied after pairs.
    """
    attributes: Dict[str, str] = {}
    for key, value in pairs:
        attributes[key] = value
    for key, value in kwargs.items():
        attributes[_attribute_name(key)] = value
    return attributes


def _attribute_name(keyword: str) -> str:
    # ``class_`` -> ``class``
    if keyword.endswith("_") and len(keyword) > 1:
        return keyword[:-1]
    return keyword


def _as_node(item: TreeItem) -> XmlNode:
    if isinstance(item, XmlNode):
        return item
    if isinstance(item, str):
        return XmlText(item)
    raise TypeError(
        f"Tree items must be XmlNode or str, got {type(item).__name__}"
    )


def xml_tree(tag: str, *items: TreeItem, **attributes: str) -> XmlElement:
    """Create an element from inline children and keyword attributes.

    Strings become text nodes. Without keyword arguments the element gets no
    attribute mapping at all.
    """
    children: Iterable[XmlNode] = [_as_node(item) for item in items]
    mapping = attributes_of(**attributes) if attributes else None
    return new_xml_tree(tag, children, mapping)


class ElementFactory:
    """Element factory where attribute access names the tag.

    ``E.ul(E.li("one"), E.li("two"))`` builds a ``ul`` with two ``li``
    children. Use ``E("my-tag", ...)`` for tags that are not identifiers.
    """

    def __call__(self, tag: str, *items: TreeItem, **attributes: str) -> XmlElement:
        return xml_tree(tag, *items, **attributes)

    def __getattr__(self, tag: str) -> Any:
        if tag.startswith("__"):
            raise AttributeError(tag)

        def build(*items: TreeItem, **attributes: str) -> XmlElement:
            return xml_tree(tag, *items, **attributes)

        build.__name__ = tag
        return build


E = ElementFactory()
