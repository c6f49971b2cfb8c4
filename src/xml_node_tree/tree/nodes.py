"""Node model for xml_node_tree.

An XML tree is made of ``XmlNode`` instances of five kinds: elements, which
own an ordered list of children and an optional attribute mapping, and the
four leaf kinds (text, comment, CDATA and entity) which only carry a string.

Accessors that only make sense for one kind are declared on ``XmlNode`` and
raise ``NodeKindError`` unless the concrete class overrides them, so misuse
fails at the call site instead of returning a placeholder value.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from xml_node_tree.shared.errors import NodeKindError

XmlAttributes = Mapping[str, str]

_ELEMENT = "an element"
_LEAF = "a text, comment, CDATA or entity"


class NodeKind(Enum):
    """Different kinds of XML nodes."""

    TEXT = "text"          # a run of character data
    ELEMENT = "element"    # an element with 0 or more children
    CDATA = "cdata"        # a CDATA section
    ENTITY = "entity"      # an entity reference such as ``&nbsp;``
    COMMENT = "comment"    # an XML comment


class XmlNode(ABC):
    """Common base for every node in an XML tree.

    Every node carries ``client_tag``, an integer slot reserved for callers
    (parsers, generators) that want to attach their own bookkeeping. The tree
    never reads it.
    """

    __slots__ = ("_client_tag",)

    kind: NodeKind

    def __init__(self) -> None:
        self._client_tag = 0

    @property
    def client_tag(self) -> int:
        """Get the caller-defined integer attached to this node."""
        return self._client_tag

    @client_tag.setter
    def client_tag(self, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("client_tag must be an int")
        self._client_tag = value

    @property
    def tag(self) -> str:
        """Get the tag name. Only valid for elements."""
        raise NodeKindError("tag", self.kind, _ELEMENT)

    @property
    def text(self) -> str:
        """Get the text payload. Only valid for leaf nodes."""
        raise NodeKindError("text", self.kind, _LEAF)

    @property
    def children(self) -> List["XmlNode"]:
        """Get a copy of the child list. Only valid for elements."""
        raise NodeKindError("children", self.kind, _ELEMENT)

    @property
    def attributes(self) -> Optional[XmlAttributes]:
        """Get the attribute mapping, or None. Only valid for elements."""
        raise NodeKindError("attributes", self.kind, _ELEMENT)

    @attributes.setter
    def attributes(self, value: Optional[XmlAttributes]) -> None:
        raise NodeKindError("attributes", self.kind, _ELEMENT)

    @property
    def attribute_count(self) -> int:
        """Get the number of attributes. Only valid for elements."""
        raise NodeKindError("attribute_count", self.kind, _ELEMENT)

    def set_attributes(self, attributes: Optional[XmlAttributes]) -> None:
        """Attach (or with None, detach) an attribute mapping."""
        self.attributes = attributes

    def add(self, child: "XmlNode") -> None:
        """Append ``child``. Only valid for elements."""
        raise NodeKindError("add", self.kind, _ELEMENT)

    def __getitem__(self, index: int) -> "XmlNode":
        raise NodeKindError("[]", self.kind, _ELEMENT)

    def __iter__(self) -> Iterator["XmlNode"]:
        raise NodeKindError("iteration", self.kind, _ELEMENT)

    def __len__(self) -> int:
        return 0

    def __bool__(self) -> bool:
        # A childless node is still a node.
        return True

    def __str__(self) -> str:
        from xml_node_tree.serialization.serializer import serialize

        return serialize(self)

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert node (and its subtree) to dictionary representation."""


class _LeafNode(XmlNode):
    """A node holding a single string payload."""

    __slots__ = ("_content",)

    def __init__(self, content: str) -> None:
        super().__init__()
        if not isinstance(content, str):
            raise TypeError(f"{type(self).__name__} content must be a string")
        self._content = content

    @property
    def text(self) -> str:
        return self._content

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"kind": self.kind.value, "content": self._content}
        if self._client_tag:
            result["client_tag"] = self._client_tag
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._content!r})"


class XmlText(_LeafNode):
    """Character data. Escaped on output."""

    __slots__ = ()
    kind = NodeKind.TEXT


class XmlComment(_LeafNode):
    """An XML comment."""

    __slots__ = ()
    kind = NodeKind.COMMENT


class XmlCData(_LeafNode):
    """A CDATA section, written verbatim."""

    __slots__ = ()
    kind = NodeKind.CDATA


class XmlEntity(_LeafNode):
    """An entity reference; the content is the name between ``&`` and ``;``."""

    __slots__ = ()
    kind = NodeKind.ENTITY


class XmlElement(XmlNode):
    """An element with a tag, ordered children and optional attributes.

    The attribute mapping is created lazily: a new element has
    ``attributes is None`` until a mapping is assigned.
    """

    __slots__ = ("_tag", "_children", "_attributes")
    kind = NodeKind.ELEMENT

    def __init__(
        self,
        tag: str,
        children: Optional[Iterable[XmlNode]] = None,
        attributes: Optional[XmlAttributes] = None,
    ) -> None:
        super().__init__()
        if not isinstance(tag, str):
            raise TypeError("Element tag must be a string")
        self._tag = tag
        self._children: List[XmlNode] = []
        self._attributes: Optional[XmlAttributes] = None
        for child in children or ():
            self.add(child)
        self.attributes = attributes

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def children(self) -> List[XmlNode]:
        return list(self._children)

    @property
    def attributes(self) -> Optional[XmlAttributes]:
        return self._attributes

    @attributes.setter
    def attributes(self, value: Optional[XmlAttributes]) -> None:
        if value is not None and not isinstance(value, Mapping):
            raise TypeError("Attributes must be a mapping or None")
        self._attributes = value

    @property
    def attribute_count(self) -> int:
        if self._attributes is None:
            return 0
        return len(self._attributes)

    def add(self, child: XmlNode) -> None:
        """Append a child node.

        No cycle check is made; inserting an ancestor below itself is the
        caller's error.
        """
        if not isinstance(child, XmlNode):
            raise TypeError("Child must be an XmlNode instance")
        self._children.append(child)

    def __getitem__(self, index: int) -> XmlNode:
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError("Child index must be an int")
        return self._children[index]

    def __iter__(self) -> Iterator[XmlNode]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"kind": self.kind.value, "tag": self._tag}
        if self._attributes is not None:
            result["attributes"] = dict(self._attributes)
        if self._children:
            result["children"] = [child.to_dict() for child in self._children]
        if self._client_tag:
            result["client_tag"] = self._client_tag
        return result

    def __repr__(self) -> str:
        return (
            f"XmlElement({self._tag!r}, children={len(self._children)}, "
            f"attributes={self.attribute_count})"
        )


_LEAF_CLASSES = {
    NodeKind.TEXT: XmlText,
    NodeKind.COMMENT: XmlComment,
    NodeKind.CDATA: XmlCData,
    NodeKind.ENTITY: XmlEntity,
}


def new_element(tag: str) -> XmlElement:
    """Create an element with no children and no attribute mapping."""
    return XmlElement(tag)


def new_text(text: str) -> XmlText:
    """Create a text node."""
    return XmlText(text)


def new_comment(comment: str) -> XmlComment:
    """Create a comment node."""
    return XmlComment(comment)


def new_cdata(cdata: str) -> XmlCData:
    """Create a CDATA node."""
    return XmlCData(cdata)


def new_entity(entity: str) -> XmlEntity:
    """Create an entity node, e.g. ``new_entity("amp")`` for ``&amp;``."""
    return XmlEntity(entity)


def new_xml_tree(
    tag: str,
    children: Iterable[XmlNode],
    attributes: Optional[XmlAttributes] = None,
) -> XmlElement:
    """Create an element with ``tag``, a copy of ``children`` and ``attributes``."""
    return XmlElement(tag, list(children), attributes)


def add(parent: XmlNode, child: XmlNode) -> None:
    """Append ``child`` to ``parent``, which must be an element."""
    parent.add(child)


def node_from_dict(data: Mapping[str, Any]) -> XmlNode:
    """Create a node (and its subtree) from its dictionary representation.

    Args:
        data: Mapping as produced by ``XmlNode.to_dict``

    Returns:
        Reconstructed node

    Raises:
        ValueError: If the kind is unknown, a required field is missing or a
            field has the wrong type
    """
    if not isinstance(data, Mapping):
        raise ValueError("Node data must be a mapping")

    kind_value = data.get("kind")
    try:
        kind = NodeKind(kind_value)
    except ValueError:
        raise ValueError(f"Unknown node kind: {kind_value!r}") from None

    node: XmlNode
    if kind is NodeKind.ELEMENT:
        if "tag" not in data:
            raise ValueError("Element data requires a 'tag' field")
        tag = data["tag"]
        if not isinstance(tag, str):
            raise ValueError(f"Element 'tag' must be a string, got {tag!r}")

        children = data.get("children", [])
        if not isinstance(children, list):
            raise ValueError(f"<{tag}> 'children' must be a list")

        node = XmlElement(
            tag,
            [node_from_dict(child) for child in children],
            _attributes_from_dict(tag, data.get("attributes")),
        )
    else:
        if "content" not in data:
            raise ValueError(f"{kind.value} data requires a 'content' field")
        content = data["content"]
        if not isinstance(content, str):
            raise ValueError(
                f"{kind.value} 'content' must be a string, got {content!r}"
            )
        node = _LEAF_CLASSES[kind](content)

    client_tag = data.get("client_tag", 0)
    if not isinstance(client_tag, int) or isinstance(client_tag, bool):
        raise ValueError(f"'client_tag' must be an integer, got {client_tag!r}")
    node.client_tag = client_tag
    return node


def _attributes_from_dict(tag: str, attributes: Any) -> Optional[Dict[str, str]]:
    if attributes is None:
        return None
    if not isinstance(attributes, Mapping):
        raise ValueError(f"<{tag}> 'attributes' must be an object")
    for key, value in attributes.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ValueError(
                f"<{tag}> attribute {key!r} must map a string to a string, "
                f"got {value!r}"
            )
    return dict(attributes)
