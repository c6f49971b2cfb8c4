"""XML Node Tree.

A simple in-memory XML tree, lighter than a DOM, with deterministic
serialization back to markup.

Progressive API Disclosure:
- Level 1: Node constructors and serialize()
- Level 2: Inline construction helpers - xml_tree(), E
- Level 3: Configured serializer - XmlSerializer with SerializerConfig
- Level 4: Adapters to ElementTree and lxml
"""

__version__ = "0.1.0"
__author__ = "XML Node Tree Team"

# Level 1: Node model and serialization functions
from .serialization import (
    XML_HEADER,
    XmlSerializer,
    add_escaped,
    escape,
    serialize,
    serialize_document,
    serialize_into,
)
from .shared import (
    AdapterError,
    NodeKindError,
    SerializationDepthError,
    SerializerConfig,
    XmlTreeError,
)
from .tree import (
    E,
    NodeKind,
    XmlCData,
    XmlComment,
    XmlElement,
    XmlEntity,
    XmlNode,
    XmlText,
    add,
    attributes_of,
    new_cdata,
    new_comment,
    new_element,
    new_entity,
    new_text,
    new_xml_tree,
    node_from_dict,
    xml_tree,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Node model
    "NodeKind",
    "XmlNode",
    "XmlElement",
    "XmlText",
    "XmlComment",
    "XmlCData",
    "XmlEntity",
    "new_element",
    "new_text",
    "new_comment",
    "new_cdata",
    "new_entity",
    "new_xml_tree",
    "add",
    "node_from_dict",

    # Construction helpers
    "E",
    "attributes_of",
    "xml_tree",

    # Serialization
    "XML_HEADER",
    "XmlSerializer",
    "add_escaped",
    "escape",
    "serialize",
    "serialize_document",
    "serialize_into",

    # Configuration and errors
    "SerializerConfig",
    "XmlTreeError",
    "NodeKindError",
    "SerializationDepthError",
    "AdapterError",
]
