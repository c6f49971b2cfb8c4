"""Serialization of XML trees to markup text."""

from .escaping import add_escaped, escape
from .serializer import (
    XML_HEADER,
    XmlSerializer,
    serialize,
    serialize_document,
    serialize_into,
)

__all__ = [
    "XML_HEADER",
    "XmlSerializer",
    "add_escaped",
    "escape",
    "serialize",
    "serialize_document",
    "serialize_into",
]
