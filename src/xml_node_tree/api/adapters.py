"""Adapters between xml_node_tree and other XML libraries.

The node model has no parser of its own. Adapters let an existing library
(the standard library's ElementTree, or lxml when installed) parse markup
and convert the result into ``XmlNode`` trees, and convert trees back.
"""

import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from xml_node_tree.serialization import serialize
from xml_node_tree.shared import AdapterError, get_logger
from xml_node_tree.tree.nodes import XmlComment, XmlElement, XmlEntity, XmlNode, XmlText

_XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


class TreeAdapter(ABC):
    """Base class for bidirectional tree conversion adapters."""

    name: str = ""
    target_library: str = ""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, f"{self.name}_adapter")

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def _library(self) -> Any:
        """Import and return the target library's etree module."""

    @abstractmethod
    def _new_parser(self, etree: Any) -> Any:
        """Create a parser that keeps comments."""

    def _convert_special(self, element: Any, etree: Any) -> Optional[XmlNode]:
        """Convert a non-element child; None drops it."""
        if element.tag is etree.Comment:
            return XmlComment(element.text or "")
        return None

    def _require_library(self) -> Any:
        if not self.is_available():
            raise AdapterError(
                f"{self.target_library} is not installed", adapter=self.name
            )
        return self._library()

    def from_target(self, target_data: Any) -> XmlElement:
        """Convert a foreign element (and its subtree) to an ``XmlElement``.

        Text and tails become ``XmlText`` children in document order.
        Processing instructions are dropped.

        Raises:
            AdapterError: If the library is missing or the input is not an element
        """
        etree = self._require_library()
        if not isinstance(getattr(target_data, "tag", None), str):
            raise AdapterError(
                f"Expected a {self.target_library} element, "
                f"got {type(target_data).__name__}",
                adapter=self.name,
            )

        start_time = time.time()
        node = self._convert_element(target_data, etree)
        self.logger.debug(
            "Converted foreign tree",
            extra={
                "root_tag": node.tag,
                "conversion_time_ms": (time.time() - start_time) * 1000,
            },
        )
        return node

    def _markup_name(self, name: str) -> str:
        """Map a library name back to markup, rejecting namespaced names.

        Both libraries report namespaced names as ``{uri}local`` and keep
        ``xmlns`` declarations out of ``attrib``, so such a tree cannot be
        written back as XML.
        The predefined ``xml`` namespace needs no declaration and keeps its
        prefix.
        """
        if not name.startswith("{"):
            return name
        uri, _, local = name[1:].partition("}")
        if uri == _XML_NAMESPACE:
            return f"xml:{local}"
        raise AdapterError(
            f"Namespaced name '{name}' is not supported", adapter=self.name
        )

    def _convert_element(self, element: Any, etree: Any) -> XmlElement:
        attributes: Optional[Dict[str, str]] = None
        if len(element.attrib):
            attributes = {
                self._markup_name(key): value for key, value in element.attrib.items()
            }
        node = XmlElement(self._markup_name(element.tag), attributes=attributes)
        if element.text:
            node.add(XmlText(element.text))

        for child in element:
            if isinstance(child.tag, str):
                node.add(self._convert_element(child, etree))
            else:
                converted = self._convert_special(child, etree)
                if converted is not None:
                    node.add(converted)
            if child.tail:
                node.add(XmlText(child.tail))

        return node

    def to_target(self, node: XmlNode) -> Any:
        """Convert an ``XmlElement`` tree to a foreign element.

        Raises:
            AdapterError: If the library is missing, ``node`` is not an element,
                or the library rejects the serialized markup
        """
        etree = self._require_library()
        if not isinstance(node, XmlElement):
            raise AdapterError(
                f"Only elements can be converted, got {node.kind.value}",
                adapter=self.name,
            )
        return self._parse(serialize(node), etree)

    def _parse(self, text: Union[str, bytes], etree: Any) -> Any:
        try:
            return etree.fromstring(text, self._new_parser(etree))
        except etree.ParseError as e:
            self.logger.error(f"Failed to parse markup: {e}", exc_info=False)
            raise AdapterError(f"Failed to parse markup: {e}", adapter=self.name) from e

    def parse_string(self, text: Union[str, bytes]) -> XmlElement:
        """Parse markup with the target library into an ``XmlElement``.

        Raises:
            AdapterError: If the library is missing or parsing fails
        """
        etree = self._require_library()
        return self._convert_element(self._parse(text, etree), etree)

    def parse_file(self, path: Union[str, Path]) -> XmlElement:
        """Read and parse an XML file into an ``XmlElement``."""
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise AdapterError(f"Cannot read {file_path}: {e}", adapter=self.name) from e
        return self.parse_string(data)


class ElementTreeAdapter(TreeAdapter):
    """Adapter for the standard library's ``xml.etree.ElementTree``."""

    name = "etree"
    target_library = "xml.etree.ElementTree"

    def is_available(self) -> bool:
        """ElementTree ships with Python."""
        return True

    def _library(self) -> Any:
        import xml.etree.ElementTree as ET

        return ET

    def _new_parser(self, etree: Any) -> Any:
        return etree.XMLParser(target=etree.TreeBuilder(insert_comments=True))


class LxmlAdapter(TreeAdapter):
    """Adapter for ``lxml.etree``.

    Unlike ElementTree, lxml can leave entity references unresolved;
    those become ``XmlEntity`` nodes.
    """

    name = "lxml"
    target_library = "lxml"

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def _library(self) -> Any:
        import lxml.etree

        return lxml.etree

    def _new_parser(self, etree: Any) -> Any:
        return etree.XMLParser(remove_comments=False, resolve_entities=False)

    def _convert_special(self, element: Any, etree: Any) -> Optional[XmlNode]:
        if element.tag is etree.Entity:
            return XmlEntity(element.name)
        return super()._convert_special(element, etree)


_ADAPTERS: Dict[str, Type[TreeAdapter]] = {
    ElementTreeAdapter.name: ElementTreeAdapter,
    LxmlAdapter.name: LxmlAdapter,
}


def get_adapter(name: str, correlation_id: Optional[str] = None) -> TreeAdapter:
    """Get an adapter instance by name.

    Raises:
        AdapterError: If the name is unknown or the library is not installed
    """
    adapter_class = _ADAPTERS.get(name)
    if adapter_class is None:
        raise AdapterError(
            f"Unknown adapter '{name}', choose from {sorted(_ADAPTERS)}"
        )
    adapter = adapter_class(correlation_id)
    if not adapter.is_available():
        raise AdapterError(
            f"Adapter '{name}' requires {adapter.target_library}", adapter=name
        )
    return adapter


def list_available_adapters() -> List[str]:
    """List names of adapters whose library can be imported."""
    return [name for name, cls in _ADAPTERS.items() if cls().is_available()]
