"""Configuration classes for xml_node_tree serialization.

Configuration objects are frozen dataclasses validated on construction, so a
config instance can be shared freely once built.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class SerializerConfig:
    """Output settings for the tree serializer.

    Attributes:
        indent_level: Column at which the outermost node is considered to start
        indent_width: Spaces added per nesting level for pretty-printed children
        max_depth: Optional nesting limit; deeper trees raise an error
        include_header: Prepend the XML declaration to serialized output
    """

    indent_level: int = 0
    indent_width: int = 2
    max_depth: Optional[int] = None
    include_header: bool = False

    def __post_init__(self) -> None:
        """Validate serializer configuration."""
        for name in ("indent_level", "indent_width", "max_depth"):
            value = getattr(self, name)
            if name == "max_depth" and value is None:
                continue
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigValidationError(
                    f"{name} must be an integer, got {value!r}", field_name=name
                )
        if not isinstance(self.include_header, bool):
            raise ConfigValidationError(
                f"include_header must be a boolean, got {self.include_header!r}",
                field_name="include_header",
            )

        if self.indent_level < 0:
            raise ConfigValidationError(
                "indent_level must be >= 0", field_name="indent_level"
            )
        if self.indent_width < 0:
            raise ConfigValidationError(
                "indent_width must be >= 0", field_name="indent_width"
            )
        if self.max_depth is not None and self.max_depth <= 0:
            raise ConfigValidationError(
                "max_depth must be > 0 or None",
                field_name="max_depth",
                suggestions=["Use None to disable the depth limit"],
            )

    def override(self, **kwargs: Any) -> "SerializerConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = SerializerConfig()
            >>> config.override(indent_width=4).indent_width
            4
        """
        unknown = set(kwargs) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {sorted(unknown)}",
                field_name=sorted(unknown)[0],
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SerializerConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be an object")
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_json(cls, json_str: str) -> "SerializerConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SerializerConfig":
        """Load configuration from a JSON file."""
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        return cls.from_json(config_path.read_text(encoding="utf-8"))
