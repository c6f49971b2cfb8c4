"""Main CLI entry point for the xml-node-tree command-line tool.

Commands:
    render    Serialize a JSON tree description to XML
    reformat  Parse an XML file and write it back in this serializer's style
    escape    Escape text for inclusion in XML
"""

import argparse
import json
import logging
import sys
import uuid
from pathlib import Path
from typing import List, Optional

from xml_node_tree import __version__
from xml_node_tree.api.adapters import get_adapter
from xml_node_tree.serialization import XmlSerializer, escape
from xml_node_tree.shared.config import ConfigError, SerializerConfig
from xml_node_tree.shared.errors import XmlTreeError
from xml_node_tree.shared.logging import get_logger
from xml_node_tree.tree.nodes import node_from_dict


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-node-tree",
        description="Build and serialize lightweight XML trees"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log errors"
    )

    # Options shared by the commands that serialize a tree
    output_options = argparse.ArgumentParser(add_help=False)
    output_options.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    output_options.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON serializer configuration file"
    )
    output_options.add_argument(
        "--indent-width",
        type=int,
        help="Spaces per nesting level (default: 2)"
    )
    output_options.add_argument(
        "--indent-level",
        type=int,
        help="Starting indentation (default: 0)"
    )
    output_options.add_argument(
        "--max-depth",
        type=int,
        help="Reject trees nested deeper than this"
    )
    output_options.add_argument(
        "--header",
        action="store_true",
        help="Prepend the XML declaration"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser(
        "render",
        parents=[output_options],
        help="Serialize a JSON tree description"
    )
    render_parser.add_argument("input", type=Path, help="JSON tree file")

    reformat_parser = subparsers.add_parser(
        "reformat",
        parents=[output_options],
        help="Re-serialize an XML file"
    )
    reformat_parser.add_argument("input", type=Path, help="XML file")
    reformat_parser.add_argument(
        "--adapter", "-a",
        choices=["etree", "lxml"],
        default="etree",
        help="Library used to parse the input (default: etree)"
    )

    escape_parser = subparsers.add_parser("escape", help="Escape text for XML")
    escape_parser.add_argument("text", help="Text to escape")

    return parser


def load_config(args: argparse.Namespace) -> SerializerConfig:
    """Build the serializer configuration from a config file and flags."""
    config = SerializerConfig()
    if args.config:
        config = SerializerConfig.from_file(args.config)

    overrides = {}
    if args.indent_width is not None:
        overrides["indent_width"] = args.indent_width
    if args.indent_level is not None:
        overrides["indent_level"] = args.indent_level
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if args.header:
        overrides["include_header"] = True

    return config.override(**overrides) if overrides else config


def write_output(text: str, output: Optional[Path]) -> None:
    """Write serialized text to a file or stdout."""
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def cmd_render(args: argparse.Namespace, correlation_id: str) -> int:
    """Handle render command."""
    config = load_config(args)
    with args.input.open(encoding="utf-8") as f:
        tree = node_from_dict(json.load(f))

    serializer = XmlSerializer(config, correlation_id)
    write_output(serializer.render(tree), args.output)
    return 0


def cmd_reformat(args: argparse.Namespace, correlation_id: str) -> int:
    """Handle reformat command."""
    config = load_config(args)
    adapter = get_adapter(args.adapter, correlation_id)
    tree = adapter.parse_file(args.input)

    serializer = XmlSerializer(config, correlation_id)
    write_output(serializer.render(tree), args.output)
    return 0


def cmd_escape(args: argparse.Namespace) -> int:
    """Handle escape command."""
    print(escape(args.text))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    correlation_id = uuid.uuid4().hex[:12]
    logger = get_logger(__name__, correlation_id, "cli")

    try:
        if args.command == "render":
            return cmd_render(args, correlation_id)
        elif args.command == "reformat":
            return cmd_reformat(args, correlation_id)
        elif args.command == "escape":
            return cmd_escape(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except (ConfigError, XmlTreeError, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}", exc_info=args.verbose)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
