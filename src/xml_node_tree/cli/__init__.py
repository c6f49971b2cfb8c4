"""Command-line interface for xml-node-tree."""

from .main import main

__all__ = ["main"]
