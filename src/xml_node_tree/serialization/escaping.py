"""Character escaping for text content and attribute values."""

from typing import TextIO

_ESCAPE_TABLE = str.maketrans({
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
})


def escape(text: str) -> str:
    """Escape ``text`` for inclusion into an XML document.

    ============  ==================
    character     is converted to
    ============  ==================
    ``<``         ``&lt;``
    ``>``         ``&gt;``
    ``&``         ``&amp;``
    ``"``         ``&quot;``
    ============  ==================

    Every other character is left unchanged.
    """
    return text.translate(_ESCAPE_TABLE)


def add_escaped(out: TextIO, text: str) -> None:
    """Write the escaped form of ``text`` to ``out``."""
    out.write(text.translate(_ESCAPE_TABLE))
