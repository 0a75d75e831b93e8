"""Shared utilities for backend code emitters."""

from __future__ import annotations


def escape_string(value: str) -> str:
    """Escape a string for use in a C# string literal (without quotes)."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
        .replace("\x00", "\\0")
    )


def escape_xml(value: str) -> str:
    """Escape text for an XML documentation comment."""
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class Emitter:
    """Base class for code emitters with indentation tracking."""

    def __init__(self, indent_str: str = "    ") -> None:
        self.indent: int = 0
        self.lines: list[str] = []
        self._indent_str = indent_str

    def line(self, text: str = "") -> None:
        """Emit a line with current indentation."""
        if text:
            self.lines.append(self._indent_str * self.indent + text)
        else:
            self.lines.append("")

    def extend(self, lines: list[str]) -> None:
        """Emit pre-rendered lines at current indentation."""
        for text in lines:
            self.line(text)
