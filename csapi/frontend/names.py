"""Name translation: source names to C# identifiers.

Every identifier in the generated surface goes through translate(), so the
rules here are the contract for identifier stability across runs.
"""

from __future__ import annotations

import re

from ..errors import EmptyNameError
from ..ir import Member

# C# reserved words that need escaping with @
CSHARP_RESERVED = frozenset(
    {
        "abstract",
        "as",
        "base",
        "bool",
        "break",
        "byte",
        "case",
        "catch",
        "char",
        "checked",
        "class",
        "const",
        "continue",
        "decimal",
        "default",
        "delegate",
        "do",
        "double",
        "else",
        "enum",
        "event",
        "explicit",
        "extern",
        "false",
        "finally",
        "fixed",
        "float",
        "for",
        "foreach",
        "goto",
        "if",
        "implicit",
        "in",
        "int",
        "interface",
        "internal",
        "is",
        "lock",
        "long",
        "namespace",
        "new",
        "null",
        "object",
        "operator",
        "out",
        "override",
        "params",
        "private",
        "protected",
        "public",
        "readonly",
        "ref",
        "return",
        "sbyte",
        "sealed",
        "short",
        "sizeof",
        "stackalloc",
        "static",
        "string",
        "struct",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "uint",
        "ulong",
        "unchecked",
        "unsafe",
        "ushort",
        "using",
        "virtual",
        "void",
        "volatile",
        "while",
    }
)

# Literal spellings that are not valid identifiers on their own.
ENUM_VALUE_NAMES: dict[str, str] = {
    "undefined": "Undefined",
    "null": "Undefined",
    "-Infinity": "NegativeInfinity",
    "-0": "NegativeZero",
}

_WORD_SPLIT = re.compile(r"[^0-9A-Za-z]+")


def capitalize(name: str) -> str:
    """Uppercase the first character only; the rest is kept as written.

    Unlike str.capitalize(), "isVisible" becomes "IsVisible", not "Isvisible".
    """
    return (name[0].upper() + name[1:]) if name else ""


def escape_reserved(name: str) -> str:
    """Escape C# reserved words with @ prefix."""
    if name in CSHARP_RESERVED:
        return "@" + name
    return name


def translate(kind: str, name: str, member: Member | None = None) -> str:
    """Translate a source name into the C# identifier for its kind.

    kind is "interface", "method", "event", "argument", "property", "enum", ...
    An alias on member always wins for non-arguments.
    """
    if not name:
        raise EmptyNameError("cannot translate an empty " + kind + " name")
    if kind == "argument":
        return escape_reserved(name)
    if member is not None and member.alias is not None and member.alias != name:
        return member.alias
    assumed = capitalize(name)
    match kind:
        case "interface":
            return "I" + assumed
        case "method":
            if member is not None and member.is_async:
                return assumed + "Async"
            return assumed
        case "event":
            return "On" + assumed
        case _:
            return assumed


def enum_value_name(value: str) -> str:
    """Identifier for an enum literal: "no-referrer" -> "NoReferrer"."""
    if value in ENUM_VALUE_NAMES:
        return ENUM_VALUE_NAMES[value]
    parts = [p for p in _WORD_SPLIT.split(value) if p]
    if not parts:
        raise EmptyNameError("enum literal " + repr(value) + " has no identifier characters")
    result = "".join(capitalize(p) for p in parts)
    if result[0].isdigit():
        return "Value" + result
    return result
