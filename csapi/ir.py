"""csapi IR - the API description model.

This module defines the vocabulary every other phase operates on: type
expressions, members, classes, documentation nodes, and rendered units.
Data definitions only; no behavior.

Architecture:
    API description -> Loader -> [IR] -> Lowering + Registry -> Backend -> .cs units
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ============================================================
# TYPE EXPRESSIONS
#
# All type expressions are frozen (immutable, hashable) so that
# structurally equal shapes compare equal in the registry.
# ============================================================


@dataclass(frozen=True)
class TypeExpr:
    """Base for all type expressions. Abstract."""


@dataclass(frozen=True)
class Primitive(TypeExpr):
    """Built-in type names with a direct C# equivalent.

    | Name         | C#        |
    |--------------|-----------|
    | boolean      | bool      |
    | number       | int       |
    | string       | string    |
    | Buffer       | byte[]    |
    | void         | void      |
    | Serializable | T         |
    | Object       | object    |

    `null` is also a Primitive; it is only meaningful as the first member
    of a nullable Union.
    """

    name: str


NULL = Primitive("null")


@dataclass(frozen=True)
class Literal(TypeExpr):
    """String-literal type, e.g. `"left"`.

    `value` keeps the quote markers exactly as documented.
    """

    value: str


@dataclass(frozen=True)
class Named(TypeExpr):
    """Reference to a declared class by its source (untranslated) name."""

    name: str


@dataclass(frozen=True)
class Array(TypeExpr):
    """Single-dimension array.

    Invariants:
    - element is not itself an Array (rejected by lowering)
    """

    element: TypeExpr


@dataclass(frozen=True)
class Union(TypeExpr):
    """Ordered union of two or more members.

    | Shape                          | Meaning               |
    |--------------------------------|-----------------------|
    | (null, T)                      | nullable T            |
    | ("a", "b", ...)                | enum candidate        |
    | (boolean, "mixed")             | predefined MixedState |
    | anything else                  | opaque union          |

    Invariants:
    - len(members) >= 2
    - a null-led union has exactly two members
    """

    members: tuple[TypeExpr, ...]

    @property
    def is_nullable(self) -> bool:
        return len(self.members) > 0 and self.members[0] == NULL

    @property
    def is_literal_set(self) -> bool:
        return all(isinstance(m, Literal) for m in self.members)


@dataclass(frozen=True)
class ObjectShape(TypeExpr):
    """Anonymous structural type (inline options or result bag).

    Acquires a name only through synthesis.
    """

    properties: tuple[Member, ...] = ()


@dataclass(frozen=True)
class Map(TypeExpr):
    """Templated object `Object<K, V>`."""

    key: TypeExpr
    value: TypeExpr


# ============================================================
# DOCUMENTATION
# ============================================================


@dataclass(frozen=True)
class DocNode:
    """One node of member/class documentation.

    | kind | Payload              |
    |------|----------------------|
    | text | text                 |
    | li   | text, li_type        |
    | code | lines                |
    | note | text                 |
    """

    kind: str
    text: str = ""
    lines: tuple[str, ...] = ()
    li_type: str = "bullet"


# ============================================================
# DECLARATIONS
# ============================================================


@dataclass(frozen=True)
class Member:
    """Class member, method argument, or object-shape property.

    kind is one of "method", "property", "event", "argument".
    alias overrides the translated name when it differs from name.
    """

    kind: str
    name: str
    type: TypeExpr
    alias: str | None = None
    is_async: bool = False
    args: tuple[Member, ...] = ()
    spec: tuple[DocNode, ...] = ()
    deprecated: bool = False


@dataclass(frozen=True)
class Class:
    """Documented class; rendered as an `I{Name}` interface."""

    name: str
    members: tuple[Member, ...] = ()
    spec: tuple[DocNode, ...] = ()


@dataclass(frozen=True)
class SynthesizedEnum:
    """Registered shape of a synthesized enum.

    values are the literal contents with quote markers stripped.
    """

    values: tuple[str, ...]


# ============================================================
# OUTPUT
# ============================================================


@dataclass
class Unit:
    """One rendered declaration unit (one output file).

    kind is one of "interface", "class", "enum".
    lines excludes the file template.
    """

    name: str
    kind: str
    lines: list[str] = field(default_factory=list)
