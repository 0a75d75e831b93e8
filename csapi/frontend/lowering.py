"""Type lowering: type expression -> C# type reference.

Lowering is a single match over the closed TypeExpr variant. Its only side
effect is registering synthesized declarations (result classes, enums) in the
run's Registry; the returned Lowered lists the keys a call added.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import GeneratorConfig
from ..errors import GenerationError, MalformedTypeError, UnsupportedShapeError
from ..ir import (
    Array,
    Literal,
    Map,
    Member,
    Named,
    ObjectShape,
    Primitive,
    SynthesizedEnum,
    TypeExpr,
    Union,
)
from .names import capitalize, translate
from .registry import Registry

PRIMITIVES: dict[str, str] = {
    "boolean": "bool",
    "number": "int",
    "string": "string",
    "Buffer": "byte[]",
    "void": "void",
    "Serializable": "T",
    "Object": "object",
}

# Value types are not nullable by default in C#; references are.
VALUE_TYPES = frozenset({"bool", "int"})

GENERIC_PLACEHOLDER = "T"
OPAQUE_UNION = "Union"
TRI_STATE = "MixedState"


@dataclass
class Lowered:
    """Result of lowering one type expression."""

    ref: str
    synthesized: list[str] = field(default_factory=list)


def strip_quotes(literal: str) -> str:
    """Remove the surrounding quote markers of a string-literal type."""
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "\"'":
        return literal[1:-1]
    return literal


def non_null(expr: TypeExpr) -> TypeExpr:
    """The wrapped type of a two-member nullable union, else expr itself."""
    if isinstance(expr, Union) and expr.is_nullable and len(expr.members) == 2:
        return expr.members[1]
    return expr


def is_tri_state(union: Union) -> bool:
    """boolean | "mixed" maps onto the predefined MixedState enum."""
    if len(union.members) != 2:
        return False
    first, second = union.members
    return (
        first == Primitive("boolean")
        and isinstance(second, Literal)
        and strip_quotes(second.value) == "mixed"
    )


def result_type_name(owner: str, member: Member) -> str:
    """Name of the class synthesized for an object shape on owner.member."""
    return owner + capitalize(member.name) + "Result"


class TypeLowerer:
    """Lower type expressions against one run's class names and registry."""

    def __init__(
        self,
        registry: Registry,
        class_names: dict[str, str],
        config: GeneratorConfig | None = None,
    ) -> None:
        self.registry = registry
        self.class_names = class_names
        self.config = config if config is not None else GeneratorConfig()
        self._added: list[str] = []

    def lower(self, expr: TypeExpr, owner: str, member: Member | None = None) -> Lowered:
        """Lower expr appearing on owner (and member, when there is one)."""
        self._added = []
        try:
            ref = self._lower(expr, owner, member)
        except GenerationError as e:
            raise e.locate(owner, member.name if member is not None else "")
        return Lowered(ref, list(self._added))

    def wrap_async(self, ref: str, member: Member) -> str:
        """Async members return Task, or Task<T> when they carry a payload."""
        if not member.is_async:
            return ref
        if ref == "void":
            return "Task"
        return "Task<" + ref + ">"

    def _register(self, key: str, shape: ObjectShape | SynthesizedEnum) -> None:
        if self.registry.register(key, shape):
            self._added.append(key)

    def _lower(self, expr: TypeExpr, owner: str, member: Member | None) -> str:
        match expr:
            case Union(members=members) if expr.is_nullable:
                return self._nullable(members, owner, member)
            case Union() if is_tri_state(expr):
                if self.registry.use_predefined(TRI_STATE):
                    self._added.append(TRI_STATE)
                return TRI_STATE
            case Union() if expr.is_literal_set:
                return self._enum(expr, owner, member)
            case Union(members=members):
                if self.config.strict_unions:
                    names = ", ".join(type(m).__name__ for m in members)
                    raise UnsupportedShapeError("no lowering for union of (" + names + ")")
                return OPAQUE_UNION
            case Array(element=element) if isinstance(non_null(element), Array):
                raise MalformedTypeError("multi-dimensional arrays are not supported")
            case Array(element=element):
                return self._lower(element, owner, member) + "[]"
            case Primitive(name=name):
                if name not in PRIMITIVES:
                    raise MalformedTypeError("unknown primitive type '" + name + "'")
                return PRIMITIVES[name]
            case Literal(value=value):
                raise UnsupportedShapeError("string literal " + value + " outside an enum union")
            case ObjectShape(properties=properties):
                if not properties:
                    return "object"
                if member is None:
                    raise UnsupportedShapeError("object shape has no member to name it after")
                key = result_type_name(owner, member)
                self._register(key, expr)
                return key
            case Map(key=key, value=value):
                kt = self._lower(key, owner, member)
                vt = self._lower(value, owner, member)
                return "IEnumerable<KeyValuePair<" + kt + ", " + vt + ">>"
            case Named(name=name):
                return self.class_names.get(name, name)
            case _:
                raise MalformedTypeError("unknown type expression " + repr(expr))

    def _nullable(self, members: tuple[TypeExpr, ...], owner: str, member: Member | None) -> str:
        if len(members) != 2:
            raise MalformedTypeError(
                "nullable union has " + str(len(members)) + " members, expected 2"
            )
        inner = self._lower(members[1], owner, member)
        if inner in VALUE_TYPES:
            return inner + "?"
        return inner

    def _enum(self, union: Union, owner: str, member: Member | None) -> str:
        if member is not None:
            name = translate("enum", member.name)
        else:
            name = translate("enum", owner)
        values = tuple(strip_quotes(m.value) for m in union.members if isinstance(m, Literal))
        self._register(name, SynthesizedEnum(values))
        return name
