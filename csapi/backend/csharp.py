"""C# backend: classes and synthesized types -> declaration units."""

from __future__ import annotations

from ..config import GeneratorConfig
from ..errors import GenerationError, NameCollisionError, UnsupportedShapeError
from ..frontend.lowering import GENERIC_PLACEHOLDER, TypeLowerer, non_null
from ..frontend.names import enum_value_name, translate
from ..frontend.registry import Shape
from ..ir import Class, Member, ObjectShape, SynthesizedEnum, TypeExpr, Unit
from .util import Emitter, escape_string
from .xmldoc import LinkRenderer, render_xml_doc


def options_shape(typ: TypeExpr) -> ObjectShape | None:
    """The object shape behind an options argument, looking through nullability."""
    inner = non_null(typ)
    if isinstance(inner, ObjectShape):
        return inner
    return None


class CSharpBackend:
    """Render interface members and synthesized declarations as C#."""

    def __init__(
        self,
        lowerer: TypeLowerer,
        config: GeneratorConfig | None = None,
        link_renderer: LinkRenderer | None = None,
    ) -> None:
        self.lowerer = lowerer
        self.config = config if config is not None else lowerer.config
        self.link_renderer = link_renderer

    def _doc(self, member_or_class: Member | Class) -> list[str]:
        return render_xml_doc(
            member_or_class.spec, self.config.max_column_width, self.link_renderer
        )

    def _emitter(self) -> Emitter:
        return Emitter(self.config.indent)

    # --- Interfaces ---

    def render_class(self, cls: Class) -> Unit:
        """Render a documented class as its I{Name} interface."""
        name = translate("interface", cls.name)
        e = self._emitter()
        e.extend(self._doc(cls))
        e.line(f"public interface {name}")
        e.line("{")
        e.indent += 1
        for i, member in enumerate(cls.members):
            if i > 0:
                e.line()
            e.extend(self.render_member(member, cls.name))
        e.indent -= 1
        e.line("}")
        return Unit(name, "interface", e.lines)

    def render_member(self, member: Member, owner: str) -> list[str]:
        """Documentation plus one declaration line for member of owner."""
        try:
            decl = self._declaration(member, owner)
        except GenerationError as e:
            raise e.locate(owner, member.name)
        lines = self._doc(member)
        if member.deprecated:
            lines.append("[Obsolete]")
        lines.append(decl)
        return lines

    def _declaration(self, member: Member, owner: str) -> str:
        match member.kind:
            case "property":
                typ = self.lowerer.lower(member.type, owner, member).ref
                name = translate("property", member.name, member)
                return f"{typ} {name} {{ get; set; }}"
            case "event":
                typ = self.lowerer.lower(member.type, owner, member).ref
                name = translate("event", member.name, member)
                if typ == "void":
                    return f"event EventHandler {name};"
                return f"event EventHandler<{typ}> {name};"
            case "method":
                return self._method(member, owner)
            case _:
                raise UnsupportedShapeError(f"cannot render a member of kind '{member.kind}'")

    def _method(self, member: Member, owner: str) -> str:
        typ = self.lowerer.lower(member.type, owner, member).ref
        name = translate("method", member.name, member)
        if not member.args and typ != "void" and not name.startswith("Is"):
            name = "Get" + name
        if typ == GENERIC_PLACEHOLDER:
            name = name + "<" + GENERIC_PLACEHOLDER + ">"
        ret = self.lowerer.wrap_async(typ, member)
        params = ", ".join(f"{t} {n}" for t, n in self.arguments(member, owner))
        return f"{ret} {name}({params});"

    def arguments(self, member: Member, owner: str) -> list[tuple[str, str]]:
        """Flattened (type, name) argument list for a method."""
        result: list[tuple[str, str]] = []
        seen: set[str] = set()
        self._flatten(member, member.args, owner, result, seen)
        return result

    def _flatten(
        self,
        method: Member,
        args: tuple[Member, ...],
        owner: str,
        result: list[tuple[str, str]],
        seen: set[str],
    ) -> None:
        for arg in args:
            shape = options_shape(arg.type) if arg.name == "options" else None
            if shape is not None:
                self._flatten(method, shape.properties, owner, result, seen)
                continue
            name = translate("argument", arg.name)
            if name in seen:
                raise NameCollisionError(f"argument '{name}' appears more than once after flattening")
            seen.add(name)
            try:
                typ = self.lowerer.lower(arg.type, owner, arg).ref
            except GenerationError as err:
                # Arguments are reported through their method.
                err.owner = owner
                err.member = method.name
                err.msg = f"argument '{arg.name}': {err.msg}"
                raise
            result.append((typ, name))

    # --- Synthesized types ---

    def render_synthesized(self, key: str, shape: Shape) -> Unit:
        """Render a registry entry as a class or an enum."""
        if isinstance(shape, SynthesizedEnum):
            return self.render_enum(key, shape)
        return self.render_result_class(key, shape)

    def render_result_class(self, key: str, shape: ObjectShape) -> Unit:
        """A plain class holding the shape's properties."""
        e = self._emitter()
        e.line(f"public class {key}")
        e.line("{")
        e.indent += 1
        for i, prop in enumerate(shape.properties):
            if i > 0:
                e.line()
            try:
                typ = self.lowerer.lower(prop.type, key, prop).ref
                name = translate("property", prop.name, prop)
            except GenerationError as err:
                raise err.locate(key, prop.name)
            e.extend(self._doc(prop))
            e.line(f"public {typ} {name} {{ get; set; }}")
        e.indent -= 1
        e.line("}")
        return Unit(key, "class", e.lines)

    def render_enum(self, key: str, shape: SynthesizedEnum) -> Unit:
        return render_enum(key, shape, self.config.indent)


def render_enum(key: str, shape: SynthesizedEnum, indent_str: str = "    ") -> Unit:
    """An enum whose values map back to their literals via EnumMember."""
    e = Emitter(indent_str)
    e.line(f"public enum {key}")
    e.line("{")
    e.indent += 1
    seen: dict[str, str] = {}
    for i, value in enumerate(shape.values):
        try:
            name = enum_value_name(value)
        except GenerationError as err:
            raise err.locate(key)
        if name in seen:
            raise NameCollisionError(
                f"values '{seen[name]}' and '{value}' both translate to '{name}'", key
            )
        seen[name] = value
        if i > 0:
            e.line()
        e.line(f'[EnumMember(Value = "{escape_string(value)}")]')
        e.line(f"{name},")
    e.indent -= 1
    e.line("}")
    return Unit(key, "enum", e.lines)
