"""C# backend for protocol channels: protocol items -> model classes.

Objects become models, interfaces become `{Name}Channel` classes, and inline
enums become `{Property}Enum` declarations shared through a Registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import GeneratorConfig
from ..errors import GenerationError, MalformedTypeError
from ..frontend.names import capitalize
from ..frontend.protocol import ProtocolItem
from ..frontend.registry import Registry
from ..ir import SynthesizedEnum, Unit
from .csharp import render_enum
from .util import Emitter

TYPE_MAP: dict[str, str] = {
    "boolean": "bool",
    "string": "string",
    "number": "float",
    "binary": "byte[]",
}

VALUE_TYPES = frozenset({"bool", "float"})


def channel_name(kind: str, name: str) -> str:
    """Protocol interfaces get a Channel suffix; everything else is capitalized."""
    if not name:
        return name
    assumed = capitalize(name)
    if kind == "interface":
        return assumed + "Channel"
    return assumed


@dataclass
class ChannelResult:
    """Units grouped by output directory: models, channels, enums."""

    groups: dict[str, list[Unit]] = field(
        default_factory=lambda: {"models": [], "channels": [], "enums": []}
    )

    def all_units(self) -> list[Unit]:
        return self.groups["models"] + self.groups["channels"] + self.groups["enums"]


class ChannelBackend:
    """Render protocol items; enums are collected in the registry."""

    def __init__(self, items: list[ProtocolItem], config: GeneratorConfig | None = None) -> None:
        self.config = config if config is not None else GeneratorConfig()
        self.registry = Registry()
        self.type_map: dict[str, str] = dict(TYPE_MAP)
        for item in items:
            if item.kind == "object":
                self.type_map[item.name] = item.name

    def translate_type(self, value: object, owner_name: str) -> str:
        """C# type for a protocol property type, registering inline enums."""
        if isinstance(value, str):
            nullable = value.endswith("?")
            base = value[:-1] if nullable else value
            if base.endswith("[]"):
                return self.translate_type(base[:-2], owner_name) + "[]"
            mapped = self.type_map.get(base)
            if mapped is None:
                raise MalformedTypeError(f"unknown type '{value}'")
            if nullable and mapped in VALUE_TYPES:
                return mapped + "?"
            return mapped
        if isinstance(value, dict):
            kind = str(value.get("type", ""))
            if kind.startswith("enum"):
                enum_name = owner_name + "Enum"
                literals = value.get("literals") or []
                values = tuple(str(v) for v in literals if v is not None)
                self.registry.register(enum_name, SynthesizedEnum(values))
                if kind.endswith("?"):
                    return enum_name + "?"
                return enum_name
            if kind.startswith("array"):
                return self.translate_type(value.get("items", ""), owner_name) + "[]"
        raise MalformedTypeError(f"unsupported protocol type {value!r}")

    def render_item(self, item: ProtocolItem) -> Unit:
        name = channel_name(item.kind, item.name)
        e = Emitter(self.config.indent)
        e.line(f"// Generated from: {item.name}")
        e.line(f"public partial class {name}")
        e.line("{")
        e.indent += 1
        for i, (prop_name, value) in enumerate(item.properties):
            prop = channel_name("property", prop_name)
            try:
                typ = self.translate_type(value, prop)
            except GenerationError as err:
                raise err.locate(item.name, prop_name)
            if i > 0:
                e.line()
            e.line(f'[JsonProperty("{prop_name}")]')
            e.line(f"public {typ} {prop} {{ get; set; }}")
        e.indent -= 1
        e.line("}")
        return Unit(name, "class", e.lines)


def generate_channels(
    items: list[ProtocolItem], config: GeneratorConfig | None = None
) -> ChannelResult:
    """Render every protocol item, then every enum they registered."""
    backend = ChannelBackend(items, config)
    result = ChannelResult()
    for item in items:
        group = "channels" if item.kind == "interface" else "models"
        result.groups[group].append(backend.render_item(item))
    for key, shape in backend.registry.drain():
        if isinstance(shape, SynthesizedEnum):
            result.groups["enums"].append(render_enum(key, shape, backend.config.indent))
    return result
