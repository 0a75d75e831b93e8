"""Generation pipeline: API classes -> C# declaration units.

Two phases. First every class is rendered and every synthesized type is
registered, including nested shapes discovered while rendering synthesized
classes. Then the registry is drained once; nothing is written to disk until
all names are known.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .backend.csharp import CSharpBackend
from .config import GeneratorConfig
from .frontend.lowering import TypeLowerer
from .frontend.names import translate
from .frontend.registry import Registry, Shape
from .ir import Class, Member, Unit


@dataclass
class GenerationResult:
    """Units in emission order: classes first, then synthesized types."""

    units: list[Unit] = field(default_factory=list)
    synthesized: list[tuple[str, Shape]] = field(default_factory=list)

    def unit(self, name: str) -> Unit | None:
        for u in self.units:
            if u.name == name:
                return u
        return None


class LinkResolver:
    """Render `[Class]`, `[Class.member]` and `[param: x]` doc links as cref tags."""

    def __init__(self, classes: list[Class]) -> None:
        self.members: dict[str, dict[str, Member]] = {}
        for cls in classes:
            self.members[cls.name] = {m.name: m for m in cls.members}

    def __call__(self, target: str) -> str | None:
        if ":" in target:
            kind, _, name = target.partition(":")
            if kind.strip() in ("param", "option"):
                return '<paramref name="' + translate("argument", name.strip()) + '"/>'
            return None
        cls_name, _, member_name = target.partition(".")
        if cls_name not in self.members:
            return None
        iface = translate("interface", cls_name)
        if not member_name:
            return '<see cref="' + iface + '"/>'
        member = self.members[cls_name].get(member_name)
        if member is None:
            return None
        return '<see cref="' + iface + "." + translate(member.kind, member.name, member) + '"/>'


def generate(
    classes: list[Class],
    config: GeneratorConfig | None = None,
    log: Callable[[str], None] | None = None,
) -> GenerationResult:
    """Render classes and every type synthesized while rendering them."""
    config = config if config is not None else GeneratorConfig()
    registry = Registry(config.predefined_enums)
    class_names = {cls.name: translate("interface", cls.name) for cls in classes}
    lowerer = TypeLowerer(registry, class_names, config)
    backend = CSharpBackend(lowerer, config, LinkResolver(classes))

    result = GenerationResult()
    for cls in classes:
        if log is not None:
            log("Generating " + class_names[cls.name])
        result.units.append(backend.render_class(cls))

    rendered: dict[str, Unit] = {}
    for key, shape in registry:
        if log is not None:
            log("Registering additional type: " + key)
        rendered[key] = backend.render_synthesized(key, shape)

    result.synthesized = registry.drain()
    for key, _ in result.synthesized:
        result.units.append(rendered[key])
    return result
