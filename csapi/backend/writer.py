"""Write rendered units into .cs files through the file template."""

from __future__ import annotations

from pathlib import Path

from ..config import GeneratorConfig
from ..ir import Unit


def load_template(path: str | Path) -> str:
    """Read a template file; it must contain a [CONTENT] placeholder."""
    text = Path(path).read_text(encoding="utf-8")
    if "[CONTENT]" not in text:
        raise ValueError("template '" + str(path) + "' has no [CONTENT] placeholder")
    return text


def render_file(unit: Unit, config: GeneratorConfig) -> str:
    """Full file text for a unit, its lines indented inside the namespace."""
    body = "\n".join(config.indent + line if line else "" for line in unit.lines)
    return (
        config.template.replace("[PW_TOOL_VERSION]", config.tool_version)
        .replace("[NAMESPACE]", config.namespace)
        .replace("[CONTENT]", body)
    )


def write_units(units: list[Unit], directory: str | Path, config: GeneratorConfig) -> list[Path]:
    """Write one {Name}.cs per unit into directory. Returns the written paths."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for unit in units:
        path = out_dir / (unit.name + ".cs")
        path.write_text(render_file(unit, config), encoding="utf-8")
        written.append(path)
    return written
