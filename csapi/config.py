"""Generation settings."""

from __future__ import annotations

from dataclasses import dataclass, field

MAX_DOCUMENTATION_COLUMN_WIDTH = 120

# Enums whose names and values are fixed in advance instead of derived.
PREDEFINED_ENUMS: dict[str, tuple[str, ...]] = {
    "MixedState": ("on", "off", "mixed"),
}

DEFAULT_TEMPLATE: str = """\
// <auto-generated>
// This file is generated by [PW_TOOL_VERSION]. Do not edit.
// </auto-generated>
using System;
using System.Collections.Generic;
using System.Runtime.Serialization;
using System.Threading.Tasks;

namespace [NAMESPACE]
{
[CONTENT]
}
"""


@dataclass
class GeneratorConfig:
    """Options for one generation run."""

    max_column_width: int = MAX_DOCUMENTATION_COLUMN_WIDTH
    strict_unions: bool = False
    predefined_enums: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(PREDEFINED_ENUMS)
    )
    namespace: str = "Microsoft.Playwright"
    tool_version: str = "csapi"
    template: str = DEFAULT_TEMPLATE
    indent: str = "    "
