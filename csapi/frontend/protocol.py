"""Load a protocol description (protocol.yml) for channel generation.

The protocol is a YAML mapping from name to item:

    Frame:
      type: interface
      properties:
        url: string
        name: string?
        state:
          type: enum
          literals: [attached, detached]

Only object and interface items are kept; other item types (mixins, enums
declared at top level) are not rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from ..errors import InputError

ITEM_KINDS = ("object", "interface")


@dataclass
class ProtocolItem:
    """One protocol entry; properties keep their document order."""

    name: str
    kind: str
    properties: list[tuple[str, object]] = field(default_factory=list)


def load_protocol_file(path: str | Path) -> list[ProtocolItem]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError("cannot read '" + str(path) + "': " + str(e))
    return load_protocol(text)


def load_protocol(text: str) -> list[ProtocolItem]:
    """Parse protocol YAML into items, in document order."""
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InputError("cannot parse protocol: " + str(e))
    if doc is None:
        return []
    if not isinstance(doc, dict):
        raise InputError("protocol must be a mapping of names to items")
    items: list[ProtocolItem] = []
    for name, value in doc.items():
        if not isinstance(value, dict):
            raise InputError("protocol item must be a mapping", str(name))
        kind = value.get("type")
        if kind not in ITEM_KINDS:
            continue
        props = value.get("properties") or {}
        if not isinstance(props, dict):
            raise InputError("properties must be a mapping", str(name))
        items.append(ProtocolItem(str(name), str(kind), [(str(k), v) for k, v in props.items()]))
    return items
