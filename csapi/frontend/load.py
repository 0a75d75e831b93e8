"""Load an API description document into the IR.

The document is JSON or YAML. Either a list of classes or a mapping with a
"classes" list. Class:

    {"name": "Page", "spec": [...], "members": [...]}

Member:

    {"kind": "method", "name": "title", "type": <type>, "alias": "...",
     "async": true, "deprecated": false, "args": [...], "spec": [...]}

Type, either a string or a mapping:

    "boolean" | "\\"left\\"" | "Frame"
    {"name": "Array", "templates": [<type>]}
    {"union": [<type>, ...]}
    {"name": "Object", "properties": [<member>, ...]}
    {"name": "Object", "templates": [<type>, <type>]}

Bare names starting with a lowercase letter (and the built-ins Buffer,
Serializable, Object) are primitives; other names reference classes.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from ..errors import GenerationError, InputError, MalformedTypeError
from ..ir import (
    Array,
    Class,
    DocNode,
    Literal,
    Map,
    Member,
    Named,
    ObjectShape,
    Primitive,
    TypeExpr,
    Union,
)

BUILTIN_NAMES = frozenset({"Buffer", "Serializable", "Object"})


def load_file(path: str | Path) -> list[Class]:
    """Read and convert an API description file (.json, .yml or .yaml)."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError("cannot read '" + str(path) + "': " + str(e))
    return load_string(text, yaml_syntax=path.suffix in (".yml", ".yaml"))


def load_string(text: str, yaml_syntax: bool = False) -> list[Class]:
    """Parse a JSON (or YAML) API description."""
    try:
        if yaml_syntax:
            doc = yaml.safe_load(text)
        else:
            doc = json.loads(text)
    except (ValueError, yaml.YAMLError) as e:
        raise InputError("cannot parse API description: " + str(e))
    return classes_from_doc(doc)


def classes_from_doc(doc: object) -> list[Class]:
    if isinstance(doc, dict):
        doc = doc.get("classes", [])
    if not isinstance(doc, list):
        raise InputError("API description must be a list of classes")
    classes: list[Class] = []
    seen: set[str] = set()
    for entry in doc:
        cls = class_from_dict(entry)
        if cls.name in seen:
            raise InputError("class is declared twice", cls.name)
        seen.add(cls.name)
        classes.append(cls)
    return classes


def list_field(d: dict, key: str) -> list:
    """A list-valued field; missing or empty (`key:` in YAML) reads as []."""
    value = d.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise InputError("'" + key + "' must be a list, got " + repr(value))
    return value


def class_from_dict(d: object) -> Class:
    if not isinstance(d, dict) or "name" not in d:
        raise InputError("class entry needs a name: " + repr(d))
    name = str(d["name"])
    try:
        members = tuple(member_from_dict(m, name) for m in list_field(d, "members"))
        spec = docs_from_list(list_field(d, "spec"))
    except GenerationError as e:
        raise e.locate(name)
    return Class(name=name, members=members, spec=spec)


def member_from_dict(d: object, owner: str, kind: str | None = None) -> Member:
    if not isinstance(d, dict) or "name" not in d:
        raise InputError("member entry needs a name: " + repr(d), owner)
    name = str(d["name"])
    member_kind = kind if kind is not None else str(d.get("kind", "property"))
    typ = d.get("type", "void")
    try:
        type_expr = type_from_value(typ, owner)
        args = tuple(member_from_dict(a, owner, "argument") for a in list_field(d, "args"))
        spec = docs_from_list(list_field(d, "spec"))
    except GenerationError as e:
        raise e.locate(owner, name)
    alias = d.get("alias")
    return Member(
        kind=member_kind,
        name=name,
        type=type_expr,
        alias=str(alias) if alias is not None else None,
        is_async=bool(d.get("async", False)),
        args=args,
        spec=spec,
        deprecated=bool(d.get("deprecated", False)),
    )


def type_from_name(name: str) -> TypeExpr:
    """Classify a bare type name."""
    if not name:
        raise InputError("empty type name")
    if name[0] in "\"'":
        return Literal(name)
    if name in BUILTIN_NAMES or name[0].islower():
        return Primitive(name)
    return Named(name)


def type_from_value(value: object, owner: str = "") -> TypeExpr:
    """Convert a type given as a string or mapping."""
    if isinstance(value, str):
        return type_from_name(value)
    if not isinstance(value, dict):
        raise InputError("type must be a string or a mapping, got " + repr(value))
    if "union" in value:
        members = tuple(type_from_value(v, owner) for v in list_field(value, "union"))
        if len(members) < 2:
            raise InputError("union needs at least two members")
        return Union(members)
    name = str(value.get("name", ""))
    templates = list_field(value, "templates")
    if name == "Array":
        if len(templates) != 1:
            raise MalformedTypeError(
                "array has " + str(len(templates)) + " templates, expected exactly 1"
            )
        return Array(type_from_value(templates[0], owner))
    if name == "Object":
        if "properties" in value:
            props = list_field(value, "properties")
            return ObjectShape(tuple(member_from_dict(p, owner, "property") for p in props))
        if len(templates) == 2:
            return Map(type_from_value(templates[0], owner), type_from_value(templates[1], owner))
    return type_from_name(name)


def docs_from_list(nodes: object) -> tuple[DocNode, ...]:
    """Documentation nodes; plain strings are text paragraphs."""
    if not isinstance(nodes, list):
        raise InputError("documentation must be a list of nodes")
    result: list[DocNode] = []
    for node in nodes:
        if isinstance(node, str):
            result.append(DocNode("text", text=node))
            continue
        if not isinstance(node, dict):
            raise InputError("documentation node must be a string or a mapping")
        kind = str(node.get("type", "text"))
        result.append(
            DocNode(
                kind=kind,
                text=str(node.get("text", "")),
                lines=tuple(str(x) for x in list_field(node, "lines")),
                li_type=str(node.get("liType", "bullet")),
            )
        )
    return tuple(result)
