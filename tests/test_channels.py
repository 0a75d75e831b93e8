"""Tests for protocol channel generation."""

import pytest

from csapi.backend.channels import ChannelBackend, channel_name, generate_channels
from csapi.errors import InputError, MalformedTypeError
from csapi.frontend.protocol import ProtocolItem, load_protocol

PROTOCOL = """\
Frame:
  type: interface
  properties:
    url: string
    name: string?
    visible: boolean?
    state:
      type: enum
      literals: [attached, detached]

Point:
  type: object
  properties:
    x: number
    y: number?
    tags: string[]

Selectors:
  type: mixin
"""


def test_load_protocol_keeps_objects_and_interfaces():
    items = load_protocol(PROTOCOL)
    assert [(i.name, i.kind) for i in items] == [("Frame", "interface"), ("Point", "object")]
    assert [name for name, _ in items[0].properties] == ["url", "name", "visible", "state"]


def test_load_empty_protocol():
    assert load_protocol("") == []


def test_load_protocol_rejects_non_mapping():
    with pytest.raises(InputError):
        load_protocol("- Frame\n")


def test_load_protocol_rejects_bad_yaml():
    with pytest.raises(InputError):
        load_protocol("Frame: [unclosed\n")


@pytest.mark.parametrize(
    "kind,name,expected",
    [
        ("interface", "frame", "FrameChannel"),
        ("object", "point", "Point"),
        ("property", "url", "Url"),
        ("property", "", ""),
    ],
)
def test_channel_name(kind, name, expected):
    assert channel_name(kind, name) == expected


def test_groups():
    result = generate_channels(load_protocol(PROTOCOL))
    assert [u.name for u in result.groups["models"]] == ["Point"]
    assert [u.name for u in result.groups["channels"]] == ["FrameChannel"]
    assert [u.name for u in result.groups["enums"]] == ["StateEnum"]
    assert [u.name for u in result.all_units()] == ["Point", "FrameChannel", "StateEnum"]


def test_channel_class():
    result = generate_channels(load_protocol(PROTOCOL))
    assert result.groups["channels"][0].lines == [
        "// Generated from: Frame",
        "public partial class FrameChannel",
        "{",
        '    [JsonProperty("url")]',
        "    public string Url { get; set; }",
        "",
        '    [JsonProperty("name")]',
        "    public string Name { get; set; }",
        "",
        '    [JsonProperty("visible")]',
        "    public bool? Visible { get; set; }",
        "",
        '    [JsonProperty("state")]',
        "    public StateEnum State { get; set; }",
        "}",
    ]


def test_model_class_types():
    lines = generate_channels(load_protocol(PROTOCOL)).groups["models"][0].lines
    assert "    public float X { get; set; }" in lines
    assert "    public float? Y { get; set; }" in lines
    assert "    public string[] Tags { get; set; }" in lines


def test_enum_unit():
    [enum] = generate_channels(load_protocol(PROTOCOL)).groups["enums"]
    assert enum.lines == [
        "public enum StateEnum",
        "{",
        '    [EnumMember(Value = "attached")]',
        "    Attached,",
        "",
        '    [EnumMember(Value = "detached")]',
        "    Detached,",
        "}",
    ]


def test_object_items_are_known_types():
    backend = ChannelBackend([ProtocolItem("Point", "object")])
    assert backend.translate_type("Point[]", "Points") == "Point[]"
    assert backend.translate_type("Point?", "Point") == "Point"


def test_array_and_nullable_enum_forms():
    backend = ChannelBackend([])
    assert backend.translate_type({"type": "array", "items": "number"}, "Sizes") == "float[]"
    enum = {"type": "enum?", "literals": ["a", None, "b"]}
    assert backend.translate_type(enum, "Mode") == "ModeEnum?"
    assert backend.registry.get("ModeEnum").values == ("a", "b")


def test_unknown_type_is_located():
    items = [ProtocolItem("Frame", "interface", [("parent", "Unknown")])]
    with pytest.raises(MalformedTypeError) as exc:
        generate_channels(items)
    assert exc.value.where() == "Frame.parent"


def test_enum_shared_between_items():
    state = {"type": "enum", "literals": ["on", "off"]}
    items = [
        ProtocolItem("A", "object", [("state", state)]),
        ProtocolItem("B", "object", [("state", state)]),
    ]
    result = generate_channels(items)
    assert [u.name for u in result.groups["enums"]] == ["StateEnum"]
