"""Frontend package - API description to lowered C# type references."""

from .load import load_file, load_string
from .lowering import Lowered, TypeLowerer
from .names import capitalize, enum_value_name, translate
from .registry import Registry

__all__ = [
    "Lowered",
    "Registry",
    "TypeLowerer",
    "capitalize",
    "enum_value_name",
    "load_file",
    "load_string",
    "translate",
]
