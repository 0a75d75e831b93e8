"""csapi - project a documented API onto a C# interface surface."""

from .config import GeneratorConfig
from .errors import (
    EmptyNameError,
    GenerationError,
    InputError,
    MalformedTypeError,
    NameCollisionError,
    RegistryClosedError,
    UnsupportedShapeError,
)
from .generator import GenerationResult, generate

__version__ = "0.1.0"

__all__ = [
    "EmptyNameError",
    "GenerationError",
    "GenerationResult",
    "GeneratorConfig",
    "InputError",
    "MalformedTypeError",
    "NameCollisionError",
    "RegistryClosedError",
    "UnsupportedShapeError",
    "generate",
]
