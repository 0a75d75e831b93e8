"""Generation errors.

Every error is terminal: the run aborts at the point of detection and
reports the offending class/member.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Error with the identity of the entity being generated."""

    category = "generate"

    def __init__(self, msg: str, owner: str = "", member: str = "") -> None:
        self.msg: str = msg
        self.owner: str = owner
        self.member: str = member
        super().__init__(msg)

    def where(self) -> str:
        if self.owner and self.member:
            return self.owner + "." + self.member
        return self.owner or self.member

    def locate(self, owner: str, member: str = "") -> GenerationError:
        """Fill in location fields that are still unknown. Returns self."""
        if not self.owner:
            self.owner = owner
        if not self.member:
            self.member = member
        return self

    def __str__(self) -> str:
        where = self.where()
        if where:
            return "error: [" + self.category + "] " + where + ": " + self.msg
        return "error: [" + self.category + "] " + self.msg


class MalformedTypeError(GenerationError):
    """Multi-dimensional array, over-long null union, unknown primitive."""

    category = "malformed-type"


class NameCollisionError(GenerationError):
    """Two syntheses or two flattened arguments share a name."""

    category = "name-collision"


class UnsupportedShapeError(GenerationError):
    """Member kind or type shape with no defined rendering."""

    category = "unsupported"


class EmptyNameError(GenerationError):
    """Name translator given an empty source name."""

    category = "empty-name"


class RegistryClosedError(GenerationError):
    """Registry used after its one-shot drain."""

    category = "registry"


class InputError(GenerationError):
    """Input document does not describe a valid API tree."""

    category = "input"
