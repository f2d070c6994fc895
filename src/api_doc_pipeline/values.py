"""Primitive values carried into generated documents.

Configuration values and parameter examples arrive as whatever YAML produced.
Only booleans, integers, floats and strings can be rendered; everything else
is tagged UNSUPPORTED and callers decide what to do with it.
"""

from dataclasses import dataclass
from enum import Enum


class PrimitiveKind(Enum):
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "number"
    STRING = "string"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class PrimitiveValue:
    """A value tagged with the primitive kind it was recognised as."""

    kind: PrimitiveKind
    value: bool | int | float | str | None = None

    @property
    def supported(self) -> bool:
        return self.kind is not PrimitiveKind.UNSUPPORTED

    def render(self) -> str:
        """Render the value as configuration text (booleans as true/false)."""
        if self.kind is PrimitiveKind.UNSUPPORTED:
            raise ValueError("Unsupported values cannot be rendered")
        if self.kind is PrimitiveKind.BOOLEAN:
            return "true" if self.value else "false"
        return str(self.value)


def to_primitive(value: object) -> PrimitiveValue:
    """Classify a raw value. bool is checked before int since it subclasses it."""
    if isinstance(value, bool):
        return PrimitiveValue(PrimitiveKind.BOOLEAN, value)
    if isinstance(value, int):
        return PrimitiveValue(PrimitiveKind.INTEGER, value)
    if isinstance(value, float):
        return PrimitiveValue(PrimitiveKind.FLOAT, value)
    if isinstance(value, str):
        return PrimitiveValue(PrimitiveKind.STRING, value)
    return PrimitiveValue(PrimitiveKind.UNSUPPORTED)
