"""PropertyRef: one resolved slot in a caller-owned object graph."""
from dataclasses import dataclass
from typing import Any

from objectmapper.fields import FieldAccessor


@dataclass(frozen=True)
class PropertyRef:
    """The object that directly holds a field, and the field itself.

    ``owner`` is borrowed from the caller's graph. ``value()`` reads the slot
    every time it is called; nothing is cached.
    """
    owner: Any
    field: FieldAccessor

    @property
    def name(self) -> str:
        return self.field.name

    def value(self) -> Any:
        return self.field.get(self.owner)

    def assign(self, value: Any) -> None:
        self.field.set(self.owner, value)
