"""Domain models for the relationship graph."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class User:
    """A user identity.

    The id is assigned by the caller before registration. Equality and
    hashing only look at the id, so two values with the same id are the
    same user whatever their names.
    """

    id: Hashable
    name: str = field(default="", compare=False)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})" if self.name else str(self.id)
