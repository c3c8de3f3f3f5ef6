from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

SubjectId = Union[int, str]


@dataclass(frozen=True)
class Subject:
    """Snapshot of an in-world entity as carried by a domain event."""

    id: Optional[SubjectId] = None
    kind: str = "human"
    age: Optional[str] = None
    race: Optional[str] = None
    gender: Optional[str] = None
    is_cop: bool = False
    is_prisoner: bool = False
    is_alive: bool = True
    is_corpse: bool = False
    was_following: bool = False

    @property
    def is_dead(self) -> bool:
        return bool(self.is_corpse) or self.is_alive is False

    @property
    def is_pet(self) -> bool:
        return self.kind in {"dog", "cat"}

    @property
    def recipient_type(self) -> str:
        if self.is_cop:
            return "cop"
        return str(self.kind or "")
