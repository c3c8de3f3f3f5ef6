from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from objectives.domain.models.subject import Subject
from objectives.domain.models.vocabulary import Age, EntityKind, Race, SomeoneType


class ConstraintKind(str, Enum):
    HUMAN = "human"
    PET = "pet"
    RAT = "rat"
    CORPSE = "corpse"


class EntityStatus(str, Enum):
    ALIVE = "alive"
    DEAD = "dead"
    ANY = "any"


@dataclass(frozen=True)
class EntityConstraint:
    """Restricts which in-world entities a context action may target.

    ``kind=None`` accepts every entity kind. For corpses the remaining
    attributes are checked against what the entity was when alive.
    """

    kind: Optional[ConstraintKind] = None
    status: EntityStatus = EntityStatus.ANY
    age: Optional[str] = None
    race: Optional[str] = None
    pet_type: Optional[str] = None
    is_cop: Optional[bool] = None
    is_prisoner: Optional[bool] = None

    def matches(self, subject: Optional[Subject]) -> bool:
        if subject is None:
            return False

        entity_kind = self._kind_of(subject)
        if self.kind is not None and self.kind != entity_kind:
            return False

        if self.status == EntityStatus.ALIVE and subject.is_dead:
            return False
        if self.status == EntityStatus.DEAD and not subject.is_dead:
            return False

        if self.age is not None and subject.age != self.age:
            return False
        if self.race is not None and subject.race != self.race:
            return False
        if self.pet_type is not None and subject.kind != self.pet_type:
            return False
        if self.is_cop is not None and bool(subject.is_cop) != self.is_cop:
            return False
        if self.is_prisoner is not None and bool(subject.is_prisoner) != self.is_prisoner:
            return False
        return True

    @staticmethod
    def _kind_of(subject: Subject) -> ConstraintKind | None:
        if subject.is_corpse:
            return ConstraintKind.CORPSE
        if subject.kind == EntityKind.RAT.value:
            return ConstraintKind.RAT
        if subject.is_pet:
            return ConstraintKind.PET
        if subject.kind == EntityKind.HUMAN.value:
            return ConstraintKind.HUMAN
        return None

    def describe(self) -> str:
        parts: list[str] = []
        if self.status != EntityStatus.ANY:
            parts.append(self.status.value)
        if self.age:
            parts.append(self.age)
        if self.race:
            parts.append(self.race)
        if self.is_cop:
            parts.append("cop")
        if self.is_prisoner:
            parts.append("prisoner")

        if self.kind == ConstraintKind.PET:
            parts.append(self.pet_type or "pet")
        elif self.kind == ConstraintKind.RAT:
            parts.append("rat")
        elif self.kind == ConstraintKind.CORPSE:
            if self.pet_type:
                parts.append(self.pet_type)
            parts.append("corpse")
        elif self.kind == ConstraintKind.HUMAN:
            parts.append("human")
        else:
            parts.append(self.pet_type or "entity")
        return " ".join(parts)

    @classmethod
    def for_target(cls, target_type: Optional[str], status: EntityStatus = EntityStatus.ANY) -> "EntityConstraint":
        """Build a constraint matching an objective target category.

        A dead status yields a corpse constraint carrying the same
        attributes, since targets of corpse actions are no longer alive.
        """
        kind: ConstraintKind | None = ConstraintKind.HUMAN
        fields: dict = {}
        target = str(getattr(target_type, "value", target_type) or "")

        if target == SomeoneType.COP.value:
            fields["is_cop"] = True
        elif target == SomeoneType.KID.value:
            fields["age"] = Age.CHILD.value
        elif target == SomeoneType.ADULT.value:
            fields["age"] = Age.ADULT.value
        elif target == SomeoneType.AZURE_PERSON.value:
            fields.update(age=Age.ADULT.value, race=Race.AZURE.value)
        elif target == SomeoneType.CRIMSON_PERSON.value:
            fields.update(age=Age.ADULT.value, race=Race.CRIMSON.value)
        elif target == SomeoneType.GOLDEN_PERSON.value:
            fields.update(age=Age.ADULT.value, race=Race.GOLDEN.value)
        elif target == SomeoneType.PRISONER.value:
            fields["is_prisoner"] = True
        elif target in {SomeoneType.DOG.value, SomeoneType.CAT.value}:
            kind = ConstraintKind.PET
            fields["pet_type"] = target
        else:
            kind = None

        if status == EntityStatus.DEAD:
            kind = ConstraintKind.CORPSE
        return cls(kind=kind, status=status, **fields)

    @classmethod
    def any_corpse(cls) -> "EntityConstraint":
        return cls(kind=ConstraintKind.CORPSE, status=EntityStatus.DEAD)
