from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from objectives.domain.models.subject import Subject


@dataclass
class DayStarted:
    day: int


@dataclass
class ObjectivesChanged:
    objectives: tuple = ()
    current_daily_id: Optional[int] = None


@dataclass
class IntelligentBeingKilled:
    victim: Optional[Subject]
    x: Optional[float] = None
    y: Optional[float] = None

    target_gated: ClassVar[bool] = True

    @property
    def subject(self) -> Optional[Subject]:
        return self.victim


@dataclass
class AnimalKilled:
    victim: Optional[Subject]
    x: Optional[float] = None
    y: Optional[float] = None

    target_gated: ClassVar[bool] = True

    @property
    def subject(self) -> Optional[Subject]:
        return self.victim


@dataclass
class AffectionShown:
    recipient: Optional[Subject] = None


@dataclass
class ObjectiveActionPerformed:
    action_type: str
    target: Optional[Subject] = None
    with_object: Optional[str] = None
    objective_id: Optional[int] = None
    action_id: Optional[str] = None


@dataclass
class BodyPartDetached:
    part_id: Optional[str]
    from_prisoner: bool = False

    part_gated: ClassVar[bool] = True


@dataclass
class BodyPartCooked:
    part_id: Optional[str]

    part_gated: ClassVar[bool] = True


@dataclass
class BodyPartGifted:
    part_id: Optional[str]
    recipient: Optional[Subject] = None
    recipient_type: Optional[str] = None
    is_cooked: bool = False

    part_gated: ClassVar[bool] = True

    @property
    def resolved_recipient_type(self) -> Optional[str]:
        if self.recipient_type:
            return self.recipient_type
        if self.recipient is not None:
            return self.recipient.recipient_type
        return None


@dataclass
class BodyPartConsumed:
    part_id: Optional[str]
    is_cooked: bool = False

    part_gated: ClassVar[bool] = True


@dataclass
class CorpsePlaced:
    x: Optional[float] = None
    y: Optional[float] = None
    corpse: Optional[Subject] = None


@dataclass
class FollowStarted:
    follower: Optional[Subject]

    target_gated: ClassVar[bool] = True

    @property
    def subject(self) -> Optional[Subject]:
        return self.follower


@dataclass
class CaptivityEstablished:
    captive: Optional[Subject]

    target_gated: ClassVar[bool] = True

    @property
    def subject(self) -> Optional[Subject]:
        return self.captive


@dataclass
class RitualPerformed:
    x: Optional[float] = None
    y: Optional[float] = None
    victim: Optional[Subject] = None


@dataclass
class CoveringWorn:
    is_prisoner_skin: bool = False


TRACKED_EVENT_TYPES = (
    IntelligentBeingKilled,
    AnimalKilled,
    AffectionShown,
    ObjectiveActionPerformed,
    BodyPartDetached,
    BodyPartCooked,
    BodyPartGifted,
    BodyPartConsumed,
    CorpsePlaced,
    FollowStarted,
    CaptivityEstablished,
    RitualPerformed,
    CoveringWorn,
)
