from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Sequence, Union


@dataclass
class Step:
    id: str
    text: str
    complete: bool = False


@dataclass(frozen=True)
class ScopedCounter:
    """Counts qualifying occurrences inside one scope (e.g. one building)."""

    scope_key: str
    count: int = 0

    def advance(self, scope_key: str) -> "ScopedCounter":
        if scope_key == self.scope_key:
            return replace(self, count=self.count + 1)
        return ScopedCounter(scope_key=scope_key, count=1)


# Tagged variant: None is "no accumulator".
Accumulator = Optional[ScopedCounter]


@dataclass(frozen=True)
class GeneratedContent:
    title: str
    description: str
    xp: int = 0
    steps: Optional[tuple[Step, ...]] = None
    action: Optional[str] = None
    target_type: Optional[str] = None
    body_part: Optional[str] = None
    object_type: Optional[str] = None
    location: Optional[str] = None
    highlight_location: Optional[str] = None
    highlight_ritual_site: bool = False
    template_id: Optional[str] = None
    requires_prisoner: bool = False
    reward_text: str = ""
    penalty_text: str = ""


ContentGenerator = Callable[[random.Random], GeneratedContent]


@dataclass(frozen=True)
class ObjectiveTemplate:
    id: str
    generate: ContentGenerator
    xp: int = 0
    requires_prisoner: bool = False


@dataclass
class Objective:
    id: int
    title: str
    description: str
    template_id: Optional[str] = None
    xp: int = 0
    is_daily: bool = False
    is_complete: bool = False
    is_failed: bool = False
    steps: Optional[list[Step]] = None
    action: Optional[str] = None
    target_type: Optional[str] = None
    body_part: Optional[str] = None
    object_type: Optional[str] = None
    location: Optional[str] = None
    highlight_location: Optional[str] = None
    highlight_ritual_site: bool = False
    reward_text: str = ""
    penalty_text: str = ""
    accumulator: Accumulator = None
    follower_hint: Optional[Union[int, str]] = None

    @property
    def is_terminal(self) -> bool:
        return bool(self.is_complete or self.is_failed)

    def find_step(self, step_id: str) -> Step | None:
        for step in self.steps or ():
            if step.id == step_id:
                return step
        return None

    def is_step_complete(self, step_id: str) -> bool:
        step = self.find_step(step_id)
        return step is not None and step.complete

    @property
    def all_steps_complete(self) -> bool:
        return bool(self.steps) and all(step.complete for step in self.steps or ())

    @classmethod
    def from_content(cls, objective_id: int, content: GeneratedContent, *, is_daily: bool) -> "Objective":
        return cls(
            id=int(objective_id),
            title=content.title,
            description=content.description,
            template_id=content.template_id,
            xp=max(0, int(content.xp)),
            is_daily=bool(is_daily),
            steps=_copy_steps(content.steps),
            action=content.action,
            target_type=content.target_type,
            body_part=content.body_part,
            object_type=content.object_type,
            location=content.location,
            highlight_location=content.highlight_location,
            highlight_ritual_site=bool(content.highlight_ritual_site),
            reward_text=content.reward_text,
            penalty_text=content.penalty_text,
        )


def _copy_steps(steps: Sequence[Step] | None) -> list[Step] | None:
    if not steps:
        return None
    return [Step(id=step.id, text=step.text, complete=bool(step.complete)) for step in steps]
