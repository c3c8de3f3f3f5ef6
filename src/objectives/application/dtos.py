from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class StepView:
    id: str
    text: str
    complete: bool


@dataclass(frozen=True)
class ObjectiveView:
    id: int
    title: str
    description: str
    status: str
    is_daily: bool
    xp: int
    reward_text: str = ""
    penalty_text: str = ""
    template_id: str | None = None
    steps: List[StepView] = field(default_factory=list)
