from __future__ import annotations

from typing import Iterable

from objectives.application.dtos import ObjectiveView, StepView
from objectives.domain.models.objective import Objective


def objective_status(objective: Objective) -> str:
    if objective.is_complete:
        return "complete"
    if objective.is_failed:
        return "failed"
    return "active"


def to_objective_view(objective: Objective) -> ObjectiveView:
    return ObjectiveView(
        id=int(objective.id),
        title=str(objective.title),
        description=str(objective.description),
        status=objective_status(objective),
        is_daily=bool(objective.is_daily),
        xp=int(objective.xp),
        reward_text=str(objective.reward_text or ""),
        penalty_text=str(objective.penalty_text or ""),
        template_id=objective.template_id,
        steps=[StepView(id=step.id, text=step.text, complete=bool(step.complete)) for step in objective.steps or ()],
    )


def to_objective_views(objectives: Iterable[Objective]) -> tuple[ObjectiveView, ...]:
    return tuple(to_objective_view(objective) for objective in objectives)
