from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List

from objectives.domain.collaborators import ContextActionRegistration
from objectives.domain.models.entity_constraint import EntityConstraint, EntityStatus
from objectives.domain.models.objective import Objective
from objectives.domain.models.vocabulary import ContextActionKind


@dataclass(frozen=True)
class PlannedContextAction:
    kind: str
    registration: ContextActionRegistration


ActionPlanner = Callable[[Objective], List[PlannedContextAction]]


def _action_id(kind: str, objective: Objective) -> str:
    return f"{kind}_{int(objective.id)}"


def _planned(kind: str, objective: Objective, **fields) -> PlannedContextAction:
    return PlannedContextAction(
        kind=kind,
        registration=ContextActionRegistration(
            objective_id=int(objective.id),
            action_id=_action_id(kind, objective),
            **fields,
        ),
    )


def _corpse_action(objective: Objective) -> List[PlannedContextAction]:
    if not objective.action:
        return []
    constraint = EntityConstraint.for_target(objective.target_type, status=EntityStatus.DEAD)
    return [_planned(str(objective.action), objective, entity_constraint=constraint)]


def _live_target_action(objective: Objective) -> List[PlannedContextAction]:
    if not objective.action:
        return []
    constraint = EntityConstraint.for_target(objective.target_type, status=EntityStatus.ALIVE)
    return [_planned(str(objective.action), objective, entity_constraint=constraint)]


def _mootiti(objective: Objective) -> List[PlannedContextAction]:
    return [
        _planned(
            ContextActionKind.MOOTITI.value,
            objective,
            with_object=objective.object_type,
            entity_constraint=EntityConstraint.any_corpse(),
        )
    ]


def _leave_letter(objective: Objective) -> List[PlannedContextAction]:
    return [
        _planned(
            ContextActionKind.LEAVE_LETTER.value,
            objective,
            entity_constraint=EntityConstraint.any_corpse(),
        )
    ]


ACTION_PLANNERS: Dict[str, ActionPlanner] = {
    "kill_action_corpse_their_home": _corpse_action,
    "kill_in_home_action_corpse": _corpse_action,
    "lure_location_kill_action": _corpse_action,
    "lure_action_kill": _live_target_action,
    "mootiti_corpse_object": _mootiti,
    "leave_letter_corpse": _leave_letter,
}


def context_actions_for(objective: Objective) -> List[PlannedContextAction]:
    planner = ACTION_PLANNERS.get(str(objective.template_id or ""))
    if planner is None:
        return []
    return planner(objective)
