from __future__ import annotations

from typing import Dict, List

from objectives.domain.collaborators import ContextActionRegistration, ContextActionRegistry


class InMemoryContextActionRegistry(ContextActionRegistry):
    def __init__(self) -> None:
        self._actions: Dict[str, List[ContextActionRegistration]] = {}

    def register_action(self, kind: str, registration: ContextActionRegistration) -> None:
        rows = self._actions.setdefault(str(kind), [])
        rows[:] = [row for row in rows if row.action_id != registration.action_id]
        rows.append(registration)

    def unregister_all_for(self, objective_id: int) -> None:
        for kind in list(self._actions):
            remaining = [row for row in self._actions[kind] if row.objective_id != objective_id]
            if remaining:
                self._actions[kind] = remaining
            else:
                del self._actions[kind]

    def actions_for(self, kind: str) -> List[ContextActionRegistration]:
        return list(self._actions.get(str(kind), ()))

    def all_actions(self) -> List[tuple[str, ContextActionRegistration]]:
        return [(kind, row) for kind, rows in self._actions.items() for row in rows]
