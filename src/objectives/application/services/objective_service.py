from __future__ import annotations

import logging
import random
from typing import List, Optional

from objectives.application.mappers.objective_view_mapper import to_objective_views
from objectives.application.services.balance_tables import (
    DAILY_SANITY_PENALTY,
    DAILY_SANITY_REWARD,
    DAILY_SEED_NAMESPACE,
    OBJECTIVE_NOTIFICATION_MS,
)
from objectives.application.services.event_bus import EventBus, SubscriptionGroup
from objectives.application.services.objective_actions import context_actions_for
from objectives.application.services.seed_policy import derive_rng
from objectives.application.services.template_bank import TemplateBank
from objectives.domain.collaborators import (
    ContextActionRegistry,
    NotificationSurface,
    RegionHighlighter,
    RewardLedger,
    RitualSiteProvider,
    WorldState,
)
from objectives.domain.events import DayStarted, ObjectivesChanged
from objectives.domain.models.objective import Objective
from objectives.domain.models.vocabulary import region_for_location


class ObjectiveService:
    """Owns the objective collection and the single active daily objective."""

    def __init__(
        self,
        template_bank: TemplateBank,
        world_state: WorldState,
        reward_ledger: RewardLedger,
        notifications: NotificationSurface,
        event_bus: EventBus,
        *,
        highlighter: RegionHighlighter | None = None,
        action_registry: ContextActionRegistry | None = None,
        ritual_sites: RitualSiteProvider | None = None,
        rng_seed: int | None = None,
        notification_ms: int = OBJECTIVE_NOTIFICATION_MS,
    ) -> None:
        self.template_bank = template_bank
        self.world_state = world_state
        self.reward_ledger = reward_ledger
        self.notifications = notifications
        self.event_bus = event_bus
        self.highlighter = highlighter
        self.action_registry = action_registry
        self.ritual_sites = ritual_sites
        self.rng_seed = rng_seed
        self.notification_ms = int(notification_ms)

        self._objectives: List[Objective] = []
        self._next_id = 1
        self._current_daily: Optional[Objective] = None
        self._day = 0
        self._logger = logging.getLogger(__name__)

    def register_handlers(self) -> SubscriptionGroup:
        group = SubscriptionGroup()
        group.add(self.event_bus.subscribe(DayStarted, self.on_day_started, priority=10))
        return group

    def on_day_started(self, event: DayStarted) -> None:
        self.start_new_day(day=int(event.day))

    @property
    def current_day(self) -> int:
        return self._day

    def start_new_day(self, day: int | None = None) -> Objective:
        previous = self._current_daily
        if previous is not None and not previous.is_terminal:
            self.fail_objective(previous.id)

        for objective in self._objectives:
            if objective.is_daily:
                self._release_context_actions(objective)
        self._objectives = [objective for objective in self._objectives if not objective.is_daily]
        self._current_daily = None
        self._clear_highlights()

        self._day = int(day) if day is not None else self._day + 1
        content = self.template_bank.pick_daily_objective(self.world_state, rng=self._day_rng())
        objective = Objective.from_content(self._allocate_id(), content, is_daily=True)
        self._objectives.append(objective)
        self._current_daily = objective

        self._apply_highlights(objective)
        self._register_context_actions(objective)
        self._logger.info(
            "Daily objective installed",
            extra={"day": self._day, "objective_id": objective.id, "template_id": objective.template_id},
        )
        self.publish_changes()
        return objective

    def complete_objective(self, objective_id: int) -> None:
        objective = self.get_objective(objective_id)
        if objective is None or objective.is_terminal:
            return

        objective.is_complete = True
        objective.accumulator = None
        self.notifications.show(f"Objective complete: {objective.title}", self.notification_ms)
        if objective.xp > 0:
            self.reward_ledger.award_experience(int(objective.xp), objective.title)
        if objective.is_daily:
            self.reward_ledger.increase_sanity(DAILY_SANITY_REWARD)
            self._clear_daily(objective)
        self._release_context_actions(objective)
        self._logger.info("Objective completed", extra={"objective_id": objective.id, "xp": objective.xp})
        self.publish_changes()

    def fail_objective(self, objective_id: int) -> None:
        objective = self.get_objective(objective_id)
        if objective is None or objective.is_terminal:
            return

        objective.is_failed = True
        objective.accumulator = None
        self.notifications.show(f"Objective failed: {objective.title}", self.notification_ms)
        if objective.is_daily:
            self.reward_ledger.decrease_sanity(DAILY_SANITY_PENALTY)
            self._clear_daily(objective)
        self._release_context_actions(objective)
        self._logger.info("Objective failed", extra={"objective_id": objective.id})
        self.publish_changes()

    def get_current_daily_objective(self) -> Objective | None:
        objective = self._current_daily
        if objective is None or objective.is_terminal:
            return None
        return objective

    def add_objective(
        self,
        title: str,
        description: str,
        xp: int = 0,
        reward_text: str | None = None,
    ) -> Objective:
        objective = Objective(
            id=self._allocate_id(),
            title=str(title),
            description=str(description),
            xp=max(0, int(xp)),
            reward_text=reward_text or "None",
        )
        self._objectives.append(objective)
        self.publish_changes()
        return objective

    def remove_objective(self, objective_id: int) -> None:
        objective = self.get_objective(objective_id)
        if objective is None:
            return
        self._objectives = [row for row in self._objectives if row.id != objective.id]
        if self._current_daily is objective:
            self._current_daily = None
            self._clear_highlights()
        self._release_context_actions(objective)
        self.publish_changes()

    def get_objective(self, objective_id: int) -> Objective | None:
        for objective in self._objectives:
            if objective.id == objective_id:
                return objective
        return None

    def get_objectives(self) -> List[Objective]:
        return list(self._objectives)

    def get_incomplete_objectives(self) -> List[Objective]:
        return [objective for objective in self._objectives if not objective.is_complete]

    def publish_changes(self) -> None:
        current = self.get_current_daily_objective()
        self.event_bus.publish(
            ObjectivesChanged(
                objectives=to_objective_views(self._objectives),
                current_daily_id=current.id if current is not None else None,
            )
        )

    def _allocate_id(self) -> int:
        objective_id = self._next_id
        self._next_id += 1
        return objective_id

    def _day_rng(self) -> random.Random | None:
        if self.rng_seed is None:
            return None
        return derive_rng(DAILY_SEED_NAMESPACE, {"seed": int(self.rng_seed), "day": int(self._day)})

    def _clear_daily(self, objective: Objective) -> None:
        if self._current_daily is objective:
            self._current_daily = None
        self._clear_highlights()

    def _clear_highlights(self) -> None:
        if self.highlighter is not None:
            self.highlighter.clear_highlights()

    def _apply_highlights(self, objective: Objective) -> None:
        if self.highlighter is None:
            return

        region = region_for_location(objective.highlight_location)
        if region is not None:
            self.highlighter.highlight_region(region)

        if objective.highlight_ritual_site and self.ritual_sites is not None:
            sites = list(self.ritual_sites.get_all_sites())
            if sites:
                rng = self._day_rng() or random.Random()
                self.highlighter.highlight_site(sites[rng.randrange(len(sites))])

    def _register_context_actions(self, objective: Objective) -> None:
        if self.action_registry is None:
            return
        for planned in context_actions_for(objective):
            self.action_registry.register_action(planned.kind, planned.registration)

    def _release_context_actions(self, objective: Objective) -> None:
        if self.action_registry is None:
            return
        self.action_registry.unregister_all_for(objective.id)


def register_objective_handlers(event_bus: EventBus, service: ObjectiveService | None) -> SubscriptionGroup:
    if service is None:
        return SubscriptionGroup()
    return service.register_handlers()
