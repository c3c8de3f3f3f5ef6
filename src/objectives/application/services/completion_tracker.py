from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple, Type

from objectives.application.services.balance_tables import (
    KILLS_IN_SAME_HOME_TARGET,
    RITUAL_SITE_RADIUS,
    STEP_NOTIFICATION_MS,
)
from objectives.application.services.event_bus import EventBus, SubscriptionGroup
from objectives.application.services.target_matching import matches_gift_recipient, matches_target_type
from objectives.domain.collaborators import LocationClassifier, NotificationSurface, RitualSiteProvider
from objectives.domain.events import (
    TRACKED_EVENT_TYPES,
    AffectionShown,
    AnimalKilled,
    BodyPartConsumed,
    BodyPartCooked,
    BodyPartDetached,
    BodyPartGifted,
    CaptivityEstablished,
    CorpsePlaced,
    CoveringWorn,
    FollowStarted,
    IntelligentBeingKilled,
    ObjectiveActionPerformed,
    RitualPerformed,
)
from objectives.domain.models.objective import Objective, ScopedCounter
from objectives.domain.models.subject import Subject
from objectives.domain.models.vocabulary import (
    BodyPart,
    ContextActionKind,
    ObjectiveLocation,
    Region,
    SomeoneType,
    region_for_location,
)

if TYPE_CHECKING:
    from objectives.application.services.objective_service import ObjectiveService


CompletionHandler = Callable[["CompletionTracker", Objective, object], None]


class CompletionRegistry:
    """Maps ``(template_id, event type)`` to the handler that advances it."""

    def __init__(self) -> None:
        self._handlers: Dict[Tuple[str, Type[object]], CompletionHandler] = {}

    def register(self, template_id: str, event_type: Type[object], handler: CompletionHandler) -> None:
        key = str(template_id or "").strip()
        if not key:
            return
        self._handlers[(key, event_type)] = handler

    def resolve(self, template_id: Optional[str], event_type: Type[object]) -> CompletionHandler | None:
        return self._handlers.get((str(template_id or ""), event_type))

    def template_ids(self) -> set[str]:
        return {template_id for template_id, _ in self._handlers}

    def __contains__(self, key: object) -> bool:
        return key in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


class CompletionTracker:
    def __init__(
        self,
        objective_service: "ObjectiveService",
        event_bus: EventBus,
        location_classifier: LocationClassifier,
        notifications: NotificationSurface,
        *,
        ritual_sites: RitualSiteProvider | None = None,
        ritual_radius: float = RITUAL_SITE_RADIUS,
        step_notification_ms: int = STEP_NOTIFICATION_MS,
        registry: CompletionRegistry | None = None,
    ) -> None:
        self.objective_service = objective_service
        self.event_bus = event_bus
        self.location_classifier = location_classifier
        self.notifications = notifications
        self.ritual_sites = ritual_sites
        self.ritual_radius = float(ritual_radius)
        self.step_notification_ms = int(step_notification_ms)
        self.registry = registry or default_completion_registry()
        self._subscriptions: SubscriptionGroup | None = None
        self._logger = logging.getLogger(__name__)

    def register_handlers(self) -> SubscriptionGroup:
        self.close()
        group = SubscriptionGroup()
        for event_type in TRACKED_EVENT_TYPES:
            group.add(self.event_bus.subscribe(event_type, self.handle))
        self._subscriptions = group
        return group

    def close(self) -> None:
        if self._subscriptions is not None:
            self._subscriptions.release()
            self._subscriptions = None

    def __enter__(self) -> "CompletionTracker":
        if self._subscriptions is None:
            self.register_handlers()
        return self

    def __exit__(self, *_exc) -> None:
        self.close()

    def handle(self, event: object) -> None:
        objective = self.objective_service.get_current_daily_objective()
        if objective is None or objective.is_terminal:
            return

        event_type = type(event)
        if getattr(event_type, "target_gated", False) and objective.target_type:
            if not matches_target_type(objective.target_type, getattr(event, "subject", None)):
                self._logger.debug(
                    "Event discarded by target gate",
                    extra={"event_type": event_type.__name__, "objective_id": objective.id},
                )
                return
        if getattr(event_type, "part_gated", False) and objective.body_part:
            if getattr(event, "part_id", None) != objective.body_part:
                self._logger.debug(
                    "Event discarded by body part gate",
                    extra={"event_type": event_type.__name__, "objective_id": objective.id},
                )
                return

        handler = self.registry.resolve(objective.template_id, event_type)
        if handler is None:
            return
        handler(self, objective, event)

    def complete_step(self, objective: Objective, step_id: str) -> bool:
        if objective.is_terminal or not objective.steps:
            return False
        step = objective.find_step(step_id)
        if step is None or step.complete:
            return False

        step.complete = True
        self._logger.debug("Objective step completed", extra={"objective_id": objective.id, "step_id": step_id})
        self.notifications.show(f"Step complete: {step.text}", self.step_notification_ms)
        self.objective_service.publish_changes()
        if objective.all_steps_complete:
            self.complete_objective(objective)
        return True

    def complete_objective(self, objective: Objective) -> None:
        self.objective_service.complete_objective(objective.id)

    def is_following(self, objective: Objective, subject: Optional[Subject]) -> bool:
        if subject is None:
            return False
        if subject.was_following:
            return True
        return objective.follower_hint is not None and subject.id == objective.follower_hint

    def player_in(self, region: Region) -> bool:
        return bool(self.location_classifier.is_player_in_region(region))

    def inside_someone_elses_home(self, event: object) -> bool:
        position = _position(event)
        if position is None:
            return False
        return bool(self.location_classifier.is_position_inside_someone_elses_home(*position))

    def at_objective_location(self, objective: Objective, event: object) -> bool:
        location = str(objective.location or "")
        if not location:
            return False
        if location == ObjectiveLocation.SOMEONE_HOME.value:
            return self.inside_someone_elses_home(event)
        region = region_for_location(location)
        return region is not None and self.player_in(region)

    def near_ritual_site(self, event: object) -> bool:
        position = _position(event)
        if position is None or self.ritual_sites is None:
            return False
        x, y = position
        for site in self.ritual_sites.get_all_sites():
            if math.hypot(float(site.x) - x, float(site.y) - y) <= self.ritual_radius:
                return True
        return False


def _position(event: object) -> tuple[float, float] | None:
    x = getattr(event, "x", None)
    y = getattr(event, "y", None)
    if x is None or y is None:
        return None
    try:
        return float(x), float(y)
    except (TypeError, ValueError):
        return None


def _action_on(objective: Objective, event: ObjectiveActionPerformed, action_type: Optional[str]) -> bool:
    if not action_type or event.action_type != action_type:
        return False
    if event.objective_id is not None and event.objective_id != objective.id:
        return False
    return event.target is not None


def _action_on_corpse(objective: Objective, event: ObjectiveActionPerformed) -> bool:
    if not _action_on(objective, event, objective.action):
        return False
    return event.target.is_dead and matches_target_type(objective.target_type, event.target)


def _gift_to_prisoner(event: BodyPartGifted) -> bool:
    if event.recipient is not None and event.recipient.is_prisoner:
        return True
    return event.resolved_recipient_type == SomeoneType.PRISONER.value


def _complete(tracker: CompletionTracker, objective: Objective, _event: object) -> None:
    tracker.complete_objective(objective)


def _kill_in_their_home(tracker: CompletionTracker, objective: Objective, event: object) -> None:
    if tracker.inside_someone_elses_home(event):
        tracker.complete_step(objective, "kill")


def _corpse_action(tracker: CompletionTracker, objective: Objective, event: ObjectiveActionPerformed) -> None:
    if _action_on_corpse(objective, event):
        tracker.complete_step(objective, "action")


def _store_corpse_at_home(tracker: CompletionTracker, objective: Objective, _event: CorpsePlaced) -> None:
    if tracker.player_in(Region.YOUR_HOME):
        tracker.complete_step(objective, "store")


def _remove_part(tracker: CompletionTracker, objective: Objective, _event: BodyPartDetached) -> None:
    tracker.complete_step(objective, "remove")


def _note_follower(tracker: CompletionTracker, objective: Objective, event: FollowStarted) -> None:
    follower = event.follower
    if follower is None or follower.id is None:
        return
    objective.follower_hint = follower.id
    tracker._logger.debug(
        "Follower recorded", extra={"objective_id": objective.id, "follower_id": follower.id}
    )


def _lured_action_at_home(tracker: CompletionTracker, objective: Objective, event: ObjectiveActionPerformed) -> None:
    if not _action_on(objective, event, objective.action):
        return
    target = event.target
    if target.is_dead or not matches_target_type(objective.target_type, target):
        return
    if not tracker.is_following(objective, target) or not tracker.player_in(Region.YOUR_HOME):
        return
    tracker.complete_step(objective, "lure")
    tracker.complete_step(objective, "action")


def _lured_kill_at_home(tracker: CompletionTracker, objective: Objective, event) -> None:
    if tracker.is_following(objective, event.subject) and tracker.player_in(Region.YOUR_HOME):
        tracker.complete_step(objective, "lure")
        tracker.complete_step(objective, "kill")


def _lured_into_captivity(tracker: CompletionTracker, objective: Objective, event: CaptivityEstablished) -> None:
    if tracker.is_following(objective, event.captive):
        tracker.complete_step(objective, "lure")
        tracker.complete_step(objective, "imprison")


def _lured_kill_at_ritual_site(tracker: CompletionTracker, objective: Objective, event) -> None:
    if tracker.is_following(objective, event.subject) and tracker.near_ritual_site(event):
        tracker.complete_step(objective, "lure")
        tracker.complete_step(objective, "kill")


def _ritual_step(tracker: CompletionTracker, objective: Objective, _event: RitualPerformed) -> None:
    tracker.complete_step(objective, "ritual")


def _lured_kill_at_location(tracker: CompletionTracker, objective: Objective, event) -> None:
    if tracker.is_following(objective, event.subject) and tracker.at_objective_location(objective, event):
        tracker.complete_step(objective, "lure")
        tracker.complete_step(objective, "kill")


def _kill_prisoner(tracker: CompletionTracker, objective: Objective, event: IntelligentBeingKilled) -> None:
    if event.victim is not None and event.victim.is_prisoner:
        tracker.complete_objective(objective)


def _kill_prisoner_step(tracker: CompletionTracker, objective: Objective, event: IntelligentBeingKilled) -> None:
    if event.victim is not None and event.victim.is_prisoner:
        tracker.complete_step(objective, "kill")


def _skin_step(tracker: CompletionTracker, objective: Objective, event: BodyPartDetached) -> None:
    if event.part_id == BodyPart.SKIN.value:
        tracker.complete_step(objective, "skin")


def _wear_step(tracker: CompletionTracker, objective: Objective, event: CoveringWorn) -> None:
    if event.is_prisoner_skin:
        tracker.complete_step(objective, "wear")


def _kill_in_same_home(tracker: CompletionTracker, objective: Objective, event: IntelligentBeingKilled) -> None:
    if not tracker.inside_someone_elses_home(event):
        return
    position = _position(event)
    building_id = tracker.location_classifier.building_id_at(*position)
    if building_id is None:
        return

    counter = (objective.accumulator or ScopedCounter(scope_key=str(building_id))).advance(str(building_id))
    if counter.count >= KILLS_IN_SAME_HOME_TARGET:
        objective.accumulator = None
        tracker.complete_objective(objective)
        return
    objective.accumulator = counter
    tracker.notifications.show(
        f"Kills in home: {counter.count}/{KILLS_IN_SAME_HOME_TARGET}",
        tracker.step_notification_ms,
    )


def _cook_step(tracker: CompletionTracker, objective: Objective, _event: BodyPartCooked) -> None:
    tracker.complete_step(objective, "cook")


def _gift_cooked_step(tracker: CompletionTracker, objective: Objective, event: BodyPartGifted) -> None:
    if not event.is_cooked:
        return
    if matches_gift_recipient(objective.target_type, event.recipient, event.resolved_recipient_type):
        tracker.complete_step(objective, "gift")


def _eat_cooked_step(tracker: CompletionTracker, objective: Objective, event: BodyPartConsumed) -> None:
    if event.is_cooked:
        tracker.complete_step(objective, "eat")


def _feed_prisoner(tracker: CompletionTracker, objective: Objective, event: BodyPartGifted) -> None:
    if _gift_to_prisoner(event):
        tracker.complete_objective(objective)


def _remove_from_prisoner_step(tracker: CompletionTracker, objective: Objective, event: BodyPartDetached) -> None:
    if event.from_prisoner:
        tracker.complete_step(objective, "remove")


def _feed_prisoner_step(tracker: CompletionTracker, objective: Objective, event: BodyPartGifted) -> None:
    if _gift_to_prisoner(event):
        tracker.complete_step(objective, "feed")


def _eat_step(tracker: CompletionTracker, objective: Objective, _event: BodyPartConsumed) -> None:
    tracker.complete_step(objective, "eat")


def _feed_dog(tracker: CompletionTracker, objective: Objective, event: BodyPartGifted) -> None:
    if event.resolved_recipient_type == SomeoneType.DOG.value:
        tracker.complete_objective(objective)


def _mootiti_with_object(tracker: CompletionTracker, objective: Objective, event: ObjectiveActionPerformed) -> None:
    if not _action_on(objective, event, ContextActionKind.MOOTITI.value):
        return
    if event.target.is_dead and event.with_object == objective.object_type:
        tracker.complete_objective(objective)


def _corpse_at_location(tracker: CompletionTracker, objective: Objective, event: CorpsePlaced) -> None:
    if tracker.at_objective_location(objective, event):
        tracker.complete_objective(objective)


def _letter_step(tracker: CompletionTracker, objective: Objective, event: ObjectiveActionPerformed) -> None:
    if _action_on(objective, event, ContextActionKind.LEAVE_LETTER.value) and event.target.is_dead:
        tracker.complete_step(objective, "letter")


def _leave_step(tracker: CompletionTracker, objective: Objective, event: CorpsePlaced) -> None:
    if tracker.at_objective_location(objective, event):
        tracker.complete_step(objective, "leave")


def default_completion_registry() -> CompletionRegistry:
    registry = CompletionRegistry()
    kills = (IntelligentBeingKilled, AnimalKilled)

    for event_type in kills:
        registry.register("kill_action_corpse_their_home", event_type, _kill_in_their_home)
    registry.register("kill_action_corpse_their_home", ObjectiveActionPerformed, _corpse_action)

    registry.register("kill_in_home_action_corpse", IntelligentBeingKilled, _kill_in_their_home)
    registry.register("kill_in_home_action_corpse", ObjectiveActionPerformed, _corpse_action)

    for event_type in kills:
        registry.register("kill_store_in_your_home", event_type, _kill_in_their_home)
        registry.register("kill_decorate_with_bodypart", event_type, _kill_in_their_home)
    registry.register("kill_store_in_your_home", CorpsePlaced, _store_corpse_at_home)
    registry.register("kill_decorate_with_bodypart", BodyPartDetached, _remove_part)

    registry.register("lure_action_kill", FollowStarted, _note_follower)
    registry.register("lure_action_kill", ObjectiveActionPerformed, _lured_action_at_home)
    for event_type in kills:
        registry.register("lure_action_kill", event_type, _lured_kill_at_home)

    registry.register("lure_imprison", FollowStarted, _note_follower)
    registry.register("lure_imprison", CaptivityEstablished, _lured_into_captivity)

    registry.register("lure_ritual_sacrifice", FollowStarted, _note_follower)
    for event_type in kills:
        registry.register("lure_ritual_sacrifice", event_type, _lured_kill_at_ritual_site)
    registry.register("lure_ritual_sacrifice", RitualPerformed, _ritual_step)

    registry.register("lure_location_kill_action", FollowStarted, _note_follower)
    for event_type in kills:
        registry.register("lure_location_kill_action", event_type, _lured_kill_at_location)
    registry.register("lure_location_kill_action", ObjectiveActionPerformed, _corpse_action)

    registry.register("kill_prisoner", IntelligentBeingKilled, _kill_prisoner)

    registry.register("skin_and_wear", IntelligentBeingKilled, _kill_prisoner_step)
    registry.register("skin_and_wear", BodyPartDetached, _skin_step)
    registry.register("skin_and_wear", CoveringWorn, _wear_step)

    registry.register("kill_three_same_home", IntelligentBeingKilled, _kill_in_same_home)

    for template_id in ("cook_gift_bodypart", "cook_eat_bodypart"):
        registry.register(template_id, BodyPartCooked, _cook_step)
    registry.register("cook_gift_bodypart", BodyPartGifted, _gift_cooked_step)
    registry.register("cook_eat_bodypart", BodyPartConsumed, _eat_cooked_step)

    registry.register("feed_prisoner_bodypart", BodyPartGifted, _feed_prisoner)

    registry.register("remove_feed_prisoner", BodyPartDetached, _remove_from_prisoner_step)
    registry.register("remove_feed_prisoner", BodyPartGifted, _feed_prisoner_step)

    registry.register("eat_prisoner_part", BodyPartDetached, _remove_from_prisoner_step)
    registry.register("eat_prisoner_part", BodyPartConsumed, _eat_step)

    registry.register("feed_dogs_corpse", BodyPartGifted, _feed_dog)
    registry.register("kiss_mother", AffectionShown, _complete)
    registry.register("mootiti_corpse_object", ObjectiveActionPerformed, _mootiti_with_object)
    registry.register("leave_corpse_location", CorpsePlaced, _corpse_at_location)
    registry.register("leave_letter_corpse", ObjectiveActionPerformed, _letter_step)
    registry.register("leave_letter_corpse", CorpsePlaced, _leave_step)
    registry.register("perform_ritual", RitualPerformed, _complete)
    return registry


def register_completion_handlers(event_bus: EventBus, tracker: CompletionTracker | None) -> SubscriptionGroup:
    if tracker is None:
        return SubscriptionGroup()
    return tracker.register_handlers()
