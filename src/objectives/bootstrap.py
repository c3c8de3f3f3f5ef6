import logging
import os
from dataclasses import dataclass
from typing import Optional

from objectives.application.services.balance_tables import (
    OBJECTIVE_NOTIFICATION_MS,
    RITUAL_SITE_RADIUS,
    STEP_NOTIFICATION_MS,
)
from objectives.application.services.completion_tracker import CompletionTracker, register_completion_handlers
from objectives.application.services.event_bus import EventBus, SubscriptionGroup
from objectives.application.services.objective_service import ObjectiveService, register_objective_handlers
from objectives.application.services.template_bank import TemplateBank
from objectives.domain.collaborators import RitualSite
from objectives.domain.models.vocabulary import Region
from objectives.infrastructure.inmemory.inmemory_context_action_registry import InMemoryContextActionRegistry
from objectives.infrastructure.inmemory.inmemory_location_classifier import HomeFootprint, StaticLocationClassifier
from objectives.infrastructure.inmemory.inmemory_notification_surface import InMemoryNotificationSurface
from objectives.infrastructure.inmemory.inmemory_region_highlighter import InMemoryRegionHighlighter
from objectives.infrastructure.inmemory.inmemory_reward_ledger import InMemoryRewardLedger
from objectives.infrastructure.inmemory.inmemory_ritual_site_provider import InMemoryRitualSiteProvider
from objectives.infrastructure.inmemory.inmemory_world_state import InMemoryWorldState

_DEFAULT_RITUAL_SITES = (
    RitualSite(x=120.0, y=640.0),
    RitualSite(x=880.0, y=210.0),
)
_DEFAULT_HOMES = (
    HomeFootprint(building_id="house_elm_street_4", x=400.0, y=400.0, width=96.0, height=64.0),
    HomeFootprint(building_id="house_elm_street_6", x=520.0, y=400.0, width=96.0, height=64.0),
)


@dataclass
class ObjectiveEngine:
    event_bus: EventBus
    objective_service: ObjectiveService
    completion_tracker: CompletionTracker
    reward_ledger: InMemoryRewardLedger
    notifications: InMemoryNotificationSurface
    location_classifier: StaticLocationClassifier
    highlighter: InMemoryRegionHighlighter
    action_registry: InMemoryContextActionRegistry
    ritual_sites: InMemoryRitualSiteProvider
    world_state: InMemoryWorldState
    subscriptions: SubscriptionGroup

    def close(self) -> None:
        self.subscriptions.release()
        self.completion_tracker.close()


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-integer %s=%r", name, raw)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-numeric %s=%r", name, raw)
        return default


def configure_logging(level: str | None = None) -> None:
    name = str(level or os.getenv("OBJECTIVES_LOG_LEVEL", "WARNING")).strip().upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_objective_engine(
    *,
    rng_seed: int | None = None,
    prisoners: int | None = None,
) -> ObjectiveEngine:
    seed = rng_seed if rng_seed is not None else _env_int("OBJECTIVES_RNG_SEED", None)
    prisoner_count = prisoners if prisoners is not None else _env_int("OBJECTIVES_PRISONERS", 0)

    event_bus = EventBus()
    reward_ledger = InMemoryRewardLedger()
    notifications = InMemoryNotificationSurface()
    location_classifier = StaticLocationClassifier(player_regions=(Region.YOUR_HOME,), homes=_DEFAULT_HOMES)
    highlighter = InMemoryRegionHighlighter()
    action_registry = InMemoryContextActionRegistry()
    ritual_sites = InMemoryRitualSiteProvider(_DEFAULT_RITUAL_SITES)
    world_state = InMemoryWorldState(prisoner_count=prisoner_count or 0)

    objective_service = ObjectiveService(
        TemplateBank(),
        world_state,
        reward_ledger,
        notifications,
        event_bus,
        highlighter=highlighter,
        action_registry=action_registry,
        ritual_sites=ritual_sites,
        rng_seed=seed,
        notification_ms=_env_int("OBJECTIVES_NOTIFY_MS", OBJECTIVE_NOTIFICATION_MS),
    )
    completion_tracker = CompletionTracker(
        objective_service,
        event_bus,
        location_classifier,
        notifications,
        ritual_sites=ritual_sites,
        ritual_radius=_env_float("OBJECTIVES_RITUAL_RADIUS", RITUAL_SITE_RADIUS),
        step_notification_ms=_env_int("OBJECTIVES_STEP_NOTIFY_MS", STEP_NOTIFICATION_MS),
    )

    subscriptions = register_objective_handlers(event_bus, objective_service)
    register_completion_handlers(event_bus, completion_tracker)

    return ObjectiveEngine(
        event_bus=event_bus,
        objective_service=objective_service,
        completion_tracker=completion_tracker,
        reward_ledger=reward_ledger,
        notifications=notifications,
        location_classifier=location_classifier,
        highlighter=highlighter,
        action_registry=action_registry,
        ritual_sites=ritual_sites,
        world_state=world_state,
        subscriptions=subscriptions,
    )
