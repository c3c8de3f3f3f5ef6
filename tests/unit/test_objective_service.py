import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from objectives.application.services.event_bus import EventBus
from objectives.application.services.objective_service import ObjectiveService, register_objective_handlers
from objectives.application.services.template_bank import TemplateBank
from objectives.domain.collaborators import (
    ContextActionRegistry,
    NotificationSurface,
    RegionHighlighter,
    RewardLedger,
    RitualSite,
    RitualSiteProvider,
    WorldState,
)
from objectives.domain.events import DayStarted, ObjectivesChanged
from objectives.domain.models.objective import GeneratedContent, ObjectiveTemplate, Step
from objectives.domain.models.vocabulary import Region


class _StubWorldState(WorldState):
    def __init__(self, prisoners: int = 0) -> None:
        self.prisoners = prisoners

    def has_prisoner_available(self) -> bool:
        return self.prisoners > 0


class _StubRewardLedger(RewardLedger):
    def __init__(self) -> None:
        self.experience: list[tuple[int, str]] = []
        self.sanity = 0

    def award_experience(self, amount: int, label: str) -> None:
        self.experience.append((amount, label))

    def increase_sanity(self, amount: int) -> None:
        self.sanity += amount

    def decrease_sanity(self, amount: int) -> None:
        self.sanity -= amount


class _StubNotifications(NotificationSurface):
    def __init__(self) -> None:
        self.messages: list[tuple[str, int]] = []

    def show(self, message: str, duration_ms: int) -> None:
        self.messages.append((message, duration_ms))


class _StubActionRegistry(ContextActionRegistry):
    def __init__(self) -> None:
        self.registered: list[tuple[str, object]] = []

    def register_action(self, kind, registration) -> None:
        self.registered.append((kind, registration))

    def unregister_all_for(self, objective_id: int) -> None:
        self.registered = [row for row in self.registered if row[1].objective_id != objective_id]


class _StubHighlighter(RegionHighlighter):
    def __init__(self) -> None:
        self.regions: list[Region] = []
        self.sites: list[RitualSite] = []

    def highlight_region(self, region) -> None:
        self.regions.append(region)

    def highlight_site(self, site) -> None:
        self.sites.append(site)

    def clear_highlights(self) -> None:
        self.regions = []
        self.sites = []


class _StubRitualSites(RitualSiteProvider):
    def get_all_sites(self):
        return (RitualSite(x=10.0, y=10.0), RitualSite(x=90.0, y=90.0))


def _fixed_template(template_id: str, **fields) -> ObjectiveTemplate:
    xp = fields.pop("xp", 8)

    def _generate(_rng: random.Random) -> GeneratedContent:
        return GeneratedContent(title=f"Do {template_id}", description="Fixed content", xp=xp, **fields)

    return ObjectiveTemplate(id=template_id, xp=xp, generate=_generate)


TWO_STEP_TEMPLATE = _fixed_template(
    "kill_action_corpse_their_home",
    action="pizzle",
    target_type="adult",
    steps=(Step(id="kill", text="Kill them"), Step(id="action", text="Pizzle the corpse")),
)


class _Harness:
    def __init__(self, templates=(TWO_STEP_TEMPLATE,), **service_kwargs) -> None:
        self.bus = EventBus()
        self.ledger = _StubRewardLedger()
        self.notifications = _StubNotifications()
        self.actions = _StubActionRegistry()
        self.highlighter = _StubHighlighter()
        self.changes: list[ObjectivesChanged] = []
        self.bus.subscribe(ObjectivesChanged, self.changes.append)
        self.service = ObjectiveService(
            TemplateBank(templates=templates),
            _StubWorldState(),
            self.ledger,
            self.notifications,
            self.bus,
            highlighter=self.highlighter,
            action_registry=self.actions,
            ritual_sites=_StubRitualSites(),
            **service_kwargs,
        )

    def dailies(self):
        return [row for row in self.service.get_objectives() if row.is_daily]


class ObjectiveServiceTests(unittest.TestCase):
    def test_start_new_day_installs_daily_objective_and_publishes(self) -> None:
        harness = _Harness()

        objective = harness.service.start_new_day()

        self.assertTrue(objective.is_daily)
        self.assertEqual("kill_action_corpse_their_home", objective.template_id)
        self.assertIs(objective, harness.service.get_current_daily_objective())
        self.assertEqual(1, harness.service.current_day)
        self.assertEqual(objective.id, harness.changes[-1].current_daily_id)
        self.assertEqual("active", harness.changes[-1].objectives[0].status)

    def test_start_new_day_fails_unfinished_daily_and_installs_fresh_one(self) -> None:
        harness = _Harness()
        first = harness.service.start_new_day()

        second = harness.service.start_new_day()

        self.assertTrue(first.is_failed)
        self.assertFalse(first.is_complete)
        self.assertEqual(-1, harness.ledger.sanity)
        self.assertNotEqual(first.id, second.id)
        self.assertEqual([second], harness.dailies())
        self.assertIn((f"Objective failed: {first.title}", 3000), harness.notifications.messages)

    def test_at_most_one_daily_is_ever_non_terminal(self) -> None:
        harness = _Harness(templates=())
        for day in range(1, 8):
            harness.service.start_new_day(day=day)
            active = [row for row in harness.dailies() if not row.is_terminal]
            self.assertEqual(1, len(active))
        self.assertEqual(7, harness.service.current_day)

    def test_completed_daily_is_not_penalized_at_next_day(self) -> None:
        harness = _Harness()
        first = harness.service.start_new_day()
        harness.service.complete_objective(first.id)

        harness.service.start_new_day()

        self.assertTrue(first.is_complete)
        self.assertFalse(first.is_failed)
        self.assertEqual(1, harness.ledger.sanity)

    def test_complete_objective_rewards_once_and_clears_daily_state(self) -> None:
        harness = _Harness()
        objective = harness.service.start_new_day()
        self.assertEqual(1, len(harness.actions.registered))

        harness.service.complete_objective(objective.id)
        harness.service.complete_objective(objective.id)

        self.assertTrue(objective.is_complete)
        self.assertEqual([(8, objective.title)], harness.ledger.experience)
        self.assertEqual(1, harness.ledger.sanity)
        self.assertIsNone(harness.service.get_current_daily_objective())
        self.assertEqual([], harness.actions.registered)
        self.assertIsNone(harness.changes[-1].current_daily_id)
        self.assertEqual("complete", harness.changes[-1].objectives[0].status)

    def test_terminal_objective_ignores_fail_and_complete(self) -> None:
        harness = _Harness()
        objective = harness.service.start_new_day()
        harness.service.fail_objective(objective.id)
        snapshot = (objective.is_complete, objective.is_failed, harness.ledger.sanity, len(harness.changes))

        harness.service.complete_objective(objective.id)
        harness.service.fail_objective(objective.id)

        self.assertEqual(snapshot, (objective.is_complete, objective.is_failed, harness.ledger.sanity, len(harness.changes)))
        self.assertEqual([], harness.ledger.experience)

    def test_unknown_objective_id_is_ignored(self) -> None:
        harness = _Harness()
        harness.service.start_new_day()
        published = len(harness.changes)

        harness.service.complete_objective(999)
        harness.service.fail_objective(999)
        harness.service.remove_objective(999)

        self.assertEqual(published, len(harness.changes))

    def test_region_highlight_follows_objective_location(self) -> None:
        template = _fixed_template("kiss_mother", xp=2, highlight_location="your_home")
        harness = _Harness(templates=(template,))

        objective = harness.service.start_new_day()
        self.assertEqual([Region.YOUR_HOME], harness.highlighter.regions)

        harness.service.complete_objective(objective.id)
        self.assertEqual([], harness.highlighter.regions)

    def test_someone_home_location_is_not_highlighted(self) -> None:
        template = _fixed_template("leave_corpse_location", location="someone_home", highlight_location="someone_home")
        harness = _Harness(templates=(template,))

        harness.service.start_new_day()

        self.assertEqual([], harness.highlighter.regions)

    def test_ritual_site_highlight_picks_one_site(self) -> None:
        template = _fixed_template("perform_ritual", xp=5, highlight_ritual_site=True)
        harness = _Harness(templates=(template,), rng_seed=4)

        harness.service.start_new_day()

        self.assertEqual(1, len(harness.highlighter.sites))
        self.assertIn(harness.highlighter.sites[0], _StubRitualSites().get_all_sites())

    def test_seeded_service_repeats_objectives_per_day(self) -> None:
        first = _Harness(templates=TemplateBank().templates, rng_seed=1234)
        second = _Harness(templates=TemplateBank().templates, rng_seed=1234)

        titles_a = [first.service.start_new_day(day=day).title for day in range(1, 6)]
        titles_b = [second.service.start_new_day(day=day).title for day in range(1, 6)]

        self.assertEqual(titles_a, titles_b)

    def test_fallback_objective_when_nothing_is_eligible(self) -> None:
        harness = _Harness(templates=())

        objective = harness.service.start_new_day()

        self.assertEqual("Survive the Day", objective.title)
        self.assertIsNone(objective.template_id)
        self.assertEqual(2, objective.xp)
        self.assertIsNone(objective.steps)

    def test_ancillary_objectives_survive_day_changes(self) -> None:
        harness = _Harness()
        side = harness.service.add_objective("Water the plants", "They look thirsty", xp=3)
        harness.service.start_new_day()
        harness.service.start_new_day()

        self.assertIn(side, harness.service.get_objectives())
        self.assertIn(side, harness.service.get_incomplete_objectives())

        harness.service.complete_objective(side.id)
        self.assertEqual([(3, "Water the plants")], harness.ledger.experience)
        self.assertEqual(-1, harness.ledger.sanity)
        self.assertNotIn(side, harness.service.get_incomplete_objectives())

        harness.service.remove_objective(side.id)
        self.assertNotIn(side, harness.service.get_objectives())

    def test_removing_current_daily_clears_pointer_and_actions(self) -> None:
        harness = _Harness()
        objective = harness.service.start_new_day()

        harness.service.remove_objective(objective.id)

        self.assertIsNone(harness.service.get_current_daily_objective())
        self.assertEqual([], harness.actions.registered)

    def test_day_started_event_drives_start_new_day(self) -> None:
        harness = _Harness()
        subscriptions = register_objective_handlers(harness.bus, harness.service)

        harness.bus.publish(DayStarted(day=5))

        self.assertEqual(5, harness.service.current_day)
        self.assertIsNotNone(harness.service.get_current_daily_objective())

        subscriptions.release()
        harness.bus.publish(DayStarted(day=6))
        self.assertEqual(5, harness.service.current_day)

    def test_register_handlers_without_service_is_empty(self) -> None:
        self.assertEqual(0, len(register_objective_handlers(EventBus(), None)))


if __name__ == "__main__":
    unittest.main()
