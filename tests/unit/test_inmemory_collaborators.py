import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from objectives.domain.collaborators import ContextActionRegistration
from objectives.domain.models.vocabulary import Region
from objectives.infrastructure.inmemory.inmemory_context_action_registry import InMemoryContextActionRegistry
from objectives.infrastructure.inmemory.inmemory_location_classifier import HomeFootprint, StaticLocationClassifier
from objectives.infrastructure.inmemory.inmemory_notification_surface import InMemoryNotificationSurface
from objectives.infrastructure.inmemory.inmemory_region_highlighter import InMemoryRegionHighlighter
from objectives.infrastructure.inmemory.inmemory_reward_ledger import InMemoryRewardLedger
from objectives.infrastructure.inmemory.inmemory_ritual_site_provider import InMemoryRitualSiteProvider
from objectives.infrastructure.inmemory.inmemory_world_state import InMemoryWorldState


class InMemoryRewardLedgerTests(unittest.TestCase):
    def test_sanity_is_clamped_and_experience_logged(self) -> None:
        ledger = InMemoryRewardLedger()

        ledger.increase_sanity(5)
        self.assertEqual(3, ledger.sanity)
        ledger.decrease_sanity(10)
        self.assertEqual(0, ledger.sanity)

        ledger.award_experience(8, "Kill & Pizzle in Their Home")
        ledger.award_experience(0, "nothing")
        self.assertEqual(8, ledger.experience)
        self.assertEqual(1, len(ledger.awards))


class InMemoryContextActionRegistryTests(unittest.TestCase):
    def test_register_replaces_same_action_and_unregisters_by_objective(self) -> None:
        registry = InMemoryContextActionRegistry()
        registry.register_action("pizzle", ContextActionRegistration(objective_id=1, action_id="pizzle_1"))
        registry.register_action("pizzle", ContextActionRegistration(objective_id=1, action_id="pizzle_1"))
        registry.register_action("mootiti", ContextActionRegistration(objective_id=2, action_id="mootiti_2"))

        self.assertEqual(1, len(registry.actions_for("pizzle")))

        registry.unregister_all_for(1)

        self.assertEqual([], registry.actions_for("pizzle"))
        self.assertEqual(["mootiti"], [kind for kind, _ in registry.all_actions()])


class StaticLocationClassifierTests(unittest.TestCase):
    def test_regions_and_home_footprints(self) -> None:
        classifier = StaticLocationClassifier(
            player_regions=(Region.WOODS,),
            homes=(HomeFootprint(building_id="house_a", x=0.0, y=0.0, width=10.0, height=10.0),),
        )

        self.assertTrue(classifier.is_player_in_region(Region.WOODS))
        self.assertTrue(classifier.is_player_in_region("woods"))
        self.assertFalse(classifier.is_player_in_region("mars"))
        self.assertTrue(classifier.is_position_inside_someone_elses_home(5.0, 5.0))
        self.assertEqual("house_a", classifier.building_id_at(5.0, 5.0))
        self.assertIsNone(classifier.building_id_at(10.0, 5.0))

        classifier.move_player(Region.DOWNTOWN)
        self.assertFalse(classifier.is_player_in_region(Region.WOODS))


class SmallCollaboratorTests(unittest.TestCase):
    def test_notifications_highlighter_sites_and_world_state(self) -> None:
        notifications = InMemoryNotificationSurface()
        notifications.show("Step complete: Kill them", 2000)
        self.assertEqual(["Step complete: Kill them"], notifications.messages)
        self.assertEqual(1, len(notifications.drain()))
        self.assertEqual([], notifications.messages)

        sites = InMemoryRitualSiteProvider()
        site = sites.add_site(3, 4)
        self.assertEqual((site,), sites.get_all_sites())

        highlighter = InMemoryRegionHighlighter()
        highlighter.highlight_site(site)
        self.assertTrue(highlighter.is_highlighting)
        highlighter.clear_highlights()
        self.assertFalse(highlighter.is_highlighting)

        self.assertFalse(InMemoryWorldState().has_prisoner_available())
        self.assertTrue(InMemoryWorldState(prisoner_count=1).has_prisoner_available())


if __name__ == "__main__":
    unittest.main()
