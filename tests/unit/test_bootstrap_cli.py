import os
import sys
from pathlib import Path
import unittest
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from rich.console import Console

from objectives.application.mappers.objective_view_mapper import to_objective_views
from objectives.bootstrap import create_objective_engine
from objectives.domain.events import AffectionShown, DayStarted
from objectives.presentation.cli import PANEL_TITLE, main, render_objectives_panel


def _recording_console() -> Console:
    return Console(record=True, width=120, force_terminal=False, color_system=None)


class BootstrapTests(unittest.TestCase):
    def test_engine_wires_day_start_to_daily_objective(self) -> None:
        engine = create_objective_engine(rng_seed=3)

        engine.event_bus.publish(DayStarted(day=1))

        objective = engine.objective_service.get_current_daily_objective()
        self.assertIsNotNone(objective)
        self.assertTrue(objective.is_daily)
        self.assertEqual(1, engine.objective_service.current_day)
        engine.close()

    def test_environment_configures_seed_prisoners_and_durations(self) -> None:
        env = {
            "OBJECTIVES_RNG_SEED": "77",
            "OBJECTIVES_PRISONERS": "2",
            "OBJECTIVES_NOTIFY_MS": "1500",
            "OBJECTIVES_STEP_NOTIFY_MS": "900",
            "OBJECTIVES_RITUAL_RADIUS": "12.5",
        }
        with mock.patch.dict(os.environ, env, clear=False):
            engine = create_objective_engine()

        self.assertEqual(77, engine.objective_service.rng_seed)
        self.assertTrue(engine.world_state.has_prisoner_available())
        self.assertEqual(1500, engine.objective_service.notification_ms)
        self.assertEqual(900, engine.completion_tracker.step_notification_ms)
        self.assertEqual(12.5, engine.completion_tracker.ritual_radius)
        engine.close()

    def test_invalid_environment_values_fall_back_to_defaults(self) -> None:
        with mock.patch.dict(os.environ, {"OBJECTIVES_NOTIFY_MS": "soon"}, clear=False):
            with self.assertLogs("objectives.bootstrap", level="WARNING"):
                engine = create_objective_engine()

        self.assertEqual(3000, engine.objective_service.notification_ms)
        self.assertIsNone(engine.objective_service.rng_seed)
        self.assertFalse(engine.world_state.has_prisoner_available())
        engine.close()

    def test_same_seed_produces_same_days(self) -> None:
        titles = []
        for _ in range(2):
            engine = create_objective_engine(rng_seed=2024, prisoners=1)
            run = []
            for day in range(1, 5):
                engine.event_bus.publish(DayStarted(day=day))
                run.append(engine.objective_service.get_current_daily_objective().title)
            titles.append(run)
            engine.close()

        self.assertEqual(titles[0], titles[1])

    def test_close_detaches_tracker_and_lifecycle(self) -> None:
        engine = create_objective_engine(rng_seed=1)
        engine.close()

        self.assertEqual(0, engine.event_bus.subscriber_count(DayStarted))
        self.assertEqual(0, engine.event_bus.subscriber_count(AffectionShown))


class CliTests(unittest.TestCase):
    def test_render_objectives_panel_lists_steps_and_rewards(self) -> None:
        engine = create_objective_engine(rng_seed=5)
        objective = engine.objective_service.start_new_day()
        console = _recording_console()

        console.print(render_objectives_panel(to_objective_views([objective]), day=1))

        text = console.export_text()
        self.assertIn(PANEL_TITLE, text)
        self.assertIn(objective.title, text)
        self.assertIn("Reward:", text)
        self.assertIn("-1 Sanity", text)
        for step in objective.steps or ():
            self.assertIn(step.text, text)
        engine.close()

    def test_empty_panel_reports_silence(self) -> None:
        console = _recording_console()

        console.print(render_objectives_panel((), day=4))

        self.assertIn("The voices are silent.", console.export_text())

    def test_main_simulates_days_and_prints_ledger(self) -> None:
        console = _recording_console()

        code = main(["--days", "3", "--seed", "9", "--prisoners", "1"], console=console)

        text = console.export_text()
        self.assertEqual(0, code)
        self.assertEqual(3, text.count(PANEL_TITLE))
        self.assertIn("Day 3", text)
        self.assertIn("Ledger", text)
        self.assertIn("Sanity: 1/3", text)


if __name__ == "__main__":
    unittest.main()
