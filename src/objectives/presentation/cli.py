from __future__ import annotations

import argparse
from typing import Iterable, Sequence

from rich.console import Console
from rich.panel import Panel

from objectives.application.dtos import ObjectiveView
from objectives.application.mappers.objective_view_mapper import to_objective_views
from objectives.bootstrap import ObjectiveEngine, configure_logging, create_objective_engine
from objectives.domain.events import DayStarted

PANEL_TITLE = "The Will of the Voices"

_STATUS_STYLES = {
    "active": "yellow",
    "complete": "green",
    "failed": "red",
}


def _step_line(text: str, complete: bool) -> str:
    if complete:
        return f"  [green]✔[/green] [dim]{text}[/dim]"
    return f"  [white]○ {text}[/white]"


def objective_lines(view: ObjectiveView) -> list[str]:
    style = _STATUS_STYLES.get(view.status, "white")
    lines = [
        f"[bold {style}]{view.title}[/bold {style}] [dim]({view.status})[/dim]",
        f"[white]{view.description}[/white]",
    ]
    for step in view.steps:
        lines.append(_step_line(step.text, step.complete))
    if view.is_daily:
        lines.append(f"[green]Reward:[/green] {view.reward_text}")
        lines.append(f"[red]Penalty:[/red] {view.penalty_text}")
    return lines


def render_objectives_panel(views: Iterable[ObjectiveView], day: int) -> Panel:
    body: list[str] = []
    for view in views:
        if body:
            body.append("")
        body.extend(objective_lines(view))
    if not body:
        body.append("[dim]The voices are silent.[/dim]")
    return Panel.fit(
        "\n".join(body),
        title=f"[bold yellow]{PANEL_TITLE}[/bold yellow]",
        subtitle=f"[dim]Day {int(day)}[/dim]",
        subtitle_align="left",
        border_style="red",
        padding=(0, 1),
    )


def render_ledger_panel(engine: ObjectiveEngine) -> Panel:
    ledger = engine.reward_ledger
    lines = [
        f"[white]Experience:[/white] {ledger.experience}",
        f"[white]Sanity:[/white] {ledger.sanity}/{ledger.max_sanity}",
    ]
    for award in ledger.awards:
        lines.append(f"  [dim]+{award.amount} XP, {award.label}[/dim]")
    return Panel.fit("\n".join(lines), title="[bold]Ledger[/bold]", border_style="yellow", padding=(0, 1))


def simulate_days(engine: ObjectiveEngine, days: int, console: Console) -> None:
    service = engine.objective_service
    for day in range(1, max(0, int(days)) + 1):
        engine.event_bus.publish(DayStarted(day=day))
        current = service.get_current_daily_objective()
        views = to_objective_views([current] if current is not None else [])
        console.print(render_objectives_panel(views, day))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daily-objectives",
        description="Simulate daily objective generation with in-memory collaborators",
    )
    parser.add_argument("--days", type=int, default=3, help="Number of day starts to simulate")
    parser.add_argument("--seed", type=int, default=None, help="Base seed; overrides OBJECTIVES_RNG_SEED")
    parser.add_argument(
        "--prisoners",
        type=int,
        default=None,
        help="Prisoners available to the world state; overrides OBJECTIVES_PRISONERS",
    )
    parser.add_argument("--log-level", default=None, help="Logging level; overrides OBJECTIVES_LOG_LEVEL")
    return parser


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    console = console or Console()

    engine = create_objective_engine(rng_seed=args.seed, prisoners=args.prisoners)
    try:
        simulate_days(engine, args.days, console)
        console.print(render_ledger_panel(engine))
    finally:
        engine.close()
    return 0
