"""evocycle CLI — run evolution cycles from the terminal.

`evocycle run` runs one or more cycles in a fresh engine and prints phase
progress, the cycle table and the running summary. History lives only as
long as the process, so every invocation starts from zero.
"""

from __future__ import annotations

import asyncio
import random
from typing import Any, Coroutine

import orjson
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from evocycle.config import settings
from evocycle.events.bus import Event, EventBus
from evocycle.evolution.engine import EvolutionEngine
from evocycle.evolution.models import CycleRecord
from evocycle.evolution.phases import PHASE_TEMPLATES
from evocycle.exceptions import EvocycleError
from evocycle.strategies.registry import StrategyRegistries
from evocycle.telemetry.logging import setup_logging

console = Console()

app = typer.Typer(
    name="evocycle",
    help="evocycle -- configuration-driven evolution cycles.",
    no_args_is_help=True,
)


def run_async(coro: Coroutine) -> Any:
    """Run an async coroutine from sync CLI code."""
    return asyncio.run(coro)


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level"),
):
    setup_logging(log_level, settings.log_format)


@app.command("run")
def run(
    cycle_type: str = typer.Option(
        settings.default_cycle_type, "--type", "-t", help="Cycle type to run"
    ),
    duration: float = typer.Option(
        settings.default_duration_seconds, "--duration", "-d", min=0.0,
        help="Cycle duration in seconds",
    ),
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of cycles to run"),
    pause: float = typer.Option(
        settings.phase_pause_seconds, "--pause", min=0.0, help="Pause between phases in seconds"
    ),
    seed: int | None = typer.Option(None, "--seed", help="Seed the random source"),
    consciousness: float | None = typer.Option(
        None, "--consciousness", "-c", min=0.0, max=10.0,
        help="Current consciousness level (0-10)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print records as JSON"),
):
    """Run evolution cycles and show the results."""
    bus = EventBus(history_limit=settings.event_history_limit)
    engine = EvolutionEngine(
        event_bus=bus,
        rng=random.Random(seed) if seed is not None else None,
        phase_pause=pause,
    )

    async def _on_phase(event: Event):
        phase = event.data["phase"]
        console.print(
            f"  [cyan]{phase['id']}[/cyan] {phase['name']} "
            f"[dim]({phase['focus']})[/dim] "
            f"effectiveness={phase['result']['effectiveness']:.2f}"
        )

    if not as_json:
        bus.subscribe("evolution.phase_completed", _on_phase)

    async def _run() -> list[CycleRecord]:
        await engine.initialize()
        cycles = []
        for i in range(count):
            if not as_json:
                console.print(f"[bold]Cycle {i + 1}/{count}[/bold] ({cycle_type}, {duration:g}s)")
            cycles.append(await engine.start_evolution_cycle(
                cycle_type, duration, consciousness=consciousness
            ))
        await bus.drain()
        return cycles

    try:
        cycles = run_async(_run())
    except (EvocycleError, ValueError) as e:
        console.print(f"[red]Cycle failed:[/red] {e}")
        raise typer.Exit(1)

    metrics = engine.get_metrics()

    if as_json:
        payload = {
            "cycles": [c.model_dump(mode="json") for c in cycles],
            "metrics": metrics.model_dump(mode="json"),
        }
        typer.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())
        return

    table = Table(title="Evolution Cycles")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type", style="green")
    table.add_column("Phases", justify="right")
    table.add_column("Mutations", justify="right")
    table.add_column("Transformations", justify="right")
    table.add_column("Fitness", style="yellow", justify="right")
    table.add_column("Complexity", justify="right")
    table.add_column("Consciousness", justify="right")

    for c in cycles:
        table.add_row(
            c.id,
            c.type,
            str(len(c.phases)),
            str(len(c.mutations)),
            str(len(c.transformations)),
            f"{c.fitness:.3f}",
            f"{c.complexity:.2f}",
            f"{c.consciousness:.2f}",
        )
    console.print(table)

    summary = metrics.running_summary
    console.print(Panel(
        f"Cycles:           {summary.cycle_count}\n"
        f"Mutations:        {summary.total_mutations}\n"
        f"Adaptations:      {summary.total_adaptations}\n"
        f"Transformations:  {summary.total_transformations}\n"
        f"Evolutions:       {summary.total_evolutions}\n"
        f"Last fitness:     {summary.last_fitness:.3f}\n"
        f"Last complexity:  {summary.last_complexity:.2f}\n"
        f"Last consciousness: {summary.last_consciousness:.2f}",
        title="Running Summary",
        border_style="cyan",
    ))


@app.command("types")
def types():
    """Show the phase template of every cycle type."""
    table = Table(title="Cycle Types")
    table.add_column("Cycle type", style="cyan")
    table.add_column("Phase", style="white")
    table.add_column("Share", justify="right")
    table.add_column("Focus", style="dim")

    for cycle_type, phases in PHASE_TEMPLATES.items():
        for i, phase in enumerate(phases):
            table.add_row(
                cycle_type if i == 0 else "",
                phase.name,
                f"{phase.fraction:.0%}",
                phase.focus,
            )
    console.print(table)


@app.command("strategies")
def strategies():
    """List the built-in strategy configs."""
    registries = StrategyRegistries()
    registries.configure()

    table = Table(title="Strategies")
    table.add_column("Kind", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Label", style="white")
    table.add_column("Parameters", style="dim")

    for entry in registries.list():
        params = ", ".join(f"{k}={v}" for k, v in entry.parameters.items())
        table.add_row(entry.kind.value, entry.name, entry.label, params)
    console.print(table)


@app.command("version")
def version_cmd():
    """Show evocycle version."""
    from evocycle import __version__
    console.print(f"evocycle v{__version__}")
