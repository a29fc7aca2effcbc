"""
Thruster Allocation CLI
=======================

Command-line entry point for inspecting allocations on reference layouts,
benchmarking the firing cache and browsing configuration presets.
"""

import logging
from typing import Optional

import numpy as np
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from thruster_allocation.config import (
    LAYOUTS,
    AllocationParams,
    ConfigPreset,
    get_preset_description,
    list_presets,
    load_layout,
    load_preset,
)
from thruster_allocation.control import AllocationController
from thruster_allocation.core import make_body
from thruster_allocation.core.error_handling import error_context
from thruster_allocation.core.exceptions import ThrusterAllocationException
from thruster_allocation.utils.logging_config import setup_logging

app = typer.Typer(
    help="Thruster Allocation - LP control allocation for multi-thruster bodies",
    add_completion=False,
)
console = Console()


def _load_params(preset: Optional[str], solver: Optional[str]) -> AllocationParams:
    params = load_preset(preset) if preset else AllocationParams()
    if solver:
        params = AllocationParams.from_dict({**params.to_dict(), "solver_type": solver})
    return params


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging for every command."""
    setup_logging("thruster_allocation", level=logging.DEBUG if verbose else logging.WARNING)


@app.command()
def allocate(
    layout: str = typer.Option("symmetric_cross", "--layout", "-l", help="Reference layout name"),
    fx: float = typer.Option(0.0, "--fx", help="Desired force x (fraction of total thrust)"),
    fy: float = typer.Option(0.0, "--fy", help="Desired force y (fraction of total thrust)"),
    torque: float = typer.Option(0.0, "--torque", "-t", help="Desired torque (fraction, CCW positive)"),
    com_x: float = typer.Option(0.0, "--com-x", help="Center of mass x (body frame)"),
    com_y: float = typer.Option(0.0, "--com-y", help="Center of mass y (body frame)"),
    mass: float = typer.Option(10.0, "--mass", help="Body mass"),
    preset: Optional[str] = typer.Option(
        None,
        "--preset",
        "-p",
        help=f"Configuration preset: {', '.join(ConfigPreset.all())}",
    ),
    solver: Optional[str] = typer.Option(None, "--solver", help="LP backend: HIGHS or OSQP"),
):
    """
    Solve one allocation and show per-thruster activations.
    """
    try:
        with error_context("Loading configuration"):
            params = _load_params(preset, solver)
            thruster_layout = load_layout(layout, body_id=0)
    except ThrusterAllocationException as e:
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    controller = AllocationController(params)
    body = make_body(0, mass=mass, local_center_of_mass=(com_x, com_y))
    state = controller.create_state()
    state.set_desire((fx, fy), torque)

    transitions = controller.update(state, thruster_layout, body)
    if state.last_error is not None:
        console.print(f"[bold red]Allocation failed:[/bold red] {escape(str(state.last_error))}")
        raise typer.Exit(code=1)

    estimate = controller.estimate_acceleration(state, thruster_layout, body)
    table = Table(title=f"Allocation on '{layout}'")
    table.add_column("Thruster", style="cyan")
    table.add_column("Position")
    table.add_column("Direction")
    table.add_column("Max thrust", justify="right")
    table.add_column("Activation", justify="right", style="bold")
    for thruster, activation in zip(state.resolved_thrusters or [], state.last_activations):
        table.add_row(
            str(thruster.identity),
            f"({thruster.position[0]:.3f}, {thruster.position[1]:.3f})",
            f"({thruster.direction[0]:.2f}, {thruster.direction[1]:.2f})",
            f"{thruster.max_thrust:.3f}",
            f"{activation:.2f}",
        )
    console.print(table)

    console.print(f"Applied force: ({body.force[0]:.4f}, {body.force[1]:.4f})  torque: {body.torque:.4f}")
    if estimate is not None:
        linear, angular = estimate
        console.print(
            f"Predicted acceleration: ({linear[0]:.4f}, {linear[1]:.4f})  angular: {angular:.4f}"
        )
    console.print(f"[dim]{len(transitions)} thruster(s) started firing[/dim]")


@app.command()
def benchmark(
    layout: str = typer.Option("eight_thruster", "--layout", "-l", help="Reference layout name"),
    requests: int = typer.Option(2000, "--requests", "-n", min=1, help="Number of ticks"),
    bodies: int = typer.Option(1, "--bodies", "-b", min=1, help="Number of controlled bodies"),
    seed: int = typer.Option(0, "--seed", help="Random seed"),
    preset: Optional[str] = typer.Option(None, "--preset", "-p", help="Configuration preset"),
    solver: Optional[str] = typer.Option(None, "--solver", help="LP backend: HIGHS or OSQP"),
):
    """
    Drive bodies with random desires and report cache effectiveness.
    """
    try:
        params = _load_params(preset, solver)
    except ValueError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    rng = np.random.default_rng(seed)
    controller = AllocationController(params)
    fleet = []
    for body_id in range(bodies):
        fleet.append(
            (controller.create_state(), load_layout(layout, body_id=body_id * 10), make_body(body_id * 10))
        )

    # A small pool of desires so repeated requests hit the cache
    pool = rng.uniform(-1.0, 1.0, size=(max(requests // 20, 1), 3))
    transitions = 0
    for _ in range(requests):
        for state, _, body in fleet:
            desire = pool[rng.integers(len(pool))]
            state.set_desire(desire[:2], desire[2])
            body.clear_forces()
        transitions += sum(len(t) for t in controller.update_all(fleet).values())

    stats = controller.solver.get_statistics()
    hits = sum(state.firing_cache.hits for state, _, _ in fleet)
    misses = sum(state.firing_cache.misses for state, _, _ in fleet)
    failures = sum(state.solver_failures for state, _, _ in fleet)

    table = Table(title="Benchmark")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Ticks", str(requests))
    table.add_row("Bodies", str(bodies))
    table.add_row("Cache hits", str(hits))
    table.add_row("Cache misses", str(misses))
    table.add_row("Hit rate", f"{hits / max(hits + misses, 1):.1%}")
    table.add_row("Solves", str(stats["solve_count"]))
    table.add_row("Mean solve time", f"{stats['mean_solve_time'] * 1000:.3f} ms")
    table.add_row("Max solve time", f"{stats['max_solve_time'] * 1000:.3f} ms")
    table.add_row("Transitions", str(transitions))
    table.add_row("Failures", str(failures))
    console.print(table)


@app.command()
def presets(
    list_all: bool = typer.Option(True, "--list/--no-list", help="List all available presets"),
    show: Optional[str] = typer.Option(None, "--show", help="Dump one preset's parameters"),
):
    """
    Browse configuration presets.
    """
    if show:
        try:
            params = load_preset(show)
        except ValueError as e:
            console.print(f"[bold red]Invalid preset:[/bold red] {escape(str(e))}")
            raise typer.Exit(code=1)
        console.print(Panel.fit(get_preset_description(show), title=show.upper()))
        console.print_json(params.model_dump_json())
        return

    if list_all:
        console.print("[bold]Available Configuration Presets:[/bold]\n")
        for preset_name, description in list_presets().items():
            console.print(f"[bold cyan]{preset_name.upper()}[/bold cyan]")
            console.print(f"  {description}\n")


@app.command()
def layouts():
    """
    List reference thruster layouts.
    """
    table = Table(title="Reference Layouts")
    table.add_column("Name", style="cyan")
    table.add_column("Parts", justify="right")
    table.add_column("Thrusters", justify="right")
    for name in LAYOUTS:
        layout = load_layout(name)
        table.add_row(name, str(len(layout.owners())), str(len(layout)))
    console.print(table)


if __name__ == "__main__":
    app()
