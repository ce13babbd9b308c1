"""Define a command-line interface for running pick-and-place deployments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from motion_sequencing.deployment import Deployment, bundled_deployments, load_deployment
from motion_sequencing.io.logging import configure_logging, console
from motion_sequencing.kinematics import UnreachablePoseError
from motion_sequencing.tasks import InvalidIndexError
from motion_sequencing.visualization import ConsoleVisualizer, RecordingVisualizer

if TYPE_CHECKING:
    from motion_sequencing.tasks import SequenceReport


def _render_report_table(deployment: Deployment, report: SequenceReport) -> Table:
    """Render a table summarizing the pose error of every executed phase."""
    table = Table(title=f"Deployment: {deployment.name}", show_lines=False)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Phase", style="bold")
    table.add_column("Waypoint", style="magenta")
    table.add_column("Error (mm)", justify="right")
    table.add_column("Verdict")

    for idx, phase_report in enumerate(report.phases, start=1):
        validation = phase_report.validation
        verdict = "[green]ok[/]" if validation.within_tolerance else "[red]unreachable[/]"
        table.add_row(
            str(idx),
            phase_report.phase.state.status,
            str(phase_report.phase.waypoint),
            f"{validation.error_m * 1000.0:.2f}",
            verdict,
        )
    return table


def _load_or_fail(deployment_name: str) -> Deployment:
    """Load the named deployment, exiting with status 1 if its configuration is invalid."""
    try:
        return load_deployment(deployment_name)
    except (FileNotFoundError, KeyError, RuntimeError, ValidationError, ValueError) as err:
        console.print(f"[red]Could not load deployment '{deployment_name}':[/]")
        console.print(str(err), markup=False)
        raise click.exceptions.Exit(1) from err


@click.group()
def cli() -> None:
    """Run robotic-arm pick-and-place deployments."""


@cli.command(name="list")
def list_deployments() -> None:
    """List the deployments bundled with the package."""
    table = Table(title="Bundled deployments")
    table.add_column("Name", style="bold")
    table.add_column("Path", style="dim")
    for name, path in bundled_deployments().items():
        table.add_row(name, str(path))
    console.print(table)


@cli.command()
@click.argument("deployment_name", metavar="DEPLOYMENT")
@click.option("--headless", is_flag=True, help="Record frames instead of drawing them.")
@click.option(
    "--frame-delay",
    type=click.FloatRange(min=0.0),
    default=None,
    help="Pause (s) after each frame.",
)
@click.option(
    "--escalate/--no-escalate",
    default=None,
    help="Abort on the first unreachable pose instead of only reporting it.",
)
@click.option("--quiet", is_flag=True, help="Hide the per-phase status and pose checks.")
def run(
    deployment_name: str,
    headless: bool,
    frame_delay: float | None,
    escalate: bool | None,
    quiet: bool,
) -> None:
    """Run DEPLOYMENT, given as a bundled name or a path to a YAML file."""
    configure_logging(logging.WARNING if quiet else logging.INFO)
    deployment = _load_or_fail(deployment_name)

    console.print(
        Panel.fit(
            f"[bold]{deployment.name}[/]: {deployment.model.name}, {deployment.num_items} items",
            border_style="green",
        ),
    )

    delay_s = deployment.config.frame_delay_s if frame_delay is None else frame_delay
    plan = deployment.plan()

    try:
        if headless:
            recorder = RecordingVisualizer()
            sequencer = deployment.build_sequencer(recorder, escalate_unreachable=escalate)
            report = sequencer.run(plan, deployment.start_configuration)
        else:
            with ConsoleVisualizer(frame_delay_s=delay_s, title=deployment.name) as viz:
                sequencer = deployment.build_sequencer(viz, escalate_unreachable=escalate)
                report = sequencer.run(plan, deployment.start_configuration)
    except (InvalidIndexError, UnreachablePoseError) as err:
        console.print("[red]Sequence aborted:[/]")
        console.print(str(err), markup=False)
        raise click.exceptions.Exit(1) from err

    console.print(_render_report_table(deployment, report))
    num_unreachable = len(report.unreachable)
    color = "green" if num_unreachable == 0 else "yellow"
    console.print(f"[{color}]{len(report)} phases executed, {num_unreachable} out of tolerance.[/]")


def main() -> None:
    """Enter the command-line interface."""
    cli()


if __name__ == "__main__":
    main()
