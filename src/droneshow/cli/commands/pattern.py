"""Generate procedural patterns."""

import click

from droneshow.cli.formatting import echo_sequence, echo_waypoints
from droneshow.cli.session import Session, session_command
from droneshow.models import PatternType


@click.command()
@click.argument("pattern", type=click.Choice([p.value for p in PatternType], case_sensitive=False))
@click.option("--save", "-s", is_flag=True, help="Save the pattern as a new sequence")
@click.option("--name", "-n", type=str, default=None, help="Name to save under")
@click.option("--waypoints", "-w", "show_waypoints", is_flag=True, help="Print every waypoint")
@session_command
def pattern(session: Session, pattern: str, save: bool, name: str | None, show_waypoints: bool):
    """
    Generate a circle, figure8, spiral or formation pattern.

    The pattern is built with the configured flight and LED settings and
    shown as a preview; pass --save to keep it.
    """
    editor = session.editor
    editor.new_sequence()
    generated = editor.preview_pattern(pattern.lower())
    if name:
        editor.rename(name)

    click.echo("Preview:" if not save else "Generated:")
    echo_sequence(generated)
    if show_waypoints:
        click.echo()
        echo_waypoints(generated)

    if save:
        sequence = editor.save()
        click.echo(f"\nSaved as '{sequence.name}' ({sequence.id})")
    else:
        click.echo("\nNot saved. Re-run with --save to keep it.")
