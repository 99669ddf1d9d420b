"""Play back a sequence in the terminal."""

import click

from droneshow.cli.formatting import pose_row, sequence_summary
from droneshow.cli.session import Session, session_command
from droneshow.core import PlaybackClock, PlaybackInterpolator
from droneshow.models import FlightSequence


@click.command()
@click.argument("sequence_id", required=False)
@click.option("--headless", is_flag=True, help="Print poses instead of starting the TUI")
@click.option("--steps", type=click.IntRange(min=1), default=20, help="Ticks to print in headless mode")
@click.option("--every", type=click.IntRange(min=1), default=1, help="Print every Nth tick in headless mode")
@session_command
def preview(session: Session, sequence_id: str | None, headless: bool, steps: int, every: int):
    """
    Preview a sequence (default: the active one).

    Opens the terminal player; with --headless, prints the pose at each
    playback tick instead.
    """
    if sequence_id is not None:
        session.editor.select_sequence(sequence_id)

    if not headless:
        from droneshow.tui import PreviewApp

        PreviewApp(session.config, session.library, session.editor).run()
        return

    sequence = session.library.active
    if sequence is None:
        click.echo("No sequence to preview; showing the default pose.")
    else:
        click.echo(f"{sequence.name}: {sequence_summary(sequence)}")

    clock = PlaybackClock(session.config.playback_tick_ms)
    clock.load(sequence)
    interpolator = PlaybackInterpolator(session.editor.mapper)

    playing = sequence or FlightSequence(id="none")
    click.echo(f"\n{'t(ms)':>7}  {'X':>7}  {'Y':>7}  {'Z':>7}  color    bright  {'wp':>3}")
    for step in range(steps):
        if step % every == 0:
            click.echo(pose_row(clock.elapsed_ms, interpolator.pose_at(playing, clock.elapsed_ms)))
        clock.tick()
