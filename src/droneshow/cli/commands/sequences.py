"""Commands for browsing and managing saved sequences."""

import json
from pathlib import Path

import click

from droneshow.cli.formatting import echo_sequence, echo_waypoints
from droneshow.cli.session import Session, session_command
from droneshow.exceptions import collect_errors
from droneshow.models import FlightSequence, SequenceLibrary, new_sequence_id


@click.group(name="sequences")
def sequences_group():
    """List, select and manage saved sequences."""
    pass


@sequences_group.command(name="list")
@session_command
def list_sequences(session: Session):
    """List saved sequences (* marks the active one)."""
    library = session.library.library
    if not library.sequences:
        click.echo("No saved sequences.")
        click.echo("\nDraw one with 'droneshow draw' or generate one with 'droneshow pattern'.")
        return

    for sequence in library.sequences:
        echo_sequence(sequence, active=sequence.id == library.active_id)


@sequences_group.command(name="show")
@click.argument("sequence_id")
@session_command
def show_sequence(session: Session, sequence_id: str):
    """Show a sequence and its waypoints."""
    sequence = session.library.require(sequence_id)
    echo_sequence(sequence, active=sequence.id == session.library.active_id)
    click.echo()
    echo_waypoints(sequence)


@sequences_group.command(name="select")
@click.argument("sequence_id")
@session_command
def select_sequence(session: Session, sequence_id: str):
    """Make a sequence active."""
    session.editor.select_sequence(sequence_id)
    click.echo(f"Active sequence: {session.library.active.name} ({sequence_id})")


@sequences_group.command(name="delete")
@click.argument("sequence_id")
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation")
@session_command
def delete_sequence(session: Session, sequence_id: str, yes: bool):
    """Delete a sequence."""
    sequence = session.library.require(sequence_id)
    if not yes:
        click.confirm(f"Delete '{sequence.name}'?", abort=True)

    session.editor.delete_sequence(sequence_id)
    click.echo(f"Deleted '{sequence.name}'")

    active = session.library.active
    click.echo(f"Active sequence: {active.name} ({active.id})" if active else "No sequences left.")


@sequences_group.command(name="rename")
@click.argument("sequence_id")
@click.argument("name")
@session_command
def rename_sequence(session: Session, sequence_id: str, name: str):
    """Rename a sequence."""
    session.library.rename(sequence_id, name)
    click.echo(f"Renamed {sequence_id} to '{name}'")


def _read_sequences(path: Path) -> list[FlightSequence]:
    """Accept a single sequence, a bare list of sequences, or a whole library file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        return [FlightSequence.model_validate(item) for item in data]
    if "sequences" in data:
        return SequenceLibrary.model_validate(data).sequences
    return [FlightSequence.model_validate(data)]


@sequences_group.command(name="import")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@session_command
def import_sequences(session: Session, files: tuple[Path, ...]):
    """Import sequences from JSON files (exported or legacy web designer data)."""
    collector = collect_errors("import sequences")
    imported = 0

    for path in files:
        with collector.try_operation(f"import {path.name}"):
            for sequence in _read_sequences(path):
                # Keep both copies when an id is already taken
                if session.library.get(sequence.id) is not None:
                    sequence = sequence.model_copy(update={"id": new_sequence_id()})
                session.library.add(sequence, make_active=False)
                imported += 1

    click.echo(f"Imported {imported} sequence(s)")
    if collector.has_errors:
        click.echo(collector.get_summary(), err=True)
        raise SystemExit(1)
