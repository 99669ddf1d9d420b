"""Export sequences for autopilot consumers."""

from pathlib import Path

import click

from droneshow.cli.session import Session, session_command
from droneshow.exceptions import SequenceNotFoundError
from droneshow.services import ExportFormat


@click.command()
@click.argument("sequence_id", required=False)
@click.option(
    "--format",
    "-f",
    "export_format",
    type=click.Choice([f.value for f in ExportFormat], case_sensitive=False),
    default=ExportFormat.JSON.value,
    help="Output format (default: json)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file or directory (default: the configured export directory)",
)
@session_command
def export(session: Session, sequence_id: str | None, export_format: str, output: Path | None):
    """Export a sequence (default: the active one) to JSON or CSV."""
    if sequence_id is None:
        sequence = session.library.active
        if sequence is None:
            raise SequenceNotFoundError("(active)")
    else:
        sequence = session.library.require(sequence_id)

    if output is None:
        session.config.ensure_directories()
        output = session.config.export_dir

    path = session.exporter.export(sequence, output, export_format.lower())
    click.echo(f"Exported '{sequence.name}' to {path}")
    if not sequence.timestamps_ascending:
        click.echo("Warning: timestamps are not in waypoint order; exported in waypoint order", err=True)
