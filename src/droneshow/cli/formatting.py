"""Text rendering of sequences for CLI output."""

import click

from droneshow.core import FlightPose
from droneshow.models import FlightSequence


def sequence_summary(sequence: FlightSequence) -> str:
    """One-line summary: waypoints, duration, max altitude, colors."""
    return (
        f"{sequence.point_count} waypoints, {sequence.duration_seconds:.1f}s, "
        f"max {sequence.max_altitude:.1f}m, {sequence.color_count} colors"
    )


def echo_sequence(sequence: FlightSequence, active: bool = False) -> None:
    marker = "*" if active else " "
    click.echo(f"{marker} {sequence.id}  {sequence.name}")
    click.echo(f"    {sequence_summary(sequence)}")


def echo_waypoints(sequence: FlightSequence) -> None:
    click.echo(f"{'#':>3}  {'time':>7}  {'x':>7}  {'y':>7}  {'alt':>6}  color    bright")
    for index, point in enumerate(sequence.points):
        click.echo(
            f"{index:>3}  {point.timestamp:>7}  {point.x:>7.1f}  {point.y:>7.1f}  "
            f"{point.z:>6.1f}  {point.color_hex}  {point.brightness:>5.2f}"
        )
    if not sequence.timestamps_ascending:
        click.echo("\nWarning: timestamps are not in waypoint order", err=True)


def pose_row(elapsed_ms: int, pose: FlightPose) -> str:
    x, y, z = pose.position
    index = "-" if pose.waypoint_index is None else str(pose.waypoint_index)
    return (
        f"{elapsed_ms:>7}  {x:>7.2f}  {y:>7.2f}  {z:>7.2f}  "
        f"{pose.color.to_hex()}  {pose.brightness:>5.2f}  {index:>3}"
    )
