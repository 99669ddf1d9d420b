"""Freehand drawing from canvas pixel coordinates."""

import click

from droneshow.cli.formatting import echo_sequence
from droneshow.cli.session import Session, session_command
from droneshow.models import DrawingPlane, parse_color


def parse_click_point(value: str) -> tuple[float, float]:
    """Parse 'PX,PY' into pixel coordinates."""
    try:
        px, py = (float(part) for part in value.split(","))
    except ValueError as e:
        raise ValueError(f"Invalid point {value!r} (expected PX,PY)") from e
    return px, py


@click.command()
@click.argument("points", nargs=-1, required=True)
@click.option(
    "--plane",
    "-p",
    type=click.Choice([plane.value for plane in DrawingPlane], case_sensitive=False),
    default=DrawingPlane.TOP.value,
    help="View the points were clicked on (default: top)",
)
@click.option("--altitude", "-a", type=float, default=None, help="Altitude for top view points (m)")
@click.option("--color", "-c", type=str, default=None, help="LED color, '#RRGGBB' or 'hsl(h, s%, l%)'")
@click.option("--name", "-n", type=str, default=None, help="Sequence name")
@click.option(
    "--append",
    is_flag=True,
    help="Add the points to the active sequence instead of starting a new one",
)
@session_command
def draw(
    session: Session,
    points: tuple[str, ...],
    plane: str,
    altitude: float | None,
    color: str | None,
    name: str | None,
    append: bool,
):
    """
    Draw a flight from canvas clicks and save it.

    POINTS are pixel coordinates on a 400x300 canvas, given as PX,PY.

    \b
    Examples:
      droneshow draw 100,100 200,50 300,100 --altitude 25 --color '#00ff00'
      droneshow draw --plane front 120,240 200,180 --name "Climb"
    """
    editor = session.editor
    if not append:
        editor.new_sequence()
    if name:
        editor.rename(name)

    led = parse_color(color) if color else None
    drawing_plane = DrawingPlane(plane.lower())
    for value in points:
        px, py = parse_click_point(value)
        editor.add_point(px, py, drawing_plane, altitude=altitude, color=led)

    sequence = editor.save()
    click.echo("Saved sequence:")
    echo_sequence(sequence, active=True)
