"""Summary of the sequence being played."""

from textual.widgets import Static

from droneshow.models import FlightSequence


class SequenceSummary(Static):
    """Name, position in the library and derived metrics of a sequence."""

    DEFAULT_CSS = """
    SequenceSummary {
        height: auto;
        border: round $secondary;
        padding: 0 1;
    }
    """

    def show_sequence(self, sequence: FlightSequence, position: int | None, total: int) -> None:
        """
        Args:
            sequence: Sequence being played
            position: Index in the library (None for an unsaved draft)
            total: Number of saved sequences
        """
        where = f"{position + 1}/{total}" if position is not None else f"draft ({total} saved)"
        lines = [
            f"{sequence.name}  [{where}]",
            f"Waypoints {sequence.point_count}   Duration {sequence.duration_seconds:.1f}s",
            f"Max altitude {sequence.max_altitude:.1f}m   Colors {sequence.color_count}",
        ]
        if sequence.point_count and not sequence.timestamps_ascending:
            lines.append("Timestamps out of order")
        self.update("\n".join(lines))
