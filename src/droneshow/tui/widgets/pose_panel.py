"""Live pose readout: world position and LED state."""

from textual.widgets import Static

from droneshow.core import FlightPose


class PosePanel(Static):
    """Shows where the drone is and what its LED shows at the current tick."""

    DEFAULT_CSS = """
    PosePanel {
        height: auto;
        border: round $primary;
        padding: 0 1;
    }
    """

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id=id)
        self.pose: FlightPose | None = None

    def show_pose(self, pose: FlightPose) -> None:
        self.pose = pose
        self.update(self.render_pose(pose))

    @staticmethod
    def render_pose(pose: FlightPose) -> str:
        x, y, z = pose.position
        hex_color = pose.color.to_hex()

        lines = [
            f"[b]Position[/b]  X {x:7.2f}  Y {y:7.2f}  Z {z:7.2f}",
            f"[b]LED[/b]       [{hex_color}]██████[/{hex_color}] {hex_color}  brightness {pose.brightness:.0%}",
        ]
        if pose.is_default:
            lines.append("[b]Waypoint[/b]  [dim]- (no sequence)[/dim]")
        else:
            lines.append(f"[b]Waypoint[/b]  {pose.waypoint_index}   progress {pose.progress:.0%}")
        return "\n".join(lines)
