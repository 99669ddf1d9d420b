"""Status bar widget showing transport state and elapsed time."""

from textual.widgets import Static

from droneshow.models import DraftState


class StatusBar(Static):
    """
    Status bar displaying playback and draft state.

    Shows:
    - Playing or paused
    - Elapsed / total time
    - Whether the draft is saved, unsaved or a preview
    """

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $panel;
        color: $text;
        padding: 0 1;
    }

    StatusBar.playing {
        background: $success;
    }

    StatusBar.preview {
        background: $accent;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.playing = False
        self.elapsed_ms = 0
        self.duration_ms = 0
        self.draft_state = DraftState.EMPTY
        self.is_preview = False
        self._update_display()

    def update_state(
        self,
        playing: bool,
        elapsed_ms: int,
        duration_ms: int,
        draft_state: DraftState,
        is_preview: bool = False,
    ) -> None:
        """Update all status information."""
        self.playing = playing
        self.elapsed_ms = elapsed_ms
        self.duration_ms = duration_ms
        self.draft_state = draft_state
        self.is_preview = is_preview
        self._update_display()

    @property
    def text(self) -> str:
        transport = "▶ PLAYING" if self.playing else "⏸ PAUSED"
        clock = f"{self.elapsed_ms / 1000:5.2f}s / {self.duration_ms / 1000:.2f}s"

        if self.is_preview:
            draft = "PREVIEW (unsaved)"
        elif self.draft_state == DraftState.DRAFTING:
            draft = "Unsaved changes"
        elif self.draft_state == DraftState.SAVED:
            draft = "Saved"
        else:
            draft = "Empty"

        return " | ".join([transport, clock, draft])

    def _update_display(self) -> None:
        self.set_class(self.playing, "playing")
        self.set_class(self.is_preview, "preview")
        self.update(self.text)
