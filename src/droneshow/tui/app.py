"""Preview TUI: plays the current draft and browses the saved library."""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from droneshow.core import PlaybackClock, PlaybackInterpolator
from droneshow.models import AppConfig, Draft, PatternType, SequenceLibrary
from droneshow.protocols import EditEvent, LibraryEvent, PlaybackEvent
from droneshow.services import EditorService, SequenceLibraryService

from .decorators import handle_action_errors
from .widgets import PosePanel, SequenceSummary, StatusBar

logger = logging.getLogger(__name__)


class PreviewApp(App):
    """
    Textual front end for the flight preview.

    The app is a thin layer over the services: the editor owns the draft,
    the library owns the saved sequences, and the playback clock ticks on
    this app's event loop (the app is the clock's scheduler).

    Implements EditObserver, LibraryObserver and PlaybackObserver via
    structural subtyping (no explicit inheritance to avoid metaclass
    conflicts between App and Protocol).
    """

    TITLE = "Drone Show Preview"

    CSS = """
    #body {
        padding: 1 2;
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("space", "toggle_play", "Play/Pause", show=True),
        Binding("r", "reset", "Reset", show=True),
        Binding("n", "next_sequence", "Next", show=True),
        Binding("p", "previous_sequence", "Previous", show=True),
        Binding("1", "preview_pattern('circle')", "Circle", show=False),
        Binding("2", "preview_pattern('figure8')", "Figure-8", show=False),
        Binding("3", "preview_pattern('spiral')", "Spiral", show=False),
        Binding("4", "preview_pattern('formation')", "Formation", show=False),
        Binding("escape", "discard_preview", "Discard Preview", show=False),
        Binding("ctrl+s", "save", "Save", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        config: AppConfig,
        library: SequenceLibraryService,
        editor: EditorService,
        autoplay: bool = True,
    ):
        """
        Args:
            config: Application configuration (tick length, canvas)
            library: Saved sequences
            editor: Draft editor sharing the same library
            autoplay: Start playing as soon as the app is mounted
        """
        super().__init__()
        self.app_config = config
        self.library = library
        self.editor = editor
        self.autoplay = autoplay

        self.playback = PlaybackClock(config.playback_tick_ms)
        self.interpolator = PlaybackInterpolator(editor.mapper)
        logger.info("PreviewApp created")

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="body"):
            yield SequenceSummary(id="summary")
            yield PosePanel(id="pose")
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        self.editor.register_observer(self)
        self.library.register_observer(self)
        self.playback.register_observer(self)

        self.playback.load(self.editor.draft_sequence())
        self._refresh_summary()
        if self.autoplay:
            self.playback.play(self)

    def on_unmount(self) -> None:
        self.playback.pause()
        self.playback.unregister_observer(self)
        self.library.unregister_observer(self)
        self.editor.unregister_observer(self)

    # =================================================================
    # Observer callbacks
    # =================================================================

    def on_edit_event(self, event: EditEvent, draft: Draft) -> None:
        logger.debug(f"Edit event {event.value}")
        self.playback.load(self.editor.draft_sequence())
        self._refresh_summary()

    def on_library_event(
        self, event: LibraryEvent, library: SequenceLibrary, sequence_id: str | None = None
    ) -> None:
        self._refresh_summary()

    def on_playback_event(self, event: PlaybackEvent, elapsed_ms: int) -> None:
        self._refresh_pose()

    # =================================================================
    # Display
    # =================================================================

    def _refresh_summary(self) -> None:
        sequence = self.playback.sequence or self.editor.draft_sequence()
        target = self.editor.target_id
        position = self.library.library.index_of(target) if target else None
        self.query_one(SequenceSummary).show_sequence(sequence, position, len(self.library))

    def _refresh_pose(self) -> None:
        if self.playback.sequence is None:
            return
        pose = self.interpolator.pose_at(self.playback.sequence, self.playback.elapsed_ms)
        self.query_one(PosePanel).show_pose(pose)
        self.query_one(StatusBar).update_state(
            playing=self.playback.is_playing,
            elapsed_ms=self.playback.elapsed_ms,
            duration_ms=self.playback.duration_ms,
            draft_state=self.editor.state,
            is_preview=self.editor.is_previewing,
        )

    # =================================================================
    # Actions
    # =================================================================

    def action_toggle_play(self) -> None:
        self.playback.toggle(self)

    def action_reset(self) -> None:
        self.playback.reset()

    def _step_sequence(self, offset: int) -> None:
        ids = self.library.library.ids
        if not ids:
            self.notify("No saved sequences", severity="warning")
            return

        current = self.library.library.index_of(self.editor.target_id) if self.editor.target_id else None
        if current is None:
            index = 0 if offset > 0 else len(ids) - 1
        else:
            index = (current + offset) % len(ids)
        self.editor.select_sequence(ids[index])

    @handle_action_errors("select next sequence")
    def action_next_sequence(self) -> None:
        self._step_sequence(1)

    @handle_action_errors("select previous sequence")
    def action_previous_sequence(self) -> None:
        self._step_sequence(-1)

    @handle_action_errors("generate pattern")
    def action_preview_pattern(self, pattern: str) -> None:
        sequence = self.editor.preview_pattern(PatternType(pattern))
        self.notify(f"Previewing {sequence.name} (Ctrl+S to save)")

    def action_discard_preview(self) -> None:
        if self.editor.is_previewing:
            self.editor.load_active()

    @handle_action_errors("save sequence")
    def action_save(self) -> None:
        sequence = self.editor.save()
        self.notify(f"Saved '{sequence.name}'")
