"""Editor service: the draft/preview/save state machine."""

import logging

from droneshow.colors import COLORS
from droneshow.core import CoordinateMapper
from droneshow.exceptions import EmptyDraftError, SequenceNotFoundError
from droneshow.model_manager import ObserverManager
from droneshow.models import (
    DEFAULT_SEQUENCE_NAME,
    AppConfig,
    Color,
    Draft,
    DraftState,
    DrawingPlane,
    FlightSequence,
    PatternType,
    Waypoint,
    freehand_duration,
    new_sequence_id,
)
from droneshow.patterns import generate_pattern
from droneshow.protocols import EditEvent, EditObserver

from .library_service import SequenceLibraryService

logger = logging.getLogger(__name__)

FREEHAND_BRIGHTNESS = 0.8
FREEHAND_SPEED = 5.0
FREEHAND_TRANSITION_MS = 500


class EditorService:
    """
    Manages the draft being edited and how it becomes a saved sequence.

    The draft is an immutable snapshot replaced on every transition. It may
    shadow one saved sequence (the target): saving then replaces that
    sequence in place. A draft without a target is appended as a new
    sequence on save.

    Event-Driven Architecture:
        Every transition emits an EditEvent with the new draft snapshot.
        Collection changes go through SequenceLibraryService, which emits
        its own LibraryEvents.

    Threading:
        All methods are called from the UI event loop (or the CLI). There is
        a single mutator; observers are notified synchronously.
    """

    def __init__(
        self,
        config: AppConfig,
        library: SequenceLibraryService,
        mapper: CoordinateMapper | None = None,
    ):
        """
        Initialize the editor service.

        Args:
            config: Application configuration (drawing defaults, settings)
            library: Collection the draft is saved to
            mapper: Coordinate mapper (defaults to one built from config.canvas)
        """
        self.config = config
        self.library = library
        self.mapper = mapper or CoordinateMapper(config.canvas)

        self.altitude: float = config.default_altitude
        self.color: Color = config.draw_color

        self._draft = Draft()
        self._target_id: str | None = None
        self._preview_id: str | None = None

        self._observers = ObserverManager[EditObserver](observer_type_name="edit")
        logger.info("EditorService initialized")

    # =================================================================
    # Event System
    # =================================================================

    def register_observer(self, observer: EditObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: EditObserver) -> None:
        self._observers.unregister(observer)

    def _set_draft(self, draft: Draft, event: EditEvent) -> None:
        self._draft = draft
        self._observers.notify("on_edit_event", event, draft)

    # =================================================================
    # State
    # =================================================================

    @property
    def draft(self) -> Draft:
        return self._draft

    @property
    def state(self) -> DraftState:
        return self._draft.state

    @property
    def target_id(self) -> str | None:
        """Id of the saved sequence the draft shadows, if any."""
        return self._target_id

    @property
    def is_previewing(self) -> bool:
        return self._draft.is_preview

    def draft_sequence(self) -> FlightSequence:
        """The draft as a (not yet saved) sequence, for previewing and export."""
        duration = self._draft.duration
        if duration is None:
            duration = freehand_duration(self._draft.points)
        return FlightSequence(
            id=self._target_id or self._preview_id or "draft",
            name=self._draft.name,
            points=list(self._draft.points),
            duration=duration,
        )

    # =================================================================
    # Transitions
    # =================================================================

    def _draft_from(self, sequence: FlightSequence) -> Draft:
        return Draft(points=tuple(sequence.points), name=sequence.name, duration=sequence.duration)

    def load_active(self) -> None:
        """Copy the library's active sequence into the draft (or start empty)."""
        active = self.library.active
        self._preview_id = None
        if active is None:
            self._target_id = None
            self._set_draft(Draft(), EditEvent.DRAFT_CLEARED)
        else:
            self._target_id = active.id
            self._set_draft(self._draft_from(active), EditEvent.SEQUENCE_SELECTED)

    def select_sequence(self, sequence_id: str) -> None:
        """
        Make a saved sequence active and load it into the draft.

        Raises:
            SequenceNotFoundError: If no sequence has this id
        """
        sequence = self.library.require(sequence_id)
        self.library.set_active(sequence_id)

        self._target_id = sequence_id
        self._preview_id = None
        self._set_draft(self._draft_from(sequence), EditEvent.SEQUENCE_SELECTED)
        logger.info(f"Selected sequence '{sequence.name}' ({sequence_id})")

    def add_point(
        self,
        px: float,
        py: float,
        plane: DrawingPlane = DrawingPlane.TOP,
        altitude: float | None = None,
        color: Color | None = None,
    ) -> Waypoint:
        """
        Append a waypoint from a canvas click.

        A preview is discarded first: the draft is emptied and renamed
        "New Sequence". The draft keeps shadowing the active sequence.

        Args:
            px: Canvas X (pixels)
            py: Canvas Y (pixels)
            plane: Which view was clicked
            altitude: Altitude for top view clicks (defaults to the editor altitude)
            color: LED color (defaults to the editor color)

        Returns:
            The new waypoint
        """
        if self._draft.is_preview:
            self._preview_id = None
            self._set_draft(Draft(), EditEvent.PREVIEW_CLEARED)
            logger.debug("Preview discarded by canvas click")

        position = self.mapper.from_pixel(
            px, py, plane, self.altitude if altitude is None else altitude
        )
        points = self._draft.points
        waypoint = Waypoint(
            x=position.x,
            y=position.y,
            z=position.z,
            color=color or self.color,
            brightness=FREEHAND_BRIGHTNESS,
            timestamp=len(points) * self.config.freehand_interval_ms,
            speed=FREEHAND_SPEED,
            transition_duration=FREEHAND_TRANSITION_MS,
        )

        self._set_draft(
            self._draft.model_copy(
                update={
                    "points": (*points, waypoint),
                    "has_unsaved_changes": True,
                    "duration": None,
                }
            ),
            EditEvent.POINT_ADDED,
        )
        logger.debug(f"Added waypoint {len(points)} at ({position.x:.1f}, {position.y:.1f}, {position.z:.1f})")
        return waypoint

    def load_preview(self, sequence: FlightSequence) -> None:
        """
        Replace the draft with a generated sequence, uncommitted.

        Saving a preview replaces the shadowed sequence in place. Without
        one, the preview is appended under its generated id.
        """
        self._preview_id = sequence.id
        self._set_draft(
            Draft(
                points=tuple(sequence.points),
                name=sequence.name,
                is_preview=True,
                has_unsaved_changes=True,
                duration=sequence.duration,
            ),
            EditEvent.PREVIEW_LOADED,
        )
        logger.info(f"Previewing '{sequence.name}' ({sequence.point_count} waypoints)")

    def preview_pattern(self, pattern: PatternType | str, **kwargs) -> FlightSequence:
        """Generate a pattern with the configured settings and load it as a preview."""
        sequence = generate_pattern(
            pattern, self.config.flight, self.config.led, self.config.canvas, **kwargs
        )
        self.load_preview(sequence)
        return sequence

    def clear(self) -> None:
        """Remove all draft points (and any preview). The draft keeps its name and target."""
        self._preview_id = None
        self._set_draft(Draft(name=self._draft.name), EditEvent.DRAFT_CLEARED)
        logger.info("Draft cleared")

    def new_sequence(self) -> None:
        """Start a fresh draft that will be saved as a new sequence."""
        self._target_id = None
        self._preview_id = None
        self._set_draft(Draft(name=DEFAULT_SEQUENCE_NAME), EditEvent.DRAFT_CLEARED)
        logger.info("Started new sequence")

    def rename(self, name: str) -> None:
        """Rename the draft. It becomes dirty if the name differs from the saved one."""
        target = self.library.get(self._target_id) if self._target_id else None
        dirty = self._draft.has_unsaved_changes or (target is not None and name != target.name)
        self._set_draft(
            self._draft.model_copy(update={"name": name, "has_unsaved_changes": dirty}),
            EditEvent.DRAFT_RENAMED,
        )

    def save(self) -> FlightSequence:
        """
        Commit the draft to the library.

        Returns:
            The saved sequence

        Raises:
            EmptyDraftError: If the draft has no points (nothing changes)
        """
        draft = self._draft
        if draft.is_empty:
            logger.warning("Save rejected: draft is empty")
            raise EmptyDraftError()

        duration = draft.duration if draft.duration is not None else freehand_duration(draft.points)
        target = self.library.get(self._target_id) if self._target_id else None

        if target is not None:
            sequence = FlightSequence(
                id=target.id, name=draft.name, points=list(draft.points), duration=duration
            )
            self.library.update(sequence)
            event = EditEvent.SEQUENCE_UPDATED
        else:
            sequence_id = self._preview_id
            if sequence_id is None or self.library.get(sequence_id) is not None:
                sequence_id = new_sequence_id()
            sequence = FlightSequence(
                id=sequence_id, name=draft.name, points=list(draft.points), duration=duration
            )
            self.library.add(sequence, make_active=True)
            event = EditEvent.SEQUENCE_CREATED

        self._target_id = sequence.id
        self._preview_id = None
        self._set_draft(self._draft_from(sequence), event)
        logger.info(f"Saved '{sequence.name}' ({sequence.id}) with {sequence.point_count} waypoints")
        return sequence

    def delete_sequence(self, sequence_id: str) -> None:
        """
        Delete a saved sequence.

        If the draft was shadowing it, the draft follows the library's new
        active sequence, or is cleared when none remains.

        Raises:
            SequenceNotFoundError: If no sequence has this id
        """
        if self.library.get(sequence_id) is None:
            raise SequenceNotFoundError(sequence_id)

        self.library.delete(sequence_id)

        if sequence_id == self._target_id:
            self.load_active()

    # =================================================================
    # Drawing defaults
    # =================================================================

    def set_altitude(self, altitude: float) -> None:
        """Altitude for subsequent top view clicks."""
        if altitude < 0:
            raise ValueError(f"Altitude must be >= 0, got {altitude}")
        self.altitude = altitude

    def set_color(self, color: Color | None) -> None:
        """LED color for subsequent clicks (None restores red)."""
        self.color = color or COLORS.RED
