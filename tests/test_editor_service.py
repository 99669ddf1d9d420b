"""Unit tests for EditorService."""

import json
from unittest.mock import Mock

import pytest

from droneshow.colors import COLORS
from droneshow.exceptions import EmptyDraftError, SequenceNotFoundError
from droneshow.models import DEFAULT_SEQUENCE_NAME, DraftState, DrawingPlane, FlightSequence
from droneshow.protocols import EditEvent


@pytest.fixture
def saved(editor):
    """Editor holding one saved two-point sequence."""
    editor.add_point(100, 100)
    editor.add_point(200, 100)
    return editor.save()


@pytest.mark.unit
class TestAddPoint:
    """Test freehand drawing."""

    def test_top_view_click(self, editor):
        waypoint = editor.add_point(120, 80)
        assert waypoint.position == (120, 80, 20)
        assert waypoint.color == COLORS.RED
        assert waypoint.brightness == 0.8
        assert waypoint.speed == 5
        assert waypoint.transition_duration == 500
        assert waypoint.timestamp == 0

    def test_front_view_click(self, editor):
        waypoint = editor.add_point(120, 240, DrawingPlane.FRONT)
        assert waypoint.position == (120, 150, 20)

    def test_timestamps_follow_index(self, editor):
        for i in range(3):
            editor.add_point(10 * i, 10)
        assert [p.timestamp for p in editor.draft.points] == [0, 1000, 2000]

    def test_uses_current_altitude_and_color(self, editor):
        editor.set_altitude(35)
        editor.set_color(COLORS.BLUE)
        waypoint = editor.add_point(0, 0)
        assert waypoint.z == 35
        assert waypoint.color == COLORS.BLUE

    def test_explicit_altitude_and_color(self, editor):
        waypoint = editor.add_point(0, 0, altitude=7, color=COLORS.GREEN)
        assert waypoint.z == 7
        assert waypoint.color == COLORS.GREEN

    def test_set_color_none_restores_red(self, editor):
        editor.set_color(COLORS.BLUE)
        editor.set_color(None)
        assert editor.color == COLORS.RED

    def test_negative_altitude_rejected(self, editor):
        with pytest.raises(ValueError):
            editor.set_altitude(-1)

    def test_draft_becomes_dirty(self, editor):
        editor.add_point(0, 0)
        assert editor.state == DraftState.DRAFTING
        assert editor.draft.has_unsaved_changes

    def test_draft_sequence(self, editor):
        editor.add_point(0, 0)
        editor.add_point(10, 0)
        sequence = editor.draft_sequence()
        assert sequence.point_count == 2
        assert sequence.duration == 2000


@pytest.mark.unit
class TestSave:
    """Test committing the draft."""

    def test_empty_draft_rejected(self, editor, library):
        with pytest.raises(EmptyDraftError):
            editor.save()
        assert len(library) == 0
        assert editor.state == DraftState.EMPTY

    def test_new_sequence_appended_and_active(self, editor, library, saved):
        assert library.library.ids == [saved.id]
        assert library.active_id == saved.id
        assert saved.name == DEFAULT_SEQUENCE_NAME
        assert saved.duration == 2000
        assert editor.target_id == saved.id
        assert editor.state == DraftState.SAVED

    def test_saving_again_updates_in_place(self, editor, library, saved):
        editor.add_point(300, 100)
        updated = editor.save()
        assert updated.id == saved.id
        assert updated.point_count == 3
        assert updated.duration == 3000
        assert len(library) == 1

    def test_saving_unchanged_draft_twice_is_stable(self, editor, library, store, saved):
        library_after_first = library.library
        blob_after_first = store.get("drone-sequences")

        again = editor.save()

        assert again == saved
        assert library.library == library_after_first
        assert store.get("drone-sequences") == blob_after_first
        assert library.library.ids == [saved.id]
        assert editor.state == DraftState.SAVED

    def test_new_sequence_saves_separately(self, editor, library, saved):
        editor.new_sequence()
        assert editor.target_id is None
        editor.add_point(50, 50)
        second = editor.save()
        assert second.id != saved.id
        assert len(library) == 2
        assert library.active_id == second.id

    def test_ids_unique_across_quick_saves(self, editor, library):
        for _ in range(5):
            editor.new_sequence()
            editor.add_point(0, 0)
            editor.save()
        assert len(set(library.library.ids)) == 5


@pytest.mark.unit
class TestPreview:
    """Test generated previews."""

    def test_preview_pattern(self, editor):
        sequence = editor.preview_pattern("circle")
        assert editor.is_previewing
        assert editor.state == DraftState.DRAFTING
        assert editor.target_id is None
        assert editor.draft.name == sequence.name
        assert len(editor.draft.points) == 12

    def test_saving_preview_replaces_active_in_place(self, editor, library, saved):
        preview = editor.preview_pattern("spiral")
        assert editor.target_id == saved.id

        updated = editor.save()

        assert updated.id == saved.id
        assert updated.name == preview.name
        assert updated.points == preview.points
        assert updated.duration == preview.duration
        assert library.library.ids == [saved.id]
        assert library.active_id == saved.id
        assert not editor.is_previewing
        assert editor.state == DraftState.SAVED

    def test_saving_preview_without_active_appends(self, editor, library):
        preview = editor.preview_pattern("spiral")
        created = editor.save()
        assert created.id == preview.id
        assert library.library.ids == [preview.id]
        assert library.active_id == preview.id

    def test_formation_keeps_generated_duration(self, editor):
        editor.preview_pattern("formation")
        assert editor.save().duration == 12000

    def test_click_discards_preview(self, editor):
        editor.preview_pattern("circle")
        editor.add_point(10, 10)
        assert not editor.is_previewing
        assert len(editor.draft.points) == 1
        assert editor.draft.name == DEFAULT_SEQUENCE_NAME
        assert editor.draft.points[0].timestamp == 0

    def test_click_on_preview_keeps_target(self, editor, library, saved):
        editor.preview_pattern("circle")
        editor.add_point(10, 10)
        assert editor.target_id == saved.id

        updated = editor.save()

        assert updated.id == saved.id
        assert updated.point_count == 1
        assert library.library.ids == [saved.id]

    def test_preview_id_collision_gets_fresh_id(self, editor, library):
        preview = editor.preview_pattern("circle")
        library.add(FlightSequence(id=preview.id))
        created = editor.save()
        assert created.id != preview.id


@pytest.mark.unit
class TestDraftTransitions:
    """Test clear/new/rename/select/delete."""

    def test_clear_keeps_name_and_target(self, editor, saved):
        editor.rename("Keep me")
        editor.clear()
        assert editor.draft.is_empty
        assert editor.draft.name == "Keep me"
        assert editor.target_id == saved.id

    def test_new_sequence_resets_name(self, editor, saved):
        editor.rename("Old")
        editor.new_sequence()
        assert editor.draft.name == DEFAULT_SEQUENCE_NAME
        assert editor.draft.is_empty

    def test_rename_marks_dirty(self, editor, saved):
        editor.rename("Different")
        assert editor.state == DraftState.DRAFTING
        assert editor.save().name == "Different"

    def test_rename_to_same_name_stays_saved(self, editor, saved):
        editor.rename(saved.name)
        assert editor.state == DraftState.SAVED

    def test_select_sequence(self, editor, library, saved):
        editor.new_sequence()
        editor.add_point(1, 1)
        other = editor.save()

        editor.select_sequence(saved.id)
        assert library.active_id == saved.id
        assert editor.target_id == saved.id
        assert list(editor.draft.points) == saved.points
        assert editor.state == DraftState.SAVED
        assert other.id in library.library.ids

    def test_select_persists_only_active_pointer(self, editor, library, store, saved):
        """A later process (e.g. the next CLI command) sees the selection."""
        editor.new_sequence()
        editor.add_point(1, 1)
        other = editor.save()
        sequences_before = library.sequences

        editor.select_sequence(saved.id)

        stored = json.loads(store.get("drone-sequences"))
        assert stored["active_id"] == saved.id
        assert library.sequences == sequences_before
        assert [s["id"] for s in stored["sequences"]] == [saved.id, other.id]

    def test_select_unknown(self, editor):
        with pytest.raises(SequenceNotFoundError):
            editor.select_sequence("nope")

    def test_load_active(self, editor, saved):
        editor.clear()
        editor.load_active()
        assert editor.draft.duration == saved.duration
        assert len(editor.draft.points) == 2

    def test_load_active_on_empty_library(self, editor):
        editor.load_active()
        assert editor.state == DraftState.EMPTY
        assert editor.target_id is None

    def test_delete_target_follows_new_active(self, editor, library, saved):
        editor.new_sequence()
        editor.add_point(1, 1)
        second = editor.save()

        editor.delete_sequence(second.id)
        assert library.active_id == saved.id
        assert editor.target_id == saved.id
        assert len(editor.draft.points) == 2

    def test_delete_last_clears_draft(self, editor, library, saved):
        editor.delete_sequence(saved.id)
        assert len(library) == 0
        assert editor.state == DraftState.EMPTY
        assert editor.target_id is None

    def test_delete_other_keeps_draft(self, editor, library, saved):
        library.add(FlightSequence(id="other"), make_active=False)
        editor.add_point(5, 5)
        editor.delete_sequence("other")
        assert len(editor.draft.points) == 3
        assert editor.state == DraftState.DRAFTING

    def test_delete_unknown(self, editor):
        with pytest.raises(SequenceNotFoundError):
            editor.delete_sequence("nope")


@pytest.mark.unit
class TestEditEvents:
    """Test observer notifications."""

    def test_event_sequence(self, editor):
        observer = Mock()
        editor.register_observer(observer)

        editor.add_point(0, 0)
        editor.rename("Named")
        editor.save()
        editor.preview_pattern("circle")
        editor.add_point(1, 1)
        editor.clear()

        events = [c.args[0] for c in observer.on_edit_event.call_args_list]
        assert events == [
            EditEvent.POINT_ADDED,
            EditEvent.DRAFT_RENAMED,
            EditEvent.SEQUENCE_CREATED,
            EditEvent.PREVIEW_LOADED,
            EditEvent.PREVIEW_CLEARED,
            EditEvent.POINT_ADDED,
            EditEvent.DRAFT_CLEARED,
        ]

    def test_observer_receives_snapshot(self, editor):
        observer = Mock()
        editor.register_observer(observer)
        editor.add_point(0, 0)
        _, draft = observer.on_edit_event.call_args.args
        assert draft is editor.draft

    def test_failed_save_emits_nothing(self, editor):
        observer = Mock()
        editor.register_observer(observer)
        with pytest.raises(EmptyDraftError):
            editor.save()
        observer.on_edit_event.assert_not_called()
