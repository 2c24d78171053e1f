"""
Tests for SelectionEngine.

Pointer positions are given in a 100x100 frame, so (30, 70) is the
fractional point (0.3, 0.7).
"""

import pytest

from image_comments.core.annotation import (
    BoxSelection,
    DegenerateFrame,
    DirectionX,
    DirectionY,
    Frame,
    PointSelection,
    SelectionEngine,
    SelectionMode,
    UnknownModeError,
)


@pytest.fixture
def box_engine():
    return SelectionEngine(mode="box")


class TestPointMode:
    def test_pointer_down_emits_point(self, square_frame):
        engine = SelectionEngine(mode="point")
        selection = engine.on_pointer_down((50, 25), square_frame)

        assert selection == PointSelection(x=0.5, y=0.25)
        assert selection.type == "point"
        assert engine.drag is None

    def test_move_and_up_are_noops(self, square_frame):
        engine = SelectionEngine(mode="point")
        engine.on_pointer_down((50, 25), square_frame)

        assert engine.on_pointer_move((60, 60), square_frame) is None
        assert engine.on_pointer_up((60, 60), square_frame) is None


class TestBoxMode:
    def test_pointer_down_starts_drag(self, box_engine, square_frame):
        assert box_engine.on_pointer_down((50, 50), square_frame) is None

        drag = box_engine.drag
        assert drag.anchor.x == 0.5 and drag.anchor.y == 0.5
        assert drag.direction_x is DirectionX.RIGHT
        assert drag.direction_y is DirectionY.DOWN
        assert drag.width == 0 and drag.height == 0
        assert box_engine.is_dragging

    def test_move_returns_preview(self, box_engine, square_frame):
        box_engine.on_pointer_down((50, 50), square_frame)
        preview = box_engine.on_pointer_move((30, 80), square_frame)

        assert preview is box_engine.drag
        assert preview.direction_x is DirectionX.LEFT
        assert preview.direction_y is DirectionY.DOWN
        assert preview.width == pytest.approx(0.2)
        assert preview.height == pytest.approx(0.3)

    def test_move_without_drag_is_noop(self, box_engine, square_frame):
        assert box_engine.on_pointer_move((10, 10), square_frame) is None
        assert box_engine.drag is None

    def test_drag_down_right(self, box_engine, square_frame):
        box_engine.on_pointer_down((20, 10), square_frame)
        box_engine.on_pointer_move((60, 50), square_frame)
        selection = box_engine.on_pointer_up((60, 50), square_frame)

        assert selection.x == pytest.approx(0.2)
        assert selection.y == pytest.approx(0.1)
        assert selection.width == pytest.approx(0.4)
        assert selection.height == pytest.approx(0.4)
        assert box_engine.drag is None

    def test_drag_up_left_is_canonicalized(self, box_engine, square_frame):
        box_engine.on_pointer_down((80, 90), square_frame)
        box_engine.on_pointer_move((30, 40), square_frame)
        selection = box_engine.on_pointer_up((30, 40), square_frame)

        assert selection.x == pytest.approx(0.3)
        assert selection.y == pytest.approx(0.4)
        assert selection.width == pytest.approx(0.5)
        assert selection.height == pytest.approx(0.5)

    def test_direction_follows_latest_move(self, box_engine, square_frame):
        box_engine.on_pointer_down((50, 50), square_frame)
        box_engine.on_pointer_move((30, 30), square_frame)
        assert box_engine.drag.direction_y is DirectionY.UP

        box_engine.on_pointer_move((30, 70), square_frame)
        selection = box_engine.on_pointer_up((30, 70), square_frame)

        assert isinstance(selection, BoxSelection)
        assert selection.x == pytest.approx(0.3)
        assert selection.y == pytest.approx(0.5)
        assert selection.width == pytest.approx(0.2)
        assert selection.height == pytest.approx(0.2)

    def test_click_without_move_gives_zero_size_box(self, box_engine, square_frame):
        box_engine.on_pointer_down((40, 60), square_frame)
        selection = box_engine.on_pointer_up((40, 60), square_frame)

        assert selection == BoxSelection(x=0.4, y=0.6, width=0, height=0)
        assert selection.is_degenerate

    def test_drag_outside_frame_is_kept(self, box_engine, square_frame):
        box_engine.on_pointer_down((90, 90), square_frame)
        box_engine.on_pointer_move((120, 110), square_frame)
        selection = box_engine.on_pointer_up((120, 110), square_frame)

        assert selection.x + selection.width == pytest.approx(1.2)
        assert selection.y + selection.height == pytest.approx(1.1)

    def test_up_without_drag_returns_none(self, box_engine, square_frame):
        assert box_engine.on_pointer_up((10, 10), square_frame) is None

    def test_frame_resize_mid_drag(self, box_engine):
        box_engine.on_pointer_down((50, 50), Frame(100, 100))
        box_engine.on_pointer_move((100, 100), Frame(200, 200))
        selection = box_engine.on_pointer_up((100, 100), Frame(200, 200))

        assert selection == BoxSelection(x=0.5, y=0.5, width=0, height=0)


class TestModeChanges:
    def test_mode_switch_abandons_drag(self, box_engine, square_frame):
        box_engine.on_pointer_down((10, 10), square_frame)
        box_engine.on_pointer_move((40, 40), square_frame)

        assert box_engine.set_mode("point")
        assert box_engine.drag is None
        assert box_engine.on_pointer_up((40, 40), square_frame) is None

    def test_same_mode_keeps_drag(self, box_engine, square_frame):
        box_engine.on_pointer_down((10, 10), square_frame)

        assert not box_engine.set_mode(SelectionMode.BOX)
        assert box_engine.drag is not None

    def test_cancel(self, box_engine, square_frame):
        assert not box_engine.cancel()
        box_engine.on_pointer_down((10, 10), square_frame)
        assert box_engine.cancel()
        assert box_engine.on_pointer_up((10, 10), square_frame) is None

    def test_mode_parsing(self):
        engine = SelectionEngine()
        assert engine.mode is SelectionMode.POINT
        engine.set_mode("BOX")
        assert engine.mode is SelectionMode.BOX

        with pytest.raises(UnknownModeError):
            engine.set_mode("lasso")
        assert engine.mode is SelectionMode.BOX


class TestDegenerateFrames:
    def test_pointer_down_leaves_state_untouched(self, box_engine):
        with pytest.raises(DegenerateFrame):
            box_engine.on_pointer_down((10, 10), Frame(0, 0))
        assert box_engine.drag is None

    def test_pointer_move_keeps_previous_preview(self, box_engine, square_frame):
        box_engine.on_pointer_down((10, 10), square_frame)
        box_engine.on_pointer_move((30, 30), square_frame)

        with pytest.raises(DegenerateFrame):
            box_engine.on_pointer_move((50, 50), Frame(0, 100))
        assert box_engine.drag.width == pytest.approx(0.2)
