"""
Selection engine: turns pointer events into point and box selections.
"""

import logging
from typing import Optional, Union

from .coordinates import CoordinateNormalizer, Frame
from .state import (
    BoxSelection,
    DragState,
    PointSelection,
    SelectionMode,
)

logger = logging.getLogger(__name__)


class SelectionEngine:
    """
    State machine driving point clicks and box drags.

    Idle --down (box)--> Dragging --move--> Dragging --up--> Idle (box)
    Idle --down (point)--> Idle (point)
    Dragging --mode change--> Idle (nothing emitted)

    All coordinate math goes through the CoordinateNormalizer, so a
    DegenerateFrame raised by it propagates unchanged and leaves the
    engine state as it was.
    """

    def __init__(
        self,
        mode: Union[SelectionMode, str] = SelectionMode.POINT,
        normalizer: Optional[CoordinateNormalizer] = None,
    ):
        self.mode = SelectionMode.parse(mode)
        self.normalizer = normalizer or CoordinateNormalizer()
        self.drag: Optional[DragState] = None

    @property
    def is_dragging(self) -> bool:
        return self.drag is not None

    def set_mode(self, mode: Union[SelectionMode, str]) -> bool:
        """
        Change the annotation mode.

        Returns:
            True if an active drag was abandoned by the change
        """
        mode = SelectionMode.parse(mode)
        if mode is self.mode:
            return False
        logger.debug(f"Mode changed from {self.mode.value} to {mode.value}")
        self.mode = mode
        return self.cancel()

    def cancel(self) -> bool:
        """Abandon the active drag, if any, without emitting a selection."""
        if self.drag is None:
            return False
        logger.debug("Drag abandoned")
        self.drag = None
        return True

    def on_pointer_down(self, pixel_point, frame: Frame) -> Optional[PointSelection]:
        """
        Handle a pointer press.

        Returns:
            PointSelection in point mode, None in box mode (a drag starts)
        """
        point = self.normalizer.to_fractional(pixel_point, frame)
        if self.mode is SelectionMode.POINT:
            return PointSelection(x=point.x, y=point.y)

        self.drag = DragState(anchor=point)
        logger.debug(f"Drag started at ({point.x:.4f}, {point.y:.4f})")
        return None

    def on_pointer_move(self, pixel_point, frame: Frame) -> Optional[DragState]:
        """
        Update the active drag from the latest pointer position.

        Returns:
            The live drag state for preview rendering, or None when idle
        """
        if self.mode is not SelectionMode.BOX or self.drag is None:
            return None
        current = self.normalizer.to_fractional(pixel_point, frame)
        self.drag.update(current)
        return self.drag

    def on_pointer_up(self, pixel_point, frame: Frame) -> Optional[BoxSelection]:
        """
        Finalize the active drag into a canonical top-left box.

        The release position is not used: the box is whatever the last move
        described, so a press and release without movement yields a
        zero-size box at the anchor.

        Returns:
            BoxSelection, or None if no drag was active
        """
        if self.drag is None:
            return None
        selection = self.drag.preview_rect()
        self.drag = None
        logger.debug(f"Drag finalized into {selection}")
        return selection
