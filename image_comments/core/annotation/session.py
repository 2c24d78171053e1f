"""
Annotation session management.

Core logic for managing an interactive commenting session.
UI-agnostic - can be used with any interface (GUI, Web, CLI).
"""

import json
import logging
from typing import List, Optional, Tuple

from ...utils.misc import incrf
from .coordinates import CoordinateNormalizer, DegenerateFrame, Frame, PixelRect
from .engine import SelectionEngine
from .events import AnnotationEvent, EventEmitter, EventType
from .state import (
    Annotation,
    AnnotationList,
    DragState,
    Selection,
    SelectionError,
    SelectionMode,
)
from .utils import is_degenerate_box, selection_in_bounds

logger = logging.getLogger(__name__)


class AnnotationSession:
    """
    Manages the state and logic of an annotation session.

    This class handles:
    - Pointer events, forwarded to the SelectionEngine
    - The pending selection awaiting a comment
    - The annotation list and id assignment
    - Re-projection of stored annotations when the frame changes
    - Event emission for UI updates

    Collecting the comment is left to the caller: a finalized selection
    becomes pending and a SELECTION_PENDING event is emitted; the caller
    later resolves it with commit() or discard().

    A degenerate frame (zero size, typically before the image has loaded)
    never raises out of the session: the event is logged and skipped, and
    the caller retries on the next valid measurement.
    """

    def __init__(
        self,
        mode="point",
        clamp_coordinates: bool = False,
        discard_degenerate_boxes: bool = False,
        annotations: Optional[AnnotationList] = None,
    ):
        """
        Initialize annotation session.

        Args:
            mode: Initial annotation mode, "point" or "box"
            clamp_coordinates: Confine captured points to [0, 1]
            discard_degenerate_boxes: Drop zero-size boxes instead of
                asking for a comment
            annotations: Existing annotations to start from
        """
        self.normalizer = CoordinateNormalizer(clamp=clamp_coordinates)
        self.engine = SelectionEngine(mode=mode, normalizer=self.normalizer)
        self.discard_degenerate_boxes = discard_degenerate_boxes

        self.annotations = annotations if annotations is not None else AnnotationList()
        self._ids = incrf(self.annotations.max_id() + 1)

        # Last valid frame seen through resize()
        self.frame: Optional[Frame] = None

        # Selection awaiting a comment
        self.pending: Optional[Selection] = None

        # Event emitter for UI notifications
        self.events = EventEmitter()

    @classmethod
    def from_config(cls, cfg):
        """Create a session from the `annotation` section of a config."""
        return cls(
            mode=cfg.annotation.default_mode,
            clamp_coordinates=cfg.annotation.clamp_coordinates,
            discard_degenerate_boxes=cfg.annotation.discard_degenerate_boxes,
        )

    @property
    def mode(self) -> SelectionMode:
        return self.engine.mode

    @property
    def drag(self) -> Optional[DragState]:
        return self.engine.drag

    def set_mode(self, mode):
        """Switch between point and box mode, abandoning any active drag."""
        previous = self.engine.mode
        abandoned = self.engine.set_mode(mode)
        if abandoned:
            self.events.emit(AnnotationEvent(EventType.DRAG_CANCELLED))
        if self.engine.mode is not previous:
            self.events.emit(
                AnnotationEvent(
                    EventType.MODE_CHANGED,
                    {"previous": previous.value, "mode": self.engine.mode.value},
                )
            )

    def cancel_drag(self) -> bool:
        """Abandon the active drag without creating a selection."""
        abandoned = self.engine.cancel()
        if abandoned:
            self.events.emit(AnnotationEvent(EventType.DRAG_CANCELLED))
        return abandoned

    def pointer_down(self, pixel_point, frame: Frame) -> Optional[Selection]:
        """
        Handle a pointer press.

        Returns:
            The pending PointSelection in point mode, otherwise None
        """
        try:
            selection = self.engine.on_pointer_down(pixel_point, frame)
        except DegenerateFrame as e:
            logger.warning(f"Skipping pointer down: {e}")
            return None

        if selection is None:
            self.events.emit(
                AnnotationEvent(EventType.DRAG_STARTED, self.engine.drag.to_dict())
            )
            return None

        self._set_pending(selection)
        return selection

    def pointer_move(self, pixel_point, frame: Frame) -> Optional[DragState]:
        """
        Handle pointer movement.

        Returns:
            Live drag state for the preview, or None when not dragging
        """
        try:
            drag = self.engine.on_pointer_move(pixel_point, frame)
        except DegenerateFrame as e:
            logger.warning(f"Skipping pointer move: {e}")
            return None

        if drag is not None:
            self.events.emit(AnnotationEvent(EventType.DRAG_UPDATED, drag.to_dict()))
        return drag

    def pointer_up(self, pixel_point, frame: Frame) -> Optional[Selection]:
        """
        Handle a pointer release, finalizing an active drag.

        Returns:
            The pending BoxSelection, or None
        """
        selection = self.engine.on_pointer_up(pixel_point, frame)
        if selection is None:
            return None

        if self.discard_degenerate_boxes and is_degenerate_box(selection):
            logger.debug(f"Discarding zero-size box {selection}")
            self.events.emit(
                AnnotationEvent(
                    EventType.SELECTION_DISCARDED, {"selection": selection.to_dict()}
                )
            )
            return None

        self._set_pending(selection)
        return selection

    def commit(self, comment: Optional[str]) -> Optional[Annotation]:
        """
        Resolve the pending selection with a comment.

        An empty or missing comment discards the selection.

        Returns:
            The new Annotation, or None if discarded

        Raises:
            SelectionError: If no selection is pending, or the comment is
                not a string (the selection stays pending)
        """
        if self.pending is None:
            raise SelectionError("No selection is waiting for a comment")

        if not comment:
            self.discard()
            return None
        if not isinstance(comment, str):
            raise SelectionError(f"Comment must be a string, got {type(comment).__name__}")

        selection, self.pending = self.pending, None
        if not selection_in_bounds(selection):
            logger.debug(f"Keeping selection that extends past the image: {selection}")
        annotation = Annotation(id=next(self._ids), selection=selection, comment=comment)
        self.annotations.append(annotation)

        self.events.emit(
            AnnotationEvent(EventType.ANNOTATION_ADDED, {"annotation": annotation.to_dict()})
        )
        return annotation

    def discard(self) -> bool:
        """Drop the pending selection. Returns False if none was pending."""
        if self.pending is None:
            return False
        selection, self.pending = self.pending, None
        self.events.emit(
            AnnotationEvent(EventType.SELECTION_DISCARDED, {"selection": selection.to_dict()})
        )
        return True

    def remove(self, annotation_id: int) -> bool:
        """Remove an annotation by id; no-op if absent."""
        removed = self.annotations.remove(annotation_id)
        if removed:
            self.events.emit(AnnotationEvent(EventType.ANNOTATION_REMOVED, {"id": annotation_id}))
        return removed

    def resize(self, frame: Frame) -> Optional[List[Tuple[Annotation, PixelRect]]]:
        """
        Record a new frame size and re-project every annotation for it.

        Stored fractional values are left untouched.

        Returns:
            (annotation, pixel rectangle) pairs, or None if the frame was skipped
        """
        try:
            projections = self.projected_annotations(frame)
        except DegenerateFrame as e:
            logger.warning(f"Skipping resize: {e}")
            return None

        self.frame = frame
        self.events.emit(
            AnnotationEvent(
                EventType.FRAME_CHANGED,
                {
                    "width": frame.width,
                    "height": frame.height,
                    "rects": {a.id: rect.to_dict() for a, rect in projections},
                },
            )
        )
        return projections

    def projected_annotations(
        self, frame: Optional[Frame] = None
    ) -> List[Tuple[Annotation, PixelRect]]:
        """
        Get pixel rectangles of all annotations for a frame.

        Args:
            frame: Frame to project into; defaults to the last resize() frame

        Raises:
            DegenerateFrame: If the frame has a non-positive dimension
            ValueError: If no frame is given and none was recorded
        """
        if frame is None:
            frame = self.frame
        if frame is None:
            raise ValueError("No frame has been measured yet")
        frame.validate()
        return [(a, self.normalizer.project(a.selection, frame)) for a in self.annotations]

    def log_comments(self) -> str:
        """Dump the comment list as indented JSON."""
        dumped = json.dumps(self.annotations.to_dict(), indent=2)
        logger.info(dumped)
        return dumped

    def load_comments(self, data: list):
        """
        Replace the annotation list with decoded comments.

        New ids continue after the largest loaded id.
        """
        self.annotations = AnnotationList.from_dict(data)
        self._ids = incrf(self.annotations.max_id() + 1)
        self.events.emit(
            AnnotationEvent(EventType.ANNOTATIONS_LOADED, {"num_annotations": len(self.annotations)})
        )

    def _set_pending(self, selection: Selection):
        if self.pending is not None:
            logger.debug(f"Replacing unresolved selection {self.pending}")
            self.discard()
        self.pending = selection
        self.events.emit(
            AnnotationEvent(EventType.SELECTION_PENDING, {"selection": selection.to_dict()})
        )
