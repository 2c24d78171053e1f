"""
GUI adapter for annotation session.

Bridges the AnnotationSession with GUI toolkit callbacks.
"""

import logging
from typing import Callable, Optional, Tuple

import cv2
import numpy as np

from ..core.annotation import (
    AnnotationEvent,
    AnnotationSession,
    BoxSelection,
    DegenerateFrame,
    EventType,
    Frame,
)
from ..core.annotation.utils import find_annotation_at, project_boxes

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


class GUIAnnotationAdapter:
    """
    Adapter connecting AnnotationSession to a GUI toolkit.

    Provides a compatibility layer that:
    - Takes raw pointer pixel coordinates and measures the frame through
      a frame provider callable
    - Resolves pending selections through an optional prompt callable
    - Translates events to GUI callbacks
    - Handles visualization rendering
    """

    def __init__(
        self,
        session: AnnotationSession,
        frame_provider: Callable[[], Frame],
        prompt_callback: Optional[Callable[[dict], Optional[str]]] = None,
        update_image_callback: Optional[Callable] = None,
        point_radius: int = 5,
        box_thickness: int = 1,
        point_color: Color = (255, 0, 0),
        box_color: Color = (0, 0, 255),
        preview_color: Color = (255, 0, 0),
        label_scale: float = 0.4,
    ):
        """
        Initialize adapter.

        Args:
            session: Core annotation session
            frame_provider: Returns the current rendered Frame of the image
            prompt_callback: Asked for a comment when a selection is pending;
                receives the selection dict and returns the comment or None
            update_image_callback: Callback to update GUI image
            point_radius: Radius for drawing point annotations
            box_thickness: Line thickness for box annotations
        """
        self.session = session
        self.frame_provider = frame_provider
        self.prompt_callback = prompt_callback
        self.update_image_callback = update_image_callback
        self.point_radius = point_radius
        self.box_thickness = box_thickness
        self.point_color = point_color
        self.box_color = box_color
        self.preview_color = preview_color
        self.label_scale = label_scale

        # Subscribe to session events
        self._setup_event_handlers()

    @classmethod
    def from_config(cls, session: AnnotationSession, cfg, frame_provider, **kwargs):
        """Create an adapter using the `render` section of a config."""
        return cls(
            session,
            frame_provider,
            point_radius=int(cfg.render.point_radius),
            box_thickness=int(cfg.render.box_thickness),
            point_color=tuple(cfg.render.point_color),
            box_color=tuple(cfg.render.box_color),
            preview_color=tuple(cfg.render.preview_color),
            label_scale=float(cfg.render.label_scale),
            **kwargs,
        )

    def _setup_event_handlers(self):
        """Setup event handlers for session events."""
        for event_type in (
            EventType.DRAG_UPDATED,
            EventType.DRAG_CANCELLED,
            EventType.ANNOTATION_ADDED,
            EventType.ANNOTATION_REMOVED,
            EventType.ANNOTATIONS_LOADED,
            EventType.FRAME_CHANGED,
        ):
            self.session.events.on(event_type, self._on_redraw_needed)

    def _on_redraw_needed(self, event: AnnotationEvent):
        if self.update_image_callback:
            self.update_image_callback()

    def _prompt_for_comment(self, selection):
        """
        Resolve a freshly pending selection through the prompt, if any.

        Runs after the session call has returned, so every SELECTION_PENDING
        listener has already seen the selection as pending. Errors from the
        prompt propagate to the GUI handler and leave the selection pending.
        """
        if selection is None or self.prompt_callback is None:
            return selection
        comment = self.prompt_callback(selection.to_dict())
        self.session.commit(comment)
        return selection

    # Pointer handlers for GUI bindings

    def mouse_down(self, x: float, y: float):
        return self._prompt_for_comment(
            self.session.pointer_down((x, y), self.frame_provider())
        )

    def mouse_move(self, x: float, y: float):
        return self.session.pointer_move((x, y), self.frame_provider())

    def mouse_up(self, x: float, y: float):
        return self._prompt_for_comment(
            self.session.pointer_up((x, y), self.frame_provider())
        )

    def window_resized(self):
        return self.session.resize(self.frame_provider())

    def set_mode(self, mode):
        self.session.set_mode(mode)

    def remove_comment(self, annotation_id: int):
        return self.session.remove(annotation_id)

    def remove_at(self, x: float, y: float) -> Optional[int]:
        """
        Remove the annotation drawn under a pointer position.

        Points are hit within their marker radius, boxes anywhere inside.

        Returns:
            Id of the removed annotation, or None if nothing was hit
        """
        frame = self.frame_provider()
        try:
            point = self.session.normalizer.to_fractional((x, y), frame)
        except DegenerateFrame as e:
            logger.warning(f"Skipping removal: {e}")
            return None

        radius = self.point_radius / min(frame.width, frame.height)
        annotation = find_annotation_at(self.session.annotations, point, radius=radius)
        if annotation is None:
            return None
        self.session.remove(annotation.id)
        return annotation.id

    def get_visualization(self, image: np.ndarray) -> Optional[np.ndarray]:
        """
        Draw annotations and the active drag preview on an image.

        The image's own size is used as the frame, so stored annotations
        land on the same region whatever resolution is passed in.

        Args:
            image: RGB image

        Returns:
            RGB visualization image
        """
        if image is None:
            return None

        height, width = image.shape[:2]
        frame = Frame(width=width, height=height)
        vis = image.copy()

        annotations = list(self.session.annotations)
        rects = project_boxes(annotations, frame)
        # (x0, y0, x1, y1) rows; the far corner is rounded, not the extent
        corners = np.rint(np.hstack([rects[:, :2], rects[:, :2] + rects[:, 2:]])).astype(int)
        for annotation, (x0, y0, x1, y1) in zip(annotations, corners.tolist()):
            top_left = (x0, y0)
            if isinstance(annotation.selection, BoxSelection):
                cv2.rectangle(vis, top_left, (x1, y1), self.box_color, self.box_thickness)
            else:
                cv2.circle(vis, top_left, self.point_radius, self.point_color, -1)
            self._draw_label(vis, f"ID {annotation.id}", top_left)

        drag = self.session.drag
        if drag is not None:
            rect = self.session.normalizer.project(drag.preview_rect(), frame)
            self._draw_dashed_rect(vis, rect, self.preview_color)

        return vis

    def _draw_label(self, image: np.ndarray, text: str, origin: Tuple[int, int]):
        """Draw a label on a light backing box just below the anchor."""
        (text_w, text_h), baseline = cv2.getTextSize(
            text, cv2.FONT_HERSHEY_SIMPLEX, self.label_scale, 1
        )
        x, y = origin
        y = y + text_h + 2
        cv2.rectangle(
            image,
            (x, y - text_h - 2),
            (x + text_w + 2, y + baseline),
            (255, 255, 255),
            -1,
        )
        cv2.putText(
            image,
            text,
            (x + 1, y),
            cv2.FONT_HERSHEY_SIMPLEX,
            self.label_scale,
            (0, 0, 0),
            1,
            cv2.LINE_AA,
        )

    def _draw_dashed_rect(self, image: np.ndarray, rect, color: Color, dash: int = 6):
        x0, y0 = int(round(rect.x)), int(round(rect.y))
        x1, y1 = int(round(rect.x + rect.width)), int(round(rect.y + rect.height))
        edges = [
            ((x0, y0), (x1, y0)),
            ((x1, y0), (x1, y1)),
            ((x1, y1), (x0, y1)),
            ((x0, y1), (x0, y0)),
        ]
        for start, end in edges:
            length = int(np.hypot(end[0] - start[0], end[1] - start[1]))
            for offset in range(0, max(length, 1), dash * 2):
                t0 = offset / max(length, 1)
                t1 = min(offset + dash, length) / max(length, 1)
                p0 = (
                    int(start[0] + (end[0] - start[0]) * t0),
                    int(start[1] + (end[1] - start[1]) * t0),
                )
                p1 = (
                    int(start[0] + (end[0] - start[0]) * t1),
                    int(start[1] + (end[1] - start[1]) * t1),
                )
                cv2.line(image, p0, p1, color, 1)

    @property
    def comments(self):
        """Get the annotation list (property for compatibility)."""
        return self.session.annotations
