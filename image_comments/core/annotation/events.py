"""
Events published by an AnnotationSession.

Every change to the mode, the drag, the pending selection, the comment list
or the frame is announced here, so a renderer can redraw without polling
the session.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class EventType(Enum):
    """What changed in the session."""

    # Mode events
    MODE_CHANGED = "mode_changed"

    # Drag events
    DRAG_STARTED = "drag_started"
    DRAG_UPDATED = "drag_updated"
    DRAG_CANCELLED = "drag_cancelled"

    # Selection events
    SELECTION_PENDING = "selection_pending"
    SELECTION_DISCARDED = "selection_discarded"

    # Annotation list events
    ANNOTATION_ADDED = "annotation_added"
    ANNOTATION_REMOVED = "annotation_removed"
    ANNOTATIONS_LOADED = "annotations_loaded"

    # Layout events
    FRAME_CHANGED = "frame_changed"


@dataclass
class AnnotationEvent:
    """An EventType with its payload; `data` is always a dict."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Dispatches AnnotationEvents to callbacks registered per EventType.

    Callbacks run synchronously in registration order. One that raises is
    logged and skipped; the remaining callbacks still run.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def on(self, event_type: EventType, callback: Callable[[AnnotationEvent], None]):
        """Register `callback` for `event_type`."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def off(self, event_type: EventType, callback: Callable[[AnnotationEvent], None]):
        """Drop a callback registered with on(); unknown types are ignored."""
        if event_type in self._listeners:
            self._listeners[event_type].remove(callback)

    def emit(self, event: AnnotationEvent):
        """Call every callback registered for the event's type."""
        for callback in list(self._listeners.get(event.event_type, [])):
            try:
                callback(event)
            except Exception:
                logger.exception(f"Error in {event.event_type.value} listener")

    def clear(self):
        """Forget every registered callback."""
        self._listeners.clear()
