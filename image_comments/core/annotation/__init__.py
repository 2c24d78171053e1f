"""
Core annotation module - UI-agnostic annotation logic.

This module provides the coordinate engine and session abstractions for
commenting on image regions that can be used with any UI framework
(Tkinter, Web, CLI, etc).
"""

from .coordinates import (
    CoordinateNormalizer,
    DegenerateFrame,
    FractionalPoint,
    Frame,
    PixelPoint,
    PixelRect,
)
from .engine import SelectionEngine
from .events import AnnotationEvent, EventType, EventEmitter
from .session import AnnotationSession
from .state import (
    Annotation,
    AnnotationList,
    BoxSelection,
    DirectionX,
    DirectionY,
    DragState,
    PointSelection,
    SelectionError,
    SelectionMode,
    UnknownModeError,
    selection_from_dict,
)

__all__ = [
    "AnnotationSession",
    "AnnotationEvent",
    "EventType",
    "EventEmitter",
    "CoordinateNormalizer",
    "DegenerateFrame",
    "FractionalPoint",
    "Frame",
    "PixelPoint",
    "PixelRect",
    "SelectionEngine",
    "Annotation",
    "AnnotationList",
    "BoxSelection",
    "DirectionX",
    "DirectionY",
    "DragState",
    "PointSelection",
    "SelectionError",
    "SelectionMode",
    "UnknownModeError",
    "selection_from_dict",
]
