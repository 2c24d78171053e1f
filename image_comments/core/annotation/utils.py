"""
Pure utility functions for annotation logic.

These functions have no side effects and can be tested in isolation.
"""

import numpy as np
from typing import Iterable, List, Optional

from .coordinates import Frame, FractionalPoint
from .state import Annotation, BoxSelection, PointSelection


def project_boxes(annotations: Iterable[Annotation], frame: Frame) -> np.ndarray:
    """
    Project the selections of many annotations into pixel space at once.

    Args:
        annotations: Annotations to project
        frame: Current frame of the reference image

    Returns:
        Float array (N, 4) of [x, y, width, height] rows; points have zero extent

    Raises:
        DegenerateFrame: If the frame has a non-positive dimension
    """
    frame.validate()
    rows = [
        (
            a.selection.x,
            a.selection.y,
            getattr(a.selection, "width", 0.0),
            getattr(a.selection, "height", 0.0),
        )
        for a in annotations
    ]
    fractional = np.array(rows, dtype=np.float64).reshape(-1, 4)
    scale = np.array([frame.width, frame.height, frame.width, frame.height])
    return fractional * scale


def is_degenerate_box(selection) -> bool:
    """True for a box with zero width or height."""
    return isinstance(selection, BoxSelection) and selection.is_degenerate


def selection_in_bounds(selection, tolerance: float = 1e-9) -> bool:
    """
    Check that a selection lies inside the image.

    Args:
        selection: Point or box selection
        tolerance: Allowed overshoot for floating point error

    Returns:
        True if every corner is within [0, 1] on both axes
    """
    lo, hi = -tolerance, 1.0 + tolerance
    if not (lo <= selection.x <= hi and lo <= selection.y <= hi):
        return False
    if isinstance(selection, BoxSelection):
        return selection.x + selection.width <= hi and selection.y + selection.height <= hi
    return True


def compute_annotation_statistics(annotations: List[Annotation]) -> dict:
    """
    Compute statistics about annotations.

    Args:
        annotations: List of Annotation objects

    Returns:
        Dictionary with statistics; box area is in fractional units
    """
    if not annotations:
        return {
            "num_total": 0,
            "num_points": 0,
            "num_boxes": 0,
            "mean_box_area": 0.0,
        }

    boxes = [a.selection for a in annotations if isinstance(a.selection, BoxSelection)]
    areas = np.array([b.width * b.height for b in boxes], dtype=np.float64)

    return {
        "num_total": len(annotations),
        "num_points": len(annotations) - len(boxes),
        "num_boxes": len(boxes),
        "mean_box_area": float(areas.mean()) if len(boxes) else 0.0,
    }


def find_annotation_at(
    annotations: Iterable[Annotation], point: FractionalPoint, radius: float = 0.01
) -> Optional[Annotation]:
    """
    Find the annotation under a fractional point.

    Boxes match by containment, points within `radius` (fractional units).
    The most recently added match wins, since it is drawn on top.
    """
    for annotation in reversed(list(annotations)):
        selection = annotation.selection
        if isinstance(selection, PointSelection):
            if np.hypot(point.x - selection.x, point.y - selection.y) <= radius:
                return annotation
        elif (
            selection.x <= point.x <= selection.x + selection.width
            and selection.y <= point.y <= selection.y + selection.height
        ):
            return annotation
    return None
