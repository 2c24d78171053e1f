"""
State management for annotation sessions.

Contains data classes representing selections, the transient drag state and
the list of commented annotations.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Union

from .coordinates import FractionalPoint

logger = logging.getLogger(__name__)


class SelectionError(ValueError):
    """Raised when a selection cannot be decoded or resolved."""


class UnknownModeError(ValueError):
    """Raised for an annotation mode that is neither point nor box."""


class SelectionMode(Enum):
    POINT = "point"
    BOX = "box"

    @classmethod
    def parse(cls, value: Union["SelectionMode", str]) -> "SelectionMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnknownModeError(f"Unknown annotation mode: {value!r}") from None


class DirectionX(Enum):
    LEFT = "left"
    RIGHT = "right"


class DirectionY(Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class PointSelection:
    """A single marked point in fractional coordinates."""

    x: float
    y: float
    type: str = field(default="point", init=False)

    def to_dict(self):
        return {"type": self.type, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class BoxSelection:
    """A marked rectangle; (x, y) is its top-left corner."""

    x: float
    y: float
    width: float
    height: float
    type: str = field(default="box", init=False)

    @property
    def is_degenerate(self) -> bool:
        return self.width == 0 or self.height == 0

    def to_dict(self):
        return {
            "type": self.type,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


Selection = Union[PointSelection, BoxSelection]


def selection_from_dict(data: dict) -> Selection:
    """
    Create a selection from its dictionary form.

    Raises:
        SelectionError: If the type is unknown or a coordinate is missing
    """
    kind = data.get("type")
    try:
        if kind == "point":
            return PointSelection(x=float(data["x"]), y=float(data["y"]))
        if kind == "box":
            return BoxSelection(
                x=float(data["x"]),
                y=float(data["y"]),
                width=float(data["width"]),
                height=float(data["height"]),
            )
    except KeyError as e:
        raise SelectionError(f"Selection of type {kind!r} is missing {e}") from e
    raise SelectionError(f"Unknown selection type: {kind!r}")


@dataclass
class DragState:
    """In-progress box drag, anchored at the pointer-down position."""

    anchor: FractionalPoint
    direction_x: DirectionX = DirectionX.RIGHT
    direction_y: DirectionY = DirectionY.DOWN
    width: float = 0.0
    height: float = 0.0

    def update(self, current: FractionalPoint):
        """Recompute direction and extent from the latest pointer position."""
        self.direction_x = (
            DirectionX.LEFT if current.x < self.anchor.x else DirectionX.RIGHT
        )
        self.direction_y = DirectionY.UP if current.y < self.anchor.y else DirectionY.DOWN
        self.width = abs(current.x - self.anchor.x)
        self.height = abs(current.y - self.anchor.y)

    def preview_rect(self) -> BoxSelection:
        """Canonical top-left rectangle covered by the drag so far."""
        x = self.anchor.x - self.width if self.direction_x is DirectionX.LEFT else self.anchor.x
        y = self.anchor.y - self.height if self.direction_y is DirectionY.UP else self.anchor.y
        return BoxSelection(x=x, y=y, width=self.width, height=self.height)

    def to_dict(self):
        return {
            "anchor": {"x": self.anchor.x, "y": self.anchor.y},
            "direction_x": self.direction_x.value,
            "direction_y": self.direction_y.value,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class Annotation:
    """A finalized selection paired with a comment."""

    id: int
    selection: Selection
    comment: str

    def __post_init__(self):
        if not isinstance(self.comment, str) or not self.comment:
            raise SelectionError(
                f"Annotation {self.id} needs a non-empty comment, got {self.comment!r}"
            )

    def to_dict(self):
        return {
            "id": self.id,
            "selection": self.selection.to_dict(),
            "comment": self.comment,
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            id=int(data["id"]),
            selection=selection_from_dict(data["selection"]),
            comment=data["comment"],
        )


@dataclass
class AnnotationList:
    """
    Ordered list of annotations; insertion order is display order.

    No two entries ever share an id.
    """

    annotations: List[Annotation] = field(default_factory=list)

    def __post_init__(self):
        ids = [a.id for a in self.annotations]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate annotation ids in {ids}")

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self.annotations)

    def __reversed__(self) -> Iterator[Annotation]:
        return reversed(self.annotations)

    def __len__(self):
        return len(self.annotations)

    def ids(self) -> List[int]:
        return [a.id for a in self.annotations]

    def get(self, annotation_id: int) -> Optional[Annotation]:
        for annotation in self.annotations:
            if annotation.id == annotation_id:
                return annotation
        return None

    def append(self, annotation: Annotation):
        if self.get(annotation.id) is not None:
            raise ValueError(f"Annotation id {annotation.id} is already in use")
        self.annotations.append(annotation)

    def remove(self, annotation_id: int) -> bool:
        """Remove the entry with the given id. Returns False if absent."""
        before = len(self.annotations)
        self.annotations = [a for a in self.annotations if a.id != annotation_id]
        removed = len(self.annotations) != before
        if not removed:
            logger.debug(f"No annotation with id {annotation_id} to remove")
        return removed

    def max_id(self) -> int:
        return max(self.ids(), default=0)

    def to_dict(self):
        """Convert to the JSON-friendly list form."""
        return [a.to_dict() for a in self.annotations]

    @classmethod
    def from_dict(cls, data: list):
        return cls(annotations=[Annotation.from_dict(item) for item in data])
