"""
Location enums and split results shared by the 1-D and 2-D geometry.

Conventions:
- RegionLocation classifies a point against a region (interval, arc).
- HyperplaneLocation classifies a point against a cut (cut angle, great circle).
  A great circle's pole points toward its MINUS side.
- SplitLocation summarizes where a split object ended up.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class RegionLocation(Enum):
    INSIDE = "inside"
    BOUNDARY = "boundary"
    OUTSIDE = "outside"


class HyperplaneLocation(Enum):
    MINUS = "minus"
    ON = "on"
    PLUS = "plus"


class SplitLocation(Enum):
    MINUS = "minus"
    PLUS = "plus"
    BOTH = "both"
    NEITHER = "neither"


@dataclass(frozen=True)
class Split(Generic[T]):
    """
    Result of splitting an object with a cut.

    Exactly one location holds:
        BOTH: both parts present
        MINUS / PLUS: only that part present (the unsplit original object)
        NEITHER: no parts (the cut coincides with the object's support)
    """
    minus: Optional[T] = None
    plus: Optional[T] = None

    @property
    def location(self) -> SplitLocation:
        if self.minus is not None:
            return SplitLocation.BOTH if self.plus is not None else SplitLocation.MINUS
        if self.plus is not None:
            return SplitLocation.PLUS
        return SplitLocation.NEITHER
