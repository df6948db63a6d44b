"""
Active user's in-progress trace
"""
from typing import List, Optional

from turfwars.models import Coordinate


class PathTracker:
    """
    Append-only coordinate sequence for the path being drawn.

    Elements are only ever removed by reset(). Not thread-safe on its own;
    the session controller serialises access.
    """

    def __init__(self, seed: Optional[Coordinate] = None) -> None:
        self._points: List[Coordinate] = []
        self.reset(seed)

    def append(self, coord: Coordinate) -> None:
        self._points.append(coord)

    def reset(self, seed: Optional[Coordinate] = None) -> None:
        """Replace the path with [] or [seed]"""
        self._points = [seed] if seed is not None else []

    def points(self) -> List[Coordinate]:
        """Copy of the current path"""
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)
