"""
Distance accumulation for a tracking session.
"""

from typing import Optional

from stridelog.shared.geo import GeoPoint, incremental_distance_km


class DistanceAccumulator:
    """
    Running total of great-circle distance.

    Each step is measured from the point the caller names as the
    predecessor; the accumulator never reorders or drops points.
    """

    def __init__(self):
        self.total_km = 0.0
        self.steps: list[float] = []

    def add(self, previous: Optional[GeoPoint], current: GeoPoint) -> float:
        """
        Add the step from `previous` to `current`.

        Returns:
            Step distance in kilometers (0.0 without a predecessor)
        """
        step = incremental_distance_km(previous, current)
        self.steps.append(step)
        self.total_km += step
        return step

    def reset(self) -> None:
        self.total_km = 0.0
        self.steps = []
