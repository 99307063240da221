import math
from typing import NamedTuple

from chartfeed.core.domain.entities.trendline_entity import TrendPoint


class Point(NamedTuple):
    x: float
    y: float


def distance_to_line(point: Point, start: Point, end: Point) -> float:
    """
    Euclidean distance from `point` to the closest point of segment start-end.

    The projection parameter is clamped to [0, 1], so beyond the endpoints this
    is the distance to the nearest endpoint. Used for hover/drag hit-testing.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(point.x - start.x, point.y - start.y)

    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(point.x - (start.x + t * dx), point.y - (start.y + t * dy))


def calculate_slope(start: TrendPoint, end: TrendPoint) -> float:
    """Price change per second between two trendline anchors (0.0 for equal times)."""
    time_diff = end.time - start.time
    if time_diff == 0:
        return 0.0
    return (end.price - start.price) / time_diff
