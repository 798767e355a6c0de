"""Stride downsampling of chart series."""

import math
from typing import Sequence, TypeVar

T = TypeVar("T")


def downsample(points: Sequence[T], max_points: int = 365) -> list[T]:
    """
    Thin a series for presentation.

    Keeps every ``step``-th point where ``step = ceil(len / max_points)``,
    always including the first and last point. Series at or under
    ``max_points`` are returned unchanged.

    Args:
        points: Full series
        max_points: Length above which the series is thinned

    Returns:
        New list with the kept points in original order
    """
    count = len(points)
    if count <= max_points:
        return list(points)

    step = math.ceil(count / max_points)
    return [
        point for index, point in enumerate(points)
        if index == 0 or index == count - 1 or index % step == 0
    ]
