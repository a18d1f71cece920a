"""Linear interpolation helpers and colour palettes for distance gradients."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Dict, Sequence, Tuple

if TYPE_CHECKING:
    from mazeweave.core.distances import Distances

RGB = Tuple[int, int, int]

NEUTRAL_COLOR: RGB = (255, 255, 255)


def _lerp_value(start, end, t: float):
    if isinstance(start, (int, float)):
        return (1.0 - t) * start + t * end
    return tuple((1.0 - t) * a + t * b for a, b in zip(start, end))


def lerp(start, end) -> Callable[[float], float]:
    """Return ``t -> start + t * (end - start)``; works on numbers and tuples."""

    return lambda t: _lerp_value(start, end, t)


def multi_lerp(points: Sequence) -> Callable[[float], float]:
    """Piecewise linear interpolation through evenly spaced ``points``."""

    if not points:
        raise ValueError("multi_lerp requires at least one point")
    stops = list(points)
    segments = len(stops) - 1

    def interpolate(t: float):
        if segments == 0:
            return stops[0]
        t = min(1.0, max(0.0, t))
        scaled = t * segments
        index = min(int(math.floor(scaled)), segments - 1)
        return _lerp_value(stops[index], stops[index + 1], scaled - index)

    return interpolate


def exp_in_out(t: float) -> float:
    if t < 0.5:
        return 2.0 ** (20.0 * t - 10.0) / 2.0
    return (2.0 - 2.0 ** (-20.0 * t + 10.0)) / 2.0


PALETTES: Dict[str, Tuple[RGB, ...]] = {
    "fire": ((51, 0, 0), (143, 0, 0), (205, 113, 0), (255, 255, 0)),
    "glacier": ((149, 197, 215), (65, 133, 165), (44, 184, 218)),
    "trans": ((91, 206, 250), (245, 169, 184), (255, 255, 255), (245, 169, 184), (91, 206, 250)),
}


def to_rgb(value) -> RGB:
    return tuple(int(round(min(255.0, max(0.0, channel)))) for channel in value)  # type: ignore[return-value]


def gradient(name: str, *, eased: bool = False) -> Callable[[float], RGB]:
    """Colour function over ``[0, 1]`` for a palette name."""

    try:
        palette = PALETTES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown gradient '{name}'. Choose from: {', '.join(sorted(PALETTES))}") from exc
    interpolate = multi_lerp(palette)
    if eased:
        return lambda t: to_rgb(interpolate(exp_in_out(t)))
    return lambda t: to_rgb(interpolate(t))


def distance_painter(distances: "Distances", color: Callable[[float], RGB]) -> Callable[[int], RGB]:
    """Paint function colouring each node by its normalized distance.

    Unreachable nodes, and every node when all reachable ones sit at distance
    0, get :data:`NEUTRAL_COLOR`.
    """

    def paint(node_id: int) -> RGB:
        t = distances.normalized(node_id)
        return NEUTRAL_COLOR if t is None else color(t)

    return paint


def neutral_painter(_node_id: int) -> RGB:
    return NEUTRAL_COLOR


__all__ = [
    "RGB",
    "NEUTRAL_COLOR",
    "lerp",
    "multi_lerp",
    "exp_in_out",
    "PALETTES",
    "to_rgb",
    "gradient",
    "distance_painter",
    "neutral_painter",
]
