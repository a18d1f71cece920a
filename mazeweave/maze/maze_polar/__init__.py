"""Circular mazes on concentric rings."""

from .grid import PolarGrid, RingPosition, RingProfile, RingStep
from .render import PolarGridRenderer, render_polar
from .generator import PolarMazeGenerator

__all__ = [
    "PolarGrid",
    "RingPosition",
    "RingProfile",
    "RingStep",
    "PolarGridRenderer",
    "render_polar",
    "PolarMazeGenerator",
]
