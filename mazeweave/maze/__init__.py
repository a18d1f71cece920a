"""Grid layouts, renderers and dataset generators."""

__all__ = [
    "MazeGenerator",
    "MazeRecord",
    "MaskedGrid",
    "MaskedMazeGenerator",
    "PolarGrid",
    "PolarMazeGenerator",
]

from .maze_base import MazeGenerator, MazeRecord
from .maze_masked import MaskedGrid, MaskedMazeGenerator
from .maze_polar import PolarGrid, PolarMazeGenerator
