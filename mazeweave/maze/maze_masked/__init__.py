"""Square-cell mazes, optionally clipped by a mask."""

from .grid import BinaryTreeSettings, Direction, MaskedGrid
from .mazefile import (
    ConnectedOutOfBounds,
    ConnectedOutOfMask,
    DecodedMaze,
    DisconnectedMaskError,
    MazeFileError,
    NotEnoughBytes,
    TooManyBytes,
    UnrequitedConnection,
    decode_maze,
    encode_maze,
    read_maze,
    write_maze,
)
from .render import MaskedGridRenderer, render_masked
from .generator import MaskedMazeGenerator

__all__ = [
    "BinaryTreeSettings",
    "Direction",
    "MaskedGrid",
    "MazeFileError",
    "NotEnoughBytes",
    "TooManyBytes",
    "UnrequitedConnection",
    "ConnectedOutOfBounds",
    "ConnectedOutOfMask",
    "DisconnectedMaskError",
    "DecodedMaze",
    "encode_maze",
    "write_maze",
    "decode_maze",
    "read_maze",
    "MaskedGridRenderer",
    "render_masked",
    "MaskedMazeGenerator",
]
