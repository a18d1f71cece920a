"""Masks deciding which cells of a rectangular grid take part in a maze."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, Optional, Protocol, Tuple, Union, runtime_checkable

import numpy as np
from PIL import Image

PathLike = Union[str, Path]


@runtime_checkable
class Mask(Protocol):
    """Answers whether the cell at ``(row, col)`` belongs to the maze."""

    def contains(self, row: int, col: int) -> bool:
        ...


class FullMask:
    """Every cell is present."""

    def contains(self, row: int, col: int) -> bool:
        return row >= 0 and col >= 0

    def __repr__(self) -> str:
        return "FullMask()"


class GridMask:
    """Mask backed by a stored boolean array of shape ``(height, width)``."""

    def __init__(self, cells: np.ndarray) -> None:
        array = np.asarray(cells, dtype=bool)
        if array.ndim != 2:
            raise ValueError("mask array must be two-dimensional")
        self.cells = array

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    def contains(self, row: int, col: int) -> bool:
        if row < 0 or col < 0 or row >= self.height or col >= self.width:
            return False
        return bool(self.cells[row, col])

    def count(self) -> int:
        return int(self.cells.sum())

    def __repr__(self) -> str:
        return f"GridMask(width={self.width}, height={self.height}, cells={self.count()})"

    @classmethod
    def from_cells(cls, width: int, height: int, cells: Iterable[Tuple[int, int]]) -> "GridMask":
        array = np.zeros((height, width), dtype=bool)
        for row, col in cells:
            array[row, col] = True
        return cls(array)

    @classmethod
    def from_image(cls, path: PathLike, *, threshold: int = 128) -> "GridMask":
        """Load a mask image; one pixel per cell.

        A pixel is a cell when it is fully opaque and every colour channel is
        below ``threshold``. Transparent pixels are never cells.
        """

        with Image.open(path) as image:
            rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8)
        opaque = rgba[..., 3] == 255
        dark = (rgba[..., :3] < threshold).all(axis=-1)
        return cls(opaque & dark)


class DiskMask:
    """Cells within ``radius_ratio`` of the half-size around the grid centre."""

    def __init__(self, width: int, height: int, radius_ratio: float = 1.0) -> None:
        if radius_ratio <= 0:
            raise ValueError("radius_ratio must be positive")
        self.width = int(width)
        self.height = int(height)
        self.radius_ratio = float(radius_ratio)

    def contains(self, row: int, col: int) -> bool:
        hc = self.height / 2.0
        wc = self.width / 2.0
        dist = math.hypot(wc - col, hc - row)
        return dist < min(hc, wc) * self.radius_ratio


def build_mask(
    name: Optional[str],
    width: int,
    height: int,
    *,
    radius_ratio: float = 1.0,
) -> Mask:
    """Resolve a mask preset name as used on the command line."""

    if name is None or name == "full":
        return FullMask()
    if name == "disk":
        return DiskMask(width, height, radius_ratio)
    raise ValueError(f"Unknown mask preset '{name}'")


MASK_PRESETS = ("full", "disk")

__all__ = ["Mask", "FullMask", "GridMask", "DiskMask", "build_mask", "MASK_PRESETS"]
