"""Rectangular and masked square-cell maze generator."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from PIL import Image

from mazeweave.base import PathLike
from mazeweave.core.pool import NodeId
from mazeweave.masks import MASK_PRESETS, GridMask, Mask, build_mask
from mazeweave.maze.maze_base import MazeGenerator, Painter
from mazeweave.maze.maze_masked.grid import BinaryTreeSettings, MaskedGrid
from mazeweave.maze.maze_masked.mazefile import write_maze
from mazeweave.maze.maze_masked.render import MaskedGridRenderer


class MaskedMazeGenerator(MazeGenerator):
    """Generate square-cell mazes, optionally clipped by a mask."""

    DEFAULT_OUTPUT_DIR = "data/maze_masked"
    DEFAULT_WIDTH = 16
    DEFAULT_HEIGHT = 16

    def __init__(
        self,
        output_dir: Optional[PathLike] = None,
        *,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        mask: Optional[str] = None,
        mask_image: Optional[PathLike] = None,
        radius_ratio: float = 1.0,
        north_probability: float = 0.5,
        write_mazefile: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(output_dir, **kwargs)
        if mask_image is not None:
            loaded = GridMask.from_image(mask_image)
            self.mask: Mask = loaded
            self.width, self.height = loaded.width, loaded.height
            self.mask_name = Path(mask_image).name
        else:
            if width <= 0 or height <= 0:
                raise ValueError("width and height must be positive")
            self.width, self.height = int(width), int(height)
            self.mask = build_mask(mask, self.width, self.height, radius_ratio=radius_ratio)
            self.mask_name = mask or "full"
        if not 0.0 <= north_probability <= 1.0:
            raise ValueError("north_probability must lie in [0, 1]")
        self.settings = BinaryTreeSettings(north_probability)
        self.write_mazefile = write_mazefile
        self.maze_dir = Path(self.output_dir) / "mazes"
        if write_mazefile:
            self.maze_dir.mkdir(parents=True, exist_ok=True)

    def build_grid(self) -> MaskedGrid:
        return MaskedGrid(self.width, self.height, self.mask)

    def carve(self, grid: MaskedGrid) -> None:
        grid.carve(self.algorithm, self.rng, settings=self.settings)

    def render(
        self,
        grid: MaskedGrid,
        paint: Painter,
        *,
        start: NodeId,
        goal: NodeId,
        path: Optional[Sequence[NodeId]] = None,
    ) -> Image.Image:
        renderer = MaskedGridRenderer(grid, image_width=self.image_width, padding=self.padding)
        return renderer.render(paint, start=start, goal=goal, path=path)

    def describe_layout(self) -> Dict[str, Any]:
        return {"type": "masked", "width": self.width, "height": self.height, "mask": self.mask_name}

    def save_extra(self, record_id: str, grid: MaskedGrid, start: NodeId, goal: NodeId) -> Dict[str, Any]:
        if not self.write_mazefile:
            return {}
        path = write_maze(
            self.maze_dir / f"{record_id}.maze",
            grid,
            grid.position_of(start),
            grid.position_of(goal),
        )
        return {"mazefile": self.relativize_path(path)}

    # ------------------------------------------------------------------
    # CLI helpers

    @classmethod
    def _build_parser(cls) -> argparse.ArgumentParser:
        parser = super()._build_parser()
        parser.description = "Generate square-cell maze datasets"
        parser.add_argument("--width", type=int, default=cls.DEFAULT_WIDTH, help="Number of columns")
        parser.add_argument("--height", type=int, default=cls.DEFAULT_HEIGHT, help="Number of rows")
        parser.add_argument("--mask", choices=MASK_PRESETS, default=None)
        parser.add_argument("--mask-image", type=Path, default=None, help="Image whose dark pixels are cells")
        parser.add_argument("--radius-ratio", type=float, default=1.0, help="Disk mask radius relative to the grid")
        parser.add_argument("--north-probability", type=float, default=0.5, help="Binary tree bias towards north")
        parser.add_argument("--write-mazefile", action="store_true", help="Also save each maze as a .maze file")
        return parser

    @classmethod
    def _generator_kwargs(cls, args: argparse.Namespace) -> Dict[str, Any]:
        kwargs = super()._generator_kwargs(args)
        kwargs.update(
            width=args.width,
            height=args.height,
            mask=args.mask,
            mask_image=args.mask_image,
            radius_ratio=args.radius_ratio,
            north_probability=args.north_probability,
            write_mazefile=args.write_mazefile,
        )
        return kwargs


def main(argv: Optional[List[str]] = None) -> None:
    MaskedMazeGenerator.main(argv)


if __name__ == "__main__":
    main()
