"""Circular maze generator built on concentric rings."""

from __future__ import annotations

import argparse
from typing import Any, Dict, List, Optional, Sequence, Tuple

from PIL import Image

from mazeweave.base import PathLike
from mazeweave.core.algorithms import ALGORITHMS
from mazeweave.core.pool import NodeId
from mazeweave.maze.maze_base import MazeGenerator, Painter
from mazeweave.maze.maze_polar.grid import PolarGrid
from mazeweave.maze.maze_polar.render import PolarGridRenderer


class PolarMazeGenerator(MazeGenerator):
    """Generate mazes arranged on rings that split as they grow outwards."""

    DEFAULT_OUTPUT_DIR = "data/maze_polar"
    DEFAULT_ALGORITHM = "wilson"
    SUPPORTED_ALGORITHMS = tuple(sorted(ALGORITHMS))

    DEFAULT_BRANCHES = 6  # Cells in the first ring around the centre.
    DEFAULT_RINGS = 8

    def __init__(
        self,
        output_dir: Optional[PathLike] = None,
        *,
        branches: int = DEFAULT_BRANCHES,
        rings: int = DEFAULT_RINGS,
        algorithm: str = DEFAULT_ALGORITHM,
        **kwargs: Any,
    ) -> None:
        super().__init__(output_dir, algorithm=algorithm, **kwargs)
        if branches <= 1:
            raise ValueError("branches must be greater than 1")
        if rings <= 1:
            raise ValueError("rings must be greater than 1")
        self.branches = int(branches)
        self.rings = int(rings)

    def build_grid(self) -> PolarGrid:
        return PolarGrid(self.branches, self.rings)

    def render(
        self,
        grid: PolarGrid,
        paint: Painter,
        *,
        start: NodeId,
        goal: NodeId,
        path: Optional[Sequence[NodeId]] = None,
    ) -> Image.Image:
        renderer = PolarGridRenderer(grid, image_width=self.image_width, padding=self.padding)
        return renderer.render(paint, start=start, goal=goal, path=path)

    def describe_layout(self) -> Dict[str, Any]:
        return {"type": "polar", "branches": self.branches, "rings": self.rings}

    def position_of(self, grid: PolarGrid, node_id: NodeId) -> Tuple[int, int]:
        position = grid.position_of(node_id)
        return position.ring, position.column

    # ------------------------------------------------------------------
    # CLI helpers

    @classmethod
    def _build_parser(cls) -> argparse.ArgumentParser:
        parser = super()._build_parser()
        parser.description = "Generate circular maze datasets"
        parser.add_argument("--branches", type=int, default=cls.DEFAULT_BRANCHES, help="Cells in the first ring")
        parser.add_argument("--rings", type=int, default=cls.DEFAULT_RINGS, help="Number of rings including the centre")
        return parser

    @classmethod
    def _generator_kwargs(cls, args: argparse.Namespace) -> Dict[str, Any]:
        kwargs = super()._generator_kwargs(args)
        kwargs.update(branches=args.branches, rings=args.rings)
        return kwargs


def main(argv: Optional[List[str]] = None) -> None:
    PolarMazeGenerator.main(argv)


if __name__ == "__main__":
    main()
