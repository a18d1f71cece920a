"""Generate a single maze and write it as an image or a ``.maze`` file.

Exactly one source picks the layout::

    --mazefile PATH        load a previously written maze (no carving)
    --mask-image PATH      carve the dark pixels of an image
    --unmasked W H         carve a full W x H rectangle
    --radial B R           carve R rings starting with B cells around the centre

and exactly one destination picks the output (``--image`` or
``--write-mazefile``).
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from tqdm import tqdm

from mazeweave.config import parse_with_config
from mazeweave.core.algorithms import ALGORITHM_NAMES
from mazeweave.core.pool import NodeId
from mazeweave.errors import DisconnectedLayoutError
from mazeweave.gradients import PALETTES, distance_painter, gradient, neutral_painter
from mazeweave.masks import MASK_PRESETS, GridMask, Mask, build_mask
from mazeweave.maze.maze_masked.grid import BinaryTreeSettings, MaskedGrid
from mazeweave.maze.maze_masked.mazefile import MazeFileError, read_maze, write_maze
from mazeweave.maze.maze_masked.render import MaskedGridRenderer
from mazeweave.maze.maze_polar.grid import PolarGrid
from mazeweave.maze.maze_polar.render import PolarGridRenderer

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_WIDTH = 800
DEFAULT_PADDING = 8
DEFAULT_ALGORITHM = "hunt_and_kill"

# Grids at least this large show a progress bar while the layout is checked.
PROGRESS_MIN_CELLS = 250_000

# Exit status for unusable input.
EXIT_BAD_INPUT = 2


class UsageError(ValueError):
    """The requested combination of source and destination is unsupported."""


@dataclass
class Maze:
    grid: Union[MaskedGrid, PolarGrid]
    start: NodeId
    goal: NodeId

    @property
    def is_polar(self) -> bool:
        return isinstance(self.grid, PolarGrid)


def _endpoints(grid: Union[MaskedGrid, PolarGrid]) -> tuple:
    pair = grid.pool.furthest_pair()
    if pair is None:
        raise UsageError("The maze has no cells")
    return pair


def build_masked_grid(
    width: int,
    height: int,
    mask: Mask,
    *,
    min_progress_cells: int = PROGRESS_MIN_CELLS,
) -> MaskedGrid:
    """Build a masked grid, showing the layout check as a progress bar on large grids."""

    with tqdm(desc="Checking layout", unit="cell", disable=width * height < min_progress_cells) as bar:

        def progress(done: int, total: int) -> None:
            bar.total = total
            bar.update(done - bar.n)

        return MaskedGrid(width, height, mask, progress=progress)


def load_source(args: argparse.Namespace, rng: random.Random) -> Maze:
    if args.mazefile is not None:
        decoded = read_maze(args.mazefile)
        grid = decoded.grid
        start = grid.get_id_at(*decoded.start)
        goal = grid.get_id_at(*decoded.end)
        if start is None or goal is None:
            start, goal = _endpoints(grid)
        logger.info(f"Loaded {grid.width}x{grid.height} maze from {args.mazefile}")
        return Maze(grid, start, goal)

    if args.radial is not None:
        branches, rings = args.radial
        grid = PolarGrid(branches, rings)
        grid.carve(args.algorithm, rng)
    else:
        if args.mask_image is not None:
            mask = GridMask.from_image(args.mask_image)
            width, height = mask.width, mask.height
        else:
            width, height = args.unmasked
            mask = build_mask(args.mask, width, height, radius_ratio=args.radius_ratio)
        grid = build_masked_grid(width, height, mask)
        grid.carve(args.algorithm, rng, settings=BinaryTreeSettings(args.north_probability))
    logger.info(f"Carved {len(grid)} cells with {args.algorithm}")
    start, goal = _endpoints(grid)
    return Maze(grid, start, goal)


def write_destination(maze: Maze, args: argparse.Namespace) -> Path:
    if args.write_mazefile is not None:
        if maze.is_polar:
            raise UsageError("Maze files can only store square-cell mazes")
        grid = maze.grid
        return write_maze(args.write_mazefile, grid, grid.position_of(maze.start), grid.position_of(maze.goal))

    if args.gradient is not None:
        paint = distance_painter(maze.grid.pool.distances_from(maze.start), gradient(args.gradient, eased=args.eased))
    else:
        paint = neutral_painter
    path = maze.grid.pool.distances_from(maze.start).path_to(maze.goal) if args.solution else None

    if maze.is_polar:
        renderer = PolarGridRenderer(maze.grid, image_width=args.image_width, padding=args.padding)
    else:
        renderer = MaskedGridRenderer(maze.grid, image_width=args.image_width, padding=args.padding)
    image = renderer.render(paint, start=maze.start, goal=maze.goal, path=path)
    target = Path(args.image)
    target.parent.mkdir(parents=True, exist_ok=True)
    image.save(target)
    logger.info(f"Saved maze image to {target}")
    return target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mazeweave", description="Generate a single maze")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--mazefile", type=Path, default=None, help="Read a .maze file")
    source.add_argument("--mask-image", type=Path, default=None, help="Carve the dark pixels of an image")
    source.add_argument("--unmasked", type=int, nargs=2, metavar=("WIDTH", "HEIGHT"), default=None)
    source.add_argument("--radial", type=int, nargs=2, metavar=("BRANCHES", "RINGS"), default=None)

    destination = parser.add_mutually_exclusive_group()
    destination.add_argument("--image", type=Path, default=None, help="Write a PNG image")
    destination.add_argument("--write-mazefile", type=Path, default=None, help="Write a .maze file")

    parser.add_argument("--algorithm", choices=ALGORITHM_NAMES, default=DEFAULT_ALGORITHM)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--mask", choices=MASK_PRESETS, default=None, help="Mask preset for --unmasked")
    parser.add_argument("--radius-ratio", type=float, default=1.0)
    parser.add_argument("--north-probability", type=float, default=0.5, help="Binary tree bias towards north")
    parser.add_argument("--image-width", type=int, default=DEFAULT_IMAGE_WIDTH)
    parser.add_argument("--padding", type=int, default=DEFAULT_PADDING)
    parser.add_argument("--gradient", choices=sorted(PALETTES), default=None, help="Colour cells by distance from the start")
    parser.add_argument("--eased", action="store_true")
    parser.add_argument("--solution", action="store_true", help="Draw the route from start to goal")
    parser.add_argument("--config", type=Path, default=None, help="JSON file whose keys override option defaults")
    parser.add_argument("--config-json", type=str, default=None, help="Inline JSON object overriding option defaults")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parse_with_config(parser, argv)
    sources = [args.mazefile, args.mask_image, args.unmasked, args.radial]
    if sum(value is not None for value in sources) != 1:
        parser.error("choose exactly one of --mazefile, --mask-image, --unmasked, --radial")
    if (args.image is None) == (args.write_mazefile is None):
        parser.error("choose exactly one of --image, --write-mazefile")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    args = parse_args(argv)
    rng = random.Random(args.seed)
    try:
        maze = load_source(args, rng)
        write_destination(maze, args)
    except MazeFileError as e:
        print(f"mazeweave: invalid maze file: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except (ValueError, DisconnectedLayoutError, OSError) as e:
        print(f"mazeweave: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    return 0


if __name__ == "__main__":
    sys.exit(main())
