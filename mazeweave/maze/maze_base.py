"""Shared scaffolding for maze dataset generators.

A generator builds a grid layout, carves it with one of the generation
algorithms, picks the two most distant cells as start and goal, and renders a
puzzle image plus a solution image with the route drawn in. Subclasses supply
the layout and the renderer; dataset serialization and CLI wiring live here.
"""

from __future__ import annotations

import argparse
import logging
import random
import uuid
from abc import abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from mazeweave.base import AbstractMazeGenerator, PathLike
from mazeweave.config import parse_with_config
from mazeweave.core.algorithms import ALGORITHM_NAMES
from mazeweave.core.pool import NodeId, Pool
from mazeweave.gradients import PALETTES, RGB, distance_painter, gradient, neutral_painter

Painter = Callable[[NodeId], RGB]

LINE_COLOR = (220, 0, 0)
START_COLOR = (220, 30, 30)
GOAL_COLOR = START_COLOR


def draw_path_line(
    image: Image.Image,
    points: List[Tuple[float, float]],
    color: Tuple[int, int, int],
    thickness: int,
) -> None:
    """Draws a path (solution line) on the given image."""
    draw = ImageDraw.Draw(image)
    if len(points) >= 2:
        draw.line(points, fill=color, width=thickness, joint="curve")
    elif len(points) == 1:
        x, y = points[0]
        r = thickness / 2
        draw.ellipse((x - r, y - r, x + r, y + r), fill=color)


def draw_marker(
    draw: ImageDraw.ImageDraw,
    point: Tuple[float, float],
    color: Tuple[int, int, int],
    radius: float,
) -> None:
    x, y = point
    draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=color)


@dataclass
class MazeRecord:
    """Serializable metadata for a generated maze and its images."""

    id: str
    layout: Dict[str, Any]
    algorithm: str
    start: Tuple[int, int]
    goal: Tuple[int, int]
    image: str
    solution_image_path: str
    metrics: Dict[str, Any] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "layout": dict(self.layout),
            "algorithm": self.algorithm,
            "start": [int(self.start[0]), int(self.start[1])],
            "goal": [int(self.goal[0]), int(self.goal[1])],
            "image": self.image,
            "solution_image_path": self.solution_image_path,
            "metrics": dict(self.metrics),
        }
        if self.extra:
            payload.update(self.extra)
        return payload


def maze_metrics(pool: Pool[Any], algorithm: str, path: Sequence[NodeId]) -> Dict[str, Any]:
    return {
        "algorithm": algorithm,
        "cell_count": len(pool),
        "link_count": pool.link_count(),
        "dead_ends": len(pool.dead_ends()),
        "diameter": max(0, len(path) - 1),
    }


class MazeGenerator(AbstractMazeGenerator[MazeRecord]):
    """Base generator providing rng, algorithm choice and asset management."""

    DEFAULT_OUTPUT_DIR: Optional[PathLike] = "data/maze"
    DEFAULT_ALGORITHM = "recursive_backtracker"
    SUPPORTED_ALGORITHMS: Tuple[str, ...] = ALGORITHM_NAMES
    DEFAULT_IMAGE_WIDTH = 512
    DEFAULT_PADDING = 16

    def __init__(
        self,
        output_dir: Optional[PathLike] = None,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        gradient_name: Optional[str] = None,
        eased: bool = False,
        image_width: int = DEFAULT_IMAGE_WIDTH,
        padding: int = DEFAULT_PADDING,
        seed: Optional[int] = None,
    ) -> None:
        resolved_output = output_dir if output_dir is not None else self.DEFAULT_OUTPUT_DIR
        if resolved_output is None:
            raise ValueError("output_dir must be provided either via argument or DEFAULT_OUTPUT_DIR")
        super().__init__(resolved_output)

        if algorithm not in self.SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unknown algorithm '{algorithm}'. Choose from: {', '.join(self.SUPPORTED_ALGORITHMS)}")
        if image_width <= 0:
            raise ValueError("image_width must be positive")
        if padding < 0:
            raise ValueError("padding must be non-negative")
        self.algorithm = algorithm
        self.gradient_name = gradient_name
        self.color = gradient(gradient_name, eased=eased) if gradient_name is not None else None
        self.image_width = int(image_width)
        self.padding = int(padding)
        self._rng = random.Random(seed)

        root = Path(self.output_dir)
        self.puzzle_dir = root / "puzzles"
        self.solution_dir = root / "solutions"
        self.puzzle_dir.mkdir(parents=True, exist_ok=True)
        self.solution_dir.mkdir(parents=True, exist_ok=True)

    @property
    def rng(self) -> random.Random:
        return self._rng

    def next_id(self) -> str:
        return str(uuid.uuid4())

    def save_images(
        self,
        record_id: str,
        puzzle_image: Image.Image,
        solution_image: Image.Image,
    ) -> Tuple[Path, Path]:
        puzzle_path = self.puzzle_dir / f"{record_id}_puzzle.png"
        solution_path = self.solution_dir / f"{record_id}_solution.png"
        puzzle_image.save(puzzle_path)
        solution_image.save(solution_path)
        return puzzle_path, solution_path

    # ------------------------------------------------------------------
    # Subclass hooks

    @abstractmethod
    def build_grid(self) -> Any:
        """Return a fresh, uncarved grid exposing ``pool`` and ``carve``."""

    @abstractmethod
    def render(
        self,
        grid: Any,
        paint: Painter,
        *,
        start: NodeId,
        goal: NodeId,
        path: Optional[Sequence[NodeId]] = None,
    ) -> Image.Image:
        """Draw the carved grid."""

    @abstractmethod
    def describe_layout(self) -> Dict[str, Any]:
        """Layout parameters stored in each record."""

    def carve(self, grid: Any) -> None:
        grid.carve(self.algorithm, self.rng)

    def position_of(self, grid: Any, node_id: NodeId) -> Tuple[int, int]:
        return tuple(grid.position_of(node_id))  # type: ignore[return-value]

    def save_extra(self, record_id: str, grid: Any, start: NodeId, goal: NodeId) -> Dict[str, Any]:
        """Write additional per-record assets; returns fields for the record."""
        return {}

    # ------------------------------------------------------------------

    def painter_for(self, grid: Any, start: NodeId) -> Painter:
        if self.color is None:
            return neutral_painter
        return distance_painter(grid.pool.distances_from(start), self.color)

    def create_puzzle(self, *, puzzle_id: Optional[str] = None) -> MazeRecord:
        record_id = puzzle_id or self.next_id()
        grid = self.build_grid()
        self.carve(grid)

        pair = grid.pool.furthest_pair()
        if pair is None:
            raise ValueError("Cannot build a maze without cells")
        start, goal = pair
        path = grid.pool.distances_from(start).path_to(goal)

        paint = self.painter_for(grid, start)
        puzzle_image = self.render(grid, paint, start=start, goal=goal)
        solution_image = self.render(grid, paint, start=start, goal=goal, path=path)
        puzzle_path, solution_path = self.save_images(record_id, puzzle_image, solution_image)
        extra = self.save_extra(record_id, grid, start, goal)

        return MazeRecord(
            id=record_id,
            layout=self.describe_layout(),
            algorithm=self.algorithm,
            start=self.position_of(grid, start),
            goal=self.position_of(grid, goal),
            image=self.relativize_path(puzzle_path),
            solution_image_path=self.relativize_path(solution_path),
            metrics=maze_metrics(grid.pool, self.algorithm, path),
            extra=extra,
        )

    # ------------------------------------------------------------------
    # CLI helpers

    @classmethod
    def _build_parser(cls) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description="Generate maze datasets")
        parser.add_argument("count", type=int, help="Number of mazes to create")
        parser.add_argument("--output-dir", type=Path, default=None)
        parser.add_argument("--algorithm", choices=cls.SUPPORTED_ALGORITHMS, default=cls.DEFAULT_ALGORITHM)
        parser.add_argument("--gradient", choices=sorted(PALETTES), default=None, help="Colour cells by distance from the start")
        parser.add_argument("--eased", action="store_true", help="Apply exponential easing to the gradient")
        parser.add_argument("--image-width", type=int, default=cls.DEFAULT_IMAGE_WIDTH)
        parser.add_argument("--padding", type=int, default=cls.DEFAULT_PADDING)
        parser.add_argument("--seed", type=int, default=None)
        parser.add_argument("--config", type=Path, default=None, help="JSON file whose keys override option defaults")
        parser.add_argument("--config-json", type=str, default=None, help="Inline JSON object overriding option defaults")
        return parser

    @classmethod
    def _parse_args(cls, argv: Optional[List[str]] = None) -> argparse.Namespace:
        return parse_with_config(cls._build_parser(), argv)

    @classmethod
    def _generator_kwargs(cls, args: argparse.Namespace) -> Dict[str, Any]:
        return {
            "output_dir": args.output_dir if args.output_dir is not None else cls.DEFAULT_OUTPUT_DIR,
            "algorithm": args.algorithm,
            "gradient_name": args.gradient,
            "eased": args.eased,
            "image_width": args.image_width,
            "padding": args.padding,
            "seed": args.seed,
        }

    @classmethod
    def main(cls, argv: Optional[List[str]] = None) -> None:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        args = cls._parse_args(argv)
        generator = cls(**cls._generator_kwargs(args))
        logging.info(f"Generating {max(1, args.count)} mazes with {generator.algorithm}...")
        generator.generate_dataset(max(1, args.count), metadata_path=generator.output_dir / "data.json")
        logging.info("Done.")


__all__ = [
    "LINE_COLOR",
    "START_COLOR",
    "GOAL_COLOR",
    "Painter",
    "draw_path_line",
    "draw_marker",
    "MazeRecord",
    "maze_metrics",
    "MazeGenerator",
]
