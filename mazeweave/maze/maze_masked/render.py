"""Pillow rendering of masked square grids."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from mazeweave.core.pool import NodeId
from mazeweave.gradients import neutral_painter
from mazeweave.maze.maze_base import GOAL_COLOR, LINE_COLOR, START_COLOR, Painter, draw_marker, draw_path_line
from mazeweave.maze.maze_masked.grid import MaskedGrid

BACKGROUND_COLOR = (255, 255, 255)
WALL_COLOR = (0, 0, 0)


class MaskedGridRenderer:
    """Draws cells ``cell_size`` pixels wide, scaled so the maze spans
    ``image_width`` minus the padding on both sides."""

    def __init__(self, grid: MaskedGrid, *, image_width: int = 512, padding: int = 16) -> None:
        if image_width <= 2 * padding:
            raise ValueError("image_width must exceed twice the padding")
        self.grid = grid
        self.padding = int(padding)
        self.cell_size = (image_width - 2 * self.padding) / grid.width
        self.wall_thickness = max(1, int(round(self.cell_size / 8)))
        self.canvas_dimensions: Tuple[int, int] = (
            int(image_width),
            int(round(2 * self.padding + self.cell_size * grid.height)),
        )

    def _x(self, col: float) -> float:
        return self.padding + col * self.cell_size

    def _y(self, row: float) -> float:
        return self.padding + row * self.cell_size

    def cell_center(self, row: int, col: int) -> Tuple[float, float]:
        return self._x(col + 0.5), self._y(row + 0.5)

    def render(
        self,
        paint: Painter = neutral_painter,
        *,
        start: Optional[NodeId] = None,
        goal: Optional[NodeId] = None,
        path: Optional[Sequence[NodeId]] = None,
    ) -> Image.Image:
        canvas = Image.new("RGB", self.canvas_dimensions, BACKGROUND_COLOR)
        draw = ImageDraw.Draw(canvas)

        for (row, col), node_id in self.grid.cell_grid.items():
            draw.rectangle(
                (self._x(col), self._y(row), self._x(col + 1), self._y(row + 1)),
                fill=paint(node_id),
            )

        self._draw_walls(draw)

        if path:
            thickness = max(2, int(self.cell_size // 4))
            points = [self.cell_center(*self.grid.position_of(node_id)) for node_id in path]
            draw_path_line(canvas, points, LINE_COLOR, thickness)

        radius = max(2.0, self.cell_size / 4)
        if start is not None:
            draw_marker(draw, self.cell_center(*self.grid.position_of(start)), START_COLOR, radius)
        if goal is not None:
            draw_marker(draw, self.cell_center(*self.grid.position_of(goal)), GOAL_COLOR, radius)
        return canvas

    def _draw_walls(self, draw: ImageDraw.ImageDraw) -> None:
        grid = self.grid
        for row in range(grid.height + 1):
            for col in range(grid.width):
                if grid.is_h_wall(row, col):
                    draw.line(
                        [(self._x(col), self._y(row)), (self._x(col + 1), self._y(row))],
                        fill=WALL_COLOR,
                        width=self.wall_thickness,
                    )
        for row in range(grid.height):
            for col in range(grid.width + 1):
                if grid.is_v_wall(row, col):
                    draw.line(
                        [(self._x(col), self._y(row)), (self._x(col), self._y(row + 1))],
                        fill=WALL_COLOR,
                        width=self.wall_thickness,
                    )


def render_masked(
    grid: MaskedGrid,
    paint: Painter = neutral_painter,
    *,
    image_width: int = 512,
    padding: int = 16,
    start: Optional[NodeId] = None,
    goal: Optional[NodeId] = None,
    path: Optional[Sequence[NodeId]] = None,
) -> Image.Image:
    renderer = MaskedGridRenderer(grid, image_width=image_width, padding=padding)
    return renderer.render(paint, start=start, goal=goal, path=path)


__all__ = ["BACKGROUND_COLOR", "WALL_COLOR", "MaskedGridRenderer", "render_masked"]
