"""Pillow rendering of polar grids."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from mazeweave.core.pool import NodeId
from mazeweave.gradients import neutral_painter
from mazeweave.maze.maze_base import GOAL_COLOR, LINE_COLOR, START_COLOR, Painter, draw_marker, draw_path_line
from mazeweave.maze.maze_polar.grid import PolarGrid, RingPosition

BACKGROUND_COLOR = (255, 255, 255)
WALL_COLOR = (0, 0, 0)

# Points per radian along the arcs of a filled sector.
ARC_RESOLUTION = 24


class PolarGridRenderer:
    """Draws ring ``r`` between radii ``r * ring_radius`` and
    ``(r + 1) * ring_radius``; angles grow clockwise from three o'clock."""

    def __init__(self, grid: PolarGrid, *, image_width: int = 512, padding: int = 16) -> None:
        if image_width <= 2 * padding:
            raise ValueError("image_width must exceed twice the padding")
        self.grid = grid
        self.padding = int(padding)
        self.radius = image_width / 2.0 - self.padding
        self.ring_radius = self.radius / grid.ring_count
        self.center = (image_width / 2.0, image_width / 2.0)
        self.canvas_dimensions: Tuple[int, int] = (int(image_width), int(image_width))
        self.wall_thickness = max(1, int(round(self.ring_radius / 8)))

    def _polar_to_cartesian(self, radius: float, angle_rad: float) -> Tuple[float, float]:
        cx, cy = self.center
        return (cx + radius * math.cos(angle_rad), cy + radius * math.sin(angle_rad))

    def _bbox(self, radius: float) -> Tuple[float, float, float, float]:
        cx, cy = self.center
        return (cx - radius, cy - radius, cx + radius, cy + radius)

    def cell_center(self, position: RingPosition) -> Tuple[float, float]:
        if position.ring == 0:
            return self.center
        start, end = self.grid.profile.sector_angles(position)
        return self._polar_to_cartesian((position.ring + 0.5) * self.ring_radius, (start + end) / 2.0)

    def _sector_polygon(self, position: RingPosition) -> List[Tuple[float, float]]:
        start, end = self.grid.profile.sector_angles(position)
        steps = max(2, int(math.ceil((end - start) * ARC_RESOLUTION)))
        inner = position.ring * self.ring_radius
        outer = inner + self.ring_radius
        angles = [start + (end - start) * i / steps for i in range(steps + 1)]
        return [self._polar_to_cartesian(outer, a) for a in angles] + [
            self._polar_to_cartesian(inner, a) for a in reversed(angles)
        ]

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

        draw.ellipse(self._bbox(self.ring_radius), fill=paint(self.grid.center))
        for position in self.grid.positions():
            if position.ring == 0:
                continue
            color = paint(self.grid[position])
            draw.polygon(self._sector_polygon(position), fill=color, outline=color)

        self._draw_walls(draw)

        if path:
            thickness = max(2, int(self.ring_radius // 4))
            points = [self.cell_center(self.grid.position_of(node_id)) for node_id in path]
            draw_path_line(canvas, points, LINE_COLOR, thickness)

        radius = max(2.0, self.ring_radius / 4)
        if start is not None:
            draw_marker(draw, self.cell_center(self.grid.position_of(start)), START_COLOR, radius)
        if goal is not None:
            draw_marker(draw, self.cell_center(self.grid.position_of(goal)), GOAL_COLOR, radius)
        return canvas

    def _draw_walls(self, draw: ImageDraw.ImageDraw) -> None:
        for position in self.grid.positions():
            if position.ring == 0:
                continue
            start, end = self.grid.profile.sector_angles(position)
            inner = position.ring * self.ring_radius
            outer = inner + self.ring_radius
            if self.grid.is_left_wall(position):
                draw.line(
                    [self._polar_to_cartesian(inner, start), self._polar_to_cartesian(outer, start)],
                    fill=WALL_COLOR,
                    width=self.wall_thickness,
                )
            if self.grid.is_floor(position):
                draw.arc(
                    self._bbox(inner),
                    math.degrees(start),
                    math.degrees(end),
                    fill=WALL_COLOR,
                    width=self.wall_thickness,
                )
        draw.ellipse(self._bbox(self.radius), outline=WALL_COLOR, width=self.wall_thickness)


def render_polar(
    grid: PolarGrid,
    paint: Painter = neutral_painter,
    *,
    image_width: int = 512,
    padding: int = 16,
    start: Optional[NodeId] = None,
    goal: Optional[NodeId] = None,
    path: Optional[Sequence[NodeId]] = None,
) -> Image.Image:
    renderer = PolarGridRenderer(grid, image_width=image_width, padding=padding)
    return renderer.render(paint, start=start, goal=goal, path=path)


__all__ = ["BACKGROUND_COLOR", "WALL_COLOR", "PolarGridRenderer", "render_polar"]
