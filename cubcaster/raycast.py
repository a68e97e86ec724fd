"""Grid ray casting: wall hits, distances and projected wall heights.

Angles are in radians, measured clockwise from east because the screen's
y axis points down: a ray with an angle between 0 and pi travels down.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

__all__ = [
    "Heading",
    "Grid",
    "Ray",
    "distance",
    "normalize_angle",
    "rgb",
    "spawn_angle",
    "cast_ray",
    "cast_all_rays",
]

TWO_PI = 2 * math.pi
DEFAULT_CELL = 32
_VERTICAL_NUDGE = 0.0000001
_HORIZONTAL_NUDGE = 0.000001

Point = Tuple[float, float]


def distance(x0: float, y0: float, x1: float, y1: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(x1 - x0, y1 - y0)


@dataclass(frozen=True)
class Heading:
    """Which way a ray points along each axis."""

    down: bool
    right: bool

    @property
    def up(self) -> bool:
        return not self.down

    @property
    def left(self) -> bool:
        return not self.right


def normalize_angle(angle: float) -> Tuple[float, Heading]:
    """Bring ``angle`` into [0, 2*pi) and report the heading it has."""
    angle = math.remainder(angle, TWO_PI)
    if angle < 0:
        angle += TWO_PI
    down = 0 < angle < math.pi
    right = angle < 0.5 * math.pi or angle > 1.5 * math.pi
    return angle, Heading(down=down, right=right)


def rgb(r: int, g: int, b: int, a: int) -> int:
    """Pack four channels as 0xRRGGBBAA."""
    return ((r << 24) | (g << 16) | (b << 8) | a) & 0xFFFFFFFF


_SPAWN_ANGLES = {
    "S": math.pi / 2,
    "N": 3 * (math.pi / 2),
    "W": math.pi,
    "E": 0.0,
}


def spawn_angle(direction: str) -> float:
    """The view angle for a spawn letter N, S, E or W."""
    try:
        return _SPAWN_ANGLES[direction]
    except KeyError:
        raise ValueError(f"unknown spawn direction {direction!r}") from None


@dataclass(frozen=True)
class Grid:
    """The map as rows of characters, each cell ``cell`` pixels square."""

    rows: Tuple[str, ...]
    cell: int = DEFAULT_CELL

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))
        if not self.rows:
            raise ValueError("a grid needs at least one row")
        if self.cell <= 0:
            raise ValueError("cell size must be positive")

    @property
    def width(self) -> int:
        """Length of the longest row, in cells."""
        return max(len(row) for row in self.rows)

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    def _row(self, index: int) -> str:
        return self.rows[index] if 0 <= index < len(self.rows) else ""

    def _inside(self, x: float, y: float) -> bool:
        return not (
            x < 0
            or x > self.width * self.cell
            or y < 0
            or y > self.height * self.cell
        )

    def has_wall(self, x: float, y: float) -> bool:
        """True when the pixel lies in a wall cell or off the map."""
        if not self._inside(x, y):
            return True
        column = math.floor(x / self.cell)
        row = self._row(math.floor(y / self.cell))
        if column >= len(row):
            return True
        return row[column] == "1"

    def blocks_player(self, x: float, y: float, size: int) -> bool:
        """True when a ``size``-pixel square at (x, y) would touch a wall."""
        if size < 1:
            raise ValueError("player size must be positive")
        if not self._inside(x, y):
            return True
        if math.floor(x / self.cell) >= len(self._row(math.floor(y / self.cell))):
            return True
        corners = sorted({0, size - 1})
        for dx in corners:
            for dy in corners:
                row_index = math.floor((y + dy) / self.cell)
                if not 0 <= row_index < len(self.rows):
                    return True
                row = self.rows[row_index]
                column = math.floor((x + dx) / self.cell)
                if column < len(row) and row[column] == "1":
                    return True
        return False

    def in_bounds(self, x: float, y: float) -> bool:
        """True while a ray point is inside the map and within its row."""
        if not (
            x >= 0
            and y >= 0
            and y < self.height * self.cell
            and x < self.width * self.cell
        ):
            return False
        return math.floor(x / self.cell) < len(self.rows[math.floor(y / self.cell)])


@dataclass(frozen=True)
class Ray:
    """Where one ray met a wall.

    ``offset`` is the hit's fractional position along the wall cell, and
    ``wall_height`` the projected height of the wall slice on screen.
    """

    x: float
    y: float
    angle: float
    distance: float
    vertical: bool
    heading: Heading
    offset: float
    wall_height: float = 0.0


def _walk(grid: Grid, x: float, y: float, step_x: float, step_y: float) -> Optional[Point]:
    while grid.in_bounds(x, y):
        if grid.has_wall(x, y):
            return x, y
        x += step_x
        y += step_y
    return None


def _vertical_hit(grid: Grid, x: float, y: float, angle: float, heading: Heading) -> Optional[Point]:
    cell = grid.cell
    tan_a = math.tan(angle)
    x_inter = math.floor(x / cell) * cell
    if heading.right:
        x_inter += cell
    y_inter = y + (x_inter - x) * tan_a
    step_x = -cell if heading.left else cell
    step_y = cell * tan_a
    if (heading.up and step_y > 0) or (heading.down and step_y < 0):
        step_y = -step_y
    if heading.left:
        x_inter -= _VERTICAL_NUDGE
    return _walk(grid, x_inter, y_inter, step_x, step_y)


def _horizontal_hit(grid: Grid, x: float, y: float, angle: float, heading: Heading) -> Optional[Point]:
    cell = grid.cell
    tan_a = math.tan(angle)
    if tan_a == 0:
        return None
    y_inter = math.floor(y / cell) * cell
    if heading.down:
        y_inter += cell
    x_inter = x + (y_inter - y) / tan_a
    step_x = cell / tan_a
    step_y = -cell if heading.up else cell
    if (heading.left and step_x > 0) or (heading.right and step_x < 0):
        step_x = -step_x
    if heading.up:
        y_inter -= _HORIZONTAL_NUDGE
    return _walk(grid, x_inter, y_inter, step_x, step_y)


def _hit_distance(x: float, y: float, hit: Optional[Point]) -> float:
    if hit is None or hit[0] <= 0 or hit[1] <= 0:
        return math.inf
    return distance(x, y, hit[0], hit[1])


def cast_ray(grid: Grid, x: float, y: float, angle: float) -> Ray:
    """Cast one ray from (x, y) and return the nearer wall crossing."""
    angle, heading = normalize_angle(angle)
    horizontal = _horizontal_hit(grid, x, y, angle, heading)
    vertical = _vertical_hit(grid, x, y, angle, heading)
    if _hit_distance(x, y, horizontal) < _hit_distance(x, y, vertical):
        hit_x, hit_y = horizontal
        is_vertical = False
    else:
        hit_x, hit_y = vertical if vertical is not None else (0.0, 0.0)
        is_vertical = True
    along = (hit_y if is_vertical else hit_x) / grid.cell
    return Ray(
        x=hit_x,
        y=hit_y,
        angle=angle,
        distance=distance(x, y, hit_x, hit_y),
        vertical=is_vertical,
        heading=heading,
        offset=along - math.floor(along),
    )


def cast_all_rays(
    grid: Grid,
    x: float,
    y: float,
    rotation: float,
    num_rays: int,
    fov: float,
    screen_width: int,
) -> List[Ray]:
    """Cast ``num_rays`` rays across the field of view, left to right.

    Each ray carries its projected wall height, corrected for the
    fish-eye effect.
    """
    if num_rays <= 0:
        raise ValueError("the number of rays must be positive")
    plane = (screen_width // 2) / math.tan(fov / 2)
    step = fov / num_rays
    angle = rotation - fov / 2
    rays: List[Ray] = []
    for _ in range(num_rays):
        ray = cast_ray(grid, x, y, angle)
        corrected = ray.distance * math.cos(angle - rotation)
        height = (grid.cell / corrected) * plane if corrected > 0 else math.inf
        rays.append(replace(ray, angle=angle, wall_height=height))
        angle += step
    return rays