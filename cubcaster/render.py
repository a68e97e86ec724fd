"""Texture sampling and the pixel geometry of walls, background and minimap."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Mapping, Set, Tuple

from cubcaster.raycast import Grid, Ray, rgb

__all__ = [
    "Texture",
    "choose_texture",
    "texture_column",
    "wall_strip",
    "background_split",
    "line_steps",
    "minimap_bounds",
    "minimap_walls",
]


@dataclass(frozen=True)
class Texture:
    """A grid of packed 0xRRGGBBAA colours, stored row by row."""

    width: int
    height: int
    pixels: Tuple[Tuple[int, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels", tuple(tuple(row) for row in self.pixels))
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture dimensions must be positive")
        if len(self.pixels) != self.height or any(
            len(row) != self.width for row in self.pixels
        ):
            raise ValueError("pixel rows do not match the texture size")

    def pixel(self, x: int, y: int) -> int:
        """The colour at column ``x`` of row ``y``."""
        return self.pixels[y][x]

    @classmethod
    def from_rgba(cls, width: int, height: int, data: bytes) -> "Texture":
        """Build a texture from raw RGBA bytes, four per pixel."""
        data = bytes(data)
        if width <= 0 or height <= 0 or len(data) != width * height * 4:
            raise ValueError("RGBA data does not match the texture size")
        channels = iter(data)
        colours = [rgb(r, g, b, a) for r, g, b, a in zip(channels, channels, channels, channels)]
        rows = tuple(
            tuple(colours[start : start + width])
            for start in range(0, len(colours), width)
        )
        return cls(width, height, rows)


def choose_texture(ray: Ray, textures: Mapping[str, Texture]) -> Texture:
    """Pick the wall texture a ray sees: ``north``, ``south``, ``west`` or ``east``."""
    if ray.vertical:
        return textures["east"] if ray.heading.right else textures["west"]
    return textures["north"] if ray.heading.up else textures["south"]


def texture_column(ray: Ray, texture: Texture) -> int:
    """The texture column sampled for the ray's wall slice."""
    column = int(ray.offset * texture.height)
    return min(max(column, 0), texture.width - 1)


def wall_strip(ray: Ray, texture: Texture, screen_height: int) -> Iterator[Tuple[int, int]]:
    """Yield ``(row, colour)`` for every screen pixel of the ray's wall slice.

    Slices taller than the screen are cropped evenly at top and bottom.
    """
    wall = ray.wall_height
    if not wall > 0:
        return
    column = texture_column(ray, texture)
    top = max(screen_height // 2 - wall / 2, 0)
    step = texture.height / wall
    if wall > screen_height and math.isfinite(wall):
        position = step * ((wall - screen_height) / 2)
    else:
        position = 0.0
    j = 0
    while j < wall:
        row = top + j
        if row >= screen_height:
            break
        yield int(row), texture.pixel(column, int(position) % texture.height)
        position += step
        j += 1


def background_split(screen_height: int) -> Tuple[range, range]:
    """The screen rows painted with the ceiling and with the floor colour."""
    half = screen_height // 2
    return range(0, half), range(half, screen_height)


def line_steps(x0: int, y0: int, x1: int, y1: int) -> Tuple[int, float, float]:
    """Step count and per-step increments for a DDA line between two points."""
    dx = x1 - x0
    dy = y1 - y0
    steps = max(abs(dx), abs(dy))
    if steps == 0:
        return 0, 0.0, 0.0
    return steps, dx / steps, dy / steps


def minimap_bounds(x: float, y: float, width: int, height: int) -> Tuple[int, int, int, int]:
    """World-pixel window (left, top, right, bottom) centred on the player."""
    half_w = width // 2
    half_h = height // 2
    return int(x - half_w), int(y - half_h), int(x + half_w), int(y + half_h)


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def minimap_walls(grid: Grid, x: float, y: float, width: int, height: int) -> Set[Tuple[int, int]]:
    """Minimap pixels that show a wall, for a view centred on (x, y)."""
    left, top, right, bottom = minimap_bounds(x, y, width, height)
    cell = grid.cell
    walls: Set[Tuple[int, int]] = set()
    cell_x = cell_y = 0
    for py in range(height - cell):
        for px in range(width - cell):
            if not (cell_x < right and cell_y < bottom):
                break
            cell_x = _trunc_div(left + px, cell)
            cell_y = _trunc_div(top + py, cell)
            if 0 <= cell_y < grid.height and 0 <= cell_x < len(grid.rows[cell_y]):
                if grid.rows[cell_y][cell_x] == "1":
                    walls.add((px, py))
    return walls