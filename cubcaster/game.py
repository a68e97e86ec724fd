"""The playable game: player movement, the weapon animation and the main loop."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from cubcaster.raycast import (
    DEFAULT_CELL,
    Grid,
    cast_all_rays,
    normalize_angle,
    spawn_angle,
)
from cubcaster.render import (
    Texture,
    background_split,
    choose_texture,
    minimap_walls,
    wall_strip,
)
from cubcaster.scene import Scene, SceneError, load_scene

__all__ = ["Player", "Animation", "Game", "check_name", "main"]

W = 960
H = 640
CELL = DEFAULT_CELL
PLAYER = 8
MINI_W = 200
MINI_H = 200
FOV_ANGLE = math.radians(60)
WALL_STRIP_WIDTH = 1
NUM_RAYS = W // WALL_STRIP_WIDTH
ANIM = 14
ANIMATION_SPEED = 3
MOUSE_SENSITIVITY = 0.002
FPS = 60
FRAME_DIR = Path("a")
_FRAME_NAMES = "123456789ABCDE"
_TEXTURE_SIDES = ("north", "south", "west", "east")


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class Player:
    """The player's square on the map, its view angle and its speeds.

    ``x`` and ``y`` are the pixel coordinates of the square's top-left corner.
    """

    x: float
    y: float
    rotation: float = 0.0
    side_angle: float = math.pi / 2
    move_speed: int = 3
    rotation_speed: float = 2 * (math.pi / 180)

    @classmethod
    def from_scene(cls, scene: Scene) -> "Player":
        """Place the player on the scene's spawn cell, facing its direction."""
        column, row, direction = scene.spawn
        rotation = spawn_angle(direction)
        return cls(
            x=column * CELL,
            y=row * CELL,
            rotation=rotation,
            side_angle=rotation + math.pi / 2,
        )

    @property
    def centre(self) -> Tuple[float, float]:
        """The centre of the player's square, where rays start."""
        return self.x + PLAYER // 2, self.y + PLAYER // 2

    def _set_rotation(self, angle: float) -> None:
        self.rotation, _ = normalize_angle(angle)
        self.side_angle = self.rotation + math.pi / 2

    def turn(self, direction: int) -> None:
        """Rotate by one turning step: -1 to the left, +1 to the right."""
        self._set_rotation(self.rotation + direction * self.rotation_speed)

    def look(self, mouse_dx: float) -> None:
        """Rotate by a horizontal mouse movement, in pixels."""
        self._set_rotation(self.rotation + mouse_dx * MOUSE_SENSITIVITY)

    def step(self, grid: Grid, walk: int, side: int) -> bool:
        """Move one step unless a wall is in the way.

        Walking forward or back takes precedence over strafing. Returns
        True when the position changed.
        """
        movestep = walk * self.move_speed
        if movestep == 0:
            movestep = side * self.move_speed
            angle = self.side_angle
        else:
            angle = self.rotation
        new_x = self.x + _round_half_away(math.cos(angle) * movestep)
        new_y = self.y + _round_half_away(math.sin(angle) * movestep)
        if grid.blocks_player(new_x, new_y, PLAYER):
            return False
        moved = (new_x, new_y) != (self.x, self.y)
        self.x, self.y = new_x, new_y
        return moved


@dataclass
class Animation:
    """Cycles through a fixed number of frames, switching every few ticks."""

    frames: int = ANIM
    speed: int = ANIMATION_SPEED
    counter: int = field(default=0, init=False)
    current: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.frames <= 0:
            raise ValueError("an animation needs at least one frame")
        if self.speed <= 0:
            raise ValueError("animation speed must be positive")

    def advance(self) -> int:
        """Count one tick and return the index of the frame to show."""
        self.counter += 1
        if self.counter % self.speed == 0:
            self.current = (self.current + 1) % self.frames
        return self.current


def _unpack(colour: int) -> Tuple[int, int, int, int]:
    return (
        (colour >> 24) & 0xFF,
        (colour >> 16) & 0xFF,
        (colour >> 8) & 0xFF,
        colour & 0xFF,
    )


def _read_keys(keys, pygame) -> Tuple[int, int, int]:
    walk = turn = side = 0
    if keys[pygame.K_UP] or keys[pygame.K_w]:
        walk = 1
    if keys[pygame.K_DOWN] or keys[pygame.K_s]:
        walk = -1
    if keys[pygame.K_LEFT]:
        turn = -1
    if keys[pygame.K_RIGHT]:
        turn = 1
    if keys[pygame.K_a]:
        side = -1
    if keys[pygame.K_d]:
        side = 1
    return walk, turn, side


class Game:
    """A scene brought to life: the grid, the player and the weapon animation."""

    def __init__(self, scene: Scene):
        self.scene = scene
        self.grid = Grid(scene.rows, CELL)
        self.player = Player.from_scene(scene)
        self.animation = Animation()

    def _load_textures(self, pygame) -> Dict[str, Texture]:
        textures: Dict[str, Texture] = {}
        for side in _TEXTURE_SIDES:
            path = getattr(self.scene, side)
            try:
                surface = pygame.image.load(path).convert_alpha()
            except (OSError, pygame.error) as exc:
                raise SceneError(f"bad images: {path!r}") from exc
            width, height = surface.get_size()
            data = pygame.image.tostring(surface, "RGBA")
            textures[side] = Texture.from_rgba(width, height, data)
        return textures

    def _load_frames(self, pygame) -> List:
        frames = []
        for name in _FRAME_NAMES[: self.animation.frames]:
            path = FRAME_DIR / f"{name}.png"
            try:
                frames.append(pygame.image.load(str(path)).convert_alpha())
            except pygame.error as exc:
                raise OSError(f"cannot load animation frame {str(path)!r}") from exc
        return frames

    def _draw_view(self, view, textures: Dict[str, Texture], pygame) -> None:
        ceiling_rows, floor_rows = background_split(H)
        view.fill(_unpack(self.scene.ceiling.rgba())[:3], (0, 0, W, len(ceiling_rows)))
        view.fill(
            _unpack(self.scene.floor.rgba())[:3],
            (0, floor_rows.start, W, len(floor_rows)),
        )
        cx, cy = self.player.centre
        rays = cast_all_rays(
            self.grid, cx, cy, self.player.rotation, NUM_RAYS, FOV_ANGLE, W
        )
        with pygame.PixelArray(view) as pixels:
            for index, ray in enumerate(rays):
                column = index * WALL_STRIP_WIDTH
                if column >= W:
                    break
                texture = choose_texture(ray, textures)
                for row, colour in wall_strip(ray, texture, H):
                    pixels[column, row] = _unpack(colour)[:3]

    def _draw_minimap(self, pygame):
        minimap = pygame.Surface((MINI_W, MINI_H), pygame.SRCALPHA)
        minimap.fill((0, 0, 0, 0xCC), (0, 0, MINI_W - CELL, MINI_H - CELL))
        for px, py in minimap_walls(self.grid, self.player.x, self.player.y, MINI_W, MINI_H):
            minimap.set_at((px, py), (255, 255, 255, 0x99))
        minimap.fill((255, 0, 0, 255), (MINI_W // 2, MINI_H // 2, PLAYER, PLAYER))
        return minimap

    def run(self) -> None:
        """Open the window and play until it is closed or Escape is pressed."""
        import pygame

        pygame.init()
        try:
            screen = pygame.display.set_mode((W, H))
            pygame.display.set_caption("cub")
            textures = self._load_textures(pygame)
            frames = self._load_frames(pygame)
            pygame.mouse.set_visible(False)
            pygame.event.set_grab(True)
            pygame.mouse.get_rel()
            clock = pygame.time.Clock()
            view = pygame.Surface((W, H))
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                keys = pygame.key.get_pressed()
                if keys[pygame.K_ESCAPE]:
                    running = False
                dx, _ = pygame.mouse.get_rel()
                self.player.look(dx)
                walk, turn, side = _read_keys(keys, pygame)
                self.player.turn(turn)
                self.player.step(self.grid, walk, side)
                frame = frames[self.animation.advance()]
                self._draw_view(view, textures, pygame)
                screen.blit(view, (0, 0))
                screen.blit(self._draw_minimap(pygame), (0, 0))
                screen.blit(
                    frame,
                    (W // 2 - frame.get_width() // 2, H - frame.get_height()),
                )
                pygame.display.flip()
                clock.tick(FPS)
        finally:
            pygame.quit()


def check_name(path: str) -> bool:
    """True when ``path`` names a file with the ``.cub`` extension."""
    name = Path(path).name
    return name.endswith(".cub") and len(name) > len(".cub")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game on the scene file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Error\nusage: cubcaster <scene.cub>", file=sys.stderr)
        return 1
    if not check_name(args[0]):
        print("Error\nthe scene file must end in .cub", file=sys.stderr)
        return 1
    try:
        scene = load_scene(args[0])
        Game(scene).run()
    except SceneError as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())