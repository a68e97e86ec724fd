"""Parse and validate ``.cub`` scene descriptions.

A scene holds six element lines followed by the map:

    NO <path>   SO <path>   WE <path>   EA <path>
    F <r>,<g>,<b>           C <r>,<g>,<b>

The elements may come in any order, each exactly once, and blank lines
between them are ignored. The map follows and uses ``1`` for walls, ``0``
for floor, a space for void and exactly one of ``N``, ``S``, ``E`` or ``W``
for the player's spawn. Every walkable cell must be enclosed by walls, and
no blank line may split the map.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

__all__ = [
    "SceneError",
    "Color",
    "Scene",
    "split_fields",
    "parse_number",
    "parse_color",
    "validate_map",
    "parse_scene",
    "load_scene",
]

SPAWN_CHARS = frozenset("NSEW")
_OPEN_CHARS = frozenset("01") | SPAWN_CHARS
_MAP_CHARS = _OPEN_CHARS | {" "}
_LEADING_SPACE = " \t\n\v\f\r"

_TEXTURE_KEYS = {"NO ": "north", "SO ": "south", "WE ": "west", "EA ": "east"}
_COLOR_KEYS = {"F ": "floor", "C ": "ceiling"}

Spawn = Tuple[int, int, str]


class SceneError(ValueError):
    """Raised when a scene description is malformed."""


@dataclass(frozen=True)
class Color:
    """An opaque RGB colour with channels from 0 to 255."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise SceneError(f"colour channel out of range: {channel}")

    def rgba(self) -> int:
        """The colour packed as 0xRRGGBBAA with full opacity."""
        return (self.r << 24) | (self.g << 16) | (self.b << 8) | 255


@dataclass(frozen=True)
class Scene:
    """A validated scene: wall textures, floor and ceiling colours, and map."""

    north: str
    south: str
    west: str
    east: str
    floor: Color
    ceiling: Color
    rows: Tuple[str, ...]
    spawn: Spawn


def split_fields(text: str, sep: str) -> List[str]:
    """Split ``text`` on ``sep``, dropping empty fields.

    With a comma separator, a comma followed by another comma or by the end
    of the text is rejected.
    """
    if len(sep) != 1:
        raise ValueError(f"separator must be a single character, got {sep!r}")
    if sep == "," and (",," in text or text.endswith(",")):
        raise SceneError(f"misplaced comma in {text!r}")
    return [field for field in text.split(sep) if field]


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _check_number_syntax(text: str) -> None:
    for ch, following in zip(text, text[1:] + "\0"):
        if ch in "+-" and following == "\0":
            raise SceneError(f"sign without digits in {text!r}")
        if not _is_digit(ch) and ch not in "+- ":
            raise SceneError(f"bad number {text!r}")
        if ch in "+-" and following == " ":
            raise SceneError(f"sign followed by a space in {text!r}")
        if _is_digit(ch) and following in "+-":
            raise SceneError(f"sign after a digit in {text!r}")


def parse_number(text: str) -> int:
    """Read a decimal integer after optional leading whitespace and one sign.

    Only digits, signs and spaces may follow the leading whitespace; text
    with no digits reads as 0.
    """
    rest = text.lstrip(_LEADING_SPACE)
    _check_number_syntax(rest)
    sign = 1
    if rest[:1] in ("+", "-"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    if rest[:1] in ("+", "-"):
        raise SceneError(f"repeated sign in {text!r}")
    digits = re.match(r"[0-9]*", rest).group()
    return sign * int(digits) if digits else 0


def parse_color(text: str) -> Color:
    """Parse ``r,g,b`` with each channel between 0 and 255."""
    fields = split_fields(text, ",")
    if len(fields) != 3 or any(len(split_fields(f, " ")) != 1 for f in fields):
        raise SceneError(f"a colour needs exactly three values: {text!r}")
    values = [parse_number(field) for field in fields]
    if any(not 0 <= value <= 255 for value in values):
        raise SceneError(f"colour value out of range: {text!r}")
    return Color(*values)


def _cell(rows: Sequence[str], row: int, column: int) -> str:
    if 0 <= row < len(rows) and 0 <= column < len(rows[row]):
        return rows[row][column]
    return ""


def _check_enclosed(rows: Sequence[str], row: int, column: int) -> None:
    if column == 0:
        raise SceneError(f"open cell on the map edge at row {row}, column {column}")
    for d_row, d_column in ((0, 1), (-1, 0), (1, 0), (0, -1)):
        if _cell(rows, row + d_row, column + d_column) not in _OPEN_CHARS:
            raise SceneError(f"map not closed at row {row}, column {column}")


def validate_map(rows: Sequence[str]) -> Spawn:
    """Check the map and return the spawn as (column, row, direction)."""
    if not rows:
        raise SceneError("no map")
    last = len(rows) - 1
    spawns: List[Spawn] = []
    for j, line in enumerate(rows):
        for i, ch in enumerate(line):
            if ch not in _MAP_CHARS:
                raise SceneError(f"invalid map character {ch!r} at row {j}, column {i}")
            if ch not in " 1" and j in (0, last):
                raise SceneError(f"open cell on the map border at row {j}, column {i}")
            if ch in _OPEN_CHARS - {"1"}:
                _check_enclosed(rows, j, i)
                if ch in SPAWN_CHARS:
                    spawns.append((i, j, ch))
    if len(spawns) != 1:
        raise SceneError(f"the map needs exactly one spawn, found {len(spawns)}")
    return spawns[0]


def _check_no_gap(text: str, first_row: str) -> None:
    start = text.find(first_row)
    if start < 0:
        return
    gap = text.find("\n\n", start)
    if gap >= 0 and any(ch in _OPEN_CHARS for ch in text[gap:]):
        raise SceneError("blank line inside the map")


def _texture_path(line: str, check_paths: bool) -> str:
    tokens = split_fields(line, " ")
    if len(tokens) != 2:
        raise SceneError(f"bad texture line {line!r}")
    path = tokens[1]
    if check_paths:
        try:
            with open(path, "rb"):
                pass
        except OSError as exc:
            raise SceneError(f"cannot open texture {path!r}") from exc
    return path


def parse_scene(text: str, check_paths: bool = True) -> Scene:
    """Parse a whole scene description.

    With ``check_paths`` every texture path must name a readable file.
    """
    if not text:
        raise SceneError("scene is empty")
    lines = split_fields(text, "\n")
    textures: Dict[str, str] = {}
    colors: Dict[str, Color] = {}
    index = -1
    for index, raw in enumerate(lines):
        line = raw.lstrip(" ")
        texture_key = next((k for k in _TEXTURE_KEYS if line.startswith(k)), None)
        color_key = next((k for k in _COLOR_KEYS if line.startswith(k)), None)
        if texture_key and _TEXTURE_KEYS[texture_key] not in textures:
            textures[_TEXTURE_KEYS[texture_key]] = _texture_path(line, check_paths)
        elif color_key and _COLOR_KEYS[color_key] not in colors:
            colors[_COLOR_KEYS[color_key]] = parse_color(line[2:].lstrip(" "))
        else:
            raise SceneError(f"unexpected line {raw!r}")
        if len(textures) == len(_TEXTURE_KEYS) and len(colors) == len(_COLOR_KEYS):
            break
    else:
        raise SceneError("missing scene elements")
    rows = lines[index + 1 :]
    if not rows:
        raise SceneError("no map")
    _check_no_gap(text, rows[0])
    spawn = validate_map(rows)
    return Scene(
        north=textures["north"],
        south=textures["south"],
        west=textures["west"],
        east=textures["east"],
        floor=colors["floor"],
        ceiling=colors["ceiling"],
        rows=tuple(rows),
        spawn=spawn,
    )


def load_scene(path: Union[str, Path]) -> Scene:
    """Read and parse the scene file at ``path``."""
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise SceneError(f"cannot open scene {str(path)!r}") from exc
    return parse_scene(text)