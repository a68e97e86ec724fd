"""Grid-based raycasting explorer for .cub scene files: scene parsing, ray casting, rendering and a pygame game loop."""

__version__ = "0.1.0"
__all__ = [
    "charclass",
    "textops",
    "output",
    "linereader",
    "scene",
    "raycast",
    "render",
    "game",
]