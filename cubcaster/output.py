"""Write characters, strings and numbers to a text stream."""

from __future__ import annotations

from typing import Optional, TextIO

from cubcaster.charclass import itoa

__all__ = ["put_char", "put_str", "put_endl", "put_number"]


def put_char(c: str, stream: TextIO) -> None:
    """Write a single character to ``stream``."""
    if not isinstance(c, str) or len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")
    stream.write(c)


def put_str(s: Optional[str], stream: TextIO) -> None:
    """Write ``s`` to ``stream``; a missing string writes nothing."""
    if s is None:
        return
    stream.write(s)


def put_endl(s: Optional[str], stream: TextIO) -> None:
    """Write ``s`` followed by a newline; a missing string writes nothing."""
    if s is None:
        return
    stream.write(s)
    stream.write("\n")


def put_number(n: int, stream: TextIO) -> None:
    """Write the decimal form of ``n``, with a leading '-' when negative."""
    stream.write(itoa(n))