"""String searching, slicing and joining helpers with C-string semantics.

A search for the NUL character finds the end of the string, comparisons
treat the end of a string as a NUL code, and ``None`` stands for a missing
string where the operation allows it.
"""

from __future__ import annotations

from typing import Callable, Optional

__all__ = [
    "find_char",
    "find_last_char",
    "compare_prefix",
    "find_within",
    "substring",
    "join",
    "trim",
    "map_indexed",
    "for_each_indexed",
]

_NUL = "\0"


def _check_char(c: str) -> None:
    if not isinstance(c, str) or len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")


def find_char(s: str, c: str) -> Optional[int]:
    """Index of the first ``c`` in ``s``; ``len(s)`` for NUL; None if absent."""
    _check_char(c)
    if c == _NUL:
        return len(s)
    index = s.find(c)
    return None if index < 0 else index


def find_last_char(s: str, c: str) -> Optional[int]:
    """Index of the last ``c`` in ``s``; ``len(s)`` for NUL; None if absent."""
    _check_char(c)
    if c == _NUL:
        return len(s)
    index = s.rfind(c)
    return None if index < 0 else index


def compare_prefix(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` characters; the sign tells the ordering.

    Returns the code difference of the first differing characters, or 0
    when the first ``n`` characters match or both strings end first.
    """
    for i in range(max(n, 0)):
        a = ord(s1[i]) if i < len(s1) else 0
        b = ord(s2[i]) if i < len(s2) else 0
        if a != b:
            return a - b
        if a == 0:
            break
    return 0


def find_within(haystack: str, needle: str, length: int) -> Optional[int]:
    """Index of ``needle`` wholly inside the first ``length`` characters.

    An empty needle is found at 0; None when there is no match.
    """
    if not needle:
        return 0
    index = haystack[: max(length, 0)].find(needle)
    return None if index < 0 else index


def substring(s: str, start: int, length: int) -> str:
    """Up to ``length`` characters of ``s`` from ``start``; empty past the end."""
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    if start > len(s):
        return ""
    return s[start : start + length]


def join(s1: Optional[str], s2: Optional[str]) -> Optional[str]:
    """Concatenate two strings; a missing one is treated as absent."""
    if s1 is None and s2 is None:
        return None
    return (s1 or "") + (s2 or "")


def trim(s: Optional[str], charset: Optional[str]) -> Optional[str]:
    """Strip characters found in ``charset`` from both ends of ``s``."""
    if s is None:
        return None
    if charset is None:
        return s
    return s.strip(charset) if charset else s


def map_indexed(
    s: Optional[str], f: Optional[Callable[[int, str], str]]
) -> str:
    """Build a new string from ``f(index, char)`` for every character."""
    if s is None:
        return ""
    if f is None:
        return s
    return "".join(f(i, ch) for i, ch in enumerate(s))


def for_each_indexed(
    s: Optional[str], f: Callable[[int, str], object]
) -> None:
    """Call ``f(index, char)`` for every character of ``s``."""
    if s is None:
        return
    for i, ch in enumerate(s):
        f(i, ch)