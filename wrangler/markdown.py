"""Line-level markdown helpers shared by the linter and rewriters."""

from __future__ import annotations

import re
from typing import Iterator, List, Tuple

from .models import Heading

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")

FENCE_TOKEN = "```"

# Code point ranges treated as icons when deciding whether a heading is decorated.
_ICON_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x1F300, 0x1F9FF),
    (0x2600, 0x27BF),
    (0x1F600, 0x1F64F),
)

# Characters that can trail an icon glyph (variation selectors, joiners).
_ICON_MODIFIERS = {"\ufe0e", "\ufe0f", "\u200d"}


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` keeping empty trailing segments."""
    return text.split("\n")


def is_fence(line: str) -> bool:
    return line.strip().startswith(FENCE_TOKEN)


def iter_fence_states(lines: List[str]) -> Iterator[Tuple[int, str, bool]]:
    """Yield ``(index, line, in_code)`` for each line.

    Fence lines report the state *before* they toggle, so an opening fence
    yields ``False`` and its closing fence yields ``True``. An unterminated
    fence keeps every following line in code.
    """
    in_code = False
    for index, line in enumerate(lines):
        yield index, line, in_code
        if is_fence(line):
            in_code = not in_code


def ends_in_code(text: str) -> bool:
    """Return True when ``text`` finishes inside an unterminated fence."""
    in_code = False
    for line in split_lines(text):
        if is_fence(line):
            in_code = not in_code
    return in_code


def parse_heading(line: str, line_index: int = 0) -> Heading | None:
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    title = match.group(2).strip()
    if not title:
        return None
    return Heading(level=len(match.group(1)), title=title, line_index=line_index)


def iter_headings(text: str) -> Iterator[Heading]:
    """Yield ATX headings in document order, skipping fenced code."""
    for index, line, in_code in iter_fence_states(split_lines(text)):
        if in_code or is_fence(line):
            continue
        heading = parse_heading(line, index)
        if heading is not None:
            yield heading


def has_icon(text: str) -> bool:
    for char in text:
        codepoint = ord(char)
        for start, end in _ICON_RANGES:
            if start <= codepoint <= end:
                return True
    return False


def strip_icons(title: str) -> str:
    """Drop leading icon glyphs so titles compare by their words."""
    index = 0
    while index < len(title):
        char = title[index]
        if char.isspace() or char in _ICON_MODIFIERS or has_icon(char):
            index += 1
            continue
        break
    return title[index:]


__all__ = [
    "FENCE_TOKEN",
    "HEADING_PATTERN",
    "ends_in_code",
    "has_icon",
    "is_fence",
    "iter_fence_states",
    "iter_headings",
    "parse_heading",
    "split_lines",
    "strip_icons",
]
