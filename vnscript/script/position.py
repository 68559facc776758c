from __future__ import annotations

from typing import Tuple


def line_column(source: str, offset: int) -> Tuple[int, int]:
    """Map an offset into ``source`` to a 1-based (line, column) pair."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    # rfind returns -1 on the first line, which lines up with column 1
    column = offset - source.rfind("\n", 0, offset)
    return line, column


def line_at(source: str, offset: int) -> str:
    """Return the text of the line containing ``offset`` (without its break)."""
    offset = max(0, min(offset, len(source)))
    start = source.rfind("\n", 0, offset) + 1
    end = source.find("\n", offset)
    if end == -1:
        end = len(source)
    return source[start:end].rstrip("\r")
