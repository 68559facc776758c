from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional, Tuple

from .errors import ScriptError, SourceUnreadable
from .model import Context
from .parser import (
    is_comment,
    is_dialogue,
    is_directive,
    parse_comment,
    parse_dialogue,
    parse_directive,
)
from .position import line_column


logger = logging.getLogger(__name__)


class Script:
    """
    Forward-only cursor over one script's text.

    The text never changes; only ``offset`` moves. ``peek()`` parses at the
    current offset without committing, ``advance()`` parses and commits.
    Exhaustion is reported as ``None``. After ``advance()`` raises, the
    offset stays where the failing element starts and every later
    ``advance()`` raises the same error: a fresh ``Script`` is needed to parse
    again.
    """

    def __init__(self, text: str, origin: Optional[str] = None) -> None:
        self._text = text
        self._offset = 0
        self._error: Optional[ScriptError] = None
        self.origin = origin

    @classmethod
    def from_string(cls, text: str, origin: Optional[str] = None) -> "Script":
        return cls(text, origin)

    @classmethod
    def from_file(cls, path: str | Path, encoding: str = "utf-8") -> "Script":
        try:
            text = Path(path).read_text(encoding=encoding)
        except (OSError, ValueError, LookupError) as e:
            # ValueError covers UnicodeDecodeError and NUL bytes in the path
            raise SourceUnreadable(str(path), str(e)) from e
        logger.debug(f"loaded script {path} ({len(text)} chars)")
        return cls(text, str(path))

    @property
    def text(self) -> str:
        return self._text

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> str:
        return self._text[self._offset:]

    @property
    def failed(self) -> bool:
        return self._error is not None

    def line_column(self) -> Tuple[int, int]:
        return line_column(self._text, self._offset)

    def seek(self, offset: int) -> None:
        """Move back to an offset this cursor already committed."""
        if not 0 <= offset <= self._offset:
            raise ValueError(f"cannot seek forward to {offset} (at {self._offset})")
        self._offset = offset
        self._error = None

    def _scan(self) -> Optional[Tuple[Context, int]]:
        start = self._offset
        # skip leading whitespace without copying the tail
        while start < len(self._text) and self._text[start].isspace():
            start += 1
        head = self._text[start:start + 1]
        if is_dialogue(head):
            return parse_dialogue(self._text, start)
        if is_directive(head):
            return parse_directive(self._text, start)
        if is_comment(head):
            return parse_comment(self._text, start)
        return None

    def peek(self) -> Optional[Context]:
        if self._error is not None:
            raise self._error
        step = self._scan()
        return step[0] if step else None

    def advance(self) -> Optional[Context]:
        if self._error is not None:
            raise self._error
        try:
            step = self._scan()
        except ScriptError as e:
            self._error = e
            raise
        if step is None:
            return None
        ctx, self._offset = step
        logger.debug(f"parsed {ctx!r}")
        return ctx

    next = advance

    def __iter__(self) -> Iterator[Context]:
        return self

    def __next__(self) -> Context:
        ctx = self.advance()
        if ctx is None:
            raise StopIteration
        return ctx
