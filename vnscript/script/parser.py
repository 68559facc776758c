"""
Element parsers.

Every parser takes the full source plus the offset where its element starts
(already past leading whitespace) and returns ``(element, end)``, ``end``
being the first unconsumed offset. Structural failures raise
``MalformedElement`` located at the offset where parsing stopped.
"""
from __future__ import annotations

import re
from typing import List, Tuple

from .directives import resolve
from .errors import DirectiveError, MalformedElement
from .model import Comment, Dialogue, Directive


DIALOGUE_HINT = "["
DIRECTIVE_HINT = "@"
COMMENT_HINT = "#"

# a dialogue body stops before a line that opens a directive or comment
BODY_END_RE = re.compile(r"\n[@#]")
DIRECTIVE_NAME_RE = re.compile(r"[A-Za-z]+")
EOL_RE = re.compile(r"[\r\n]")


def is_dialogue(text: str) -> bool:
    return text.startswith(DIALOGUE_HINT)


def is_directive(text: str) -> bool:
    return text.startswith(DIRECTIVE_HINT)


def is_comment(text: str) -> bool:
    return text.startswith(COMMENT_HINT)


def _eol(source: str, pos: int) -> int:
    """Offset of the line break ending the line at ``pos`` (or end of input)."""
    m = EOL_RE.search(source, pos)
    return m.start() if m else len(source)


def _malformed(source: str, pos: int, expected: str, message: str) -> MalformedElement:
    err = MalformedElement(pos, expected, message)
    err.locate(source, pos)
    return err


def parse_dialogue(source: str, offset: int) -> Tuple[Dialogue, int]:
    pos = offset + len(DIALOGUE_HINT)
    eol = _eol(source, pos)
    close = source.find("]", pos, eol)
    if close == -1:
        raise _malformed(source, eol, "']'", "Expected ']' to close speaker name")
    name = source[pos:close].strip()

    body_start = close + 1
    m = BODY_END_RE.search(source, body_start)
    if m:
        body = source[body_start:m.start()]
        # resume on the marker itself, past the line break
        end = m.start() + 1
    else:
        body = source[body_start:]
        end = len(source)
    return Dialogue(name=name, body=" ".join(body.split())), end


def split_arguments(raw: str) -> List[str]:
    if not raw.strip():
        return []
    return [piece.strip() for piece in raw.split(",")]


def parse_directive(source: str, offset: int) -> Tuple[Directive, int]:
    pos = offset + len(DIRECTIVE_HINT)
    m = DIRECTIVE_NAME_RE.match(source, pos)
    if not m:
        raise _malformed(source, pos, "directive name", "Expected directive name, found nothing")
    name = m.group(0)
    pos = m.end()
    if not source.startswith("(", pos):
        raise _malformed(source, pos, "'('", f"Expected '(' after directive name {name}")
    pos += 1
    eol = _eol(source, pos)
    close = source.find(")", pos, eol)
    if close == -1:
        raise _malformed(source, eol, "')'", "Expected matching parentheses )")
    args = split_arguments(source[pos:close])
    try:
        directive = resolve(name, args)
    except DirectiveError as e:
        e.locate(source, offset)
        raise
    return directive, close + 1


def parse_comment(source: str, offset: int) -> Tuple[Comment, int]:
    nl = source.find("\n", offset)
    end = len(source) if nl == -1 else nl + 1
    return Comment(), end
