from __future__ import annotations

from dataclasses import dataclass

from .position import line_at, line_column


@dataclass
class ScriptError(Exception):
    message: str
    line: int | None = None
    column: int | None = None
    context: str | None = None

    def __str__(self) -> str:
        if self.line and self.column:
            loc = f" (line {self.line}, column {self.column})"
        elif self.line:
            loc = f" (line {self.line})"
        else:
            loc = ""
        ctx = f"\n  >> {self.context}" if self.context else ""
        return f"{self.message}{loc}{ctx}"

    def locate(self, source: str, offset: int) -> "ScriptError":
        """Fill in line/column/context from an offset into ``source``."""
        self.line, self.column = line_column(source, offset)
        self.context = line_at(source, offset)
        return self


class MalformedElement(ScriptError):
    """Structural parse failure: unterminated ``[...]``, missing ``(`` or ``)``."""

    def __init__(self, offset: int, expected: str, message: str | None = None) -> None:
        super().__init__(message or f"Expected {expected}")
        self.offset = offset
        self.expected = expected


class DirectiveError(ScriptError):
    """A directive name or argument list was rejected by the registry."""


class UnknownDirective(DirectiveError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown directive {name}")
        self.name = name


class MissingArgument(DirectiveError):
    def __init__(self, position: int, role: str) -> None:
        super().__init__(f"Missing argument {role} at position {position}")
        self.position = position
        self.role = role


class InvalidArity(DirectiveError):
    pass


class SourceUnreadable(ScriptError):
    def __init__(self, path: str, reason: str = "") -> None:
        msg = f"Cannot read script {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = path
