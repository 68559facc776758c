"""
Directive registry.

Each directive kind is a frozen dataclass with two hooks:

- ``parse(name, args)``: ``None`` when ``name`` is not this kind's name,
  otherwise an instance, or a ``DirectiveError`` when the name matched but
  the arguments did not fit. A matched name never falls through to the next
  kind.
- ``exec(engine)``: the side effect applied by ``Engine.next()``.

``DIRECTIVES`` fixes the resolution order. Adding a directive means adding a
dataclass here and appending it to that tuple.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Type, Union

from .errors import InvalidArity, MissingArgument, UnknownDirective

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.engine import Engine


logger = logging.getLogger(__name__)


def _arg(args: Sequence[str], pos: int, role: str) -> str:
    try:
        return args[pos]
    except IndexError:
        raise MissingArgument(pos, role) from None


@dataclass(frozen=True)
class Jump:
    path: str
    choices: Optional[Tuple[str, str]] = None

    NAME = "jump"

    @classmethod
    def parse(cls, name: str, args: Sequence[str]) -> Optional["Jump"]:
        if name != cls.NAME:
            return None
        if len(args) == 1:
            return cls(path=args[0])
        if len(args) == 3:
            return cls(path=args[2], choices=(args[0], args[1]))
        raise InvalidArity("jump directive take either 1 or 3 arguments")

    def exec(self, engine: "Engine") -> None:
        # open first: a missing target must leave the running script untouched
        script = engine.open_script(self.path)
        logger.info(f"jump -> {script.origin}")
        engine.replace_script(script)
        engine.events.emit("engine.jump", path=self.path, choices=self.choices)


@dataclass(frozen=True)
class LoadBG:
    path: str

    NAME = "loadbg"

    @classmethod
    def parse(cls, name: str, args: Sequence[str]) -> Optional["LoadBG"]:
        if name != cls.NAME:
            return None
        path = _arg(args, 0, "bg path")
        if len(args) > 1:
            logger.debug(f"loadbg: ignoring extra arguments {list(args[1:])}")
        return cls(path=path)

    def exec(self, engine: "Engine") -> None:
        engine.bg_path = self.path
        logger.info(f"background -> {self.path}")
        engine.events.emit("engine.bg", path=self.path)


DirectiveKind = Union[Type[Jump], Type[LoadBG]]

DIRECTIVES: Tuple[DirectiveKind, ...] = (Jump, LoadBG)


def resolve(name: str, args: Sequence[str]) -> Union[Jump, LoadBG]:
    """Return the first directive kind that claims ``name``, parsed from ``args``."""
    for kind in DIRECTIVES:
        directive = kind.parse(name, args)
        if directive is not None:
            return directive
    raise UnknownDirective(name)


def names() -> list[str]:
    return [kind.NAME for kind in DIRECTIVES]
