from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .directives import Jump, LoadBG


@dataclass(frozen=True)
class Dialogue:
    name: str
    body: str


@dataclass(frozen=True)
class Comment:
    pass


@dataclass
class Sprite:
    sprite: str
    x: int = 0
    y: int = 0
    scale: float = 1.0
    visible: bool = True


Directive = Union[Jump, LoadBG]
Context = Union[Dialogue, Directive, Comment]

__all__ = ["Dialogue", "Comment", "Sprite", "Jump", "LoadBG", "Directive", "Context"]
