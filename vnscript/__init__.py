"""
vnscript - incremental parser and runner for ``.vn`` visual novel scripts.

Layout:
- script: position tracker, element parsers, directive registry, cursor
- engine: playback state, image caches, config, event bus
- cli: ``vnscript run`` / ``vnscript check``
"""

from .engine.engine import Engine, EngineState
from .script.cursor import Script
from .script.errors import (
    ScriptError,
    MalformedElement,
    DirectiveError,
    UnknownDirective,
    MissingArgument,
    InvalidArity,
    SourceUnreadable,
)
from .script.model import Comment, Context, Dialogue, Directive, Jump, LoadBG

__all__ = [
    "Engine",
    "EngineState",
    "Script",
    "ScriptError",
    "MalformedElement",
    "DirectiveError",
    "UnknownDirective",
    "MissingArgument",
    "InvalidArity",
    "SourceUnreadable",
    "Comment",
    "Context",
    "Dialogue",
    "Directive",
    "Jump",
    "LoadBG",
]
