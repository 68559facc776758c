from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

from .config_io import EngineConfig
from .event_bus import EventBus
from .image_cache import ImageCache
from ..script.cursor import Script
from ..script.directives import DIRECTIVES
from ..script.errors import ScriptError
from ..script.model import Context, Sprite


logger = logging.getLogger(__name__)


class EngineState(enum.Enum):
    RUNNING = "running"
    ERRORED = "errored"
    EXHAUSTED = "exhausted"


class Engine:
    """
    Drives one script at a time and owns all playback state.

    ``next()`` advances the current script once and runs a directive's effect
    before handing it back; ``peek()`` parses the same element with no effect.
    Both return ``None`` once the script is exhausted. The first error moves
    the engine to ``ERRORED`` and is raised again on every later call.
    """

    def __init__(
        self,
        source: str | Path | Script,
        config: Optional[EngineConfig] = None,
        image_loader: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.events = EventBus()
        self.state = EngineState.RUNNING
        self._error: Optional[ScriptError] = None
        # playback state
        self.bg_path: Optional[str] = None
        self.sprites: List[Sprite] = []
        self.bgs_cache = ImageCache(image_loader, self.config.assets_dir)
        self.sprites_cache = ImageCache(image_loader, self.config.assets_dir)
        if isinstance(source, Script):
            self.script = source
        else:
            self.script = Script.from_file(source, self.config.encoding)
        logger.debug(f"engine started on {self.script.origin or '<string>'}")

    # --- script ownership ---
    def resolve_path(self, path: str) -> Path:
        p = Path(path)
        if p.is_absolute() or not self.config.relative_to_script or not self.script.origin:
            return p
        return Path(self.script.origin).parent / p

    def open_script(self, path: str) -> Script:
        """Read ``path`` into a fresh cursor; raises SourceUnreadable."""
        return Script.from_file(self.resolve_path(path), self.config.encoding)

    def replace_script(self, script: Script) -> None:
        # the previous cursor is dropped with whatever it had left unread
        self.script = script
        self.events.emit("engine.load", path=script.origin)

    # --- stepping ---
    def _fail(self, error: ScriptError) -> None:
        self.state = EngineState.ERRORED
        self._error = error
        logger.debug(f"engine halted: {error.message}")

    def next(self) -> Optional[Context]:
        if self.state is EngineState.ERRORED:
            assert self._error is not None
            raise self._error
        if self.state is EngineState.EXHAUSTED:
            return None

        script = self.script
        mark = script.offset
        try:
            ctx = script.advance()
        except ScriptError as e:
            self._fail(e)
            raise
        if ctx is None:
            self.state = EngineState.EXHAUSTED
            return None

        if isinstance(ctx, DIRECTIVES):
            try:
                ctx.exec(self)
            except ScriptError as e:
                # the directive never took effect; leave the cursor on it
                if self.script is script:
                    script.seek(mark)
                self._fail(e)
                raise
        return ctx

    def peek(self) -> Optional[Context]:
        if self.state is EngineState.ERRORED:
            assert self._error is not None
            raise self._error
        if self.state is EngineState.EXHAUSTED:
            return None
        return self.script.peek()

    def __iter__(self) -> Iterator[Context]:
        return self

    def __next__(self) -> Context:
        ctx = self.next()
        if ctx is None:
            raise StopIteration
        return ctx

    # --- rendering collaborator helpers ---
    def background(self) -> Optional[Any]:
        """Decoded image for the current background, cached by path."""
        if self.bg_path is None:
            return None
        return self.bgs_cache.load(self.bg_path)

    def sprite_image(self, sprite: Sprite) -> Any:
        return self.sprites_cache.load(sprite.sprite)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "script": self.script.origin,
            "line_column": self.script.line_column(),
            "state": self.state.value,
            "bg_path": self.bg_path,
            "sprites": [s.sprite for s in self.sprites],
        }
