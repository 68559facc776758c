from __future__ import annotations

import codecs
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)


DEFAULTS = {
    "script": {
        "encoding": "utf-8",
        "relative_to_script": False,
    },
    "assets": {
        "base_dir": None,
    },
    "logging": {
        "level": "WARNING",
    },
}


def check_log_level(level: str) -> str:
    """Upper-cased level name; ValueError if logging does not know it."""
    name = str(level).upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"unknown log level {level!r}")
    return name


def _merged(data: dict) -> dict:
    # shallow merge per section, unknown sections/keys dropped
    out = {}
    for section, defaults in DEFAULTS.items():
        merged = dict(defaults)
        given = data.get(section) or {}
        if isinstance(given, dict):
            merged.update({k: v for k, v in given.items() if k in defaults})
        out[section] = merged
    return out


def load_config(path: Optional[str | Path] = None) -> dict:
    if path is None:
        return _merged({})
    p = Path(path)
    if not p.exists():
        logger.debug(f"no config at {p}, using defaults")
        return _merged({})
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"config {p} must be a JSON object")
    return _merged(data)


def save_config(cfg: dict, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(_merged(cfg), ensure_ascii=False, indent=2), encoding="utf-8")


@dataclass
class EngineConfig:
    encoding: str = "utf-8"
    relative_to_script: bool = False
    assets_dir: Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, cfg: dict) -> "EngineConfig":
        cfg = _merged(cfg)
        encoding = str(cfg["script"]["encoding"])
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ValueError(f"unknown script encoding {encoding!r}") from None
        return cls(
            encoding=encoding,
            relative_to_script=bool(cfg["script"]["relative_to_script"]),
            assets_dir=cfg["assets"]["base_dir"],
            log_level=check_log_level(cfg["logging"]["level"]),
        )

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "EngineConfig":
        return cls.from_dict(load_config(path))
