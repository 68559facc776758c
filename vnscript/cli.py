from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .engine.config_io import EngineConfig, check_log_level
from .engine.engine import Engine
from .script.cursor import Script
from .script.errors import ScriptError
from .script.model import Comment, Context, Dialogue, Jump, LoadBG


def describe(ctx: Context) -> str:
    if isinstance(ctx, Dialogue):
        return f"[{ctx.name}] {ctx.body}"
    if isinstance(ctx, Jump):
        if ctx.choices:
            a, b = ctx.choices
            return f"@jump({a} | {b} -> {ctx.path})"
        return f"@jump({ctx.path})"
    if isinstance(ctx, LoadBG):
        return f"@loadbg({ctx.path})"
    if isinstance(ctx, Comment):
        return "# comment"
    return repr(ctx)


def _cmd_run(script: str, config: EngineConfig) -> int:
    path = Path(script)
    if not path.exists():
        print(f"Script not found: {path}", file=sys.stderr)
        return 2
    try:
        engine = Engine(path, config)
        while True:
            ctx = engine.next()
            if ctx is None:
                break
            line, col = engine.script.line_column()
            print(f"{line}:{col}\t{describe(ctx)}")
    except ScriptError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def _cmd_check(files: List[str], config: EngineConfig) -> int:
    failed = 0
    for f in files:
        try:
            elements = sum(1 for _ in Script.from_file(f, config.encoding))
        except ScriptError as e:
            failed += 1
            loc = f"{e.line}:{e.column}" if e.line else "?:?"
            print(f"{f}:{loc}: {e.message}")
            continue
        print(f"{f}: ok ({elements} elements)")
    return 1 if failed else 0


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="vnscript", description="vnscript runner")
    parser.add_argument("--config", type=str, default=None, help="Path to JSON config file")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (overrides config)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Run a .vn script, executing directives")
    p_run.add_argument("script", type=str, help="Path to the entry script")

    p_check = sub.add_parser("check", help="Parse scripts without executing directives")
    p_check.add_argument("files", nargs="+", help="Script files to check")

    args = parser.parse_args(argv)

    try:
        config = EngineConfig.load(args.config)
    except ValueError as e:
        print(f"Bad config: {e}", file=sys.stderr)
        return 2
    try:
        level = check_log_level(args.log_level or config.log_level)
    except ValueError as e:
        print(f"Bad log level: {e}", file=sys.stderr)
        return 2
    logging.basicConfig(stream=sys.stderr, level=level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.cmd == "run":
        return _cmd_run(args.script, config)
    return _cmd_check(args.files, config)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
