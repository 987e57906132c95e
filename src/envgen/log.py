from __future__ import annotations
from datetime import datetime
import os

def _ts() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

def section(title: str) -> None:
    bar = "─" * (len(title) + 2)
    print(f"╭{bar}╮\n│ {title} │\n╰{bar}╯")

def info(msg: str) -> None:
    print(f"{_ts()} {msg}")

def ok(msg: str) -> None:
    print(f"{_ts()} OK {msg}")

def warn(msg: str) -> None:
    print(f"{_ts()} WARN {msg}")

def err(msg: str) -> None:
    print(f"{_ts()} ERROR {msg}")


def debug(msg: str) -> None:
    """Print a debug line, only when ENVGEN_DEBUG is set."""

    if "ENVGEN_DEBUG" not in os.environ:
        return
    print(f"{_ts()} DEBUG {msg}")
