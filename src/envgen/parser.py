from __future__ import annotations
from pathlib import Path
import re
from typing import Dict, Tuple, Union

from .errors import EnvFileNotFoundError, MalformedLineError
from .log import debug, warn

_NAME_RE = re.compile(r"^\w+$")
_QUOTES = ("'", '"')

def _unquote(value: str) -> Tuple[str, bool]:
    # one layer only: "'a'" -> 'a'
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1], True
    return value, False

def _parse_value(raw: str) -> str:
    if raw[:1] in _QUOTES:
        # quoted value, optionally followed by a comment: "a # b" # note
        end = raw.find(raw[0], 1)
        if end > 0:
            rest = raw[end + 1:].strip()
            if not rest or rest.startswith("#"):
                return raw[1:end]
    value, quoted = _unquote(raw)
    if quoted:
        return value
    # unquoted: '#' starts an inline comment
    if "#" in raw:
        raw = raw[: raw.index("#")].rstrip()
    return raw

def _parse_env_line(lineno: int, line: str):
    """Return ``(name, value)`` for an assignment, ``(None, None)`` for
    blank lines and comments. Raises :class:`MalformedLineError` otherwise."""
    s = line.strip()
    if not s or s.startswith("#"):
        return None, None
    if s.startswith("export "):
        s = s[len("export "):].lstrip()
    if "=" not in s:
        raise MalformedLineError(lineno, line)
    key, _, val = s.partition("=")
    key = key.strip()
    if not _NAME_RE.match(key):
        raise MalformedLineError(lineno, line, "invalid name")
    return key, _parse_value(val.strip())

def parse_env_text(text: str) -> Dict[str, str]:
    """Parse env-file text into an ordered ``{name: value}`` dict.

    Later assignments overwrite earlier ones but the key keeps the position
    where it was first seen. Malformed lines are reported and skipped.
    """
    d: Dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), 1):
        try:
            k, v = _parse_env_line(lineno, line)
        except MalformedLineError as ex:
            warn(f"Skipping env {ex}")
            continue
        if k:
            d[k] = v
    return d

def load_env_file(path: Union[str, Path]) -> Dict[str, str]:
    p = Path(path)
    if not p.is_file():
        raise EnvFileNotFoundError(f"Env file not found: {p}")
    # utf-8-sig drops a BOM written by some editors
    d = parse_env_text(p.read_text(encoding="utf-8-sig"))
    debug(f"{p}: {len(d)} variables")
    return d
