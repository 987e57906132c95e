"""Exceptions raised by envgen.

Everything derives from :class:`EnvgenError` so the CLI can report any of them
with a single ``except``. Missing-file errors also subclass
``FileNotFoundError`` for callers that only care about the filesystem.
"""

from __future__ import annotations


class EnvgenError(Exception):
    """Base class for envgen failures."""


class EnvFileNotFoundError(EnvgenError, FileNotFoundError):
    """The env file to parse does not exist."""


class EntryPointNotFoundError(EnvgenError, FileNotFoundError):
    """The entry-point file needed to place the generated module is missing."""


class MalformedLineError(EnvgenError, ValueError):
    """A line of the env file is not a ``NAME=value`` assignment.

    The parser never lets this escape: the line is reported and skipped.
    """

    def __init__(self, lineno: int, line: str, reason: str = "missing '='") -> None:
        super().__init__(f"line {lineno}: {reason}: {line!r}")
        self.lineno = lineno
        self.line = line
        self.reason = reason


class InvalidKeyError(EnvgenError, ValueError):
    """A key cannot be turned into a Python identifier."""


class IdentifierCollisionError(EnvgenError, ValueError):
    """Two keys (or a key and a reserved member) map to the same accessor."""


class ConfigError(EnvgenError, ValueError):
    """``envgen.yaml`` cannot be read as a mapping of settings."""
