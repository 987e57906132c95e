"""Generate a typed ``env.py`` accessor module from a ``.env`` file."""

from . import bootstrap, codegen, config_mgr, errors, main, parser, patcher

__all__ = [
    "__version__",
    "bootstrap",
    "codegen",
    "config_mgr",
    "errors",
    "main",
    "parser",
    "patcher",
]

__version__ = "1.0.0"
