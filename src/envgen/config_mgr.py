# -*- coding: utf-8 -*-
from __future__ import annotations
from dataclasses import asdict, dataclass, fields
import os
import yaml

from .errors import ConfigError

CFG_PATH = "envgen.yaml"

@dataclass
class EnvgenConfig:
    env_file: str = ".env"
    entry_file: str = "main.py"
    entry_function: str = "main"
    output_name: str = "env.py"
    ignore_file: str = ".gitignore"

def load_config(path: str = CFG_PATH) -> EnvgenConfig:
    """Read *path*; a missing file or missing keys fall back to defaults."""
    if not os.path.exists(path):
        return EnvgenConfig()
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as ex:
            raise ConfigError(f"{path}: {ex}") from ex
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(EnvgenConfig)}
    return EnvgenConfig(**{k: str(v) for k, v in data.items() if k in known and v is not None})

def save_config(cfg: EnvgenConfig, path: str = CFG_PATH):
    with open(path, "w", encoding="utf-8") as fh:
        yaml.safe_dump(asdict(cfg), fh, sort_keys=False, allow_unicode=True)

def _ask(prompt: str, default: str | None = None):
    v = input(f"{prompt} " + (f"[{default}]: " if default else ": "))
    return (v or default or "").strip()

def prompt_config(cfg: EnvgenConfig) -> EnvgenConfig:
    print("Project settings (Enter keeps the current value):")
    return EnvgenConfig(
        env_file=_ask("Env file", cfg.env_file),
        entry_file=_ask("Entry-point file", cfg.entry_file),
        entry_function=_ask("Entry function", cfg.entry_function),
        output_name=_ask("Generated module file name", cfg.output_name),
        ignore_file=_ask("Ignore file", cfg.ignore_file),
    )
