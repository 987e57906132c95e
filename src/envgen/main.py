"""Programmatic entry points for the two envgen workflows."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .bootstrap import create_env_file
from .codegen import generate as generate_source, module_path_for, write_module
from .config_mgr import EnvgenConfig, load_config
from .errors import EntryPointNotFoundError
from .log import ok, section
from .parser import load_env_file
from .patcher import ensure_ignored, patch_entry_point


def output_folder(cfg: EnvgenConfig, folder: Optional[str] = None) -> Path:
    """Folder that receives the generated module.

    Without *folder* this is the directory of the entry-point file, which
    must then exist. Otherwise *folder* is taken relative to that directory.
    """
    entry = Path(cfg.entry_file)
    if folder:
        return entry.parent / folder
    if not entry.is_file():
        raise EntryPointNotFoundError(
            f"{entry} not found. Please provide an output folder as an argument."
        )
    return entry.parent


def generate(folder: Optional[str] = None, cfg: Optional[EnvgenConfig] = None) -> Path:
    """Generate the accessor module and wire it into the entry point.

    Parameters
    ----------
    folder: str, optional
        Sub-folder, relative to the entry file's directory, for the module.
    cfg: EnvgenConfig, optional
        Project settings; ``envgen.yaml`` (or defaults) when omitted.

    Each step keeps its result if a later step fails. A missing env file
    aborts before anything is written; a missing entry file only skips the
    patch.
    """
    cfg = cfg or load_config()
    section("GENERATE")
    target = output_folder(cfg, folder) / cfg.output_name
    # checked first: a folder that cannot be imported aborts before any write
    module_path = module_path_for(target, Path(cfg.entry_file).parent)
    entries = load_env_file(cfg.env_file)
    write_module(target, generate_source(entries, env_file=cfg.env_file))
    ok(f"Successfully generated {target} from {cfg.env_file}")

    section("ENTRY POINT")
    patch_entry_point(cfg.entry_file, module_path, function=cfg.entry_function)

    section("IGNORE FILE")
    ensure_ignored(cfg.ignore_file, Path(cfg.env_file).name)
    return target


def new(cfg: Optional[EnvgenConfig] = None) -> bool:
    """Create the default env file and make sure it is ignored."""
    cfg = cfg or load_config()
    section("NEW ENV FILE")
    created = create_env_file(cfg.env_file)
    ensure_ignored(cfg.ignore_file, Path(cfg.env_file).name)
    return created
