#!/usr/bin/env python3
import argparse
import sys

from . import main as workflows
from .config_mgr import CFG_PATH, load_config, prompt_config, save_config
from .errors import EnvgenError
from .log import err, ok

# ---------- commands ----------
def cmd_generate(args: argparse.Namespace) -> int:
    try:
        workflows.generate(args.folder, load_config(args.config_file))
    except (EnvgenError, OSError) as ex:
        err(str(ex))
        return 1
    return 0

def cmd_new(args: argparse.Namespace) -> int:
    try:
        workflows.new(load_config(args.config_file))
    except (EnvgenError, OSError) as ex:
        err(str(ex))
        return 1
    return 0

def cmd_config(args: argparse.Namespace) -> int:
    try:
        cfg = prompt_config(load_config(args.config_file))
        save_config(cfg, args.config_file)
    except (EnvgenError, OSError) as ex:
        err(str(ex))
        return 1
    ok(f"Settings saved to {args.config_file}.")
    return 0

# ---------- parser ----------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="envgen", description="Generate a typed env.py from a .env file")
    p.add_argument("--config-file", default=CFG_PATH, help=f"Project settings file (default: {CFG_PATH})")
    sp = p.add_subparsers(dest="cmd", metavar="<command>")

    gen = sp.add_parser("generate", help="Generate env.py from the .env file and update the entry point")
    gen.add_argument("folder", nargs="?", help="Output folder, relative to the entry file's directory")
    gen.set_defaults(func=cmd_generate)

    new = sp.add_parser("new", help="Create a default .env file and add it to .gitignore")
    new.set_defaults(func=cmd_new)

    cfg = sp.add_parser("config", help=f"Edit the project settings in {CFG_PATH}")
    cfg.set_defaults(func=cmd_config)

    return p

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 2
    return args.func(args)

def app() -> int:
    return main()

if __name__ == "__main__":
    sys.exit(app())
