"""Generation of the typed ``env.py`` accessor module.

The generated module only snapshots the *names* of the variables. Their
values are read again from the env file when ``env.init()`` runs, so the same
``env.py`` works against any ``.env`` declaring the same keys; it only needs
to be regenerated when keys are added, renamed or removed.
"""

from __future__ import annotations

import keyword
import re
from pathlib import Path
from typing import Dict, Mapping, Union

from .errors import EnvgenError, IdentifierCollisionError, InvalidKeyError
from .log import debug

# Members of the generated ``Env`` class that an accessor must not shadow.
RESERVED = frozenset({"init", "vars"})

_UNDERSCORE_LETTER = re.compile(r"_[a-z]")

HEADER = """\
# AUTO-GENERATED FILE. DO NOT EDIT.
# Generated by envgen from {env_file}. Run `envgen generate` again when keys change.
"""

PRELUDE = '''\
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from envgen.parser import load_env_file

ENV_FILE = {env_file!r}


class Env:
    """Typed access to the variables declared in {env_file!r}.

    Values are stored per instance; ``env`` below is the instance the
    application initializes at startup.
    """

    def __init__(self, path: str = ENV_FILE) -> None:
        self._path = path
        self._variables: Dict[str, str] = {{}}

    # Must be called once, at the start of main(), before any
    # accessor is read.
    def init(self, path: Optional[str] = None) -> "Env":
        self._variables = load_env_file(path or self._path)
        return self

    @property
    def vars(self) -> Mapping[str, str]:
        return MappingProxyType(self._variables)
'''

ACCESSOR = '''
    @property
    def {name}(self) -> Optional[str]:
        return self._variables.get({key!r})
'''

FOOTER = """

env = Env()
"""


def to_camel_case(key: str) -> str:
    """``APP_NAME`` -> ``appName``."""
    return _UNDERSCORE_LETTER.sub(lambda m: m.group(0)[1].upper(), key.lower())


def accessor_name(key: str) -> str:
    """Return the property name generated for *key*.

    Raises:
        InvalidKeyError: If the camelCase form is not a valid identifier.

    """
    name = to_camel_case(key)
    if keyword.iskeyword(name):
        name += "_"
    if not name.isidentifier():
        raise InvalidKeyError(f"Key {key!r} does not give a valid identifier ({name!r})")
    return name


def accessor_names(entries: Mapping[str, str]) -> Dict[str, str]:
    """Map each key to its accessor name, rejecting collisions."""
    names: Dict[str, str] = {}
    owners: Dict[str, str] = {}
    for key in entries:
        name = accessor_name(key)
        if name in RESERVED:
            raise IdentifierCollisionError(
                f"Key {key!r} maps to {name!r}, which is reserved by the generated class"
            )
        if name in owners:
            raise IdentifierCollisionError(
                f"Keys {owners[name]!r} and {key!r} both map to {name!r}"
            )
        owners[name] = key
        names[key] = name
    return names


def generate(entries: Mapping[str, str], env_file: str = ".env") -> str:
    """Return the source of the accessor module for *entries*.

    Only the keys and their order are used; the output is identical for two
    mappings with the same keys in the same order.
    """
    names = accessor_names(entries)
    parts = [HEADER.format(env_file=env_file), PRELUDE.format(env_file=env_file)]
    for key, name in names.items():
        parts.append(ACCESSOR.format(name=name, key=key))
    parts.append(FOOTER)
    debug(f"generated {len(names)} accessors")
    return "".join(parts)


def write_module(path: Union[str, Path], source: str) -> Path:
    """Write *source* to *path*, replacing any previous file."""
    p = Path(path)
    if p.exists():
        p.unlink()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(source, encoding="utf-8")
    return p


def module_path_for(generated: Union[str, Path], root: Union[str, Path]) -> str:
    """Dotted import path of *generated* as seen from *root*.

    ``module_path_for("app/config/env.py", "app") == "config.env"``
    """
    try:
        rel = Path(generated).resolve().relative_to(Path(root).resolve())
    except ValueError as ex:
        raise EnvgenError(f"{generated} is outside {root} and cannot be imported from it") from ex
    parts = rel.with_suffix("").parts
    for part in parts:
        if not part.isidentifier() or keyword.iskeyword(part):
            raise EnvgenError(f"{generated} cannot be imported: {part!r} is not a valid module name")
    return ".".join(parts)
