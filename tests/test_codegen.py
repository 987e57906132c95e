"""Tests for generation of the typed env.py module.

The generated module snapshots only the variable *names*.  Values are
read from the env file when ``init()`` runs, so tests generate a module,
load it, and check what its accessors return.
"""

import importlib.util
import warnings
from pathlib import Path
from types import ModuleType

import pytest

from envgen.codegen import (
    accessor_name,
    accessor_names,
    generate,
    module_path_for,
    to_camel_case,
    write_module,
)
from envgen.errors import EnvgenError, IdentifierCollisionError, InvalidKeyError
from envgen.parser import parse_env_text


def _load(path: Path, name: str = "generated_env") -> ModuleType:
    """Import a generated module from *path*."""
    spec = importlib.util.spec_from_file_location(name, path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write_env(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


# -- Identifier conversion ---------------------------------------------------


class TestCamelCase:
    """Verify key -> identifier conversion."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("APP_NAME", "appName"),
            ("APP_DEBUG", "appDebug"),
            ("AWS_ACCESS_KEY_ID", "awsAccessKeyId"),
            ("PORT", "port"),
            ("A__B", "a_B"),
            ("REDIS_1", "redis_1"),
            ("TRAILING_", "trailing_"),
        ],
    )
    def test_conversion(self, key: str, expected: str) -> None:
        """Keys should follow the snake_case -> camelCase rule."""
        assert to_camel_case(key) == expected

    def test_conversion_is_deterministic(self) -> None:
        """The same key should always give the same identifier."""
        keys = ["APP_NAME", "X_1_Y", "MAIL_FROM_ADDRESS", "__A"]
        assert [to_camel_case(k) for k in keys] == [to_camel_case(k) for k in keys]

    def test_keyword_gets_trailing_underscore(self) -> None:
        """Python keywords should be made usable as attribute names."""
        assert accessor_name("CLASS") == "class_"
        assert accessor_name("IMPORT") == "import_"

    def test_leading_digit_rejected(self) -> None:
        """A key that cannot become an identifier should be rejected."""
        with pytest.raises(InvalidKeyError):
            accessor_name("1ST_KEY")


class TestCollisions:
    """Verify that ambiguous accessor names are rejected."""

    def test_distinct_names(self) -> None:
        """Non-colliding keys should map one to one."""
        names = accessor_names({"APP_NAME": "", "APP_ENV": ""})
        assert names == {"APP_NAME": "appName", "APP_ENV": "appEnv"}

    def test_case_only_collision(self) -> None:
        """Keys that differ only by letter case should clash."""
        with pytest.raises(IdentifierCollisionError, match="appName"):
            accessor_names({"APP_NAME": "", "app_name": ""})

    def test_reserved_member_collision(self) -> None:
        """A key mapping to init or vars would shadow the class API."""
        with pytest.raises(IdentifierCollisionError):
            accessor_names({"INIT": ""})
        with pytest.raises(IdentifierCollisionError):
            accessor_names({"VARS": ""})

    def test_generate_rejects_collision(self) -> None:
        """generate() should refuse to emit a module with clashes."""
        with pytest.raises(IdentifierCollisionError):
            generate({"APP_NAME": "a", "app_name": "b"})


# -- Generated source ----------------------------------------------------------


class TestGeneratedSource:
    """Verify the text of the generated module."""

    def test_header_marker(self) -> None:
        """The file should say it is generated."""
        assert generate({}).startswith("# AUTO-GENERATED FILE. DO NOT EDIT.")

    def test_one_property_per_key_in_order(self) -> None:
        """Properties should appear once each, in mapping order."""
        source = generate({"B_KEY": "1", "A_KEY": "2"})
        assert source.count("def bKey(self)") == 1
        assert source.count("def aKey(self)") == 1
        assert source.index("def bKey") < source.index("def aKey")

    def test_values_not_embedded(self) -> None:
        """Values are read at runtime and must not be baked in."""
        source = generate({"SECRET": "hunter2"})
        assert "hunter2" not in source

    def test_deterministic(self) -> None:
        """Same keys in the same order should give identical output."""
        assert generate({"A": "1", "B": "2"}) == generate({"A": "x", "B": "y"})

    def test_env_file_path_embedded(self) -> None:
        """The canonical env file path should be in the module."""
        assert "ENV_FILE = 'config/.env'" in generate({}, env_file="config/.env")

    def test_windows_path_docstring_is_clean(self) -> None:
        """Backslashes in the env file path should not give invalid escapes."""
        source = generate({"A": ""}, env_file="config\\.env")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(source, "env.py", "exec")

    def test_source_compiles(self) -> None:
        """The generated text should be valid Python."""
        compile(generate({"APP_NAME": "", "CLASS": ""}), "env.py", "exec")


# -- Runtime behaviour of the generated module ---------------------------------


class TestGeneratedModule:
    """Load generated modules and exercise their accessors."""

    def test_end_to_end(self, tmp_path: Path) -> None:
        """Accessors and the bulk view should expose the env file."""
        env_file = _write_env(tmp_path / ".env", 'APP_NAME="demo"\nAPP_DEBUG=true\n')
        target = write_module(tmp_path / "env.py", generate(parse_env_text(env_file.read_text())))
        module = _load(target)
        env = module.env.init(str(env_file))
        assert env.appName == "demo"
        assert env.appDebug == "true"
        assert dict(env.vars) == {"APP_NAME": "demo", "APP_DEBUG": "true"}

    def test_values_come_from_init_not_generation(self, tmp_path: Path) -> None:
        """Changing the env file after generation should change the values."""
        env_file = _write_env(tmp_path / ".env", "APP_NAME=x\n")
        target = write_module(tmp_path / "env.py", generate({"APP_NAME": "x"}))
        _write_env(env_file, "APP_NAME=y\n")
        module = _load(target)
        assert module.Env(str(env_file)).init().appName == "y"

    def test_init_uses_canonical_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """init() without arguments should read ENV_FILE from the cwd."""
        monkeypatch.chdir(tmp_path)
        _write_env(tmp_path / ".env", "APP_NAME=cwd\n")
        module = _load(write_module(tmp_path / "env.py", generate({"APP_NAME": ""})))
        assert module.env.init().appName == "cwd"

    def test_missing_key_returns_none(self, tmp_path: Path) -> None:
        """A key absent at runtime should read as None."""
        env_file = _write_env(tmp_path / ".env", "OTHER=1\n")
        module = _load(write_module(tmp_path / "env.py", generate({"APP_NAME": "x"})))
        assert module.Env(str(env_file)).init().appName is None

    def test_before_init_returns_none(self, tmp_path: Path) -> None:
        """Reading before init() should not raise."""
        module = _load(write_module(tmp_path / "env.py", generate({"APP_NAME": "x"})))
        assert module.Env().appName is None
        assert dict(module.Env().vars) == {}

    def test_vars_is_read_only(self, tmp_path: Path) -> None:
        """The bulk view should not allow writes."""
        env_file = _write_env(tmp_path / ".env", "A=1\n")
        module = _load(write_module(tmp_path / "env.py", generate({"A": ""})))
        env = module.Env(str(env_file)).init()
        with pytest.raises(TypeError):
            env.vars["A"] = "2"  # type: ignore[index]

    def test_properties_are_read_only(self, tmp_path: Path) -> None:
        """Accessors should not be assignable."""
        module = _load(write_module(tmp_path / "env.py", generate({"APP_NAME": ""})))
        with pytest.raises(AttributeError):
            module.Env().appName = "z"

    def test_instances_are_independent(self, tmp_path: Path) -> None:
        """Two Env instances should not share their values."""
        first = _write_env(tmp_path / "first.env", "A=1\n")
        second = _write_env(tmp_path / "second.env", "A=2\n")
        module = _load(write_module(tmp_path / "env.py", generate({"A": ""})))
        one = module.Env(str(first)).init()
        two = module.Env(str(second)).init()
        assert (one.a, two.a) == ("1", "2")

    def test_keyword_key_accessor(self, tmp_path: Path) -> None:
        """A keyword-named key should be reachable through its renamed property."""
        env_file = _write_env(tmp_path / ".env", "CLASS=gold\n")
        module = _load(write_module(tmp_path / "env.py", generate({"CLASS": ""})))
        assert module.Env(str(env_file)).init().class_ == "gold"


# -- Writing -------------------------------------------------------------------


class TestWriteModule:
    """Verify writing the generated file."""

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        """An old file should be replaced, not merged."""
        target = tmp_path / "env.py"
        target.write_text("OLD = 1\n", encoding="utf-8")
        write_module(target, "NEW = 2\n")
        assert target.read_text(encoding="utf-8") == "NEW = 2\n"

    def test_creates_parent_folders(self, tmp_path: Path) -> None:
        """Missing output folders should be created."""
        target = write_module(tmp_path / "config" / "deep" / "env.py", "X = 1\n")
        assert target.is_file()


class TestModulePath:
    """Verify import paths of generated modules."""

    def test_same_folder(self, tmp_path: Path) -> None:
        """A module next to the entry file imports by its own name."""
        assert module_path_for(tmp_path / "env.py", tmp_path) == "env"

    def test_sub_folder(self, tmp_path: Path) -> None:
        """Sub-folders become dotted package paths."""
        assert module_path_for(tmp_path / "common" / "config" / "env.py", tmp_path) == "common.config.env"

    def test_outside_root_rejected(self, tmp_path: Path) -> None:
        """A module outside the entry folder cannot be imported from it."""
        with pytest.raises(EnvgenError):
            module_path_for(tmp_path / "env.py", tmp_path / "app")

    def test_hyphenated_folder_rejected(self, tmp_path: Path) -> None:
        """A folder name that is not a valid identifier cannot be imported."""
        with pytest.raises(EnvgenError, match="my-config"):
            module_path_for(tmp_path / "my-config" / "env.py", tmp_path)

    def test_keyword_folder_rejected(self, tmp_path: Path) -> None:
        """A Python keyword cannot be used as a package name."""
        with pytest.raises(EnvgenError):
            module_path_for(tmp_path / "import" / "env.py", tmp_path)
