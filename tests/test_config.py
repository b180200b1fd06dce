"""Tests for configuration loading and merging."""

from pathlib import Path

import pytest
import yaml

from docblocks.compute_config_hash import compute_config_hash
from docblocks.deep_merge import deep_merge
from docblocks.load_config import DEFAULT_CONFIG, load_config
from docblocks.models import DeclarationKind
from docblocks.syntax_config import SyntaxConfig, php_syntax, syntax_for_extension


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    base = {"a": 1, "b": 2}
    update = {"b": 3, "c": 4}
    merged = deep_merge(base, update)
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"nested": {"x": 1, "y": 2}}
    update = {"nested": {"y": 3, "z": 4}}
    merged = deep_merge(base, update)
    assert merged == {"nested": {"x": 1, "y": 3, "z": 4}}
    assert base == {"nested": {"x": 1, "y": 2}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced by default."""
    merged = deep_merge({"quotes": ['"', "'"]}, {"quotes": ["`"]})
    assert merged == {"quotes": ["`"]}


def test_deep_merge_exempt_names_additive() -> None:
    """Verify that summary-exempt names are merged additively."""
    base = {"summary_exempt_names": ["__construct", "main"]}
    update = {"summary_exempt_names": ["main", "__toString"]}
    merged = deep_merge(base, update)
    assert merged["summary_exempt_names"] == ["__construct", "__toString", "main"]


def test_compute_config_hash_stability() -> None:
    """Verify that config hash is stable regardless of key order."""
    config1 = {"lint": {"enabled": True, "x": 1}, "languages": {".php": "php"}}
    config2 = {"languages": {".php": "php"}, "lint": {"x": 1, "enabled": True}}
    assert compute_config_hash(config1) == compute_config_hash(config2)


def test_compute_config_hash_ignores_render_options() -> None:
    """Verify that presentation settings do not invalidate parsed documents."""
    config = load_config(None)
    relabeled = deep_merge(config, {"render": {"labels": {"functions": "Funciones"}}})
    assert compute_config_hash(config) == compute_config_hash(relabeled)

    reparsed = deep_merge(config, {"lint": {"enabled": False}})
    assert compute_config_hash(config) != compute_config_hash(reparsed)


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config["languages"] == {".php": "php"}
    assert "php" in config["syntax"]
    assert config["lint"]["enabled"] is True


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that user config correctly overrides defaults."""
    config_file = tmp_path / "config.yml"
    config_data = {
        "languages": {".inc": "php"},
        "lint": {"summary_exempt_names": ["__destruct"]},
        "render": {"labels": {"functions": "Funciones"}},
    }
    config_file.write_text(yaml.dump(config_data))

    loaded = load_config(str(config_file))
    assert loaded["languages"] == {".php": "php", ".inc": "php"}
    assert "__construct" in loaded["lint"]["summary_exempt_names"]  # Default
    assert "__destruct" in loaded["lint"]["summary_exempt_names"]  # Added
    assert loaded["render"]["labels"]["functions"] == "Funciones"
    assert loaded["render"]["labels"]["class"] == "Class"


def test_load_config_leaves_defaults_untouched(tmp_path: Path) -> None:
    """Verify that loading and editing a config never alters the defaults."""
    loaded = load_config(None)
    loaded["lint"]["summary_exempt_names"].append("changed")
    assert "changed" not in DEFAULT_CONFIG["lint"]["summary_exempt_names"]


def test_load_config_missing_file_uses_defaults(tmp_path: Path) -> None:
    """Verify that a non-existent config path falls back to defaults."""
    assert load_config(str(tmp_path / "nope.yml")) == load_config(None)


def test_php_syntax_profile() -> None:
    """Verify the built-in PHP profile."""
    syntax = php_syntax()
    assert syntax.code_start == "<?"
    assert syntax.code_start_full == "<?php"
    assert ("class", DeclarationKind.CLASS) in syntax.declarations
    assert ("public function", DeclarationKind.PUBLIC_METHOD) in syntax.declarations
    assert "{" in syntax.statement_separators


def test_syntax_from_dict_rejects_unknown_kind() -> None:
    """Verify that an unknown declaration kind is a configuration error."""
    with pytest.raises(ValueError, match="Unknown declaration kind"):
        SyntaxConfig.from_dict({"declarations": {"def": "procedure"}})


def test_syntax_from_dict_rejects_bad_pattern() -> None:
    """Verify that an invalid param pattern is a configuration error."""
    with pytest.raises(ValueError, match="Invalid param_pattern"):
        SyntaxConfig.from_dict({"param_pattern": "[unclosed"})


def test_syntax_for_extension() -> None:
    """Verify extension lookup is case-insensitive and unknown types yield None."""
    config = load_config(None)
    assert syntax_for_extension(config, ".PHP") == php_syntax()
    assert syntax_for_extension(config, ".txt") is None
    assert syntax_for_extension({"languages": {".x": "missing"}}, ".x") is None
