"""Tests for config loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from codemetrics.config import CodemetricsConfig, load_config


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr("codemetrics.config.Path.home", lambda: home)
    return home


def _write_config(directory: Path, data) -> None:
    (directory / ".codemetrics").mkdir(parents=True, exist_ok=True)
    payload = data if isinstance(data, str) else json.dumps(data)
    (directory / ".codemetrics" / "config.json").write_text(payload)


class TestLoadConfig:
    def test_returns_defaults_when_no_config_files_exist(self, tmp_path: Path):
        config = load_config(str(tmp_path))
        assert config.root == tmp_path.resolve()
        assert config.tree_listing_limit == 20
        assert config.server_name == "code-analysis-server"

    def test_root_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        assert load_config().root == tmp_path.resolve()

    def test_relative_root_is_resolved(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / "proj").mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_config("proj").root == (tmp_path / "proj").resolve()

    def test_merges_project_config_over_defaults(self, tmp_path: Path):
        _write_config(tmp_path, {"tree_listing_limit": 5})
        config = load_config(str(tmp_path))
        assert config.tree_listing_limit == 5
        assert config.server_name == "code-analysis-server"

    def test_project_config_overrides_global(self, tmp_path: Path, isolated_home: Path):
        _write_config(isolated_home, {"tree_listing_limit": 3, "server_name": "global"})
        project = tmp_path / "project"
        _write_config(project, {"tree_listing_limit": 7})

        config = load_config(str(project))
        assert config.tree_listing_limit == 7
        assert config.server_name == "global"

    def test_explicit_overrides_win(self, tmp_path: Path):
        _write_config(tmp_path, {"tree_listing_limit": 7})
        assert load_config(str(tmp_path), tree_listing_limit=2).tree_listing_limit == 2

    def test_config_file_cannot_move_root(self, tmp_path: Path):
        _write_config(tmp_path, {"root": "/elsewhere"})
        assert load_config(str(tmp_path)).root == tmp_path.resolve()

    def test_ignores_malformed_json_gracefully(self, tmp_path: Path):
        _write_config(tmp_path, "NOT VALID JSON {{{{")
        assert load_config(str(tmp_path)).tree_listing_limit == 20

    def test_ignores_non_object_json(self, tmp_path: Path):
        _write_config(tmp_path, [1, 2, 3])
        assert load_config(str(tmp_path)).tree_listing_limit == 20

    def test_invalid_values_fall_back_to_defaults(self, tmp_path: Path):
        _write_config(tmp_path, {"tree_listing_limit": 0})
        assert load_config(str(tmp_path)).tree_listing_limit == 20

    def test_invalid_value_keeps_other_file_values(self, tmp_path: Path):
        _write_config(tmp_path, {"tree_listing_limit": 0, "server_name": "custom"})
        config = load_config(str(tmp_path))
        assert config.tree_listing_limit == 20
        assert config.server_name == "custom"

    def test_valid_override_replaces_invalid_file_value(self, tmp_path: Path):
        _write_config(tmp_path, {"tree_listing_limit": "lots"})
        assert load_config(str(tmp_path), tree_listing_limit=4).tree_listing_limit == 4

    def test_invalid_override_raises(self, tmp_path: Path):
        with pytest.raises(ValidationError):
            load_config(str(tmp_path), tree_listing_limit=0)

    def test_invalid_override_raises_alongside_invalid_file(self, tmp_path: Path):
        _write_config(tmp_path, {"server_name": ["not", "a", "string"]})
        with pytest.raises(ValidationError):
            load_config(str(tmp_path), tree_listing_limit=-1)


class TestCodemetricsConfig:
    def test_is_frozen(self, tmp_path: Path):
        config = CodemetricsConfig(root=tmp_path)
        with pytest.raises(ValidationError):
            config.root = tmp_path / "other"

    def test_rejects_non_positive_limit(self, tmp_path: Path):
        with pytest.raises(ValidationError):
            CodemetricsConfig(root=tmp_path, tree_listing_limit=0)
