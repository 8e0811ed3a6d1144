"""Unit tests for configuration helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from calens.config import Config, load_config, load_project_config
from calens.errors import ConfigError
from calens.links import Tracker


def write_yaml(path: Path, content: object) -> None:
    path.write_text(yaml.safe_dump(content, sort_keys=False), encoding="utf-8")


def test_load_config_reads_template_and_tracker(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    write_yaml(
        config_path,
        {
            "template": "templates/CHANGELOG.md.j2",
            "tracker": {"host": "gitlab.example.com", "owner": "team"},
        },
    )

    config = load_config(config_path)

    assert config.template == "templates/CHANGELOG.md.j2"
    assert config.tracker == Tracker(host="gitlab.example.com", owner="team")
    assert config.template_path(tmp_path) == tmp_path / "templates" / "CHANGELOG.md.j2"


def test_load_config_tracker_owner_defaults_and_wildcard(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    write_yaml(config_path, {"tracker": {"host": "github.com"}})
    assert load_config(config_path).tracker == Tracker(owner="restic")

    write_yaml(config_path, {"tracker": {"owner": "*"}})
    tracker = load_config(config_path).tracker
    assert tracker.any_owner
    assert tracker.host == "github.com"


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path) == Config()


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    write_yaml(config_path, ["template"])

    with pytest.raises(ConfigError, match="Config root must be a mapping"):
        load_config(config_path)


def test_load_config_rejects_wrong_types(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    write_yaml(config_path, {"tracker": {"owner": 42}})

    with pytest.raises(ConfigError, match="'tracker.owner' must be a string") as excinfo:
        load_config(config_path)

    assert excinfo.value.path == config_path


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("template: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid YAML"):
        load_config(config_path)


def test_load_project_config_falls_back_to_defaults(tmp_path: Path) -> None:
    config = load_project_config(tmp_path)

    assert config.template == "CHANGELOG.tmpl"
    assert config.tracker == Tracker()
    assert config.template_path(tmp_path) == tmp_path / "CHANGELOG.tmpl"


def test_template_path_keeps_absolute_paths(tmp_path: Path) -> None:
    template = tmp_path / "elsewhere" / "CHANGELOG.tmpl"

    assert Config(template=str(template)).template_path(Path("changelog")) == template
