"""Configuration helpers for calens."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, MutableMapping, Optional

import yaml

from .errors import ConfigError
from .links import DEFAULT_TRACKER_HOST, DEFAULT_TRACKER_OWNER, Tracker

CONFIG_RELATIVE_PATH = Path("config.yaml")
DEFAULT_INPUT_DIRECTORY = Path("changelog")
DEFAULT_TEMPLATE = "CHANGELOG.tmpl"


def default_config_path(input_dir: Path) -> Path:
    """Return the config path inside an input directory."""
    return input_dir / CONFIG_RELATIVE_PATH


@dataclass
class Config:
    """Structured representation of the optional changelog config."""

    template: str = DEFAULT_TEMPLATE
    tracker: Tracker = field(default_factory=Tracker)

    def template_path(self, input_dir: Path) -> Path:
        """Resolve the template relative to the input directory."""
        path = Path(self.template)
        if path.is_absolute():
            return path
        return input_dir / path


def _optional_string(raw: MutableMapping[str, Any], key: str, *, source: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"Config option '{source}' must be a string.")
    return value.strip() or None


def load_config(path: Path) -> Config:
    """Load the configuration from disk."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise ConfigError(f"unable to read config: {exc}", path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML: {exc}", path=path) from exc
    if not isinstance(raw, MutableMapping):
        raise ConfigError("Config root must be a mapping", path=path)

    try:
        template = _optional_string(raw, "template", source="template") or DEFAULT_TEMPLATE

        tracker = Tracker()
        tracker_raw = raw.get("tracker")
        if tracker_raw is not None:
            if not isinstance(tracker_raw, MutableMapping):
                raise ConfigError("Config option 'tracker' must be a mapping.")
            host = _optional_string(tracker_raw, "host", source="tracker.host")
            owner = _optional_string(tracker_raw, "owner", source="tracker.owner")
            tracker = Tracker(
                host=host or DEFAULT_TRACKER_HOST,
                owner=owner or DEFAULT_TRACKER_OWNER,
            )
    except ConfigError as exc:
        raise ConfigError(exc.message, path=path) from exc

    return Config(template=template, tracker=tracker)


def load_project_config(input_dir: Path) -> Config:
    """Load the config of an input directory, falling back to defaults."""
    config_path = default_config_path(input_dir)
    if config_path.is_file():
        return load_config(config_path)
    return Config()
