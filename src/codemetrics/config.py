"""Configuration loader for codemetrics.

Config priority: explicit overrides > project > global > defaults.
All fields optional (zero-config). The resolved config is frozen: the
project root cannot change once the server has started.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".codemetrics"
CONFIG_FILENAME = "config.json"


class CodemetricsConfig(BaseModel):
    """Server configuration with sensible defaults."""

    model_config = ConfigDict(frozen=True)

    root: Path = Field(default_factory=Path.cwd)
    tree_listing_limit: int = Field(default=20, ge=1)
    server_name: str = "code-analysis-server"
    server_version: str = "0.1.0"


def _load_json_file(path: Path) -> dict:
    """Load a JSON config file, returning empty dict on any error."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        logger.warning("Ignoring unreadable config file %s", path)
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: str | None = None, **overrides: Any) -> CodemetricsConfig:
    """Resolve the project root and load config for it.

    The root defaults to the process working directory. Values from the root
    itself are never taken from config files: the root is where they live.
    Invalid values in config files are dropped key by key with a warning;
    invalid explicit overrides raise ValidationError.
    """
    root_path = Path(root).expanduser() if root else Path.cwd()
    root_path = root_path.resolve()

    global_conf = _load_json_file(Path.home() / CONFIG_DIRNAME / CONFIG_FILENAME)
    project_conf = _load_json_file(root_path / CONFIG_DIRNAME / CONFIG_FILENAME)

    file_conf = {**global_conf, **project_conf}
    file_conf.pop("root", None)
    try:
        return CodemetricsConfig(root=root_path, **{**file_conf, **overrides})
    except ValidationError as exc:
        invalid = {str(err["loc"][0]) for err in exc.errors() if err["loc"]} - overrides.keys()
        if not invalid:
            raise
        logger.warning("Ignoring invalid config values %s for %s", sorted(invalid), root_path)

    # Invalid explicit overrides are a caller error and still raise here.
    valid = {k: v for k, v in file_conf.items() if k not in invalid}
    return CodemetricsConfig(root=root_path, **{**valid, **overrides})
