"""Configuration loading utilities for the Meta AI client."""
from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from metaai.client.payloads import ACCEPT_LANGUAGE, CHAT_URL, GRAPHQL_URL, LANDING_URL, USER_AGENT
from metaai.client.transport import DEFAULT_TIMEOUT
from metaai.utils.logger import get_logger

LOGGER = get_logger(__name__)

CONFIG_FILENAMES: tuple[str, ...] = (".metaai.toml", "metaai.toml")
DEFAULT_CONFIG_PATHS = (
    Path.home() / ".config" / "metaai" / "config.toml",
    Path.home() / ".metaai.toml",
)
ENV_PREFIX = "METAAI_"


def find_config_in_parents(
    start_path: Path, config_name: str | Sequence[str] = ".metaai.toml"
) -> Optional[Path]:
    """Search parent directories starting from ``start_path`` for configuration files."""

    if isinstance(config_name, str):
        candidate_names: tuple[str, ...] = (config_name,)
    else:
        candidate_names = tuple(config_name)

    current = start_path.resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in candidate_names:
            candidate = current / name
            if candidate.is_file():
                return candidate.resolve()
        if current.parent == current:
            break
        current = current.parent
    return None


@dataclass
class Settings:
    """Runtime configuration for the client and CLI."""

    landing_url: str = LANDING_URL
    graphql_url: str = GRAPHQL_URL
    chat_url: str = CHAT_URL
    user_agent: str = USER_AGENT
    accept_language: str = ACCEPT_LANGUAGE
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "WARNING"
    structured_logging: bool = False


def _cast_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in {"1", "true", "on", "yes", "y"}
    return bool(value)


def _load_from_file(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    return {k.replace("-", "_"): v for k, v in data.items()}


def _load_from_env(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    env: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        field = key[len(prefix) :].lower()
        if field == "structured_logging":
            env[field] = _cast_bool(value)
        elif field == "timeout":
            env[field] = float(value)
        else:
            env[field] = value
    return env


def load_settings(explicit_path: Optional[Path] = None) -> Settings:
    """Load configuration, merging file and environment sources."""

    file_data: Dict[str, Any] = {}
    if explicit_path:
        file_data.update(_load_from_file(explicit_path))
    else:
        search_paths = []
        cwd = Path.cwd()
        project_config = find_config_in_parents(cwd, CONFIG_FILENAMES)
        if project_config:
            search_paths.append(project_config)
        search_paths.extend(DEFAULT_CONFIG_PATHS)
        seen_paths = set()
        for candidate in search_paths:
            if candidate in seen_paths:
                continue
            seen_paths.add(candidate)
            file_data = _load_from_file(candidate)
            if file_data:
                break

    env_data = _load_from_env()
    merged: Dict[str, Any] = {**file_data, **env_data}

    if "timeout" in merged:
        merged["timeout"] = float(merged["timeout"])
    if "structured_logging" in merged:
        merged["structured_logging"] = _cast_bool(merged["structured_logging"])

    known_fields = set(Settings.__dataclass_fields__)
    unknown = sorted(key for key in merged if key not in known_fields)
    if unknown:
        LOGGER.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
    return Settings(**{key: value for key, value in merged.items() if key in known_fields})


__all__ = ["Settings", "find_config_in_parents", "load_settings"]
