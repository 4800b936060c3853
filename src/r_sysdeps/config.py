from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import yaml

from .client import STATUS_TIMEOUT, SYSREQS_TIMEOUT
from .osdetect import OS_RELEASE_PATH

DEFAULT_SERVER = "https://packagemanager.rstudio.com"


@dataclass
class SysdepsConfig:
    server: str = DEFAULT_SERVER
    repository: Optional[str] = None  # None means the server's default repository
    os_name: Optional[str] = None
    os_version: Optional[str] = None
    os_release: Path = OS_RELEASE_PATH
    status_timeout: float = STATUS_TIMEOUT  # seconds
    sysreqs_timeout: float = SYSREQS_TIMEOUT  # seconds


def load_config(path: Optional[Path]) -> Dict:
    """Load a config file from TOML, JSON or YAML."""
    if path is None:
        return {}
    if not path.exists():
        raise FileNotFoundError(f"Config file {path} was not found.")
    if path.suffix in {".toml", ".tml"}:
        return tomllib.loads(path.read_text())
    if path.suffix in {".json"}:
        return json.loads(path.read_text())
    if path.suffix in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    raise ValueError(f"Unsupported config format for {path}. Use TOML, JSON or YAML.")


def build_config(
    *,
    server: Optional[str] = None,
    repository: Optional[str] = None,
    os_name: Optional[str] = None,
    os_version: Optional[str] = None,
    os_release: Optional[Path] = None,
    status_timeout: Optional[float] = None,
    sysreqs_timeout: Optional[float] = None,
    config_file: Optional[Path] = None,
) -> SysdepsConfig:
    """Merge CLI inputs with any file-based configuration."""
    file_data = load_config(config_file)
    cfg = (file_data.get("sysdeps") or {}) if isinstance(file_data, dict) else {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config section 'sysdeps' in {config_file} must be a table.")
    for key in ("server", "repository", "os_name", "os_version", "os_release"):
        if key in cfg and cfg[key] is not None and not isinstance(cfg[key], str):
            # unquoted 20.04 loads as a float
            raise ValueError(f"Config value '{key}' in {config_file} must be a string; quote it (got {cfg[key]!r}).")

    final_server = server or cfg.get("server") or DEFAULT_SERVER
    release_path = os_release or cfg.get("os_release")

    return SysdepsConfig(
        server=final_server.rstrip("/"),
        repository=repository or cfg.get("repository"),
        os_name=os_name or cfg.get("os_name"),
        os_version=os_version or cfg.get("os_version"),
        os_release=Path(release_path) if release_path else OS_RELEASE_PATH,
        status_timeout=_positive(status_timeout or cfg.get("status_timeout", STATUS_TIMEOUT), "status_timeout"),
        sysreqs_timeout=_positive(sysreqs_timeout or cfg.get("sysreqs_timeout", SYSREQS_TIMEOUT), "sysreqs_timeout"),
    )


def _positive(value, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {name} '{value}'. Use a number of seconds.") from exc
    if number <= 0:
        raise ValueError(f"Invalid {name} '{value}'. Use a number of seconds greater than zero.")
    return number
