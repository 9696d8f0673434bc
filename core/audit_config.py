"""Audit configuration contract.

Settings are resolved with the precedence CLI flags > config file >
environment > defaults. Config files may be YAML or JSON.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from core.errors import ConfigValidationError

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "project"
DEFAULT_BUILD_DIR = "target"
DEFAULT_SOURCE_ROOTS: tuple[str, ...] = ("src/main/java",)
DEFAULT_FILE_NAME_MARKERS: tuple[str, ...] = ("Bean", "me")

STRICT_SYNTAX_ENV = "ROLES_AUDIT_STRICT_SYNTAX"


@dataclass(frozen=True)
class AuditConfig:
    """Resolved settings for one audit run."""

    project_name: str = DEFAULT_PROJECT_NAME
    build_dir: str = DEFAULT_BUILD_DIR
    report_file: Optional[str] = None
    base_package: str = ""
    source_roots: tuple[str, ...] = DEFAULT_SOURCE_ROOTS
    file_name_markers: tuple[str, ...] = DEFAULT_FILE_NAME_MARKERS
    strict_syntax: bool = True

    @property
    def resolved_report_file(self) -> str:
        """Report path, defaulting to ``<build_dir>/<project_name>-security.csv``."""
        if self.report_file:
            return self.report_file
        return os.path.join(self.build_dir, f"{self.project_name}-security.csv")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_syntax(default: bool = True) -> bool:
    """Resolve strict syntax mode from ``ROLES_AUDIT_STRICT_SYNTAX``."""
    return _env_flag(STRICT_SYNTAX_ENV, default=default)


def _expect_dict(payload: Any, ctx: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ConfigValidationError(f"{ctx} must be an object")
    return payload


def _string_list(payload: dict[str, Any], key: str) -> Optional[tuple[str, ...]]:
    raw = payload.get(key)
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise ConfigValidationError(f"{key} must be a string or a list of strings")
    values = []
    for item in raw:
        text = str(item).strip()
        if not text:
            raise ConfigValidationError(f"{key} contains an empty entry")
        values.append(text)
    return tuple(values)


def _load_config_payload(path: str) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigValidationError(f"Config file not found: {config_path}", path=path)

    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigValidationError(
            f"Cannot read config file {config_path}: {exc}", path=path
        ) from exc

    try:
        if config_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(
            f"Failed to parse config file {config_path}: {exc}", path=path
        ) from exc

    if payload is None:
        logger.warning("Config file %s is empty; using defaults", config_path)
        return {}
    return _expect_dict(payload, "config")


def load_audit_config(path: Optional[str] = None) -> AuditConfig:
    """Load settings from an optional YAML/JSON file on top of the defaults."""
    strict_default = resolve_strict_syntax(default=True)
    if path is None:
        return AuditConfig(strict_syntax=strict_default)

    payload = _load_config_payload(path)

    project_name = str(payload.get("project_name", DEFAULT_PROJECT_NAME)).strip()
    if not project_name:
        raise ConfigValidationError("project_name must not be empty", path=path)

    source_roots = _string_list(payload, "source_roots")
    if source_roots is not None and len(source_roots) == 0:
        raise ConfigValidationError("source_roots must be a non-empty list", path=path)

    markers = _string_list(payload, "file_name_markers")

    report_file = payload.get("report_file")
    strict_syntax = payload.get("strict_syntax", strict_default)
    if not isinstance(strict_syntax, bool):
        raise ConfigValidationError("strict_syntax must be a boolean", path=path)

    config = AuditConfig(
        project_name=project_name,
        build_dir=str(payload.get("build_dir", DEFAULT_BUILD_DIR)).strip() or DEFAULT_BUILD_DIR,
        report_file=str(report_file).strip() if report_file else None,
        base_package=str(payload.get("base_package", "") or "").strip(),
        source_roots=source_roots if source_roots is not None else DEFAULT_SOURCE_ROOTS,
        file_name_markers=markers if markers is not None else DEFAULT_FILE_NAME_MARKERS,
        strict_syntax=strict_syntax,
    )
    logger.debug("Loaded audit config from %s: %s", path, config)
    return config


def apply_overrides(config: AuditConfig, **overrides: Any) -> AuditConfig:
    """Return a copy of ``config`` with every non-None override applied."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    for key in ("source_roots", "file_name_markers"):
        if key in changes:
            changes[key] = tuple(changes[key])
    if changes.get("source_roots") == ():
        raise ConfigValidationError("source_roots must be a non-empty list")
    return replace(config, **changes)
