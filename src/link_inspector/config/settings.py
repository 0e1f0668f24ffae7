"""Config loader from env + yaml."""

from __future__ import annotations

from pathlib import Path
import os
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from link_inspector.core.errors import ConfigError
from link_inspector.scoring.rules import DEFAULT_RULES, RuleSet

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config" / "defaults.yaml"

_ENV_PREFIX = "LINK_INSPECTOR_"
_LIST_ENV_FIELDS = ("phishing_keywords", "shortener_domains", "suspicious_tlds")


class AppConfig(BaseModel):
    log_level: str = Field(default="INFO")
    debounce_s: float = Field(default=0.5, gt=0)
    rules: RuleSet = Field(default=DEFAULT_RULES)
    config_path: str = Field(default=str(DEFAULT_CONFIG_PATH))


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"config file not found: {p}")
    try:
        payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"config file {p} is not valid yaml: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError(f"config file {p} must contain a mapping at the top level")
    return payload


def _pick_env(name: str, fallback: Any) -> Any:
    value = os.getenv(_ENV_PREFIX + name)
    return value if value not in (None, "") else fallback


def _parse_list(raw: Any) -> Any:
    if isinstance(raw, str):
        return [item.strip() for item in raw.split(",") if item.strip()]
    return raw


def _resolve_config_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    env_path = os.getenv(_ENV_PREFIX + "CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location or 'config'}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def load_rules(raw: Any) -> RuleSet:
    """Validate a rules mapping, failing before any URL gets scored with it."""

    if raw is None:
        return DEFAULT_RULES
    if not isinstance(raw, dict):
        raise ConfigError("rules must be a mapping")
    try:
        return RuleSet.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid rule configuration: {_format_errors(exc)}") from exc


def load_config(path: str | Path | None = None) -> tuple[AppConfig, dict[str, Any]]:
    config_path = _resolve_config_path(path)
    merged = load_yaml(config_path)

    raw_rules = merged.get("rules")
    rules_payload = dict(raw_rules) if isinstance(raw_rules, dict) else raw_rules
    if isinstance(rules_payload, dict) or rules_payload is None:
        rules_payload = dict(rules_payload or {})
        for name in _LIST_ENV_FIELDS:
            override = _pick_env(name.upper(), None)
            if override is not None:
                rules_payload[name] = _parse_list(override)
    rules = load_rules(rules_payload)

    payload = {
        "log_level": str(_pick_env("LOG_LEVEL", merged.get("log_level", "INFO"))).strip().upper() or "INFO",
        "debounce_s": _pick_env("DEBOUNCE_S", merged.get("debounce_s", 0.5)),
        "rules": rules,
        "config_path": str(config_path),
    }
    try:
        config = AppConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {_format_errors(exc)}") from exc
    return config, merged
