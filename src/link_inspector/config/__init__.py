"""Configuration loading."""

from link_inspector.config.settings import AppConfig, load_config, load_rules

__all__ = ["AppConfig", "load_config", "load_rules"]
