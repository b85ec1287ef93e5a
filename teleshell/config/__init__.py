"""Configuration module for teleshell."""

from teleshell.config.schema import Config, LimitsConfig

__all__ = ["Config", "LimitsConfig"]
