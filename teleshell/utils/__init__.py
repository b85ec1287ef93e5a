"""Utility functions for teleshell."""

from teleshell.utils.logging import setup_logging

__all__ = ["setup_logging"]
