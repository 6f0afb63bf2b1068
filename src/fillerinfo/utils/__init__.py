"""Utility modules for fillerinfo."""

from fillerinfo.utils.config import resolve_setting, set_setting
from fillerinfo.utils.debug import setup_logger

__all__ = ["resolve_setting", "set_setting", "setup_logger"]
