"""Utility functions for the token translator."""

from .key_paths import ensure_path, set_nested, split_key_path
from .validation import ValidationUtils

__all__ = ["ValidationUtils", "ensure_path", "set_nested", "split_key_path"]
