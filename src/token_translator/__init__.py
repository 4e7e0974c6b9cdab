"""
Token Translator - Multilingual design-token translation manager.

Flattens per-language Figma Tokens exports into one row per key path and
rebuilds the developer and Figma JSON documents from those rows.
"""

from .duplicate_detector import DuplicateDetector
from .linter import KeyPathLinter
from .models import FlatRow, GroupExtension, TokenGroup, TokenLeaf
from .processors import TreeBuilder, TreeFlattener
from .sanitizer import sanitize_key
from .storage import ProjectStore
from .translation_manager import TranslationManager
from .types import DuplicateGroup, FlattenResult, KeyIssue, Language

__version__ = "1.0.0"
__all__ = [
    "TranslationManager",
    "ProjectStore",
    "TreeFlattener",
    "TreeBuilder",
    "KeyPathLinter",
    "DuplicateDetector",
    "sanitize_key",
    "FlatRow",
    "GroupExtension",
    "TokenGroup",
    "TokenLeaf",
    "DuplicateGroup",
    "FlattenResult",
    "KeyIssue",
    "Language",
]
