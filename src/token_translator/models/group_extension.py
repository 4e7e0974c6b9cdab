"""Group extension model implementation."""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class GroupExtension:
    """
    Metadata attached to a non-leaf node of a token tree.

    Group extensions are keyed by their dotted group path and live
    independently of the rows beneath them: deleting every row under a
    group leaves its extension in place.
    """

    group_path: str
    extensions: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate extension after initialization."""
        if not isinstance(self.group_path, str) or not self.group_path:
            raise ValueError("group_path cannot be empty")
        if not isinstance(self.extensions, dict):
            raise ValueError("extensions must be a JSON object")

    def to_dict(self) -> Dict[str, Any]:
        """Convert extension to dictionary for JSON serialization."""
        return {
            "group_path": self.group_path,
            "extensions": copy.deepcopy(self.extensions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GroupExtension':
        """Create GroupExtension from dictionary."""
        return cls(
            group_path=data["group_path"],
            extensions=data.get("extensions") or {},
        )
