"""Flat translation row model implementation."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional
from ..types import Language


@dataclass
class FlatRow:
    """
    One translatable token, merged across languages.

    A row is identified by its dotted key path and carries one value per
    language plus the token metadata captured from the source trees.
    """

    key_path: str
    az_value: Optional[str] = None
    en_value: Optional[str] = None
    ru_value: Optional[str] = None
    token_type: Optional[str] = None
    figma_variable_id: Optional[str] = None
    original_key: Optional[str] = None

    def __post_init__(self):
        """Validate row after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate row integrity."""
        if not isinstance(self.key_path, str) or not self.key_path:
            raise ValueError("key_path cannot be empty")

    def get_value(self, language: Language) -> Optional[str]:
        """Get the value stored for a language."""
        return getattr(self, language.value_field)

    def set_value(self, language: Language, value: Optional[str]) -> None:
        """Set the value stored for a language."""
        setattr(self, language.value_field, value)

    def renamed(self, new_key_path: str) -> 'FlatRow':
        """
        Return a copy of this row under a new key path.

        The pre-rename key is remembered in original_key the first time a row
        is renamed and never overwritten afterwards.

        Args:
            new_key_path: Replacement key path

        Returns:
            Renamed FlatRow
        """
        return replace(
            self,
            key_path=new_key_path,
            original_key=self.original_key or self.key_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert row to dictionary for JSON serialization."""
        return {
            "key_path": self.key_path,
            "az_value": self.az_value,
            "en_value": self.en_value,
            "ru_value": self.ru_value,
            "token_type": self.token_type,
            "figma_variable_id": self.figma_variable_id,
            "original_key": self.original_key,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FlatRow':
        """Create FlatRow from dictionary."""
        return cls(
            key_path=data["key_path"],
            az_value=data.get("az_value"),
            en_value=data.get("en_value"),
            ru_value=data.get("ru_value"),
            token_type=data.get("token_type"),
            figma_variable_id=data.get("figma_variable_id"),
            original_key=data.get("original_key"),
        )
