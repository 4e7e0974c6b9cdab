"""Project model implementation."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


@dataclass
class Project:
    """A named collection of translation rows and group extensions."""

    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate project after initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("name cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert project to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Project':
        """Create Project from dictionary."""
        return cls(
            name=data["name"],
            id=data["id"],
            created_at=datetime.fromisoformat(data["created_at"]),
        )
