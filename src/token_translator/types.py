"""Core type definitions for the token translator."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from .models import FlatRow, GroupExtension


class Language(Enum):
    """Supported translation languages, in fixed processing order."""
    AZ = "az"
    EN = "en"
    RU = "ru"

    @property
    def value_field(self) -> str:
        """Name of the FlatRow attribute holding this language's value."""
        return f"{self.value}_value"

    @property
    def developer_key(self) -> str:
        """Top-level key of this language in the developer export."""
        return f"Translations/{self.value.upper()}"

    @classmethod
    def parse(cls, code: Any) -> "Language":
        """Resolve a Language from an enum member or a case-insensitive code."""
        if isinstance(code, cls):
            return code
        try:
            return cls(str(code).strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported language: {code!r}") from None


LANGUAGE_ORDER: Tuple[Language, ...] = (Language.AZ, Language.EN, Language.RU)


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    KEY_PATH = "key_path"
    LANGUAGE = "language"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    FILESYSTEM = "filesystem"


class FilterMode(Enum):
    """Row filters offered by the table view."""
    ALL = "all"
    ISSUES = "issues"
    DUPLICATES = "duplicates"


@dataclass(frozen=True)
class SanitizedKey:
    """Result of sanitizing a single key segment."""
    result: str
    changed: bool


@dataclass(frozen=True)
class KeyIssue:
    """A key path whose last segment needs renaming."""
    original: str
    suggested: str
    key_path: str


@dataclass
class DuplicateGroup:
    """Rows sharing the same value in one language."""
    value: str
    language: Language
    key_paths: List[str]

    @property
    def exclusion_key(self) -> Tuple[Language, str]:
        return (self.language, self.value)


@dataclass
class FlattenResult:
    """Result of flattening per-language token trees."""
    rows: List["FlatRow"]
    group_extensions: List["GroupExtension"]


@dataclass
class UploadResult:
    """Result of an upload operation."""
    success: bool
    token_count: int
    group_count: int
    errors: Optional[List[str]] = None


@dataclass
class ExportResult:
    """Result of an export operation."""
    success: bool
    output_path: Optional[str]
    token_count: int
    size: int = 0
    errors: Optional[List[str]] = None


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str] = field(default_factory=list)


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    context: Optional[Any] = None


class ProcessingError(Exception):
    """Custom exception for processing errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


# Abstract base classes for interfaces

class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle processing errors."""
        pass


class TranslationManagerInterface(ABC):
    """Abstract interface for the translation manager."""

    @abstractmethod
    def upload(self, documents: Dict[Any, Optional[str]]) -> UploadResult:
        """Flatten and store per-language JSON documents."""
        pass

    @abstractmethod
    def export_developer(self, output_dir: str) -> ExportResult:
        """Write the merged developer JSON."""
        pass

    @abstractmethod
    def export_figma(self, language: Any, output_dir: str) -> ExportResult:
        """Write the single-language Figma JSON."""
        pass
