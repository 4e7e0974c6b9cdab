"""Validation utilities for token documents and key paths."""

import json
from typing import Any, List, Tuple
from ..types import ValidationResult, ValidationError, ErrorType, Language


class ValidationUtils:
    """Utility class for validating token documents and identifiers."""

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax and token document structure.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        # Check if string is empty
        if not json_string or not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        # Try to parse JSON
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        # Validate structure
        structure_errors, structure_warnings = ValidationUtils._validate_document_structure(data)
        errors.extend(structure_errors)
        warnings.extend(structure_warnings)

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _validate_document_structure(data: Any) -> Tuple[List[ValidationError], List[str]]:
        """Validate the root of a token document."""
        errors = []
        warnings = []

        if not isinstance(data, dict):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Root element must be an object, got {type(data).__name__}",
                location="root"
            ))
            return errors, warnings

        if not ValidationUtils._contains_token(data):
            warnings.append("Document contains no $value tokens")

        return errors, warnings

    @staticmethod
    def _contains_token(data: Any) -> bool:
        """Check whether any nested object carries a $value."""
        pending = [data] if isinstance(data, dict) else []
        while pending:
            for key, value in pending.pop().items():
                if key == "$extensions" or not isinstance(value, dict):
                    continue
                if "$value" in value:
                    return True
                pending.append(value)
        return False

    @staticmethod
    def validate_key_path(key_path: Any) -> ValidationResult:
        """
        Validate a dotted key path used as a row identifier.

        Args:
            key_path: Key path to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not isinstance(key_path, str) or not key_path.strip():
            errors.append(ValidationError(
                type=ErrorType.KEY_PATH,
                message="Key path cannot be empty",
                location="key_path"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if any(segment == "" for segment in key_path.split('.')):
            warnings.append(f"Key path {key_path!r} contains empty segments")

        return ValidationResult(is_valid=True, errors=errors, warnings=warnings)

    @staticmethod
    def validate_language(language: Any) -> ValidationResult:
        """
        Validate a language code.

        Args:
            language: Language enum member or code

        Returns:
            ValidationResult with validation details
        """
        try:
            Language.parse(language)
        except ValueError as e:
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.LANGUAGE,
                    message=str(e),
                    location="language"
                )],
                warnings=[]
            )
        return ValidationResult(is_valid=True, errors=[], warnings=[])
