"""Error handling implementation for the token translator."""

import logging
from typing import Any, Optional
from .types import (
    ErrorHandlerInterface,
    ValidationResult,
    ValidationError,
    ErrorResponse,
    ProcessingError,
    ErrorType
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for token translator operations.

    Validates uploaded documents and user-supplied identifiers, and turns
    processing errors into responses with a suggested action.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate an uploaded JSON document.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_json_string(input_data)
        except (TypeError, AttributeError) as e:
            self.logger.error(f"Unexpected error during input validation: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Validation failed with unexpected error: {str(e)}",
                    location="input"
                )],
                warnings=[]
            )

    def validate_language(self, language: Any) -> ValidationResult:
        """Validate a language code supplied by the caller."""
        return ValidationUtils.validate_language(language)

    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """
        Handle processing errors and provide recovery suggestions.

        Args:
            error: ProcessingError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Processing error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.CONFLICT:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Another token already uses this key path. "
                                 "Choose a different key or delete the existing token first.",
                context=error.context
            )
        elif error.error_type == ErrorType.NOT_FOUND:
            return ErrorResponse(
                can_recover=True,
                suggested_action="The token no longer exists. Reload the project and retry.",
                context=error.context
            )
        elif error.error_type in (ErrorType.KEY_PATH, ErrorType.LANGUAGE):
            return ErrorResponse(
                can_recover=True,
                suggested_action="Correct the input and retry.",
                context=error.context
            )
        elif error.error_type == ErrorType.FILESYSTEM:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Check file permissions, available disk space, and directory access. "
                                 "Ensure the output directory is writable.",
                context=error.context
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry.",
                context=error.context
            )
