"""File reader utilities for token documents and project stores."""

import json
import logging
from pathlib import Path
from typing import Any, Optional
from ..types import ProcessingError, ErrorType


class FileReader:
    """File reader returning raw document text or parsed JSON."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the file reader.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def read_text(self, file_path: Path) -> str:
        """
        Read a UTF-8 text file.

        Raises:
            ProcessingError: If the file cannot be read
        """
        file_path = Path(file_path)
        try:
            text = file_path.read_text(encoding='utf-8-sig')
        except FileNotFoundError:
            raise ProcessingError(
                f"File not found: {file_path}",
                ErrorType.NOT_FOUND,
                context={"path": str(file_path)}
            )
        except (OSError, UnicodeDecodeError) as e:
            raise ProcessingError(
                f"Failed to read {file_path}: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"path": str(file_path)}
            )

        self.logger.debug(f"Read {len(text)} characters from {file_path}")
        return text

    def read_json(self, file_path: Path) -> Any:
        """
        Read and parse a JSON file.

        Raises:
            ProcessingError: If the file cannot be read or is not valid JSON
        """
        text = self.read_text(file_path)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ProcessingError(
                f"Invalid JSON in {file_path}: {e.msg} at line {e.lineno}, column {e.colno}",
                ErrorType.SYNTAX,
                context={"path": str(file_path)}
            )
