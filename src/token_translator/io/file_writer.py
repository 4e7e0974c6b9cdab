"""File writer utilities for token translator output."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from ..types import ProcessingError, ErrorType


class FileWriter:
    """
    File writer for exported token documents and project stores.

    Handles directory management and JSON serialization. Key order in the
    written file is the insertion order of the object being written.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, indent: int = 2):
        """
        Initialize the file writer.

        Args:
            logger: Optional logger instance
            indent: JSON indentation used for written files
        """
        self.logger = logger or logging.getLogger(__name__)
        self.indent = indent

    def write_json(self, data: Any, output_dir: str, filename: str) -> Dict[str, Any]:
        """
        Write a JSON document into a directory.

        Args:
            data: JSON-serializable data
            output_dir: Output directory path
            filename: Name of the file to create or replace

        Returns:
            Dictionary with file information

        Raises:
            ProcessingError: If writing fails
        """
        output_path = Path(output_dir)
        self._ensure_directory_exists(output_path)
        return self.write_json_file(data, output_path / filename)

    def write_json_file(self, data: Any, file_path: Path) -> Dict[str, Any]:
        """
        Write a JSON document to an explicit path.

        The document is written to a temporary sibling first and moved into
        place, so an interrupted write never leaves a truncated file.

        Args:
            data: JSON-serializable data
            file_path: Target file path

        Returns:
            Dictionary with file information

        Raises:
            ProcessingError: If writing fails
        """
        file_path = Path(file_path)
        tmp_path = file_path.with_name(file_path.name + ".tmp")

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=self.indent, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, file_path)
        except (OSError, TypeError, ValueError) as e:
            raise ProcessingError(
                f"Failed to write {file_path}: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"path": str(file_path)}
            )

        file_size = file_path.stat().st_size
        self.logger.debug(f"Wrote {file_path} ({file_size} bytes)")

        return {
            "filename": file_path.name,
            "path": str(file_path.absolute()),
            "size": file_size,
        }

    def _ensure_directory_exists(self, directory_path: Path) -> None:
        """
        Ensure that a directory exists, creating it if necessary.

        Args:
            directory_path: Path to directory

        Raises:
            ProcessingError: If directory creation fails
        """
        try:
            directory_path.mkdir(parents=True, exist_ok=True)

            # Check if directory is writable
            if not os.access(directory_path, os.W_OK):
                raise ProcessingError(
                    f"Directory {directory_path} is not writable",
                    ErrorType.FILESYSTEM
                )

        except OSError as e:
            raise ProcessingError(
                f"Failed to create directory {directory_path}: {str(e)}",
                ErrorType.FILESYSTEM
            )
