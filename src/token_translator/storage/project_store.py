"""Project store persisting translation rows and group extensions."""

import copy
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple
from ..io import FileReader, FileWriter
from ..models import FlatRow, GroupExtension, Project
from ..types import ErrorType, Language, ProcessingError
from ..utils.validation import ValidationUtils

STORE_VERSION = "1.0.0"


class ProjectStore:
    """
    Store for one project's translations.

    Rows are unique by key path and group extensions unique by group path.
    The store is held in memory and written to a single JSON document by
    ``save``. Removing rows never removes group extensions.
    """

    def __init__(self, project: Project, path: Optional[Path] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize an empty store.

        Args:
            project: Project the store belongs to
            path: Optional file path used by save()
            logger: Optional logger instance
        """
        self.project = project
        self.path = Path(path) if path is not None else None
        self.logger = logger or logging.getLogger(__name__)
        self._rows: Dict[str, FlatRow] = {}
        self._group_extensions: Dict[str, GroupExtension] = {}
        self._ignored_duplicates: Set[Tuple[Language, str]] = set()

    @classmethod
    def create(cls, path: Path, name: str,
               logger: Optional[logging.Logger] = None) -> 'ProjectStore':
        """Create a new project store and write it to ``path``."""
        store = cls(Project(name=name), path=path, logger=logger)
        store.save()
        return store

    @classmethod
    def load(cls, path: Path, logger: Optional[logging.Logger] = None) -> 'ProjectStore':
        """
        Load a project store from disk.

        Raises:
            ProcessingError: If the file is missing, unreadable or malformed
        """
        path = Path(path)
        data = FileReader(logger).read_json(path)

        try:
            store = cls(Project.from_dict(data["project"]), path=path, logger=logger)
            for row_data in data.get("translations", []):
                row = FlatRow.from_dict(row_data)
                store._rows[row.key_path] = row
            for ext_data in data.get("group_extensions", []):
                group_extension = GroupExtension.from_dict(ext_data)
                store._group_extensions[group_extension.group_path] = group_extension
            for entry in data.get("ignored_duplicates", []):
                store._ignored_duplicates.add((Language.parse(entry["language"]), entry["value"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ProcessingError(
                f"Malformed project store {path}: {str(e)}",
                ErrorType.STRUCTURE,
                context={"path": str(path)}
            )

        store.logger.info(f"Loaded project '{store.project.name}' with {len(store._rows)} tokens")
        return store

    def save(self) -> Dict[str, Any]:
        """
        Write the store to its path.

        Raises:
            ProcessingError: If the store has no path or writing fails
        """
        if self.path is None:
            raise ProcessingError("Project store has no file path", ErrorType.FILESYSTEM)

        return FileWriter(self.logger).write_json_file(self.to_dict(), self.path)

    @contextmanager
    def transaction(self):
        """
        Undo every change made inside the block if it raises ProcessingError.

        Rows are mutated in place by edits, so the snapshot is a deep copy.
        """
        snapshot = (
            copy.deepcopy(self._rows),
            copy.deepcopy(self._group_extensions),
            set(self._ignored_duplicates),
        )
        try:
            yield self
        except ProcessingError:
            self._rows, self._group_extensions, self._ignored_duplicates = snapshot
            self.logger.warning(f"Rolled back changes to project '{self.project.name}'")
            raise

    def to_dict(self) -> Dict[str, Any]:
        """Convert the store to a JSON-serializable document."""
        return {
            "version": STORE_VERSION,
            "project": self.project.to_dict(),
            "translations": [row.to_dict() for row in self.rows()],
            "group_extensions": [ext.to_dict() for ext in self.group_extensions()],
            "ignored_duplicates": [
                {"language": language.value, "value": value}
                for language, value in sorted(self._ignored_duplicates,
                                              key=lambda item: (item[0].value, item[1]))
            ],
        }

    # Rows

    def rows(self) -> List[FlatRow]:
        """All rows ordered by key path."""
        return sorted(self._rows.values(), key=lambda row: row.key_path)

    def get(self, key_path: str) -> FlatRow:
        """
        Get the row for a key path.

        Raises:
            ProcessingError: If no row has this key path
        """
        row = self._rows.get(key_path)
        if row is None:
            raise ProcessingError(
                f"Token not found: {key_path}",
                ErrorType.NOT_FOUND,
                context={"key_path": key_path}
            )
        return row

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, key_path: str) -> bool:
        return key_path in self._rows

    def upsert_rows(self, rows: Iterable[FlatRow]) -> int:
        """
        Insert or replace rows by key path.

        Values, token type and variable id are replaced wholesale; an
        existing original_key is kept.

        Returns:
            Number of rows written
        """
        count = 0
        for row in rows:
            existing = self._rows.get(row.key_path)
            self._rows[row.key_path] = FlatRow(
                key_path=row.key_path,
                az_value=row.az_value,
                en_value=row.en_value,
                ru_value=row.ru_value,
                token_type=row.token_type,
                figma_variable_id=row.figma_variable_id,
                original_key=existing.original_key if existing else row.original_key,
            )
            count += 1

        self.logger.info(f"Upserted {count} tokens into project '{self.project.name}'")
        return count

    def update_value(self, key_path: str, language: Any, value: Optional[str]) -> FlatRow:
        """
        Set one language value of a row; an empty string clears it.

        Raises:
            ProcessingError: If the row does not exist
        """
        row = self.get(key_path)
        row.set_value(Language.parse(language), value or None)
        self.logger.debug(f"Updated {key_path} [{Language.parse(language).value}]")
        return row

    def rename(self, key_path: str, new_key_path: str) -> FlatRow:
        """
        Move a row to a new key path.

        The row's original_key is set to its current key path unless it was
        already set by an earlier rename.

        Raises:
            ProcessingError: If the row is missing, the new path is empty or
                already used by another row
        """
        row = self.get(key_path)

        validation = ValidationUtils.validate_key_path(new_key_path)
        if not validation.is_valid:
            raise ProcessingError(
                validation.errors[0].message,
                ErrorType.KEY_PATH,
                context={"key_path": key_path, "new_key_path": new_key_path}
            )

        if new_key_path == key_path:
            return row

        if new_key_path in self._rows:
            raise ProcessingError(
                f"Key path already exists: {new_key_path}",
                ErrorType.CONFLICT,
                context={"key_path": key_path, "new_key_path": new_key_path}
            )

        renamed = row.renamed(new_key_path)
        del self._rows[key_path]
        self._rows[new_key_path] = renamed

        self.logger.info(f"Renamed {key_path} -> {new_key_path}")
        return renamed

    def delete(self, key_path: str) -> FlatRow:
        """
        Delete a row. Group extensions above it are left untouched.

        Raises:
            ProcessingError: If the row does not exist
        """
        row = self.get(key_path)
        del self._rows[key_path]
        self.logger.info(f"Deleted {key_path}")
        return row

    def search(self, query: str) -> List[FlatRow]:
        """
        Case-insensitive substring search over key path, original key and values.

        An empty query matches every row.
        """
        rows = self.rows()
        if not query:
            return rows

        needle = query.lower()
        return [row for row in rows if self._matches(row, needle)]

    @staticmethod
    def _matches(row: FlatRow, needle: str) -> bool:
        fields = (row.key_path, row.original_key, row.az_value, row.en_value, row.ru_value)
        return any(field is not None and needle in field.lower() for field in fields)

    # Group extensions

    def group_extensions(self) -> List[GroupExtension]:
        """All group extensions ordered by group path."""
        return sorted(self._group_extensions.values(), key=lambda ext: ext.group_path)

    def upsert_group_extensions(self, group_extensions: Iterable[GroupExtension]) -> int:
        """Insert or replace group extensions by group path."""
        count = 0
        for group_extension in group_extensions:
            self._group_extensions[group_extension.group_path] = group_extension
            count += 1
        return count

    # Duplicate exclusions

    def ignored_duplicates(self) -> Set[Tuple[Language, str]]:
        return set(self._ignored_duplicates)

    def ignore_duplicate(self, language: Any, value: str) -> None:
        """Remember a ``(language, value)`` pair to hide from duplicate reports."""
        self._ignored_duplicates.add((Language.parse(language), value))
