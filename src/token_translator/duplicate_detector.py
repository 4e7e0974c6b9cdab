"""Cross-row duplicate value detection."""

import logging
from typing import Collection, Dict, Iterable, List, Optional, Set, Tuple
from .models import FlatRow
from .types import DuplicateGroup, Language, LANGUAGE_ORDER


class DuplicateDetector:
    """
    Detector for translation values repeated under different keys.

    Grouping is exact string equality per language. The detector keeps no
    state between calls; suppressing groups is done by passing an exclusion
    set of ``(language, value)`` pairs to ``filter_ignored``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the duplicate detector.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def detect(self, rows: Iterable[FlatRow]) -> List[DuplicateGroup]:
        """
        Find values shared by two or more key paths.

        Args:
            rows: Rows to scan

        Returns:
            Duplicate groups, by language (az, en, ru) then by first
            occurrence of the value
        """
        rows = list(rows)
        duplicates = []

        for language in LANGUAGE_ORDER:
            value_map: Dict[str, List[str]] = {}
            seen: Set[Tuple[str, str]] = set()

            for row in rows:
                value = row.get_value(language)
                if not value or not value.strip() or (value, row.key_path) in seen:
                    continue

                seen.add((value, row.key_path))
                value_map.setdefault(value, []).append(row.key_path)

            for value, key_paths in value_map.items():
                if len(key_paths) > 1:
                    duplicates.append(DuplicateGroup(
                        value=value,
                        language=language,
                        key_paths=key_paths
                    ))

        self.logger.debug(f"Detected {len(duplicates)} duplicate groups across {len(rows)} rows")
        return duplicates

    @staticmethod
    def filter_ignored(groups: Iterable[DuplicateGroup],
                       ignored: Collection[Tuple[Language, str]]) -> List[DuplicateGroup]:
        """Drop groups whose ``(language, value)`` pair is in ``ignored``."""
        return [group for group in groups if group.exclusion_key not in ignored]

    @staticmethod
    def index_by_key_path(groups: Iterable[DuplicateGroup]) -> Dict[str, List[DuplicateGroup]]:
        """Map each key path to the duplicate groups it belongs to."""
        index: Dict[str, List[DuplicateGroup]] = {}
        for group in groups:
            for key_path in group.key_paths:
                index.setdefault(key_path, []).append(group)
        return index
