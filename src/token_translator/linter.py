"""Key path linter built on the key sanitizer."""

import logging
from typing import Dict, Iterable, Optional
from .models import FlatRow
from .sanitizer import sanitize_key
from .types import KeyIssue


class KeyPathLinter:
    """
    Linter that flags key paths whose final segment is unsafe.

    Only the last segment of a path is checked; ancestor segments are
    reported back verbatim in the suggested path.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the linter.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def analyze(self, key_path: str) -> Optional[KeyIssue]:
        """
        Analyze a dotted key path.

        Args:
            key_path: Dotted key path to check

        Returns:
            KeyIssue with the suggested replacement, or None if the path is clean
        """
        segments = key_path.split('.')
        last_segment = segments[-1]
        sanitized = sanitize_key(last_segment)

        if not sanitized.changed:
            return None

        return KeyIssue(
            original=last_segment,
            suggested=sanitized.result,
            key_path='.'.join(segments[:-1] + [sanitized.result]),
        )

    def lint_rows(self, rows: Iterable[FlatRow]) -> Dict[str, KeyIssue]:
        """
        Collect issues for a row set.

        Args:
            rows: Rows to check

        Returns:
            Mapping of key path to its KeyIssue, for flagged rows only
        """
        issues = {}
        for row in rows:
            issue = self.analyze(row.key_path)
            if issue:
                issues[row.key_path] = issue

        self.logger.debug(f"Linted rows: {len(issues)} key issues found")
        return issues
