"""Flattener merging per-language token trees into flat rows."""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union
from ..models import FlatRow, GroupExtension, TokenGroup, TokenLeaf
from ..parser import TokenTreeParser
from ..types import FlattenResult, Language, LANGUAGE_ORDER

TreeInput = Union[TokenGroup, Dict[str, Any], None]


class TreeFlattener:
    """
    Flattener for per-language token trees.

    Each language tree is walked depth-first in the fixed order az, en, ru.
    Leaves are merged into one row per dotted key path; group nodes carrying
    ``$extensions`` produce GroupExtension records.

    Merge policy per row:
      - language values: the tree of that language wins
      - token_type: overwritten whenever a leaf carries a non-empty ``$type``
      - figma_variable_id: kept from the first leaf that provided one
    """

    def __init__(self, parser: Optional[TokenTreeParser] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the flattener.

        Args:
            parser: Optional TokenTreeParser used to type raw trees
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.parser = parser or TokenTreeParser(logger=self.logger)

    def flatten(self, trees: Mapping[Any, TreeInput]) -> FlattenResult:
        """
        Flatten up to three language trees into rows and group extensions.

        Args:
            trees: Mapping of language (enum or code) to a parsed object,
                a TokenGroup, or None for a missing language

        Returns:
            FlattenResult with rows in first-seen order
        """
        by_language = {Language.parse(language): tree for language, tree in trees.items()}

        rows: Dict[str, FlatRow] = {}
        group_extensions: Dict[str, GroupExtension] = {}

        for language in LANGUAGE_ORDER:
            tree = by_language.get(language)
            if tree is None:
                continue

            if not isinstance(tree, TokenGroup):
                tree = self.parser.build_tree(tree)

            before = len(rows)
            self._flatten_tree(tree, language, rows, group_extensions)
            self.logger.debug(f"Flattened {language.value}: {len(rows) - before} new rows")

        self.logger.info(f"Flattened {len(rows)} tokens and {len(group_extensions)} group extensions")

        return FlattenResult(
            rows=list(rows.values()),
            group_extensions=list(group_extensions.values())
        )

    def _flatten_tree(self, tree: TokenGroup, language: Language,
                      rows: Dict[str, FlatRow],
                      group_extensions: Dict[str, GroupExtension]) -> None:
        """Merge one language tree into the shared row and extension maps."""
        for key_path, node in tree.walk():
            if not key_path:
                self.logger.debug(f"Skipping node with empty key path in {language.value}")
                continue

            if isinstance(node, TokenLeaf):
                self._merge_leaf(rows, key_path, node, language)
            elif node.extensions is not None:
                group_extensions[key_path] = GroupExtension(
                    group_path=key_path,
                    extensions=node.extensions
                )

    def _merge_leaf(self, rows: Dict[str, FlatRow], key_path: str,
                    leaf: TokenLeaf, language: Language) -> None:
        """Insert or update the row for a leaf."""
        row = rows.get(key_path)
        if row is None:
            row = FlatRow(key_path=key_path)
            rows[key_path] = row

        row.set_value(language, self._normalize_value(leaf.value))

        if leaf.token_type:
            row.token_type = leaf.token_type

        if not row.figma_variable_id:
            row.figma_variable_id = leaf.figma_variable_id

    @staticmethod
    def _normalize_value(value: Any) -> Optional[str]:
        """Store non-string token values as compact JSON text."""
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
