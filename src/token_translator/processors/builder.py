"""Builder re-nesting flat rows into token JSON documents."""

import copy
import logging
from typing import Any, Dict, Iterable, Optional
from ..models import FlatRow, GroupExtension
from ..types import Language, LANGUAGE_ORDER
from ..utils.key_paths import ensure_path, set_nested, split_key_path

DEVELOPER_TYPE_ALIASES = {"string": "text"}


class TreeBuilder:
    """
    Builder for the two export shapes.

    The developer shape merges every language under ``Translations/<LANG>``;
    the Figma shape holds one language and carries ``$extensions`` back into
    the tree. Key order in the output follows row order.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the builder.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def build_developer(self, rows: Iterable[FlatRow]) -> Dict[str, Any]:
        """
        Build the merged developer document.

        Args:
            rows: Rows to export

        Returns:
            Object with one subtree per language; rows without a value in a
            language are absent from that subtree
        """
        result: Dict[str, Any] = {language.developer_key: {} for language in LANGUAGE_ORDER}
        token_count = 0

        for row in rows:
            token_type = DEVELOPER_TYPE_ALIASES.get(row.token_type, row.token_type)

            for language in LANGUAGE_ORDER:
                value = row.get_value(language)
                if value is None:
                    continue

                set_nested(result[language.developer_key], row.key_path, {
                    "$value": value,
                    "$type": token_type,
                })
                token_count += 1

        self.logger.info(f"Built developer document with {token_count} tokens")
        return result

    def build_figma(self, rows: Iterable[FlatRow],
                    group_extensions: Iterable[GroupExtension],
                    language: Any) -> Dict[str, Any]:
        """
        Build a single-language Figma document.

        Args:
            rows: Rows to export
            group_extensions: Group metadata to reattach
            language: Language enum member or code

        Returns:
            Nested token document for the language
        """
        language = Language.parse(language)
        result: Dict[str, Any] = {}
        token_count = 0

        for row in rows:
            value = row.get_value(language)
            if value is None:
                continue

            token: Dict[str, Any] = {
                "$type": row.token_type,
                "$value": value,
            }
            if row.figma_variable_id:
                token["$extensions"] = {
                    "com.figma": {"variableId": row.figma_variable_id}
                }

            set_nested(result, row.key_path, token)
            token_count += 1

        applied = self._apply_group_extensions(result, group_extensions)

        self.logger.info(f"Built {language.value} Figma document with {token_count} tokens "
                         f"and {applied} group extensions")
        return result

    def _apply_group_extensions(self, result: Dict[str, Any],
                                group_extensions: Iterable[GroupExtension]) -> int:
        """Set ``$extensions`` at each group path, creating objects as needed."""
        applied = 0
        for group_extension in group_extensions:
            target = ensure_path(result, split_key_path(group_extension.group_path))
            target["$extensions"] = copy.deepcopy(group_extension.extensions)
            applied += 1
        return applied
