"""Token document parser producing typed token trees."""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple
from .error_handler import ErrorHandler
from .models import TokenGroup, TokenLeaf

EXTENSIONS_KEY = "$extensions"
VALUE_KEY = "$value"
TYPE_KEY = "$type"


class TokenTreeParser:
    """
    Parser for Figma Tokens style JSON documents.

    Parsing is the validation boundary: a document that is not valid JSON,
    or whose root is not an object, is rejected here. Building the typed
    tree from an already parsed value never fails; shapes that do not fit
    the token format are skipped.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the parser.

        Args:
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.error_handler = error_handler or ErrorHandler()
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Dict[str, Any]:
        """
        Parse and validate a token document.

        Args:
            json_string: JSON string to parse

        Returns:
            Parsed root object

        Raises:
            ValueError: If the document is empty, invalid or not an object
        """
        validation_result = self.error_handler.validate_input(json_string)
        if not validation_result.is_valid:
            error_messages = [error.message for error in validation_result.errors]
            raise ValueError(f"Invalid JSON input: {'; '.join(error_messages)}")

        for warning in validation_result.warnings:
            self.logger.warning(warning)

        data = json.loads(json_string)
        self.logger.info(f"Parsed token document with {len(data)} top-level keys")
        return data

    def parse_tree(self, json_string: str) -> TokenGroup:
        """Parse a token document straight into a typed tree."""
        return self.build_tree(self.parse(json_string))

    def build_tree(self, data: Any) -> TokenGroup:
        """
        Convert a parsed JSON value into a typed token tree.

        Args:
            data: Parsed JSON value; anything but an object yields an empty tree

        Returns:
            Root TokenGroup
        """
        if not isinstance(data, dict):
            self.logger.debug(f"Ignoring non-object root of type {type(data).__name__}")
            return TokenGroup()

        root = self._build_group(data)
        self.logger.debug(f"Built token tree with {root.count_leaves()} leaves")
        return root

    def _build_group(self, node: Dict[str, Any]) -> TokenGroup:
        """
        Build a group from an object that has no $value.

        Iterative, so nesting depth is not limited by the recursion limit.
        Children are attached when first seen, keeping document order.
        """
        root = TokenGroup(extensions=self._extensions_of(node))
        pending: List[Tuple[Dict[str, Any], TokenGroup]] = [(node, root)]

        while pending:
            source, group = pending.pop()
            for key, value in source.items():
                if key == EXTENSIONS_KEY or not isinstance(value, dict):
                    continue

                if VALUE_KEY in value:
                    group.children[key] = self._build_leaf(value)
                else:
                    child = TokenGroup(extensions=self._extensions_of(value))
                    group.children[key] = child
                    pending.append((value, child))

        return root

    def _build_leaf(self, node: Dict[str, Any]) -> TokenLeaf:
        """Build a leaf from an object carrying $value."""
        token_type = node.get(TYPE_KEY)
        return TokenLeaf(
            value=node[VALUE_KEY],
            token_type=token_type if isinstance(token_type, str) and token_type else None,
            extensions=self._extensions_of(node),
        )

    @staticmethod
    def _extensions_of(node: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        extensions = node.get(EXTENSIONS_KEY)
        return extensions if isinstance(extensions, dict) else None
