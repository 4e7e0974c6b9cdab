"""Typed token tree nodes."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple, Union


@dataclass
class TokenLeaf:
    """A translatable token: a JSON object carrying ``$value``."""

    value: Any
    token_type: Optional[str] = None
    extensions: Optional[Dict[str, Any]] = None

    @property
    def figma_variable_id(self) -> Optional[str]:
        """Variable id from ``$extensions["com.figma"].variableId``, if any."""
        if not isinstance(self.extensions, dict):
            return None
        figma = self.extensions.get("com.figma")
        if not isinstance(figma, dict):
            return None
        variable_id = figma.get("variableId")
        return variable_id if isinstance(variable_id, str) and variable_id else None


@dataclass
class TokenGroup:
    """A non-leaf JSON object holding further groups and leaves."""

    children: Dict[str, 'TokenNode'] = field(default_factory=dict)
    extensions: Optional[Dict[str, Any]] = None

    def walk(self, prefix: str = "") -> Iterator[Tuple[str, 'TokenNode']]:
        """
        Yield ``(key_path, node)`` pairs depth-first in document order.

        Groups are yielded before their children. Iterative, so nesting
        depth is not limited by the recursion limit.
        """
        stack = [(prefix, iter(self.children.items()))]
        while stack:
            parent_path, items = stack[-1]
            for key, child in items:
                path = f"{parent_path}.{key}" if parent_path else key
                yield path, child
                if isinstance(child, TokenGroup):
                    stack.append((path, iter(child.children.items())))
                    break
            else:
                stack.pop()

    def count_leaves(self) -> int:
        return sum(1 for _, node in self.walk() if isinstance(node, TokenLeaf))


TokenNode = Union[TokenLeaf, TokenGroup]
