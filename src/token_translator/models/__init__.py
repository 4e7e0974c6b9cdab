"""Data models for the token translator."""

from .flat_row import FlatRow
from .group_extension import GroupExtension
from .project import Project
from .token_tree import TokenGroup, TokenLeaf, TokenNode

__all__ = ["FlatRow", "GroupExtension", "Project", "TokenGroup", "TokenLeaf", "TokenNode"]
