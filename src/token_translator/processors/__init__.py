"""Processors converting between token trees and flat rows."""

from .builder import TreeBuilder
from .flattener import TreeFlattener

__all__ = ["TreeBuilder", "TreeFlattener"]
