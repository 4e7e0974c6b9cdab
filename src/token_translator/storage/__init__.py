"""Persistence for translation projects."""

from .project_store import ProjectStore

__all__ = ["ProjectStore"]
