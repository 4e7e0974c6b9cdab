"""Helpers for addressing nested objects by dotted key path."""

from typing import Any, Dict, List


def split_key_path(key_path: str) -> List[str]:
    """Split a dotted key path into its segments."""
    return key_path.split('.')


def ensure_path(root: Dict[str, Any], segments: List[str]) -> Dict[str, Any]:
    """
    Walk ``segments`` from ``root``, creating objects on demand.

    Any segment currently holding a non-object value is replaced by an
    empty object.

    Returns:
        The object found or created at the end of the path
    """
    current = root
    for segment in segments:
        child = current.get(segment)
        if not isinstance(child, dict):
            child = {}
            current[segment] = child
        current = child
    return current


def set_nested(root: Dict[str, Any], key_path: str, value: Any) -> None:
    """
    Place ``value`` at ``key_path`` inside ``root``.

    Intermediate segments are created as objects; whatever occupied the
    final segment is overwritten.
    """
    segments = split_key_path(key_path)
    parent = ensure_path(root, segments[:-1])
    parent[segments[-1]] = value
