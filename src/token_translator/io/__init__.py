"""File I/O operations for the token translator."""

from .file_reader import FileReader
from .file_writer import FileWriter

__all__ = ["FileReader", "FileWriter"]
