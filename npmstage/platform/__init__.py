"""Host filesystem helpers."""

from .files import atomic_write_text, copy_tree

__all__ = ["atomic_write_text", "copy_tree"]
