"""Exceptions raised while reading the content directory"""

from pathlib import Path


class ContentError(ValueError):
    """A content file that cannot be turned into a post (bad encoding or front matter)."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
