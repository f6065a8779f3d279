"""Read-only post repository over a directory of front matter content files"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from mdxfolio.core.errors import ContentError
from mdxfolio.core.models import Post, PostMetadata
from mdxfolio.core.parse import date_sort_key, discover_files, parse_post_file


logger = logging.getLogger(__name__)


def _is_safe_slug(slug: str) -> bool:
    """Reject slugs that could resolve outside the content directory."""
    return bool(slug) and not slug.startswith('.') and '/' not in slug and '\\' not in slug


class PostRepository:
    """Loads posts from content_dir on every call; nothing is cached.

    In lenient mode (the default) a malformed file is logged and skipped by
    get_all_posts() and reported as not found by get_post_by_slug(). With
    lenient=False, get_all_posts() raises ContentError for the first bad file.

    Files are enumerated in filename order. Slugs that collide ignoring case
    resolve to the first file in that order; later files are skipped.
    """

    def __init__(
        self,
        content_dir: Path,
        extension: str = '.mdx',
        lenient: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
        ):
        self.content_dir = Path(content_dir)
        self.extension = extension
        self.lenient = lenient
        # one timestamp per repository so dateless posts agree between listing and lookup
        self.now = (clock or datetime.now)()

    def _clock(self) -> datetime:
        return self.now

    def _index(self) -> dict[str, Path]:
        """Map case-folded slug -> file, first file wins."""
        if not self.content_dir.is_dir():
            logger.warning("Content directory not found: %s", self.content_dir)
            return {}
        try:
            files = discover_files(self.content_dir, self.extension)
        except OSError as e:
            logger.warning("Content directory %s is not readable: %s", self.content_dir, e)
            return {}

        index: dict[str, Path] = {}
        for path in files:
            key = path.stem.casefold()
            if key in index:
                logger.warning("Duplicate slug %r: %s shadowed by %s", path.stem, path.name, index[key].name)
                continue
            index[key] = path
        return index

    def _load(self, path: Path) -> Post | None:
        """Parse one file, honouring the lenient/strict policy."""
        try:
            return parse_post_file(path, self._clock)
        except ContentError as e:
            if not self.lenient:
                raise
            logger.warning("Skipping malformed post %s: %s", path.name, e.reason)
        except OSError as e:
            if not self.lenient:
                raise ContentError(path, str(e)) from e
            logger.warning("Skipping unreadable post %s: %s", path.name, e)
        return None

    def get_all_posts(self) -> list[PostMetadata]:
        """Return metadata for every post, newest first (ties in filename order)."""
        posts = []
        for path in self._index().values():
            post = self._load(path)
            if post is None:
                continue
            if date_sort_key(post.date)[0] == 0:
                logger.warning("Post %s has an unparsable date %r; listing it last", post.slug, post.date)
            posts.append(post.metadata())
        return sorted(posts, key=lambda p: date_sort_key(p.date), reverse=True)

    def get_post_by_slug(self, slug: str) -> Post | None:
        """Return the post stored as <slug><extension>, or None if it is missing or malformed."""
        if not _is_safe_slug(slug):
            logger.info("Rejected slug %r", slug)
            return None
        path = self._index().get(slug.casefold())
        if path is None or path.stem != slug:
            logger.info("No post found for slug %r", slug)
            return None
        try:
            return parse_post_file(path, self._clock)
        except (ContentError, OSError) as e:
            logger.warning("Could not load post %r: %s", slug, e)
            return None

    def get_all_slugs(self) -> list[str]:
        """Slugs of get_all_posts(), in the same order."""
        return [p.slug for p in self.get_all_posts()]
