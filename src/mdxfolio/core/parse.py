"""File discovery, frontmatter extraction, and post metadata normalization"""

import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Callable

import yaml

from mdxfolio.core.errors import ContentError
from mdxfolio.core.models import Post


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|$)', re.DOTALL)


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1) or '') or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(path: Path, extension: str = '.mdx') -> list[Path]:
    """Return files in path with the given extension, sorted by filename.

    Not recursive: every post lives directly in the content directory.
    """
    return sorted(
        (p for p in path.iterdir() if p.is_file() and p.suffix == extension),
        key=lambda p: p.name,
    )


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _as_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(t) for t in value if t is not None]
    return [str(value)]


def normalize_metadata(
    slug: str,
    frontmatter: dict[str, Any],
    clock: Callable[[], datetime] = datetime.now,
    ) -> dict[str, Any]:
    """Apply field defaults: title <- slug, date <- clock(), tags <- []."""
    title = _as_text(frontmatter.get('title'))
    post_date = _as_text(frontmatter.get('date'))
    if post_date is None:
        post_date = clock().isoformat()
        logger.debug("%s has no date; defaulting to %s", slug, post_date)
    return {
        "slug": slug,
        "title": title or slug,
        "date": post_date,
        "author": _as_text(frontmatter.get('author')),
        "description": _as_text(frontmatter.get('description')),
        "tags": _as_tags(frontmatter.get('tags')),
    }


def parse_post_file(path: Path, clock: Callable[[], datetime] = datetime.now) -> Post:
    """Read a content file into a Post; the slug is the filename without extension.

    Raises ContentError for undecodable text or bad frontmatter. OSError from
    reading the file is left to the caller.
    """
    try:
        raw = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise ContentError(path, f"not valid UTF-8 ({e.reason})") from e
    try:
        frontmatter, body = _strip_frontmatter(raw)
    except ValueError as e:
        raise ContentError(path, str(e)) from e
    return Post(**normalize_metadata(path.stem, frontmatter, clock), content=body)


def date_sort_key(value: str) -> tuple[int, datetime]:
    """Sort key for ISO-8601 date strings; unparsable values sort below every real date."""
    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError:
        return 0, datetime.min
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return 1, parsed
