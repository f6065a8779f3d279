"""Tag collection and search filtering for the blog index"""

from typing import Optional

from mdxfolio.core.models import PostMetadata


def all_tags(posts: list[PostMetadata]) -> list[str]:
    """Unique tags across posts, in first-seen order."""
    return list(dict.fromkeys(t for p in posts for t in p.tags))


def _matches(post: PostMetadata, query: str) -> bool:
    q = query.casefold()
    fields = [post.title, post.description or "", *post.tags]
    return any(q in f.casefold() for f in fields)


def filter_posts(
    posts: list[PostMetadata],
    query: Optional[str] = None,
    tag: Optional[str] = None,
    ) -> list[PostMetadata]:
    """Keep posts carrying tag (if given) whose title, description or tags contain query."""
    query = (query or "").strip()
    return [
        p for p in posts
        if (tag is None or tag in p.tags) and (not query or _matches(p, query))
    ]
