"""Per-page title, description and canonical URL"""

from typing import Optional

from pydantic import BaseModel

from mdxfolio.core.models import PostMetadata


class PageMetadata(BaseModel):
    title: str
    description: str
    canonical: str


def title_from_slug(slug: str) -> str:
    """'my-first-post' -> 'My First Post'."""
    return ' '.join(w[:1].upper() + w[1:] for w in slug.split('-'))


def page_metadata(slug: str, post: Optional[PostMetadata] = None) -> PageMetadata:
    """Build page metadata, preferring the post's own title and description when given."""
    title = post.title if post else title_from_slug(slug)
    description = (post.description if post else None) or f"Blog post: {title}"
    return PageMetadata(title=title, description=description, canonical=f"/blog/{slug}")
