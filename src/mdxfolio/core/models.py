"""Post records produced by the repository"""

from typing import Optional

from pydantic import BaseModel, Field


class PostMetadata(BaseModel):
    """Normalized front matter of one content file, used for listings and sitemaps."""
    slug:        str
    title:       str
    date:        str                        # ISO-8601, not validated
    author:      Optional[str] = None
    description: Optional[str] = None
    tags:        list[str] = Field(default_factory=list)


class Post(PostMetadata):
    """A single post: metadata plus the raw body handed to the renderer."""
    content: str

    def metadata(self) -> PostMetadata:
        """Return the listing view of this post."""
        return PostMetadata(**self.model_dump(exclude={"content"}))
