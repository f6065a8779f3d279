"""JSON-LD Article records for search engines"""

import json
from typing import Any

from mdxfolio.core.models import PostMetadata


SCHEMA_CONTEXT = "https://schema.org"
PUBLISHER_NAME = "Portfolio Blog"


def build_article_record(
    headline: str,
    description: str,
    date_published: str,
    author_name: str,
    ) -> dict[str, Any]:
    """Return a schema.org Article record. The publisher is always PUBLISHER_NAME."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": headline,
        "description": description,
        "datePublished": date_published,
        "author": {
            "@type": "Person",
            "name": author_name,
        },
        "publisher": {
            "@type": "Organization",
            "name": PUBLISHER_NAME,
        },
    }


def article_record_for(post: PostMetadata) -> dict[str, Any]:
    return build_article_record(post.title, post.description or "", post.date, post.author or "")


def jsonld_script(record: dict[str, Any]) -> str:
    """Serialize a record into a <script type="application/ld+json"> tag."""
    payload = json.dumps(record, ensure_ascii=False, indent=2).replace("</", "<\\/")
    return f'<script type="application/ld+json">\n{payload}\n</script>'
