"""Static site export: post pages, blog index, and sitemap.xml"""

import html
import logging
from datetime import datetime
from pathlib import Path

from mdxfolio.core.jsonld import article_record_for, jsonld_script
from mdxfolio.core.listing import all_tags
from mdxfolio.core.models import Post, PostMetadata
from mdxfolio.core.paths import static_paths
from mdxfolio.core.render.pipeline import Renderer
from mdxfolio.core.repository import PostRepository
from mdxfolio.core.seo import PageMetadata, page_metadata
from mdxfolio.core.sitemap import build_sitemap, sitemap_xml


logger = logging.getLogger(__name__)


def build_page(meta: PageMetadata, site_title: str, main: str, head_extra: str = "") -> str:
    """Wrap main content in a minimal HTML5 document."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n'
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(meta.title)} | {html.escape(site_title)}</title>\n"
        f'<meta name="description" content="{html.escape(meta.description)}">\n'
        f'<link rel="canonical" href="{html.escape(meta.canonical)}">\n'
        f"{head_extra}"
        "</head>\n<body>\n"
        f"{main}"
        "</body>\n</html>\n"
    )


def _post_header(post: PostMetadata) -> str:
    parts = [f"<h1>{html.escape(post.title)}</h1>", f'<time datetime="{html.escape(post.date)}">{html.escape(post.date)}</time>']
    if post.author:
        parts.append(f'<span class="author">{html.escape(post.author)}</span>')
    if post.tags:
        tags = "".join(f'<li class="tag">{html.escape(t)}</li>' for t in post.tags)
        parts.append(f'<ul class="tags">{tags}</ul>')
    return "<header>\n" + "\n".join(parts) + "\n</header>\n"


def build_post_page(post: Post, renderer: Renderer, site_title: str) -> str:
    """Render one post into a full page with its JSON-LD record in <head>."""
    body = renderer.render(post.content).html
    main = f'<article>\n{_post_header(post)}<div class="prose">\n{body}</div>\n</article>\n'
    head = jsonld_script(article_record_for(post)) + "\n"
    return build_page(page_metadata(post.slug, post), site_title, main, head)


def build_index_page(posts: list[PostMetadata], site_title: str) -> str:
    if not posts:
        items = '<p class="empty">No blog posts yet.</p>\n'
    else:
        items = "".join(
            f'<li><a href="/blog/{html.escape(p.slug)}">{html.escape(p.title)}</a> '
            f'<time datetime="{html.escape(p.date)}">{html.escape(p.date)}</time></li>\n'
            for p in posts
        )
        items = f"<ul>\n{items}</ul>\n"
        tags = "".join(f'<li class="tag">{html.escape(t)}</li>' for t in all_tags(posts))
        if tags:
            items = f'<ul class="tags">{tags}</ul>\n' + items
    meta = PageMetadata(title="Blog", description=f"{site_title} posts", canonical="/blog")
    return build_page(meta, site_title, f"<main>\n<h1>Blog Posts</h1>\n{items}</main>\n")


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding='utf-8')
    return path


def export_site(
    repository: PostRepository,
    renderer: Renderer,
    output_dir: Path,
    base_url: str,
    site_title: str = "Blog",
    now: datetime | None = None,
    ) -> list[tuple[str, Path]]:
    """Write blog/index.html, blog/<slug>/index.html per static path, and sitemap.xml.

    Returns (slug, page_path) pairs for the post pages written.
    """
    results = []
    for slug in static_paths(repository):
        post = repository.get_post_by_slug(slug)
        if post is None:
            logger.warning("Post %r disappeared during export; skipping", slug)
            continue
        page = _write(output_dir / "blog" / slug / "index.html", build_post_page(post, renderer, site_title))
        results.append((slug, page))

    _write(output_dir / "blog" / "index.html", build_index_page(repository.get_all_posts(), site_title))
    entries = build_sitemap([slug for slug, _ in results], base_url, now or datetime.now())
    _write(output_dir / "sitemap.xml", sitemap_xml(entries))
    return results
