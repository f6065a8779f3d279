"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdxfolio.config import Settings, load_config
from mdxfolio.core.errors import ContentError
from mdxfolio.core.export import export_site
from mdxfolio.core.jsonld import article_record_for
from mdxfolio.core.listing import filter_posts
from mdxfolio.core.render.pipeline import Renderer
from mdxfolio.core.repository import PostRepository


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _repository(settings: Settings, lenient: Optional[bool] = None) -> PostRepository:
    return PostRepository(
        Path(settings.content_dir),
        extension=settings.extension,
        lenient=settings.lenient if lenient is None else lenient,
    )


def _renderer(settings: Settings) -> Renderer:
    return Renderer(
        extended=settings.extended_syntax,
        math=settings.math,
        typeset=settings.typeset_math,
    )


def list_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Directory holding the posts")] = None,
    tag: Annotated[Optional[str], typer.Option("--tag", help="Only posts with this tag")] = None,
    query: Annotated[Optional[str], typer.Option("--query", help="Search title, description and tags")] = None,
    ):
    """List posts newest first."""
    settings = _settings(overrides={"content_dir": content})
    posts = filter_posts(_repository(settings).get_all_posts(), query=query, tag=tag)
    if not posts:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for p in posts:
        typer.echo(f"{p.date}  {p.slug}  {p.title}")


def show_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug (filename without extension)")],
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Directory holding the posts")] = None,
    json_ld: Annotated[bool, typer.Option("--json-ld", help="Print the JSON-LD Article record instead of HTML")] = False,
    ):
    """Render one post to HTML."""
    settings = _settings(overrides={"content_dir": content})
    post = _repository(settings).get_post_by_slug(slug)
    if post is None:
        _fail(f"Post not found: {slug}")
    if json_ld:
        typer.echo(json.dumps(article_record_for(post), indent=2, ensure_ascii=False))
    else:
        typer.echo(_renderer(settings).render(post.content).html)


def check_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Directory holding the posts")] = None,
    ):
    """Strictly parse every post; fail on the first malformed file."""
    settings = _settings(overrides={"content_dir": content})
    try:
        posts = _repository(settings, lenient=False).get_all_posts()
    except ContentError as e:
        _fail("Malformed post", e)
    typer.echo(f"{len(posts)} post(s) OK")


def build_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Directory holding the posts")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    base_url: Annotated[Optional[str], typer.Option("--base-url", help="Absolute site URL for the sitemap")] = None,
    ):
    """Export the blog as static HTML pages plus sitemap.xml."""
    settings = _settings(overrides={"content_dir": content, "output_dir": out, "base_url": base_url})
    output_dir = Path(settings.output_dir)
    try:
        results = export_site(
            _repository(settings), _renderer(settings), output_dir,
            settings.base_url, settings.site_title,
        )
    except OSError as e:
        _fail("Export failed", e)
    for slug, page in results:
        typer.echo(f"  {slug} -> {page}")
    typer.echo(f"Exported {len(results)} post(s) to {output_dir}/")
