"""Root test configuration: content directory and repository fixtures"""

from datetime import datetime

import pytest

from mdxfolio.core.repository import PostRepository


FIXED_NOW = datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    """Empty content directory under tmp_path."""
    path = tmp_path / "content" / "posts"
    path.mkdir(parents=True)
    return path


@pytest.fixture(name="write_post")
def write_post_fixture(content_dir):
    """Write <slug><ext> with the given raw front matter lines and body."""
    def _write(slug: str, frontmatter: str = "", body: str = "Body.\n", ext: str = ".mdx"):
        path = content_dir / f"{slug}{ext}"
        path.write_text(f"---\n{frontmatter}---\n{body}", encoding="utf-8")
        return path
    return _write


@pytest.fixture(name="repo")
def repo_fixture(content_dir, fixed_now):
    """Lenient repository with a frozen clock."""
    return PostRepository(content_dir, clock=lambda: fixed_now)


@pytest.fixture(name="fixed_now")
def fixed_now_fixture():
    return FIXED_NOW
