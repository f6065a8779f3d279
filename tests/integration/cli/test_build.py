"""Integration test for the build command (list -> render -> export)"""

from typer.testing import CliRunner

from mdxfolio.cli.cli import app


def test_build_cmd_exports_site(tmp_path, monkeypatch):
    """build writes one page per post, the blog index, and sitemap.xml."""
    monkeypatch.chdir(tmp_path)
    posts = tmp_path / "content" / "posts"
    posts.mkdir(parents=True)
    (posts / "hello.mdx").write_text("---\ntitle: Hello\ndate: 2024-01-01\n---\n# Hello\n\n$x^2$\n")
    (posts / "world.mdx").write_text("---\ndate: 2024-02-01\n---\nWorld\n")

    runner = CliRunner()
    result = runner.invoke(app, [
        "build",
        "--out-dir", str(tmp_path / "dist"),
        "--base-url", "https://example.com",
    ])

    assert result.exit_code == 0, result.output
    assert "Exported 2 post(s)" in result.output
    assert (tmp_path / "dist" / "blog" / "hello" / "index.html").exists()
    assert (tmp_path / "dist" / "blog" / "world" / "index.html").exists()
    assert (tmp_path / "dist" / "blog" / "index.html").exists()
    assert "https://example.com/blog/hello" in (tmp_path / "dist" / "sitemap.xml").read_text()


def test_build_cmd_without_content_dir(tmp_path, monkeypatch):
    """A missing content directory exports an empty blog instead of failing."""
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(app, ["build", "--out-dir", str(tmp_path / "dist")])
    assert result.exit_code == 0, result.output
    assert "Exported 0 post(s)" in result.output
    assert "No blog posts yet." in (tmp_path / "dist" / "blog" / "index.html").read_text()
