from typer.testing import CliRunner

from mdxfolio.cli.cli import app


def test_cli_smoke():
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("build", "check", "list", "show"):
        assert name in result.output
