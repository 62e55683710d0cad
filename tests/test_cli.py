"""Test the CLI"""

from click.testing import CliRunner

from mathreveal.cli import main


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, [])
    assert result.exit_code == 0
    assert "render" in result.output


def test_cli_version():
    runner = CliRunner()
    result = runner.invoke(main, ["-V"])
    assert result.exit_code == 0
    assert "mathreveal" in result.output


def test_cli_render_file(tmp_path):
    source = tmp_path / "doc.md"
    source.write_text("# Title\n\nInline $x$ and\n\n$$y$$\n", encoding="utf8")

    runner = CliRunner()
    result = runner.invoke(main, ["render", "-e", "client", str(source)])

    assert result.exit_code == 0
    assert '<article class="markdown">' in result.output
    assert '<span class="math math-inline">$x$</span>' in result.output
    assert '<div class="math-standalone">' in result.output


def test_cli_render_stdin_to_file(tmp_path):
    target = tmp_path / "out.html"

    runner = CliRunner()
    result = runner.invoke(
        main,
        ["render", "--engine", "client", "--no-reveal", "-", "-o", str(target)],
        input="Plain words with $m$\n",
    )

    assert result.exit_code == 0
    html = target.read_text(encoding="utf8")
    assert html.startswith('<article class="markdown"><p>Plain words with ')
    assert "fade-in" not in html


def test_cli_render_unknown_engine(tmp_path):
    source = tmp_path / "doc.md"
    source.write_text("text", encoding="utf8")

    runner = CliRunner()
    result = runner.invoke(main, ["render", "-e", "nope", str(source)])
    assert result.exit_code != 0


def test_cli_extract(tmp_path):
    source = tmp_path / "doc.md"
    source.write_text("$$a$$ and $b$", encoding="utf8")

    runner = CliRunner()
    result = runner.invoke(main, ["extract", str(source)])

    assert result.exit_code == 0
    assert "MATHBLOCK0END" in result.output
    assert "MATHINLINE1END" in result.output
    assert "$$a$$" in result.output


def test_cli_extract_no_math(tmp_path):
    source = tmp_path / "doc.md"
    source.write_text("nothing here", encoding="utf8")

    runner = CliRunner()
    result = runner.invoke(main, ["extract", str(source)])

    assert result.exit_code == 0
    assert "No math found" in result.output


def test_cli_config():
    runner = CliRunner()
    result = runner.invoke(main, ["config"])

    assert result.exit_code == 0
    assert "engine:" in result.output
