"""End-to-end tests for the swift-refactor command line."""

import textwrap
from pathlib import Path

from typer.testing import CliRunner

from swift_refactor import __version__, cli

GIVEN = textwrap.dedent(
    """\
    func load() {
        let data = try! read()
    }
    """
)
EXPECTED = textwrap.dedent(
    """\
    func load() {
        do {
            let data = try read()
        } catch {
            <#code#>
        }
    }
    """
)


def _write_sample(tmp_path: Path, name: str = "Load.swift", text: str = GIVEN) -> Path:
    src = tmp_path / name
    src.write_text(text, encoding="utf-8")
    return src


def test_convert_prints_rewritten_code(tmp_path: Path):
    runner = CliRunner()
    src = _write_sample(tmp_path)

    result = runner.invoke(cli.app, ["convert", str(src)], catch_exceptions=False)

    assert result.exit_code == 0
    assert EXPECTED in result.stdout
    assert src.read_text(encoding="utf-8") == GIVEN


def test_convert_diff(tmp_path: Path):
    runner = CliRunner()
    src = _write_sample(tmp_path)

    result = runner.invoke(cli.app, ["convert", str(src), "--diff"], catch_exceptions=False)

    assert result.exit_code == 0
    assert f"--- a/{src}" in result.stdout
    assert f"+++ b/{src}" in result.stdout
    assert "-    let data = try! read()" in result.stdout
    assert "+    do {" in result.stdout


def test_convert_in_place(tmp_path: Path):
    runner = CliRunner()
    src = _write_sample(tmp_path)
    untouched = _write_sample(tmp_path, "Plain.swift", "let a = 1\n")

    result = runner.invoke(cli.app, ["convert", str(tmp_path), "--in-place"], catch_exceptions=False)

    assert result.exit_code == 0
    assert f"{src}: rewrote 1 statement(s)" in result.stdout
    assert f"{untouched}: unchanged" in result.stdout
    assert src.read_text(encoding="utf-8") == EXPECTED
    assert (tmp_path / "Load.swift.bak").read_text(encoding="utf-8") == GIVEN


def test_convert_with_config_file(tmp_path: Path):
    runner = CliRunner()
    src = _write_sample(tmp_path, text="let a = try! f()\n")
    config_file = tmp_path / "refactor.yaml"
    config_file.write_text("fallback_indent_style: tabs\nplaceholder: '<#handle#>'\n", encoding="utf-8")

    result = runner.invoke(cli.app, ["convert", str(src), "-c", str(config_file)], catch_exceptions=False)

    assert result.exit_code == 0
    assert "do {\n\tlet a = try f()\n} catch {\n\t<#handle#>\n}\n" in result.stdout


def test_convert_bad_config_file(tmp_path: Path):
    runner = CliRunner()
    src = _write_sample(tmp_path)
    config_file = tmp_path / "refactor.yaml"
    config_file.write_text("fallback_indent_width: 99\n", encoding="utf-8")

    result = runner.invoke(cli.app, ["convert", str(src), "--config", str(config_file)])

    assert result.exit_code == 1
    assert "Error loading configuration file" in result.output


def test_convert_reports_parse_errors(tmp_path: Path):
    runner = CliRunner()
    good = _write_sample(tmp_path)
    bad = _write_sample(tmp_path, "Broken.swift", "func f() {\n")

    result = runner.invoke(cli.app, ["convert", str(good), str(bad), "--in-place"])

    assert result.exit_code == 1
    assert f"{bad}: error:" in result.output
    assert "Expected '}' to close '{'" in result.output
    # the good file is still processed
    assert good.read_text(encoding="utf-8") == EXPECTED


def test_convert_rejects_in_place_with_diff(tmp_path: Path):
    runner = CliRunner()
    src = _write_sample(tmp_path)

    result = runner.invoke(cli.app, ["convert", str(src), "--in-place", "--diff"])

    assert result.exit_code == 2
    assert "cannot be used together" in result.output


def test_convert_unknown_rule(tmp_path: Path):
    runner = CliRunner()
    src = _write_sample(tmp_path)

    result = runner.invoke(cli.app, ["convert", str(src), "--rule", "nope"])

    assert result.exit_code == 2
    assert "unknown rule 'nope'" in result.output
    assert "convert-to-do-catch" in result.output


def test_convert_without_swift_files(tmp_path: Path):
    runner = CliRunner()

    result = runner.invoke(cli.app, ["convert", str(tmp_path / "missing.swift")])

    assert result.exit_code == 2
    assert "no Swift source files found" in result.output


def test_scan_lists_candidates(tmp_path: Path):
    runner = CliRunner()
    src = _write_sample(tmp_path, text="let a = try! f()\nlet b = try? g()\n")

    result = runner.invoke(cli.app, ["scan", str(src)], catch_exceptions=False)

    assert result.exit_code == 0
    assert f"{src}:1:8: try! f() [applicable]" in result.stdout
    assert f"{src}:2:8: try? g() [skipped: not a force-try expression]" in result.stdout


def test_scan_reads_files_with_configured_encoding(tmp_path: Path):
    runner = CliRunner()
    src = tmp_path / "Legacy.swift"
    src.write_bytes("// café\nlet a = try! f()\n".encode("latin-1"))
    config_file = tmp_path / "refactor.yaml"
    config_file.write_text("encoding: latin-1\n", encoding="utf-8")

    default_result = runner.invoke(cli.app, ["scan", str(src)])
    result = runner.invoke(cli.app, ["scan", str(src), "--config", str(config_file)], catch_exceptions=False)

    assert default_result.exit_code == 1
    assert result.exit_code == 0
    assert f"{src}:2:8: try! f() [applicable]" in result.stdout


def test_scan_parse_error(tmp_path: Path):
    runner = CliRunner()
    src = _write_sample(tmp_path, text='let s = "open\n')

    result = runner.invoke(cli.app, ["scan", str(src)])

    assert result.exit_code == 1
    assert "Unterminated string literal" in result.output


def test_rules_lists_providers():
    runner = CliRunner()

    result = runner.invoke(cli.app, ["rules"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "convert-to-do-catch: Wrap a force-try statement in do/catch" in result.stdout


def test_version():
    runner = CliRunner()

    result = runner.invoke(cli.app, ["version"], catch_exceptions=False)

    assert result.exit_code == 0
    assert result.stdout.strip() == f"swift-refactor {__version__}"
