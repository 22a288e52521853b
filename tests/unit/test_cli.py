"""Tests for CLI module."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from bibstream.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test CLI runner."""
    return CliRunner()


def _read_jsonl(path: Path) -> list[dict]:
    with path.open(encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


# ---------------------------------------------------------------------------
# Top-level CLI
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cli_version_flag(runner: CliRunner) -> None:
    """Test --version flag outputs version string."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "bibstream" in result.output


@pytest.mark.unit
def test_cli_help(runner: CliRunner) -> None:
    """Test --help output lists commands."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "parse" in result.output
    assert "units" in result.output


@pytest.mark.unit
def test_cli_invalid_command(runner: CliRunner) -> None:
    """Test invalid command returns non-zero exit code."""
    result = runner.invoke(cli, ["invalid-command"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_parse_help(runner: CliRunner) -> None:
    """Test parse command help."""
    result = runner.invoke(cli, ["parse", "--help"])

    assert result.exit_code == 0
    assert "--case" in result.output
    assert "--output" in result.output


@pytest.mark.integration
def test_parse_writes_jsonl(runner: CliRunner, fixtures_dir: Path, tmp_path: Path) -> None:
    """Test parse writes one JSON object per entry."""
    output = tmp_path / "out.jsonl"

    result = runner.invoke(
        cli, ["parse", str(fixtures_dir / "valid" / "sample.bib"), "-o", str(output)]
    )

    assert result.exit_code == 0, result.output
    assert "Successfully wrote 4 entries" in result.output
    entries = _read_jsonl(output)
    assert [e.get("citation-key") for e in entries[2:]] == ["knuth1984", "lamport1994"]


@pytest.mark.integration
def test_parse_case_and_processors(
    runner: CliRunner, fixtures_dir: Path, tmp_path: Path
) -> None:
    """Test --case upper and --strip reach the assembler."""
    source = tmp_path / "in.bib"
    source.write_text("@misc{k, note = {  padded  }}\n", encoding="utf-8")
    output = tmp_path / "out.jsonl"

    result = runner.invoke(
        cli, ["parse", str(source), "-o", str(output), "--case", "upper", "--strip"]
    )

    assert result.exit_code == 0, result.output
    assert _read_jsonl(output) == [
        {
            "TYPE": "misc",
            "CITATION-KEY": "k",
            "NOTE": "padded",
            "_ORIGINAL": "@misc{k, note = {  padded  }}",
        }
    ]


@pytest.mark.integration
def test_parse_verbose(runner: CliRunner, fixtures_dir: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        cli,
        [
            "parse",
            str(fixtures_dir / "valid" / "trailing-comma.bib"),
            "-o",
            str(tmp_path / "out.jsonl"),
            "-v",
        ],
    )

    assert result.exit_code == 0
    assert "Found 1 entries" in result.output


@pytest.mark.integration
def test_parse_invalid_file_exits_nonzero(
    runner: CliRunner, fixtures_dir: Path, tmp_path: Path
) -> None:
    """Test syntax errors are reported and no output is written."""
    output = tmp_path / "out.jsonl"

    result = runner.invoke(
        cli, ["parse", str(fixtures_dir / "invalid" / "missing-value.bib"), "-o", str(output)]
    )

    assert result.exit_code == 1
    assert "Syntax error" in result.output
    assert "line 1" in result.output
    assert not output.exists()


@pytest.mark.unit
def test_parse_missing_input(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(
        cli, ["parse", str(tmp_path / "nope.bib"), "-o", str(tmp_path / "out.jsonl")]
    )

    assert result.exit_code != 0


@pytest.mark.integration
def test_parse_audit_log(runner: CliRunner, fixtures_dir: Path, tmp_path: Path) -> None:
    """Test --log records the run lifecycle."""
    log_path = tmp_path / "logs" / "events.jsonl"

    result = runner.invoke(
        cli,
        [
            "parse",
            str(fixtures_dir / "valid" / "sample.bib"),
            "-o",
            str(tmp_path / "out.jsonl"),
            "--case",
            "lower",
            "--log",
            str(log_path),
        ],
    )

    assert result.exit_code == 0
    events = _read_jsonl(log_path)
    assert [e["event"] for e in events] == ["run_started", "file_parsed", "run_finished"]
    assert all(e["stage"] == "parse" for e in events)
    assert events[0]["data"]["parameters"]["tag_name_case"] == "lower"
    assert events[2]["data"]["status"] == "success"
    assert events[2]["data"]["entries_parsed"] == 4


@pytest.mark.integration
def test_parse_audit_log_failure(runner: CliRunner, fixtures_dir: Path, tmp_path: Path) -> None:
    log_path = tmp_path / "events.jsonl"

    result = runner.invoke(
        cli,
        [
            "parse",
            str(fixtures_dir / "invalid" / "unclosed-brace.bib"),
            "-o",
            str(tmp_path / "out.jsonl"),
            "--log",
            str(log_path),
        ],
    )

    assert result.exit_code == 1
    events = _read_jsonl(log_path)
    assert [e["event"] for e in events] == ["run_started", "error", "run_finished"]
    assert events[2]["data"]["status"] == "failed"


# ---------------------------------------------------------------------------
# units command
# ---------------------------------------------------------------------------


@pytest.mark.integration
def test_units_prints_stream(runner: CliRunner, fixtures_dir: Path) -> None:
    """Test units prints one state and JSON text per line."""
    result = runner.invoke(cli, ["units", str(fixtures_dir / "valid" / "trailing-comma.bib")])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        'TYPE\t"trailingComma"',
        'TAG_NAME\t"foo"',
        'RAW_VALUE\t"bar"',
        'ORIGINAL_ENTRY\t"@trailingComma{foo = bar,}"',
    ]


@pytest.mark.integration
def test_units_reports_syntax_error(runner: CliRunner, fixtures_dir: Path) -> None:
    result = runner.invoke(cli, ["units", str(fixtures_dir / "invalid" / "missing-value.bib")])

    assert result.exit_code == 1
    assert "Expected value" in result.output
