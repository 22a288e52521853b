"""Tests for the public API."""

import json
from pathlib import Path

import pytest

from bibstream import (
    BibSyntaxError,
    ParserConfig,
    parse_file,
    parse_string,
    write_jsonl,
)
from bibstream.assemble import collapse_whitespace


@pytest.fixture
def sample_entries(fixtures_dir: Path) -> list[dict]:
    return parse_file(fixtures_dir / "valid" / "sample.bib")


@pytest.mark.integration
def test_parse_file_sample(sample_entries: list[dict]) -> None:
    assert [e["type"] for e in sample_entries] == ["string", "string", "article", "book"]

    article = sample_entries[2]
    assert article["citation-key"] == "knuth1984"
    assert article["title"] == "Literate {P}rogramming"
    assert article["journal"] == "The Computer Journal"
    assert article["publisher"] == "Association for Computing Machinery"
    assert article["month"] == "January 1984"
    assert article["year"] == "1984"
    assert article["_original"].startswith("@article{knuth1984,")
    assert article["_original"].endswith("year = 1984\n}")


@pytest.mark.integration
def test_parse_file_keeps_latex_verbatim(sample_entries: list[dict]) -> None:
    book = sample_entries[3]

    assert book["title"] == "{\\LaTeX}: A Document Preparation System"
    assert book["year"] == "1994"


@pytest.mark.integration
def test_parse_file_with_config(fixtures_dir: Path) -> None:
    config = ParserConfig(tag_name_case="upper", tag_value_processors=[collapse_whitespace])

    entries = parse_file(fixtures_dir / "valid" / "sample.bib", config=config)

    assert entries[3]["AUTHOR"] == "Leslie Lamport"
    assert "\n" in entries[3]["_ORIGINAL"]


@pytest.mark.unit
def test_parse_file_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        parse_file(tmp_path / "missing.bib")


@pytest.mark.integration
def test_parse_file_syntax_error_names_file(fixtures_dir: Path) -> None:
    path = fixtures_dir / "invalid" / "missing-value.bib"

    with pytest.raises(BibSyntaxError) as exc_info:
        parse_file(path)

    assert exc_info.value.file == str(path)
    assert exc_info.value.line == 1


@pytest.mark.unit
def test_parse_file_decodes_latin1_and_bom(tmp_path: Path) -> None:
    latin = tmp_path / "latin.bib"
    latin.write_bytes("@misc{k, author = {Müller}}".encode("latin-1"))
    bom = tmp_path / "bom.bib"
    bom.write_bytes(b"\xef\xbb\xbf@misc{k, author = {Ada}}\r\n")

    assert parse_file(latin)[0]["author"] == "Müller"
    assert parse_file(bom)[0]["_original"] == "@misc{k, author = {Ada}}"


@pytest.mark.unit
def test_parse_string_sessions_are_independent() -> None:
    parse_string('@string{a = "x"}')

    assert parse_string("@misc{k, f = a}")[0]["f"] == "a"


@pytest.mark.unit
def test_write_jsonl_preserves_field_order(tmp_path: Path) -> None:
    entries = parse_string("@misc{k, zeta = 1, alpha = 2}\n@book{b}")
    output = tmp_path / "out.jsonl"

    write_jsonl(entries, output)

    lines = output.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert list(first) == ["type", "citation-key", "zeta", "alpha", "_original"]


@pytest.mark.unit
def test_write_jsonl_sorted_and_unicode(tmp_path: Path) -> None:
    output = tmp_path / "out.jsonl"

    write_jsonl([{"type": "misc", "author": "Gödel"}], output, sort_keys=True)

    assert output.read_text(encoding="utf-8") == '{"author": "Gödel", "type": "misc"}\n'
