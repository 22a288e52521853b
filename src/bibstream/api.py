"""Public API for parsing BibTeX.

This module provides the main public API for bibstream, enabling:
- Parsing strings and files into entry dicts
- Exporting entries to JSONL format
"""

import json
from pathlib import Path

from bibstream.assemble import EntryAssembler
from bibstream.config import ParserConfig
from bibstream.exceptions import BibSyntaxError, InvalidArgumentError, ParseError
from bibstream.models import Entry
from bibstream.parse import Parser
from bibstream.parse.base import read_source

__all__ = [
    "parse_string",
    "parse_file",
    "write_jsonl",
    "ParseError",
    "BibSyntaxError",
    "InvalidArgumentError",
]


def _build(config: ParserConfig | None) -> tuple[Parser, EntryAssembler]:
    assembler = EntryAssembler(config)
    parser = Parser()
    parser.add_listener(assembler)
    return parser, assembler


def parse_string(text: str, *, config: ParserConfig | None = None) -> list[Entry]:
    """Parse BibTeX text.

    Parameters
    ----------
    text : str
        Complete BibTeX source.
    config : ParserConfig | None, optional
        Tag name case and value processors.

    Returns
    -------
    list[Entry]
        One dict per entry, in document order.

    Raises
    ------
    BibSyntaxError
        If the text does not match the BibTeX grammar.

    Examples
    --------
        >>> from bibstream import parse_string
        >>> parse_string("@article{key, foo = {bar}}")
        [{'type': 'article', 'citation-key': 'key', 'foo': 'bar', '_original': '@article{key, foo = {bar}}'}]
    """
    parser, assembler = _build(config)
    parser.parse(text)
    return assembler.export()


def parse_file(path: str | Path, *, config: ParserConfig | None = None) -> list[Entry]:
    """Parse a ``.bib`` file.

    Encoding is detected from the bytes (UTF-8 with or without BOM,
    falling back to Latin-1).

    Parameters
    ----------
    path : str | Path
        Path to file to parse.
    config : ParserConfig | None, optional
        Tag name case and value processors.

    Returns
    -------
    list[Entry]
        One dict per entry, in document order.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    BibSyntaxError
        If the content does not match the grammar; ``file`` is set.
    """
    file_path = Path(path)
    text = read_source(file_path)

    parser, assembler = _build(config)
    try:
        parser.parse(text)
    except BibSyntaxError as e:
        e.file = str(file_path)
        raise

    return assembler.export()


def write_jsonl(
    entries: list[Entry],
    path: str | Path,
    *,
    sort_keys: bool = False,
) -> None:
    """Write entries to JSONL file (one JSON object per line).

    Field order is kept unless ``sort_keys`` is set.

    Parameters
    ----------
    entries : list[Entry]
        Entries to write.
    path : str | Path
        Output file path.
    sort_keys : bool, optional
        Whether to sort field names, by default False.

    Examples
    --------
        >>> from bibstream import parse_file, write_jsonl
        >>> write_jsonl(parse_file("refs.bib"), "refs.jsonl")
    """
    file_path = Path(path)

    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for entry in entries:
            f.write(json.dumps(entry, ensure_ascii=False, sort_keys=sort_keys) + "\n")
