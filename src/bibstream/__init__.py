"""Streaming BibTeX parsing into plain entry dicts.

This package provides:
- Data models (bibstream.models): unit events and entry types
- Parsing (bibstream.parse): grammar engine and file ingestion
- Assembly (bibstream.assemble): entry building and finalize
- Configuration (bibstream.config): parser options
- Audit (bibstream.audit): JSONL event logging
- CLI (bibstream.cli): command-line interface
- Public API (bibstream.api): high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from bibstream.api import (
    BibSyntaxError,
    InvalidArgumentError,
    ParseError,
    parse_file,
    parse_string,
    write_jsonl,
)
from bibstream.assemble import EntryAssembler
from bibstream.config import ParserConfig
from bibstream.models import TagNameCase, UnitContext, UnitState
from bibstream.parse import Parser

__all__ = [
    "__version__",
    "__license__",
    "Parser",
    "EntryAssembler",
    "ParserConfig",
    "TagNameCase",
    "UnitContext",
    "UnitState",
    "parse_string",
    "parse_file",
    "write_jsonl",
    "ParseError",
    "BibSyntaxError",
    "InvalidArgumentError",
]
