"""File ingestion: read, decode and parse one ``.bib`` file."""

from dataclasses import dataclass
from pathlib import Path

from bibstream.assemble import EntryAssembler
from bibstream.audit import AuditLogger
from bibstream.config import ParserConfig
from bibstream.exceptions import BibSyntaxError
from bibstream.models import Entry
from bibstream.parse.base import decode_source
from bibstream.parse.engine import Parser
from bibstream.utils import source_digest, source_mtime

__all__ = ["FileIngestionResult", "ingest_file"]


@dataclass(frozen=True)
class FileIngestionResult:
    """Immutable result of ingesting a single file.

    Attributes
    ----------
    filename : str
        Name of the file (basename).
    filepath : str
        Full path to the file.
    file_size : int
        Size of file in bytes.
    file_mtime : str
        ISO8601 timestamp of file modification time.
    encoding_used : str
        Encoding used to decode file.
    entries_parsed : int
        Number of entries produced.
    errors : tuple[str, ...]
        Error messages.
    file_digest : str
        SHA-256 digest of file bytes.
    """

    filename: str
    filepath: str
    file_size: int
    file_mtime: str
    encoding_used: str
    entries_parsed: int
    errors: tuple[str, ...] = ()
    file_digest: str = ""


def ingest_file(
    file_path: Path,
    config: ParserConfig | None = None,
    audit_logger: AuditLogger | None = None,
) -> tuple[list[Entry], FileIngestionResult]:
    """Ingest a single file.

    Read and syntax failures are reported in the result instead of
    raised; a file that fails to parse yields no entries at all.

    Parameters
    ----------
    file_path : Path
        Path to file to ingest.
    config : ParserConfig | None, optional
        Assembler options.
    audit_logger : AuditLogger | None, optional
        Receives file_parsed and error events. If None, no logging.

    Returns
    -------
    tuple[list[Entry], FileIngestionResult]
        - Finalized entries
        - File ingestion result with metadata and stats
    """
    try:
        file_bytes = file_path.read_bytes()
    except OSError as e:
        if audit_logger is not None:
            audit_logger.error(type(e).__name__, str(e), file=str(file_path))
        result = FileIngestionResult(
            filename=file_path.name,
            filepath=str(file_path),
            file_size=0,
            file_mtime="",
            encoding_used="",
            entries_parsed=0,
            errors=(f"Failed to read file: {e}",),
        )
        return [], result

    text, encoding = decode_source(file_bytes)
    digest = source_digest(file_bytes)

    assembler = EntryAssembler(config)
    parser = Parser()
    parser.add_listener(assembler)

    entries: list[Entry] = []
    errors: tuple[str, ...] = ()
    try:
        parser.parse(text)
        entries = assembler.export()
    except BibSyntaxError as e:
        e.file = str(file_path)
        errors = (f"Syntax error: {e}",)
        if audit_logger is not None:
            audit_logger.error(
                type(e).__name__, str(e), file=str(file_path), line=e.line, column=e.column
            )

    if audit_logger is not None and not errors:
        audit_logger.file_parsed(
            file=str(file_path), entries=len(entries), encoding=encoding, digest=digest
        )

    result = FileIngestionResult(
        filename=file_path.name,
        filepath=str(file_path),
        file_size=len(file_bytes),
        file_mtime=source_mtime(file_path),
        encoding_used=encoding,
        entries_parsed=len(entries),
        errors=errors,
        file_digest=digest,
    )

    return entries, result
