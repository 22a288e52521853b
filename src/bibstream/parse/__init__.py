"""BibTeX grammar engine and file loading.

Main entry points:
- Parser: streaming state machine emitting unit events
- ingest_file: parse a single file into entries with a result report
"""

from bibstream.parse.engine import Parser
from bibstream.parse.ingestion import FileIngestionResult, ingest_file

__all__ = [
    "Parser",
    "FileIngestionResult",
    "ingest_file",
]
