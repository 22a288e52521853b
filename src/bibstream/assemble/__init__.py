"""Entry assembly from grammar units.

Main entry points:
- EntryAssembler: unit listener building entries
- finalize: pure post-processing of streamed entries
"""

from bibstream.assemble.entries import RawEntries
from bibstream.assemble.finalize import finalize
from bibstream.assemble.listener import EntryAssembler
from bibstream.assemble.processors import (
    collapse_whitespace,
    normalize_processors,
    strip_whitespace,
)

__all__ = [
    "EntryAssembler",
    "RawEntries",
    "finalize",
    "normalize_processors",
    "strip_whitespace",
    "collapse_whitespace",
]
