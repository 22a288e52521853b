"""Core data types for bibstream.

- Unit events produced by the grammar engine (units)
- Entry records produced by the assembler (entries)
"""

from bibstream.models.entries import (
    CITATION_KEY,
    ORIGINAL_KEY,
    STRING_TYPE,
    TYPE_KEY,
    Entry,
    FinalEntries,
    TagNameCase,
    TagValueProcessor,
)
from bibstream.models.units import VALUE_STATES, UnitContext, UnitListener, UnitState

__all__ = [
    "CITATION_KEY",
    "ORIGINAL_KEY",
    "STRING_TYPE",
    "TYPE_KEY",
    "Entry",
    "FinalEntries",
    "TagNameCase",
    "TagValueProcessor",
    "UnitContext",
    "UnitListener",
    "UnitState",
    "VALUE_STATES",
]
