"""Unit events emitted by the grammar engine."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable

__all__ = ["UnitState", "UnitContext", "UnitListener"]


class UnitState(StrEnum):
    """Grammar state a unit was recognized under.

    Attributes
    ----------
    TYPE : str
        Entry type, the identifier right after ``@``.
    TAG_NAME : str
        Tag name; a bare first tag is the citation key.
    RAW_VALUE : str
        Bare token value, eligible for macro substitution.
    BRACED_VALUE : str
        ``{...}`` value without its outer braces.
    QUOTED_VALUE : str
        ``"..."`` value without its outer quotes.
    ORIGINAL_ENTRY : str
        Verbatim source of a complete entry.
    """

    TYPE = "TYPE"
    TAG_NAME = "TAG_NAME"
    RAW_VALUE = "RAW_VALUE"
    BRACED_VALUE = "BRACED_VALUE"
    QUOTED_VALUE = "QUOTED_VALUE"
    ORIGINAL_ENTRY = "ORIGINAL_ENTRY"


VALUE_STATES = frozenset({UnitState.RAW_VALUE, UnitState.BRACED_VALUE, UnitState.QUOTED_VALUE})


@dataclass(frozen=True)
class UnitContext:
    """Context delivered alongside every unit.

    Attributes
    ----------
    state : UnitState
        State the unit was recognized under.
    offset : int
        Offset of the unit's first character in the source text.
    """

    state: UnitState
    offset: int = 0


@runtime_checkable
class UnitListener(Protocol):
    """Structural protocol for unit consumers.

    The engine calls ``on_unit`` synchronously, once per unit, in
    document order. A listener may also define ``abort()``, which the
    engine calls before re-raising a syntax error so the listener can
    drop the entry it was building.
    """

    def on_unit(self, text: str | None, context: UnitContext) -> None:
        """Receive one unit.

        Parameters
        ----------
        text : str | None
            Unit text; None carries no value.
        context : UnitContext
            State and position of the unit.
        """
        ...
