"""Entry assembler: the built-in unit listener."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from bibstream.assemble.entries import RawEntries
from bibstream.assemble.finalize import finalize
from bibstream.assemble.processors import normalize_processors
from bibstream.models import (
    VALUE_STATES,
    Entry,
    FinalEntries,
    TagNameCase,
    TagValueProcessor,
    UnitContext,
    UnitState,
)

if TYPE_CHECKING:
    from bibstream.config import ParserConfig

__all__ = ["EntryAssembler"]


class EntryAssembler:
    """Build entries from the unit stream of one document.

    Streaming is append-only; :meth:`export` finalizes lazily and caches
    the result until another unit or setting arrives. One assembler
    belongs to one parse session and must not be shared between
    concurrent parses.

    Examples
    --------
        >>> from bibstream.parse import Parser
        >>> assembler = EntryAssembler()
        >>> assembler.set_tag_name_case("upper")
        >>> parser = Parser()
        >>> parser.add_listener(assembler)
        >>> parser.parse('@string{me = "Ada"} @misc{k, author = me}')
        >>> assembler.export()[1]["AUTHOR"]
        'Ada'
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        """Initialize an empty assembler.

        Parameters
        ----------
        config : ParserConfig | None, optional
            Case mode and processors to start with.
        """
        self._raw = RawEntries()
        self._case = TagNameCase.NONE
        self._processors: list[TagValueProcessor] = []
        self._final: FinalEntries | None = None

        if config is not None:
            config.apply(self)

    @property
    def raw(self) -> RawEntries:
        """Entries as streamed, before finalize."""
        return self._raw

    @property
    def tag_name_case(self) -> TagNameCase:
        return self._case

    @property
    def tag_value_processors(self) -> tuple[TagValueProcessor, ...]:
        return tuple(self._processors)

    def set_tag_name_case(self, case: TagNameCase | str | None) -> None:
        """Set how finalize rewrites tag names.

        Parameters
        ----------
        case : TagNameCase | str | None
            ``lower``, ``upper``, ``none`` or None.
        """
        self._case = TagNameCase.coerce(case)
        self._final = None

    def add_tag_value_processor(
        self,
        processor: TagValueProcessor | Sequence[TagValueProcessor],
    ) -> None:
        """Register one processor, or a list of them, after those already added.

        Parameters
        ----------
        processor : TagValueProcessor | Sequence[TagValueProcessor]
            Callable(s) of shape ``(value, tag_name) -> value``.

        Raises
        ------
        InvalidArgumentError
            If the argument is neither callable nor a sequence of
            callables. Registered processors are left unchanged.
        """
        self._processors.extend(normalize_processors(processor))
        self._final = None

    def on_unit(self, text: str | None, context: UnitContext) -> None:
        """Consume one unit from the grammar engine."""
        state = context.state
        raw = self._raw

        if state == UnitState.TYPE:
            raw.start_entry(text)
        elif state == UnitState.TAG_NAME:
            raw.declare_tag(text)
        elif state in VALUE_STATES:
            if state == UnitState.RAW_VALUE and text is not None:
                text = raw.resolve(text)
            raw.append_value(text)
        elif state == UnitState.ORIGINAL_ENTRY:
            raw.set_original(text)

        self._final = None

    def abort(self) -> None:
        """Forget the entry being built when the parse fails.

        Entries completed before the failure are kept; the half-built one
        and any macros it declared are dropped.
        """
        self._raw.discard_uncommitted()
        self._final = None

    def export(self) -> list[Entry]:
        """Return finalized entries.

        Finalize runs once; later calls reuse its result. Each call
        returns fresh dicts, so callers may mutate them freely.

        Returns
        -------
        list[Entry]
            Entries in document order.
        """
        if self._final is None:
            self._final = finalize(self._raw.entries, self._case, self._processors)
        return [dict(entry) for entry in self._final]
