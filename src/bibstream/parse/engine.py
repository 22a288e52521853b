"""Streaming BibTeX grammar engine.

The engine walks the source one character at a time and emits a unit
event for every recognized piece of an entry:

    @article{key, title = {A {Braced} Title}, month = jan # " 1"}
     ^^^^^^^ ^^^  ^^^^^    ^^^^^^^^^^^^^^^^^  ^^^^^   ^^^    ^^
     TYPE    TAG  TAG      BRACED_VALUE       TAG     RAW    QUOTED

followed by one ORIGINAL_ENTRY unit holding the entry's verbatim text.
Text outside entries, ``@comment{...}`` and ``@preamble{...}`` blocks are
skipped. Reference: http://www.bibtex.org/Format/
"""

from enum import Enum, auto
from pathlib import Path

from bibstream.exceptions import BibSyntaxError, InvalidArgumentError
from bibstream.models import UnitContext, UnitListener, UnitState
from bibstream.parse.base import read_source

__all__ = ["Parser"]

# Characters that end a type, tag name or raw value
DELIMITERS = frozenset(',={}"#()')

# Entry types whose body is ignorable text
SKIPPED_TYPES = frozenset({"comment", "preamble"})


class _State(Enum):
    OUTSIDE_ENTRY = auto()
    AFTER_AT = auto()
    TYPE = auto()
    POST_TYPE = auto()
    SKIPPED_BLOCK = auto()
    PRE_TAG_NAME = auto()
    TAG_NAME = auto()
    POST_TAG_NAME = auto()
    PRE_VALUE = auto()
    RAW_VALUE = auto()
    BRACED_VALUE = auto()
    QUOTED_VALUE = auto()
    POST_VALUE = auto()


def _is_name_char(char: str) -> bool:
    return not char.isspace() and char not in DELIMITERS and char != "@"


class Parser:
    """Character-stream state machine for BibTeX entries.

    Listeners registered with :meth:`add_listener` receive every unit
    synchronously, in document order. A parser instance keeps per-call
    state only; listeners keep whatever they accumulate.

    Examples
    --------
        >>> from bibstream.assemble import EntryAssembler
        >>> assembler = EntryAssembler()
        >>> parser = Parser()
        >>> parser.add_listener(assembler)
        >>> parser.parse("@misc{key, year = 2020}")
        >>> assembler.export()[0]["citation-key"]
        'key'
    """

    def __init__(self) -> None:
        self._listeners: list[UnitListener] = []
        self._reset("")

    def add_listener(self, listener: UnitListener) -> None:
        """Register a unit consumer.

        Parameters
        ----------
        listener : UnitListener
            Object exposing ``on_unit(text, context)``.

        Raises
        ------
        InvalidArgumentError
            If ``listener`` has no callable ``on_unit``.
        """
        if not callable(getattr(listener, "on_unit", None)):
            raise InvalidArgumentError(
                f"Listener must provide an on_unit(text, context) method, got {listener!r}"
            )
        self._listeners.append(listener)

    def parse_file(self, file_path: str | Path) -> None:
        """Parse a ``.bib`` file.

        Parameters
        ----------
        file_path : str | Path
            Path to the file.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        BibSyntaxError
            If the content does not match the grammar; ``file`` is set.
        """
        path = Path(file_path)
        try:
            self.parse(read_source(path))
        except BibSyntaxError as e:
            e.file = str(path)
            raise

    def parse(self, source: str) -> None:
        """Parse BibTeX text, emitting units to every listener.

        Parameters
        ----------
        source : str
            Complete BibTeX text.

        Raises
        ------
        BibSyntaxError
            If the text does not match the BibTeX entry grammar. Listeners that
            define ``abort()`` are told before the error propagates.
        """
        self._reset(source)
        handlers = {
            _State.OUTSIDE_ENTRY: self._outside_entry,
            _State.AFTER_AT: self._after_at,
            _State.TYPE: self._type,
            _State.POST_TYPE: self._post_type,
            _State.SKIPPED_BLOCK: self._skipped_block,
            _State.PRE_TAG_NAME: self._pre_tag_name,
            _State.TAG_NAME: self._tag_name,
            _State.POST_TAG_NAME: self._post_tag_name,
            _State.PRE_VALUE: self._pre_value,
            _State.RAW_VALUE: self._raw_value,
            _State.BRACED_VALUE: self._braced_value,
            _State.QUOTED_VALUE: self._quoted_value,
            _State.POST_VALUE: self._post_value,
        }

        try:
            for offset, char in enumerate(source):
                self._offset = offset
                handlers[self._state](char)
            self._check_end_of_input()
        except BibSyntaxError:
            self._abort_listeners()
            raise

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _reset(self, source: str) -> None:
        self._source = source
        self._state = _State.OUTSIDE_ENTRY
        self._offset = 0
        self._entry_start = 0
        self._buffer: list[str] = []
        self._buffer_start = 0
        self._depth = 0
        self._escaped = False
        self._tag_seen = False
        self._pending_tag: tuple[str, int] | None = None

    def _emit(self, text: str | None, state: UnitState, offset: int) -> None:
        context = UnitContext(state=state, offset=offset)
        for listener in self._listeners:
            listener.on_unit(text, context)

    def _abort_listeners(self) -> None:
        for listener in self._listeners:
            abort = getattr(listener, "abort", None)
            if callable(abort):
                abort()

    def _fail(self, reason: str, offset: int | None = None) -> None:
        raise BibSyntaxError.at(reason, self._source, self._offset if offset is None else offset)

    def _start_buffer(self, char: str | None = None) -> None:
        self._buffer = [char] if char is not None else []
        self._buffer_start = self._offset if char is not None else self._offset + 1

    def _flush(self, state: UnitState) -> None:
        self._emit("".join(self._buffer), state, self._buffer_start)
        self._buffer = []

    def _close_entry(self) -> None:
        original = self._source[self._entry_start : self._offset + 1].strip()
        self._emit(original, UnitState.ORIGINAL_ENTRY, self._entry_start)
        self._state = _State.OUTSIDE_ENTRY

    def _next_tag(self) -> None:
        self._tag_seen = True
        self._state = _State.PRE_TAG_NAME

    def _check_end_of_input(self) -> None:
        state = self._state
        if state in (_State.OUTSIDE_ENTRY, _State.AFTER_AT, _State.TYPE, _State.POST_TYPE):
            return
        if state == _State.BRACED_VALUE:
            self._fail("Unterminated braced value", self._buffer_start - 1)
        if state == _State.QUOTED_VALUE:
            self._fail("Unterminated quoted value", self._buffer_start - 1)
        if state == _State.SKIPPED_BLOCK:
            self._fail("Unterminated block", self._entry_start)
        self._fail("Unexpected end of input, entry is missing its closing '}'", len(self._source))

    # ------------------------------------------------------------------
    # Between entries
    # ------------------------------------------------------------------

    def _outside_entry(self, char: str) -> None:
        if char == "@":
            self._entry_start = self._offset
            self._state = _State.AFTER_AT

    def _after_at(self, char: str) -> None:
        if not _is_name_char(char):
            self._not_an_entry(char)
            return
        self._start_buffer(char)
        self._state = _State.TYPE

    def _type(self, char: str) -> None:
        if _is_name_char(char):
            self._buffer.append(char)
        elif char.isspace():
            self._state = _State.POST_TYPE
        elif char == "{":
            self._open_entry()
        else:
            self._not_an_entry(char)

    def _post_type(self, char: str) -> None:
        if char == "{":
            self._open_entry()
        elif not char.isspace():
            self._not_an_entry(char)

    def _not_an_entry(self, char: str) -> None:
        # An '@' in free text (an email address, a bare @comment line)
        # starts nothing; the text around it is ignorable.
        if char == "(" and self._state != _State.AFTER_AT:
            self._fail("Parenthesised entries are not supported")
        self._state = _State.OUTSIDE_ENTRY
        self._outside_entry(char)

    def _open_entry(self) -> None:
        entry_type = "".join(self._buffer)
        self._tag_seen = False
        if entry_type.lower() in SKIPPED_TYPES:
            self._depth = 1
            self._escaped = False
            self._state = _State.SKIPPED_BLOCK
            return
        self._flush(UnitState.TYPE)
        self._state = _State.PRE_TAG_NAME

    def _skipped_block(self, char: str) -> None:
        if char == "{":
            self._depth += 1
        elif char == "}":
            self._depth -= 1
            if self._depth == 0:
                self._state = _State.OUTSIDE_ENTRY

    # ------------------------------------------------------------------
    # Tag names
    # ------------------------------------------------------------------

    def _pre_tag_name(self, char: str) -> None:
        if char.isspace():
            return
        if char == "}":
            self._close_entry()
        elif _is_name_char(char):
            self._start_buffer(char)
            self._state = _State.TAG_NAME
        else:
            self._fail(f"Expected tag name or '}}', found {char!r}")

    def _tag_name(self, char: str) -> None:
        if _is_name_char(char):
            self._buffer.append(char)
            return
        self._pending_tag = ("".join(self._buffer), self._buffer_start)
        self._buffer = []
        self._state = _State.POST_TAG_NAME
        self._post_tag_name(char)

    def _post_tag_name(self, char: str) -> None:
        if char.isspace():
            return
        if char == "=":
            self._emit_pending_tag()
            self._state = _State.PRE_VALUE
        elif char in ",}":
            # Only the first tag may stand alone: it is the citation key
            if self._tag_seen:
                self._fail("Expected '=' after tag name")
            self._emit_pending_tag()
            if char == ",":
                self._next_tag()
            else:
                self._close_entry()
        else:
            self._fail(f"Expected '=', ',' or '}}' after tag name, found {char!r}")

    def _emit_pending_tag(self) -> None:
        assert self._pending_tag is not None
        name, offset = self._pending_tag
        self._pending_tag = None
        self._emit(name, UnitState.TAG_NAME, offset)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _pre_value(self, char: str) -> None:
        if char.isspace():
            return
        self._escaped = False
        if char == "{":
            self._depth = 1
            self._start_buffer()
            self._state = _State.BRACED_VALUE
        elif char == '"':
            self._depth = 0
            self._start_buffer()
            self._state = _State.QUOTED_VALUE
        elif _is_name_char(char):
            self._start_buffer(char)
            self._state = _State.RAW_VALUE
        else:
            self._fail(f"Expected value, found {char!r}")

    def _raw_value(self, char: str) -> None:
        if _is_name_char(char):
            self._buffer.append(char)
            return
        if char.isspace():
            self._flush(UnitState.RAW_VALUE)
            self._state = _State.POST_VALUE
        elif char in "#,}":
            self._flush(UnitState.RAW_VALUE)
            self._state = _State.POST_VALUE
            self._post_value(char)
        else:
            self._fail(f"Unexpected character {char!r} in raw value")

    def _braced_value(self, char: str) -> None:
        if self._escaped:
            self._escaped = False
        elif char == "\\":
            self._escaped = True
        elif char == "{":
            self._depth += 1
        elif char == "}":
            self._depth -= 1
            if self._depth == 0:
                self._flush(UnitState.BRACED_VALUE)
                self._state = _State.POST_VALUE
                return
        self._buffer.append(char)

    def _quoted_value(self, char: str) -> None:
        if self._escaped:
            self._escaped = False
        elif char == "\\":
            self._escaped = True
        elif char == "{":
            self._depth += 1
        elif char == "}":
            if self._depth == 0:
                self._fail("Unbalanced '}' in quoted value")
            self._depth -= 1
        elif char == '"' and self._depth == 0:
            self._flush(UnitState.QUOTED_VALUE)
            self._state = _State.POST_VALUE
            return
        self._buffer.append(char)

    def _post_value(self, char: str) -> None:
        if char.isspace():
            return
        if char == "#":
            self._state = _State.PRE_VALUE
        elif char == ",":
            self._next_tag()
        elif char == "}":
            self._close_entry()
        else:
            self._fail(f"Expected ',', '#' or '}}' after value, found {char!r}")
