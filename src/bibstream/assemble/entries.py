"""Append-only entry store filled while units stream in."""

from bibstream.models import ORIGINAL_KEY, STRING_TYPE, TYPE_KEY, Entry

__all__ = ["RawEntries"]


class RawEntries:
    """Entries as built by the streaming phase, before finalize.

    Keeps an index of macro names declared by ``@string`` entries,
    populated as their tags arrive, so only earlier declarations are
    visible to later raw values. The first declaration of a name wins.
    The ``string`` type matches in any case (``@STRING``, ``@String``),
    as BibTeX does; macro names themselves are case-sensitive.

    An entry is committed once its original text arrives. After a
    failed parse, :meth:`discard_uncommitted` drops the half-built
    entry and any macros it declared.

    Attributes
    ----------
    entries : list[Entry]
        Entries in document order.
    """

    def __init__(self) -> None:
        self.entries: list[Entry] = []
        self._macros: dict[str, Entry] = {}
        self._current_tag: str | None = None
        self._current_is_string = False
        self._committed = 0

    @property
    def current(self) -> Entry:
        """Most recently started entry."""
        return self.entries[-1]

    def start_entry(self, entry_type: str) -> None:
        """Append a new entry holding only its type."""
        self.entries.append({TYPE_KEY: entry_type})
        self._current_tag = None
        self._current_is_string = entry_type.lower() == STRING_TYPE

    def declare_tag(self, name: str) -> None:
        """Create (or reset) a field on the current entry with no value."""
        entry = self.current
        entry[name] = None
        self._current_tag = name

        if self._current_is_string:
            self._macros.setdefault(name, entry)

    def append_value(self, text: str | None) -> None:
        """Concatenate ``text`` onto the current field; None appends nothing."""
        if text is None:
            return
        entry = self.current
        entry[self._current_tag] = (entry.get(self._current_tag) or "") + text

    def set_original(self, text: str | None) -> None:
        """Attach the verbatim entry text to the current entry."""
        self.current[ORIGINAL_KEY] = text
        self._committed = len(self.entries)

    def discard_uncommitted(self) -> None:
        """Drop entries started after the last committed one."""
        dropped = {id(entry) for entry in self.entries[self._committed :]}
        if not dropped:
            return
        del self.entries[self._committed :]
        self._macros = {
            name: owner for name, owner in self._macros.items() if id(owner) not in dropped
        }
        self._current_tag = None
        self._current_is_string = False

    def resolve(self, name: str) -> str | None:
        """Resolve a raw value against macros declared so far.

        Parameters
        ----------
        name : str
            Raw token text.

        Returns
        -------
        str | None
            Macro value, None when the macro has no value yet, or
            ``name`` unchanged when no macro matches.
        """
        owner = self._macros.get(name)
        if owner is None:
            return name
        return owner.get(name)
