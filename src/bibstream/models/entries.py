"""Entry types shared by the assembler and the public API."""

from collections.abc import Callable
from enum import StrEnum

__all__ = [
    "Entry",
    "FinalEntries",
    "TagValueProcessor",
    "TagNameCase",
    "TYPE_KEY",
    "CITATION_KEY",
    "ORIGINAL_KEY",
    "STRING_TYPE",
]

# Reserved field names
TYPE_KEY = "type"
CITATION_KEY = "citation-key"
ORIGINAL_KEY = "_original"

# Entry type whose fields define macros
STRING_TYPE = "string"

Entry = dict[str, str | None]
FinalEntries = tuple[Entry, ...]
TagValueProcessor = Callable[[str | None, str], str | None]


class TagNameCase(StrEnum):
    """Tag name rewrite applied during finalize.

    Attributes
    ----------
    NONE : str
        Keep tag names as written.
    LOWER : str
        Lower-case every tag name.
    UPPER : str
        Upper-case every tag name.
    """

    NONE = "none"
    LOWER = "lower"
    UPPER = "upper"

    @classmethod
    def coerce(cls, value: "TagNameCase | str | None") -> "TagNameCase":
        """Build a case mode from a member, its value, or None.

        Parameters
        ----------
        value : TagNameCase | str | None
            Case mode, compared case-insensitively. None means NONE.

        Returns
        -------
        TagNameCase
            Matching case mode.

        Raises
        ------
        ValueError
            If the string names no known case mode.
        """
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unknown tag name case {value!r}, expected one of: {choices}"
            ) from None

    def apply(self, name: str) -> str:
        """Rewrite a single tag name."""
        if self is TagNameCase.LOWER:
            return name.lower()
        if self is TagNameCase.UPPER:
            return name.upper()
        return name
