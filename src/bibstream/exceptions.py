"""Exceptions raised by bibstream."""

__all__ = ["ParseError", "BibSyntaxError", "InvalidArgumentError"]


class ParseError(Exception):
    """Raised when parsing fails."""

    def __init__(self, message: str, file: str | None = None) -> None:
        """Initialize parse error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        """
        super().__init__(message)
        self.file = file


class BibSyntaxError(ParseError):
    """Raised when source text does not match the BibTeX entry grammar.

    Attributes
    ----------
    reason : str
        What was expected or found.
    offset : int
        0-based offset of the offending character.
    line : int
        1-based line of the offending character.
    column : int
        1-based column of the offending character.
    """

    def __init__(
        self,
        reason: str,
        offset: int,
        line: int,
        column: int,
        file: str | None = None,
    ) -> None:
        super().__init__(f"{reason} at line {line}, column {column}", file=file)
        self.reason = reason
        self.offset = offset
        self.line = line
        self.column = column

    @classmethod
    def at(cls, reason: str, source: str, offset: int) -> "BibSyntaxError":
        """Build an error positioned at ``offset`` within ``source``."""
        line = source.count("\n", 0, offset) + 1
        column = offset - (source.rfind("\n", 0, offset) + 1) + 1
        return cls(reason, offset=offset, line=line, column=column)


class InvalidArgumentError(TypeError):
    """Raised when a configuration argument has the wrong shape."""
