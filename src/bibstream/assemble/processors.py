"""Tag value processor registration and built-in processors."""

import re
from collections.abc import Sequence

from bibstream.exceptions import InvalidArgumentError
from bibstream.models import ORIGINAL_KEY, TagValueProcessor

__all__ = [
    "normalize_processors",
    "strip_whitespace",
    "collapse_whitespace",
]

_WHITESPACE_RUN = re.compile(r"\s+")

_INVALID_PROCESSOR = (
    "Tag value processor must be a callable or a sequence of callables, got {!r}"
)


def normalize_processors(
    processor: TagValueProcessor | Sequence[TagValueProcessor],
) -> list[TagValueProcessor]:
    """Validate a processor argument and flatten it to a list.

    Parameters
    ----------
    processor : TagValueProcessor | Sequence[TagValueProcessor]
        One callable, or a list/tuple of callables kept in order.

    Returns
    -------
    list[TagValueProcessor]
        Processors in the order given.

    Raises
    ------
    InvalidArgumentError
        If the argument is neither callable nor a sequence of callables.
    """
    if callable(processor):
        return [processor]

    if isinstance(processor, Sequence) and not isinstance(processor, (str, bytes)):
        for candidate in processor:
            if not callable(candidate):
                raise InvalidArgumentError(_INVALID_PROCESSOR.format(candidate))
        return list(processor)

    raise InvalidArgumentError(_INVALID_PROCESSOR.format(processor))


def strip_whitespace(value: str | None, tag: str) -> str | None:
    """Strip leading and trailing whitespace from tag values."""
    if value is None or tag.lower() == ORIGINAL_KEY:
        return value
    return value.strip()


def collapse_whitespace(value: str | None, tag: str) -> str | None:
    """Collapse runs of whitespace (including newlines) into single spaces.

    The verbatim ``_original`` text is left untouched.
    """
    if value is None or tag.lower() == ORIGINAL_KEY:
        return value
    return _WHITESPACE_RUN.sub(" ", value).strip()
