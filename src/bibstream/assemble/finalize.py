"""One-shot post-processing of streamed entries.

Finalize is a pure function of the raw entries and the configuration.
It never mutates its input, so calling it twice yields equal results.
Steps, applied per entry in order:

1. Citation-key flip: a second field without a value is the citation
   key; its *name* becomes the value of ``citation-key``.
2. Tag name case: every key (reserved ones included) is rewritten.
3. Tag value processors, in registration order, over every field.
"""

from collections.abc import Iterable, Sequence

from bibstream.models import (
    CITATION_KEY,
    Entry,
    FinalEntries,
    TagNameCase,
    TagValueProcessor,
)

__all__ = ["finalize", "flip_citation_key", "change_tag_name_case", "apply_processors"]


def flip_citation_key(entry: Entry) -> Entry:
    """Promote a value-less second field to ``citation-key``.

    Parameters
    ----------
    entry : Entry
        Entry whose first field is ``type``.

    Returns
    -------
    Entry
        New entry; ``citation-key`` takes the second position.
    """
    items = list(entry.items())
    if len(items) < 2 or items[1][1] is not None:
        return dict(items)

    tag_name = items[1][0]
    rest = [(k, v) for k, v in items[2:] if k != CITATION_KEY]
    return dict([items[0], (CITATION_KEY, tag_name), *rest])


def change_tag_name_case(entry: Entry, case: TagNameCase) -> Entry:
    """Rewrite every field name; on collision the later value wins."""
    if case is TagNameCase.NONE:
        return dict(entry)
    return {case.apply(name): value for name, value in entry.items()}


def apply_processors(entry: Entry, processors: Iterable[TagValueProcessor]) -> Entry:
    """Run each processor over every (value, name) pair, in order."""
    result = dict(entry)
    for processor in processors:
        for name in result:
            result[name] = processor(result[name], name)
    return result


def finalize(
    entries: Iterable[Entry],
    case: TagNameCase = TagNameCase.NONE,
    processors: Sequence[TagValueProcessor] = (),
) -> FinalEntries:
    """Post-process streamed entries.

    Parameters
    ----------
    entries : Iterable[Entry]
        Entries from the streaming phase, left unmodified.
    case : TagNameCase, optional
        Tag name rewrite, by default TagNameCase.NONE.
    processors : Sequence[TagValueProcessor], optional
        Value processors applied last, by default none.

    Returns
    -------
    FinalEntries
        Finalized entries in document order.
    """
    final: list[Entry] = []
    for entry in entries:
        processed = flip_citation_key(entry)
        processed = change_tag_name_case(processed, case)
        processed = apply_processors(processed, processors)
        final.append(processed)
    return tuple(final)
