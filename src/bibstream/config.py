"""Parser configuration."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from bibstream.assemble.processors import normalize_processors
from bibstream.models import TagNameCase, TagValueProcessor

if TYPE_CHECKING:
    from bibstream.assemble import EntryAssembler

__all__ = ["ParserConfig"]


@dataclass
class ParserConfig:
    """Options applied to the entry assembler.

    Attributes
    ----------
    tag_name_case : TagNameCase
        Tag name rewrite during finalize (default: no rewrite).
        Strings ``lower``/``upper``/``none`` and None are accepted.
    tag_value_processors : tuple[TagValueProcessor, ...]
        Callables ``(value, tag_name) -> value`` applied in order.
    """

    tag_name_case: TagNameCase = TagNameCase.NONE
    tag_value_processors: Sequence[TagValueProcessor] = ()

    def __post_init__(self) -> None:
        """Coerce and validate."""
        self.tag_name_case = TagNameCase.coerce(self.tag_name_case)
        self.tag_value_processors = tuple(normalize_processors(self.tag_value_processors))

    def apply(self, assembler: "EntryAssembler") -> None:
        """Configure an assembler with these options."""
        assembler.set_tag_name_case(self.tag_name_case)
        if self.tag_value_processors:
            assembler.add_tag_value_processor(list(self.tag_value_processors))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "tag_name_case": self.tag_name_case.value,
            "tag_value_processors": [
                getattr(p, "__qualname__", repr(p)) for p in self.tag_value_processors
            ],
        }
