"""Reserved marker configuration appended after the ordinary vocabulary."""

from dataclasses import dataclass
from typing import Final

from .errors import VocabularyError
from .types import Token

UNK_TOKEN: Final[str] = "<|unk|>"
END_OF_TEXT_TOKEN: Final[str] = "<|endoftext|>"


@dataclass(frozen=True)
class ReservedTokens:
    """
    Ordered set of reserved markers.

    The unknown-token marker always comes first, followed by ``extra`` in the
    given order. Building a vocabulary with reserved tokens appends
    :attr:`ordered` after the sorted corpus tokens, so adding a marker to
    ``extra`` only ever adds identifiers at the end.
    """

    unk: Token = UNK_TOKEN
    extra: tuple[Token, ...] = (END_OF_TEXT_TOKEN,)

    def __post_init__(self) -> None:
        ordered = self.ordered
        if any(not seq for seq in ordered):
            raise VocabularyError("reserved tokens must be non-empty strings")
        if len(set(ordered)) != len(ordered):
            dup = next(seq for seq in ordered if ordered.count(seq) > 1)
            raise VocabularyError("duplicate reserved token", invalid_tok=dup)

    @property
    def ordered(self) -> tuple[Token, ...]:
        """Reserved markers in append order."""
        return (self.unk, *self.extra)

    def __contains__(self, token: object) -> bool:
        return token in self.ordered

    def __len__(self) -> int:
        return len(self.ordered)


DEFAULT_RESERVED: Final[ReservedTokens] = ReservedTokens()
