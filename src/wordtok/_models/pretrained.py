"""
Pretrained byte-pair-encoding tokenizer backed by tiktoken.

The encoding supplies its own vocabulary and merge rules; this wrapper only
exposes it through the same encode/decode contract as the word-level
tokenizer.
"""

from collections.abc import Collection, Set
import logging
from typing import Literal, override

import tiktoken

from ..errors import ConfigurationError, SpecialTokenError, UnresolvableIdError
from ..types import TokenId
from .base import Tokenizer

log = logging.getLogger(__name__)


class PretrainedTokenizer(Tokenizer):
    """Tokenizer that delegates to a pretrained tiktoken encoding."""

    TOKENIZER_TYPE = "pretrained"

    def __init__(self, encoding_name: str = "gpt2") -> None:
        """
        Load a tiktoken encoding by name, e.g. ``"gpt2"`` or ``"cl100k_base"``.

        :raises ConfigurationError: If the encoding name is unknown.
        """
        super().__init__()
        try:
            self._enc = tiktoken.get_encoding(encoding_name)
        except ValueError as e:
            raise ConfigurationError(f"unknown encoding: {encoding_name!r}") from e
        log.info(f"loaded pretrained encoding {self._enc.name}")

    @classmethod
    def from_model(cls, model_name: str) -> "PretrainedTokenizer":
        """Load the encoding used by a model, e.g. ``"gpt2"`` or ``"gpt-4"``."""
        try:
            encoding_name = tiktoken.encoding_name_for_model(model_name)
        except KeyError as e:
            raise ConfigurationError(f"no encoding known for model {model_name!r}") from e
        return cls(encoding_name)

    @staticmethod
    def available_encodings() -> list[str]:
        """Return names of the encodings tiktoken can load."""
        return tiktoken.list_encoding_names()

    @property
    def name(self) -> str:
        return self._enc.name

    @property
    def special_tokens(self) -> set[str]:
        """Special markers defined by the encoding."""
        return set(self._enc.special_tokens_set)

    @override
    def encode(
        self,
        text: str,
        allowed_special: Literal["all"] | Set[str] = frozenset(),
    ) -> list[TokenId]:
        """
        Encode text with the pretrained encoding.

        :param text: Text to encode.
        :param allowed_special: Special markers to encode as single tokens, or
            ``"all"``. Other markers in ``text`` are rejected.
        :raises SpecialTokenError: If ``text`` contains a marker not in ``allowed_special``.
        """
        if allowed_special != "all":
            unknown = set(allowed_special) - self._enc.special_tokens_set
            if unknown:
                raise SpecialTokenError(
                    "special tokens not defined by encoding", found_tokens=unknown
                )
        try:
            return self._enc.encode(text, allowed_special=allowed_special)
        except ValueError as e:
            disallowed = {
                seq
                for seq in self._enc.special_tokens_set
                if seq in text
                and (allowed_special != "all" and seq not in allowed_special)
            }
            raise SpecialTokenError(
                "special tokens found in text but not allowed", found_tokens=disallowed
            ) from e

    @override
    def decode(self, tokens: Collection[TokenId]) -> str:
        """
        Decode token identifiers with the pretrained encoding.

        :raises UnresolvableIdError: If an identifier is outside the encoding.
        """
        for tok_id in tokens:
            if not 0 <= tok_id <= self._enc.max_token_value:
                raise UnresolvableIdError(
                    "token id not found in encoding",
                    token_id=tok_id,
                    vocab_size=self._enc.n_vocab,
                )
        return self._enc.decode(list(tokens))

    @override
    def vocab_size(self) -> int:
        return self._enc.n_vocab
