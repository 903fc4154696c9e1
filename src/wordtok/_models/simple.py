"""Word-level tokenizer over a built vocabulary."""

from typing import override
import logging

from ..errors import UnresolvableIdError
from ..strategy import FallbackStrategy, UnknownTokenStrategy, default_strategy
from ..types import TokenId
from ..vocab import Vocabulary
from .base import Tokenizer

log = logging.getLogger(__name__)


class SimpleTokenizer(Tokenizer):
    """
    Tokenizer that maps whole tokens to identifiers through a vocabulary.

    Text is split with the vocabulary's own splitter, so encoding always uses
    the rule the vocabulary was built with. Whitespace characters are tokens,
    which is why decoding can simply concatenate.
    """

    TOKENIZER_TYPE = "simple"

    def __init__(
        self, vocab: Vocabulary, strategy: UnknownTokenStrategy | None = None
    ) -> None:
        """
        :param vocab: Built vocabulary.
        :param strategy: Handling of tokens missing from ``vocab``. Defaults to
            fallback when ``vocab`` has an unknown-token marker, strict otherwise.
        """
        super().__init__()
        self.vocab = vocab
        self.strategy = strategy if strategy is not None else default_strategy(vocab)
        # both directions of the mapping
        self.str_to_int = vocab.token_to_id
        self.int_to_str = vocab.id_to_token

    @override
    def encode(self, text: str) -> list[TokenId]:
        """
        Encode text into token identifiers.

        :param text: Text to encode.
        :returns: Identifier of every token in ``text``, in order.
        :raises UnknownTokenError: Strict strategy and a token is not in the vocabulary.
        :raises ConfigurationError: Fallback strategy but the vocabulary has no
            unknown-token marker.
        :raises TokenizationError: The vocabulary's splitter rejects ``text``.
        """
        tokens = self.vocab.splitter.split(text)

        ids: list[TokenId] = []
        n_unknown = 0
        for tok in tokens:
            tok_id = self.str_to_int.get(tok)
            if tok_id is None:
                tok_id = self.strategy.handle(tok, self.vocab)
                n_unknown += 1
            ids.append(tok_id)

        if n_unknown and isinstance(self.strategy, FallbackStrategy):
            log.debug(f"replaced {n_unknown} of {len(tokens)} tokens with unknown token")

        return ids

    @override
    def decode(self, tokens: list[TokenId]) -> str:
        """
        Decode token identifiers into text.

        :param tokens: Identifier sequence to decode.
        :returns: Concatenated tokens.
        :raises UnresolvableIdError: If any identifier is not in the vocabulary.
        """
        parts = []
        for tok_id in tokens:
            tok = self.vocab.get_token(tok_id)
            if tok is None:
                raise UnresolvableIdError(
                    "token id not found in vocabulary",
                    token_id=tok_id,
                    vocab_size=len(self.vocab),
                )
            parts.append(tok)
        return "".join(parts)

    @override
    def vocab_size(self) -> int:
        return len(self.vocab)

    def save(self, file_prefix: str) -> None:
        """Save the underlying vocabulary; see :meth:`Vocabulary.save`."""
        self.vocab.save(file_prefix)
