"""
Base tokenizer interface shared by the word-level and pretrained BPE tokenizers.
"""

import logging
import os
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from ..types import TokenId

log = logging.getLogger(__name__)


class Tokenizer(ABC):
    """
    Abstract base class for tokenizers.

    Subclasses implement single-text :meth:`encode` and :meth:`decode`; batch
    helpers fan those out over a thread pool. Tokenizer state is read-only
    after construction, so concurrent calls are safe.
    """

    TOKENIZER_TYPE: str = "base"

    @abstractmethod
    def encode(self, text: str) -> list[TokenId]:
        """Encode text into a sequence of token identifiers."""
        ...

    @abstractmethod
    def decode(self, tokens: list[TokenId]) -> str:
        """Decode a sequence of token identifiers back into text."""
        ...

    @abstractmethod
    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        ...

    def encode_batch(
        self, texts: list[str], num_workers: int | None = None
    ) -> list[list[TokenId]]:
        """
        Encode multiple texts.

        :param texts: Text inputs to encode.
        :param num_workers: Thread count; ``None`` uses all CPUs, ``1`` runs serially.
        :returns: Encoded sequences in input order.
        """
        return _map_batch(self.encode, texts, num_workers)

    def decode_batch(
        self, token_batch: list[list[TokenId]], num_workers: int | None = None
    ) -> list[str]:
        """
        Decode multiple token sequences.

        :param token_batch: Token sequences to decode.
        :param num_workers: Thread count; ``None`` uses all CPUs, ``1`` runs serially.
        :returns: Decoded texts in input order.
        """
        return _map_batch(self.decode, token_batch, num_workers)


def _map_batch[T, R](
    func: Callable[[T], R], items: list[T], num_workers: int | None
) -> list[R]:
    """Apply ``func`` to every item, in a thread pool when it pays off."""
    if num_workers is None:
        workers = os.cpu_count() or 1
    else:
        workers = max(1, num_workers)  # "0" interpreted as 1 worker

    if workers == 1 or len(items) <= 1:
        return [func(item) for item in items]

    log.debug(f"processing batch of {len(items)} with {workers} workers")
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(func, items))
