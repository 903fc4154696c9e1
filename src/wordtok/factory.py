"""Factory functions for creating tokenizers."""

from ._models.pretrained import PretrainedTokenizer
from ._models.simple import SimpleTokenizer
from .pattern import SplitPattern
from .reserved import DEFAULT_RESERVED, ReservedTokens
from .splitter import Coverage
from .strategy import StrategyName, get_strategy
from .vocab import Vocabulary, build_vocab


def get_tokenizer(
    corpus: str | list[str],
    *,
    pattern: str | SplitPattern = SplitPattern.SPECIAL,
    include_reserved: bool = True,
    strategy: StrategyName | None = None,
    coverage: str | Coverage = Coverage.DROP,
    reserved: ReservedTokens = DEFAULT_RESERVED,
) -> SimpleTokenizer:
    """
    Build a vocabulary from ``corpus`` and wrap it in a tokenizer.

    :param corpus: Training text as a single string or list of strings.
    :param pattern: Built-in pattern name ("special", "plain"), a
                    :class:`SplitPattern`, or a custom regex string.
    :param include_reserved: Append reserved markers to the vocabulary.
    :param strategy: "strict" or "fallback". Defaults to fallback when the
                     vocabulary has an unknown-token marker, strict otherwise.
    :param coverage: Handling of characters the pattern does not cover.
    :param reserved: Reserved marker configuration.
    :return: Tokenizer over the built vocabulary.
    :raises PatternError: If pattern is an invalid regex.
    :raises StrategyError: If strategy name is unknown.

    .. code-block:: python

        tokenizer = get_tokenizer("Hello, world. Is this-- a test?")
        ids = tokenizer.encode("Hello, world.")
        tokenizer = get_tokenizer(corpus, pattern="plain", strategy="strict")
    """
    # resolve strategy before the (possibly long) vocabulary build
    strat = get_strategy(strategy) if strategy is not None else None

    vocab = build_vocab(
        corpus,
        include_reserved,
        pattern=pattern,
        coverage=coverage,
        reserved=reserved,
    )
    return SimpleTokenizer(vocab, strat)


def from_pretrained(
    model_path: str, strategy: StrategyName | None = None
) -> SimpleTokenizer:
    """
    Load a saved vocabulary from disk and wrap it in a tokenizer.

    :param model_path: Path to the .model file.
    :param strategy: "strict" or "fallback"; defaults as in :func:`get_tokenizer`.
    :return: Tokenizer over the loaded vocabulary.
    :raises ModelLoadError: If file doesn't exist, has wrong extension, or is malformed.

    .. code-block:: python

        tokenizer = from_pretrained("path/to/vocab.model")
        tokens = tokenizer.encode("Hello world")
    """
    vocab = Vocabulary.load(model_path)
    strat = get_strategy(strategy) if strategy is not None else None
    return SimpleTokenizer(vocab, strat)


def get_bpe_tokenizer(name: str = "gpt2") -> PretrainedTokenizer:
    """
    Load a pretrained byte-pair-encoding tokenizer.

    :param name: tiktoken encoding name ("gpt2", "cl100k_base", ...) or a
                 model name ("gpt-4", ...).
    :raises ConfigurationError: If neither an encoding nor a model of that name exists.
    """
    if name in PretrainedTokenizer.available_encodings():
        return PretrainedTokenizer(name)
    return PretrainedTokenizer.from_model(name)
