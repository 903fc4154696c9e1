"""WordTok: word-level vocabulary tokenization library."""

from ._models.base import Tokenizer
from ._models.pretrained import PretrainedTokenizer
from ._models.simple import SimpleTokenizer
from .factory import (
    from_pretrained,
    get_bpe_tokenizer,
    get_tokenizer,
)
from .pattern import SplitPattern, get_pattern, list_patterns
from .reserved import DEFAULT_RESERVED, END_OF_TEXT_TOKEN, UNK_TOKEN, ReservedTokens
from .splitter import Coverage, Splitter
from .strategy import (
    FallbackStrategy,
    StrictStrategy,
    UnknownTokenStrategy,
    get_strategy,
    list_strategies,
)
from .vocab import Vocabulary, VocabularyBuilder, build_vocab

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wordtok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Tokenizer",
    "SimpleTokenizer",
    "PretrainedTokenizer",
    "Splitter",
    "SplitPattern",
    "Coverage",
    "ReservedTokens",
    "DEFAULT_RESERVED",
    "UNK_TOKEN",
    "END_OF_TEXT_TOKEN",
    "Vocabulary",
    "VocabularyBuilder",
    "UnknownTokenStrategy",
    "StrictStrategy",
    "FallbackStrategy",
    "build_vocab",
    "get_tokenizer",
    "get_bpe_tokenizer",
    "get_strategy",
    "get_pattern",
    "from_pretrained",
    "list_patterns",
    "list_strategies",
]
