"""
Vocabulary: the bijection between tokens and dense integer identifiers.
"""

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from types import MappingProxyType
from typing import Final

from ._decorators import measure_time
from ._sanitise import render_token
from .errors import ModelLoadError, PatternError, VocabularyError
from .pattern import SplitPattern
from .reserved import DEFAULT_RESERVED, ReservedTokens
from .splitter import Coverage, Splitter
from .types import Token, TokenId, TokenPair


PREFIX: Final[str] = "WordTok"
try:
    _version = version("wordtok")
except PackageNotFoundError:
    _version = "dev"


VERSION: Final[str] = _version
MODEL_TYPE: Final[str] = "simple"
MODEL_SUFFIX: Final[str] = ".model"
VOCAB_SUFFIX: Final[str] = ".vocab"

log = logging.getLogger(__name__)


class Vocabulary:
    """
    Read-only bijection between tokens and identifiers ``0..N-1``.

    The identifier of a token is its position in the sequence the vocabulary
    was created from. The vocabulary also carries the :class:`Splitter` used
    to build it, so a tokenizer over it always splits text the same way.
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        splitter: Splitter | None = None,
        reserved: ReservedTokens = DEFAULT_RESERVED,
    ) -> None:
        """
        :param tokens: Distinct tokens in identifier order.
        :param splitter: Splitting rule the tokens were produced with.
        :param reserved: Reserved marker configuration.
        :raises VocabularyError: If ``tokens`` contains duplicates.
        """
        self._id_to_tok: tuple[Token, ...] = tuple(tokens)
        tok_to_id: dict[Token, TokenId] = {}
        for idx, tok in enumerate(self._id_to_tok):
            if tok in tok_to_id:
                raise VocabularyError(
                    "duplicate token in vocabulary",
                    vocab_size=len(self._id_to_tok),
                    invalid_tok=tok,
                )
            tok_to_id[tok] = idx
        self._tok_to_id: Mapping[Token, TokenId] = MappingProxyType(tok_to_id)
        self.splitter: Splitter = splitter if splitter is not None else Splitter()
        self.reserved: ReservedTokens = reserved

    @property
    def token_to_id(self) -> Mapping[Token, TokenId]:
        """Read-only token -> identifier mapping."""
        return self._tok_to_id

    @property
    def id_to_token(self) -> tuple[Token, ...]:
        """Tokens indexed by identifier."""
        return self._id_to_tok

    @property
    def unk_id(self) -> TokenId | None:
        """Identifier of the unknown-token marker, or ``None`` if absent."""
        return self._tok_to_id.get(self.reserved.unk)

    def get_id(self, token: Token) -> TokenId | None:
        return self._tok_to_id.get(token)

    def get_token(self, token_id: TokenId) -> Token | None:
        # reject negative ids instead of indexing from the end
        if 0 <= token_id < len(self._id_to_tok):
            return self._id_to_tok[token_id]
        return None

    def items(self) -> list[TokenPair]:
        """Return ``(token, identifier)`` pairs in identifier order."""
        return [(tok, idx) for idx, tok in enumerate(self._id_to_tok)]

    def __len__(self) -> int:
        return len(self._id_to_tok)

    def __contains__(self, token: object) -> bool:
        return token in self._tok_to_id

    def __iter__(self) -> Iterator[Token]:
        return iter(self._id_to_tok)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vocabulary):
            return NotImplemented
        return (
            self._id_to_tok == other._id_to_tok
            and self.splitter == other.splitter
            and self.reserved == other.reserved
        )

    def __hash__(self) -> int:
        return hash((self._id_to_tok, self.splitter, self.reserved))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={len(self)}, splitter={self.splitter!r})"

    def save(self, file_prefix: str) -> None:
        """
        Save vocabulary to disk.

        Creates two files: a .model file with the ordered token list and a
        .vocab file with human-readable token representations.

        :param file_prefix: Path prefix for output files.
        """
        log.info(f"saving vocabulary to {file_prefix}")
        self._save_model(file_prefix)
        self._save_vocab(file_prefix)
        log.info("vocabulary saved successfully")

    @classmethod
    def load(cls, model_filename: str) -> "Vocabulary":
        """
        Load a vocabulary from a .model file.

        :param model_filename: Path to the .model file.
        :raises ModelLoadError: If the file does not exist, has the wrong
            extension, was written by another version or is malformed.
        """
        path = Path(model_filename)

        if not path.exists():
            raise ModelLoadError("model filepath does not exist", model_path=str(path))

        if not path.suffix == MODEL_SUFFIX:
            raise ModelLoadError("expected .model file", model_path=str(path))

        log.info(f"loading vocabulary from {path}")

        tokens: list[Token] = []

        with path.open("r", encoding="utf-8") as f:
            # verify header and version match
            header = f.readline().strip().split(" ")
            if len(header) != 2 or header[0] != PREFIX:
                raise ModelLoadError("missing model header", model_path=str(path))
            model_ver = header[1]
            if model_ver != VERSION:
                raise ModelLoadError(
                    "model version mismatch",
                    version_mismatch=(model_ver, VERSION),
                )

            tok_type = f.readline().strip()
            if tok_type != f"type {MODEL_TYPE}":
                raise ModelLoadError(
                    f"unknown model type: (expected type {MODEL_TYPE}) (got {tok_type})"
                )

            # only strip the newline, patterns may end in literal whitespace
            model_re = f.readline().rstrip("\n")
            if not model_re.startswith("re ") or len(model_re) == 3:
                raise ModelLoadError(f"split pattern missing: {model_re}")

            model_cov = f.readline().strip()
            if not model_cov.startswith("coverage "):
                raise ModelLoadError(f"coverage policy missing: {model_cov}")

            try:
                splitter = Splitter(model_re[3:], model_cov[9:])
            except PatternError as e:
                raise ModelLoadError("invalid split configuration") from e

            start_marker = f.readline().strip()
            if start_marker != "---":
                raise ModelLoadError(
                    f"start sequence marker missing: (expected ---) (got {start_marker})"
                )

            # parse reserved token count
            n_reserved = f.readline().strip()
            try:
                n_reserved = int(n_reserved)
                if n_reserved < 1:
                    raise ValueError()
            except ValueError:
                raise ModelLoadError(f"invalid reserved token count: {n_reserved}")

            reserved_seqs = [_parse_token(f.readline()) for _ in range(n_reserved)]
            try:
                reserved = ReservedTokens(
                    unk=reserved_seqs[0], extra=tuple(reserved_seqs[1:])
                )
            except VocabularyError as e:
                raise ModelLoadError("invalid reserved tokens") from e

            end_marker = f.readline().strip()
            if end_marker != "---":
                raise ModelLoadError(
                    f"end sequence marker missing: (expected ---) (got {end_marker})"
                )

            log.debug(f"{n_reserved} reserved tokens loaded")

            # read ordered (id, token) pairs
            for line in f:
                parts = line.rstrip("\n").split(" ", maxsplit=1)
                if len(parts) != 2:
                    raise ModelLoadError(f"invalid token line: {line.strip()}")
                try:
                    idx = int(parts[0])
                except ValueError:
                    raise ModelLoadError(f"token id is not a number: {parts[0]}")
                if idx != len(tokens):
                    raise ModelLoadError(
                        f"token ids must be contiguous: (expected {len(tokens)}) (got {idx})"
                    )
                tokens.append(_parse_token(parts[1]))

        try:
            vocab = cls(tokens, splitter=splitter, reserved=reserved)
        except VocabularyError as e:
            raise ModelLoadError("invalid vocabulary", model_path=str(path)) from e

        log.info(f"vocabulary loaded successfully: {len(vocab)} tokens")
        return vocab

    def _save_model(self, file_prefix: str) -> None:
        """Persist split configuration and ordered tokens to a .model file."""
        model_path = Path(file_prefix).with_suffix(MODEL_SUFFIX)
        # create directory if does not exist
        model_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(f"saving model to {model_path}")

        with model_path.open("w", encoding="utf-8", newline="\n") as f:
            # header: version, model type, split configuration
            f.write(f"{PREFIX} {VERSION}\n")
            f.write(f"type {MODEL_TYPE}\n")
            f.write(f"re {self.splitter.pat}\n")
            f.write(f"coverage {self.splitter.coverage.value}\n")
            # reserved configuration, unknown-token marker first
            f.write("---\n")
            f.write(f"{len(self.reserved)}\n")
            for seq in self.reserved.ordered:
                f.write(f"{json.dumps(seq)}\n")
            f.write("---\n")
            # tokens may be whitespace themselves, so store them quoted
            for tok, idx in self.items():
                f.write(f"{idx} {json.dumps(tok)}\n")

    def _save_vocab(self, file_prefix: str) -> None:
        """Persist human-readable token representations to a .vocab file."""
        vocab_path = Path(file_prefix).with_suffix(VOCAB_SUFFIX)
        vocab_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(f"saving vocab to {vocab_path}")

        with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
            for tok, idx in self.items():
                if tok in self.reserved:
                    f.write(f"RT [{idx}] {render_token(tok)}\n")
                else:
                    f.write(f"[{idx}] [{render_token(tok)}]\n")


class VocabularyBuilder:
    """
    Build a :class:`Vocabulary` from a training corpus.

    Distinct corpus tokens are sorted and numbered from zero, so the same
    corpus and options always produce the same identifiers. Reserved markers
    are optionally appended after the sorted tokens.

    Example:
       >>> builder = VocabularyBuilder(pattern=SplitPattern.SPECIAL)
       >>> vocab = builder.build("Hello, world.", include_reserved=True)
       >>> vocab.id_to_token
       (' ', ',', '.', 'Hello', 'world', '<|unk|>', '<|endoftext|>')
    """

    def __init__(
        self,
        pattern: str | SplitPattern = SplitPattern.SPECIAL,
        coverage: str | Coverage = Coverage.DROP,
        reserved: ReservedTokens = DEFAULT_RESERVED,
    ) -> None:
        self.splitter = Splitter(pattern, coverage)
        self.reserved = reserved

    @measure_time
    def build(self, corpus: str | list[str], include_reserved: bool = True) -> Vocabulary:
        """
        Build a vocabulary from ``corpus``.

        :param corpus: Training text as a single string or list of strings.
        :param include_reserved: Append the reserved markers after the corpus tokens.
        :returns: The built vocabulary.
        :raises TokenizationError: If the coverage policy is ``raise`` and the
            corpus contains uncovered characters.
        """
        # handle list input
        if isinstance(corpus, list):
            corpus = "".join(corpus)

        tokens = self.splitter.split(corpus)

        n_lost = len(corpus) - sum(len(tok) for tok in tokens)
        if n_lost:
            log.warning(
                f"{n_lost} corpus characters are not covered by the split pattern "
                "and were left out of the vocabulary"
            )

        unique_toks = set(tokens)

        if include_reserved:
            # reserved markers only ever take their reserved position
            shadowed = unique_toks.intersection(self.reserved.ordered)
            if shadowed:
                log.debug(f"corpus contains reserved tokens: {sorted(shadowed)}")
                unique_toks -= shadowed

        ordered = sorted(unique_toks)
        if include_reserved:
            ordered.extend(self.reserved.ordered)

        vocab = Vocabulary(ordered, splitter=self.splitter, reserved=self.reserved)
        log.info(
            f"built vocabulary with {len(vocab)} tokens from {len(tokens)} corpus tokens"
        )
        return vocab


def build_vocab(
    corpus: str | list[str],
    include_reserved: bool = True,
    *,
    pattern: str | SplitPattern = SplitPattern.SPECIAL,
    coverage: str | Coverage = Coverage.DROP,
    reserved: ReservedTokens = DEFAULT_RESERVED,
) -> Vocabulary:
    """Build a vocabulary in one call; see :class:`VocabularyBuilder`."""
    builder = VocabularyBuilder(pattern=pattern, coverage=coverage, reserved=reserved)
    return builder.build(corpus, include_reserved=include_reserved)


def _parse_token(raw: str) -> Token:
    """Parse one JSON-quoted token from a model file."""
    try:
        tok = json.loads(raw)
    except ValueError:
        raise ModelLoadError(f"invalid token entry: {raw.strip()}")
    if not isinstance(tok, str):
        raise ModelLoadError(f"token entry is not a string: {raw.strip()}")
    return tok
