"""The splitting rule shared by vocabulary building and encoding."""

from enum import Enum
import logging

import regex as re

from .errors import PatternError, TokenizationError
from .pattern import SplitPattern
from .types import Token

log = logging.getLogger(__name__)


class Coverage(str, Enum):
    """What the splitter does with characters that no pattern alternative matches."""

    DROP = "drop"
    KEEP = "keep"
    RAISE = "raise"

    @classmethod
    def get(cls, name: "str | Coverage") -> "Coverage":
        """Get coverage policy by name (case-insensitive)."""
        if isinstance(name, Coverage):
            return name
        try:
            return cls[name.upper()]
        except KeyError:
            raise PatternError(
                f"Unknown coverage policy: {name!r}. "
                f"Valid policies: {', '.join(cov.value for cov in cls)}"
            )


class Splitter:
    """
    Partition text into an ordered sequence of tokens using a regex pattern.

    Matches never overlap, so concatenating the output reproduces every
    character the pattern covers. Characters outside the pattern are handled
    according to ``coverage``:

    - ``drop``: left out of the output
    - ``keep``: emitted one character per token
    - ``raise``: :class:`TokenizationError` at the first such character
    """

    def __init__(
        self,
        pattern: str | SplitPattern = SplitPattern.SPECIAL,
        coverage: str | Coverage = Coverage.DROP,
    ) -> None:
        """
        :param pattern: A :class:`SplitPattern`, a built-in pattern name
            ("special", "plain") or a custom regex string.
        :param coverage: Policy for characters the pattern does not match.
        :raises PatternError: If the pattern is not a valid regex or the
            coverage policy is unknown.
        """
        if isinstance(pattern, SplitPattern):
            self.pat: str = pattern.value
        elif pattern.upper() in SplitPattern.__members__:
            self.pat = SplitPattern[pattern.upper()].value
        else:
            self.pat = pattern
        self.coverage = Coverage.get(coverage)
        self.compiled_pat: re.Pattern[str] = _compile_pattern(self.pat)

    def split(self, text: str) -> list[Token]:
        """
        Split text into tokens.

        :param text: Text to split.
        :returns: Tokens in input order.
        :raises TokenizationError: If coverage is ``raise`` and a character
            matches no alternative.
        """
        tokens: list[Token] = []
        n_dropped = 0
        pos = 0

        for m in re.finditer(self.compiled_pat, text):
            if m.start() > pos:
                n_dropped += self._handle_gap(text, pos, m.start(), tokens)
            tokens.append(m.group(0))
            pos = m.end()

        # trailing characters after the last match
        if pos < len(text):
            n_dropped += self._handle_gap(text, pos, len(text), tokens)

        if n_dropped:
            log.debug(f"dropped {n_dropped} uncovered characters while splitting")

        return tokens

    def _handle_gap(self, text: str, start: int, end: int, tokens: list[Token]) -> int:
        """Apply the coverage policy to ``text[start:end]``; return characters dropped."""
        match self.coverage:
            case Coverage.DROP:
                return end - start
            case Coverage.KEEP:
                tokens.extend(text[start:end])
                return 0
            case Coverage.RAISE:
                raise TokenizationError(
                    f"character {text[start]!r} is not covered by the split pattern",
                    position=start,
                    input_text=text,
                )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Splitter):
            return NotImplemented
        return self.pat == other.pat and self.coverage == other.coverage

    def __hash__(self) -> int:
        return hash((self.pat, self.coverage))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(pattern={self.pat!r}, coverage={self.coverage.value!r})"


def _compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile and validate a regex pattern.

    :param pattern: Regex pattern string to compile.
    :return: Compiled regex pattern.
    :raises PatternError: If pattern is invalid.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError("invalid regex pattern", pattern=pattern, regex_err=e)
