from enum import Enum

from .errors import PatternError


class SplitPattern(str, Enum):
    """
    Pre-defined regex patterns for splitting text into word-level tokens.

    Alternatives are tried in order at each position: special marker,
    hyphenated alphanumeric run, single punctuation character, double
    hyphen, single whitespace character.
    """

    # recognizes reserved markers such as <|endoftext|>
    SPECIAL = (
        r"<\|[a-zA-Z0-9_]+\|>|"
        r"[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*|"
        r"[,.?_!\"()':;]|"
        r"--|"
        r"\s"
    )

    PLAIN = (
        r"[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*|"
        r"[,.?_!\"()':;]|"
        r"--|"
        r"\s"
    )

    @classmethod
    def get(cls, name: str) -> str:
        """Get patterns by name (case-insensitive)."""
        try:
            return cls[name.upper().replace("-", "_")].value
        except KeyError:
            raise PatternError(
                f"Unknown pattern: {name!r}. "
                f"Valid patterns: {', '.join(pat.name for pat in cls)}"
            )


def get_pattern(name: str) -> str:
    """Return the regex string of a built-in split pattern."""
    return SplitPattern.get(name)


def list_patterns() -> list[str]:
    """Return names of all available built-in split patterns."""
    return [pat.name for pat in SplitPattern]
