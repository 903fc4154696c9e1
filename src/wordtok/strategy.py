"""Unknown token handling for encoding."""

from typing import Final, Literal, override
from abc import ABC, abstractmethod

from .errors import ConfigurationError, StrategyError, UnknownTokenError
from .types import Token, TokenId
from .vocab import Vocabulary


# =========================================================================================

# unknown token handling strategies


class UnknownTokenStrategy(ABC):
    """Base strategy for tokens missing from the vocabulary during encoding."""

    name: str = "base"

    @abstractmethod
    def handle(self, token: Token, vocab: Vocabulary) -> TokenId:
        """Return the identifier to emit for ``token``, which is not in ``vocab``."""


class StrictStrategy(UnknownTokenStrategy):
    """Strategy that refuses to encode tokens missing from the vocabulary."""

    name = "strict"

    @override
    def handle(self, token: Token, vocab: Vocabulary) -> TokenId:
        """Raise for every unknown token."""
        raise UnknownTokenError("token not found in vocabulary", token=token)


class FallbackStrategy(UnknownTokenStrategy):
    """Strategy that substitutes the unknown-token marker for missing tokens."""

    name = "fallback"

    @override
    def handle(self, token: Token, vocab: Vocabulary) -> TokenId:
        """Return the unknown-token identifier."""
        unk_id = vocab.unk_id
        if unk_id is None:
            raise ConfigurationError(
                f"vocabulary does not contain the unknown token {vocab.reserved.unk!r}; "
                "build it with include_reserved=True or use the strict strategy"
            )
        return unk_id


StrategyName = Literal["strict", "fallback"]

_UNKNOWN_TOKEN_STRATEGIES: Final[dict[str, type[UnknownTokenStrategy]]] = {
    "strict": StrictStrategy,
    "fallback": FallbackStrategy,
}


def list_strategies() -> list[str]:
    """Return available unknown token strategy names."""
    return list(_UNKNOWN_TOKEN_STRATEGIES.keys())


def get_strategy(name: StrategyName = "fallback") -> UnknownTokenStrategy:
    """
    Create an unknown token strategy by name.

    :param name: Strategy identifier, "strict" or "fallback".
    :raises StrategyError: If name is unknown.
    """
    if name not in _UNKNOWN_TOKEN_STRATEGIES:
        raise StrategyError(
            "unknown strategy name",
            invalid_name=name,
            available_strats=list(_UNKNOWN_TOKEN_STRATEGIES.keys()),
        )

    return _UNKNOWN_TOKEN_STRATEGIES[name]()


def default_strategy(vocab: Vocabulary) -> UnknownTokenStrategy:
    """Fallback when ``vocab`` has an unknown-token marker, strict otherwise."""
    if vocab.unk_id is not None:
        return FallbackStrategy()
    return StrictStrategy()


__all__ = [
    "StrategyName",
    "UnknownTokenStrategy",
    "StrictStrategy",
    "FallbackStrategy",
    "list_strategies",
    "get_strategy",
    "default_strategy",
]
