"""Tokenizer implementations for word-level text processing."""

from .base import Tokenizer
from .pretrained import PretrainedTokenizer
from .simple import SimpleTokenizer


__all__ = ["Tokenizer", "SimpleTokenizer", "PretrainedTokenizer"]
