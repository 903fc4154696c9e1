"""
Core types for tokenization.
"""

type Token = str
type TokenId = int
type TokenPair = tuple[Token, TokenId]
