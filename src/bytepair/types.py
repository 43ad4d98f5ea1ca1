"""
Core types for tokenization.
"""

from typing import TypeAlias

Token: TypeAlias = int
Symbol: TypeAlias = bytes
TokenPair: TypeAlias = tuple[Token, Token]
Merges: TypeAlias = dict[TokenPair, Token]
