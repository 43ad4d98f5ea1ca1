"""
Bidirectional vocabulary store mapping symbols to token ids and back.
"""

import logging
from collections.abc import Iterator
from typing import Final

from .errors import (
    DuplicateSymbolError,
    UnknownSymbolError,
    UnknownTokenError,
    VocabularyError,
)
from .types import Symbol, Token

N_BASE_TOKENS: Final[int] = 256

log = logging.getLogger(__name__)


class Vocabulary:
    """
    Bijective mapping between byte symbols and integer token ids.

    Ids are assigned densely in insertion order, so the id of a new entry is
    always the current size. A freshly created store is empty; the base
    alphabet (one entry per byte value, ids 0-255) has to be added with
    :meth:`initialize_base_alphabet` before any merge is minted.

    Once training is over the store is frozen and becomes read-only input to
    encoding and decoding.
    """

    def __init__(self) -> None:
        # token -> bytes
        self._symbols: dict[Token, Symbol] = {}
        # bytes -> token
        self._ids: dict[Symbol, Token] = {}
        self._frozen = False

    @classmethod
    def base(cls) -> "Vocabulary":
        """Return a new unfrozen store holding only the base alphabet."""
        vocab = cls()
        vocab.initialize_base_alphabet()
        return vocab

    def initialize_base_alphabet(self) -> None:
        """
        Populate the 256 single-byte entries.

        :raises VocabularyError: If the store is not empty or is frozen.
        """
        if self._symbols:
            raise VocabularyError(
                "base alphabet requires an empty vocabulary", vocab_size=self.size()
            )
        for btok in range(N_BASE_TOKENS):
            self.add_entry(bytes([btok]))

    def add_entry(self, symbol: Symbol) -> Token:
        """
        Append ``symbol`` under the next free id and return that id.

        :raises DuplicateSymbolError: If ``symbol`` is already present.
        :raises VocabularyError: If the store is frozen or ``symbol`` is empty.
        """
        if self._frozen:
            raise VocabularyError("vocabulary is frozen", vocab_size=self.size())
        if not symbol:
            raise VocabularyError("symbol must be a non-empty byte string")
        if symbol in self._ids:
            raise DuplicateSymbolError(
                "symbol already in vocabulary",
                symbol=symbol,
                existing_tok=self._ids[symbol],
            )

        tok = len(self._symbols)
        self._symbols[tok] = symbol
        self._ids[symbol] = tok
        return tok

    def lookup_id(self, symbol: Symbol) -> Token:
        """Return the id of ``symbol``; raises UnknownSymbolError if absent."""
        try:
            return self._ids[symbol]
        except KeyError:
            raise UnknownSymbolError("symbol not found in vocabulary", symbol=symbol) from None

    def lookup_symbol(self, tok: Token) -> Symbol:
        """Return the symbol of ``tok``; raises UnknownTokenError if absent."""
        try:
            return self._symbols[tok]
        except KeyError:
            raise UnknownTokenError("token not found in vocabulary", invalid_tok=tok) from None

    def size(self) -> int:
        """Return the number of entries in the vocabulary."""
        return len(self._symbols)

    def freeze(self) -> "Vocabulary":
        """Make the store read-only and return it."""
        if not self._frozen:
            log.debug(f"freezing vocabulary with {self.size()} tokens")
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def items(self) -> Iterator[tuple[Token, Symbol]]:
        """Iterate over ``(token, symbol)`` entries in id order."""
        # ids are dense and inserted in order, dict order is id order
        return iter(self._symbols.items())

    def __len__(self) -> int:
        return len(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vocabulary):
            return NotImplemented
        return self._symbols == other._symbols

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "mutable"
        return f"Vocabulary(size={self.size()}, {state})"
