"""
Longest-match segmentation of text into vocabulary tokens.
"""

import logging
from typing import Final

import regex as re

from .errors import NoMatchError
from .types import Symbol, Token
from .vocab import Vocabulary

# a run of non-whitespace with the whitespace right before it, or pure whitespace
WORD_BOUNDARY_PATTERN: Final[str] = r"\s*\S+|\s+"

_WORD_BOUNDARY_RE = re.compile(WORD_BOUNDARY_PATTERN)

log = logging.getLogger(__name__)


def rank_symbols(vocab: Vocabulary) -> list[Symbol]:
    """Return all symbols, longest first; equal lengths are ordered by ascending id."""
    ranked = sorted(vocab.items(), key=lambda item: (-len(item[1]), item[0]))
    return [symbol for _, symbol in ranked]


def split_words(text: str) -> list[str]:
    """Split ``text`` into chunks that keep their leading whitespace."""
    return [m.group(0) for m in _WORD_BOUNDARY_RE.finditer(text)]


class Encoder:
    """
    Segments text into the longest available vocabulary symbols.

    For a span, the first ranked symbol found anywhere in it is matched at its
    leftmost occurrence. The text left and right of the match is segmented
    the same way, and the pieces are joined in document order:
    ``segment(left) + [match] + segment(right)``.

    This is not a left-to-right greedy scan: a long symbol in the middle of a
    span is matched before the short ones around it.
    """

    def __init__(self, vocab: Vocabulary, preserve_word_boundaries: bool = False) -> None:
        self.vocab = vocab
        self.preserve_word_boundaries = preserve_word_boundaries
        self._ranked: list[Symbol] = rank_symbols(vocab)
        log.debug(f"ranked {len(self._ranked)} symbols for encoding")

    def encode(self, text: str) -> list[Token]:
        """
        Encode ``text`` into token ids.

        :raises NoMatchError: If a span contains no vocabulary symbol.
        """
        if self.preserve_word_boundaries:
            chunks = split_words(text)
        else:
            chunks = [text] if text else []

        tokens: list[Token] = []
        for chunk in chunks:
            for symbol in self.segment(chunk.encode("utf-8"), input_text=chunk):
                tokens.append(self.vocab.lookup_id(symbol))
        return tokens

    def segment(self, data: bytes, *, input_text: str | None = None) -> list[Symbol]:
        """
        Split ``data`` into vocabulary symbols, preserving order.

        :param input_text: Text ``data`` was encoded from, reported on failure.
        :raises NoMatchError: With the byte offset of the uncovered span in ``data``.
        """
        out: list[Symbol] = []
        # work items: (offset in data, bytes, already matched).
        # popped in document order because right parts are pushed first.
        stack: list[tuple[int, bytes, bool]] = [(0, data, False)] if data else []

        while stack:
            offset, span, matched = stack.pop()
            if matched:
                out.append(span)
                continue

            found = self._longest_match(span)
            if found is None:
                raise NoMatchError(
                    "no vocabulary symbol matches span",
                    span=span,
                    position=offset,
                    input_text=input_text,
                )
            symbol, idx = found
            end = idx + len(symbol)
            if end < len(span):
                stack.append((offset + end, span[end:], False))
            stack.append((offset + idx, symbol, True))
            if idx:
                stack.append((offset, span[:idx], False))

        return out

    def _longest_match(self, span: bytes) -> tuple[Symbol, int] | None:
        """Return the first ranked symbol found in ``span`` and its leftmost index."""
        for symbol in self._ranked:
            if len(symbol) > len(span):
                continue
            idx = span.find(symbol)
            if idx >= 0:
                return symbol, idx
        return None


def encode(
    vocab: Vocabulary, text: str, *, preserve_word_boundaries: bool = False
) -> list[Token]:
    """
    Encode ``text`` with ``vocab``.

    :param vocab: Trained vocabulary.
    :param text: Text to encode, converted to UTF-8 bytes.
    :param preserve_word_boundaries: Segment each whitespace-led word on its own,
        so no token spans two words.
    :returns: Token ids in document order.
    :raises NoMatchError: If the vocabulary cannot cover the text.
    """
    return Encoder(vocab, preserve_word_boundaries).encode(text)
