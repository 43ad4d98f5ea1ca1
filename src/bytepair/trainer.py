"""Standalone BPE training module."""

import logging
from dataclasses import dataclass
from typing import Final

from ._bpe import bpe_freqs, bpe_merge
from ._decorators import log_training
from .errors import VocabularyError
from .types import Merges, Token
from .vocab import N_BASE_TOKENS, Vocabulary

# byte value of " "
SPACE_TOKEN: Final[Token] = 0x20

log = logging.getLogger(__name__)


@dataclass
class BPETrainingResult:
    """Results from one BPE training run."""

    vocab: Vocabulary
    tokens: list[Token]
    # byte pair -> merge token, in creation order
    merges: Merges
    n_merges_completed: int


def train_bpe(
    tokens: list[Token],
    n_merges: int,
    vocab: Vocabulary | None = None,
    *,
    skip_whitespace_pairs: bool = False,
    verbose: bool = False,
) -> BPETrainingResult:
    """
    Learn up to ``n_merges`` merges from a token sequence.

    Every iteration recounts all adjacent pairs, mints a vocabulary entry for
    the chosen pair and rewrites the sequence. Training stops early once no
    pair is left to merge.

    :param tokens: Input token sequence, every token must be in ``vocab``.
    :param n_merges: Maximum number of merge operations to perform.
    :param vocab: Store to grow; a new base alphabet store when ``None``.
    :param skip_whitespace_pairs: Never count pairs whose second token is a space.
    :param verbose: Log each learned merge when ``True``.
    :returns: The grown vocabulary, final token sequence and merge history.
    """
    if vocab is None:
        vocab = Vocabulary.base()

    skip_second: tuple[Token, ...] = (SPACE_TOKEN,) if skip_whitespace_pairs else ()
    merges: Merges = {}

    for _ in range(n_merges):
        _, pair = bpe_freqs(tokens, skip_second)
        # covers sequences shorter than 2 and fully skipped pairs
        if pair is None:
            break

        tok_a, tok_b = pair
        new_tok = vocab.add_entry(vocab.lookup_symbol(tok_a) + vocab.lookup_symbol(tok_b))
        merges[pair] = new_tok
        tokens = bpe_merge(tokens, pair, new_tok)

        if verbose:
            log.info(
                "merge %d/%d: %s -> %d (%r)",
                len(merges),
                n_merges,
                pair,
                new_tok,
                vocab.lookup_symbol(new_tok),
            )

    return BPETrainingResult(
        vocab=vocab,
        tokens=tokens,
        merges=merges,
        n_merges_completed=len(merges),
    )


@log_training
def train(
    text: str,
    vocab_size: int,
    *,
    skip_whitespace_pairs: bool = False,
    verbose: bool = False,
) -> tuple[Vocabulary, list[Token]]:
    """
    Train a byte-level BPE vocabulary on ``text``.

    The text is encoded as UTF-8 and ``vocab_size - 256`` merges are learned on
    top of the base byte alphabet. The returned vocabulary is frozen.

    :param text: Training corpus.
    :param vocab_size: Target vocabulary size including the base 256 bytes.
    :param skip_whitespace_pairs: Never merge a pair whose second token is a space.
    :param verbose: Log each learned merge when ``True``.
    :returns: The trained vocabulary and the corpus' final token sequence.
    :raises VocabularyError: If ``vocab_size`` is less than 256.
    """
    if vocab_size < N_BASE_TOKENS:
        raise VocabularyError(
            "vocab size must be at least 256", vocab_size=vocab_size
        )

    tokens = list(text.encode("utf-8"))
    n_merges = vocab_size - N_BASE_TOKENS

    result = train_bpe(
        tokens,
        n_merges,
        skip_whitespace_pairs=skip_whitespace_pairs,
        verbose=verbose,
    )

    if result.n_merges_completed < n_merges:
        log.warning(
            f"no more byte pairs to merge after {result.n_merges_completed} merges "
            f"(requested {n_merges}) stopping early"
        )

    return result.vocab.freeze(), result.tokens
