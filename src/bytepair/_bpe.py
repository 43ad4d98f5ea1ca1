"""
Core Byte Pair Encoding (BPE) operations.
"""

from collections.abc import Container

from .types import Token, TokenPair


def bpe_freqs(
    tokens: list[Token], skip_second: Container[Token] = ()
) -> tuple[dict[TokenPair, int], TokenPair | None]:
    """
    Count all consecutive token pairs and pick the pair to merge next.

    The pick is made while counting: a pair only takes over as the best pair
    when its updated count is strictly greater than the running maximum. Among
    pairs that end with the same peak count, the one that reached that count
    first in the left-to-right scan wins. This is not the same as taking the
    argmax of the finished table.

    :param tokens: Token sequence to scan.
    :param skip_second: Pairs whose second token is in here are never counted.
    :return: Pair counts and the chosen pair, or ``None`` if no pair was counted.
    """
    pairs: dict[TokenPair, int] = {}
    best: TokenPair | None = None
    best_count = 0

    for pair in zip(tokens, tokens[1:]):
        if pair[1] in skip_second:
            continue
        count = pairs.get(pair, 0) + 1
        pairs[pair] = count
        # strictly greater: later pairs tying the max never displace it
        if count > best_count:
            best = pair
            best_count = count

    return pairs, best


def bpe_merge(tokens: list[Token], target: TokenPair, new_tok: Token) -> list[Token]:
    """
    Merge all occurrences of a target token pair into a single new token.

    Replacement is greedy, leftmost-first and non-overlapping: for ``(a, a)``
    the run ``a a a`` becomes ``new a``.

    Note that merged tokens may stand for partial UTF-8 sequences, so a single
    token cannot always be decoded into a valid string on its own.

    :param tokens: Original list of tokens.
    :param target: The consecutive pair of tokens to merge.
    :param new_tok: The new token that replaces the target pair.
    :return: New token list with all target pairs replaced by ``new_tok``.
    """
    newtoks: list[Token] = []

    i = 0
    n = len(tokens)
    while i < n:
        # check if we can form a pair and it matches the target
        if i < n - 1 and tokens[i] == target[0] and tokens[i + 1] == target[1]:
            newtoks.append(new_tok)
            i += 2
        else:
            newtoks.append(tokens[i])
            i += 1

    return newtoks
