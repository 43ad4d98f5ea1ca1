"""Token id to text decoding."""

from .types import Token
from .vocab import Vocabulary


def decode_bytes(vocab: Vocabulary, tokens: list[Token]) -> bytes:
    """
    Concatenate the symbols of ``tokens``.

    :raises UnknownTokenError: If any token is not in ``vocab``.
    """
    return b"".join(vocab.lookup_symbol(tok) for tok in tokens)


def decode(vocab: Vocabulary, tokens: list[Token], errors: str = "replace") -> str:
    """
    Decode tokens into UTF-8 text.

    :param errors: How to handle invalid UTF-8, as in ``bytes.decode``.
    :raises UnknownTokenError: If any token is not in ``vocab``.
    """
    # token stream -> byte stream -> python string
    return decode_bytes(vocab, tokens).decode("utf-8", errors=errors)
