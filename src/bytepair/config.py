"""Tokenizer options."""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class TokenizerConfig:
    """
    Options that change how a tokenizer trains and encodes.

    :param skip_whitespace_pairs: During training, never count a pair whose
        second token is the space byte, so merges do not run into the next word.
    :param preserve_word_boundaries: During encoding, split the text into
        whitespace-led words first and segment each word on its own.
    """

    skip_whitespace_pairs: bool = False
    preserve_word_boundaries: bool = False

    @classmethod
    def option_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]
