"""
Tokenizer facade bundling a vocabulary with its training and encoding options.
"""

import logging
from pathlib import Path

from . import decoder, serialise, trainer
from ._sanitise import render_bytes
from .config import TokenizerConfig
from .encoder import Encoder
from .errors import TrainingError
from .types import Token
from .vocab import Vocabulary

log = logging.getLogger(__name__)


class Tokenizer:
    """
    Byte-level BPE tokenizer.

    Holds the base 256 vocabulary until :meth:`train` or :meth:`load` replaces
    it with a learned one. Encoding and decoding require one of the two to
    have happened first.
    """

    def __init__(self, config: TokenizerConfig | None = None) -> None:
        self.config: TokenizerConfig = config if config is not None else TokenizerConfig()
        self.vocab: Vocabulary = Vocabulary.base().freeze()
        self._trained = False
        # cached encoder holding the ranked symbol list
        self._encoder: Encoder | None = None

    @property
    def is_trained(self) -> bool:
        return self._trained

    def train(
        self, text: str | list[str], vocab_size: int, verbose: bool = False
    ) -> None:
        """
        Learn ``vocab_size - 256`` merges from ``text``.

        :param text: Training text as a single string or list of strings.
        :param vocab_size: Target vocabulary size including the base 256 bytes.
        :param verbose: Log each learned merge when ``True``.
        :raises VocabularyError: If ``vocab_size`` is less than 256.
        """
        # handle list input
        if isinstance(text, list):
            text = "".join(text)

        vocab, _ = trainer.train(
            text,
            vocab_size,
            skip_whitespace_pairs=self.config.skip_whitespace_pairs,
            verbose=verbose,
        )
        self.vocab = vocab
        self._trained = True
        # invalidate encoder cache since the vocabulary changed
        self._encoder = None
        log.info(f"trained vocabulary with {vocab.size()} tokens")

    def encode(self, text: str) -> list[Token]:
        """
        Encode text into a sequence of tokens.

        :raises TrainingError: If the tokenizer has not been trained or loaded.
        :raises NoMatchError: If the vocabulary cannot cover the text.
        """
        self._require_trained("encoding")
        return self._get_encoder().encode(text)

    def encode_batch(self, texts: list[str]) -> list[list[Token]]:
        """Encode multiple texts, in input order."""
        self._require_trained("encoding")
        encoder = self._get_encoder()
        return [encoder.encode(text) for text in texts]

    def decode(self, tokens: list[Token], errors: str = "replace") -> str:
        """
        Decode a sequence of tokens back into text.

        :param errors: How to handle invalid UTF-8: "strict" or "replace".
        :raises TrainingError: If the tokenizer has not been trained or loaded.
        :raises UnknownTokenError: If any token id is not in the vocabulary.
        """
        self._require_trained("decoding")
        return decoder.decode(self.vocab, tokens, errors=errors)

    def decode_batch(
        self, token_batch: list[list[Token]], errors: str = "replace"
    ) -> list[str]:
        """Decode multiple token sequences, in input order."""
        self._require_trained("decoding")
        return [decoder.decode(self.vocab, tokens, errors=errors) for tokens in token_batch]

    def describe(self, tokens: list[Token]) -> list[tuple[Token, str]]:
        """Pair each token with a printable rendering of its bytes."""
        self._require_trained("describing tokens")
        return [(tok, render_bytes(self.vocab.lookup_symbol(tok))) for tok in tokens]

    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return self.vocab.size()

    def save(self, file_prefix: str | Path) -> Path:
        """
        Save the vocabulary and options to ``<file_prefix>.model`` and ``.vocab``.

        :raises TrainingError: If the tokenizer has not been trained yet.
        :returns: Path of the written .model file.
        """
        self._require_trained("saving")
        return serialise.save(self.vocab, file_prefix, self.config)

    def load(self, model_filename: str | Path) -> None:
        """
        Load the vocabulary and options from a .model file.

        The tokenizer is only updated after the whole file has been read.
        """
        vocab, config = serialise.load_model(model_filename)
        self.vocab = vocab
        self.config = config
        self._trained = True
        self._encoder = None

    def _require_trained(self, action: str) -> None:
        if not self._trained:
            raise TrainingError(
                f"{self.__class__.__name__} must be trained before {action}"
            )

    def _get_encoder(self) -> Encoder:
        """Build or return the cached encoder."""
        if self._encoder is None:
            self._encoder = Encoder(self.vocab, self.config.preserve_word_boundaries)
        return self._encoder

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(vocab_size={self.vocab_size()}, config={self.config})"
