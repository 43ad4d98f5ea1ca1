"""Custom exception hierarchy for bytepair errors."""

from .types import Symbol, Token


class BytePairError(Exception):
    """Base exception for all bytepair errors."""


class VocabularyError(BytePairError):
    """Raised when vocabulary operations fail."""

    def __init__(
        self,
        message: str,
        *,
        vocab_size: int | None = None,
        invalid_tok: Token | None = None,
    ) -> None:
        """Initialize with optional token and vocab_size that get appended to the message."""
        extra = " "
        # training: target vocab size below the base alphabet
        if vocab_size is not None:
            extra += f"(vocab size: {vocab_size}) "
        # decoding: token not in vocab
        if invalid_tok is not None:
            extra += f"(invalid token: {invalid_tok}) "
        super().__init__(message + extra)
        self.vocab_size = vocab_size
        self.invalid_tok = invalid_tok


class DuplicateSymbolError(VocabularyError):
    """Raised when a symbol is added to a vocabulary that already holds it."""

    def __init__(self, message: str, *, symbol: Symbol, existing_tok: Token) -> None:
        super().__init__(f"{message} (symbol: {symbol!r}) (existing token: {existing_tok})")
        self.symbol = symbol
        self.existing_tok = existing_tok


class UnknownTokenError(VocabularyError):
    """Raised when a token id has no vocabulary entry."""

    def __init__(self, message: str, *, invalid_tok: Token) -> None:
        super().__init__(message, invalid_tok=invalid_tok)


class UnknownSymbolError(VocabularyError):
    """Raised when a symbol has no vocabulary entry."""

    def __init__(self, message: str, *, symbol: Symbol) -> None:
        super().__init__(f"{message} (symbol: {symbol!r})")
        self.symbol = symbol


class TrainingError(BytePairError):
    """Raised when tokenizer training fails or has not happened yet."""


class TokenizationError(BytePairError):
    """Raised when tokenization fails."""

    def __init__(
        self,
        message: str,
        *,
        position: int | None = None,
        input_text: str | None = None,
    ) -> None:
        super().__init__(message)
        self.position = position
        self.input_text = input_text


class NoMatchError(TokenizationError):
    """Raised when no vocabulary symbol occurs in a non-empty span."""

    def __init__(
        self,
        message: str,
        *,
        span: bytes,
        position: int | None = None,
        input_text: str | None = None,
    ) -> None:
        if position is not None:
            message = f"{message} at byte {position}"
        super().__init__(
            f"{message} (span: {span!r})", position=position, input_text=input_text
        )
        self.span = span


class ModelLoadError(BytePairError):
    """Raised when loading a tokenizer model fails."""

    def __init__(
        self,
        message: str,
        *,
        model_path: str | None = None,
        version_mismatch: tuple[str, str] | None = None,
    ) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        if version_mismatch is not None:
            extra += f"(expected: {version_mismatch[1]}) (got {version_mismatch[0]}) "
        super().__init__(message + extra)
        self.model_path = model_path
        self.version_mismatch = version_mismatch


class DeserializationError(ModelLoadError):
    """Raised when a model artifact is malformed or incomplete."""

    def __init__(
        self,
        message: str,
        *,
        line_no: int | None = None,
        model_path: str | None = None,
        version_mismatch: tuple[str, str] | None = None,
    ) -> None:
        if line_no is not None:
            message = f"{message} (line: {line_no})"
        super().__init__(
            message, model_path=model_path, version_mismatch=version_mismatch
        )
        self.line_no = line_no


class PresetError(BytePairError):
    """Raised when a tokenizer preset name is unknown."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available_presets: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(available: {available_presets}) (got {invalid_name}) "
        super().__init__(message + extra)
        self.invalid_name = invalid_name
        self.available_presets = available_presets
