"""bytepair: byte-pair-encoding vocabulary builder and tokenizer."""

from importlib.metadata import PackageNotFoundError, version

from .config import TokenizerConfig
from .decoder import decode, decode_bytes
from .encoder import Encoder, encode
from .errors import (
    BytePairError,
    DeserializationError,
    DuplicateSymbolError,
    ModelLoadError,
    NoMatchError,
    PresetError,
    TokenizationError,
    TrainingError,
    UnknownSymbolError,
    UnknownTokenError,
    VocabularyError,
)
from .factory import from_pretrained, get_config, get_tokenizer, list_presets
from .serialise import dumps, load, loads, save
from .tokenizer import Tokenizer
from .trainer import BPETrainingResult, train, train_bpe
from .vocab import Vocabulary

try:
    __version__ = version("bytepair")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Vocabulary",
    "Tokenizer",
    "TokenizerConfig",
    "Encoder",
    "BPETrainingResult",
    "train",
    "train_bpe",
    "encode",
    "decode",
    "decode_bytes",
    "save",
    "load",
    "dumps",
    "loads",
    "get_tokenizer",
    "get_config",
    "list_presets",
    "from_pretrained",
    "BytePairError",
    "VocabularyError",
    "DuplicateSymbolError",
    "UnknownTokenError",
    "UnknownSymbolError",
    "TrainingError",
    "TokenizationError",
    "NoMatchError",
    "ModelLoadError",
    "DeserializationError",
    "PresetError",
]
