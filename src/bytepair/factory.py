"""Factory functions for creating tokenizers."""

from pathlib import Path
from typing import Final, Literal

from .config import TokenizerConfig
from .errors import PresetError
from .tokenizer import Tokenizer

Preset = Literal["basic", "word"]

_PRESETS: Final[dict[str, TokenizerConfig]] = {
    # whole-text counting and matching
    "basic": TokenizerConfig(),
    # no merge ends in a space and no token spans two words
    "word": TokenizerConfig(skip_whitespace_pairs=True, preserve_word_boundaries=True),
}


def list_presets() -> list[str]:
    """Return names of all available tokenizer presets."""
    return list(_PRESETS.keys())


def get_config(name: Preset) -> TokenizerConfig:
    """
    Return the options of a named preset.

    :raises PresetError: If the preset name is unknown.
    """
    if name not in _PRESETS:
        raise PresetError(
            "unknown preset name",
            invalid_name=name,
            available_presets=list_presets(),
        )
    return _PRESETS[name]


def get_tokenizer(name: Preset = "word") -> Tokenizer:
    """
    Create an untrained tokenizer from a named preset.

    :param name: "basic" counts and matches across the whole text, "word"
                 keeps merges and matches inside whitespace-led words.
    :raises PresetError: If the preset name is unknown.

    .. code-block:: python

        tok = get_tokenizer("word")
        tok.train(text, vocab_size=2356)
    """
    return Tokenizer(get_config(name))


def from_pretrained(model_path: str | Path) -> Tokenizer:
    """
    Load a saved tokenizer, restoring the options it was trained with.

    :param model_path: Path to the .model file.
    :raises ModelLoadError: If the file is not a valid .model file.
    """
    tok = Tokenizer()
    tok.load(model_path)
    return tok
