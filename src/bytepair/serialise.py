"""
Saving and loading vocabularies.

A model is stored as two files sharing a prefix:

- ``<prefix>.model`` holds every vocabulary entry and is what :func:`load`
  reads back. Symbols are written as hex so arbitrary bytes, including
  partial UTF-8 sequences, survive the round trip unchanged.
- ``<prefix>.vocab`` is a human-readable listing and is never read back.

``.model`` layout::

    bytepair 1
    options skip_whitespace_pairs=0 preserve_word_boundaries=0
    ---
    258
    0 00
    ...
    257 61626162
    ---
"""

import logging
from pathlib import Path
from typing import Final

from ._sanitise import render_bytes
from .config import TokenizerConfig
from .errors import DeserializationError, ModelLoadError, VocabularyError
from .vocab import Vocabulary

PREFIX: Final[str] = "bytepair"
FORMAT_VERSION: Final[str] = "1"
MODEL_SUFFIX: Final[str] = ".model"
VOCAB_SUFFIX: Final[str] = ".vocab"
MARKER: Final[str] = "---"

log = logging.getLogger(__name__)


def dumps(vocab: Vocabulary, config: TokenizerConfig | None = None) -> str:
    """Serialize ``vocab`` and the tokenizer options to the ``.model`` text format."""
    if config is None:
        config = TokenizerConfig()

    options = " ".join(
        f"{name}={int(getattr(config, name))}" for name in TokenizerConfig.option_names()
    )
    lines = [
        f"{PREFIX} {FORMAT_VERSION}",
        f"options {options}",
        MARKER,
        str(vocab.size()),
    ]
    lines.extend(f"{tok} {symbol.hex()}" for tok, symbol in vocab.items())
    lines.append(MARKER)
    return "\n".join(lines) + "\n"


def loads(data: str) -> Vocabulary:
    """
    Rebuild a frozen vocabulary from ``.model`` text.

    :raises DeserializationError: If the text is malformed or incomplete.
    """
    vocab, _ = parse_model(data)
    return vocab


def parse_model(
    data: str, model_path: str | None = None
) -> tuple[Vocabulary, TokenizerConfig]:
    """
    Parse ``.model`` text into a frozen vocabulary and its tokenizer options.

    Entries are collected into a fresh store that is only returned once the
    whole artifact has been read.

    :raises DeserializationError: If the text is malformed or incomplete.
    """
    lines = data.splitlines()

    def line_at(idx: int) -> str:
        if idx >= len(lines):
            raise DeserializationError(
                "unexpected end of model data", line_no=idx + 1, model_path=model_path
            )
        return lines[idx].strip()

    # header: format prefix and version
    header = line_at(0).split(" ")
    if len(header) != 2 or header[0] != PREFIX:
        raise DeserializationError(
            f"invalid header: {line_at(0)!r}", line_no=1, model_path=model_path
        )
    if header[1] != FORMAT_VERSION:
        raise DeserializationError(
            "model format version mismatch",
            line_no=1,
            model_path=model_path,
            version_mismatch=(header[1], FORMAT_VERSION),
        )

    config = _parse_options(line_at(1), model_path)

    if line_at(2) != MARKER:
        raise DeserializationError(
            f"start sequence marker missing: (expected {MARKER}) (got {line_at(2)})",
            line_no=3,
            model_path=model_path,
        )

    # entry count
    try:
        n_entries = int(line_at(3))
        if n_entries < 0:
            raise ValueError()
    except ValueError:
        raise DeserializationError(
            f"invalid entry count: {line_at(3)}", line_no=4, model_path=model_path
        ) from None

    log.debug(f"loading {n_entries} vocabulary entries")

    vocab = Vocabulary()
    for expected_tok in range(n_entries):
        idx = 4 + expected_tok
        entry = line_at(idx).split(" ")
        try:
            if len(entry) != 2:
                raise ValueError()
            tok, symbol = int(entry[0]), bytes.fromhex(entry[1])
        except ValueError:
            raise DeserializationError(
                f"invalid entry format: {line_at(idx)!r}",
                line_no=idx + 1,
                model_path=model_path,
            ) from None
        # ids are dense and written in order
        if tok != expected_tok:
            raise DeserializationError(
                f"out of order token: (expected {expected_tok}) (got {tok})",
                line_no=idx + 1,
                model_path=model_path,
            )
        try:
            vocab.add_entry(symbol)
        except VocabularyError as e:
            # duplicate or empty symbol
            raise DeserializationError(
                f"invalid symbol for token {tok}",
                line_no=idx + 1,
                model_path=model_path,
            ) from e

    end_idx = 4 + n_entries
    if line_at(end_idx) != MARKER:
        raise DeserializationError(
            f"end sequence marker missing: (expected {MARKER}) (got {line_at(end_idx)})",
            line_no=end_idx + 1,
            model_path=model_path,
        )
    if any(line.strip() for line in lines[end_idx + 1 :]):
        raise DeserializationError(
            "unexpected data after end marker", line_no=end_idx + 2, model_path=model_path
        )

    log.debug(f"loaded {vocab.size()} vocabulary entries")
    return vocab.freeze(), config


def _parse_options(line: str, model_path: str | None) -> TokenizerConfig:
    """Parse the ``options key=0|1 ...`` header line."""
    parts = line.split(" ")
    if parts[0] != "options":
        raise DeserializationError(
            f"options line missing: {line!r}", line_no=2, model_path=model_path
        )

    known = set(TokenizerConfig.option_names())
    options: dict[str, bool] = {}
    for part in filter(None, parts[1:]):
        name, sep, value = part.partition("=")
        if not sep or name not in known or value not in ("0", "1"):
            raise DeserializationError(
                f"invalid option: {part!r}", line_no=2, model_path=model_path
            )
        options[name] = value == "1"
    return TokenizerConfig(**options)


def save(
    vocab: Vocabulary, file_prefix: str | Path, config: TokenizerConfig | None = None
) -> Path:
    """
    Save ``vocab`` to disk.

    Creates two files: a .model file with every vocabulary entry and a .vocab
    file with human-readable token representations.

    :param file_prefix: Path prefix for output files.
    :returns: Path of the written .model file.
    """
    model_path = Path(file_prefix).with_suffix(MODEL_SUFFIX)
    vocab_path = Path(file_prefix).with_suffix(VOCAB_SUFFIX)
    # create directory if does not exist
    model_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(f"saving vocabulary to {model_path}")
    with model_path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(dumps(vocab, config))

    log.debug(f"saving vocab listing to {vocab_path}")
    with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
        for tok, symbol in vocab.items():
            f.write(f"[{tok}] {render_bytes(symbol)}\n")

    log.info(f"vocabulary saved successfully: {vocab.size()} tokens")
    return model_path


def load_model(model_filename: str | Path) -> tuple[Vocabulary, TokenizerConfig]:
    """
    Load a vocabulary and its tokenizer options from a .model file.

    :raises ModelLoadError: If the extension is not .model.
    :raises DeserializationError: If the file content is malformed.
    :raises OSError: If the file cannot be read.
    """
    path = Path(model_filename)
    if path.suffix != MODEL_SUFFIX:
        raise ModelLoadError("expected .model file", model_path=str(path))

    log.info(f"loading model from {path}")
    data = path.read_text(encoding="utf-8")
    vocab, config = parse_model(data, model_path=str(path))

    log.info(f"model loaded successfully: {vocab.size()} total tokens")
    return vocab, config


def load(model_filename: str | Path) -> Vocabulary:
    """Load a frozen vocabulary from a .model file."""
    vocab, _ = load_model(model_filename)
    return vocab
