"""Unit tests for saving and loading vocabularies."""

import pytest

import bytepair as bp
from bytepair.errors import DeserializationError, ModelLoadError
from bytepair.serialise import load_model, parse_model


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def trained_vocab():
    """Return a vocabulary with multi-byte UTF-8 merges."""
    vocab, _ = bp.train("日本語 café 日本語 café 日本語 naïve", 290)
    return vocab


@pytest.fixture
def model_lines():
    """Return the .model lines of a small valid vocabulary."""
    vocab = bp.Vocabulary.base()
    vocab.add_entry(b"ab")
    return bp.dumps(vocab).splitlines()


# Round trip
# ---------------------------------------------------------------------------


def test_dumps_loads_roundtrip(trained_vocab):
    """Both directions of the mapping survive byte for byte."""
    loaded = bp.loads(bp.dumps(trained_vocab))
    assert loaded == trained_vocab
    assert list(loaded.items()) == list(trained_vocab.items())
    # at least one merge is a multi-byte UTF-8 fragment
    assert any(len(symbol) > 1 and max(symbol) > 0x7F for _, symbol in loaded.items())


def test_loaded_vocab_is_frozen(trained_vocab):
    assert bp.loads(bp.dumps(trained_vocab)).frozen


def test_save_load_roundtrip(trained_vocab, tmp_path):
    prefix = tmp_path / "nested" / "tok"
    model_path = bp.save(trained_vocab, prefix)

    assert model_path == tmp_path / "nested" / "tok.model"
    assert (tmp_path / "nested" / "tok.vocab").exists()
    assert bp.load(model_path) == trained_vocab


def test_vocab_listing_is_readable(tmp_path):
    vocab, _ = bp.train("abab", 258)
    bp.save(vocab, tmp_path / "tok")
    listing = (tmp_path / "tok.vocab").read_text(encoding="utf-8").splitlines()
    assert len(listing) == 258
    # control characters are escaped
    assert listing[10] == "[10] \\u000a"
    assert listing[257] == "[257] abab"


def test_options_roundtrip(tmp_path):
    config = bp.TokenizerConfig(skip_whitespace_pairs=True, preserve_word_boundaries=False)
    bp.save(bp.Vocabulary.base(), tmp_path / "tok", config)
    _, loaded_config = load_model(tmp_path / "tok.model")
    assert loaded_config == config


def test_encoding_matches_after_reload(trained_vocab):
    loaded = bp.loads(bp.dumps(trained_vocab))
    text = "日本語 café"
    assert bp.encode(loaded, text) == bp.encode(trained_vocab, text)


# Malformed artifacts
# ---------------------------------------------------------------------------


def _replace(lines: list[str], idx: int, value: str) -> str:
    lines = list(lines)
    lines[idx] = value
    return "\n".join(lines) + "\n"


@pytest.mark.parametrize(
    "idx, value",
    [
        (0, "tokenizer 1"),  # wrong prefix
        (1, "opts"),  # options line missing
        (1, "options unknown_option=1"),
        (1, "options skip_whitespace_pairs=yes"),
        (2, "==="),  # start marker
        (3, "abc"),  # entry count not a number
        (3, "-1"),
        (4, "0"),  # entry without symbol
        (4, "0 zz"),  # bad hex
        (4, "1 00"),  # out of order id
        (5, "1 00"),  # duplicate symbol
        (-1, "+++"),  # end marker
    ],
)
def test_malformed_model_raises(model_lines, idx, value):
    with pytest.raises(DeserializationError):
        bp.loads(_replace(model_lines, idx, value))


def test_version_mismatch_raises(model_lines):
    with pytest.raises(DeserializationError) as exc_info:
        bp.loads(_replace(model_lines, 0, "bytepair 99"))
    assert exc_info.value.version_mismatch == ("99", "1")


def test_truncated_model_raises(model_lines):
    """Losing trailing entries is detected through the entry count."""
    data = "\n".join(model_lines[:100]) + "\n"
    with pytest.raises(DeserializationError) as exc_info:
        bp.loads(data)
    assert exc_info.value.line_no == 101


def test_trailing_data_raises(model_lines):
    data = "\n".join(model_lines + ["258 6162"]) + "\n"
    with pytest.raises(DeserializationError):
        bp.loads(data)


def test_empty_data_raises():
    with pytest.raises(DeserializationError):
        bp.loads("")


def test_parse_model_reports_path(model_lines):
    with pytest.raises(DeserializationError) as exc_info:
        parse_model(_replace(model_lines, 3, "x"), model_path="tok.model")
    assert exc_info.value.model_path == "tok.model"
    assert exc_info.value.line_no == 4


# File handling
# ---------------------------------------------------------------------------


def test_load_wrong_suffix_raises(tmp_path):
    path = tmp_path / "tok.txt"
    path.write_text("bytepair 1\n", encoding="utf-8")
    with pytest.raises(ModelLoadError):
        bp.load(path)


def test_load_missing_file_passes_os_error_through(tmp_path):
    with pytest.raises(FileNotFoundError):
        bp.load(tmp_path / "missing.model")
