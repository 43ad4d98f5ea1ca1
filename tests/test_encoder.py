"""Unit tests for longest-match encoding and decoding."""

import pytest

import bytepair as bp
from bytepair.encoder import rank_symbols, split_words
from bytepair.errors import NoMatchError, UnknownTokenError


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def abab_vocab():
    """Return the vocabulary learned from 'abab' with target 258."""
    vocab, _ = bp.train("abab", 258)
    return vocab


def _vocab_with(*symbols: bytes) -> bp.Vocabulary:
    vocab = bp.Vocabulary.base()
    for symbol in symbols:
        vocab.add_entry(symbol)
    return vocab.freeze()


# Segmentation
# ---------------------------------------------------------------------------


def test_encode_whole_string_is_one_token(abab_vocab):
    assert bp.encode(abab_vocab, "abab") == [257]


def test_encode_prefers_longest_symbol(abab_vocab):
    assert bp.encode(abab_vocab, "ababab") == [257, 256]


def test_encode_match_in_the_middle_keeps_order():
    """Left and right remainders are segmented around the match."""
    vocab = _vocab_with(b"cd")
    assert bp.encode(vocab, "abcde") == [97, 98, 256, 101]


def test_encode_is_not_a_left_to_right_scan():
    """'bcd' is longer than 'ab', so it wins even though 'ab' starts first."""
    vocab = _vocab_with(b"ab", b"bcd")
    assert bp.encode(vocab, "abcd") == [97, 257]


def test_equal_length_symbols_ranked_by_id():
    """Among equal-length symbols the lower id is tried first."""
    assert bp.encode(_vocab_with(b"ab", b"bc"), "abc") == [256, 99]
    assert bp.encode(_vocab_with(b"bc", b"ab"), "abc") == [97, 256]


def test_rank_symbols_order():
    ranked = rank_symbols(_vocab_with(b"bc", b"abc", b"ab"))
    assert ranked[:3] == [b"abc", b"bc", b"ab"]
    assert ranked[3:] == [bytes([b]) for b in range(256)]


def test_encode_empty_text(abab_vocab):
    assert bp.encode(abab_vocab, "") == []
    assert bp.encode(abab_vocab, "", preserve_word_boundaries=True) == []


def test_encode_long_input_has_no_depth_limit():
    """Segmentation does not recurse, so long single-byte runs are fine."""
    vocab = bp.Vocabulary.base().freeze()
    assert bp.encode(vocab, "x" * 3000) == [120] * 3000


def test_encode_without_match_raises():
    """A vocabulary missing base bytes cannot cover every span."""
    vocab = bp.Vocabulary()
    vocab.add_entry(b"a")
    with pytest.raises(NoMatchError) as exc_info:
        bp.encode(vocab, "ab")
    assert exc_info.value.span == b"b"
    assert exc_info.value.position == 1
    assert exc_info.value.input_text == "ab"
    assert "at byte 1" in str(exc_info.value)


def test_no_match_position_is_relative_to_word_chunk():
    """With word boundaries the failing chunk, not the whole text, is reported."""
    vocab = bp.Vocabulary()
    for symbol in (b"a", b" ", b"b"):
        vocab.add_entry(symbol)
    with pytest.raises(NoMatchError) as exc_info:
        bp.encode(vocab, "ab  bac", preserve_word_boundaries=True)
    assert exc_info.value.input_text == "  bac"
    assert exc_info.value.position == 4
    assert exc_info.value.span == b"c"


# Word boundaries
# ---------------------------------------------------------------------------


def test_split_words_keeps_leading_whitespace():
    assert split_words("hello  world\n") == ["hello", "  world", "\n"]
    assert split_words(" hi") == [" hi"]
    assert "".join(split_words("a\tb  c ")) == "a\tb  c "


def test_preserve_word_boundaries_changes_result():
    """A symbol spanning two words only matches without pre-splitting."""
    vocab = _vocab_with(b"a b")
    assert bp.encode(vocab, "a b") == [256]
    assert bp.encode(vocab, "a b", preserve_word_boundaries=True) == [97, 32, 98]


# Decoding
# ---------------------------------------------------------------------------


def test_decode_abab(abab_vocab):
    assert bp.decode(abab_vocab, [257]) == "abab"
    assert bp.decode(abab_vocab, [256, 97]) == "aba"


def test_decode_unknown_token_raises(abab_vocab):
    with pytest.raises(UnknownTokenError) as exc_info:
        bp.decode(abab_vocab, [97, 999])
    assert exc_info.value.invalid_tok == 999


def test_decode_partial_utf8():
    """A lone UTF-8 lead byte is replaced by default and rejected when strict."""
    vocab = bp.Vocabulary.base().freeze()
    assert bp.decode_bytes(vocab, [0xC3]) == b"\xc3"
    assert bp.decode(vocab, [0xC3]) == "�"
    with pytest.raises(UnicodeDecodeError):
        bp.decode(vocab, [0xC3], errors="strict")


# Round trip
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("preserve_word_boundaries", [False, True])
@pytest.mark.parametrize(
    "text",
    [
        "the cat sat on the mat",
        "héllo wörld, 日本語 🎉",
        "   \n\t  ",
        "x",
    ],
)
def test_encode_decode_roundtrip(text, preserve_word_boundaries):
    vocab, _ = bp.train("the cat héllo wörld 日本語 the mat héllo", 300)
    tokens = bp.encode(vocab, text, preserve_word_boundaries=preserve_word_boundaries)
    assert bp.decode(vocab, tokens, errors="strict") == text
