"""Tests for the tiktoken-backed pretrained BPE tokenizer."""

import pytest

import wordtok as wt
from wordtok.errors import ConfigurationError, SpecialTokenError, UnresolvableIdError

TEXT = "Hello, do you like tea? <|endoftext|> In the sunlit terraces of the palace."


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def gpt2():
    """Return the gpt2 encoding; its files are downloaded on first use."""
    try:
        return wt.get_bpe_tokenizer("gpt2")
    except Exception as e:
        pytest.skip(f"gpt2 encoding unavailable: {e}")


# Encode-decode round-trip
# ---------------------------------------------------------------------------


def test_roundtrip_with_allowed_special(gpt2):
    """Allowed special markers encode to their reserved id and round-trip."""
    tokens = gpt2.encode(TEXT, allowed_special={"<|endoftext|>"})
    assert 50256 in tokens
    assert gpt2.decode(tokens) == TEXT


def test_roundtrip_allow_all(gpt2):
    tokens = gpt2.encode(TEXT, allowed_special="all")
    assert gpt2.decode(tokens) == TEXT


def test_empty_string(gpt2):
    assert gpt2.encode("") == []
    assert gpt2.decode([]) == ""


def test_batch_matches_single(gpt2):
    texts = ["Hello, world.", "Is this-- a test?"]
    encoded = gpt2.encode_batch(texts, num_workers=2)
    assert encoded == [gpt2.encode(text) for text in texts]
    assert gpt2.decode_batch(encoded) == texts


# Errors
# ---------------------------------------------------------------------------


def test_disallowed_special_raises(gpt2):
    """Special markers are rejected unless explicitly allowed."""
    with pytest.raises(SpecialTokenError) as exc_info:
        gpt2.encode(TEXT)
    assert exc_info.value.found_tokens == {"<|endoftext|>"}


def test_undefined_allowed_special_raises(gpt2):
    with pytest.raises(SpecialTokenError):
        gpt2.encode("hi", allowed_special={"<|unk|>"})


@pytest.mark.parametrize("bad_id", [-1, 50257, 10**9])
def test_decode_unresolvable_id_raises(gpt2, bad_id):
    with pytest.raises(UnresolvableIdError) as exc_info:
        gpt2.decode([bad_id])
    assert exc_info.value.token_id == bad_id


def test_vocab_size(gpt2):
    assert gpt2.vocab_size() == 50257
    assert gpt2.name == "gpt2"
    assert "<|endoftext|>" in gpt2.special_tokens


def test_unknown_model_raises():
    """Names that are neither encodings nor models are rejected."""
    with pytest.raises(ConfigurationError):
        wt.get_bpe_tokenizer("definitely-not-a-model")
