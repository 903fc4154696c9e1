"""Unit tests for vocabulary building, reserved tokens and persistence."""

import logging

import pytest

import wordtok as wt
from wordtok.errors import ModelLoadError, VocabularyError
from wordtok.vocab import VERSION

CORPUS = "Hello, world. Is this-- a test?"


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def vocab():
    """Return a vocabulary with reserved tokens built from the sample corpus."""
    return wt.build_vocab(CORPUS)


# Identifier assignment
# ---------------------------------------------------------------------------


def test_tokens_are_sorted_then_reserved(vocab):
    """Corpus tokens are numbered in sorted order, reserved markers last."""
    assert vocab.id_to_token == (
        " ", ",", "--", ".", "?", "Hello", "Is", "a", "test", "this", "world",
        "<|unk|>", "<|endoftext|>",
    )
    assert vocab.unk_id == 11
    assert vocab.get_id("<|endoftext|>") == 12


def test_build_is_deterministic():
    """Same corpus and options give identical vocabularies."""
    first = wt.build_vocab(CORPUS)
    second = wt.build_vocab(CORPUS)
    assert first == second
    assert dict(first.token_to_id) == dict(second.token_to_id)


def test_build_without_reserved():
    """No reserved markers are appended when not requested."""
    vocab = wt.build_vocab(CORPUS, include_reserved=False)
    assert len(vocab) == 11
    assert vocab.unk_id is None
    assert "<|endoftext|>" not in vocab


def test_bijection(vocab):
    """Every identifier maps to one token and back."""
    assert len(vocab.token_to_id) == len(vocab.id_to_token) == len(vocab)
    for tok, idx in vocab.items():
        assert vocab.get_id(tok) == idx
        assert vocab.get_token(idx) == tok


def test_list_corpus_is_concatenated():
    """A list corpus builds the same vocabulary as its concatenation."""
    assert wt.build_vocab(["Hello,", " world."]) == wt.build_vocab("Hello, world.")


# Empty corpus
# ---------------------------------------------------------------------------


def test_empty_corpus_with_reserved():
    """An empty corpus yields only the reserved markers."""
    vocab = wt.build_vocab("")
    assert vocab.id_to_token == ("<|unk|>", "<|endoftext|>")


def test_empty_corpus_without_reserved():
    """An empty corpus without reserved markers is empty."""
    assert len(wt.build_vocab("", include_reserved=False)) == 0


# Reserved tokens
# ---------------------------------------------------------------------------


def test_reserved_token_in_corpus_appears_once():
    """A reserved marker found in the corpus keeps only its reserved position."""
    vocab = wt.build_vocab("tea <|endoftext|> time")
    assert vocab.id_to_token == (" ", "tea", "time", "<|unk|>", "<|endoftext|>")
    assert vocab.id_to_token.count("<|endoftext|>") == 1


def test_reserved_token_in_corpus_without_reserved_is_ordinary():
    """Without reserved injection a marker in the corpus is sorted like any token."""
    vocab = wt.build_vocab("tea <|endoftext|>", include_reserved=False)
    assert vocab.id_to_token == (" ", "<|endoftext|>", "tea")


def test_custom_reserved_order():
    """Extra reserved markers are appended after the unknown-token marker in order."""
    reserved = wt.ReservedTokens(extra=("<|endoftext|>", "<|pad|>"))
    vocab = wt.build_vocab("a", reserved=reserved)
    assert vocab.id_to_token == ("a", "<|unk|>", "<|endoftext|>", "<|pad|>")
    assert vocab.reserved.ordered == ("<|unk|>", "<|endoftext|>", "<|pad|>")


def test_duplicate_reserved_tokens_raise():
    """Reserved markers must be distinct."""
    with pytest.raises(VocabularyError):
        wt.ReservedTokens(unk="<|x|>", extra=("<|x|>",))


def test_empty_reserved_token_raises():
    with pytest.raises(VocabularyError):
        wt.ReservedTokens(unk="")


# Vocabulary invariants
# ---------------------------------------------------------------------------


def test_duplicate_tokens_raise():
    """A vocabulary cannot contain the same token twice."""
    with pytest.raises(VocabularyError) as exc_info:
        wt.Vocabulary(["a", "b", "a"])
    assert exc_info.value.invalid_tok == "a"


def test_mapping_is_read_only(vocab):
    """The token mapping cannot be modified after construction."""
    with pytest.raises(TypeError):
        vocab.token_to_id["new"] = 99


def test_negative_id_is_not_resolved(vocab):
    """Negative identifiers never index from the end."""
    assert vocab.get_token(-1) is None
    assert vocab.get_token(len(vocab)) is None


def test_uncovered_corpus_characters_are_logged(caplog):
    """Dropped corpus characters produce a warning."""
    with caplog.at_level(logging.WARNING, logger="wordtok.vocab"):
        wt.build_vocab("a + b")
    assert "not covered" in caplog.text


def test_keep_coverage_adds_uncovered_characters():
    """With keep coverage uncovered characters become vocabulary entries."""
    vocab = wt.build_vocab("a + b", include_reserved=False, coverage="keep")
    assert vocab.id_to_token == (" ", "+", "a", "b")


# Save and load
# ---------------------------------------------------------------------------


def test_save_load_roundtrip(tmp_path):
    """Save and load reproduces the vocabulary, including whitespace tokens."""
    vocab = wt.build_vocab("Line one.\nLine\ttwo.", pattern=wt.SplitPattern.PLAIN)
    prefix = str(tmp_path / "vocab")
    vocab.save(prefix)

    loaded = wt.Vocabulary.load(f"{prefix}.model")
    assert loaded == vocab
    assert loaded.splitter == vocab.splitter
    assert loaded.reserved == vocab.reserved


def test_save_load_custom_reserved(tmp_path):
    """Reserved configuration survives persistence."""
    reserved = wt.ReservedTokens(unk="<|oov|>", extra=())
    vocab = wt.build_vocab(CORPUS, reserved=reserved, coverage="keep")
    prefix = str(tmp_path / "custom")
    vocab.save(prefix)

    loaded = wt.Vocabulary.load(f"{prefix}.model")
    assert loaded.reserved == reserved
    assert loaded.unk_id == len(loaded) - 1
    assert loaded.splitter.coverage is wt.Coverage.KEEP


def test_save_writes_readable_vocab(tmp_path, vocab):
    """The .vocab file lists every token, reserved markers flagged."""
    prefix = tmp_path / "readable"
    vocab.save(str(prefix))

    lines = (tmp_path / "readable.vocab").read_text(encoding="utf-8").splitlines()
    assert len(lines) == len(vocab)
    assert lines[0] == "[0] [ ]"
    assert lines[-1] == "RT [12] <|endoftext|>"


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(ModelLoadError):
        wt.Vocabulary.load(str(tmp_path / "missing.model"))


def test_load_wrong_suffix_raises(tmp_path):
    path = tmp_path / "vocab.txt"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ModelLoadError):
        wt.Vocabulary.load(str(path))


def _write_model(path, body: str) -> None:
    header = f"WordTok {VERSION}\ntype simple\nre \\w+\ncoverage drop\n"
    path.write_text(header + body, encoding="utf-8")


def test_load_version_mismatch_raises(tmp_path):
    path = tmp_path / "old.model"
    path.write_text("WordTok 0.0.0-old\ntype simple\n", encoding="utf-8")
    with pytest.raises(ModelLoadError) as exc_info:
        wt.Vocabulary.load(str(path))
    assert exc_info.value.version_mismatch == ("0.0.0-old", VERSION)


def test_load_non_contiguous_ids_raises(tmp_path):
    path = tmp_path / "gap.model"
    _write_model(path, '---\n1\n"<|unk|>"\n---\n0 "a"\n2 "b"\n')
    with pytest.raises(ModelLoadError):
        wt.Vocabulary.load(str(path))


def test_load_duplicate_tokens_raises(tmp_path):
    path = tmp_path / "dup.model"
    _write_model(path, '---\n1\n"<|unk|>"\n---\n0 "a"\n1 "a"\n')
    with pytest.raises(ModelLoadError):
        wt.Vocabulary.load(str(path))


def test_load_missing_marker_raises(tmp_path):
    path = tmp_path / "nomarker.model"
    _write_model(path, '1\n"<|unk|>"\n---\n0 "a"\n')
    with pytest.raises(ModelLoadError):
        wt.Vocabulary.load(str(path))
