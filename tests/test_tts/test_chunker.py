"""Tests for text chunking."""

import pytest

from ttstudio.tts.chunker import build_chunks, get_chunk_count, split_text


def make_sentence(length: int) -> str:
    """A run of words ending with a period, exactly length characters long."""
    return ("word " * length)[: length - 1] + "."


def non_whitespace(text: str) -> str:
    return "".join(text.split())


# -----------------------------------------------------------------------------
# Trivial inputs
# -----------------------------------------------------------------------------


class TestTrivialInputs:
    """Tests for empty and short text."""

    def test_empty_text_returns_no_chunks(self):
        assert split_text("") == []

    def test_whitespace_only_returns_no_chunks(self):
        assert split_text("   \n\t  ") == []

    def test_short_text_returns_single_trimmed_chunk(self):
        assert split_text("  Hello there.  ", max_chunk_size=100) == ["Hello there."]

    def test_text_exactly_at_limit_is_one_chunk(self):
        text = "a" * 50
        assert split_text(text, max_chunk_size=50) == [text]

    def test_invalid_chunk_size_rejected(self):
        with pytest.raises(ValueError):
            split_text("anything", max_chunk_size=0)


# -----------------------------------------------------------------------------
# Break point selection
# -----------------------------------------------------------------------------


class TestBreakPoints:
    """Tests for the sentence, newline, space, hard-cut preference order."""

    def test_prefers_last_sentence_end_in_back_half(self):
        text = "First sentence here. Second one is here. Third sentence runs past it"
        chunks = split_text(text, max_chunk_size=45)

        assert chunks[0] == "First sentence here. Second one is here."

    def test_sentence_end_followed_by_newline(self):
        text = "Line one is long enough!\nLine two continues the text on"
        chunks = split_text(text, max_chunk_size=30)

        assert chunks[0] == "Line one is long enough!"

    def test_sentence_end_in_front_half_is_ignored(self):
        # The only ". " sits before the 50% mark, so the last space wins
        text = "Hi. " + "abcd " * 10
        chunks = split_text(text, max_chunk_size=30)

        assert chunks[0] != "Hi."
        assert chunks[0].startswith("Hi. abcd")

    def test_falls_back_to_newline(self):
        text = "no punctuation in this line\nand more words follow here"
        chunks = split_text(text, max_chunk_size=35)

        assert chunks[0] == "no punctuation in this line"

    def test_falls_back_to_space(self):
        text = "alpha beta gamma delta epsilon zeta eta theta"
        chunks = split_text(text, max_chunk_size=20)

        assert chunks[0] == "alpha beta gamma"
        assert chunks[1].startswith("delta")

    def test_hard_cut_for_single_long_word(self):
        text = "x" * 25
        chunks = split_text(text, max_chunk_size=10)

        assert chunks == ["x" * 10, "x" * 10, "x" * 5]


# -----------------------------------------------------------------------------
# Invariants
# -----------------------------------------------------------------------------


class TestInvariants:
    """Tests for size limits and content preservation."""

    @pytest.mark.parametrize(
        "text",
        [
            "One. Two! Three? " * 40,
            "para one\n\npara two\nwith lines\n" * 25,
            "supercalifragilistic" * 30,
            "mixed   spacing\tand\ttabs. " * 30,
            "短い文。" * 100,
        ],
    )
    @pytest.mark.parametrize("max_chunk_size", [7, 40, 128])
    def test_chunks_within_limit_and_lossless(self, text, max_chunk_size):
        chunks = split_text(text, max_chunk_size)

        assert chunks
        assert all(0 < len(c) <= max_chunk_size for c in chunks)
        assert all(c == c.strip() for c in chunks)
        assert non_whitespace("".join(chunks)) == non_whitespace(text)

    def test_chunk_count_matches_split(self):
        text = "Sentence number one. " * 300
        for size in (50, 500, 3000, 10_000):
            assert get_chunk_count(text, size) == len(split_text(text, size))

    def test_build_chunks_indexes_in_order(self):
        text = "Alpha beta. Gamma delta. Epsilon zeta."
        chunks = build_chunks(text, max_chunk_size=15)

        assert [c.index for c in chunks] == list(range(len(chunks)))
        assert [c.text for c in chunks] == split_text(text, 15)


class TestLongDocument:
    """End-to-end chunking of a document with sentence ends near the limits."""

    def test_seven_thousand_characters_split_on_sentences(self):
        text = " ".join([make_sentence(2990), make_sentence(2999), make_sentence(1009)])
        assert len(text) == 7000

        chunks = split_text(text, max_chunk_size=3000)

        assert len(chunks) == 3
        assert all(len(c) <= 3000 for c in chunks)
        assert all(c.endswith(".") for c in chunks)
        assert [len(c) for c in chunks] == [2990, 2999, 1009]
