# tests/test_chunker.py
import math
import types

import pytest

from app.config import CHUNK_MAX_CHARS
from app.memory.chunker import chunk_text


class TestChunkText:
    """Fixed-length character windows."""

    @pytest.mark.parametrize(
        "text,max_len",
        [
            ("a", 1),
            ("hello world", 3),
            ("hello world", 11),
            ("hello world", 50),
            ("x" * 3001, 1500),
        ],
    )
    def test_chunks_cover_text_exactly(self, text, max_len):
        """Joined chunks equal the input; count is ceil(len/max_len)."""
        chunks = list(chunk_text(text, max_len))

        assert "".join(chunks) == text
        assert len(chunks) == math.ceil(len(text) / max_len)
        assert all(len(c) <= max_len for c in chunks)

    def test_empty_text_yields_one_empty_chunk(self):
        """Every page produces at least one embedding input."""
        assert list(chunk_text("", 10)) == [""]

    def test_order_preserved(self):
        assert list(chunk_text("abcdefg", 3)) == ["abc", "def", "g"]

    def test_no_whitespace_handling(self):
        """Whitespace is content, nothing is stripped."""
        assert list(chunk_text("  a  ", 2)) == ["  ", "a ", " "]

    def test_is_lazy(self):
        assert isinstance(chunk_text("abc", 1), types.GeneratorType)

    def test_default_size(self):
        chunks = list(chunk_text("y" * (CHUNK_MAX_CHARS + 1)))

        assert len(chunks) == 2
        assert len(chunks[0]) == CHUNK_MAX_CHARS
        assert CHUNK_MAX_CHARS == 1500

    @pytest.mark.parametrize("max_len", [0, -5])
    def test_invalid_size_rejected(self, max_len):
        with pytest.raises(ValueError):
            list(chunk_text("abc", max_len))
