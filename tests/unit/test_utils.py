"""Unit tests for text helpers."""

import pytest

from listing_campaigns.utils import extract_first_int, strip_code_fence, truncate_text


class TestTruncateText:
    """Tests for truncate_text."""

    def test_short_text_unchanged(self):
        """Text at or under the limit is returned as-is."""
        assert truncate_text("abc", 3) == "abc"
        assert truncate_text("ab", 80) == "ab"

    @pytest.mark.parametrize("limit", [80, 100])
    def test_long_text_cut_to_limit(self, limit):
        """Text over the limit ends with an ellipsis and has exactly `limit` chars."""
        text = "x" * (limit + 25)
        result = truncate_text(text, limit)
        assert len(result) == limit
        assert result == "x" * (limit - 3) + "..."

    def test_empty_text(self):
        assert truncate_text("", 10) == ""


class TestExtractFirstInt:
    """Tests for extract_first_int."""

    def test_first_number_wins(self):
        assert extract_first_int("R$ 1500/dia por 30 dias", 500) == 1500

    def test_default_without_digits(self):
        assert extract_first_int("a combinar", 500) == 500
        assert extract_first_int("", 500) == 500


class TestStripCodeFence:
    """Tests for strip_code_fence."""

    def test_json_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_fence(self):
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_no_fence(self):
        assert strip_code_fence('  {"a": 1} ') == '{"a": 1}'
