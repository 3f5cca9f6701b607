"""Tests for Levenshtein similarity."""

import pytest

from fountainkit.tags.similarity import similarity


@pytest.mark.unit
class TestSimilarity:
    """Test the similarity ratio."""

    @pytest.mark.parametrize(
        ("first", "second", "expected"),
        [
            ("SARAH", "SARAH", 1.0),
            ("", "", 1.0),
            ("ABC", "", 0.0),
            ("JOHN", "JOHNN", 0.8),
            ("kitten", "sitting", 4 / 7),
        ],
    )
    def test_values(self, first, second, expected):
        """Test the ratio is relative to the longer string."""
        assert similarity(first, second) == pytest.approx(expected)

    def test_symmetric(self):
        """Test argument order does not matter."""
        assert similarity("COFFEE SHOP", "COFFE SHOP") == similarity(
            "COFFE SHOP", "COFFEE SHOP"
        )

    def test_truncation(self):
        """Test inputs are cut to max_length before comparing."""
        assert similarity("JOHNNY", "JOHN", max_length=4) == 1.0
        assert similarity("JOHNNY", "JOHN") == pytest.approx(4 / 6)
