"""Tests for the string similarity scorer and score combination."""

import pytest

from src.domain.entities import Album
from src.domain.matching import (
    MATCHING_CONFIG,
    TitleMatch,
    combine_scores,
    is_better_match,
    score,
)


class TestScore:
    """Test dissimilarity scoring between recognized and collection strings."""

    def test_identical_strings_score_zero(self):
        """Test exact equality short-circuits to the best score."""
        assert score("Abbey Road", "Abbey Road") == 0.0

    def test_case_and_punctuation_ignored(self):
        assert score("abbey road!", "Abbey Road") == 0.0

    def test_word_order_ignored(self):
        """Test token sorting makes word order irrelevant."""
        assert score("Road Abbey", "Abbey Road") == 0.0

    def test_empty_against_text_is_worst(self):
        """Test a string with nothing usable scores 1.0."""
        assert score("", "Abbey Road") == MATCHING_CONFIG["worst_score"]
        assert score(None, "Abbey Road") == 1.0

    def test_both_empty_are_identical(self):
        assert score(None, "") == 0.0

    @pytest.mark.parametrize(
        ("candidate", "reference"),
        [
            ("Kind of Blue", "Blue Train"),
            ("Here Comes The Sun", "Abbey Road"),
            ("xyz", "Abbey Road"),
            ("Abbey Road (Remastered)", "Abbey Road"),
        ],
    )
    def test_scores_stay_in_unit_interval(self, candidate, reference):
        result = score(candidate, reference)
        assert 0.0 <= result <= 1.0

    def test_closer_strings_score_lower(self):
        """Test a near match beats an unrelated string."""
        near = score("Abbey Road (Remastered)", "Abbey Road")
        far = score("Blue Train", "Abbey Road")
        assert near < far

    def test_unrelated_strings_above_threshold(self):
        assert score("xyz", "Abbey Road") > MATCHING_CONFIG["acceptance_threshold"]


class TestCombineScores:
    """Test weighted combination of title and artist scores."""

    def test_weighted_average(self):
        assert combine_scores(0.0, 1.0) == pytest.approx(0.3)
        assert combine_scores(1.0, 0.0) == pytest.approx(0.7)

    def test_title_only(self):
        """Test a missing artist score leaves the title score alone."""
        assert combine_scores(0.2, None) == 0.2

    def test_artist_only(self):
        assert combine_scores(None, 0.5) == 0.5

    def test_nothing_to_combine(self):
        assert combine_scores(None, None) is None

    def test_zero_artist_weight_ignores_artist(self):
        assert combine_scores(0.1, 0.9, title_weight=1.0, artist_weight=0.0) == 0.1


class TestIsBetterMatch:
    """Test best-match replacement and tie-breaking."""

    @pytest.fixture
    def low(self):
        return Album(id=1, title="A", artist="X")

    @pytest.fixture
    def high(self):
        return Album(id=9, title="B", artist="Y")

    def test_anything_beats_nothing(self, high):
        assert is_better_match(TitleMatch(high, 0.9), None)

    def test_lower_score_wins(self, low, high):
        assert is_better_match(TitleMatch(high, 0.1), TitleMatch(low, 0.2))
        assert not is_better_match(TitleMatch(high, 0.3), TitleMatch(low, 0.2))

    def test_tie_goes_to_lowest_id(self, low, high):
        """Test scores within epsilon are ties won by the lower album id."""
        assert is_better_match(TitleMatch(low, 0.2 + 1e-12), TitleMatch(high, 0.2))
        assert not is_better_match(TitleMatch(high, 0.2 - 1e-12), TitleMatch(low, 0.2))
