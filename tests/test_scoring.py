"""Tests for aggregation and classification."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from reporeview.analyzer.scoring import ScoringEngine
from reporeview.models import Badge, Category, PartialScore, SkillLevel
from tests._fixtures.builders import full_partials


@st.composite
def partial_scores(draw) -> PartialScore:
    max_score = draw(st.integers(min_value=0, max_value=100))
    score = draw(st.integers(min_value=0, max_value=max_score))
    return PartialScore(score=score, max_score=max_score)


class TestOverallScore:
    def test_full_marks(self):
        assert ScoringEngine.overall_score(full_partials().values()) == 100

    def test_normalized_over_max_total(self):
        partials = [PartialScore(15, 20), PartialScore(30, 40)]

        assert ScoringEngine.overall_score(partials) == 75

    def test_rounds_half_up(self):
        # 1/8 = 12.5%
        assert ScoringEngine.overall_score([PartialScore(1, 8)]) == 13

    def test_zero_max_total(self):
        assert ScoringEngine.overall_score([PartialScore(0, 0)]) == 0
        assert ScoringEngine.overall_score([]) == 0

    @given(st.lists(partial_scores(), max_size=12))
    def test_bounded(self, partials):
        assert 0 <= ScoringEngine.overall_score(partials) <= 100

    @given(st.lists(partial_scores(), min_size=1, max_size=9), st.data())
    def test_monotonic_in_any_single_score(self, partials, data):
        """Raising one score never lowers the overall score."""
        index = data.draw(st.integers(min_value=0, max_value=len(partials) - 1))
        target = partials[index]
        raised_score = data.draw(st.integers(min_value=target.score, max_value=target.max_score))
        raised = list(partials)
        raised[index] = PartialScore(raised_score, target.max_score)

        assert ScoringEngine.overall_score(raised) >= ScoringEngine.overall_score(partials)


class TestClassification:
    @pytest.mark.parametrize(
        "score,level",
        [
            (100, SkillLevel.EXPERT),
            (91, SkillLevel.EXPERT),
            (90, SkillLevel.ADVANCED),
            (76, SkillLevel.ADVANCED),
            (75, SkillLevel.INTERMEDIATE),
            (51, SkillLevel.INTERMEDIATE),
            (50, SkillLevel.BEGINNER),
            (26, SkillLevel.BEGINNER),
            (25, SkillLevel.NOVICE),
            (0, SkillLevel.NOVICE),
        ],
    )
    def test_skill_level_boundaries(self, score, level):
        assert ScoringEngine.skill_level(score) == level

    @pytest.mark.parametrize(
        "score,badge",
        [
            (81, Badge.TROPHY),
            (80, Badge.SILVER),
            (61, Badge.SILVER),
            (60, Badge.BRONZE),
            (41, Badge.BRONZE),
            (40, Badge.SEEDLING),
            (0, Badge.SEEDLING),
        ],
    )
    def test_badge_boundaries(self, score, badge):
        assert ScoringEngine.badge(score) == badge

    def test_score_partials(self):
        partials = full_partials(security=PartialScore(10, 20), documentation=PartialScore(30, 40))

        overall, level, badge = ScoringEngine.score_partials(partials)

        # 155 / 175
        assert overall == 89
        assert level == SkillLevel.ADVANCED
        assert badge == Badge.TROPHY

    def test_score_partials_ignores_mapping_order(self):
        partials = full_partials(testing=PartialScore(5, 20))
        reversed_partials = dict(reversed(list(partials.items())))

        assert ScoringEngine.score_partials(partials) == ScoringEngine.score_partials(reversed_partials)
        assert Category.TESTING in reversed_partials
