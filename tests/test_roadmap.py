"""Tests for improvement roadmap generation."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from reporeview.analyzer import complexity, structure, tech_stack, testing
from reporeview.analyzer.roadmap import (
    CI_CD_RECOMMENDATION,
    FALLBACK_RECOMMENDATION,
    REC_ADD_MANIFEST,
    REC_ADD_README,
    REC_ADD_TESTS,
    REC_COMMITS,
    REC_EXPAND_DOCS,
    REC_LINT,
    REC_REFACTOR,
    REC_SECURITY,
    REC_SOURCE_DIR,
    REC_TOOLING,
    ROADMAP_RULES,
    generate_roadmap,
)
from reporeview.analyzer import documentation
from reporeview.models import CATEGORY_ORDER, PartialScore
from tests._fixtures.builders import MAX_SCORES, full_partials


class TestGenerateRoadmap:
    def test_fallback_when_nothing_triggers(self):
        assert generate_roadmap(full_partials()) == (FALLBACK_RECOMMENDATION,)

    def test_security_shortfall_adds_ci_cd(self):
        roadmap = generate_roadmap(full_partials(security=PartialScore(10, 20)))

        assert roadmap == (REC_SECURITY, CI_CD_RECOMMENDATION)

    def test_priority_order(self):
        partials = full_partials(
            complexity=PartialScore(5, 15, (complexity.ISSUE_HIGH_COMPLEXITY.format(average=14.2),)),
            code_quality=PartialScore(4, 20),
            version_control=PartialScore(5, 20),
            testing=PartialScore(0, 20, (testing.ISSUE_NO_TESTS,)),
            structure=PartialScore(10, 15, (structure.ISSUE_NO_SOURCE_DIR,)),
        )

        roadmap = generate_roadmap(partials)

        assert roadmap == (
            REC_SOURCE_DIR,
            REC_ADD_TESTS,
            REC_COMMITS,
            REC_LINT,
            REC_REFACTOR,
            CI_CD_RECOMMENDATION,
        )

    def test_shared_recommendations_appear_once(self):
        partials = full_partials(
            structure=PartialScore(5, 15, (structure.ISSUE_NO_README, structure.ISSUE_NO_MANIFEST)),
            documentation=PartialScore(0, 40, (documentation.ISSUE_NO_README,)),
            tech_stack=PartialScore(0, 15, (tech_stack.ISSUE_NO_MANIFEST,)),
        )

        roadmap = generate_roadmap(partials)

        assert roadmap.count(REC_ADD_README) == 1
        assert roadmap.count(REC_ADD_MANIFEST) == 1
        assert REC_EXPAND_DOCS in roadmap
        assert roadmap[-1] == CI_CD_RECOMMENDATION

    def test_unrecognized_stack(self):
        partials = full_partials(tech_stack=PartialScore(0, 15, (tech_stack.ISSUE_NO_RECOGNIZED,)))

        assert generate_roadmap(partials) == (REC_TOOLING, CI_CD_RECOMMENDATION)

    def test_missing_categories_are_skipped(self):
        assert generate_roadmap({}) == (FALLBACK_RECOMMENDATION,)

    @given(st.data())
    def test_non_empty_unique_and_fallback_iff_no_trigger(self, data):
        partials = {}
        for category in CATEGORY_ORDER:
            max_score = MAX_SCORES[category]
            partials[category] = PartialScore(
                data.draw(st.integers(min_value=0, max_value=max_score)),
                max_score,
                tuple(data.draw(st.lists(st.sampled_from([
                    structure.ISSUE_NO_README,
                    structure.ISSUE_NO_MANIFEST,
                    testing.ISSUE_NO_TESTS,
                    tech_stack.ISSUE_NO_RECOGNIZED,
                    complexity.ISSUE_HIGH_COMPLEXITY.format(average=25.0),
                ]), max_size=2))),
            )

        roadmap = generate_roadmap(partials)
        fired = any(rule.trigger(partials[rule.category]) for rule in ROADMAP_RULES)

        assert roadmap
        assert len(roadmap) == len(set(roadmap))
        assert (roadmap == (FALLBACK_RECOMMENDATION,)) == (not fired)
        if fired:
            assert roadmap[-1] == CI_CD_RECOMMENDATION
