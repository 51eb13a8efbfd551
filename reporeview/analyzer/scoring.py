"""Overall Scoring and Classification Module"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Tuple

from reporeview.models import Badge, Category, PartialScore, SkillLevel

logger = logging.getLogger(__name__)

# Evaluated highest first with strict greater-than; first match wins
SKILL_LEVEL_BANDS: Tuple[Tuple[int, SkillLevel], ...] = (
    (90, SkillLevel.EXPERT),
    (75, SkillLevel.ADVANCED),
    (50, SkillLevel.INTERMEDIATE),
    (25, SkillLevel.BEGINNER),
)

BADGE_BANDS: Tuple[Tuple[int, Badge], ...] = (
    (80, Badge.TROPHY),
    (60, Badge.SILVER),
    (40, Badge.BRONZE),
)


class ScoringEngine:
    """Normalize partial scores and classify the result"""

    @staticmethod
    def overall_score(partials: Iterable[PartialScore]) -> int:
        """Return clamp(round(100 * sum(score) / sum(max_score)), 0, 100)."""
        partials = list(partials)
        total = sum(p.score for p in partials)
        total_max = sum(p.max_score for p in partials)
        if total_max == 0:
            return 0

        normalized = Decimal(100 * total) / Decimal(total_max)
        rounded = int(normalized.quantize(Decimal(1), rounding=ROUND_HALF_UP))
        return max(0, min(100, rounded))

    @staticmethod
    def skill_level(score: int) -> SkillLevel:
        for threshold, level in SKILL_LEVEL_BANDS:
            if score > threshold:
                return level
        return SkillLevel.NOVICE

    @staticmethod
    def badge(score: int) -> Badge:
        for threshold, badge in BADGE_BANDS:
            if score > threshold:
                return badge
        return Badge.SEEDLING

    @classmethod
    def score_partials(cls, partials: Mapping[Category, PartialScore]) -> Tuple[int, SkillLevel, Badge]:
        """Aggregate joined analyzer results and classify them"""
        overall = cls.overall_score(partials.values())
        level = cls.skill_level(overall)
        badge = cls.badge(overall)
        logger.info(f"Overall score {overall}/100 ({level.value} {badge.value})")
        return overall, level, badge
