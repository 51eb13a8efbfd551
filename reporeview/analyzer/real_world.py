"""Real-world applicability heuristic"""

from reporeview.analyzer.base import Analyzer
from reporeview.models import Category, PartialScore, RepositoryFacts


class RealWorldAnalyzer(Analyzer):
    """Coarse baseline score, nudged by hosting metadata when present.

    Recency is measured against ``facts.captured_at`` so results do not
    depend on the wall clock.
    """

    category = Category.REAL_WORLD
    max_score = 10
    baseline = 5

    def analyze(self, facts: RepositoryFacts) -> PartialScore:
        score = self.baseline
        metadata = facts.metadata
        if metadata is None:
            return self._result(score, [])

        if metadata.stars > 50:
            score += 2
        if metadata.forks > 10:
            score += 1

        if metadata.updated_at is not None:
            days_since_update = (facts.captured_at - metadata.updated_at).days
            if days_since_update < 30:
                score += 2
            elif days_since_update < 90:
                score += 1

        return self._result(score, [])
