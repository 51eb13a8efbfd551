"""Base contract for category analyzers"""

from abc import ABC, abstractmethod

from reporeview.models import Category, PartialScore, RepositoryFacts


class Analyzer(ABC):
    """Deterministic function of a facts snapshot to one PartialScore.

    Analyzers must not mutate the facts they receive and must not depend on
    one another.
    """

    category: Category
    max_score: int

    @abstractmethod
    def analyze(self, facts: RepositoryFacts) -> PartialScore:
        """Score the snapshot for this analyzer's category."""

    def _result(self, score: float, issues) -> PartialScore:
        """Clamp into [0, max_score] and truncate to an integer score."""
        bounded = max(0, min(self.max_score, int(score)))
        return PartialScore(score=bounded, max_score=self.max_score, issues=tuple(issues))
