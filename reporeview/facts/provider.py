"""Fact provider contract"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import AsyncContextManager, Callable

from reporeview.facts.repo_ref import RepoRef
from reporeview.models import RepositoryFacts

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FactProvider(ABC):
    """Gathers one immutable facts snapshot per request.

    ``collect`` is an async context manager: any working area it acquires is
    released when the block exits, on success and on error alike. Fatal
    problems raise NotFoundError, RateLimitedError or InfrastructureError.
    """

    def __init__(self, clock: Clock = None):
        self.clock = clock or utc_now

    @abstractmethod
    def collect(self, ref: RepoRef) -> AsyncContextManager[RepositoryFacts]:
        """Yield facts for ``ref``."""
