"""Repository facts snapshot consumed by every analyzer"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, Optional, Tuple, TypeVar

FACTS_SCHEMA_VERSION = 1

T = TypeVar("T")


class FactSource(str, Enum):
    """Fact provider variant that produced a snapshot"""
    CLONE = "clone"
    HOSTING_API = "hosting_api"


@dataclass(frozen=True)
class ToolOutcome(Generic[T]):
    """Result of an external tool: a value or an error message, never both"""
    value: Optional[T] = None
    error: Optional[str] = None

    def __post_init__(self):
        if (self.value is None) == (self.error is None):
            raise ValueError("ToolOutcome needs exactly one of value or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ToolOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "ToolOutcome[T]":
        return cls(error=error or "unknown error")


@dataclass(frozen=True)
class PackageManifest:
    """Parsed package manifest (package.json, requirements.txt, pyproject.toml...)"""
    path: str
    dependencies: Tuple[str, ...] = ()
    dev_dependencies: Tuple[str, ...] = ()

    @property
    def all_dependencies(self) -> Tuple[str, ...]:
        return self.dependencies + self.dev_dependencies


@dataclass(frozen=True)
class CommitLog:
    """Commit history as read from version control"""
    count: int
    messages: Tuple[str, ...] = ()
    timestamps: Tuple[datetime, ...] = ()

    @property
    def average_message_length(self) -> float:
        if not self.messages:
            return 0.0
        return sum(len(message) for message in self.messages) / len(self.messages)


@dataclass(frozen=True)
class LintSummary:
    error_count: int = 0
    warning_count: int = 0


@dataclass(frozen=True)
class AuditSummary:
    """Dependency vulnerability counts by severity"""
    critical: int = 0
    high: int = 0
    moderate: int = 0
    low: int = 0


@dataclass(frozen=True)
class ComplexityMeasurement:
    path: str
    cyclomatic: float


@dataclass(frozen=True)
class RepositoryMetadata:
    """Repository metadata as reported by a hosting API"""
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    subscribers: int = 0
    open_issues: int = 0
    open_pull_requests: int = 0
    updated_at: Optional[datetime] = None
    description: str = ""
    has_wiki: bool = False
    has_readme: bool = False
    size_kb: int = 0
    languages: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RepositoryFacts:
    """Immutable snapshot of externally observed repository data.

    Optional fields are ``None`` when the provider variant that built the
    snapshot does not gather them. Tool-backed fields carry a ``ToolOutcome``
    so analyzers can tell "not gathered" apart from "tool failed".
    """
    source: FactSource
    captured_at: datetime
    files: Tuple[str, ...] = ()
    readme: Optional[str] = None
    manifest: Optional[PackageManifest] = None
    history: Optional[ToolOutcome[CommitLog]] = None
    lint: Optional[ToolOutcome[LintSummary]] = None
    audit: Optional[ToolOutcome[AuditSummary]] = None
    complexity: Optional[ToolOutcome[Tuple[ComplexityMeasurement, ...]]] = None
    metadata: Optional[RepositoryMetadata] = None
    schema_version: int = field(default=FACTS_SCHEMA_VERSION)

    def __post_init__(self):
        if self.captured_at.tzinfo is None:
            raise ValueError("captured_at must be timezone-aware")
