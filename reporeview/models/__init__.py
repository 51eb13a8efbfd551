"""Data models for RepoReview"""

from reporeview.models.facts import (
    FACTS_SCHEMA_VERSION,
    AuditSummary,
    CommitLog,
    ComplexityMeasurement,
    FactSource,
    LintSummary,
    PackageManifest,
    RepositoryFacts,
    RepositoryMetadata,
    ToolOutcome,
)
from reporeview.models.report import (
    CATEGORY_ORDER,
    DISPLAY_BINDINGS,
    Badge,
    Category,
    PartialScore,
    Report,
    SkillLevel,
)

__all__ = [
    "FACTS_SCHEMA_VERSION",
    "AuditSummary",
    "CommitLog",
    "ComplexityMeasurement",
    "FactSource",
    "LintSummary",
    "PackageManifest",
    "RepositoryFacts",
    "RepositoryMetadata",
    "ToolOutcome",
    "CATEGORY_ORDER",
    "DISPLAY_BINDINGS",
    "Badge",
    "Category",
    "PartialScore",
    "Report",
    "SkillLevel",
]
