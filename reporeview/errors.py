"""Error taxonomy for analysis requests"""

from typing import Optional


class RepoReviewError(Exception):
    """Base exception for fatal request errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict:
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InputError(RepoReviewError):
    """Missing or malformed repository reference."""

    status_code = 400


class NotFoundError(RepoReviewError):
    """Repository does not exist or is not accessible."""

    status_code = 404

    def __init__(self, message: str = "Repository not found or is private", details: Optional[str] = None):
        super().__init__(message, details)


class RateLimitedError(RepoReviewError):
    """Upstream quota exhausted."""

    status_code = 429

    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        details: Optional[str] = None,
    ):
        super().__init__(message, details)


class InfrastructureError(RepoReviewError):
    """Clone, filesystem or upstream failure while acquiring facts."""

    status_code = 500

    def __init__(
        self,
        message: str = "Failed to analyze the repository. Please check the URL and try again.",
        details: Optional[str] = None,
    ):
        super().__init__(message, details)


class AnalyzerDegradation(Exception):
    """A tool or analyzer input could not be used; never fatal.

    Converted into a failed ToolOutcome or a degraded PartialScore plus one
    issue string before it reaches the pipeline.
    """
