"""Dependency vulnerability audit adapter (npm audit)"""

import json
import logging
from pathlib import Path
from typing import Optional

from reporeview.facts.process import ToolError, run_tool
from reporeview.models import AuditSummary, PackageManifest, ToolOutcome

import config

logger = logging.getLogger(__name__)


def parse_npm_audit_output(stdout: str) -> AuditSummary:
    """Parse ``npm audit --json`` output into severity counts."""
    try:
        data = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise ToolError(f"unparseable npm audit output: {e}")
    if not isinstance(data, dict):
        raise ToolError("unexpected npm audit output")

    error = data.get("error")
    if error:
        summary = error.get("summary") if isinstance(error, dict) else str(error)
        raise ToolError(f"npm audit error: {summary or error}")

    counts = data.get("metadata", {}).get("vulnerabilities")
    if not isinstance(counts, dict):
        raise ToolError("npm audit output has no vulnerability metadata")

    return AuditSummary(
        critical=int(counts.get("critical", 0)),
        high=int(counts.get("high", 0)),
        moderate=int(counts.get("moderate", 0)),
        low=int(counts.get("low", 0)),
    )


class AuditTool:
    """Audits npm dependencies of a working copy"""

    def __init__(self, timeout: float = None):
        self.timeout = config.TOOL_TIMEOUT if timeout is None else timeout

    async def audit(self, root: Path, manifest: Optional[PackageManifest]) -> Optional[ToolOutcome[AuditSummary]]:
        """Return None when there is no npm manifest to audit."""
        if manifest is None or manifest.path != "package.json":
            return None

        try:
            result = await run_tool(["npm", "audit", "--json", "--package-lock-only"], root, self.timeout)
            summary = parse_npm_audit_output(result.stdout)
        except ToolError as e:
            logger.warning(f"Dependency audit failed: {e}")
            return ToolOutcome.failure(str(e))

        logger.info(
            f"npm audit: {summary.critical} critical, {summary.high} high, {summary.moderate} moderate"
        )
        return ToolOutcome.success(summary)
