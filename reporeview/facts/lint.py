"""Lint engine adapter (ESLint for JavaScript, Ruff for Python)"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Tuple

from reporeview.facts.filesystem import IGNORED_DIRS
from reporeview.facts.process import ToolError, run_tool
from reporeview.models import LintSummary, ToolOutcome

import config

logger = logging.getLogger(__name__)

ESLINT_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs")
RUFF_EXTENSIONS = (".py",)
ESLINT_CONFIG_NAME = ".reporeview-eslintrc.json"


@dataclass(frozen=True)
class LintConfig:
    """Lint options passed to the engine instead of inline literals"""
    envs: Tuple[str, ...] = ("browser", "node", "es2021")
    rule_set: str = "eslint:recommended"
    ecma_version: int = 12
    source_type: str = "module"
    python_rules: Tuple[str, ...] = ("E", "F", "W")

    @classmethod
    def from_config(cls) -> "LintConfig":
        return cls(
            envs=config.LINT_ENVS,
            rule_set=config.LINT_RULE_SET,
            ecma_version=config.LINT_ECMA_VERSION,
            source_type=config.LINT_SOURCE_TYPE,
            python_rules=config.LINT_PYTHON_RULES,
        )

    def eslint_config(self) -> dict:
        return {
            "root": True,
            "extends": [self.rule_set],
            "env": {env: True for env in self.envs},
            "parserOptions": {
                "ecmaVersion": self.ecma_version,
                "sourceType": self.source_type,
            },
        }


def parse_eslint_output(stdout: str) -> LintSummary:
    try:
        results = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise ToolError(f"unparseable eslint output: {e}")
    if not isinstance(results, list):
        raise ToolError("unexpected eslint output")

    errors = sum(int(item.get("errorCount", 0)) for item in results)
    warnings = sum(int(item.get("warningCount", 0)) for item in results)
    return LintSummary(error_count=errors, warning_count=warnings)


def _is_ruff_error(code) -> bool:
    # Syntax errors have no code; pyflakes (F) and E9xx are real defects
    return not code or code.startswith("F") or code.startswith("E9")


def parse_ruff_output(stdout: str) -> LintSummary:
    try:
        diagnostics = json.loads(stdout or "[]")
    except json.JSONDecodeError as e:
        raise ToolError(f"unparseable ruff output: {e}")
    if not isinstance(diagnostics, list):
        raise ToolError("unexpected ruff output")

    errors = sum(1 for item in diagnostics if _is_ruff_error(item.get("code")))
    return LintSummary(error_count=errors, warning_count=len(diagnostics) - errors)


class LintEngine:
    """Runs the configured linters over a working copy"""

    def __init__(self, lint_config: LintConfig = None, timeout: float = None):
        self.lint_config = lint_config or LintConfig.from_config()
        self.timeout = config.TOOL_TIMEOUT if timeout is None else timeout

    async def _eslint(self, root: Path) -> LintSummary:
        config_path = root / ESLINT_CONFIG_NAME
        config_path.write_text(json.dumps(self.lint_config.eslint_config()), encoding="utf-8")

        args: List[str] = [
            "eslint", "--no-eslintrc", "-c", str(config_path),
            "--format", "json", "--no-error-on-unmatched-pattern",
            "--ext", ",".join(ESLINT_EXTENSIONS),
        ]
        for directory in sorted(IGNORED_DIRS):
            args.extend(["--ignore-pattern", f"{directory}/"])
        args.append(".")

        result = await run_tool(args, root, self.timeout, env={"ESLINT_USE_FLAT_CONFIG": "false"})
        if result.returncode not in (0, 1):
            raise ToolError(f"eslint exited with {result.returncode}: {result.stderr.strip()[:200]}")
        return parse_eslint_output(result.stdout)

    async def _ruff(self, root: Path) -> LintSummary:
        args = [
            "ruff", "check", "--output-format", "json", "--no-cache", "--exit-zero",
            "--select", ",".join(self.lint_config.python_rules), ".",
        ]
        result = await run_tool(args, root, self.timeout)
        if result.returncode != 0:
            raise ToolError(f"ruff exited with {result.returncode}: {result.stderr.strip()[:200]}")
        return parse_ruff_output(result.stdout)

    async def lint(self, root: Path, files: Iterable[str]) -> ToolOutcome[LintSummary]:
        """Lint every supported language present; any engine failure degrades the whole result."""
        suffixes = {PurePosixPath(path).suffix.lower() for path in files}
        runners = []
        if suffixes.intersection(ESLINT_EXTENSIONS):
            runners.append(self._eslint)
        if suffixes.intersection(RUFF_EXTENSIONS):
            runners.append(self._ruff)

        if not runners:
            return ToolOutcome.failure("no files in a supported lint language")

        try:
            summaries = [await runner(root) for runner in runners]
        except (ToolError, OSError) as e:
            logger.warning(f"Lint engine failed: {e}")
            return ToolOutcome.failure(str(e))

        return ToolOutcome.success(LintSummary(
            error_count=sum(s.error_count for s in summaries),
            warning_count=sum(s.warning_count for s in summaries),
        ))
