"""Fact provider backed by a temporary local clone"""

import asyncio
import logging
import shutil
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from reporeview.errors import InfrastructureError, NotFoundError
from reporeview.facts.audit import AuditTool
from reporeview.facts.complexity import ComplexityTool
from reporeview.facts.filesystem import find_readme, load_manifest, read_text, walk_repository
from reporeview.facts.history import HistoryReader
from reporeview.facts.lint import LintEngine
from reporeview.facts.process import ProcessResult, ToolError, run_tool
from reporeview.facts.provider import Clock, FactProvider
from reporeview.facts.repo_ref import RepoRef
from reporeview.models import FactSource, RepositoryFacts

import config

logger = logging.getLogger(__name__)

NOT_FOUND_MARKERS = (
    "repository not found",
    "not found",
    "could not read username",
    "authentication failed",
)


class CloneFactProvider(FactProvider):
    """Clones the repository into a scoped working area and inspects it"""

    def __init__(
        self,
        work_dir: Path = None,
        clone_depth: int = None,
        clone_timeout: float = None,
        max_files: int = None,
        max_file_size: int = None,
        lint_engine: LintEngine = None,
        audit_tool: AuditTool = None,
        complexity_tool: ComplexityTool = None,
        history_reader: HistoryReader = None,
        clock: Clock = None,
    ):
        super().__init__(clock)
        self.work_dir = Path(config.WORK_DIR if work_dir is None else work_dir)
        self.clone_depth = config.CLONE_DEPTH if clone_depth is None else clone_depth
        self.clone_timeout = config.CLONE_TIMEOUT if clone_timeout is None else clone_timeout
        self.max_files = config.MAX_FILES if max_files is None else max_files
        self.max_file_size = config.MAX_FILE_SIZE if max_file_size is None else max_file_size
        self.lint_engine = lint_engine or LintEngine()
        self.audit_tool = audit_tool or AuditTool()
        self.complexity_tool = complexity_tool or ComplexityTool()
        self.history_reader = history_reader or HistoryReader()

    def _acquire_work_area(self) -> Path:
        try:
            self.work_dir.mkdir(parents=True, exist_ok=True)
            return Path(tempfile.mkdtemp(prefix="reporeview_", dir=self.work_dir))
        except OSError as e:
            logger.error(f"Could not create working area in {self.work_dir}: {e}")
            raise InfrastructureError(details=f"could not create working area: {e}")

    def _release_work_area(self, work_area: Path):
        shutil.rmtree(work_area, ignore_errors=True)
        if work_area.exists():
            logger.warning(f"Working area was not fully removed: {work_area}")
        else:
            logger.info(f"Cleaned up working area: {work_area}")

    async def _run_clone(self, ref: RepoRef, dest: Path) -> ProcessResult:
        args = ["git", "clone", "--single-branch"]
        if self.clone_depth > 0:
            args += ["--depth", str(self.clone_depth)]
        args += ["--", ref.clone_url, str(dest)]
        return await run_tool(
            args,
            cwd=dest.parent,
            timeout=self.clone_timeout,
            env={"GIT_TERMINAL_PROMPT": "0"},
        )

    async def clone(self, ref: RepoRef, dest: Path):
        """Clone ``ref`` into ``dest``.

        The git child is killed on timeout or cancellation, so nothing keeps
        writing into the working area once ``collect`` starts releasing it.
        """
        logger.info(f"Cloning {ref} into {dest}")
        try:
            result = await self._run_clone(ref, dest)
        except ToolError as e:
            logger.error(f"Git clone failed: {e}")
            raise InfrastructureError("Failed to clone repository", details=str(e))

        if result.returncode != 0:
            stderr = result.stderr.lower()
            if any(marker in stderr for marker in NOT_FOUND_MARKERS):
                raise NotFoundError(details=ref.full_name)
            logger.error(f"Git clone failed: {result.stderr.strip()}")
            raise InfrastructureError(
                "Failed to clone repository",
                details=result.stderr.strip()[:500] or f"git exited with {result.returncode}",
            )

    async def gather(self, repo_path: Path) -> RepositoryFacts:
        """Build a facts snapshot from a local working copy."""
        captured_at = self.clock()
        files = await asyncio.to_thread(walk_repository, repo_path, self.max_files)
        logger.info(f"Discovered {len(files)} files in {repo_path.name}")

        readme_name = find_readme(files)
        readme = read_text(repo_path / readme_name, self.max_file_size) if readme_name else None
        manifest = load_manifest(repo_path, files, self.max_file_size)

        history, lint, audit, complexity = await asyncio.gather(
            self.history_reader.log(repo_path),
            self.lint_engine.lint(repo_path, files),
            self.audit_tool.audit(repo_path, manifest),
            self.complexity_tool.measure_repository(repo_path, files),
        )

        return RepositoryFacts(
            source=FactSource.CLONE,
            captured_at=captured_at,
            files=files,
            readme=readme,
            manifest=manifest,
            history=history,
            lint=lint,
            audit=audit,
            complexity=complexity,
        )

    @asynccontextmanager
    async def collect(self, ref: RepoRef) -> AsyncIterator[RepositoryFacts]:
        work_area = self._acquire_work_area()
        try:
            repo_path = work_area / "repo"
            await self.clone(ref, repo_path)
            yield await self.gather(repo_path)
        finally:
            self._release_work_area(work_area)
