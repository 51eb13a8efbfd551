"""Git history reader"""

import asyncio
import logging
from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from reporeview.models import CommitLog, ToolOutcome

import config

logger = logging.getLogger(__name__)


class HistoryReader:
    """Reads commit messages and timestamps from a local repository"""

    def __init__(self, max_commits: int = None):
        self.max_commits = config.MAX_COMMITS if max_commits is None else max_commits

    def read(self, repo_path: Path) -> CommitLog:
        repo = Repo(repo_path)
        try:
            messages = []
            timestamps = []
            for commit in repo.iter_commits(max_count=self.max_commits):
                messages.append(commit.message.strip())
                timestamps.append(commit.committed_datetime)
            return CommitLog(count=len(messages), messages=tuple(messages), timestamps=tuple(timestamps))
        finally:
            repo.close()

    async def log(self, repo_path: Path) -> ToolOutcome[CommitLog]:
        try:
            commit_log = await asyncio.to_thread(self.read, repo_path)
        except (InvalidGitRepositoryError, NoSuchPathError):
            logger.error(f"Invalid git repository: {repo_path}")
            return ToolOutcome.failure("not a git repository")
        except (GitCommandError, ValueError) as e:
            # ValueError: a repository with no commits yet
            logger.warning(f"Error reading history for {repo_path}: {e}")
            return ToolOutcome.failure(str(e))

        logger.info(f"Read {commit_log.count} commits from {repo_path.name}")
        return ToolOutcome.success(commit_log)
