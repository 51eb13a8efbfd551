"""Async subprocess invocation for external analysis tools"""

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence

from reporeview.errors import AnalyzerDegradation

logger = logging.getLogger(__name__)


class ToolError(AnalyzerDegradation):
    """An external tool could not be run or produced unusable output"""


@dataclass(frozen=True)
class ProcessResult:
    returncode: int
    stdout: str
    stderr: str


async def _terminate(process: asyncio.subprocess.Process):
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


async def run_tool(
    args: Sequence[str],
    cwd: Path,
    timeout: float,
    env: Optional[Dict[str, str]] = None,
) -> ProcessResult:
    """Run a command and capture its output.

    A non-zero exit status is returned, not raised: several tools (eslint,
    npm audit) exit non-zero when they find problems. Missing binaries and
    timeouts raise ToolError.
    """
    full_env = dict(os.environ)
    if env:
        full_env.update(env)

    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            cwd=str(cwd),
            env=full_env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        raise ToolError(f"{args[0]} is not installed")
    except OSError as e:
        raise ToolError(f"could not start {args[0]}: {e}")

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _terminate(process)
        raise ToolError(f"{args[0]} timed out after {timeout:g}s")
    except BaseException:
        # Cancelled from outside: the child must not outlive its working area
        await _terminate(process)
        raise

    logger.debug(f"{args[0]} exited with {process.returncode}")
    return ProcessResult(
        returncode=process.returncode,
        stdout=stdout.decode("utf-8", errors="ignore"),
        stderr=stderr.decode("utf-8", errors="ignore"),
    )
