"""Cyclomatic complexity measurement using lizard."""

import asyncio
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import lizard

from reporeview.facts.filesystem import read_text, source_files
from reporeview.models import ComplexityMeasurement, ToolOutcome

import config

logger = logging.getLogger(__name__)


def measure(path: str, content: str) -> Optional[float]:
    """Average cyclomatic complexity of the functions in one file.

    Returns None when lizard finds no functions, so such files do not count
    towards the repository average.
    """
    info = lizard.analyze_file.analyze_source_code(path, content)
    if not info.function_list:
        return None
    return sum(f.cyclomatic_complexity for f in info.function_list) / len(info.function_list)


class ComplexityTool:
    """Measures per-file complexity over a working copy"""

    def __init__(self, max_files: int = None, max_file_size: int = None, timeout: float = None):
        self.max_files = config.COMPLEXITY_MAX_FILES if max_files is None else max_files
        self.max_file_size = config.MAX_FILE_SIZE if max_file_size is None else max_file_size
        self.timeout = config.TOOL_TIMEOUT if timeout is None else timeout

    def _measure_all(self, root: Path, files: Iterable[str]) -> Tuple[ComplexityMeasurement, ...]:
        measurements: List[ComplexityMeasurement] = []
        for path in source_files(files)[: self.max_files]:
            content = read_text(root / path, self.max_file_size)
            if content is None:
                continue
            try:
                cyclomatic = measure(path, content)
            except Exception as e:
                logger.debug(f"Could not measure {path}: {e}")
                continue
            if cyclomatic is not None:
                measurements.append(ComplexityMeasurement(path=path, cyclomatic=cyclomatic))
        return tuple(measurements)

    async def measure_repository(
        self, root: Path, files: Iterable[str]
    ) -> ToolOutcome[Tuple[ComplexityMeasurement, ...]]:
        try:
            measurements = await asyncio.wait_for(
                asyncio.to_thread(self._measure_all, root, list(files)), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Complexity analysis timed out after {self.timeout:g}s")
            return ToolOutcome.failure(f"timed out after {self.timeout:g}s")
        except Exception as e:
            logger.error(f"Error in complexity analysis: {e}")
            return ToolOutcome.failure(str(e) or type(e).__name__)

        logger.info(f"Measured complexity for {len(measurements)} files")
        return ToolOutcome.success(measurements)
