"""Static file discovery and manifest parsing for a working copy."""

from __future__ import annotations

import json
import logging
import re
import tomllib
from collections import deque
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Optional, Tuple

from reporeview.models import PackageManifest

logger = logging.getLogger(__name__)

IGNORED_DIRS = {
    ".git", "node_modules", "vendor", "dist", "build", ".venv", "venv",
    ".tox", ".pytest_cache", ".mypy_cache", ".ruff_cache", "__pycache__",
    ".idea", ".vscode", "coverage", ".next", "bower_components", "target",
}

LANGUAGE_EXTENSIONS = {
    ".py": "Python",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".vue": "JavaScript",
    ".php": "PHP",
    ".rb": "Ruby",
    ".go": "Go",
    ".rs": "Rust",
    ".java": "Java",
    ".kt": "Kotlin",
    ".scala": "Scala",
    ".swift": "Swift",
    ".c": "C",
    ".h": "C",
    ".cpp": "C++",
    ".cc": "C++",
    ".hpp": "C++",
    ".cs": "C#",
    ".groovy": "Groovy",
    ".sh": "Bash",
    ".bash": "Bash",
}

SOURCE_DIRS = {"src", "lib", "app", "server", "client", "pkg", "source"}

MANIFEST_FILES = (
    "package.json",
    "pyproject.toml",
    "requirements.txt",
    "Pipfile",
    "setup.py",
    "composer.json",
    "Gemfile",
    "go.mod",
    "Cargo.toml",
    "pom.xml",
    "build.gradle",
    "build.gradle.kts",
)

TEST_DIRS = {"test", "tests", "__tests__", "spec", "specs", "testing"}
TEST_NAME_PATTERN = re.compile(
    r"(^test_.*|.*_test\.[a-z]+$|.*\.(test|spec)\.[a-z]+$|^test[A-Z].*|.*Tests?\.[a-z]+$)"
)
REQUIREMENT_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*")


def detect_language(path: str) -> Optional[str]:
    return LANGUAGE_EXTENSIONS.get(PurePosixPath(path).suffix.lower())


def is_source_file(path: str) -> bool:
    return detect_language(path) is not None


def is_test_path(path: str) -> bool:
    pure = PurePosixPath(path)
    if any(part.lower() in TEST_DIRS for part in pure.parts[:-1]):
        return True
    return bool(TEST_NAME_PATTERN.match(pure.name))


def source_files(files: Iterable[str]) -> List[str]:
    return [path for path in files if is_source_file(path)]


def test_files(files: Iterable[str]) -> List[str]:
    return [path for path in source_files(files) if is_test_path(path)]


def has_source_dir(files: Iterable[str]) -> bool:
    return any(
        len(PurePosixPath(path).parts) > 1 and PurePosixPath(path).parts[0].lower() in SOURCE_DIRS
        for path in files
    )


def find_manifest(files: Iterable[str]) -> Optional[str]:
    """Return the highest-priority top-level manifest path, if any."""
    top_level = {path for path in files if "/" not in path}
    for name in MANIFEST_FILES:
        if name in top_level:
            return name
    return None


def find_readme(files: Iterable[str]) -> Optional[str]:
    candidates = sorted(
        path for path in files
        if "/" not in path and PurePosixPath(path).stem.lower() == "readme"
    )
    return candidates[0] if candidates else None


def walk_repository(root: Path, max_files: int) -> Tuple[str, ...]:
    """Collect repository-relative file paths with an explicit worklist."""
    files: List[str] = []
    pending = deque([root])

    while pending:
        directory = pending.popleft()
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {directory}: {e}")
            continue

        for entry in entries:
            if entry.is_symlink():
                continue
            if entry.is_dir():
                if entry.name not in IGNORED_DIRS:
                    pending.append(entry)
                continue
            files.append(entry.relative_to(root).as_posix())
            if len(files) >= max_files:
                logger.warning(f"File limit of {max_files} reached while walking {root}")
                return tuple(sorted(files))

    return tuple(sorted(files))


def read_text(path: Path, max_size: int) -> Optional[str]:
    """Read a text file, returning None when missing, oversized or unreadable."""
    try:
        if path.stat().st_size > max_size:
            logger.debug(f"Skipping oversized file {path}")
            return None
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        logger.debug(f"Unable to read {path}: {e}")
        return None


def _requirement_names(lines: Iterable[str]) -> Tuple[str, ...]:
    names = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "-")):
            continue
        match = REQUIREMENT_NAME.match(stripped)
        if match:
            names.append(match.group(0).lower())
    return tuple(names)


def _parse_package_json(content: str) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError("package.json is not an object")
    deps: Dict = data.get("dependencies") or {}
    dev_deps: Dict = data.get("devDependencies") or {}
    return tuple(sorted(deps)), tuple(sorted(dev_deps))


def _parse_pyproject(content: str) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    data = tomllib.loads(content)
    project = data.get("project", {})
    deps = list(_requirement_names(project.get("dependencies", [])))
    dev_deps: List[str] = []
    for extra in project.get("optional-dependencies", {}).values():
        dev_deps.extend(_requirement_names(extra))

    poetry = data.get("tool", {}).get("poetry", {})
    deps.extend(name.lower() for name in poetry.get("dependencies", {}) if name.lower() != "python")
    dev_deps.extend(name.lower() for name in poetry.get("dev-dependencies", {}))
    return tuple(deps), tuple(dev_deps)


def parse_manifest(name: str, content: str) -> PackageManifest:
    """Parse manifest content into dependency names.

    Raises ValueError (or a decoder error subclass of it) when the content is
    unparseable. Manifest kinds without a dedicated parser yield no
    dependencies.
    """
    if name == "package.json":
        deps, dev_deps = _parse_package_json(content)
    elif name == "pyproject.toml":
        deps, dev_deps = _parse_pyproject(content)
    elif name == "requirements.txt":
        deps, dev_deps = _requirement_names(content.splitlines()), ()
    else:
        deps, dev_deps = (), ()
    return PackageManifest(path=name, dependencies=deps, dev_dependencies=dev_deps)


def load_manifest(root: Path, files: Iterable[str], max_size: int) -> Optional[PackageManifest]:
    """Locate and parse the top-level manifest; None when absent or unreadable."""
    name = find_manifest(files)
    if name is None:
        return None

    content = read_text(root / name, max_size)
    if content is None:
        return None

    try:
        return parse_manifest(name, content)
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Unable to parse {name}: {e}")
        return None
