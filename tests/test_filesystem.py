"""Tests for file discovery and manifest parsing."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from reporeview.facts.filesystem import (
    detect_language,
    find_manifest,
    find_readme,
    has_source_dir,
    is_test_path,
    load_manifest,
    parse_manifest,
    read_text,
    source_files,
    test_files as collect_test_files,
    walk_repository,
)


def write_tree(root: Path, files: dict) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


class TestWalkRepository:
    def test_skips_ignored_directories(self, tmp_path):
        write_tree(tmp_path, {
            "README.md": "# hi",
            "src/app.js": "",
            "node_modules/left-pad/index.js": "",
            ".git/HEAD": "ref: refs/heads/main",
            "pkg/__pycache__/mod.pyc": "",
            "pkg/mod.py": "",
        })

        files = walk_repository(tmp_path, max_files=100)

        assert files == ("README.md", "pkg/mod.py", "src/app.js")

    def test_respects_file_limit(self, tmp_path):
        write_tree(tmp_path, {f"f{i}.txt": "" for i in range(10)})

        assert len(walk_repository(tmp_path, max_files=3)) == 3

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_skips_symlinks(self, tmp_path):
        write_tree(tmp_path, {"real/a.py": ""})
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)

        assert walk_repository(tmp_path, max_files=100) == ("real/a.py",)

    def test_empty_directory(self, tmp_path):
        assert walk_repository(tmp_path, max_files=100) == ()


class TestClassification:
    @pytest.mark.parametrize(
        "path,expected",
        [("src/app.py", "Python"), ("web/App.TSX", "TypeScript"), ("README.md", None), ("Makefile", None)],
    )
    def test_detect_language(self, path, expected):
        assert detect_language(path) == expected

    @pytest.mark.parametrize(
        "path",
        [
            "tests/test_app.py",
            "app/tests/helpers.py",
            "src/app.test.js",
            "src/app.spec.ts",
            "pkg/server_test.go",
            "src/test_util.py",
            "__tests__/App.js",
            "src/main/java/AppTest.java",
        ],
    )
    def test_test_paths(self, path):
        assert is_test_path(path)

    @pytest.mark.parametrize("path", ["src/app.py", "src/contest.py", "lib/testing_tools.py"])
    def test_non_test_paths(self, path):
        assert not is_test_path(path)

    def test_test_files_are_source_files(self):
        files = ["tests/fixture.json", "tests/test_a.py", "src/a.py", "README.md"]

        assert source_files(files) == ["tests/test_a.py", "src/a.py"]
        assert collect_test_files(files) == ["tests/test_a.py"]

    def test_has_source_dir(self):
        assert has_source_dir(["src/app.py"])
        assert has_source_dir(["lib/util.rb"])
        assert not has_source_dir(["src", "main.py", "docs/src.md"])

    def test_find_manifest_priority(self):
        assert find_manifest(["requirements.txt", "package.json"]) == "package.json"
        assert find_manifest(["sub/package.json"]) is None

    def test_find_readme(self):
        assert find_readme(["docs/README.md", "readme.rst"]) == "readme.rst"
        assert find_readme(["docs/README.md"]) is None


class TestParseManifest:
    def test_package_json(self):
        content = json.dumps({"dependencies": {"react": "^18", "express": "^4"}, "devDependencies": {"jest": "^29"}})

        manifest = parse_manifest("package.json", content)

        assert manifest.dependencies == ("express", "react")
        assert manifest.dev_dependencies == ("jest",)

    def test_pyproject_pep621_and_poetry(self):
        content = """
[project]
dependencies = ["FastAPI>=0.100", "httpx[http2]"]

[project.optional-dependencies]
test = ["pytest>=7"]

[tool.poetry.dependencies]
python = "^3.11"
Django = "^5"
"""
        manifest = parse_manifest("pyproject.toml", content)

        assert manifest.dependencies == ("fastapi", "httpx", "django")
        assert manifest.dev_dependencies == ("pytest",)

    def test_requirements_txt(self):
        content = "# web\nflask==3.0\n\n-r dev.txt\nrequests>=2 ; python_version>'3'\n"

        manifest = parse_manifest("requirements.txt", content)

        assert manifest.dependencies == ("flask", "requests")

    def test_unparsed_kinds_yield_no_dependencies(self):
        manifest = parse_manifest("go.mod", "module example.com/x")

        assert manifest.path == "go.mod"
        assert manifest.all_dependencies == ()

    def test_invalid_package_json(self):
        with pytest.raises(ValueError):
            parse_manifest("package.json", "{not json")


class TestLoadManifest:
    def test_loads_top_level_manifest(self, tmp_path):
        write_tree(tmp_path, {"package.json": json.dumps({"dependencies": {"vue": "3"}})})

        manifest = load_manifest(tmp_path, ["package.json"], max_size=10_000)

        assert manifest.dependencies == ("vue",)

    def test_unparseable_manifest_is_absent(self, tmp_path):
        write_tree(tmp_path, {"package.json": "[1, 2"})

        assert load_manifest(tmp_path, ["package.json"], max_size=10_000) is None

    def test_oversized_manifest_is_absent(self, tmp_path):
        write_tree(tmp_path, {"package.json": json.dumps({"dependencies": {"vue": "3"}})})

        assert load_manifest(tmp_path, ["package.json"], max_size=5) is None

    def test_read_text_missing_file(self, tmp_path):
        assert read_text(tmp_path / "nope.md", max_size=100) is None
