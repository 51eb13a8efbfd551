"""Tech stack recognition"""

from reporeview.analyzer.base import Analyzer
from reporeview.models import Category, PartialScore, RepositoryFacts

ISSUE_NO_MANIFEST = "Package manifest is missing or unreadable"
ISSUE_NO_RECOGNIZED = "No recognized frameworks or tooling in the dependencies"

RECOGNIZED_DEPENDENCIES = frozenset({
    # JavaScript / TypeScript
    "react", "vue", "@angular/core", "svelte", "next", "nuxt", "express",
    "koa", "fastify", "@nestjs/core", "typescript", "jest", "mocha",
    "vitest", "cypress", "eslint", "prettier", "webpack", "vite", "babel",
    "@babel/core", "redux", "graphql", "mongoose", "sequelize", "prisma",
    # Python
    "django", "flask", "fastapi", "pydantic", "sqlalchemy", "celery",
    "pytest", "numpy", "pandas", "requests", "httpx", "ruff", "black",
    "mypy", "scikit-learn", "torch", "tensorflow",
})


class TechStackAnalyzer(Analyzer):
    """Fixed points per recognized dependency, capped at max_score"""

    category = Category.TECH_STACK
    max_score = 15
    points_per_dependency = 3

    def analyze(self, facts: RepositoryFacts) -> PartialScore:
        if facts.manifest is None:
            return self._result(0, [ISSUE_NO_MANIFEST])

        recognized = {
            name.lower() for name in facts.manifest.all_dependencies
            if name.lower() in RECOGNIZED_DEPENDENCIES
        }
        if not recognized:
            return self._result(0, [ISSUE_NO_RECOGNIZED])

        return self._result(len(recognized) * self.points_per_dependency, [])
