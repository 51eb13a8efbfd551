"""RepoReview Configuration"""

import os
import tempfile
from pathlib import Path

# Base paths
BASE_DIR = Path(__file__).parent
WORK_DIR = Path(os.getenv("WORK_DIR", tempfile.gettempdir()))

# Web server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
VERSION = "0.1.0"

# Fact provider: clone | github
FACT_PROVIDER = os.getenv("FACT_PROVIDER", "clone")
ALLOWED_HOSTS = tuple(
    host.strip().lower()
    for host in os.getenv("ALLOWED_HOSTS", "github.com,gitlab.com,bitbucket.org").split(",")
    if host.strip()
)

# GitHub API settings
GITHUB_API_BASE = os.getenv("GITHUB_API_BASE", "https://api.github.com")
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")
GITHUB_PAGE_SIZE = int(os.getenv("GITHUB_PAGE_SIZE", "100"))

# Collection limits
CLONE_DEPTH = int(os.getenv("CLONE_DEPTH", "500"))
MAX_COMMITS = int(os.getenv("MAX_COMMITS", "1000"))
MAX_FILES = int(os.getenv("MAX_FILES", "20000"))
COMPLEXITY_MAX_FILES = int(os.getenv("COMPLEXITY_MAX_FILES", "500"))
MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", "500000"))  # bytes

# Deadlines (seconds)
TOOL_TIMEOUT = float(os.getenv("TOOL_TIMEOUT", "120"))
CLONE_TIMEOUT = float(os.getenv("CLONE_TIMEOUT", "300"))
ANALYZER_TIMEOUT = float(os.getenv("ANALYZER_TIMEOUT", "10"))
FACT_PROVIDER_TIMEOUT = float(os.getenv("FACT_PROVIDER_TIMEOUT", "600"))

# Display bindings: legacy | distinct
DISPLAY_BINDING_MODE = os.getenv("DISPLAY_BINDING_MODE", "legacy")

# Lint engine settings
LINT_ENVS = tuple(
    env.strip() for env in os.getenv("LINT_ENVS", "browser,node,es2021").split(",") if env.strip()
)
LINT_RULE_SET = os.getenv("LINT_RULE_SET", "eslint:recommended")
LINT_ECMA_VERSION = int(os.getenv("LINT_ECMA_VERSION", "12"))
LINT_SOURCE_TYPE = os.getenv("LINT_SOURCE_TYPE", "module")
LINT_PYTHON_RULES = tuple(
    rule.strip() for rule in os.getenv("LINT_PYTHON_RULES", "E,F,W").split(",") if rule.strip()
)

# Scoring penalties
LINT_ERROR_PENALTY = float(os.getenv("LINT_ERROR_PENALTY", "2"))
LINT_WARNING_PENALTY = float(os.getenv("LINT_WARNING_PENALTY", "0.5"))
AUDIT_SEVERITY_PENALTIES = {
    "critical": 10,
    "high": 5,
    "moderate": 2,
}
