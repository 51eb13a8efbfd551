"""Fact providers and external tool adapters"""

from reporeview.facts.clone import CloneFactProvider
from reporeview.facts.github import GitHubFactProvider
from reporeview.facts.provider import FactProvider
from reporeview.facts.repo_ref import RepoRef, parse_repo_url

import config

PROVIDERS = {
    "clone": CloneFactProvider,
    "github": GitHubFactProvider,
}


def get_fact_provider(name: str = None) -> FactProvider:
    """Instantiate the configured fact provider variant"""
    name = (name or config.FACT_PROVIDER).lower()
    try:
        return PROVIDERS[name]()
    except KeyError:
        raise ValueError(f"Unknown fact provider: {name}")


__all__ = [
    "CloneFactProvider",
    "GitHubFactProvider",
    "FactProvider",
    "RepoRef",
    "parse_repo_url",
    "get_fact_provider",
]
