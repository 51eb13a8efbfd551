"""Repository reference parsing"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from reporeview.errors import InputError

import config

SEGMENT = re.compile(r"^[A-Za-z0-9_.-]+$")
SCP_FORM = re.compile(r"^git@(?P<host>[^:/]+):(?P<path>.+)$")


@dataclass(frozen=True)
class RepoRef:
    """A repository identified as <host>/<owner>/<name>"""
    host: str
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def clone_url(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.name}.git"

    def __str__(self) -> str:
        return f"{self.host}/{self.full_name}"


def parse_repo_url(url: Optional[str], allowed_hosts: Iterable[str] = None) -> RepoRef:
    """Parse a repository URL into a RepoRef.

    Accepts ``https://host/owner/repo(.git)``, ``host/owner/repo`` and
    ``git@host:owner/repo.git``. Raises InputError when the reference is
    missing, malformed, or names a host that is not allowed.
    """
    allowed = tuple(h.lower() for h in (allowed_hosts if allowed_hosts is not None else config.ALLOWED_HOSTS))

    if url is None or not isinstance(url, str) or not url.strip():
        raise InputError("Repository URL is required")

    raw = url.strip().split("#", 1)[0].split("?", 1)[0]

    scp = SCP_FORM.match(raw)
    if scp:
        host, path = scp.group("host"), scp.group("path")
    else:
        for prefix in ("https://", "http://", "ssh://git@", "git://"):
            if raw.lower().startswith(prefix):
                raw = raw[len(prefix):]
                break
        host, _, path = raw.partition("/")

    host = host.lower()
    if host.startswith("www."):
        host = host[4:]

    parts = [part for part in path.split("/") if part]
    if len(parts) < 2:
        raise InputError("Invalid repository URL format", details="Expected <host>/<owner>/<repo>")

    owner, name = parts[0], parts[1]
    if name.endswith(".git"):
        name = name[:-4]

    if not SEGMENT.match(owner) or not SEGMENT.match(name) or name in {".", ".."}:
        raise InputError("Invalid repository URL format", details=f"Unrecognized owner/repo: {owner}/{name}")

    if host not in allowed:
        raise InputError("Unsupported repository host", details=f"{host} is not one of: {', '.join(allowed)}")

    return RepoRef(host=host, owner=owner, name=name)
