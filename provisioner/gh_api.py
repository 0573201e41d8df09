import base64
import logging
from typing import Any, List, NamedTuple, Optional
from urllib.parse import quote

import requests

from .errors import ConfigurationError, ProviderError
from .settings import Settings

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"
USER_AGENT = "task-pages-provisioner/1.0"
MAX_DESCRIPTION = 350

class RepoRef(NamedTuple):
    owner: str
    name: str

class CommitRef(NamedTuple):
    sha: str
    message: str = ""

class ProviderClient:
    """Repository-hosting capabilities used by the orchestrator.

    Every method is one authenticated round-trip and raises ProviderError on
    failure. Implementations must not retry: a blind retry of create or write
    can leave duplicate repositories or commits behind.
    """

    def create_repository(self, name: str, description: str) -> RepoRef:
        raise NotImplementedError

    def write_file(self, repo: RepoRef, path: str, content: str) -> None:
        raise NotImplementedError

    def enable_static_hosting(self, repo: RepoRef) -> None:
        raise NotImplementedError

    def list_commits(self, repo: RepoRef) -> List[CommitRef]:
        """Most recent first."""
        raise NotImplementedError

def _description(brief: str) -> str:
    # the API rejects control characters and long descriptions
    return " ".join(brief.split())[:MAX_DESCRIPTION]

class GitHubClient(ProviderClient):
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        if not settings.GITHUB_TOKEN:
            raise ConfigurationError("GITHUB_TOKEN required")
        if not settings.GITHUB_USERNAME:
            raise ConfigurationError("GITHUB_USERNAME required")
        self.owner = settings.GITHUB_USERNAME
        self.api_base = settings.GITHUB_API_BASE.rstrip("/")
        self.branch = settings.DEFAULT_BRANCH
        self.pages_path = settings.PAGES_BUILD_PATH
        self.timeout = settings.PROVIDER_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {settings.GITHUB_TOKEN}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": USER_AGENT,
        })

    def _request(self, operation: str, method: str, path: str, **kwargs) -> Any:
        url = f"{self.api_base}{path}"
        logger.info("%s: %s %s", operation, method, path)
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ProviderError(operation, f"{type(e).__name__}: {e}") from e
        if not 200 <= r.status_code < 300:
            raise ProviderError(operation, f"HTTP {r.status_code}: {_error_message(r)}", status=r.status_code)
        if r.status_code == 204 or not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise ProviderError(operation, f"malformed response: {e}", status=r.status_code) from e

    def create_repository(self, name: str, description: str) -> RepoRef:
        data = self._request("create_repository", "POST", "/user/repos", json={
            "name": name,
            "description": _description(description),
            "private": False,
            "has_issues": True,
            "has_projects": True,
            "has_wiki": True,
            "auto_init": False,
        })
        try:
            owner = ((data or {}).get("owner") or {}).get("login") or self.owner
            return RepoRef(owner, (data or {}).get("name") or name)
        except (AttributeError, TypeError) as e:
            raise ProviderError("create_repository", f"malformed response: {e}") from e

    def write_file(self, repo: RepoRef, path: str, content: str) -> None:
        self._request(
            "write_file", "PUT",
            f"/repos/{repo.owner}/{repo.name}/contents/{quote(path)}",
            json={
                "message": f"Add {path}",
                "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            },
        )

    def enable_static_hosting(self, repo: RepoRef) -> None:
        self._request(
            "enable_static_hosting", "POST",
            f"/repos/{repo.owner}/{repo.name}/pages",
            json={"source": {"branch": self.branch, "path": self.pages_path}},
        )

    def list_commits(self, repo: RepoRef) -> List[CommitRef]:
        data = self._request("list_commits", "GET", f"/repos/{repo.owner}/{repo.name}/commits") or []
        try:
            return [CommitRef(c["sha"], (c.get("commit") or {}).get("message", "")) for c in data]
        except (AttributeError, KeyError, TypeError) as e:
            raise ProviderError("list_commits", f"malformed response: {e!r}") from e


def _error_message(r: requests.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text[:200]
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return r.text[:200]
