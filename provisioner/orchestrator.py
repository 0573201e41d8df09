"""Task provisioning pipeline.

One call to TaskOrchestrator.process runs the whole workflow for one request:

    authorize -> derive project id -> generate files -> create repo
    -> push files -> enable Pages -> resolve latest commit -> notify

Auth, create, push and resolve are fatal. Pages and notification failures are
logged and the pipeline carries on. Nothing is rolled back: a repo created
before a later fatal step stays on the provider for manual cleanup.
"""
import enum
import hashlib
import logging
import re
import threading
import time
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from .data_uri import decode_attachments
from .errors import AuthorizationError, NonFatalHostingError, ProviderError, ProvisioningError
from .generator import generate_app
from .gh_api import GitHubClient, ProviderClient, RepoRef
from .models import ProvisioningResult, TaskRequest
from .notifier import Notifier
from .security import verify_secret
from .settings import Settings

logger = logging.getLogger(__name__)

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9-]")

class Stage(enum.Enum):
    RECEIVED = "received"
    AUTHORIZED = "authorized"
    GENERATED = "generated"
    CREATED = "created"
    PUSHED = "pushed"
    HOSTING_ATTEMPTED = "hosting_attempted"
    RESOLVED = "resolved"
    NOTIFIED = "notified"

_ORDER = list(Stage)

def project_identifier(task: str, timestamp_ms: int) -> str:
    return f"{_UNSAFE_RE.sub('-', task)}-{timestamp_ms}"

class MonotonicClock:
    """Millisecond timestamps that strictly increase across calls, even within one millisecond."""

    def __init__(self, now: Optional[Callable[[], int]] = None):
        self._now = now or (lambda: int(time.time() * 1000))
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            ts = max(self._now(), self._last + 1)
            self._last = ts
            return ts

class ProvisioningRun:
    """Per-request state. Stages can only move forward one at a time."""

    def __init__(self, request: TaskRequest):
        self.request = request
        self.stage = Stage.RECEIVED
        self.project = ""
        self.files: Mapping[str, str] = MappingProxyType({})
        self.repo: Optional[RepoRef] = None
        self.commit_sha = ""

    def advance(self, stage: Stage) -> None:
        expected = _ORDER[_ORDER.index(self.stage) + 1] if self.stage is not Stage.NOTIFIED else None
        if stage is not expected:
            raise RuntimeError(f"cannot move from {self.stage.value} to {stage.value}")
        self.stage = stage

class TaskOrchestrator:
    def __init__(
        self,
        settings: Settings,
        provider: ProviderClient,
        notifier: Notifier,
        generate: Callable[..., dict] = generate_app,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.settings = settings
        self.provider = provider
        self.notifier = notifier
        self.generate = generate
        self.clock = clock or MonotonicClock()

    def process(self, req: TaskRequest) -> ProvisioningResult:
        run = ProvisioningRun(req)

        if not verify_secret(req.secret, self.settings.EXPECTED_SECRET):
            logger.warning("rejected task %s: invalid secret", req.task)
            raise AuthorizationError("Invalid secret")
        run.advance(Stage.AUTHORIZED)

        run.project = project_identifier(req.task, self.clock())
        logger.info("task %s round %d -> project %s", req.task, req.round, run.project)

        self._generate(run)
        self._create(run)
        self._push(run)
        self._enable_hosting(run)
        self._resolve(run)

        result = ProvisioningResult(
            email=req.email,
            task=req.task,
            round=req.round,
            nonce=req.nonce,
            repo_url=self.settings.repo_url(run.project),
            commit_sha=run.commit_sha,
            pages_url=self.settings.pages_url(run.project),
        )
        self._notify(run, result)
        logger.info("task %s provisioned: %s @ %s", req.task, result.repo_url, result.commit_sha)
        return result

    # ---- steps ----
    def _generate(self, run: ProvisioningRun) -> None:
        req = run.request
        seed = hashlib.sha1(f"{req.email}|{req.nonce}".encode()).hexdigest()[:8]
        files = self.generate(
            req.brief,
            decode_attachments(req.attachments),
            req.checks,
            seed=seed,
            author=self.settings.GITHUB_USERNAME,
        )
        run.files = MappingProxyType(dict(files))
        logger.info("generated %d files for %s: %s", len(run.files), run.project, list(run.files))
        run.advance(Stage.GENERATED)

    def _create(self, run: ProvisioningRun) -> None:
        try:
            run.repo = self.provider.create_repository(run.project, run.request.brief)
        except ProviderError as e:
            raise ProvisioningError("create", run.project, f"Repository creation failed: {e}") from e
        run.advance(Stage.CREATED)

    def _push(self, run: ProvisioningRun) -> None:
        for path, content in run.files.items():
            try:
                self.provider.write_file(run.repo, path, content)
            except ProviderError as e:
                raise ProvisioningError("push", run.project, f"Pushing {path} failed: {e}") from e
        run.advance(Stage.PUSHED)

    def _enable_hosting(self, run: ProvisioningRun) -> None:
        try:
            self.provider.enable_static_hosting(run.repo)
        except ProviderError as e:
            err = NonFatalHostingError(f"Could not enable Pages for {run.project}: {e}")
            logger.warning("%s", err)
        run.advance(Stage.HOSTING_ATTEMPTED)

    def _resolve(self, run: ProvisioningRun) -> None:
        try:
            commits = self.provider.list_commits(run.repo)
        except ProviderError as e:
            raise ProvisioningError("resolve", run.project, f"Listing commits failed: {e}") from e
        if not commits:
            raise ProvisioningError("resolve", run.project, f"Repository {run.project} has no commits")
        run.commit_sha = commits[0].sha
        run.advance(Stage.RESOLVED)

    def _notify(self, run: ProvisioningRun, result: ProvisioningResult) -> None:
        url = run.request.evaluation_url
        if not url:
            logger.info("no evaluation_url for %s, skipping notification", run.project)
        else:
            try:
                outcome = self.notifier.notify(url, result.model_dump())
                logger.info("notification for %s: delivered=%s attempts=%d", run.project, outcome.delivered, outcome.attempts)
            except Exception:
                # delivery must never change the provisioning outcome
                logger.exception("notifier raised for %s", run.project)
        run.advance(Stage.NOTIFIED)

def build_orchestrator(settings: Settings) -> TaskOrchestrator:
    settings.require_provider_credentials()
    return TaskOrchestrator(
        settings=settings,
        provider=GitHubClient(settings),
        notifier=Notifier(
            max_attempts=settings.NOTIFY_MAX_ATTEMPTS,
            base_delay=settings.NOTIFY_BASE_DELAY,
            timeout=settings.NOTIFY_TIMEOUT,
        ),
    )
