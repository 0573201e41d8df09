import datetime
import logging
import os
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from .errors import AuthorizationError, ProvisioningError
from .logs import tail
from .models import TaskRequest, TaskResponse
from .orchestrator import TaskOrchestrator, build_orchestrator
from .settings import Settings

logger = logging.getLogger(__name__)

def _envelope(status_code: int, body: TaskResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", exclude_none=True))

def create_app(settings: Optional[Settings] = None, orchestrator: Optional[TaskOrchestrator] = None) -> FastAPI:
    settings = settings or Settings()
    orchestrator = orchestrator or build_orchestrator(settings)

    app = FastAPI(title="Task to GitHub Pages Provisioner")
    app.state.settings = settings
    app.state.orchestrator = orchestrator

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        logger.warning("invalid task body: %s", exc.errors())
        return _envelope(200, TaskResponse(success=False, error=f"Invalid request: {exc.errors()}"))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return _envelope(500, TaskResponse(success=False, error="Internal server error"))

    @app.get("/", include_in_schema=False)
    async def root_redirect():
        return RedirectResponse(url="/docs")

    @app.get("/health")
    async def health():
        return {"status": "healthy", "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat()}

    # ---- MAIN ENDPOINT ----
    # Plain def: runs in the worker threadpool, so the blocking provider calls
    # and notification backoff of one task never stall another.
    @app.post("/task", response_model=None)
    @app.post("/", response_model=None, include_in_schema=False)
    def receive_task(req: TaskRequest):
        logger.info("received task %s round %d from %s", req.task, req.round, req.email)
        try:
            result = orchestrator.process(req)
        except (AuthorizationError, ProvisioningError) as e:
            logger.warning("task %s failed: %s", req.task, e)
            return _envelope(200, TaskResponse(success=False, error=str(e)))
        return _envelope(200, TaskResponse(success=True, message="Task processed successfully", data=result))

    # ---- LOG VIEWER ----
    @app.get("/_logs", include_in_schema=False)
    async def _logs(lines: int = Query(200, ge=1, le=5000)):
        path = settings.LOG_FILE_PATH
        if not os.path.exists(path):
            return PlainTextResponse(f"NO LOG: {path} not found\n")
        try:
            return PlainTextResponse(tail(path, lines))
        except OSError as e:
            return PlainTextResponse(f"ERROR reading log: {e}\n")

    return app
