from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from loguru import logger

from switchboard.agent_state.settings import get_settings
from switchboard.shared.contracts import ErrorBody
from switchboard.shared.db import create_engine, create_session_factory, ping
from switchboard.shared.errors import ErrorKind, InvalidRequestError, SwitchboardError
from switchboard.shared.identity import HttpCredentialVerifier
from switchboard.shared.log import setup_logging


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level, service="agent-state")

    logger.info("Agent State API starting (host={}, port={})", settings.host, settings.port)

    _app.state.db_engine = None
    _app.state.db_session_factory = None

    # -- Database --------------------------------------------------------------
    if settings.database_url:
        engine = create_engine(settings.database_url)
        _app.state.db_engine = engine
        _app.state.db_session_factory = create_session_factory(engine)
        logger.info("Database: connected")
    else:
        logger.warning("SWITCHBOARD_STATE_DATABASE_URL not set -- agent endpoints disabled")

    # -- Identity service ------------------------------------------------------
    _app.state.verifier = HttpCredentialVerifier(settings.identity_url, timeout=settings.http_timeout)
    logger.info("Identity service: {}", settings.identity_url)

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("Agent State API shutting down")
    await _app.state.verifier.aclose()

    if _app.state.db_engine is not None:
        await _app.state.db_engine.dispose()
        logger.info("Database: disposed")


app = FastAPI(title="Switchboard Agent State API", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Error rendering -- every failure leaves as {"kind", "message"}
# ---------------------------------------------------------------------------


@app.exception_handler(SwitchboardError)
async def _handle_switchboard_error(request: Request, exc: SwitchboardError) -> JSONResponse:
    logger.info("{} {} failed: {} ({})", request.method, request.url.path, exc.kind, exc.message)
    body = ErrorBody(kind=exc.kind.value, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


@app.exception_handler(RequestValidationError)
async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await _handle_switchboard_error(request, InvalidRequestError.from_validation_errors(exc.errors()))


@app.exception_handler(Exception)
async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    body = ErrorBody(kind=ErrorKind.INTERNAL.value, message="Internal server error")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# API router -- all endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "service": "agent-state"}


@api.get("/health/ready")
async def ready(request: Request) -> JSONResponse:
    """Readiness: the registry is useless without its database."""
    if not await ping(request.app.state.db_session_factory):
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"status": "not_ready"})
    return JSONResponse(content={"status": "ready", "service": "agent-state"})


from switchboard.agent_state.routers.agents import router as agents_router  # noqa: E402
from switchboard.agent_state.routers.events import router as events_router  # noqa: E402

api.include_router(agents_router)
api.include_router(events_router)

app.include_router(api)
