from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from loguru import logger

from switchboard.interaction.clients.agent_state import HttpAgentStateClient
from switchboard.interaction.managers.interactions import InteractionManager
from switchboard.interaction.models.api import ApiResponse
from switchboard.interaction.settings import get_settings
from switchboard.shared.db import create_engine, create_session_factory, ping
from switchboard.shared.errors import ErrorKind, InvalidRequestError, SwitchboardError
from switchboard.shared.identity import HttpCredentialVerifier
from switchboard.shared.log import setup_logging


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level, service="interaction")

    logger.info("Interaction API starting (host={}, port={})", settings.host, settings.port)

    _app.state.db_engine = None
    _app.state.db_session_factory = None

    # -- Database --------------------------------------------------------------
    if settings.database_url:
        engine = create_engine(settings.database_url)
        _app.state.db_engine = engine
        _app.state.db_session_factory = create_session_factory(engine)
        logger.info("Database: connected")
    else:
        logger.warning("SWITCHBOARD_INTERACTION_DATABASE_URL not set -- skill and interaction endpoints disabled")

    # -- Remote services -------------------------------------------------------
    verifier = HttpCredentialVerifier(settings.identity_url, timeout=settings.http_timeout)
    agent_state = HttpAgentStateClient(settings.agent_state_url, timeout=settings.http_timeout)
    _app.state.verifier = verifier
    _app.state.agent_state = agent_state
    _app.state.interaction_manager = InteractionManager(agent_state=agent_state, verifier=verifier)
    logger.info("Identity service: {}", settings.identity_url)
    logger.info("Agent state service: {}", settings.agent_state_url)

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("Interaction API shutting down")
    await agent_state.aclose()
    await verifier.aclose()

    if _app.state.db_engine is not None:
        await _app.state.db_engine.dispose()
        logger.info("Database: disposed")


app = FastAPI(title="Switchboard Interaction API", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Error rendering -- every failure leaves as an ApiResponse envelope
# ---------------------------------------------------------------------------


@app.exception_handler(SwitchboardError)
async def _handle_switchboard_error(request: Request, exc: SwitchboardError) -> JSONResponse:
    logger.info("{} {} failed: {} ({})", request.method, request.url.path, exc.kind, exc.message)
    body = ApiResponse[None](success=False, message=exc.message, error=exc.kind)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


@app.exception_handler(RequestValidationError)
async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await _handle_switchboard_error(request, InvalidRequestError.from_validation_errors(exc.errors()))


@app.exception_handler(Exception)
async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    body = ApiResponse[None](success=False, message="Internal server error", error=ErrorKind.INTERNAL)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# API router -- all endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "service": "interaction"}


@api.get("/health/ready")
async def ready(request: Request) -> JSONResponse:
    """Readiness: database, agent-state registry and identity service must all answer."""
    state = request.app.state
    checks = {
        "database": await ping(state.db_session_factory),
        "agent_state": await state.agent_state.is_healthy(),
        "identity": await state.verifier.is_healthy(),
    }
    if not all(checks.values()):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return JSONResponse(content={"status": "ready", "service": "interaction", "checks": checks})


from switchboard.interaction.routers.admin import router as admin_router  # noqa: E402
from switchboard.interaction.routers.interactions import router as interactions_router  # noqa: E402
from switchboard.interaction.routers.skills import router as skills_router  # noqa: E402

api.include_router(interactions_router)
api.include_router(admin_router)
api.include_router(skills_router)

app.include_router(api)
