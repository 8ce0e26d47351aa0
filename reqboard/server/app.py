from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from loguru import logger

from reqboard.server.log import setup_logging
from reqboard.server.seed import seed_demo_data
from reqboard.server.settings import get_settings
from reqboard.server.store.memory import MemoryStore


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level, json=settings.log_json)

    logger.info("Board service starting (host={}, port={})", settings.host, settings.port)

    # The store is owned by the app; nothing outlives the process.
    store = MemoryStore()
    if settings.seed_demo_data:
        seed_demo_data(store)
    else:
        logger.info("Demo data disabled -- starting with an empty store")
    _app.state.store = store

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("Board service shutting down")
    _app.state.store = None


app = FastAPI(title="reqboard", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema rejections become 400 with a field-level error list."""
    errors = [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in exc.errors()]
    logger.debug("Validation failed: {} {} ({} errors)", request.method, request.url.path, len(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request data", "errors": errors},
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything unhandled becomes a generic 500; the traceback is only logged."""
    logger.opt(exception=exc).error("Unhandled error: {} {}", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ---------------------------------------------------------------------------
# API router -- all endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from reqboard.server.routers.boards import router as boards_router  # noqa: E402
from reqboard.server.routers.groups import router as groups_router  # noqa: E402
from reqboard.server.routers.requests import router as requests_router  # noqa: E402
from reqboard.server.routers.users import router as users_router  # noqa: E402
from reqboard.server.routers.workspaces import router as workspaces_router  # noqa: E402

api.include_router(workspaces_router)
api.include_router(boards_router)
api.include_router(groups_router)
api.include_router(requests_router)
api.include_router(users_router)

app.include_router(api)
