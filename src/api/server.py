"""
FastAPI 应用入口 - Skills & Ideas API

``create_app`` builds an application around an explicit engine and skill
catalog, so tests can hand in a throwaway database; ``get_app`` builds the
configured instance for uvicorn. A missing JWT secret aborts startup.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import Settings, settings as default_settings
from src.api.responses import ApiError, format_api_response
from src.api.routes_auth import router as auth_router
from src.api.routes_ideas import router as ideas_router
from src.api.routes_skills import router as skills_router
from src.catalog.skill_catalog import CatalogError, SkillCatalog
from src.db.engine import create_db_engine, init_db
from src.db.errors import StorageError
from src.db.idea_store import IdeaStore
from src.db.user_store import UserStore
from src.log import cleanup_logs, get_logger
from src.observability import setup_observability

logger = get_logger(__name__)

API_VERSION = "1.0.0"

ENDPOINTS = [
    "GET /",
    "GET /api/skills",
    "GET /api/skills/:id",
    "GET /api/skills/category/:category",
    "POST /api/register",
    "POST /api/login",
    "GET /api/ideas",
    "GET /api/ideas/:id",
    "POST /api/ideas",
    "PUT /api/ideas/:id",
    "DELETE /api/ideas/:id",
]


# ---------------------------------------------------------------------------
# Exception handlers: every failure leaves as the standard envelope
# ---------------------------------------------------------------------------

async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return exc.to_response()


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # unmatched path or method
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=format_api_response(False, None, "Route not found"))
    return JSONResponse(status_code=exc.status_code, content=format_api_response(False, None, str(exc.detail)))


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    return ApiError(400, "Invalid request body", errors=errors).to_response()


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("storage error on %s %s: %s", request.method, request.url.path, exc)
    return ApiError(500, str(exc)).to_response()


async def _catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return ApiError(500, "Error reading skills data", error=str(exc)).to_response()


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return ApiError(500, "Internal server error").to_response()


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(
    app_settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    skill_catalog: Optional[SkillCatalog] = None,
) -> FastAPI:
    app_settings = app_settings or default_settings
    if not app_settings.auth.secret_key:
        raise RuntimeError(
            "JWT secret is not configured: set JWT_SECRET in the environment/.env "
            "or auth.secret_key in config/app_config.local.json"
        )

    owns_engine = engine is None
    engine = engine or create_db_engine(app_settings.database.url)
    skill_catalog = skill_catalog or SkillCatalog(
        app_settings.skills.path, cache=app_settings.skills.cache_enabled
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """应用生命周期：建表 → 预加载技能快照（如开启缓存）→ 日志清理"""
        init_db(engine)
        if skill_catalog.cache:
            try:
                skill_catalog.reload()
            except CatalogError as e:
                logger.warning("[startup] skills snapshot not loaded: %s", e)
        try:
            report = cleanup_logs()
            if report["deleted_by_age"] or report["deleted_by_size"]:
                logger.info("[startup] log cleanup: %s", report)
        except OSError as e:
            logger.warning("[startup] log cleanup failed: %s", e)
        logger.info("[startup] Skills & Ideas API %s ready (env=%s)", API_VERSION, app_settings.env)

        yield

        if owns_engine:
            engine.dispose()

    app = FastAPI(
        title="Skills & Ideas API",
        description="技能目录（只读）与 ideas CRUD，Bearer token 认证",
        version=API_VERSION,
        lifespan=lifespan,
        exception_handlers={
            ApiError: _api_error_handler,
            StarletteHTTPException: _http_exception_handler,
            RequestValidationError: _validation_error_handler,
            StorageError: _storage_error_handler,
            CatalogError: _catalog_error_handler,
            Exception: _unhandled_error_handler,
        },
    )

    app.state.settings = app_settings
    app.state.engine = engine
    app.state.skill_catalog = skill_catalog
    app.state.user_store = UserStore(engine, bcrypt_rounds=app_settings.auth.bcrypt_rounds)
    app.state.idea_store = IdeaStore(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(skills_router)
    app.include_router(auth_router)
    app.include_router(ideas_router)

    setup_observability(app, version=API_VERSION)

    @app.get("/")
    def root() -> dict:
        response = format_api_response(True, None, "Skills & Ideas API is running!")
        response["version"] = API_VERSION
        response["endpoints"] = ENDPOINTS
        return response

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


def get_app() -> FastAPI:
    """uvicorn factory entry point: ``uvicorn src.api.server:get_app --factory``."""
    return create_app()
