import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from starlette.middleware.gzip import GZipMiddleware

from app.api.routes import auth, course_recent, health, privacy, user_settings
from app.core.config import get_settings
from app.core.database import Base, engine
from app.core.errors import default_code_for_status
from app.core.limiter import limiter
from app.core.logging_config import setup_logging
from app.models import (  # noqa: F401 registra todos los modelos en Base.metadata
    Context,
    Course,
    LogEntry,
    RoleAssignment,
    User,
    UserPreference,
)


def _setup_observability(app: FastAPI, settings) -> None:
    if settings.sentry_dsn:
        try:
            import sentry_sdk
            from sentry_sdk.integrations.fastapi import FastApiIntegration

            sentry_sdk.init(
                dsn=settings.sentry_dsn,
                traces_sample_rate=settings.sentry_traces_sample_rate,
                environment=settings.environment,
                integrations=[FastApiIntegration()],
            )
        except Exception as e:
            logger.warning(f"Sentry initialization failed: {e}")

    if settings.enable_prometheus_metrics:
        try:
            from prometheus_fastapi_instrumentator import Instrumentator

            Instrumentator().instrument(app).expose(app, include_in_schema=False, endpoint="/metrics")
        except Exception as e:
            logger.warning(f"Prometheus instrumentation failed: {e}")


def _run_startup_checks(settings) -> None:
    if settings.is_production and not settings.allow_insecure_jwt_secret:
        if settings.jwt_secret.strip() == "" or settings.is_default_jwt_secret:
            raise RuntimeError("JWT_SECRET inseguro en producción. Configure un valor fuerte en entorno.")

    from app.core import database

    db = database.SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.environment)
    _run_startup_checks(settings)

    # Crear tablas automáticamente solo en entornos no productivos
    if not settings.is_production:
        Base.metadata.create_all(bind=engine)

    if settings.create_default_admin_on_boot and not settings.is_production:
        from app.core.database import SessionLocal
        from app.services.auth_service import create_default_admin

        db = SessionLocal()
        try:
            create_default_admin(db)
        finally:
            db.close()

    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Recent Courses - API",
        description="Bloque de cursos vistos recientemente, ajustes por usuario y proveedor de privacidad",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(HTTPException)
    async def handle_http_exception(request: Request, exc: HTTPException):
        request_id = getattr(request.state, "request_id", "unknown")
        if isinstance(exc.detail, dict) and "code" in exc.detail and "message" in exc.detail:
            code = exc.detail.get("code")
            message = exc.detail.get("message")
            details = exc.detail.get("details")
        else:
            code = default_code_for_status(exc.status_code)
            message = str(exc.detail) if exc.detail else "Error"
            details = None
        return JSONResponse(
            status_code=exc.status_code,
            content={"code": code, "message": message, "details": details, "request_id": request_id},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        request_id = getattr(request.state, "request_id", "unknown")
        return JSONResponse(
            status_code=422,
            content={
                "code": "validation_error",
                "message": "Solicitud inválida",
                "details": {"errors": jsonable_errors(exc)},
                "request_id": request_id,
            },
        )

    @app.exception_handler(Exception)
    async def handle_500(request: Request, exc: Exception):
        logger.exception("Error interno del servidor")
        request_id = getattr(request.state, "request_id", "unknown")
        return JSONResponse(
            status_code=500,
            content={
                "code": "internal_error",
                "message": "Error interno del servidor",
                "details": None,
                "request_id": request_id,
            },
        )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        request.state.start_time = time.time()
        response = await call_next(request)
        elapsed = time.time() - request.state.start_time
        if elapsed > 0.5:
            logger.info(f"[{request_id}] {request.method} {request.url.path} {elapsed:.2f}s")
        response.headers["X-Request-ID"] = request_id
        if settings.is_production:
            response.headers["X-Content-Type-Options"] = "nosniff"
            response.headers["X-Frame-Options"] = "DENY"
            response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    _setup_observability(app, settings)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(course_recent.router)
    app.include_router(user_settings.router)
    app.include_router(privacy.router)

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()]


app = create_app()
