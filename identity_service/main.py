import time
import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from sqlalchemy import text

from .application.use_cases.roles import RoleService
from .config import settings
from .domain.errors import UniqueViolation
from .infrastructure.db import SessionLocal, engine
from .infrastructure.log import configure_logging
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .infrastructure.models import Base
from .infrastructure.repositories import SqlRoleRepository
from .interfaces.http.routers import auth as auth_router
from .interfaces.http.routers import roles as roles_router
from .interfaces.http.routers import users as users_router

configure_logging()
logger = structlog.get_logger()

app = FastAPI(title="Identity Service", version="0.1.0")
app.state.limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(UniqueViolation)
def unique_violation_handler(request: Request, exc: UniqueViolation):
    # concurrent writers raced past the pre-checks; the caller may retry
    logger.warning("unique_violation", path=request.url.path)
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": "Conflict, please retry"})


@app.middleware("http")
async def observe_requests(request: Request, call_next):
    start_time = time.time()
    method = request.method
    path = request.url.path

    response = await call_next(request)

    duration = time.time() - start_time
    status_code = response.status_code
    http_requests_total.labels(method=method, endpoint=path, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=path).observe(duration)

    logger.info(
        "http_request",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )
    return response


@app.on_event("startup")
def on_startup():
    logger.info("Starting identity service", version="0.1.0")
    Base.metadata.create_all(bind=engine)
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    db = SessionLocal()
    try:
        RoleService(SqlRoleRepository(db)).initialize_roles()
    finally:
        db.close()
    logger.info("Database connection established")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(auth_router.router)
app.include_router(users_router.router)
app.include_router(roles_router.router)
