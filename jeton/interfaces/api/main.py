# jeton/interfaces/api/main.py
from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jeton.domain.equity.errors import EquityError, NotFoundError
from jeton.infrastructure.config import get_settings
from jeton.infrastructure.log import log
from jeton.interfaces.api.middleware.request_timing import RequestTimingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    from jeton.infrastructure.duckdb_connection import get_connection
    get_connection()  # opens the database and applies the schema
    log("database ready", path=get_settings().duckdb_path)
    yield


settings = get_settings()

app = FastAPI(
    title="Jeton API",
    debug=settings.debug,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url=None,
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next: object) -> Response:
    response = await call_next(request)  # type: ignore[misc]
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response  # type: ignore[return-value]


app.add_middleware(RequestTimingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["*"],
)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=404)


@app.exception_handler(EquityError)
async def equity_error_handler(request: Request, exc: EquityError) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=400)


from jeton.interfaces.api.routes.equity_routes import router as equity_router  # noqa: E402
from jeton.interfaces.api.routes.health_routes import router as health_router  # noqa: E402
from jeton.interfaces.api.routes.shares_routes import router as shares_router  # noqa: E402

app.include_router(shares_router, prefix="/api")
app.include_router(equity_router, prefix="/api")
app.include_router(health_router, prefix="/api")
