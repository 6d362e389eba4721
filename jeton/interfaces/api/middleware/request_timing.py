from __future__ import annotations

import time

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from jeton.infrastructure.log import log

_MUTATING_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Logs mutating and failing requests with elapsed time.

    Exceptions that escaped every handler (database failures, rolled-back
    units of work) end here: they are logged with their type and message and
    the client receives a generic 500.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.monotonic()
        try:
            response = await call_next(request)
        except Exception as err:  # noqa: BLE001
            log(
                f"{request.method} {request.url.path} failed",
                status=500,
                ms=_elapsed_ms(start),
                error=f"{type(err).__name__}: {err}",
            )
            return JSONResponse({"detail": "Internal server error"}, status_code=500)

        if response.status_code >= 500 or request.method in _MUTATING_METHODS:
            log(
                f"{request.method} {request.url.path}",
                status=response.status_code,
                ms=_elapsed_ms(start),
            )
        return response


def _elapsed_ms(start: float) -> int:
    return round((time.monotonic() - start) * 1000)
