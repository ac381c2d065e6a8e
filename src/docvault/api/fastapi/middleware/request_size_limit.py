from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

# Multipart boundaries and part headers on top of the file bytes.
MULTIPART_OVERHEAD = 64 * 1024


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject oversized uploads from the Content-Length header, before the body is read.

    Only requests whose path is in ``paths`` are checked (all requests when
    ``paths`` is empty). Requests without a usable Content-Length pass through
    and are size-checked again once read.
    """

    def __init__(
        self,
        app,
        max_bytes: int = 1_000_000,
        *,
        paths: tuple[str, ...] = (),
        message: str = "Request body exceeds allowed size.",
        status_code: int = 400,
    ):
        super().__init__(app)
        self.max_bytes = max_bytes
        self.paths = tuple(p.rstrip("/") for p in paths)
        self.message = message
        self.status_code = status_code

    def _applies(self, path: str) -> bool:
        return not self.paths or path.rstrip("/") in self.paths

    async def dispatch(self, request, call_next):
        if self._applies(request.url.path):
            length = request.headers.get("content-length")
            try:
                size = int(length) if length is not None else None
            except ValueError:
                size = None
            if size is not None and size > self.max_bytes:
                return JSONResponse(
                    status_code=self.status_code,
                    content={"success": False, "message": self.message},
                    headers={"Connection": "close"},
                )
        return await call_next(request)
