import logging
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware

from careerhub.core.logging import request_id_ctx_var, latency_bucket_ms

logger = logging.getLogger("careerhub")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request_id for the lifetime of each request and log completion.

    An incoming x-request-id header is echoed back; otherwise a uuid4 is minted.
    """

    def __init__(self, app, header_name: str = "x-request-id", user_header: str = "x-user-id"):
        super().__init__(app)
        self.header_name = header_name
        self.user_header = user_header

    async def dispatch(self, request, call_next):
        rid = request.headers.get(self.header_name) or str(uuid4())
        request.state.request_id = rid
        token = request_id_ctx_var.set(rid)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_ctx_var.reset(token)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers[self.header_name] = rid
        logger.info(
            "request.complete",
            extra={
                "request_id": rid,
                "user_id": request.headers.get(self.user_header),
                "path": request.url.path,
                "method": request.method,
                "status": response.status_code,
                "latency_bucket": latency_bucket_ms(elapsed_ms),
            },
        )
        return response
