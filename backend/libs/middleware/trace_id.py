"""
Trace ID Middleware - 请求追踪中间件

读取或生成请求的 Trace ID，写入日志上下文，并记录一条访问日志。
"""

from collections.abc import Callable
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from utils.logging import clear_trace_context, get_logger, set_trace_context

logger = get_logger(__name__)

MAX_TRACE_ID_LENGTH = 128


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Trace ID 中间件

    上游传入的 Trace ID 过长时丢弃并重新生成；响应头回写最终使用的 Trace ID。
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Trace-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        trace_id = request.headers.get(self.header_name, "").strip()
        if not trace_id or len(trace_id) > MAX_TRACE_ID_LENGTH:
            trace_id = uuid.uuid4().hex

        set_trace_context(trace_id=trace_id)
        request.state.trace_id = trace_id
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[self.header_name] = trace_id
            logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
            return response
        finally:
            clear_trace_context()


__all__ = ["TraceIdMiddleware"]
