"""
HTTP 中间件模块

提供请求处理中间件
"""

from libs.middleware.trace_id import TraceIdMiddleware

__all__ = ["TraceIdMiddleware"]
