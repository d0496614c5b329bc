"""
Logging Utilities - 日志工具

架构说明：
- get_logger() 是无依赖的，可以被任何模块安全导入
- setup_logging() 需要 settings，在应用启动时调用
- Trace ID 通过 ContextVar 贯穿请求生命周期，由 TraceIdFilter 注入日志记录
- json 格式由 python-json-logger 输出
"""

from contextvars import ContextVar
import logging
import os
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter as BaseJsonFormatter

_trace_id: ContextVar[str | None] = ContextVar("trace_id", default=None)

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(trace_id)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """获取日志器（无依赖，可安全导入）"""
    return logging.getLogger(name)


def set_trace_context(trace_id: str | None) -> None:
    """设置当前请求的 Trace ID"""
    _trace_id.set(trace_id)


def get_trace_id() -> str | None:
    """获取当前请求的 Trace ID"""
    return _trace_id.get()


def clear_trace_context() -> None:
    """清除当前请求的 Trace ID"""
    _trace_id.set(None)


class TraceIdFilter(logging.Filter):
    """为日志记录注入 trace_id 字段"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = _trace_id.get() or "-"
        return True


class JsonFormatter(BaseJsonFormatter):
    """JSON 行格式

    字段：time / level / logger / trace_id / message，以及通过 extra 传入的字段。
    """

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)s %(name)s %(trace_id)s %(message)s",
            rename_fields={"asctime": "time", "levelname": "level", "name": "logger"},
            json_ensure_ascii=False,
        )

    def add_fields(
        self,
        log_data: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_data, record, message_dict)
        # 未经过 TraceIdFilter 的记录（例如直接挂在根日志器上）
        if log_data.get("trace_id") is None:
            log_data["trace_id"] = _trace_id.get() or "-"


def setup_logging(
    log_level: str | None = None,
    log_format: str = "text",
    is_development: bool | None = None,
) -> None:
    """设置日志

    Args:
        log_level: 日志级别，默认从环境变量 LOG_LEVEL 读取
        log_format: 日志格式 (text/json)
        is_development: 是否开发环境，默认从 APP_ENV 判断
    """
    # 从环境变量获取配置（避免循环依赖）
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")
    if is_development is None:
        is_development = os.getenv("APP_ENV", "development") == "development"

    # 开发环境下使用 DEBUG 级别
    level = logging.DEBUG if is_development else getattr(logging, log_level.upper(), logging.INFO)

    # 应用日志器：各领域模块、基础库和入口（不干扰 uvicorn 的日志）
    for name in ("bootstrap", "domains", "libs", "utils"):
        app_logger = logging.getLogger(name)
        app_logger.setLevel(level)

        # 如果没有处理器，添加一个
        if not app_logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.addFilter(TraceIdFilter())
            if log_format == "json":
                handler.setFormatter(JsonFormatter())
            else:
                handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
            app_logger.addHandler(handler)
            app_logger.propagate = False  # 不传播到根日志器，避免重复

    # 设置第三方库日志级别
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


class LoggerMixin:
    """日志混入类"""

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
