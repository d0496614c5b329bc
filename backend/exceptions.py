"""
Exceptions - 店铺服务异常

每个异常携带 message / code / details，由 bootstrap.main 中的
异常处理器映射为 HTTP 状态码和统一的错误响应体。
"""

from typing import Any


class StoresError(Exception):
    """店铺服务基础异常

    子类通过 default_code 声明默认错误代码。
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}" if self.code else self.message


class ValidationError(StoresError):
    """业务校验失败（slug 重复、vendor_code 重复等）"""

    default_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Validation failed",
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class NotFoundError(StoresError):
    """资源不存在

    对当前操作者不可见的行同样报此错误，两者不做区分。
    """

    default_code = "NOT_FOUND"

    def __init__(
        self,
        resource: str,
        resource_id: str | int | None = None,
        code: str | None = None,
    ) -> None:
        suffix = f": {resource_id}" if resource_id is not None else ""
        super().__init__(
            f"{resource} not found{suffix}",
            code,
            {"resource": resource, "id": resource_id},
        )
        self.resource = resource
        self.resource_id = resource_id


class PermissionDeniedError(StoresError):
    """权限不足"""

    default_code = "PERMISSION_DENIED"

    def __init__(
        self,
        message: str = "Permission denied",
        code: str | None = None,
        action: str | None = None,
        resource: str | None = None,
    ) -> None:
        details = {key: value for key, value in (("action", action), ("resource", resource)) if value}
        super().__init__(message, code, details)
        self.action = action
        self.resource = resource


class AccessDeniedError(PermissionDeniedError):
    """Acl 拒绝

    resource / action / entity_id / user_id 只写入日志，不返回给客户端。
    """

    default_code = "ACCESS_DENIED"

    def __init__(
        self,
        resource: str,
        action: str,
        entity_id: Any = None,
        user_id: int | None = None,
    ) -> None:
        super().__init__(f"Denied {action} on {resource}", action=action, resource=resource)
        self.entity_id = entity_id
        self.user_id = user_id


class OwnershipResolutionError(AccessDeniedError):
    """所有权链中断（外键为空或父记录缺失），按拒绝处理"""

    default_code = "OWNERSHIP_UNRESOLVED"


class AuthenticationError(StoresError):
    """Authorization 头无效，或操作需要已登录用户"""

    default_code = "AUTHENTICATION_ERROR"

    def __init__(self, message: str = "Authentication failed", code: str | None = None) -> None:
        super().__init__(message, code)


class ConflictError(StoresError):
    """资源冲突（重复角色、重复分类属性、重复变体属性组合）"""

    default_code = "CONFLICT"

    def __init__(
        self,
        message: str = "Resource conflict",
        code: str | None = None,
        resource: str | None = None,
    ) -> None:
        super().__init__(message, code, {"resource": resource} if resource else None)


class ExternalServiceError(StoresError):
    """外部服务（搜索索引）调用失败"""

    default_code = "EXTERNAL_SERVICE_ERROR"

    def __init__(
        self,
        service: str,
        message: str = "External service error",
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, {"service": service, **(details or {})})
        self.service = service


class DatabaseConnectionError(StoresError):
    """数据库不可用；属于基础设施故障，不是授权拒绝"""

    default_code = "DATABASE_UNAVAILABLE"

    def __init__(self, message: str = "Database unavailable", code: str | None = None) -> None:
        super().__init__(message, code)
