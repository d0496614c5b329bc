"""API - 共享 API 组件

跨领域共享的 API 组件：
- deps: 数据库会话、操作者 Acl 与服务工厂依赖
"""

from libs.api.deps import (
    CurrentAcl,
    CurrentUserId,
    DbSession,
    Repos,
    get_acl,
    get_current_user_id,
    get_db,
)

__all__ = [
    "CurrentAcl",
    "CurrentUserId",
    "DbSession",
    "Repos",
    "get_acl",
    "get_current_user_id",
    "get_db",
]
