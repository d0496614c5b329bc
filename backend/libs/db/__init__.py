"""
Database Module

提供数据库相关的基础设施：
- database: 数据库连接和会话管理
- base_repository: 受访问控制约束的 Repository 基类
- repos_factory: 按请求构建 Repository
"""

from libs.db.database import (
    Base,
    close_db,
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    get_session_context,
    get_session_factory,
    init_db,
)

__all__ = [
    "Base",
    "close_db",
    "create_tables",
    "drop_tables",
    "get_engine",
    "get_session",
    "get_session_context",
    "get_session_factory",
    "init_db",
]
