"""
Authorization Types - 授权领域值对象

角色、资源、动作和作用域均为封闭枚举，新增取值只能通过修改枚举本身。
"""

from enum import Enum


class Role(str, Enum):
    """用户角色"""

    SUPERUSER = "superuser"  # 超级管理员
    USER = "user"  # 普通用户（店主）
    MODERATOR = "moderator"  # 审核员


class Resource(str, Enum):
    """受授权约束的实体类型"""

    STORES = "stores"
    BASE_PRODUCTS = "base_products"
    PRODUCTS = "products"
    PRODUCT_ATTRS = "product_attrs"
    CUSTOM_ATTRIBUTES = "custom_attributes"
    ATTRIBUTES = "attributes"
    CATEGORIES = "categories"
    CATEGORY_ATTRS = "category_attrs"
    MODERATOR_PRODUCT_COMMENTS = "moderator_product_comments"
    MODERATOR_STORE_COMMENTS = "moderator_store_comments"
    USER_ROLES = "user_roles"
    CURRENCY_EXCHANGE = "currency_exchange"


class Action(str, Enum):
    """操作"""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Scope(str, Enum):
    """权限作用域

    ALL 无条件生效；OWNED 仅当操作者是实体的（传递）所有者时生效。
    """

    ALL = "all"
    OWNED = "owned"

    @property
    def rank(self) -> int:
        """宽松程度，数值越大越宽松"""
        return 2 if self is Scope.ALL else 1


__all__ = ["Action", "Resource", "Role", "Scope"]
