"""
Types - 通用值类型

仅包含跨领域共享的值类型，业务模型位于对应域。
"""

from libs.types.types import Currency, PartialUpdate, Translation, ValueType

__all__ = ["Currency", "PartialUpdate", "Translation", "ValueType"]
