"""
部分更新模式测试
"""

import pytest
from pydantic import ValidationError

from domains.products.presentation.schemas import ProductUpdate
from domains.stores.presentation.schemas import StoreUpdate


@pytest.mark.unit
class TestPartialUpdate:
    """显式 null 与省略字段的区分"""

    def test_omitted_fields_are_not_changes(self):
        """测试: 未提供的字段不出现在变更中"""
        payload = StoreUpdate.model_validate({"slogan": "Cheap!"})

        assert payload.changes() == {"slogan": "Cheap!"}

    def test_explicit_null_on_non_nullable_field_fails(self):
        """测试: 非空字段显式为 null 时校验失败"""
        with pytest.raises(ValidationError, match="price"):
            ProductUpdate.model_validate({"price": None})

    def test_explicit_null_on_nullable_field_is_a_change(self):
        """测试: 可空字段显式为 null 时作为清空处理"""
        payload = ProductUpdate.model_validate({"discount": None})

        assert payload.changes() == {"discount": None}

    def test_all_null_fields_are_reported(self):
        """测试: 错误信息列出全部被置空的非空字段"""
        with pytest.raises(ValidationError) as exc_info:
            StoreUpdate.model_validate({"name": None, "slug": None, "phone": None})

        message = exc_info.value.errors()[0]["msg"]
        assert message.endswith("Fields cannot be null: name, slug")
