"""
API 依赖测试

测试 Authorization 头解析为操作者 ID。
"""

import pytest

from exceptions import AuthenticationError
from libs.api.deps import get_current_user_id


@pytest.mark.unit
class TestGetCurrentUserId:
    """操作者身份解析测试"""

    def test_missing_header_is_anonymous(self):
        """测试: 没有头部时为匿名用户"""
        assert get_current_user_id(None) is None

    def test_blank_header_is_anonymous(self):
        """测试: 空白头部视为匿名"""
        assert get_current_user_id("  ") is None

    def test_integer_header(self):
        """测试: 整数头部解析为用户 ID"""
        assert get_current_user_id(" 42 ") == 42

    def test_malformed_header_raises(self):
        """测试: 非整数头部抛出认证错误"""
        with pytest.raises(AuthenticationError):
            get_current_user_id("Bearer abc")
