"""
Permission Table 单元测试

测试静态权限表、有效作用域计算和公开规则。
"""

from types import MappingProxyType

import pytest

from domains.authorization.domain.permissions import (
    PERMISSIONS,
    effective_scope,
    is_public,
    scope_for,
)
from domains.authorization.domain.types import Action, Resource, Role, Scope


@pytest.mark.unit
class TestPermissionTable:
    """权限表测试"""

    def test_table_is_immutable(self):
        """测试: 权限表构建后不可修改"""
        assert isinstance(PERMISSIONS, MappingProxyType)
        with pytest.raises(TypeError):
            PERMISSIONS[(Role.USER, Resource.STORES, Action.DELETE)] = Scope.ALL  # type: ignore[index]

    @pytest.mark.parametrize("resource", list(Resource))
    @pytest.mark.parametrize("action", list(Action))
    def test_superuser_has_all_scope_everywhere(self, resource, action):
        """测试: 超级管理员对所有资源和动作都是 ALL"""
        assert scope_for(Role.SUPERUSER, resource, action) is Scope.ALL

    def test_user_can_write_own_catalog(self):
        """测试: 普通用户对自己的店铺和商品有 OWNED 写权限"""
        for resource in (Resource.STORES, Resource.BASE_PRODUCTS, Resource.PRODUCTS):
            for action in (Action.CREATE, Action.UPDATE, Action.DELETE):
                assert scope_for(Role.USER, resource, action) is Scope.OWNED

    def test_user_cannot_write_reference_data(self):
        """测试: 普通用户不能修改属性和分类"""
        for resource in (Resource.ATTRIBUTES, Resource.CATEGORIES, Resource.CATEGORY_ATTRS):
            assert scope_for(Role.USER, resource, Action.CREATE) is None
            assert scope_for(Role.USER, resource, Action.UPDATE) is None

    def test_user_reads_only_own_roles(self):
        """测试: 普通用户只能读取自己的角色"""
        assert scope_for(Role.USER, Resource.USER_ROLES, Action.READ) is Scope.OWNED
        assert scope_for(Role.USER, Resource.USER_ROLES, Action.CREATE) is None

    def test_moderator_writes_comments_only(self):
        """测试: 审核员只能写审核意见"""
        assert scope_for(Role.MODERATOR, Resource.MODERATOR_STORE_COMMENTS, Action.CREATE) is Scope.ALL
        assert scope_for(Role.MODERATOR, Resource.STORES, Action.READ) is Scope.ALL
        assert scope_for(Role.MODERATOR, Resource.STORES, Action.UPDATE) is None

    def test_unlisted_combination_is_denied(self):
        """测试: 表中不存在的组合返回 None"""
        assert scope_for(Role.MODERATOR, Resource.USER_ROLES, Action.DELETE) is None


@pytest.mark.unit
class TestEffectiveScope:
    """有效作用域测试"""

    def test_maximal_grant_wins(self):
        """测试: 多个角色时取最宽松的作用域"""
        scope = effective_scope([Role.USER, Role.MODERATOR], Resource.STORES, Action.READ)
        assert scope is Scope.ALL

    def test_owned_when_only_owned_granted(self):
        """测试: 只有 OWNED 授权时结果为 OWNED"""
        scope = effective_scope([Role.USER], Resource.PRODUCTS, Action.UPDATE)
        assert scope is Scope.OWNED

    def test_user_and_moderator_combines_owned_write(self):
        """测试: 审核员的拒绝不会削弱用户角色的 OWNED 授权"""
        scope = effective_scope([Role.MODERATOR, Role.USER], Resource.STORES, Action.UPDATE)
        assert scope is Scope.OWNED

    def test_no_roles_is_denied(self):
        """测试: 没有角色时返回 None"""
        assert effective_scope([], Resource.STORES, Action.READ) is None


@pytest.mark.unit
class TestPublicRules:
    """公开规则测试"""

    def test_catalog_reads_are_public(self):
        """测试: 目录读取对所有人公开"""
        assert is_public(Resource.STORES, Action.READ)
        assert is_public(Resource.CATEGORIES, Action.READ)

    def test_writes_are_never_public(self):
        """测试: 写操作永远不是公开规则"""
        for resource in Resource:
            assert not is_public(resource, Action.CREATE)
            assert not is_public(resource, Action.DELETE)

    def test_private_resources_are_not_public(self):
        """测试: 角色和审核意见不公开"""
        assert not is_public(Resource.USER_ROLES, Action.READ)
        assert not is_public(Resource.MODERATOR_STORE_COMMENTS, Action.READ)
