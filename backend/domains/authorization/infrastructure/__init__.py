"""
Authorization Infrastructure - 授权基础设施

- models: 用户角色 ORM 模型
- repositories: 用户角色仓储
- entity_loader: 所有权链的单行加载
- roles_cache: 角色缓存
"""
