"""
Stores Infrastructure - 店铺基础设施

- models: 店铺与审核意见 ORM 模型
- repositories: 仓储实现
- search: 店铺搜索查询
"""
