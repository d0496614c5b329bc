"""
Products Infrastructure - 商品基础设施

- models: 基础商品、变体、属性取值、审核意见 ORM 模型
- repositories: 仓储实现
- search: 商品搜索查询
"""
