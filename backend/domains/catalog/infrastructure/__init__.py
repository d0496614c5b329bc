"""
Catalog Infrastructure - 目录基础设施

- models: 属性、分类与汇率 ORM 模型
- repositories: 仓储实现
- cache: 参考数据缓存
"""
