"""
Libs - 共享组件库

提供跨领域使用的技术组件，非业务逻辑。

子模块：
- api: API 依赖注入
- db: 数据库连接、受访问控制的 Repository 基类、Repository 工厂
- middleware: 中间件
- orm: ORM 基类
- search: 搜索索引客户端
- types: 共享值类型
"""
