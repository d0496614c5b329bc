"""
Domains - 领域层

采用 DDD 4 层架构的领域模块：
- authorization: 授权领域（角色、权限表、所有权链、用户角色）
- stores: 店铺领域（店铺、店铺审核意见）
- products: 商品领域（基础商品、商品变体、属性值、审核意见）
- catalog: 目录领域（属性、分类及分类属性）
"""
