"""
变体规则测试

测试属性取值组合的重复判定和搜索筛选条件聚合。
"""

from types import SimpleNamespace

import pytest

from domains.products.application import aggregate_search_filters, has_duplicate_variant
from domains.products.presentation.schemas import AttrValue


def _attr(product_id: int, attribute_id: int, value: str) -> SimpleNamespace:
    return SimpleNamespace(product_id=product_id, attribute_id=attribute_id, value=value)


@pytest.mark.unit
class TestHasDuplicateVariant:
    """取值组合重复判定测试"""

    def test_same_combination_is_duplicate(self):
        """测试: 已有变体拥有完全相同的取值组合"""
        base_attrs = [_attr(1, 10, "red"), _attr(1, 11, "XL")]
        attributes = [AttrValue(attr_id=10, value="red"), AttrValue(attr_id=11, value="XL")]

        assert has_duplicate_variant(base_attrs, attributes, [10, 11])

    def test_different_value_is_not_duplicate(self):
        """测试: 任一取值不同即不重复"""
        base_attrs = [_attr(1, 10, "red"), _attr(1, 11, "XL")]
        attributes = [AttrValue(attr_id=10, value="red"), AttrValue(attr_id=11, value="L")]

        assert not has_duplicate_variant(base_attrs, attributes, [10, 11])

    def test_unset_custom_attribute_compares_as_empty(self):
        """测试: 未赋值的自定义属性按空字符串比较"""
        base_attrs = [_attr(1, 10, "red")]
        attributes = [AttrValue(attr_id=10, value="red"), AttrValue(attr_id=11, value="")]

        assert has_duplicate_variant(base_attrs, attributes, [10, 11])

    def test_no_existing_variants(self):
        """测试: 没有其他变体时不重复"""
        assert not has_duplicate_variant([], [AttrValue(attr_id=10, value="red")], [10])

    def test_attribute_id_alias(self):
        """测试: 请求中可以使用 attribute_id 字段名"""
        attr = AttrValue.model_validate({"attribute_id": 10, "value": "red"})
        assert attr.attr_id == 10


@pytest.mark.unit
class TestAggregateSearchFilters:
    """搜索筛选条件聚合测试"""

    def test_aggregates_categories_prices_and_attributes(self):
        """测试: 聚合分类、价格区间、等值与区间属性"""
        hits = [
            {
                "id": 1,
                "category_id": 3,
                "variants": [
                    {
                        "price": 12.0,
                        "attrs": [
                            {"attr_id": 1, "str_val": "red"},
                            {"attr_id": 2, "float_val": 1.5},
                        ],
                    },
                    {"price": 8.0, "attrs": [{"attr_id": 1, "str_val": "blue"}]},
                ],
            },
            {
                "id": 2,
                "category_id": 5,
                "variants": [{"price": 20.0, "attrs": [{"attr_id": 2, "float_val": 4.0}]}],
            },
        ]

        filters = aggregate_search_filters(hits)

        assert filters.categories_ids == [3, 5]
        assert filters.price_filter.min_value == 8.0
        assert filters.price_filter.max_value == 20.0
        equal = next(f for f in filters.attr_filters if f.equal is not None)
        assert equal.id == 1
        assert equal.equal == ["blue", "red"]
        ranged = next(f for f in filters.attr_filters if f.range is not None)
        assert ranged.id == 2
        assert (ranged.range.min_value, ranged.range.max_value) == (1.5, 4.0)

    def test_empty_hits(self):
        """测试: 没有命中时返回空筛选条件"""
        filters = aggregate_search_filters([])
        assert filters.categories_ids == []
        assert filters.attr_filters == []
        assert filters.price_filter.min_value is None
