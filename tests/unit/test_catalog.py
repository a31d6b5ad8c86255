"""Unit tests for matching products to qualification answers"""

from types import SimpleNamespace
from boiler_funnel.domain.catalog import filter_products


def make_product(name, boiler_type, bedrooms):
    return SimpleNamespace(name=name, boiler_type=boiler_type, suitable_bedrooms=bedrooms)


PRODUCTS = [
    make_product("combi-small", "combi", ["1", "2"]),
    make_product("combi-large", "combi", ["3", "4", "5+"]),
    make_product("system", "system", ["3", "4"]),
    make_product("legacy", None, []),
]


def test_no_criteria_keeps_everything():
    assert filter_products(PRODUCTS) == PRODUCTS


def test_filter_by_boiler_type():
    assert [p.name for p in filter_products(PRODUCTS, boiler_type="combi")] == ["combi-small", "combi-large"]


def test_filter_by_bedrooms():
    assert [p.name for p in filter_products(PRODUCTS, bedroom_count="3")] == ["combi-large", "system"]


def test_filter_by_both():
    assert [p.name for p in filter_products(PRODUCTS, boiler_type="system", bedroom_count="4")] == ["system"]
    assert filter_products(PRODUCTS, boiler_type="system", bedroom_count="1") == []
