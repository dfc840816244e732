"""
Tests for slug and product id helpers.
"""
from storefront.utils.slugs import generate_product_id, slugify, to_base36


class TestSlugs:

    def test_slugify(self):
        assert slugify("Blue Vase!") == "blue-vase"
        assert slugify("  Home & Decor  ") == "home-decor"
        assert slugify("***") == ""

    def test_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "z"
        assert to_base36(36) == "10"

    def test_product_id(self):
        assert generate_product_id("Blue Vase!", now_ms=0) == "blue-vase-0"
        assert generate_product_id("Lamp", now_ms=36 ** 2) == "lamp-100"

    def test_product_id_without_usable_name(self):
        assert generate_product_id("!!!", now_ms=35) == "z"

    def test_product_ids_differ_over_time(self):
        assert generate_product_id("Vase", now_ms=1) != generate_product_id("Vase", now_ms=2)
