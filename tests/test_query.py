import os
import sys
import unittest

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from db.models import FilterSpec, Product  # noqa: E402
from db.seed import SEED_PRODUCTS  # noqa: E402
from shop.query import (  # noqa: E402
    PAGE_SIZE,
    clamp_page,
    filter_products,
    paginate,
    query,
    sort_products,
)


def make_product(pid, price, sizes=("M",), colors=("Black",), rating=4.0, **kwargs):
    return Product(
        id=pid,
        name=f"Product {pid}",
        price=price,
        sizes=sizes,
        colors=colors,
        rating=rating,
        **kwargs,
    )


class FilterTestCase(unittest.TestCase):
    def setUp(self):
        self.products = (
            make_product("p1", 120.0, sizes=("S", "M"), colors=("Black",)),
            make_product("p2", 40.0, sizes=("L",), colors=("Navy",)),
            make_product("p3", 80.0, sizes=("M", "L"), colors=("Pink", "Black")),
        )

    def test_size_filter_and_price_low_sort(self):
        result = query(
            self.products,
            FilterSpec(price_range=(0, 500), sizes=("M",), sort_by="price-low"),
        )
        self.assertEqual([p.id for p in result.items], ["p3", "p1"])
        self.assertEqual(result.total_matched, 2)
        self.assertEqual(result.total_pages, 1)

    def test_price_range_is_inclusive(self):
        matched = filter_products(self.products, FilterSpec(price_range=(40, 80)))
        self.assertEqual([p.id for p in matched], ["p2", "p3"])

    def test_sizes_and_colors_are_or_within_and_across(self):
        spec = FilterSpec(sizes=("S", "L"), colors=("Navy", "Pink"))
        matched = filter_products(self.products, spec)
        self.assertEqual([p.id for p in matched], ["p2", "p3"])

    def test_every_result_satisfies_every_predicate(self):
        spec = FilterSpec(price_range=(50, 150), sizes=("M",), colors=("Black",))
        for prod in query(SEED_PRODUCTS + self.products, spec, 1, 100).items:
            self.assertTrue(50 <= prod.price <= 150)
            self.assertTrue(set(prod.sizes) & {"M"})
            self.assertTrue(set(prod.colors) & {"Black"})

    def test_category_filter(self):
        spec = FilterSpec(category="Dresses")
        matched = filter_products(SEED_PRODUCTS, spec)
        self.assertTrue(matched)
        self.assertTrue(all(p.category == "Dresses" for p in matched))
        self.assertEqual(
            len(filter_products(SEED_PRODUCTS, FilterSpec(category="All"))),
            len(SEED_PRODUCTS),
        )

    def test_brand_filter_passes_everything_through(self):
        spec = FilterSpec(brands=("Luxury",))
        self.assertEqual(filter_products(self.products, spec), self.products)

    def test_inputs_are_not_mutated(self):
        products = list(self.products)
        query(products, FilterSpec(sort_by="price-high"))
        self.assertEqual(products, list(self.products))


class SortTestCase(unittest.TestCase):
    def setUp(self):
        self.products = (
            make_product("b", 50.0, rating=4.0),
            make_product("a", 20.0, rating=5.0),
            make_product("d", 50.0, rating=4.0),
            make_product("c", 20.0, rating=3.0),
        )

    def ids(self, sort_by):
        return [p.id for p in sort_products(self.products, sort_by)]

    def test_featured_keeps_catalog_order(self):
        self.assertEqual(self.ids("featured"), ["b", "a", "d", "c"])

    def test_unknown_sort_keeps_catalog_order(self):
        self.assertEqual(self.ids("popularity"), ["b", "a", "d", "c"])

    def test_price_low_is_stable(self):
        self.assertEqual(self.ids("price-low"), ["a", "c", "b", "d"])

    def test_price_high_is_stable(self):
        self.assertEqual(self.ids("price-high"), ["b", "d", "a", "c"])

    def test_rating_is_stable(self):
        self.assertEqual(self.ids("rating"), ["a", "b", "d", "c"])

    def test_newest_sorts_ids_descending(self):
        self.assertEqual(self.ids("newest"), ["d", "c", "b", "a"])

    def test_repeated_queries_are_identical(self):
        spec = FilterSpec(sort_by="price-low")
        self.assertEqual(query(self.products, spec), query(self.products, spec))


class PaginationTestCase(unittest.TestCase):
    def setUp(self):
        self.products = tuple(
            make_product(f"p{i:02d}", float(i)) for i in range(1, 26)
        )

    def test_pages(self):
        result = query(self.products, FilterSpec(), page=3, page_size=PAGE_SIZE)
        self.assertEqual(result.total_matched, 25)
        self.assertEqual(result.total_pages, 3)
        self.assertEqual([p.id for p in result.items], ["p25"])

        first = query(self.products, FilterSpec(), page=1)
        self.assertEqual(len(first.items), PAGE_SIZE)

    def test_out_of_range_pages_are_empty(self):
        self.assertEqual(query(self.products, FilterSpec(), page=4).items, ())
        self.assertEqual(paginate(self.products, 0, 5), ())
        self.assertEqual(paginate(self.products, -1, 5), ())

    def test_no_matches(self):
        result = query(self.products, FilterSpec(price_range=(500, 600)))
        self.assertEqual(result.items, ())
        self.assertEqual(result.total_matched, 0)
        self.assertEqual(result.total_pages, 0)

    def test_clamp_page(self):
        self.assertEqual(clamp_page(0, 3), 1)
        self.assertEqual(clamp_page(5, 3), 3)
        self.assertEqual(clamp_page(2, 3), 2)
        self.assertEqual(clamp_page(4, 0), 1)


if __name__ == "__main__":
    unittest.main()
