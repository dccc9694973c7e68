from __future__ import annotations

from math import ceil
from typing import Iterable, NamedTuple, Sequence, Tuple

from db.models import FilterSpec, Product

PAGE_SIZE = 12


class QueryResult(NamedTuple):
    items: Tuple[Product, ...]
    total_matched: int
    total_pages: int


def _matches(product: Product, filters: FilterSpec) -> bool:
    low, high = filters.price_range
    if product.price < low or product.price > high:
        return False

    if filters.category and filters.category != "All":
        if product.category != filters.category:
            return False

    if filters.sizes and not any(s in product.sizes for s in filters.sizes):
        return False

    if filters.colors and not any(c in product.colors for c in filters.colors):
        return False

    # filters.brands: products carry no brand data, so brand never excludes
    return True


def filter_products(
    products: Iterable[Product], filters: FilterSpec
) -> Tuple[Product, ...]:
    return tuple(p for p in products if _matches(p, filters))


def sort_products(products: Sequence[Product], sort_by: str) -> Tuple[Product, ...]:
    """
    Order products for display. sorted() is stable, so ties keep catalog
    order. "newest" compares ids, which is only as good as id assignment.
    Unrecognised values behave like "featured".
    """
    if sort_by == "price-low":
        return tuple(sorted(products, key=lambda p: p.price))
    if sort_by == "price-high":
        return tuple(sorted(products, key=lambda p: p.price, reverse=True))
    if sort_by == "newest":
        return tuple(sorted(products, key=lambda p: p.id, reverse=True))
    if sort_by == "rating":
        return tuple(sorted(products, key=lambda p: p.rating, reverse=True))
    return tuple(products)


def paginate(
    products: Sequence[Product], page: int, page_size: int = PAGE_SIZE
) -> Tuple[Product, ...]:
    """Slice out a 1-based page; pages out of range come back empty."""
    if page < 1 or page_size < 1:
        return ()
    start = (page - 1) * page_size
    return tuple(products[start : start + page_size])


def total_pages(matched: int, page_size: int = PAGE_SIZE) -> int:
    if page_size < 1:
        return 0
    return ceil(matched / page_size)


def clamp_page(page: int, page_cnt: int) -> int:
    """Keep a requested page inside 1..page_cnt, for callers driving pagination."""
    return min(max(page, 1), max(page_cnt, 1))


def query(
    products: Iterable[Product],
    filters: FilterSpec,
    page: int = 1,
    page_size: int = PAGE_SIZE,
) -> QueryResult:
    matched = sort_products(filter_products(products, filters), filters.sort_by)
    return QueryResult(
        items=paginate(matched, page, page_size),
        total_matched=len(matched),
        total_pages=total_pages(len(matched), page_size),
    )
