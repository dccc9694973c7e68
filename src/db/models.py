# provide dataclass models

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, NamedTuple, Optional, Tuple

from shop.errors import MalformedPersistedData

CATEGORIES: Tuple[str, ...] = (
    "All",
    "Dresses",
    "Tops",
    "Bottoms",
    "Outerwear",
    "Shoes",
    "Accessories",
)

SORT_OPTIONS: Tuple[str, ...] = (
    "featured",
    "price-low",
    "price-high",
    "newest",
    "rating",
)


def _require(data: Dict[str, Any], name: str, types) -> Any:
    if name not in data:
        raise MalformedPersistedData(f"missing field '{name}'")
    value = data[name]
    # bool is an int subclass, never accept it as a number
    if isinstance(value, bool) and bool not in types:
        raise MalformedPersistedData(f"field '{name}' has wrong type")
    if not isinstance(value, types):
        raise MalformedPersistedData(f"field '{name}' has wrong type")
    return value


def _str_tuple(data: Dict[str, Any], name: str) -> Tuple[str, ...]:
    values = _require(data, name, (list, tuple))
    if not all(isinstance(v, str) for v in values):
        raise MalformedPersistedData(f"field '{name}' must hold strings")
    return tuple(values)


def _number(data: Dict[str, Any], name: str, types=(int, float)) -> Any:
    value = _require(data, name, types)
    # json.loads turns 1e400 and NaN into non-finite floats, and keeps huge ints exact
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise MalformedPersistedData(f"field '{name}' is not a finite number")
    if value < 0:
        raise MalformedPersistedData(f"field '{name}' cannot be negative")
    return value


def _optional(data: Dict[str, Any], name: str, types, default) -> Any:
    value = data.get(name, default)
    return value if isinstance(value, types) else default


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: float
    image: str = ""
    category: str = ""
    sizes: Tuple[str, ...] = ()
    colors: Tuple[str, ...] = ()
    description: str = ""
    in_stock: bool = True
    rating: float = 0.0
    reviews: int = 0
    original_price: Optional[float] = None
    brand: Optional[str] = None  # not carried by the reference catalog

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "category": self.category,
            "sizes": list(self.sizes),
            "colors": list(self.colors),
            "description": self.description,
            "inStock": self.in_stock,
            "rating": self.rating,
            "reviews": self.reviews,
        }
        if self.original_price is not None:
            data["originalPrice"] = self.original_price
        if self.brand is not None:
            data["brand"] = self.brand
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Product":
        """
        Build a product from its flat storage form.

        Raises MalformedPersistedData when a required field is missing or
        carries the wrong type, and when a number is negative or not finite.
        Optional text fields of the wrong type fall back to defaults.
        """
        if not isinstance(data, dict):
            raise MalformedPersistedData("product entry is not an object")

        price = _number(data, "price")
        original_price = None
        if data.get("originalPrice") is not None:
            original_price = float(_number(data, "originalPrice"))
        rating = _number(data, "rating") if data.get("rating") is not None else 0
        reviews = _number(data, "reviews", (int,)) if data.get("reviews") is not None else 0

        return cls(
            id=_require(data, "id", (str,)),
            name=_require(data, "name", (str,)),
            price=float(price),
            image=_optional(data, "image", (str,), ""),
            category=_optional(data, "category", (str,), ""),
            sizes=_str_tuple(data, "sizes"),
            colors=_str_tuple(data, "colors"),
            description=_optional(data, "description", (str,), ""),
            in_stock=_require(data, "inStock", (bool,)) if "inStock" in data else True,
            rating=float(rating),
            reviews=reviews,
            original_price=original_price,
            brand=_optional(data, "brand", (str,), None),
        )


class CartKey(NamedTuple):
    """Identity of a cart line: the same product in another size or color is a different line."""

    product_id: str
    size: str
    color: str


@dataclass(frozen=True)
class CartLine:
    product: Product
    quantity: int
    selected_size: str
    selected_color: str

    @property
    def key(self) -> CartKey:
        return CartKey(self.product.id, self.selected_size, self.selected_color)

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity

    def with_quantity(self, quantity: int) -> "CartLine":
        return replace(self, quantity=quantity)

    def to_dict(self) -> Dict[str, Any]:
        data = self.product.to_dict()
        data["quantity"] = self.quantity
        data["selectedSize"] = self.selected_size
        data["selectedColor"] = self.selected_color
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "CartLine":
        product = Product.from_dict(data)
        quantity = _require(data, "quantity", (int,))
        if quantity < 1:
            raise MalformedPersistedData("quantity must be at least 1")
        return cls(
            product=product,
            quantity=quantity,
            selected_size=_require(data, "selectedSize", (str,)),
            selected_color=_require(data, "selectedColor", (str,)),
        )


@dataclass(frozen=True)
class FilterSpec:
    price_range: Tuple[float, float] = (0, 1000)
    sizes: Tuple[str, ...] = ()
    colors: Tuple[str, ...] = ()
    sort_by: str = "featured"
    category: str = "All"
    brands: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ShoppingState:
    """
    Snapshot of everything the storefront shows.

    Fields:
      - cart: cart lines in insertion order, one per CartKey
      - wishlist: products in insertion order, one per product id
      - products: the catalog, set once at load
      - categories: fixed category list for navigation
      - filters: the active FilterSpec
    """

    cart: Tuple[CartLine, ...] = ()
    wishlist: Tuple[Product, ...] = ()
    products: Tuple[Product, ...] = ()
    categories: Tuple[str, ...] = CATEGORIES
    filters: FilterSpec = field(default_factory=FilterSpec)
