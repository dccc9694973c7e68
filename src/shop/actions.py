# actions accepted by Store.dispatch

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from db.models import CartKey, Product


@dataclass(frozen=True)
class AddToCart:
    product: Product
    size: str
    color: str
    quantity: int = 1


@dataclass(frozen=True)
class RemoveFromCart:
    key: CartKey


@dataclass(frozen=True)
class UpdateCartQuantity:
    key: CartKey
    quantity: int


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class AddToWishlist:
    product: Product


@dataclass(frozen=True)
class RemoveFromWishlist:
    product_id: str


@dataclass(frozen=True)
class ToggleWishlist:
    product: Product


@dataclass(frozen=True)
class SetProducts:
    products: Tuple[Product, ...]

    def __init__(self, products):
        object.__setattr__(self, "products", tuple(products))


@dataclass(frozen=True)
class SetFilters:
    """
    Shallow-merge into the current FilterSpec.
    Only the given keyword fields change, e.g. SetFilters(sizes=("M",)).
    """

    changes: Dict[str, Any] = field(default_factory=dict)

    def __init__(self, **changes):
        object.__setattr__(self, "changes", dict(changes))


@dataclass(frozen=True)
class ResetFilters:
    pass
