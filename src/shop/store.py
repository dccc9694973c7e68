from __future__ import annotations

import dataclasses
from typing import Callable, Iterable, List, Optional

from db.models import CartKey, CartLine, FilterSpec, Product, ShoppingState
from shop.actions import (
    AddToCart,
    AddToWishlist,
    ClearCart,
    RemoveFromCart,
    RemoveFromWishlist,
    ResetFilters,
    SetFilters,
    SetProducts,
    ToggleWishlist,
    UpdateCartQuantity,
)
from utils.logger import get_logger

_logger = get_logger(__name__)

Listener = Callable[[ShoppingState, ShoppingState, object], None]

_FILTER_FIELDS = {f.name for f in dataclasses.fields(FilterSpec)}
_TUPLE_FILTER_FIELDS = {"sizes", "colors", "brands"}


# ---------------------------
# Cart
# ---------------------------


def _add_to_cart(state: ShoppingState, action: AddToCart) -> ShoppingState:
    if action.quantity <= 0:
        return state

    key = CartKey(action.product.id, action.size, action.color)
    cart = list(state.cart)
    for idx, line in enumerate(cart):
        if line.key == key:
            cart[idx] = line.with_quantity(line.quantity + action.quantity)
            break
    else:
        cart.append(
            CartLine(
                product=action.product,
                quantity=action.quantity,
                selected_size=action.size,
                selected_color=action.color,
            )
        )
    return dataclasses.replace(state, cart=tuple(cart))


def _remove_from_cart(state: ShoppingState, key: CartKey) -> ShoppingState:
    cart = tuple(line for line in state.cart if line.key != key)
    if len(cart) == len(state.cart):
        return state
    return dataclasses.replace(state, cart=cart)


def _update_cart_quantity(
    state: ShoppingState, action: UpdateCartQuantity
) -> ShoppingState:
    # quantity <= 0 never leaves a zero line behind
    if action.quantity <= 0:
        return _remove_from_cart(state, action.key)

    changed = False
    cart = []
    for line in state.cart:
        if line.key == action.key and line.quantity != action.quantity:
            line = line.with_quantity(action.quantity)
            changed = True
        cart.append(line)
    if not changed:
        return state
    return dataclasses.replace(state, cart=tuple(cart))


def _clear_cart(state: ShoppingState) -> ShoppingState:
    if not state.cart:
        return state
    return dataclasses.replace(state, cart=())


# ---------------------------
# Wishlist
# ---------------------------


def _add_to_wishlist(state: ShoppingState, product: Product) -> ShoppingState:
    if in_wishlist(state, product.id):
        return state
    return dataclasses.replace(state, wishlist=state.wishlist + (product,))


def _remove_from_wishlist(state: ShoppingState, product_id: str) -> ShoppingState:
    wishlist = tuple(p for p in state.wishlist if p.id != product_id)
    if len(wishlist) == len(state.wishlist):
        return state
    return dataclasses.replace(state, wishlist=wishlist)


# ---------------------------
# Catalog & filters
# ---------------------------


def _set_filters(state: ShoppingState, action: SetFilters) -> ShoppingState:
    changes = {}
    for name, value in action.changes.items():
        if name not in _FILTER_FIELDS:
            _logger.debug(f"Ignoring unknown filter field '{name}'.")
            continue
        if name in _TUPLE_FILTER_FIELDS:
            value = (value,) if isinstance(value, str) else tuple(value)
        elif name == "price_range":
            low, high = value
            if low > high:
                _logger.debug(f"Rejecting inverted price range {low}..{high}.")
                return state
            value = (low, high)
        changes[name] = value
    filters = dataclasses.replace(state.filters, **changes)
    if filters == state.filters:
        return state
    return dataclasses.replace(state, filters=filters)


def reduce(state: ShoppingState, action: object) -> ShoppingState:
    """
    Pure reduction of one action.

    Returns the same state object when the action changes nothing, including
    for action types it does not know.
    """
    if isinstance(action, AddToCart):
        return _add_to_cart(state, action)
    if isinstance(action, RemoveFromCart):
        return _remove_from_cart(state, action.key)
    if isinstance(action, UpdateCartQuantity):
        return _update_cart_quantity(state, action)
    if isinstance(action, ClearCart):
        return _clear_cart(state)
    if isinstance(action, AddToWishlist):
        return _add_to_wishlist(state, action.product)
    if isinstance(action, RemoveFromWishlist):
        return _remove_from_wishlist(state, action.product_id)
    if isinstance(action, ToggleWishlist):
        if in_wishlist(state, action.product.id):
            return _remove_from_wishlist(state, action.product.id)
        return _add_to_wishlist(state, action.product)
    if isinstance(action, SetProducts):
        return dataclasses.replace(state, products=action.products)
    if isinstance(action, SetFilters):
        return _set_filters(state, action)
    if isinstance(action, ResetFilters):
        if state.filters == FilterSpec():
            return state
        return dataclasses.replace(state, filters=FilterSpec())

    _logger.debug(f"Unknown action {type(action).__name__}, state unchanged.")
    return state


# ---------------------------
# Selectors
# ---------------------------


def cart_item_count(state: ShoppingState) -> int:
    return sum(line.quantity for line in state.cart)


def wishlist_count(state: ShoppingState) -> int:
    return len(state.wishlist)


def in_wishlist(state: ShoppingState, product_id: str) -> bool:
    return any(p.id == product_id for p in state.wishlist)


def find_line(state: ShoppingState, key: CartKey) -> Optional[CartLine]:
    for line in state.cart:
        if line.key == key:
            return line
    return None


class Store:
    """
    Owns the authoritative ShoppingState.

    Construct one per application session and pass it to whoever needs it.
    State only changes through dispatch; each change swaps in a whole new
    snapshot and then notifies subscribers synchronously.
    """

    def __init__(self, initial: Optional[ShoppingState] = None) -> None:
        self._state = initial if initial is not None else ShoppingState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> ShoppingState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener(old_state, new_state, action); returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: object) -> ShoppingState:
        """Apply a single action. Never raises."""
        return self.dispatch_all([action], label=action)

    def dispatch_all(
        self, actions: Iterable[object], label: object = None
    ) -> ShoppingState:
        """
        Apply a batch of actions as one transition.
        Either every action is applied or the state is left untouched.
        """
        old = self._state
        new = old
        try:
            for action in actions:
                new = reduce(new, action)
        except Exception:
            _logger.exception("Reducer failed, keeping previous state.")
            return old

        if new is old:
            return old

        self._state = new
        self._notify(old, new, label)
        return new

    def _notify(self, old: ShoppingState, new: ShoppingState, action) -> None:
        for listener in list(self._listeners):
            try:
                listener(old, new, action)
            except Exception:
                _logger.exception(f"State listener {listener!r} failed.")
