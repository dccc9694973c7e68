"""
Durable cart/wishlist storage for a Store.

Two independent entries are kept, each a plain JSON array of flat objects:
the cart lines under CART_STORAGE_KEY and the wishlist products under
WISHLIST_STORAGE_KEY. There is no envelope or version field, so anything
that does not parse is treated as absent.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Optional, Protocol, Set

import db.crud
from db.models import CartLine, Product, ShoppingState
from shop.actions import AddToCart, AddToWishlist
from shop.errors import MalformedPersistedData, StorageUnavailable
from shop.store import Store
from utils.logger import get_logger

_logger = get_logger(__name__)

CART_STORAGE_KEY = "fashion-cart"
WISHLIST_STORAGE_KEY = "fashion-wishlist"


class Storage(Protocol):
    async def get_entry(self, key: str) -> Optional[str]: ...

    async def put_entry(self, key: str, value: str) -> None: ...


# ---------------------------
# Serialization
# ---------------------------


def dump_cart(state: ShoppingState) -> str:
    return json.dumps([line.to_dict() for line in state.cart])


def dump_wishlist(state: ShoppingState) -> str:
    return json.dumps([product.to_dict() for product in state.wishlist])


def _parse_array(raw: Optional[str], key: str) -> List[Any]:
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        _logger.warning(f"Stored '{key}' is not valid JSON, ignoring it.")
        return []
    if not isinstance(data, list):
        _logger.warning(f"Stored '{key}' is not an array, ignoring it.")
        return []
    return data


def load_cart_actions(raw: Optional[str]) -> List[AddToCart]:
    """Turn a stored cart into AddToCart actions, skipping entries that do not parse."""
    actions = []
    for idx, item in enumerate(_parse_array(raw, CART_STORAGE_KEY)):
        try:
            line = CartLine.from_dict(item)
        except (MalformedPersistedData, ValueError, TypeError) as e:
            _logger.warning(f"Skipping cart entry #{idx}: {e}")
            continue
        actions.append(
            AddToCart(
                product=line.product,
                size=line.selected_size,
                color=line.selected_color,
                quantity=line.quantity,
            )
        )
    return actions


def load_wishlist_actions(raw: Optional[str]) -> List[AddToWishlist]:
    actions = []
    for idx, item in enumerate(_parse_array(raw, WISHLIST_STORAGE_KEY)):
        try:
            product = Product.from_dict(item)
        except (MalformedPersistedData, ValueError, TypeError) as e:
            _logger.warning(f"Skipping wishlist entry #{idx}: {e}")
            continue
        actions.append(AddToWishlist(product))
    return actions


# ---------------------------
# Hydration
# ---------------------------


async def hydrate(store: Store, storage: Storage = db.crud) -> ShoppingState:
    """
    Rebuild cart and wishlist from durable storage.

    Persisted items are replayed through the regular add actions in one
    batch, so composite keys and merging are re-derived. If storage cannot
    be read the store keeps its current state.
    """
    try:
        raw_cart = await storage.get_entry(CART_STORAGE_KEY)
        raw_wishlist = await storage.get_entry(WISHLIST_STORAGE_KEY)
    except StorageUnavailable as e:
        _logger.warning(f"Hydration skipped, storage unavailable: {e}")
        return store.state

    actions = load_cart_actions(raw_cart) + load_wishlist_actions(raw_wishlist)
    _logger.debug(f"Hydrating {len(actions)} persisted item(s).")
    return store.dispatch_all(actions)


# ---------------------------
# Write-behind persistence
# ---------------------------


class CartPersister:
    """
    Store listener that writes cart/wishlist snapshots whenever they change.

    Writes are scheduled on the running event loop and never awaited by
    dispatch. Without a running loop the newest payload waits for flush().
    Failures are logged and dropped; the in-memory state stays as it is.
    """

    def __init__(self, storage: Storage = db.crud) -> None:
        self._storage = storage
        self._pending: Dict[str, str] = {}
        self._tasks: Set[asyncio.Task] = set()
        self._unsubscribe = None
        self._lock = asyncio.Lock()

    def attach(self, store: Store) -> "CartPersister":
        self._unsubscribe = store.subscribe(self)
        return self

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __call__(self, old: ShoppingState, new: ShoppingState, action) -> None:
        if new.cart is not old.cart:
            self._schedule(CART_STORAGE_KEY, dump_cart(new))
        if new.wishlist is not old.wishlist:
            self._schedule(WISHLIST_STORAGE_KEY, dump_wishlist(new))

    @property
    def pending(self) -> Dict[str, str]:
        return dict(self._pending)

    def _schedule(self, key: str, payload: str) -> None:
        self._pending[key] = payload
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self._write(key))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _write(self, key: str) -> None:
        # one write at a time, so an older snapshot never lands after a newer one
        async with self._lock:
            payload = self._pending.pop(key, None)
            if payload is None:
                # a newer task already wrote this key
                return
            try:
                await self._storage.put_entry(key, payload)
            except (StorageUnavailable, OSError) as e:
                _logger.warning(f"Could not persist '{key}': {e}")

    async def flush(self) -> None:
        """Wait for in-flight writes and write anything still pending."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
        for key in list(self._pending):
            await self._write(key)
