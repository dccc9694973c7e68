import os
import sys
import unittest

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from db.models import CartKey, FilterSpec, Product, ShoppingState  # noqa: E402
from shop.actions import (  # noqa: E402
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
from shop.store import (  # noqa: E402
    Store,
    cart_item_count,
    find_line,
    in_wishlist,
    reduce,
    wishlist_count,
)


def make_product(pid="A", price=50.0, **kwargs) -> Product:
    kwargs.setdefault("sizes", ("S", "M", "L"))
    kwargs.setdefault("colors", ("Black", "Navy"))
    return Product(id=pid, name=f"Product {pid}", price=price, **kwargs)


class UnknownAction:
    pass


class ReducerTestCase(unittest.TestCase):
    def setUp(self):
        self.a = make_product("A")
        self.b = make_product("B", price=30.0)

    # ---------- Cart ----------

    def test_add_same_key_merges_quantity(self):
        state = reduce(ShoppingState(), AddToCart(self.a, "M", "Black", 1))
        state = reduce(state, AddToCart(self.a, "M", "Black", 2))
        self.assertEqual(len(state.cart), 1)
        self.assertEqual(state.cart[0].quantity, 3)
        self.assertEqual(state.cart[0].key, CartKey("A", "M", "Black"))

    def test_add_many_same_key_sums_quantities(self):
        state = ShoppingState()
        quantities = [1, 4, 2, 7, 1]
        for qty in quantities:
            state = reduce(state, AddToCart(self.a, "L", "Navy", qty))
        self.assertEqual(len(state.cart), 1)
        self.assertEqual(state.cart[0].quantity, sum(quantities))

    def test_different_size_or_color_are_distinct_lines(self):
        state = ShoppingState()
        state = reduce(state, AddToCart(self.a, "M", "Black", 1))
        state = reduce(state, AddToCart(self.a, "L", "Black", 1))
        state = reduce(state, AddToCart(self.a, "M", "Navy", 1))
        self.assertEqual(
            [line.key for line in state.cart],
            [
                CartKey("A", "M", "Black"),
                CartKey("A", "L", "Black"),
                CartKey("A", "M", "Navy"),
            ],
        )

    def test_delimiter_in_key_parts_is_harmless(self):
        odd = make_product("A-1", sizes=("M-L",), colors=("Black-White",))
        state = reduce(ShoppingState(), AddToCart(odd, "M-L", "Black-White", 1))
        state = reduce(state, AddToCart(self.a, "M", "Black", 1))
        state = reduce(state, RemoveFromCart(CartKey("A-1", "M-L", "Black-White")))
        self.assertEqual([line.product.id for line in state.cart], ["A"])

    def test_add_non_positive_quantity_is_noop(self):
        state = ShoppingState()
        self.assertIs(reduce(state, AddToCart(self.a, "M", "Black", 0)), state)
        self.assertIs(reduce(state, AddToCart(self.a, "M", "Black", -3)), state)

    def test_remove_absent_key_leaves_cart_unchanged(self):
        state = reduce(ShoppingState(), AddToCart(self.a, "M", "Black", 2))
        after = reduce(state, RemoveFromCart(CartKey("A", "S", "Black")))
        self.assertIs(after, state)
        self.assertEqual(after.cart, state.cart)

    def test_remove_matching_line(self):
        state = reduce(ShoppingState(), AddToCart(self.a, "M", "Black", 2))
        state = reduce(state, AddToCart(self.b, "S", "Navy", 1))
        state = reduce(state, RemoveFromCart(CartKey("A", "M", "Black")))
        self.assertEqual([line.product.id for line in state.cart], ["B"])

    def test_update_quantity_sets_value(self):
        key = CartKey("A", "M", "Black")
        state = reduce(ShoppingState(), AddToCart(self.a, "M", "Black", 2))
        state = reduce(state, UpdateCartQuantity(key, 5))
        self.assertEqual(find_line(state, key).quantity, 5)

    def test_update_quantity_zero_or_negative_removes_line(self):
        key = CartKey("A", "M", "Black")
        state = reduce(ShoppingState(), AddToCart(self.a, "M", "Black", 2))
        self.assertEqual(reduce(state, UpdateCartQuantity(key, 0)).cart, ())
        self.assertEqual(reduce(state, UpdateCartQuantity(key, -1)).cart, ())

    def test_update_quantity_only_touches_its_key(self):
        state = reduce(ShoppingState(), AddToCart(self.a, "M", "Black", 1))
        state = reduce(state, AddToCart(self.a, "L", "Black", 1))
        state = reduce(state, UpdateCartQuantity(CartKey("A", "L", "Black"), 4))
        self.assertEqual([line.quantity for line in state.cart], [1, 4])

    def test_update_quantity_absent_key_is_noop(self):
        state = reduce(ShoppingState(), AddToCart(self.a, "M", "Black", 1))
        self.assertIs(
            reduce(state, UpdateCartQuantity(CartKey("Z", "M", "Black"), 3)), state
        )

    def test_clear_cart_is_idempotent(self):
        state = reduce(ShoppingState(), AddToCart(self.a, "M", "Black", 1))
        cleared = reduce(state, ClearCart())
        self.assertEqual(cleared.cart, ())
        self.assertIs(reduce(cleared, ClearCart()), cleared)

    # ---------- Wishlist ----------

    def test_add_to_wishlist_twice_equals_once(self):
        once = reduce(ShoppingState(), AddToWishlist(self.a))
        twice = reduce(once, AddToWishlist(self.a))
        self.assertIs(twice, once)
        self.assertEqual([p.id for p in twice.wishlist], ["A"])

    def test_remove_from_wishlist(self):
        state = reduce(ShoppingState(), AddToWishlist(self.a))
        state = reduce(state, AddToWishlist(self.b))
        state = reduce(state, RemoveFromWishlist("A"))
        self.assertEqual([p.id for p in state.wishlist], ["B"])
        self.assertIs(reduce(state, RemoveFromWishlist("missing")), state)

    def test_toggle_wishlist(self):
        state = reduce(ShoppingState(), ToggleWishlist(self.a))
        self.assertTrue(in_wishlist(state, "A"))
        state = reduce(state, ToggleWishlist(self.a))
        self.assertFalse(in_wishlist(state, "A"))

    # ---------- Catalog & filters ----------

    def test_set_products_replaces_catalog(self):
        state = reduce(ShoppingState(), SetProducts([self.a]))
        state = reduce(state, SetProducts([self.b]))
        self.assertEqual(state.products, (self.b,))

    def test_set_filters_shallow_merges(self):
        state = reduce(ShoppingState(), SetFilters(sizes=["M"], sort_by="rating"))
        state = reduce(state, SetFilters(price_range=(10, 200)))
        self.assertEqual(
            state.filters,
            FilterSpec(price_range=(10, 200), sizes=("M",), sort_by="rating"),
        )

    def test_set_filters_rejects_inverted_price_range(self):
        state = reduce(ShoppingState(), SetFilters(price_range=(10, 200)))
        self.assertIs(reduce(state, SetFilters(price_range=(500, 0))), state)
        # the whole action is dropped, not just the bad field
        self.assertIs(
            reduce(state, SetFilters(price_range=(500, 0), sort_by="rating")), state
        )
        low, high = Store(state).dispatch(SetFilters(price_range=(500, 0))).filters.price_range
        self.assertLessEqual(low, high)

    def test_set_filters_single_string_is_one_value(self):
        state = reduce(ShoppingState(), SetFilters(sizes="XL", colors="Navy", brands="Acme"))
        self.assertEqual(state.filters.sizes, ("XL",))
        self.assertEqual(state.filters.colors, ("Navy",))
        self.assertEqual(state.filters.brands, ("Acme",))

    def test_set_filters_ignores_unknown_fields(self):
        state = ShoppingState()
        self.assertIs(reduce(state, SetFilters(flavour="mint")), state)

    def test_reset_filters(self):
        state = reduce(ShoppingState(), SetFilters(colors=["Black"]))
        state = reduce(state, ResetFilters())
        self.assertEqual(state.filters, FilterSpec())

    def test_unknown_action_returns_same_state(self):
        state = ShoppingState()
        self.assertIs(reduce(state, UnknownAction()), state)

    # ---------- Selectors ----------

    def test_counts(self):
        state = reduce(ShoppingState(), AddToCart(self.a, "M", "Black", 2))
        state = reduce(state, AddToCart(self.b, "S", "Navy", 3))
        state = reduce(state, AddToWishlist(self.a))
        self.assertEqual(cart_item_count(state), 5)
        self.assertEqual(wishlist_count(state), 1)


class StoreTestCase(unittest.TestCase):
    def setUp(self):
        self.store = Store()
        self.product = make_product("A")
        self.calls = []
        self.store.subscribe(lambda old, new, action: self.calls.append(action))

    def test_dispatch_replaces_state_and_notifies(self):
        before = self.store.state
        action = AddToCart(self.product, "M", "Black", 1)
        after = self.store.dispatch(action)
        self.assertIsNot(after, before)
        self.assertIs(self.store.state, after)
        self.assertEqual(before.cart, ())
        self.assertEqual(self.calls, [action])

    def test_noop_dispatch_does_not_notify(self):
        self.store.dispatch(RemoveFromCart(CartKey("A", "M", "Black")))
        self.store.dispatch(UnknownAction())
        self.assertEqual(self.calls, [])

    def test_dispatch_never_raises_on_reducer_error(self):
        before = self.store.state
        # None has no id, the reducer raises and the store swallows it
        result = self.store.dispatch(AddToCart(None, "M", "Black", 1))
        self.assertIs(result, before)
        self.assertIs(self.store.state, before)
        self.assertEqual(self.calls, [])

    def test_listener_failure_does_not_propagate(self):
        def broken(old, new, action):
            raise RuntimeError("boom")

        self.store.subscribe(broken)
        state = self.store.dispatch(AddToWishlist(self.product))
        self.assertTrue(in_wishlist(state, "A"))
        self.assertEqual(len(self.calls), 1)

    def test_unsubscribe(self):
        seen = []
        unsubscribe = self.store.subscribe(lambda old, new, action: seen.append(new))
        unsubscribe()
        unsubscribe()
        self.store.dispatch(AddToWishlist(self.product))
        self.assertEqual(seen, [])

    def test_dispatch_all_is_atomic(self):
        before = self.store.state
        result = self.store.dispatch_all(
            [
                AddToCart(self.product, "M", "Black", 1),
                AddToCart(None, "M", "Black", 1),
            ]
        )
        self.assertIs(result, before)
        self.assertEqual(self.store.state.cart, ())
        self.assertEqual(self.calls, [])

    def test_dispatch_all_notifies_once(self):
        self.store.dispatch_all(
            [
                AddToCart(self.product, "M", "Black", 1),
                AddToCart(self.product, "M", "Black", 2),
                AddToWishlist(self.product),
            ]
        )
        self.assertEqual(len(self.calls), 1)
        self.assertEqual(self.store.state.cart[0].quantity, 3)


if __name__ == "__main__":
    unittest.main()
