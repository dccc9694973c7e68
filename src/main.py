from functools import partial

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

import db.crud
from db.models import ShoppingState
from db.seed import SEED_PRODUCTS
from shop.actions import SetProducts
from shop.persistence import CartPersister, hydrate
from shop.store import Store
from utils.logger import get_logger
from utils.messages import QuitRequestedMessage, StateChangedMessage
from views.scr_cart import CartScreen
from views.scr_catalog import CatalogScreen
from views.scr_wishlist import WishlistScreen

_logger = get_logger(__name__)


class StorefrontApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MENU = {
        "catalog": "Shop",
        "cart": "Cart",
        "wishlist": "Wishlist",
    }

    CSS = """
    Sidebar {
        dock: left;
        width: 28;
        padding: 0 1;
    }
    #div-dialog {
        width: 60;
        height: auto;
        align: center middle;
    }
    .no-items {
        height: 3;
    }
    """

    store: Store

    def __init__(self, store: Store = None, storage=db.crud, products=SEED_PRODUCTS):
        super().__init__()
        self.store = store if store is not None else Store()
        self._storage = storage
        self._products = products
        self._persister = CartPersister(storage).attach(self.store)
        self.store.subscribe(self._on_state_change)

        self.add_mode("catalog", partial(CatalogScreen, self.store, self.MENU["catalog"]))
        self.add_mode("cart", partial(CartScreen, self.store, self.MENU["cart"]))
        self.add_mode(
            "wishlist", partial(WishlistScreen, self.store, self.MENU["wishlist"])
        )

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        self.title = "Storefront"
        self.main_flow()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    def _on_state_change(self, old: ShoppingState, new: ShoppingState, action) -> None:
        self.screen.post_message(StateChangedMessage(old, new))

    async def action_quit(self) -> None:
        await self._persister.flush()
        self.exit()

    @on(QuitRequestedMessage)
    async def handle_quit(self):
        await self.action_quit()

    @work
    async def main_flow(self):
        self.store.dispatch(SetProducts(self._products))
        state = await hydrate(self.store, self._storage)
        _logger.info(
            f"Loaded {len(state.products)} products, {len(state.cart)} cart line(s), "
            f"{len(state.wishlist)} wishlist item(s)."
        )
        await self.switch_mode("catalog")


def main():
    app = StorefrontApp()
    app.run()


if __name__ == "__main__":
    main()
