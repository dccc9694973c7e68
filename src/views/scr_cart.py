from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, VerticalScroll
from textual.events import ScreenResume
from textual.widgets import Button, Label, Rule

from db.models import CartLine
from shop.actions import ClearCart, RemoveFromCart, UpdateCartQuantity
from shop.store import Store
from utils.messages import StateChangedMessage
from utils.pure import cart_summary, format_price
from views.base_screen import BaseScreen
from views.modal_dialog import DialogModal


class CartLineWidget(Horizontal):
    """One cart line with quantity controls; talks to the store directly."""

    DEFAULT_CSS = """
    CartLineWidget {
        height: auto;
    }
    CartLineWidget Button {
        min-width: 4;
    }
    """

    def __init__(self, store: Store, line: CartLine):
        super().__init__()
        self._store = store
        self.line = line

    def compose(self) -> ComposeResult:
        line = self.line
        with Container(classes="div-item"):
            yield Label(line.product.name, classes="label-item-name")
            yield Label(
                f"{line.selected_size} • {line.selected_color}",
                classes="label-item-variant",
            )
            yield Label(format_price(line.product.price), classes="label-item-price")
        yield Button("-", classes="btn-qty-sub")
        yield Label(str(line.quantity), classes="label-item-qty")
        yield Button("+", classes="btn-qty-add")
        yield Button("Remove", classes="btn-remove", variant="error")

    @on(Button.Pressed, ".btn-qty-sub")
    def handle_sub_qty(self):
        # dropping to zero removes the line
        self._store.dispatch(UpdateCartQuantity(self.line.key, self.line.quantity - 1))

    @on(Button.Pressed, ".btn-qty-add")
    def handle_add_qty(self):
        self._store.dispatch(UpdateCartQuantity(self.line.key, self.line.quantity + 1))

    @on(Button.Pressed, ".btn-remove")
    def handle_remove(self):
        def confirmed(remove: bool) -> None:
            if remove:
                self._store.dispatch(RemoveFromCart(self.line.key))
                self.app.notify("Item removed from cart.", severity="information")

        self.app.push_screen(
            DialogModal(
                "Do you really want to remove this item from cart?",
                primary_text="Yes",
                secondary_text="No",
                tone="warning",
            ),
            confirmed,
        )


class CartScreen(BaseScreen):
    """
    cart lines, totals and shipping
    """

    MODE = "cart"

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield VerticalScroll(id="vertscroll-content")
        yield Label("", id="label-cart-subtotal")
        yield Label("", id="label-cart-shipping")
        yield Label("", id="label-cart-total")
        yield Label("", id="label-free-shipping")
        yield Rule(line_style="dashed")
        with Horizontal(id="hort-buttons"):
            yield Button("Clear Cart", id="btn-clear-cart")

    async def on_mount(self):
        await self.render_cart()

    @on(StateChangedMessage)
    async def handle_state_changed(self, message: StateChangedMessage):
        if message.cart_changed:
            await self.render_cart()

    @on(ScreenResume)
    async def handle_resume(self):
        await self.render_cart()

    async def render_cart(self):
        cart = self.store.state.cart
        content = self.query_one("#vertscroll-content")

        if [w.line for w in content.query(CartLineWidget)] != list(cart):
            await content.remove_children()
            await content.mount_all([CartLineWidget(self.store, line) for line in cart])

        if not cart:
            content.add_class("no-items")
        else:
            content.remove_class("no-items")

        summary = cart_summary(cart)
        shipping = "Free" if summary.shipping == 0 else format_price(summary.shipping)
        self.query_one("#label-cart-subtotal", Label).update(
            f"Subtotal: {format_price(summary.subtotal)}"
        )
        self.query_one("#label-cart-shipping", Label).update(f"Shipping: {shipping}")
        self.query_one("#label-cart-total", Label).update(
            f"Total: {format_price(summary.total)}"
        )
        free_shipping = ""
        if cart and summary.free_shipping_remaining > 0:
            free_shipping = (
                f"Add {format_price(summary.free_shipping_remaining)} more "
                "for free shipping!"
            )
        self.query_one("#label-free-shipping", Label).update(free_shipping)

    @on(Button.Pressed, "#btn-clear-cart")
    def handle_clear_cart(self) -> None:
        if not self.store.state.cart:
            self.app.notify("Cart is empty.", severity="warning")
            return

        def confirmed(clear: bool) -> None:
            if clear:
                self.store.dispatch(ClearCart())

        self.app.push_screen(
            DialogModal(
                "Do you really want to remove all items from cart?",
                primary_text="Yes",
                secondary_text="No",
                tone="error",
            ),
            confirmed,
        )
