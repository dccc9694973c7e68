from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, MarkdownViewer, Select

from db.models import Product
from shop.actions import AddToCart, ToggleWishlist
from shop.store import Store, in_wishlist
from utils.pure import discount_percentage, format_price, generate_markdown_table


class ProdDetailModal(ModalScreen[bool]):
    """
    prod detail, plus size/color selection and ordering
    Will return true if cart changed, false if not
    """

    CSS = """
    #input-order-qty {
        width: 10;
    }
    #btn-sub-qty, #btn-add-qty {
        min-width: 4;
    }
    """

    order_qty = reactive(1)

    def __init__(self, store: Store, product: Product) -> None:
        super().__init__()
        self._store = store
        self._prod = product

    def compose(self) -> ComposeResult:
        prod = self._prod
        with Horizontal(id="hort-prod-detail"):
            yield MarkdownViewer(self._render_detail(), show_table_of_contents=False)
            with Vertical():
                yield Label("Size")
                yield Select(
                    [(s, s) for s in prod.sizes],
                    value=prod.sizes[0] if prod.sizes else Select.BLANK,
                    id="select-size",
                )
                yield Label("Color")
                yield Select(
                    [(c, c) for c in prod.colors],
                    value=prod.colors[0] if prod.colors else Select.BLANK,
                    id="select-color",
                )
                yield Label("Order Quantity")
                with Horizontal():
                    yield Button("-", id="btn-sub-qty", disabled=True)
                    yield Input(value="1", id="input-order-qty", type="integer")
                    yield Button("+", id="btn-add-qty")
                with Horizontal():
                    yield Button("Go Back", id="btn-quit")
                    yield Button(self._wishlist_label(), id="btn-wishlist")
                    yield Button("Add to Cart", id="btn-addcart", variant="primary")

    def on_mount(self):
        if not self._prod.in_stock:
            order_btn = self.query_one("#btn-addcart", Button)
            order_btn.label = "Out of Stock"
            order_btn.disabled = True
            order_btn.variant = "warning"

    def _render_detail(self) -> str:
        prod = self._prod
        table_rows = [
            ["Price", format_price(prod.price)],
            ["Category", prod.category],
            ["Sizes", ", ".join(prod.sizes)],
            ["Colors", ", ".join(prod.colors)],
            ["Rating", f"{prod.rating} ({prod.reviews} reviews)"],
            ["In stock", "Yes" if prod.in_stock else "No"],
        ]
        discount = discount_percentage(prod)
        if discount:
            table_rows.insert(
                1, ["Was", f"{format_price(prod.original_price)} (-{discount}%)"]
            )
        md_table_str = generate_markdown_table(
            ["Attribute", "Value"], table_rows, ["l", "l"]
        )
        return f"### {prod.name}\n\n{prod.description}\n\n{md_table_str}"

    def _wishlist_label(self) -> str:
        if in_wishlist(self._store.state, self._prod.id):
            return "Remove from Wishlist"
        return "Add to Wishlist"

    def on_key(self, event) -> None:
        if event.key == "escape":
            self.dismiss(False)

    def on_input_changed(self, message: Input.Changed) -> None:
        if message.input.id != "input-order-qty":
            return
        try:
            qty = int(message.value)
        except ValueError:
            return
        if qty >= 1 and qty != self.order_qty:
            self.order_qty = qty

    def watch_order_qty(self, qty: int):
        self.query_one("#btn-sub-qty", Button).disabled = qty <= 1
        qty_input = self.query_one("#input-order-qty", Input)
        if qty_input.value != str(qty):
            qty_input.value = str(qty)

    @on(Button.Pressed, "#btn-add-qty")
    def handle_add_qty(self):
        self.order_qty += 1

    @on(Button.Pressed, "#btn-sub-qty")
    def handle_sub_qty(self):
        self.order_qty = max(1, self.order_qty - 1)

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        self.dismiss(False)

    @on(Button.Pressed, "#btn-wishlist")
    def handle_wishlist(self):
        self._store.dispatch(ToggleWishlist(self._prod))
        self.query_one("#btn-wishlist", Button).label = self._wishlist_label()

    @on(Button.Pressed, "#btn-addcart")
    def handle_addcart(self):
        size = self.query_one("#select-size", Select).value
        color = self.query_one("#select-color", Select).value
        # the store trusts its callers to pick a size and color
        if size == Select.BLANK or color == Select.BLANK:
            self.app.notify("Please select a size and color.", severity="warning")
            return

        self._store.dispatch(AddToCart(self._prod, size, color, self.order_qty))
        self.app.notify(f"Added {self.order_qty} x {self._prod.name} to cart.")
        self.dismiss(True)
