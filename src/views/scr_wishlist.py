from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.events import ScreenResume
from textual.widgets import Button, DataTable

from shop.actions import RemoveFromWishlist
from utils.messages import StateChangedMessage
from utils.pure import format_price
from views.base_screen import BaseScreen
from views.modal_prod_detail import ProdDetailModal


class WishlistScreen(BaseScreen):
    MODE = "wishlist"

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield DataTable(id="table-wishlist")
        with Horizontal(id="hort-buttons"):
            yield Button("Remove Selected", id="btn-remove", variant="error")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("ID", "Name", "Price", "In Stock")
        self.render_wishlist()

    @on(StateChangedMessage)
    def handle_state_changed(self, message: StateChangedMessage):
        if message.wishlist_changed:
            self.render_wishlist()

    @on(ScreenResume)
    def handle_resume(self):
        self.render_wishlist()

    def render_wishlist(self):
        table = self.query_one(DataTable)
        table.clear()
        for prod in self.store.state.wishlist:
            table.add_row(
                prod.id,
                prod.name,
                format_price(prod.price),
                "Yes" if prod.in_stock else "No",
                key=prod.id,
            )

    @on(DataTable.RowSelected)
    def handle_row_selected(self, event: DataTable.RowSelected):
        pid = event.row_key.value
        for prod in self.store.state.wishlist:
            if prod.id == pid:
                self.app.push_screen(ProdDetailModal(self.store, prod))
                break

    @on(Button.Pressed, "#btn-remove")
    def handle_remove(self):
        table = self.query_one(DataTable)
        if not table.row_count:
            self.app.notify("Wishlist is empty.", severity="warning")
            return
        pid = table.get_row_at(table.cursor_row)[0]
        self.store.dispatch(RemoveFromWishlist(pid))
