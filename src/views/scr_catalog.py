from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.events import ScreenResume
from textual.reactive import reactive
from textual.widgets import Button, DataTable, Input, Label, Select

from db.models import SORT_OPTIONS
from shop.actions import ResetFilters, SetFilters
from shop.query import PAGE_SIZE, clamp_page, query
from shop.store import in_wishlist
from utils.messages import StateChangedMessage
from utils.pure import discount_percentage, format_price
from views.base_screen import BaseScreen
from views.modal_prod_detail import ProdDetailModal

SORT_LABELS = {
    "featured": "Featured",
    "price-low": "Price: Low to High",
    "price-high": "Price: High to Low",
    "newest": "Newest",
    "rating": "Best Rating",
}


def _split_csv(value: str) -> tuple:
    return tuple(v.strip() for v in value.split(",") if v.strip())


class CatalogScreen(BaseScreen):
    """
    browse the catalog with filters, sorting and pagination
    """

    CSS = """
    #input-page {
        width: 16;
    }
    #hort-filters Input, #hort-filters Select {
        width: 1fr;
    }
    """

    # only here to be displayed in footer
    BINDINGS = [
        Binding("fn+shift+1", "noop", "View Product", show=True, key_display="⏎"),
        Binding("ctrl+r", "reset_filters", "Clear Filters", show=True),
    ]

    MODE = "catalog"

    page_idx = reactive(1)
    page_cnt = reactive(1)

    def compose(self) -> ComposeResult:
        yield from super().compose()
        filters = self.store.state.filters
        with Horizontal(id="hort-filters"):
            yield Select(
                [(c, c) for c in self.store.state.categories],
                value=filters.category,
                allow_blank=False,
                id="select-category",
            )
            yield Input(
                str(filters.price_range[0]), id="input-price-min", type="number"
            )
            yield Input(
                str(filters.price_range[1]), id="input-price-max", type="number"
            )
            yield Input(
                ", ".join(filters.sizes), id="input-sizes", placeholder="Sizes: S, M"
            )
            yield Input(
                ", ".join(filters.colors),
                id="input-colors",
                placeholder="Colors: Black, Navy",
            )
            yield Select(
                [(SORT_LABELS[s], s) for s in SORT_OPTIONS],
                value=filters.sort_by,
                allow_blank=False,
                id="select-sort",
            )
        yield Label("", id="label-result-cnt")
        yield DataTable(id="table-catalog")
        with Horizontal():
            yield Button("<", id="btn-prev-page")
            yield Input("1", id="input-page", type="integer")  # page idx start from 1
            yield Label(" / 1", id="label-total-page-cnt")
            yield Button(">", id="btn-next-page")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("ID", "Name", "Category", "Price", "Sale", "Rating", "♥")
        self.update_results()

    def action_noop(self):
        pass

    def action_reset_filters(self):
        self.store.dispatch(ResetFilters())
        filters = self.store.state.filters
        self.query_one("#select-category", Select).value = filters.category
        self.query_one("#select-sort", Select).value = filters.sort_by
        self.query_one("#input-price-min", Input).value = str(filters.price_range[0])
        self.query_one("#input-price-max", Input).value = str(filters.price_range[1])
        self.query_one("#input-sizes", Input).value = ""
        self.query_one("#input-colors", Input).value = ""

    @on(Select.Changed, "#select-category")
    def handle_category(self, event: Select.Changed):
        self.store.dispatch(SetFilters(category=event.value))

    @on(Select.Changed, "#select-sort")
    def handle_sort(self, event: Select.Changed):
        self.store.dispatch(SetFilters(sort_by=event.value))

    @on(Input.Changed, "#input-price-min, #input-price-max")
    def handle_price(self):
        try:
            low = float(self.query_one("#input-price-min", Input).value)
            high = float(self.query_one("#input-price-max", Input).value)
        except ValueError:
            return
        if low > high:
            return
        self.store.dispatch(SetFilters(price_range=(low, high)))

    @on(Input.Changed, "#input-sizes")
    def handle_sizes(self, event: Input.Changed):
        self.store.dispatch(SetFilters(sizes=_split_csv(event.value)))

    @on(Input.Changed, "#input-colors")
    def handle_colors(self, event: Input.Changed):
        self.store.dispatch(SetFilters(colors=_split_csv(event.value)))

    @on(Input.Changed, "#input-page")
    def handle_page_input(self, event: Input.Changed):
        try:
            self.page_idx = int(event.value)
        except ValueError:
            pass

    @on(Button.Pressed, "#btn-prev-page")
    def handle_prev_page(self):
        self.page_idx -= 1

    @on(Button.Pressed, "#btn-next-page")
    def handle_next_page(self):
        self.page_idx += 1

    @on(StateChangedMessage)
    def handle_state_changed(self, message: StateChangedMessage):
        if message.old_state.filters != message.new_state.filters:
            # new filters always start from the first page
            self.page_idx = 1
        self.update_results()

    @on(ScreenResume)
    def handle_resume(self):
        self.update_results()

    def validate_page_idx(self, page_idx: int) -> int:
        return clamp_page(page_idx, self.page_cnt)

    def watch_page_idx(self, _, new_page_idx: int):
        page_input = self.query_one("#input-page", Input)
        if page_input.value != str(new_page_idx):
            page_input.value = str(new_page_idx)
        self.update_results()

    def update_results(self) -> None:
        state = self.store.state
        result = query(state.products, state.filters, self.page_idx, PAGE_SIZE)

        table = self.query_one(DataTable)
        table.clear()
        for prod in result.items:
            discount = discount_percentage(prod)
            table.add_row(
                prod.id,
                prod.name,
                prod.category,
                format_price(prod.price),
                f"-{discount}%" if discount else "",
                f"{prod.rating:.1f}",
                "♥" if in_wishlist(state, prod.id) else "",
                key=prod.id,
            )

        self.page_cnt = max(result.total_pages, 1)
        self.query_one("#label-total-page-cnt", Label).update(f" / {self.page_cnt}")
        self.query_one("#label-result-cnt", Label).update(
            f"{result.total_matched} products"
        )

    @on(DataTable.RowSelected)
    def handle_row_selected(self, event: DataTable.RowSelected):
        pid = event.row_key.value
        product = next((p for p in self.store.state.products if p.id == pid), None)
        if product is not None:
            self.app.push_screen(ProdDetailModal(self.store, product))
