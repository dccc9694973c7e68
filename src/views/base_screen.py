from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.events import ScreenResume
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ListItem, ListView, Markdown

from shop.store import Store, cart_item_count, wishlist_count
from utils.messages import ModeSwitchedMessage, StateChangedMessage
from utils.pure import cart_summary, format_price, generate_markdown_table
from views.modal_dialog import QuitDialogModal


class Sidebar(Container):
    def __init__(self, store: Store, menu: dict, current_mode: str):
        super().__init__()
        self._store = store
        self._menu = menu
        self._current_mode = current_mode

    def compose(self) -> ComposeResult:
        yield Label("Your Bag", id="label-info-1")
        yield Markdown("", id="md-summary")
        yield Label("Menu", id="label-info-2")
        yield ListView(
            *[
                ListItem(Label(v), id="list-menu-item-" + k)
                for k, v in self._menu.items()
            ],
            id="list-menu",
        )

    async def on_mount(self):
        await self.refresh_summary()
        self.highlight_item(self._current_mode)

    async def refresh_summary(self):
        state = self._store.state
        summary = cart_summary(state.cart)
        table_rows = [
            ["Items in cart", cart_item_count(state)],
            ["Subtotal", format_price(summary.subtotal)],
            ["Wishlist", wishlist_count(state)],
        ]
        md_table_str = generate_markdown_table(None, table_rows, ["l", "r"])
        await self.query_one(Markdown).update(md_table_str)

    async def on_list_view_selected(self, event: ListView.Selected):
        selected_mode = event.item.id.removeprefix("list-menu-item-")
        self.highlight_item(self._current_mode)
        if self.app.current_mode != selected_mode:
            self.app.post_message(
                ModeSwitchedMessage(self.app.current_mode, selected_mode)
            )
            await self.app.switch_mode(selected_mode)

    def highlight_item(self, mode_str: str):
        list_menu = self.query_one("#list-menu")
        for item in list_menu.children:
            item.highlighted = item.id == "list-menu-item-" + mode_str


class BaseScreen(Screen):
    """
    Inherited by all mode screens, contains common elements like
    headers, footers, sidebar, and keybindings.
    """

    BINDINGS = [
        Binding("ctrl+z", "quit", "Quit App", show=True),
    ]

    MODE = ""

    def __init__(self, store: Store, sub_title: str = ""):
        super().__init__()
        self.store = store
        self.sub_title = sub_title

    def compose(self) -> ComposeResult:
        yield Sidebar(self.store, self.app.MENU, self.MODE)
        yield Header()
        yield Footer()

    @on(StateChangedMessage)
    @on(ScreenResume)
    async def handle_refresh_sidebar(self):
        sidebars = self.query(Sidebar)
        if sidebars:
            await sidebars.first().refresh_summary()

    def action_quit(self):
        self.app.push_screen(QuitDialogModal())
