"""Main Textual app class."""

from __future__ import annotations

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from food_ordering.cart import CartStore
from food_ordering.cart_sheet import CartSheet
from food_ordering.config import MAP_COLLAPSED_HEIGHT, RESTAURANT_NAME
from food_ordering.debuglog import log_debug
from food_ordering.location_screen import LocationPromptScreen
from food_ordering.map_view import MapPanel, MapRegion
from food_ordering.menu_source import MenuDataSource, MenuLoadResult
from food_ordering.models import MenuItem, PermissionStatus
from food_ordering.permission import PermissionGate, PermissionService, StaticPermissionService
from food_ordering.rendering import (
    format_cart_summary,
    format_menu_row,
    line_count,
    render_window,
    window_bounds,
)
from food_ordering.view_state import ViewState


class FoodOrderingApp(App):
    """A Textual app for browsing one restaurant's menu and filling a cart."""

    TITLE = RESTAURANT_NAME
    SUB_TITLE = "Menu"

    CSS = """
    Screen {
        layout: vertical;
    }

    #map-panel {
        border: round $primary;
        padding: 0 1;
    }

    #menu-pane {
        height: 1fr;
        border: round $secondary;
        padding: 1;
    }

    #menu-list {
        height: 1fr;
        padding: 0 1;
    }

    #cart-bar {
        height: 3;
        border: heavy $secondary;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    selected_index = reactive(0)

    BINDINGS = [
        ("up", "move_selection(-1)", "Previous item"),
        ("down", "move_selection(1)", "Next item"),
        ("enter", "add_selected", "Add to cart"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        menu_source: MenuDataSource | None = None,
        permission_service: PermissionService | None = None,
        map_region: MapRegion | None = None,
    ) -> None:
        super().__init__()
        self.menu_source = menu_source or MenuDataSource()
        self.permission_service = permission_service or StaticPermissionService.from_env()
        self.map_region = map_region or MapRegion()
        self.gate = PermissionGate()
        self.view_state = ViewState()
        self.cart = CartStore()
        self.menu_items: tuple[MenuItem, ...] = ()
        self.last_load: MenuLoadResult | None = None
        self.menu_active = False
        self.system_status = ""
        self.cart.subscribe(lambda _cart: self._refresh_cart_bar())
        log_debug("app_init")

    def compose(self) -> ComposeResult:
        yield Header()
        yield MapPanel(self.map_region, id="map-panel")
        with Vertical(id="menu-pane"):
            yield Static(RESTAURANT_NAME, classes="pane-title")
            yield Static("(menu not loaded)", id="menu-list")
        yield Static(id="cart-bar")

    def on_mount(self) -> None:
        self._apply_map_layout()
        self._refresh_cart_bar()
        self.check_location_access()

    def check_location_access(self) -> None:
        """Evaluate the gate and either prompt or go straight to the menu."""
        self.menu_active = False
        status = self.gate.evaluate(self.permission_service)
        self.view_state.apply_permission(self.gate)
        if self.view_state.permission_prompt_visible:
            self.push_screen(
                LocationPromptScreen(self.gate, self.permission_service),
                callback=self._on_prompt_dismissed,
            )
            return
        self.enter_menu(status)

    def _on_prompt_dismissed(self, status: PermissionStatus | None) -> None:
        self.view_state.apply_permission(self.gate)
        self.enter_menu(status or self.gate.status)

    def enter_menu(self, status: PermissionStatus) -> None:
        """Activate the menu screen: load the menu once and bind the cart to it."""
        if not self.gate.can_enter_menu:
            return

        result = self.menu_source.load()
        self.last_load = result
        self.menu_items = result.items
        self.cart.set_menu(self.menu_items)
        self.selected_index = 0
        self.menu_active = True
        if result.error is not None:
            self.system_status = f"Menu unavailable: {result.error}"
        elif status is PermissionStatus.GRANTED:
            self.system_status = "Location on"
        else:
            self.system_status = f"Location {status.value}"
        log_debug(f"enter_menu status={status.value} items={len(self.menu_items)} ok={result.ok}")
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if self._overlay_active():
            return

        if not event.is_printable or not event.character or not event.character.isalnum():
            return

        key = event.character.lower()
        if key == "a":
            self.action_add_selected()
        elif key == "m":
            self.action_toggle_map()
        elif key == "c":
            self.action_toggle_cart()
        elif key == "j":
            self.action_move_selection(1)
        elif key == "k":
            self.action_move_selection(-1)
        else:
            return
        event.stop()

    def on_map_panel_tapped(self, _message: MapPanel.Tapped) -> None:
        self.action_toggle_map()

    def action_move_selection(self, delta: int) -> None:
        if self._overlay_active() or self.view_state.map_expanded:
            return
        if not self.menu_items:
            self.selected_index = 0
            return
        self.selected_index = (self.selected_index + delta) % len(self.menu_items)
        self._refresh_menu()

    def action_add_selected(self) -> None:
        if self._overlay_active() or self.view_state.map_expanded:
            return
        item = self._selected_item()
        if item is None:
            return
        self.cart.add(item)

    def action_toggle_map(self) -> None:
        if self._overlay_active():
            return
        expanded = self.view_state.toggle_map()
        log_debug(f"map_toggled expanded={expanded}")
        self._apply_map_layout()

    def action_toggle_cart(self) -> None:
        if isinstance(self.screen, LocationPromptScreen):
            return
        if self.view_state.toggle_cart_sheet(self.cart):
            log_debug(f"cart_sheet_opened entries={len(self.cart)}")
            self.push_screen(CartSheet(self.view_state.sheet_cart), callback=self._on_cart_sheet_closed)
        elif isinstance(self.screen, CartSheet):
            self.screen.dismiss(None)

    def _on_cart_sheet_closed(self, _result: None) -> None:
        self.view_state.close_cart_sheet()
        log_debug("cart_sheet_closed")

    def _overlay_active(self) -> bool:
        return isinstance(self.screen, (LocationPromptScreen, CartSheet))

    def _selected_item(self) -> MenuItem | None:
        if not (0 <= self.selected_index < len(self.menu_items)):
            return None
        return self.menu_items[self.selected_index]

    def _apply_map_layout(self) -> None:
        try:
            map_panel = self.query_one("#map-panel", MapPanel)
            menu_pane = self.query_one("#menu-pane", Vertical)
        except NoMatches:
            return
        if self.view_state.map_expanded:
            map_panel.styles.height = "1fr"
            menu_pane.display = False
        else:
            map_panel.styles.height = MAP_COLLAPSED_HEIGHT
            menu_pane.display = True
        map_panel.refresh_map()

    def _menu_lines(self, widget: Static, heights: list[int]) -> int:
        height = widget.size.height
        if height <= 0:
            height = 8
        if sum(heights) > height:
            # Leave room for the scroll markers above and below.
            height -= 2
        return max(1, height)

    def _refresh_all(self) -> None:
        self._refresh_menu()
        self._refresh_cart_bar()

    def _refresh_menu(self) -> None:
        try:
            menu_widget = self.query_one("#menu-list", Static)
        except NoMatches:
            return
        if not self.menu_active:
            menu_widget.update("(menu not loaded)")
            return
        if not self.menu_items:
            menu_widget.update(Text("(no items available)", style="dim"))
            return

        rows = [format_menu_row(item, idx == self.selected_index) for idx, item in enumerate(self.menu_items)]
        heights = [line_count(row) for row in rows]
        start, end = window_bounds(heights, self._menu_lines(menu_widget, heights), self.selected_index)
        menu_widget.update(render_window(rows, start, end))

    def _refresh_cart_bar(self) -> None:
        try:
            bar = self.query_one("#cart-bar", Static)
        except NoMatches:
            return
        text = format_cart_summary(len(self.cart), self.cart.total())
        text.append("   A add, C cart, M map, Ctrl+Q quit", style="dim")
        if self.system_status:
            text.append(f"   {self.system_status}", style="italic")
        bar.update(text)
