"""Cart summary sheet."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from food_ordering.cart import CartStore
from food_ordering.rendering import POINTER, format_cart_row, format_price


class CartSheet(ModalScreen[None]):
    """Modal listing the live cart. Edits made here show up immediately."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("c", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("d", "remove_current", "Remove"),
        ("enter", "activate_current", "Select"),
    ]

    CSS = """
    CartSheet {
        align: center bottom;
        background: $background 60%;
    }

    #cart-dialog {
        width: 64;
        height: auto;
        max-height: 80%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #cart-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #cart-body {
        margin-bottom: 1;
        color: white;
    }

    #cart-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, cart: CartStore) -> None:
        super().__init__()
        self.cart = cart
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        with Container(id="cart-dialog"):
            yield Static("Cart", id="cart-title")
            yield Static(id="cart-body")
            yield Static("J/K/↑/↓ move, D remove, Enter on Close or Esc/q/c close", id="cart-help")

    def on_mount(self) -> None:
        self._unsubscribe = self.cart.subscribe(lambda _cart: self._refresh_content())
        self._refresh_content()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def action_close(self) -> None:
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % self._row_count()
        self._refresh_content()

    def action_remove_current(self) -> None:
        if self._on_close_row():
            return
        self.cart.remove(self.cursor_index)

    def action_activate_current(self) -> None:
        if self._on_close_row():
            self.action_close()

    def _row_count(self) -> int:
        # Entries plus the trailing Close row.
        return len(self.cart) + 1

    def _on_close_row(self) -> bool:
        return self.cursor_index >= len(self.cart)

    def _refresh_content(self) -> None:
        body = self.query_one("#cart-body", Static)
        if self.cursor_index >= self._row_count():
            self.cursor_index = self._row_count() - 1

        content = Text(style="white")
        entries = self.cart.items()
        if not entries:
            content.append("(cart is empty)", style="dim")
        for idx, entry in enumerate(entries):
            if idx > 0:
                content.append("\n")
            content.append_text(format_cart_row(idx + 1, entry, idx == self.cursor_index))

        content.append("\n\n")
        content.append(f"Total: {format_price(self.cart.total())}", style="bold")
        content.append("\n\n")
        pointer = POINTER if self._on_close_row() else "  "
        content.append(f"{pointer}[ Close ]", style="bold white")
        body.update(content)
