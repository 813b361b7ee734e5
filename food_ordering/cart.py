"""In-memory cart shared by the menu screen and the cart sheet."""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Iterable

from food_ordering.debuglog import log_debug
from food_ordering.models import CartEntry, MenuItem

CartListener = Callable[["CartStore"], None]


class UnknownMenuItemError(ValueError):
    """Raised when adding an item that is not on the current menu."""


class CartStore:
    """
    Ordered list of cart entries.

    Every ``add`` appends a new entry, even for an item already in the cart.
    Listeners registered with ``subscribe`` are called after each mutation
    so views can render the live store instead of a copy.
    """

    def __init__(self, menu: Iterable[MenuItem] | None = None) -> None:
        self._entries: list[CartEntry] = []
        self._listeners: list[CartListener] = []
        self._menu_ids: set[str] | None = None
        if menu is not None:
            self.set_menu(menu)

    def __len__(self) -> int:
        return len(self._entries)

    def set_menu(self, menu: Iterable[MenuItem]) -> None:
        """Bind the cart to the current menu, dropping entries no longer listed."""
        self._menu_ids = {item.item_id for item in menu}
        kept = [entry for entry in self._entries if entry.item_id in self._menu_ids]
        if len(kept) != len(self._entries):
            log_debug(f"cart_menu_rebound dropped={len(self._entries) - len(kept)}")
            self._entries = kept
            self._notify()

    def add(self, item: MenuItem) -> CartEntry:
        if self._menu_ids is not None and item.item_id not in self._menu_ids:
            raise UnknownMenuItemError(f"{item.name!r} is not on the current menu")
        entry = CartEntry(item=item)
        self._entries.append(entry)
        log_debug(f"cart_add item_id={item.item_id} name={item.name!r} size={len(self._entries)}")
        self._notify()
        return entry

    def remove(self, index: int) -> CartEntry:
        if not (0 <= index < len(self._entries)):
            raise IndexError(f"cart index {index} out of range")
        entry = self._entries.pop(index)
        log_debug(f"cart_remove index={index} item_id={entry.item_id} size={len(self._entries)}")
        self._notify()
        return entry

    def clear(self) -> None:
        if not self._entries:
            return
        self._entries.clear()
        log_debug("cart_clear")
        self._notify()

    def items(self) -> tuple[CartEntry, ...]:
        """Snapshot of entries in the order they were added."""
        return tuple(self._entries)

    def total(self) -> Decimal:
        return sum((entry.price for entry in self._entries), Decimal("0"))

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
