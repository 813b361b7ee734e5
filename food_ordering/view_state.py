"""UI-only flags and the gestures that change them."""

from __future__ import annotations

from dataclasses import dataclass, field

from food_ordering.cart import CartStore
from food_ordering.permission import PermissionGate


@dataclass
class ViewState:
    """Ephemeral flags for what is currently visible on screen."""

    map_expanded: bool = False
    cart_sheet_visible: bool = False
    permission_prompt_visible: bool = False
    # Live reference to the cart shown by the open sheet, not a copy.
    sheet_cart: CartStore | None = field(default=None, repr=False)

    def toggle_map(self) -> bool:
        self.map_expanded = not self.map_expanded
        return self.map_expanded

    def toggle_cart_sheet(self, cart: CartStore) -> bool:
        if self.cart_sheet_visible:
            self.close_cart_sheet()
        else:
            self.cart_sheet_visible = True
            self.sheet_cart = cart
        return self.cart_sheet_visible

    def close_cart_sheet(self) -> None:
        self.cart_sheet_visible = False
        self.sheet_cart = None

    def apply_permission(self, gate: PermissionGate) -> bool:
        self.permission_prompt_visible = gate.prompt_visible
        return self.permission_prompt_visible
