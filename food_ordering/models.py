"""Domain models for food-ordering."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class MenuItem:
    """A purchasable menu item decoded from the menu resource."""

    item_id: str
    name: str
    price: Decimal
    is_side: bool = False
    suggested_sides: tuple[str, ...] = ()


@dataclass(frozen=True)
class CartEntry:
    """One add-to-cart action. Quantity is always 1."""

    item: MenuItem

    @property
    def item_id(self) -> str:
        return self.item.item_id

    @property
    def price(self) -> Decimal:
        return self.item.price


class PermissionStatus(str, Enum):
    """Location authorization status as reported by the permission service."""

    NOT_DETERMINED = "not-determined"
    GRANTED = "granted"
    DENIED = "denied"
    RESTRICTED = "restricted"

    @property
    def is_terminal(self) -> bool:
        return self is not PermissionStatus.NOT_DETERMINED

