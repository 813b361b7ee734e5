"""Rendering helpers for menu rows, cart rows and scrolled lists."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Sequence

from rich.text import Text

from food_ordering.models import CartEntry, MenuItem

SIDE_BADGE_STYLE = "bold #ffffff on #2f6db5"
MAIN_BADGE_STYLE = "bold #0b1f0f on #5fbf72"
POINTER = "➤ "


def format_price(amount: Decimal) -> str:
    """Format a price as dollars with two decimals."""
    with localcontext() as ctx:
        # Room for every integer digit plus the two cents.
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        cents = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"${cents}"


def badge_style(is_side: bool) -> str:
    """Return a consistent badge style for the side/main classification."""
    return SIDE_BADGE_STYLE if is_side else MAIN_BADGE_STYLE


def format_item_label(item: MenuItem) -> Text:
    """Render an item name with a colored S/M tag."""
    text = Text()
    text.append("S" if item.is_side else "M", style=badge_style(item.is_side))
    text.append(f" {item.name}")
    return text


def format_menu_row(item: MenuItem, selected: bool) -> Text:
    text = Text()
    text.append(POINTER if selected else "  ")
    text.append_text(format_item_label(item))
    text.append(f"  {format_price(item.price)}", style="dim")
    if item.suggested_sides:
        text.append(f"\n      with: {', '.join(item.suggested_sides)}", style="italic dim")
    return text


def format_cart_row(position: int, entry: CartEntry, selected: bool) -> Text:
    text = Text()
    text.append(POINTER if selected else "  ")
    text.append(f"{position}. {entry.item.name}")
    text.append(f"  {format_price(entry.price)}", style="dim")
    return text


def format_cart_summary(count: int, total: Decimal) -> Text:
    noun = "item" if count == 1 else "items"
    text = Text()
    text.append("Cart: ", style="bold")
    text.append(f"{count} {noun}  {format_price(total)}")
    return text


def line_count(row: Text) -> int:
    return row.plain.count("\n") + 1


def window_bounds(heights: Sequence[int], lines: int, selected: int | None) -> tuple[int, int]:
    """
    Return the [start, end) slice of rows that fits in ``lines`` terminal lines.

    ``heights`` holds the line count of each row. The window grows outward
    from the selected row, alternating below and above, so the selection
    stays roughly centered and always visible.
    """
    total = len(heights)
    if total == 0:
        return (0, 0)

    lines = max(1, lines)
    if sum(heights) <= lines:
        return (0, total)

    anchor = selected if selected is not None and 0 <= selected < total else 0
    start, end = anchor, anchor + 1
    used = heights[anchor]
    grew = True
    while grew:
        grew = False
        if end < total and used + heights[end] <= lines:
            used += heights[end]
            end += 1
            grew = True
        if start > 0 and used + heights[start - 1] <= lines:
            start -= 1
            used += heights[start]
            grew = True

    return (start, end)


def render_window(rows: Sequence[Text], start: int, end: int) -> Text:
    """Join a visible slice of rows, with markers when more rows are hidden."""
    lines = Text()
    if start > 0:
        lines.append("⋮\n", style="dim")

    for idx in range(start, end):
        if idx > start:
            lines.append("\n")
        lines.append_text(rows[idx])

    if end < len(rows):
        lines.append("\n⋮", style="dim")
    return lines
