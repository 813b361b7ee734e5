"""Text map panel showing the restaurant location."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text
from textual.message import Message
from textual.widgets import Static

from food_ordering.config import (
    MAP_CENTER_LATITUDE,
    MAP_CENTER_LONGITUDE,
    MAP_SPAN_DEGREES,
    RESTAURANT_NAME,
)

MARKER = "◉"


@dataclass(frozen=True)
class MapRegion:
    """Center coordinate, zoom span and the label of the single marker."""

    latitude: float = MAP_CENTER_LATITUDE
    longitude: float = MAP_CENTER_LONGITUDE
    span: float = MAP_SPAN_DEGREES
    label: str = RESTAURANT_NAME


def render_map(region: MapRegion, width: int, height: int) -> Text:
    """Draw a dotted grid with the marker and its label at the center."""
    width = max(width, len(region.label) + 4)
    height = max(height, 3)
    grid_rows = height - 1
    center_row = grid_rows // 2
    center_col = width // 2

    text = Text()
    for row in range(grid_rows):
        if row > 0:
            text.append("\n")
        if row != center_row:
            text.append(("·   " * (width // 4 + 1))[:width], style="dim green")
            continue
        label = f" {region.label}"
        left = ("·   " * (width // 4 + 1))[:center_col]
        right_width = max(0, width - center_col - 1 - len(label))
        text.append(left, style="dim green")
        text.append(MARKER, style="bold red")
        text.append(label, style="bold")
        text.append(" " * right_width)

    text.append("\n")
    text.append(
        f"{region.latitude:.6f}, {region.longitude:.6f}  span {region.span:g}°",
        style="dim",
    )
    return text


class MapPanel(Static):
    """Map display; tap (click) or press m to expand it."""

    class Tapped(Message):
        """Posted when the map is clicked."""

    def __init__(self, region: MapRegion | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.map_region = region or MapRegion()

    def on_mount(self) -> None:
        self.refresh_map()

    def on_resize(self) -> None:
        self.refresh_map()

    def on_click(self) -> None:
        self.post_message(self.Tapped())

    def refresh_map(self) -> None:
        width = self.size.width or 40
        height = self.size.height or 6
        self.update(render_map(self.map_region, width, height))
