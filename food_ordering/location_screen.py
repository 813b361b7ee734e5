"""Location access prompt shown before the menu."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Static

from food_ordering.models import PermissionStatus
from food_ordering.permission import PermissionGate, PermissionService


class LocationPromptScreen(Screen[PermissionStatus]):
    """Ask for location access; dismisses with the resulting status."""

    BINDINGS = [
        ("enter", "enable_access", "Enable Location Access"),
        ("escape", "skip", "Continue without location"),
    ]

    CSS = """
    LocationPromptScreen {
        align: center middle;
    }

    #location-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #location-title {
        text-style: bold;
        text-align: center;
        margin-bottom: 1;
        color: white;
    }

    #location-button {
        text-align: center;
        text-style: bold;
        color: #ffffff;
        background: #2e9e4f;
        padding: 1 2;
        margin-bottom: 1;
    }

    #location-help {
        text-align: center;
        color: #dddddd;
    }
    """

    def __init__(self, gate: PermissionGate, service: PermissionService) -> None:
        super().__init__()
        self.gate = gate
        self.service = service

    def compose(self) -> ComposeResult:
        with Container(id="location-dialog"):
            yield Static("We need your location to find restaurants near you.", id="location-title")
            yield Static("Enable Location Access", id="location-button")
            yield Static("Enter enable. Esc continue without location.", id="location-help")

    def action_enable_access(self) -> None:
        self.dismiss(self.gate.request_access(self.service))

    def action_skip(self) -> None:
        self.gate.proceed()
        self.dismiss(self.gate.status)
