"""Shared pytest fixtures for food-ordering tests."""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from food_ordering.models import MenuItem


@pytest.fixture(autouse=True)
def debug_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Send debug log lines to a per-test file."""
    log_path = tmp_path / "debug.log"
    monkeypatch.setenv("FOOD_ORDERING_DEBUG_LOG", str(log_path))
    return log_path


@pytest.fixture
def write_menu(tmp_path: Path):
    """Write a JSON payload to a menu file and return its path."""

    def _write(payload, name: str = "fooditem.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def burger() -> MenuItem:
    return MenuItem(item_id="burger", name="Burger", price=Decimal("5.5"))


@pytest.fixture
def fries() -> MenuItem:
    return MenuItem(item_id="fries", name="Fries", price=Decimal("2.0"), is_side=True)
