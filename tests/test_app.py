"""UI flow tests driven through Textual's pilot."""

import json
from decimal import Decimal

import pytest

from food_ordering.cart_sheet import CartSheet
from food_ordering.food_app import FoodOrderingApp
from food_ordering.location_screen import LocationPromptScreen
from food_ordering.menu_source import MenuDataSource, ResourceMissing
from food_ordering.models import PermissionStatus
from food_ordering.permission import StaticPermissionService


@pytest.fixture
def menu_path(tmp_path):
    path = tmp_path / "fooditem.json"
    path.write_text(
        json.dumps(
            [
                {"name": "Burger", "price": 5.5, "isSide": False, "suggestedSides": ["Fries"]},
                {"name": "Fries", "price": 2.0, "isSide": True},
            ]
        ),
        encoding="utf-8",
    )
    return path


def make_app(menu_path, status=PermissionStatus.GRANTED, **service_kwargs) -> FoodOrderingApp:
    return FoodOrderingApp(
        menu_source=MenuDataSource(menu_path),
        permission_service=StaticPermissionService(status, **service_kwargs),
    )


class TestPermissionFlow:
    @pytest.mark.asyncio
    async def test_granted_goes_straight_to_menu(self, menu_path):
        app = make_app(menu_path)
        async with app.run_test() as pilot:
            await pilot.pause()

            assert not isinstance(app.screen, LocationPromptScreen)
            assert not app.view_state.permission_prompt_visible
            assert [item.name for item in app.menu_items] == ["Burger", "Fries"]

    @pytest.mark.asyncio
    async def test_denied_still_reaches_menu(self, menu_path):
        app = make_app(menu_path, PermissionStatus.DENIED)
        async with app.run_test() as pilot:
            await pilot.pause()

            assert app.gate.status is PermissionStatus.DENIED
            assert app.menu_active
            assert len(app.menu_items) == 2

    @pytest.mark.asyncio
    async def test_not_determined_blocks_until_enabled(self, menu_path):
        app = make_app(menu_path, PermissionStatus.NOT_DETERMINED)
        async with app.run_test() as pilot:
            await pilot.pause()

            assert isinstance(app.screen, LocationPromptScreen)
            assert app.view_state.permission_prompt_visible
            assert app.last_load is None

            await pilot.press("enter")
            await pilot.pause()

            assert not isinstance(app.screen, LocationPromptScreen)
            assert app.gate.status is PermissionStatus.GRANTED
            assert not app.view_state.permission_prompt_visible
            assert len(app.menu_items) == 2

    @pytest.mark.asyncio
    async def test_skip_prompt_without_requesting(self, menu_path):
        app = make_app(menu_path, PermissionStatus.NOT_DETERMINED)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("escape")
            await pilot.pause()

            assert app.menu_active
            assert app.gate.status is PermissionStatus.NOT_DETERMINED
            assert app.permission_service.request_count == 0


class TestMenuScreen:
    @pytest.mark.asyncio
    async def test_add_selected_items(self, menu_path):
        app = make_app(menu_path)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("a", "j", "a", "enter")
            await pilot.pause()

            assert [entry.item.name for entry in app.cart.items()] == ["Burger", "Fries", "Fries"]
            assert app.cart.total() == Decimal("9.5")

    @pytest.mark.asyncio
    async def test_selection_wraps(self, menu_path):
        app = make_app(menu_path)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("k")

            assert app.selected_index == 1

    @pytest.mark.asyncio
    async def test_map_toggle(self, menu_path):
        app = make_app(menu_path)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("m")
            assert app.view_state.map_expanded

            # Adding is disabled while the map covers the menu.
            await pilot.press("a")
            assert len(app.cart) == 0

            await pilot.press("m")
            assert not app.view_state.map_expanded

    @pytest.mark.asyncio
    async def test_clicking_map_toggles_expansion(self, menu_path):
        app = make_app(menu_path)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.click("#map-panel")
            await pilot.pause()

            assert app.view_state.map_expanded
            assert app.query_one("#menu-pane").display is False

            await pilot.click("#map-panel")
            await pilot.pause()

            assert not app.view_state.map_expanded
            assert app.query_one("#menu-pane").display is True

    @pytest.mark.asyncio
    async def test_price_beyond_default_precision_renders(self, tmp_path):
        path = tmp_path / "fooditem.json"
        path.write_text(json.dumps([{"name": "Yacht", "price": 1e30, "isSide": False}]), encoding="utf-8")
        app = make_app(path)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("a")
            await pilot.pause()

            assert app.last_load.ok
            assert app.cart.total() == Decimal("1E+30")

    @pytest.mark.asyncio
    async def test_missing_menu_renders_empty(self, tmp_path):
        app = make_app(tmp_path / "missing.json")
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("a")

            assert isinstance(app.last_load.error, ResourceMissing)
            assert app.menu_items == ()
            assert len(app.cart) == 0
            assert app.system_status.startswith("Menu unavailable")


class TestCartSheet:
    @pytest.mark.asyncio
    async def test_open_remove_and_close(self, menu_path):
        app = make_app(menu_path)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("a", "j", "a", "c")
            await pilot.pause()

            assert isinstance(app.screen, CartSheet)
            assert app.view_state.cart_sheet_visible
            assert app.view_state.sheet_cart is app.cart

            await pilot.press("d")
            await pilot.pause()
            assert [entry.item.name for entry in app.cart.items()] == ["Fries"]

            await pilot.press("escape")
            await pilot.pause()

            assert not isinstance(app.screen, CartSheet)
            assert not app.view_state.cart_sheet_visible

    @pytest.mark.asyncio
    async def test_close_row(self, menu_path):
        app = make_app(menu_path)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("a", "c")
            await pilot.pause()
            await pilot.press("j", "enter")
            await pilot.pause()

            assert not isinstance(app.screen, CartSheet)
            assert not app.view_state.cart_sheet_visible
            assert len(app.cart) == 1

    @pytest.mark.asyncio
    async def test_c_toggles_sheet_closed(self, menu_path):
        app = make_app(menu_path)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("c")
            await pilot.pause()
            await pilot.press("c")
            await pilot.pause()

            assert not isinstance(app.screen, CartSheet)
            assert not app.view_state.cart_sheet_visible
