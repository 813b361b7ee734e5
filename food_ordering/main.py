"""Entry point for the food-ordering Textual app."""

from __future__ import annotations

from food_ordering.food_app import FoodOrderingApp


def main() -> None:
    """Run the Textual application."""
    FoodOrderingApp().run()


if __name__ == "__main__":
    main()
