"""Loading the bundled menu resource into MenuItem values."""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError, field_validator

from food_ordering.config import resolve_menu_path
from food_ordering.debuglog import log_debug
from food_ordering.models import MenuItem


class LoadError(Exception):
    """Base class for menu load failures."""


class ResourceMissing(LoadError):
    """The menu resource could not be found."""


class DecodeError(LoadError):
    """The menu resource is not valid menu data."""


@dataclass(frozen=True)
class MenuLoadResult:
    """Outcome of one load: either items or an error, never both."""

    items: tuple[MenuItem, ...] = ()
    error: LoadError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MenuRecord(BaseModel):
    """One record of the menu resource, as stored on disk."""

    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr | None = None
    name: StrictStr = Field(min_length=1)
    price: Decimal = Field(ge=0)
    is_side: StrictBool = Field(alias="isSide")
    suggested_sides: list[StrictStr] | None = Field(default=None, alias="suggestedSides")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("id")
    @classmethod
    def id_not_empty(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("must not be empty when present")
        return value

    @field_validator("price", mode="before")
    @classmethod
    def price_is_json_number(cls, value: Any) -> Decimal:
        # bool is an int subclass; JSON true/false is not a price.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("must be a number")
        price = Decimal(value) if isinstance(value, int) else Decimal(str(value))
        if not price.is_finite():
            raise ValueError("must be finite")
        return price

    def to_menu_item(self) -> MenuItem:
        return MenuItem(
            item_id=self.id or uuid4().hex,
            name=self.name,
            price=self.price,
            is_side=self.is_side,
            suggested_sides=tuple(self.suggested_sides or ()),
        )


def _describe(index: int, exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    if field:
        return f"record {index}: '{field}' {first['msg']}"
    return f"record {index}: {first['msg']}"


def decode_menu_records(payload: Any) -> tuple[MenuItem, ...]:
    """
    Decode parsed JSON into menu items.

    Accepts a bare list of records or a ``{"data": [...]}`` envelope. The
    first malformed record fails the whole decode.
    """
    if isinstance(payload, dict) and "data" in payload:
        payload = payload["data"]
    if not isinstance(payload, list):
        raise DecodeError("menu resource must be a list of records")

    items: list[MenuItem] = []
    seen: set[str] = set()
    for idx, record in enumerate(payload):
        try:
            item = MenuRecord.model_validate(record).to_menu_item()
        except ValidationError as exc:
            raise DecodeError(_describe(idx, exc)) from exc
        if item.item_id in seen:
            raise DecodeError(f"record {idx}: duplicate id {item.item_id!r}")
        seen.add(item.item_id)
        items.append(item)
    return tuple(items)


class MenuDataSource:
    """Reads the menu from a JSON file on disk."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else resolve_menu_path()

    def load(self) -> MenuLoadResult:
        """Load and decode the menu. Failures are returned, not raised."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            error: LoadError = ResourceMissing(f"menu resource not found: {self.path}")
            log_debug(f"menu_load_failed kind=missing path={str(self.path)!r}")
            return MenuLoadResult(error=error)
        except (OSError, UnicodeDecodeError) as exc:
            error = DecodeError(f"menu resource unreadable: {exc}")
            log_debug(f"menu_load_failed kind=unreadable path={str(self.path)!r} error={exc!r}")
            return MenuLoadResult(error=error)

        try:
            items = decode_menu_records(json.loads(raw))
        except DecodeError as exc:
            log_debug(f"menu_load_failed kind=decode path={str(self.path)!r} error={exc!r}")
            return MenuLoadResult(error=exc)
        except (ValueError, RecursionError) as exc:
            # JSONDecodeError, integer digit limits and runaway nesting.
            log_debug(f"menu_load_failed kind=decode path={str(self.path)!r} error={type(exc).__name__}")
            return MenuLoadResult(error=DecodeError(f"invalid JSON: {type(exc).__name__}: {exc}"))

        log_debug(f"menu_loaded path={str(self.path)!r} items={len(items)}")
        return MenuLoadResult(items=items)
