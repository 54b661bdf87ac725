from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

_GROUPED_THOUSANDS = re.compile(r"^-?\d{1,3}(\.\d{3})+$")
_NON_DIGITS = re.compile(r"[^0-9]")
_LEADING_MINUS = re.compile(r"^[^0-9]*-")


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


def parse_currency(value: Any) -> int:
    """Read an upstream price field into whole currency units.

    Accepts ints, integral floats, plain numeric strings, dotted thousands
    ("25.000") and "Rp"-prefixed display strings.
    """
    if isinstance(value, bool):
        raise ValueError("price must be a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"price must be a whole amount, got {value}")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        negative = bool(_LEADING_MINUS.match(text))
        if "Rp" in text or _GROUPED_THOUSANDS.match(text):
            digits = _NON_DIGITS.sub("", text)
            if not digits:
                raise ValueError(f"price {value!r} has no digits")
            amount = int(digits)
            return -amount if negative else amount
        try:
            number = Decimal(text)
        except InvalidOperation as exc:
            raise ValueError(f"price {value!r} is not numeric") from exc
        if not number.is_finite() or number != number.to_integral_value():
            raise ValueError(f"price must be a whole amount, got {value!r}")
        return int(number)
    raise ValueError("price must be a number")


def _parse_delta(value: Any) -> int:
    return parse_currency(0 if value is None else value)


def _coerce_id(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


IdStr = Annotated[str, BeforeValidator(_coerce_id)]
Price = Annotated[int, BeforeValidator(parse_currency)]
PriceDelta = Annotated[int, BeforeValidator(_parse_delta)]


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class ChoicePayload(CamelBaseModel):
    id: IdStr
    name: str
    price: PriceDelta = 0


class CustomizationOptionPayload(CamelBaseModel):
    id: IdStr
    name: str
    type: Literal["select", "radio", "checkbox"]
    required: bool = False
    options: list[ChoicePayload] = Field(default_factory=list)


class MenuPayload(CamelBaseModel):
    id: IdStr
    name: str
    price: Price = Field(ge=0)
    category: str | None = None
    status: Literal["AVAILABLE", "OUT_OF_STOCK"] | None = None
    is_available: bool | None = None
    customization_options: list[CustomizationOptionPayload] = Field(default_factory=list)

    @field_validator("customization_options", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class OrderLineRequest(CamelBaseModel):
    menu_id: IdStr
    quantity: int
    selections: dict[str, list[str]] = Field(default_factory=dict)
    notes: str | None = None


class PlaceOrderRequest(CamelBaseModel):
    customer_name: str = ""
    lines: list[OrderLineRequest] = Field(min_length=1)
