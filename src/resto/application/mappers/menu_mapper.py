from __future__ import annotations

from typing import Any

from resto.application.dto.requests import CustomizationOptionPayload, MenuPayload
from resto.domain.common.ids import ChoiceId, MenuId, OptionId
from resto.domain.common.money import Money
from resto.domain.menu.entities import (
    Choice,
    CustomizationOption,
    Menu,
    MenuStatus,
    SelectionKind,
)

_SELECTION_KINDS: dict[str, SelectionKind] = {
    "select": SelectionKind.SINGLE,
    "radio": SelectionKind.SINGLE,
    "checkbox": SelectionKind.MULTI,
}


def _to_option(payload: CustomizationOptionPayload) -> CustomizationOption:
    return CustomizationOption(
        option_id=OptionId(payload.id),
        name=payload.name,
        kind=_SELECTION_KINDS[payload.type],
        required=payload.required,
        choices=tuple(
            Choice(choice_id=ChoiceId(choice.id), name=choice.name, price_delta=choice.price)
            for choice in payload.options
        ),
    )


def _to_status(payload: MenuPayload) -> MenuStatus:
    if payload.status is not None:
        return MenuStatus(payload.status)
    if payload.is_available is False:
        return MenuStatus.OUT_OF_STOCK
    return MenuStatus.AVAILABLE


def to_menu(payload: MenuPayload, currency: str) -> Menu:
    return Menu(
        menu_id=MenuId(payload.id),
        name=payload.name,
        price=Money(amount=payload.price, currency=currency),
        category=payload.category,
        status=_to_status(payload),
        customization_options=tuple(_to_option(option) for option in payload.customization_options),
    )


def menu_from_record(record: dict[str, Any], currency: str) -> Menu:
    return to_menu(MenuPayload.model_validate(record), currency)
