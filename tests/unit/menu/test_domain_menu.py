from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from resto.domain.common.ids import ChoiceId, MenuId, OptionId
from resto.domain.common.money import Money
from resto.domain.menu.entities import (
    Choice,
    CustomizationOption,
    Menu,
    MenuStatus,
    SelectionKind,
)


def test_money_invariants() -> None:
    with pytest.raises(ValueError):
        Money(amount=-1)
    with pytest.raises(ValueError):
        Money(amount=100, currency="idr")
    with pytest.raises(ValueError):
        Money(amount=100, currency="ID")
    with pytest.raises(ValueError):
        Money(amount=12.5)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        Money(amount=True)


def test_money_times_keeps_currency() -> None:
    assert Money(amount=15000, currency="IDR").times(3) == Money(amount=45000, currency="IDR")


def test_menu_name_must_be_non_empty() -> None:
    with pytest.raises(ValueError):
        Menu(menu_id=MenuId("1"), name="   ", price=Money(amount=10000))


def test_option_ids_unique_within_menu() -> None:
    option = CustomizationOption(option_id=OptionId("size"), name="Size", kind=SelectionKind.SINGLE)
    with pytest.raises(ValueError):
        Menu(
            menu_id=MenuId("1"),
            name="Es Jeruk",
            price=Money(amount=7000),
            customization_options=(option, option),
        )


def test_choice_ids_unique_within_option() -> None:
    choice = Choice(choice_id=ChoiceId("large"), name="Large", price_delta=3000)
    with pytest.raises(ValueError):
        CustomizationOption(
            option_id=OptionId("size"),
            name="Size",
            kind=SelectionKind.SINGLE,
            choices=(choice, choice),
        )


def test_choice_delta_may_be_negative() -> None:
    choice = Choice(choice_id=ChoiceId("no-rice"), name="No rice", price_delta=-2000)
    assert choice.price_delta == -2000


def test_menu_lookup_and_availability() -> None:
    option = CustomizationOption(
        option_id=OptionId("size"),
        name="Size",
        kind=SelectionKind.SINGLE,
        choices=(Choice(choice_id=ChoiceId("large"), name="Large", price_delta=3000),),
    )
    menu = Menu(
        menu_id=MenuId("1"),
        name="Es Jeruk",
        price=Money(amount=7000),
        status=MenuStatus.OUT_OF_STOCK,
        customization_options=(option,),
    )

    assert not menu.is_available
    assert menu.find_option("size") is option
    assert menu.find_option("topping") is None
    assert option.find_choice("large") is not None
    assert option.find_choice("small") is None
