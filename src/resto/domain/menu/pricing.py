from __future__ import annotations

from collections.abc import Iterable, Mapping

from resto.domain.menu.entities import Choice, CustomizationOption, Menu, SelectionKind

Selections = Mapping[str, Iterable[str]]


def selection_ids(value: Iterable[str] | None) -> tuple[str, ...]:
    """A bare string is one id, never a sequence of one-character ids."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def selected_choices(option: CustomizationOption, selected_ids: Iterable[str]) -> list[Choice]:
    """Resolve selected ids against the option's current choices.

    Unknown ids are dropped. Choices come back in the option's own order, and a
    SINGLE option never yields more than one choice.
    """
    wanted = set(selection_ids(selected_ids))
    resolved = [choice for choice in option.choices if choice.choice_id in wanted]
    if option.kind == SelectionKind.SINGLE:
        return resolved[:1]
    return resolved


def option_price(option: CustomizationOption, selected_ids: Iterable[str]) -> int:
    return sum(choice.price_delta for choice in selected_choices(option, selected_ids))


def total_extra(menu: Menu, selections_by_option: Selections) -> int:
    total = 0
    for option in menu.customization_options:
        selected_ids = selections_by_option.get(option.option_id)
        if not selected_ids:
            continue
        total += option_price(option, selected_ids)
    return total


def missing_required(menu: Menu, selections_by_option: Selections) -> list[CustomizationOption]:
    missing: list[CustomizationOption] = []
    for option in menu.customization_options:
        if not option.required:
            continue
        if not selected_choices(option, selections_by_option.get(option.option_id, ())):
            missing.append(option)
    return missing
