from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

from resto.domain.common.ids import ChoiceId, MenuId, OptionId, TableId
from resto.domain.common.money import Money
from resto.domain.menu.entities import Menu, SelectionKind
from resto.domain.menu.pricing import (
    missing_required,
    selected_choices,
    selection_ids,
    total_extra,
)
from resto.domain.order.entities import OrderItem, OrderSnapshot, SelectionSnapshot

LineKey = tuple[MenuId, SelectionSnapshot]


class ValidationError(Exception):
    def __init__(self, message: str, missing_options: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing_options = missing_options

    @property
    def details(self) -> dict[str, list[str]]:
        return {"missingOptions": list(self.missing_options)}


class CartLineNotFoundError(Exception):
    pass


@dataclass(frozen=True)
class CartLine:
    menu_id: MenuId
    name: str
    quantity: int
    unit_price: Money
    selections: SelectionSnapshot = ()
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def key(self) -> LineKey:
        return (self.menu_id, self.selections)

    @property
    def line_total(self) -> Money:
        return self.unit_price.times(self.quantity)


@dataclass(frozen=True)
class Cart:
    table_id: TableId | None = None
    lines: tuple[CartLine, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find(self, line_key: LineKey) -> CartLine | None:
        for line in self.lines:
            if line.key == line_key:
                return line
        return None


def canonical_selections(menu: Menu, selections: Mapping[str, Iterable[str]]) -> SelectionSnapshot:
    """Normalize a raw selection map into the hashable form stored on lines.

    Options and choices unknown to the menu are dropped, empty selections are
    omitted, and both levels follow the menu's declared order so that equal
    selections always produce equal keys.
    """
    canonical: list[tuple[OptionId, tuple[ChoiceId, ...]]] = []
    for option in menu.customization_options:
        chosen = selected_choices(option, selections.get(option.option_id, ()))
        if chosen:
            canonical.append((option.option_id, tuple(choice.choice_id for choice in chosen)))
    return tuple(canonical)


def add_line(
    cart: Cart,
    menu: Menu,
    quantity: int,
    selections: Mapping[str, Iterable[str]] | None = None,
    notes: str | None = None,
) -> Cart:
    selections = {key: selection_ids(value) for key, value in (selections or {}).items()}

    if quantity < 1:
        raise ValidationError(f"quantity must be >= 1, got {quantity}")
    if not menu.is_available:
        raise ValidationError(f"menu item {menu.menu_id} is out of stock")

    missing = missing_required(menu, selections)
    if missing:
        names = ", ".join(option.name for option in missing)
        raise ValidationError(
            f"required customization missing for {menu.name}: {names}",
            missing_options=tuple(option.option_id for option in missing),
        )

    for option in menu.customization_options:
        if option.kind != SelectionKind.SINGLE:
            continue
        known = [
            choice_id
            for choice_id in selections.get(option.option_id, ())
            if option.find_choice(choice_id) is not None
        ]
        if len(set(known)) > 1:
            raise ValidationError(f"option {option.name} accepts a single choice")

    unit_amount = menu.price.amount + total_extra(menu, selections)
    if unit_amount < 0:
        raise ValidationError(f"unit price for {menu.name} must not be negative")

    line = CartLine(
        menu_id=menu.menu_id,
        name=menu.name,
        quantity=quantity,
        unit_price=Money(amount=unit_amount, currency=menu.price.currency),
        selections=canonical_selections(menu, selections),
        notes=notes,
    )

    existing = cart.find(line.key)
    if existing is None:
        return replace(cart, lines=cart.lines + (line,))

    merged = replace(existing, quantity=existing.quantity + quantity, unit_price=line.unit_price)
    return replace(cart, lines=tuple(merged if item.key == line.key else item for item in cart.lines))


def change_quantity(cart: Cart, line_key: LineKey, new_quantity: int) -> Cart:
    if new_quantity < 1:
        raise ValidationError(f"quantity must be >= 1, got {new_quantity}; remove the line instead")
    if cart.find(line_key) is None:
        raise CartLineNotFoundError(f"cart line {line_key[0]} not found")
    return replace(
        cart,
        lines=tuple(
            replace(line, quantity=new_quantity) if line.key == line_key else line
            for line in cart.lines
        ),
    )


def remove_line(cart: Cart, line_key: LineKey) -> Cart:
    if cart.find(line_key) is None:
        raise CartLineNotFoundError(f"cart line {line_key[0]} not found")
    return replace(cart, lines=tuple(line for line in cart.lines if line.key != line_key))


def clear(cart: Cart) -> Cart:
    return replace(cart, lines=())


def cart_total(cart: Cart) -> int:
    return sum(line.line_total.amount for line in cart.lines)


def snapshot(cart: Cart) -> OrderSnapshot:
    if cart.is_empty:
        raise ValidationError("cannot submit an empty cart")

    currency = cart.lines[0].unit_price.currency
    items = tuple(
        OrderItem(
            menu_id=line.menu_id,
            name=line.name,
            quantity=line.quantity,
            price=line.unit_price,
            selections=line.selections,
            notes=line.notes,
        )
        for line in cart.lines
    )
    return OrderSnapshot(items=items, total_price=Money(amount=cart_total(cart), currency=currency))
