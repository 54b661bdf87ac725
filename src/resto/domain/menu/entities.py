from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from resto.domain.common.ids import ChoiceId, MenuId, OptionId
from resto.domain.common.money import Money


class MenuStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OUT_OF_STOCK = "OUT_OF_STOCK"


class SelectionKind(str, Enum):
    SINGLE = "SINGLE"
    MULTI = "MULTI"


@dataclass(frozen=True)
class Choice:
    choice_id: ChoiceId
    name: str
    price_delta: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.price_delta, bool) or not isinstance(self.price_delta, int):
            raise ValueError("price_delta must be an integer")


@dataclass(frozen=True)
class CustomizationOption:
    option_id: OptionId
    name: str
    kind: SelectionKind
    required: bool = False
    choices: tuple[Choice, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for choice in self.choices:
            if choice.choice_id in seen:
                raise ValueError(
                    f"duplicate choice id {choice.choice_id} in option {self.option_id}"
                )
            seen.add(choice.choice_id)

    def find_choice(self, choice_id: str) -> Choice | None:
        for choice in self.choices:
            if choice.choice_id == choice_id:
                return choice
        return None


@dataclass(frozen=True)
class Menu:
    menu_id: MenuId
    name: str
    price: Money
    category: str | None = None
    status: MenuStatus = MenuStatus.AVAILABLE
    customization_options: tuple[CustomizationOption, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        seen: set[str] = set()
        for option in self.customization_options:
            if option.option_id in seen:
                raise ValueError(f"duplicate option id {option.option_id} in menu {self.menu_id}")
            seen.add(option.option_id)

    @property
    def is_available(self) -> bool:
        return self.status == MenuStatus.AVAILABLE

    def find_option(self, option_id: str) -> CustomizationOption | None:
        for option in self.customization_options:
            if option.option_id == option_id:
                return option
        return None
