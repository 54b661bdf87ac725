from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CURRENCY = "IDR"


@dataclass(frozen=True)
class Money:
    amount: int
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError("amount must be an integer number of currency units")
        if self.amount < 0:
            raise ValueError("amount must be >= 0")
        if len(self.currency) != 3 or not self.currency.isalpha() or not self.currency.isupper():
            raise ValueError("currency must be a 3-letter uppercase code")

    def times(self, quantity: int) -> Money:
        return Money(amount=self.amount * quantity, currency=self.currency)
