from __future__ import annotations

from typing import NewType

MenuId = NewType("MenuId", str)
OptionId = NewType("OptionId", str)
ChoiceId = NewType("ChoiceId", str)
TableId = NewType("TableId", str)
OrderId = NewType("OrderId", str)
