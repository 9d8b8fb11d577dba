"""Money, the one value object the cart arithmetic runs on."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering
from typing import Iterable

from cashier.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "IDR"

_CENTS = Decimal("0.01")


@total_ordering
@dataclass(frozen=True)
class Money:
    """Non-negative Decimal amount tagged with a currency code.

    Line and cart totals are exact sums of ``unit_price * quantity``;
    rounding happens only when an amount is displayed or sent over the
    wire.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Invalid money amount: {self.amount}")
        if self.amount < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    def __add__(self, other: Money) -> Money:
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, quantity: int) -> Money:
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(quantity).__name__}")
        return Money(self.amount * quantity, self.currency)

    __rmul__ = __mul__

    def __lt__(self, other: Money) -> bool:
        self._check_currency(other)
        return self.amount < other.amount

    def __str__(self) -> str:
        return f"{self.rounded():.2f}"

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def rounded(self) -> Decimal:
        return self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP)

    def as_float(self) -> float:
        """JSON-number form for APIs that do not take decimal strings."""
        return float(self.rounded())

    def _check_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Coerce *amount* through ``str`` so floats keep their printed value."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)

    @staticmethod
    def total(amounts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
        result: Money | None = None
        for amount in amounts:
            result = amount if result is None else result + amount
        return result if result is not None else Money.zero(currency)
