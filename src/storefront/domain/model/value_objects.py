"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Zero is a valid amount
    (free shipping, empty cart); negative amounts are not.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def scaled(self, rate: Decimal) -> Money:
        """Multiply by a non-negative decimal rate (e.g. a tax rate), rounded to cents."""
        return Money(self.amount * rate, self.currency).rounded()

    def rounded(self) -> Money:
        """Round half-up to two decimal places."""
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def to_plain(self) -> str:
        """Two-decimal string without the currency symbol, e.g. ``"165.00"``."""
        return f"{self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


REQUIRED_ADDRESS_FIELDS = ("name", "street", "city", "postal_code", "country")


@dataclass(frozen=True)
class ShippingAddress:
    """Where an order is shipped to.

    ``state`` and ``phone`` are optional; every other field is required
    and must contain something other than whitespace.
    """

    name: str
    street: str
    city: str
    postal_code: str
    country: str
    state: str | None = None
    phone: str | None = None

    def __post_init__(self) -> None:
        missing = [
            field_name
            for field_name in REQUIRED_ADDRESS_FIELDS
            if not isinstance(getattr(self, field_name), str)
            or not getattr(self, field_name).strip()
        ]
        if missing:
            raise ValidationError(
                "Shipping address is missing required fields: " + ", ".join(missing)
            )

    @staticmethod
    def from_mapping(raw: Mapping[str, object] | None) -> ShippingAddress:
        """Build an address from loosely-typed input, reporting every missing field."""
        if not raw:
            raise ValidationError("Shipping address is required")

        def text(key: str) -> str:
            value = raw.get(key)
            return value.strip() if isinstance(value, str) else ""

        def optional(key: str) -> str | None:
            return text(key) or None

        return ShippingAddress(
            name=text("name"),
            street=text("street"),
            city=text("city"),
            postal_code=text("postal_code"),
            country=text("country"),
            state=optional("state"),
            phone=optional("phone"),
        )

    def to_dict(self) -> dict[str, str | None]:
        return {
            "name": self.name,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
            "phone": self.phone,
        }
