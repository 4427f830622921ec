from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional

from offramp.conversion import round_half_up


def parse_seed_amount(value: Optional[str]) -> Decimal:
    """
    Read an amount from a query parameter, rounded to 2 places. Missing,
    malformed, negative and non-finite values read as 0.
    """
    if not value:
        return Decimal(0)
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        return Decimal(0)
    if not amount.is_finite() or amount <= 0:
        return Decimal(0)
    return round_half_up(amount, 2)


@dataclass(frozen=True)
class SeedParams:
    """Initial form values passed in the page's query string."""

    token: Optional[str] = None
    currency: Optional[str] = None
    token_amount: Decimal = Decimal(0)
    fiat_amount: Decimal = Decimal(0)

    @classmethod
    def from_query(cls, query: Mapping) -> "SeedParams":
        return cls(
            token=query.get("token") or None,
            currency=query.get("currency") or None,
            token_amount=parse_seed_amount(query.get("tokenAmount")),
            fiat_amount=parse_seed_amount(query.get("fiatAmount")),
        )
