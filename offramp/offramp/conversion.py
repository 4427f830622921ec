from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from django.utils.translation import gettext_lazy as _
from model_utils import Choices


class OfframpChoices(Choices):
    """A subclass to change the verbose default string representation"""

    def __repr__(self):
        return str(Choices)


DIRECTION = OfframpChoices(
    ("send", "send_driven", _("Send")),
    ("receive", "receive_driven", _("Receive")),
)


def round_half_up(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


class DirectionTracker:
    """Remembers which amount field the user edited last."""

    def __init__(self, direction: str = DIRECTION.send_driven):
        self.direction = direction

    def mark(self, direction: str):
        if direction not in DIRECTION:
            raise ValueError(f"unknown direction: {direction}")
        self.direction = direction

    @property
    def receive_driven(self) -> bool:
        return self.direction == DIRECTION.receive_driven


def recompute(
    direction: str,
    amount_sent: Optional[Decimal],
    amount_received: Optional[Decimal],
    rate: Optional[Decimal],
    send_places: int = 4,
    receive_places: int = 2,
) -> Optional[Tuple[str, Decimal]]:
    """
    Derive the field the user is not editing from the one they are.

    Returns ``("amount_sent", value)`` or ``("amount_received", value)`` naming
    the field to overwrite, or ``None`` when there is nothing to do: no usable
    rate, or neither amount is positive.
    """
    if not rate or rate <= 0:
        return None
    if not (
        (amount_sent and amount_sent > 0) or (amount_received and amount_received > 0)
    ):
        return None

    if direction == DIRECTION.receive_driven:
        return (
            "amount_sent",
            round_half_up(Decimal(amount_received or 0) / rate, send_places),
        )
    return (
        "amount_received",
        round_half_up(rate * Decimal(amount_sent or 0), receive_places),
    )
