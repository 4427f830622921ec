"""
Parsing and display formatting for the Send and Receive amount inputs.

Display strings group the integer part with commas. Numeric values are always
``Decimal`` and are derived from the display string with the commas removed.
"""
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from offramp.exceptions import InputRejected

GROUPING_SEPARATOR = ","
AMOUNT_PATTERN = re.compile(r"[0-9]*\.?[0-9]*")
GROUPING_PATTERN = re.compile(r"\B(?=(\d{3})+(?!\d))")


@dataclass(frozen=True)
class AmountField:
    display_text: str
    numeric_value: Decimal
    max_decimal_places: int

    @classmethod
    def empty(cls, max_decimal_places: int) -> "AmountField":
        return cls("", Decimal(0), max_decimal_places)

    @property
    def normalized(self) -> str:
        return strip_grouping(self.display_text)


def strip_grouping(text: str) -> str:
    return text.replace(GROUPING_SEPARATOR, "")


def parse_amount(text: str) -> Decimal:
    """Parse a cleaned amount string, returning 0 for "" or a lone "."."""
    try:
        return Decimal(strip_grouping(text))
    except InvalidOperation:
        return Decimal(0)


def format_amount(text: str, max_decimal_places: Optional[int] = None) -> str:
    """
    Group the integer part of `text` in threes and keep its fractional part as
    typed, truncated to `max_decimal_places` if given. Trailing zeros are never
    added, so "12." stays "12." while the user is still typing.
    """
    if text == "":
        return ""
    cleaned = strip_grouping(text)
    integer, dot, fraction = cleaned.partition(".")
    if dot and not integer:
        integer = "0"
    integer = GROUPING_PATTERN.sub(GROUPING_SEPARATOR, integer)
    if max_decimal_places is not None:
        fraction = fraction[:max_decimal_places]
    return f"{integer}{dot}{fraction}"


def decimal_to_text(value: Decimal) -> str:
    """Plain (non-exponent) form of `value` without trailing fractional zeros."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class AmountEditor:
    """
    Keeps one amount input in sync with what the user types.

    :meth:`on_input` receives the raw content of the input after each keystroke
    and either returns the new :class:`AmountField` or raises
    :class:`~offramp.exceptions.InputRejected`, in which case the previous value
    is kept untouched.
    """

    def __init__(self, max_decimal_places: int):
        self.max_decimal_places = max_decimal_places
        self.field = AmountField.empty(max_decimal_places)

    @property
    def display_text(self) -> str:
        return self.field.display_text

    @property
    def numeric_value(self) -> Decimal:
        return self.field.numeric_value

    def on_input(self, raw: str) -> AmountField:
        if raw == ".":
            return self._accept("0.")

        current = self.field.normalized
        if raw.endswith(".") and current and "." not in current:
            # The input may report a stale value when "." is typed, so the
            # decimal point is appended to what we already have.
            return self._accept(current + ".")

        cleaned = strip_grouping(raw)
        if cleaned == "":
            return self._accept("")

        if not AMOUNT_PATTERN.fullmatch(cleaned):
            raise InputRejected(f"not a decimal amount: {raw!r}")

        _, dot, fraction = cleaned.partition(".")
        if dot and len(fraction) > self.max_decimal_places:
            raise InputRejected(
                f"more than {self.max_decimal_places} decimal places: {raw!r}"
            )

        return self._accept(cleaned)

    def set_value(self, value: Optional[Decimal]) -> AmountField:
        """Overwrite the field with a computed or seeded value."""
        if value is None:
            return self._accept("")
        return self._accept(decimal_to_text(value))

    def clear(self) -> AmountField:
        return self._accept("")

    def _accept(self, cleaned: str) -> AmountField:
        integer, dot, fraction = cleaned.partition(".")
        cleaned = f"{integer}{dot}{fraction[:self.max_decimal_places]}"
        self.field = AmountField(
            display_text=format_amount(cleaned),
            numeric_value=parse_amount(cleaned),
            max_decimal_places=self.max_decimal_places,
        )
        return self.field
