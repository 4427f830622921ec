"""
The settlement currency catalog.

Catalogs are immutable. Each rule returns a new :class:`CurrencyCatalog` so the
same base catalog can be re-derived for every asset selection without carrying
state over from a previous one.
"""
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from offramp import settings


def currency_to_country_code(code: str) -> str:
    """ISO 4217 codes start with the ISO 3166 alpha-2 code of the issuer."""
    return code[:2].lower()


def flag_url(code: str) -> str:
    return settings.FLAG_URL.format(country=currency_to_country_code(code))


@dataclass(frozen=True)
class CurrencyEntry:
    code: str
    label: str
    icon_ref: str = ""
    disabled: bool = False
    locale_rank: int = 1

    @property
    def country_code(self) -> str:
        return currency_to_country_code(self.code)


@dataclass(frozen=True)
class CurrencyCatalog:
    entries: Tuple[CurrencyEntry, ...]
    forced_currency: Optional[str] = None

    @classmethod
    def build(cls, entries: Iterable[CurrencyEntry]) -> "CurrencyCatalog":
        return cls(entries=tuple(entries))

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    @property
    def codes(self) -> Tuple[str, ...]:
        return tuple(e.code for e in self.entries)

    @property
    def enabled_codes(self) -> Tuple[str, ...]:
        return tuple(e.code for e in self.entries if not e.disabled)

    def get(self, code: str) -> Optional[CurrencyEntry]:
        return next((e for e in self.entries if e.code == code), None)

    def is_enabled(self, code: str) -> bool:
        entry = self.get(code)
        return bool(entry and not entry.disabled)

    def apply_asset_rule(
        self, selected_asset: Optional[str], selected_currency: Optional[str] = None
    ) -> "CurrencyCatalog":
        """
        Recompute which currencies can be chosen for `selected_asset`.

        The reference-pegged asset settles only in the reference currency: every
        other entry is disabled and, if `selected_currency` differs, the
        reference currency becomes ``forced_currency``. Any other asset resets
        the entries to the default-disabled set. Enabled entries are then moved
        ahead of disabled ones, keeping their relative order.
        """
        forced_currency = None
        if selected_asset == settings.REFERENCE_PEGGED_ASSET:
            entries = [
                replace(e, disabled=e.code != settings.REFERENCE_CURRENCY)
                for e in self.entries
            ]
            if selected_currency != settings.REFERENCE_CURRENCY:
                forced_currency = settings.REFERENCE_CURRENCY
        else:
            entries = [
                replace(e, disabled=e.code in settings.DEFAULT_DISABLED_CURRENCIES)
                for e in self.entries
            ]
        return CurrencyCatalog(
            entries=partition_enabled(entries), forced_currency=forced_currency
        )

    def apply_locale_rank(self, country_code: Optional[str]) -> "CurrencyCatalog":
        """
        Move the enabled currency of `country_code` to the front.

        A missing `country_code` (the lookup failed or has not completed) or a
        country without an enabled currency leaves the order as it is.
        """
        if not country_code:
            return self
        country_code = country_code.lower()
        local = next(
            (
                e
                for e in self.entries
                if e.country_code == country_code and not e.disabled
            ),
            None,
        )
        if local is None:
            return self
        entries = [replace(local, locale_rank=0)]
        entries.extend(
            replace(e, locale_rank=1) for e in self.entries if e is not local
        )
        return CurrencyCatalog(
            entries=tuple(entries), forced_currency=self.forced_currency
        )


def partition_enabled(entries: Iterable[CurrencyEntry]) -> Tuple[CurrencyEntry, ...]:
    entries = list(entries)
    return tuple(e for e in entries if not e.disabled) + tuple(
        e for e in entries if e.disabled
    )
