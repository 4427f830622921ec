"""Supported networks, the tokens available on each, and accepted currencies."""
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional, Tuple

import toml
from django.core.exceptions import ImproperlyConfigured

from offramp import settings
from offramp.currencies import CurrencyCatalog, CurrencyEntry, flag_url

NETWORK_TOKENS = {
    "Base": ("USDC", "cNGN"),
    "Arbitrum One": ("USDC", "USDT"),
    "Polygon": ("USDC", "USDT"),
    "BNB Smart Chain": ("USDC", "USDT", "cNGN"),
}

ACCEPTED_CURRENCIES = (
    ("KES", "Kenyan Shilling (KES)"),
    ("NGN", "Nigerian Naira (NGN)"),
    ("GHS", "Ghana Cedi (GHS)"),
    ("TZS", "Tanzanian Shilling (TZS)"),
    ("UGX", "Ugandan Shilling (UGX)"),
    ("MWK", "Malawian Kwacha (MWK)"),
    ("BRL", "Brazilian Real (BRL)"),
    ("ARS", "Argentine Peso (ARS)"),
)


def network_slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


@dataclass(frozen=True)
class Catalog:
    networks: Dict[str, Tuple[str, ...]]
    currencies: CurrencyCatalog

    def supported_tokens(self, network: str) -> Tuple[str, ...]:
        return self.networks.get(network, ())


def build_catalog(networks: Dict, currencies) -> Catalog:
    entries = [
        CurrencyEntry(
            code=code,
            label=label,
            icon_ref=flag_url(code),
            disabled=code in settings.DEFAULT_DISABLED_CURRENCIES,
        )
        for code, label in currencies
    ]
    return Catalog(
        networks={name: tuple(tokens) for name, tokens in networks.items()},
        currencies=CurrencyCatalog.build(entries),
    )


def load_catalog(path: Optional[str] = None) -> Catalog:
    """
    Load the catalog from the TOML file at `path`, or the built-in one if
    `path` is empty. The file is expected to look like::

        [[networks]]
        name = "Base"
        tokens = ["USDC", "cNGN"]

        [[currencies]]
        code = "NGN"
        label = "Nigerian Naira (NGN)"
    """
    if not path:
        return build_catalog(NETWORK_TOKENS, ACCEPTED_CURRENCIES)
    try:
        data = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        raise ImproperlyConfigured(f"unable to load catalog from {path}: {e}")
    try:
        networks = {n["name"]: n["tokens"] for n in data["networks"]}
        currencies = [(c["code"], c["label"]) for c in data["currencies"]]
    except (KeyError, TypeError) as e:
        raise ImproperlyConfigured(f"invalid catalog file {path}: missing {e}")
    return build_catalog(networks, currencies)


@lru_cache(maxsize=None)
def get_catalog() -> Catalog:
    return load_catalog(settings.CATALOG_PATH)
