"""
Offramp-specific settings. This is not django.conf.settings.
"""
# pylint: disable=invalid-name
import os
from decimal import Decimal

import environ
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


def env_or_settings(variable, list=False):
    try:
        if list:
            return env.list(variable)
        return env(variable)
    except ImproperlyConfigured:
        if hasattr(settings, "OFFRAMP_" + variable):
            return getattr(settings, "OFFRAMP_" + variable)
        else:
            return None


env = environ.Env()
env_file = os.path.join(getattr(settings, "BASE_DIR", ""), ".env")
if os.path.exists(env_file):
    env.read_env(env_file)
elif hasattr(settings, "OFFRAMP_ENV_PATH"):
    if os.path.exists(settings.OFFRAMP_ENV_PATH):
        env.read_env(settings.OFFRAMP_ENV_PATH)
    else:
        raise ImproperlyConfigured(
            f"Could not find env file at {settings.OFFRAMP_ENV_PATH}"
        )

AGGREGATOR_URL = env_or_settings("AGGREGATOR_URL")
if AGGREGATOR_URL:
    AGGREGATOR_URL = AGGREGATOR_URL.rstrip("/")
LOCALE_LOOKUP_URL = env_or_settings("LOCALE_LOOKUP_URL") or "https://ipapi.co/json/"
REQUEST_TIMEOUT = int(env_or_settings("REQUEST_TIMEOUT") or 10)

# The asset whose settlement currency is pinned to a single fiat currency, and
# the asset used to price it in that currency when computing send bounds.
REFERENCE_PEGGED_ASSET = env_or_settings("REFERENCE_PEGGED_ASSET") or "cNGN"
REFERENCE_CURRENCY = env_or_settings("REFERENCE_CURRENCY") or "NGN"
REFERENCE_PROBE_ASSET = env_or_settings("REFERENCE_PROBE_ASSET") or "USDC"

DEFAULT_MIN_SEND = Decimal(str(env_or_settings("DEFAULT_MIN_SEND") or "0.5"))
DEFAULT_MAX_SEND = Decimal(str(env_or_settings("DEFAULT_MAX_SEND") or "10000"))
DEFAULT_DISABLED_CURRENCIES = tuple(
    env_or_settings("DEFAULT_DISABLED_CURRENCIES", list=True) or ["GHS", "BRL", "ARS"]
)

SEND_DECIMAL_PLACES = int(env_or_settings("SEND_DECIMAL_PLACES") or 4)
RECEIVE_DECIMAL_PLACES = int(env_or_settings("RECEIVE_DECIMAL_PLACES") or 2)

CATALOG_PATH = env_or_settings("CATALOG_PATH")
FLAG_URL = env_or_settings("FLAG_URL") or "https://flagcdn.com/h24/{country}.webp"
