"""
This module sets up the test configuration. It defines fixtures for the catalog,
the external integrations and a swap session wired to them.
"""
import pytest
from unittest.mock import AsyncMock

from offramp.catalog import load_catalog
from offramp.integrations import (
    LocaleIntegration,
    RateIntegration,
    VerificationIntegration,
)
from offramp.swap import SwapSession


@pytest.fixture(name="catalog")
def fixture_catalog():
    return load_catalog()


@pytest.fixture(name="rates")
def fixture_rates():
    """A rate integration pricing the probe asset at 1600 of the currency."""
    rates = RateIntegration()
    rates.fetch_rate = AsyncMock(return_value="1600")
    return rates


@pytest.fixture(name="verification")
def fixture_verification():
    verification = VerificationIntegration()
    verification.fetch_status = AsyncMock(return_value={"status": "not_found"})
    return verification


@pytest.fixture(name="locale")
def fixture_locale():
    locale = LocaleIntegration()
    locale.country_code = AsyncMock(return_value="KE")
    return locale


@pytest.fixture(name="session")
def fixture_session(catalog, rates, verification, locale):
    return SwapSession(
        "Base",
        catalog=catalog,
        rates=rates,
        verification=verification,
        locale=locale,
    )
