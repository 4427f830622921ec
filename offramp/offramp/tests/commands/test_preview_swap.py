from decimal import Decimal
from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command, CommandError

from offramp.exceptions import NoQuoteError

test_module = "offramp.management.commands.preview_swap"


@pytest.fixture(name="registered")
def fixture_registered(rates, verification, locale):
    rates.fetch_rate.return_value = "1500"
    with patch(
        "offramp.integrations.registered_rate_integration", rates
    ), patch(
        "offramp.integrations.registered_verification_integration", verification
    ), patch(
        "offramp.integrations.registered_locale_integration", locale
    ):
        yield rates, verification, locale


def preview(**options):
    out, err = StringIO(), StringIO()
    call_command("preview_swap", stdout=out, stderr=err, **options)
    return out.getvalue(), err.getvalue()


def test_preview_send(registered):
    out, _ = preview(network="Base", token="USDC", currency="NGN", send="100")
    assert "Rate:     1 USDC = 1500 NGN" in out
    assert "Send:     100 USDC" in out
    assert "Receive:  150,000 NGN" in out
    assert "Bounds:   0.5 - 10,000 USDC" in out
    assert "Currencies: KES, NGN, TZS, UGX, MWK, GHS (disabled)" in out
    assert "The swap is valid" in out


def test_preview_receive(registered):
    out, _ = preview(network="Base", token="USDC", currency="NGN", receive="1000000")
    assert "Send:     666.6667 USDC" in out
    assert "Receive:  1,000,000 NGN" in out


def test_preview_pegged_asset(registered):
    out, _ = preview(network="Base", token="cNGN", currency="NGN", send="100")
    assert "Bounds:   750 - 15,000,000 cNGN" in out
    assert "amount_sent: Minimum amount is 750" in out


def test_preview_balance(registered):
    out, _ = preview(
        network="Base", token="USDC", currency="NGN", send="100", balance=Decimal("50")
    )
    assert "amount_sent: Insufficient balance" in out


def test_preview_verification(registered):
    _, verification, _ = registered
    verification.fetch_status.return_value = {"status": "success"}
    out, _ = preview(
        network="Base", token="USDC", currency="NGN", send="100", address="0xabc"
    )
    assert "Verified: yes" in out


def test_unknown_network(registered):
    with pytest.raises(CommandError, match="unknown network"):
        preview(network="Solana", token="USDC", currency="NGN", send="100")


def test_unsupported_token(registered):
    with pytest.raises(CommandError, match="not supported"):
        preview(network="Arbitrum One", token="cNGN", currency="NGN", send="100")


def test_disabled_currency(registered):
    with pytest.raises(CommandError, match="not available"):
        preview(network="Base", token="USDC", currency="GHS", send="100")


@patch(f"{test_module}.logger")
def test_no_rate(mock_logger, registered):
    rates, _, _ = registered
    rates.fetch_rate.side_effect = NoQuoteError("no quote available")
    with pytest.raises(CommandError, match="no rate available"):
        preview(network="Base", token="USDC", currency="NGN", send="100")
    mock_logger.error.assert_called_once()


def test_invalid_amount(registered):
    with pytest.raises(CommandError, match="invalid amount"):
        preview(network="Base", token="USDC", currency="NGN", send="1.23456")
