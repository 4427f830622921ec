from decimal import Decimal

import pytest

from offramp.constraints import AssetConstraint
from offramp.forms import SwapForm, display_amount


@pytest.fixture(name="currencies")
def fixture_currencies(catalog):
    return catalog.currencies.apply_asset_rule("USDC")


def make_form(currencies, balance=None, **data):
    return SwapForm(
        AssetConstraint.default(),
        currencies,
        ("USDC", "cNGN"),
        balance,
        data=dict({"token": "USDC", "currency": "NGN"}, **data),
    )


def test_display_amount():
    assert display_amount(Decimal("16000000.0")) == "16,000,000"
    assert display_amount(Decimal("0.50")) == "0.5"


def test_grouped_amounts(currencies):
    form = make_form(currencies, amount_sent="1,234.5", amount_received="1,851,750")
    assert form.is_valid(), form.errors
    assert form.cleaned_data["amount_sent"] == Decimal("1234.5")
    assert form.cleaned_data["amount_received"] == Decimal("1851750")


def test_decimal_places(currencies):
    form = make_form(currencies, amount_sent="1.23456", amount_received="1.234")
    assert form.errors["amount_sent"] == ["Maximum 4 decimal places allowed"]
    assert form.errors["amount_received"] == ["Maximum 2 decimal places allowed"]


def test_amount_required(currencies):
    form = make_form(currencies, amount_sent="")
    assert form.errors["amount_sent"] == ["Amount is required"]


def test_fields_disabled_until_selected(currencies):
    form = make_form(currencies, token="", currency="", amount_sent="10")
    assert form.fields["amount_sent"].disabled
    assert form.fields["amount_received"].disabled
    assert form.errors["amount_sent"] == ["Amount is required"]

    form = make_form(currencies, currency="", amount_sent="10")
    assert not form.fields["amount_sent"].disabled
    assert form.fields["amount_received"].disabled


def test_currency_choices_exclude_disabled(currencies):
    form = make_form(currencies, currency="GHS", amount_sent="10")
    choices = [code for code, _ in form.fields["currency"].choices]
    assert choices == ["", "KES", "NGN", "TZS", "UGX", "MWK"]
    assert "currency" in form.errors


def test_balance_boundary(currencies):
    assert make_form(currencies, Decimal("10"), amount_sent="10").is_valid()
    form = make_form(currencies, Decimal("9.9999"), amount_sent="10")
    assert form.errors["amount_sent"] == ["Insufficient balance"]


def test_bounds_are_inclusive(currencies):
    assert make_form(currencies, amount_sent="0.5").is_valid()
    assert make_form(currencies, amount_sent="10000").is_valid()
    form = make_form(currencies, amount_sent="0.4999")
    assert form.errors["amount_sent"] == ["Minimum amount is 0.5"]
