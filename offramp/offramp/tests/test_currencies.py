import pytest

from offramp.currencies import (
    CurrencyCatalog,
    CurrencyEntry,
    currency_to_country_code,
    flag_url,
    partition_enabled,
)


def codes(catalog):
    return [e.code for e in catalog]


@pytest.fixture(name="currencies")
def fixture_currencies(catalog):
    return catalog.currencies


def test_partition_is_stable():
    entries = [
        CurrencyEntry("AAA", "a", disabled=True),
        CurrencyEntry("BBB", "b"),
        CurrencyEntry("CCC", "c", disabled=True),
        CurrencyEntry("DDD", "d"),
        CurrencyEntry("EEE", "e"),
    ]
    assert [e.code for e in partition_enabled(entries)] == [
        "BBB",
        "DDD",
        "EEE",
        "AAA",
        "CCC",
    ]


def test_pegged_asset_pins_reference_currency(currencies):
    result = currencies.apply_asset_rule("cNGN", "KES")
    assert result.forced_currency == "NGN"
    assert result.enabled_codes == ("NGN",)
    assert codes(result)[0] == "NGN"
    assert all(e.disabled for e in result if e.code != "NGN")


def test_pegged_asset_does_not_force_when_already_selected(currencies):
    result = currencies.apply_asset_rule("cNGN", "NGN")
    assert result.forced_currency is None
    assert result.enabled_codes == ("NGN",)


def test_other_asset_resets_default_disabled_set(currencies):
    pegged = currencies.apply_asset_rule("cNGN", "KES")
    result = pegged.apply_asset_rule("USDC", "NGN")
    assert result.forced_currency is None
    assert codes(result) == ["NGN", "KES", "TZS", "UGX", "MWK", "GHS", "BRL", "ARS"]
    assert [e.code for e in result if e.disabled] == ["GHS", "BRL", "ARS"]


def test_rules_do_not_mutate_the_input(currencies):
    before = list(currencies.entries)
    currencies.apply_asset_rule("cNGN", "KES")
    currencies.apply_locale_rank("NG")
    assert list(currencies.entries) == before


def test_locale_rank_moves_local_currency_first(currencies):
    ordered = currencies.apply_asset_rule("USDC")
    result = ordered.apply_locale_rank("ke")
    assert codes(result)[0] == "KES"
    assert result.get("KES").locale_rank == 0
    result = ordered.apply_locale_rank("UG")
    assert codes(result) == ["UGX", "KES", "NGN", "TZS", "MWK", "GHS", "BRL", "ARS"]


def test_locale_rank_skips_disabled_currency(currencies):
    ordered = currencies.apply_asset_rule("USDC")
    assert codes(ordered.apply_locale_rank("GH")) == codes(ordered)


def test_locale_rank_without_country(currencies):
    ordered = currencies.apply_asset_rule("USDC")
    assert ordered.apply_locale_rank(None) is ordered
    assert codes(ordered.apply_locale_rank("US")) == codes(ordered)


def test_locale_rank_keeps_forced_currency(currencies):
    result = currencies.apply_asset_rule("cNGN", "KES").apply_locale_rank("NG")
    assert result.forced_currency == "NGN"


def test_lookup_helpers(currencies):
    assert currencies.is_enabled("NGN")
    assert not currencies.is_enabled("GHS")
    assert not currencies.is_enabled("XYZ")
    assert currencies.get("XYZ") is None
    assert len(CurrencyCatalog.build([])) == 0


def test_country_and_flag():
    assert currency_to_country_code("NGN") == "ng"
    assert flag_url("KES") == "https://flagcdn.com/h24/ke.webp"
    assert CurrencyEntry("BRL", "Real").country_code == "br"
