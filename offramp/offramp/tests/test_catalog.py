import pytest
from django.core.exceptions import ImproperlyConfigured

from offramp.catalog import get_catalog, load_catalog, network_slug


def test_network_slug():
    assert network_slug("Arbitrum One") == "arbitrum-one"
    assert network_slug("BNB  Smart Chain") == "bnb-smart-chain"
    assert network_slug("Base") == "base"


def test_builtin_catalog():
    catalog = load_catalog()
    assert catalog.supported_tokens("Base") == ("USDC", "cNGN")
    assert catalog.supported_tokens("Unknown") == ()
    assert catalog.currencies.get("NGN").icon_ref == "https://flagcdn.com/h24/ng.webp"
    assert catalog.currencies.get("GHS").disabled
    assert get_catalog().networks == catalog.networks


def test_load_catalog_from_toml(tmp_path):
    path = tmp_path / "catalog.toml"
    path.write_text(
        """
[[networks]]
name = "Celo"
tokens = ["USDC", "cUSD"]

[[currencies]]
code = "KES"
label = "Kenyan Shilling"

[[currencies]]
code = "GHS"
label = "Ghana Cedi"
"""
    )
    catalog = load_catalog(str(path))
    assert catalog.supported_tokens("Celo") == ("USDC", "cUSD")
    assert catalog.currencies.codes == ("KES", "GHS")
    assert catalog.currencies.enabled_codes == ("KES",)


def test_load_catalog_missing_key(tmp_path):
    path = tmp_path / "catalog.toml"
    path.write_text('[[networks]]\nname = "Celo"\n')
    with pytest.raises(ImproperlyConfigured, match="missing"):
        load_catalog(str(path))


def test_load_catalog_missing_file(tmp_path):
    with pytest.raises(ImproperlyConfigured):
        load_catalog(str(tmp_path / "nope.toml"))
