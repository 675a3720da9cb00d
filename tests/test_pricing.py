"""
Price resolution tests: override catalog lookups and catalog loading.

Tests:
1-4.   parse_unit_spec
5-12.  PriceResolver precedence, archived entries, categories, tie-break
13-18. CatalogLoader last-write-wins and failure fallback
"""

from datetime import datetime, timedelta

import pytest

from estimator.calculators.material_lookup import PriceResolver, parse_unit_spec
from estimator.catalog import CatalogLoader
from estimator.models import PricingMode
from estimator.schemas import MaterialEntry


def _wood_post(price=19.99, **kwargs):
    return MaterialEntry(name="Wood Post", category="posts", price=price, **kwargs)


# ============================================================
# Unit spec parsing
# ============================================================

def test_unit_spec_plain_number():
    assert parse_unit_spec("100 sq ft") == 100
    assert parse_unit_spec("0.5 gal") == 0.5
    assert parse_unit_spec(".75 in") == 0.75


def test_unit_spec_thousands_separator():
    assert parse_unit_spec("1,000 count") == 1000


def test_unit_spec_unparseable():
    assert parse_unit_spec("per box") is None
    assert parse_unit_spec("") is None
    assert parse_unit_spec(None) is None


def test_unit_spec_non_positive_rejected():
    assert parse_unit_spec("0 ft") is None


# ============================================================
# PriceResolver
# ============================================================

def test_override_wins_in_custom_mode():
    """Wood Post override at 19.99 over the 24.98 default."""
    resolver = PriceResolver(PricingMode.CUSTOM, [_wood_post()])
    assert resolver.resolve_price("Wood Post", 24.98, "posts") == 19.99


def test_default_mode_ignores_overrides():
    resolver = PriceResolver(PricingMode.DEFAULT, [_wood_post()])
    assert resolver.resolve_price("Wood Post", 24.98, "posts") == 24.98


def test_name_match_is_case_insensitive():
    resolver = PriceResolver(PricingMode.CUSTOM, [_wood_post()])
    assert resolver.resolve_price("WOOD POST", 24.98) == 19.99
    assert resolver.resolve_price("wood post", 24.98, "posts") == 19.99


def test_category_must_match_when_given():
    resolver = PriceResolver(PricingMode.CUSTOM, [_wood_post()])
    assert resolver.resolve_price("Wood Post", 24.98, "gates") == 24.98


def test_archived_override_is_ignored():
    resolver = PriceResolver(PricingMode.CUSTOM, [_wood_post(archived=True)])
    assert resolver.resolve_price("Wood Post", 24.98, "posts") == 24.98
    assert resolver.find_material("Wood Post", "posts") is None


def test_override_precedence_regardless_of_default():
    """An override wins even when it is more expensive than the default."""
    resolver = PriceResolver(PricingMode.CUSTOM, [_wood_post(price=99.0)])
    for default in (0.0, 10.0, 1000.0):
        assert resolver.resolve_price("Wood Post", default, "posts") == 99.0


def test_duplicate_overrides_newest_wins():
    now = datetime(2024, 1, 1)
    resolver = PriceResolver(PricingMode.CUSTOM, [
        _wood_post(price=18.0, created_at=now),
        _wood_post(price=21.0, created_at=now + timedelta(days=1)),
        _wood_post(price=15.0, created_at=now - timedelta(days=1)),
    ])
    assert resolver.resolve_price("Wood Post", 24.98, "posts") == 21.0


def test_duplicate_overrides_without_timestamps_keep_catalog_order():
    resolver = PriceResolver(PricingMode.CUSTOM, [_wood_post(price=18.0), _wood_post(price=21.0)])
    assert resolver.resolve_price("Wood Post", 24.98, "posts") == 18.0


def test_unit_value_override_and_fallback():
    resolver = PriceResolver(PricingMode.CUSTOM, [
        MaterialEntry(name="Caulk", category="consumables", price=7.5, unit_spec="25 ft per tube"),
        MaterialEntry(name="Insulation", category="consumables", price=11.0, unit_spec="per roll"),
    ])
    assert resolver.resolve_unit_value("Caulk", 20, "consumables") == 25
    # an unparseable unit spec falls back, but the price override still applies
    assert resolver.resolve_unit_value("Insulation", 20, "consumables") == 20
    assert resolver.resolve_price("Insulation", 12.98, "consumables") == 11.0
    # no match at all
    assert resolver.resolve_unit_value("Shim Packs", 2, "consumables") == 2


def test_material_values_pairs_price_and_unit():
    resolver = PriceResolver(PricingMode.CUSTOM, [
        MaterialEntry(name="Caulk", category="consumables", price=7.5, unit_spec="25 ft"),
    ])
    values = resolver.material_values("Caulk", 6.98, 20, "consumables")
    assert values == {"price": 7.5, "unit_value": 25}
    assert resolver.material_values("Caulk", 6.98)["unit_value"] is None


def test_resolver_with_error_degrades_to_default():
    resolver = PriceResolver(PricingMode.CUSTOM, [_wood_post()], error="boom")
    assert resolver.mode == PricingMode.DEFAULT
    assert resolver.error == "boom"
    assert resolver.resolve_price("Wood Post", 24.98, "posts") == 24.98


# ============================================================
# CatalogLoader
# ============================================================

def test_loader_caches_after_first_load():
    calls = []

    def fetch(calculator_type):
        calls.append(calculator_type)
        return [_wood_post()]

    loader = CatalogLoader(fetch)
    first = loader.resolver("fence", PricingMode.CUSTOM)
    second = loader.resolver("fence", PricingMode.CUSTOM)
    assert calls == ["fence"], "Catalog should be fetched once per trade"
    assert first.resolve_price("Wood Post", 24.98, "posts") == 19.99
    assert second.resolve_price("Wood Post", 24.98, "posts") == 19.99


def test_loader_default_mode_never_fetches():
    def fetch(calculator_type):
        raise AssertionError("should not fetch in default mode")

    resolver = CatalogLoader(fetch).resolver("fence", PricingMode.DEFAULT)
    assert resolver.mode == PricingMode.DEFAULT
    assert resolver.error is None


def test_loader_failure_falls_back_with_error_flag():
    def fetch(calculator_type):
        raise RuntimeError("store unavailable")

    resolver = CatalogLoader(fetch).resolver("fence", "custom")
    assert resolver.mode == PricingMode.DEFAULT
    assert "store unavailable" in resolver.error
    assert resolver.resolve_price("Wood Post", 24.98, "posts") == 24.98


def test_loader_last_write_wins():
    """A load that started earlier but finished later is discarded."""
    loader = CatalogLoader(lambda calculator_type: [])
    older = loader.begin("fence")
    newer = loader.begin("fence")

    assert loader.complete("fence", newer, [_wood_post(price=21.0)]) is True
    assert loader.complete("fence", older, [_wood_post(price=18.0)]) is False
    assert loader.fail("fence", older, "late failure") is False

    state = loader.state("fence")
    assert state.loaded and state.error is None
    assert state.entries[0].price == 21.0


def test_loader_invalidate_forces_refetch():
    prices = iter([18.0, 21.0])
    loader = CatalogLoader(lambda calculator_type: [_wood_post(price=next(prices))])
    assert loader.resolver("fence", "custom").resolve_price("Wood Post", 24.98, "posts") == 18.0
    loader.invalidate("fence")
    assert loader.resolver("fence", "custom").resolve_price("Wood Post", 24.98, "posts") == 21.0


def test_loader_accepts_plain_dicts():
    loader = CatalogLoader(lambda calculator_type: [
        {"name": "Wood Post", "category": "posts", "price": 19.99},
    ])
    assert loader.resolver("fence", "custom").resolve_price("Wood Post", 24.98, "posts") == pytest.approx(19.99)


def test_loader_invalid_entry_falls_back_with_error_flag():
    loader = CatalogLoader(lambda calculator_type: [
        {"name": "Wood Post", "category": "posts", "price": -1},
    ])
    resolver = loader.resolver("fence", PricingMode.CUSTOM)
    assert resolver.mode == PricingMode.DEFAULT
    assert resolver.error
    assert resolver.resolve_price("Wood Post", 24.98, "posts") == 24.98
    assert loader.state("fence").loaded is False
