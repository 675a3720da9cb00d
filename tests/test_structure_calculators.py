"""
Structural trade calculators: concrete, fence, foundation, veneer, junk removal.

Tests:
1-7.   Concrete (bags, truck, short load, reinforcement, validity, metric)
8-12.  Fence (custom mode, standard mode, overrides, validity)
13-16. Foundation
17-18. Veneer
19-24. Junk removal (base floor, multipliers, labor, negative quantity, validity)

"""

import pytest

from estimator.calculators.concrete import ConcreteCalculator
from estimator.calculators.fencing import FenceCalculator
from estimator.calculators.foundation import FoundationCalculator
from estimator.calculators.junk_removal import JunkItem, JunkRemovalCalculator
from estimator.calculators.material_lookup import PriceResolver
from estimator.calculators.veneer import VeneerCalculator
from estimator.models import PricingMode
from estimator.schemas import MaterialEntry


def _by_label(results, label):
    matches = [item for item in results if item.label == label]
    assert matches, f"No line labelled {label!r} in {[item.label for item in results]}"
    return matches[0]


def _slab(**overrides):
    data = {"concreteType": "flatwork", "length": 10, "width": 10, "height": 4}
    data.update(overrides)
    return data


def _foundation(**overrides):
    data = {
        "length": 40, "width": 30, "footingWidth": 20, "footingDepth": 10,
        "stemWallHeight": 3, "stemWallThickness": 8, "slabThickness": 4, "gravelBaseDepth": 4,
    }
    data.update(overrides)
    return data


# ============================================================
# Concrete
# ============================================================

def test_concrete_truck_small_slab():
    """10 x 10 x 4in flatwork by truck: about 1.23 yd3, warning, no short-load fee."""
    outcome = ConcreteCalculator().calculate(_slab(deliveryMethod="truck"))
    assert outcome.ok
    results = outcome.results

    assert _by_label(results, "Concrete Volume").value == 1.23
    truck = _by_label(results, "Ready-Mix Concrete")
    assert truck.cost == pytest.approx(228.39, abs=0.01)
    assert not any(item.label == "Short Load Delivery Fee" for item in results)
    assert any(item.is_warning for item in results), "Loads under 3 yd3 carry a warning"
    assert results[-1].is_total
    assert results[-1].value == pytest.approx(truck.cost)


def test_concrete_bags_small_slab():
    """Same slab in 80lb bags: 56 bags at 5.89."""
    results = ConcreteCalculator().calculate(_slab(deliveryMethod="bags", bagSize=80)).results
    bags = _by_label(results, "80lb Bags of Concrete")
    assert bags.value == 56
    assert bags.cost == pytest.approx(329.84)
    assert not any(item.is_warning for item in results), "The small-load warning is for trucks only"


def test_concrete_short_load_fee_below_minimum():
    results = ConcreteCalculator().calculate(_slab(length=5, width=5, deliveryMethod="truck")).results
    truck = _by_label(results, "Ready-Mix Concrete")
    assert truck.value == 1, "Truck loads are billed at the 1 yd3 minimum"
    assert truck.cost == pytest.approx(185.0)
    assert _by_label(results, "Short Load Delivery Fee").cost == pytest.approx(150.0)
    assert results[-1].value == pytest.approx(335.0)


def test_concrete_wall_requires_height_and_thickness():
    outcome = ConcreteCalculator().calculate({"concreteType": "wall", "length": 20, "height": 8})
    assert not outcome.ok
    assert outcome.failure.missing == ["thickness"]

    outcome = ConcreteCalculator().calculate({"concreteType": "wall", "length": 20, "height": 8, "thickness": 8})
    assert outcome.ok
    # 20 x 8 x 8/12 / 27
    assert _by_label(outcome.results, "Concrete Volume").value == pytest.approx(3.95, abs=0.01)


def test_concrete_rebar_grid():
    results = ConcreteCalculator().calculate(_slab(reinforcement="rebar", rebarSpacing=12)).results
    # 11 bars each way at 12" on a 10 x 10 slab = 220 ft -> 11 x 20ft bars
    length = _by_label(results, "Rebar Length Needed")
    assert length.value == 220
    assert length.cost == pytest.approx(11 * 8.98)
    assert _by_label(results, "Rebar Pieces").value == 11


def test_concrete_bag_count_monotonic_in_length():
    calc = ConcreteCalculator()
    previous = 0
    for length in (2, 5, 10, 15, 30):
        bags = _by_label(calc.calculate(_slab(length=length)).results, "80lb Bags of Concrete").value
        assert bags >= previous
        previous = bags


def test_concrete_metric_volume_in_cubic_meters():
    results = ConcreteCalculator().calculate(
        _slab(unit="metric", length=3, width=3, height=10, deliveryMethod="truck")).results
    volume = _by_label(results, "Concrete Volume")
    assert volume.value == pytest.approx(0.9)
    assert volume.unit == "cubic meters"
    assert _by_label(results, "Ready-Mix Concrete").cost == pytest.approx(242.0)


# ============================================================
# Fence
# ============================================================

def test_fence_custom_mode():
    """120 lf at 22.50 is a single line plus a 2700 total."""
    outcome = FenceCalculator().calculate({"mode": "custom", "customLinearFeet": 120, "customPricePerFoot": 22.50})
    assert outcome.ok
    assert len(outcome.results) == 2
    assert outcome.results[0].cost == pytest.approx(2700)
    assert outcome.results[1].is_total
    assert outcome.results[1].value == pytest.approx(2700)


def test_fence_custom_mode_validity():
    outcome = FenceCalculator().calculate({"mode": "custom", "customLinearFeet": 120})
    assert outcome.failure.missing == ["custom_price_per_foot"]


def test_fence_standard_privacy():
    results = FenceCalculator().calculate({
        "fenceType": "privacy", "material": "wood", "length": 100, "height": 6, "concreteDepth": 24,
    }).results
    posts = _by_label(results, "Wood Posts")
    assert posts.value == 14   # ceil(100 / 8) + 1
    assert posts.cost == pytest.approx(14 * 24.98)
    assert _by_label(results, "Concrete Mix").value == 17
    assert _by_label(results, "Wood Panels").value == 13
    assert _by_label(results, "Wood Rails").value == 26


def test_fence_post_override_in_custom_mode():
    entries = [MaterialEntry(name="Wood Post", category="posts", price=19.99)]
    data = {"length": 100, "height": 6, "concreteDepth": 24}
    custom = FenceCalculator().calculate(data, PriceResolver(PricingMode.CUSTOM, entries)).results
    default = FenceCalculator().calculate(data, PriceResolver(PricingMode.DEFAULT, entries)).results
    assert _by_label(custom, "Wood Posts").cost == pytest.approx(14 * 19.99)
    assert _by_label(default, "Wood Posts").cost == pytest.approx(14 * 24.98)


def test_fence_material_must_be_offered():
    outcome = FenceCalculator().calculate({
        "fenceType": "chain-link", "material": "wood", "length": 50, "height": 4, "concreteDepth": 24,
    })
    assert "material" in outcome.failure.missing


# ============================================================
# Foundation
# ============================================================

def test_foundation_requires_all_eight_fields():
    data = _foundation()
    del data["slabThickness"]
    outcome = FoundationCalculator().calculate(data)
    assert outcome.failure.missing == ["slab_thickness"]


def test_foundation_footing_volume():
    results = FoundationCalculator().calculate(_foundation()).results
    footing = _by_label(results, "Footing Concrete (3500 PSI)")
    volume = 140 * (20 / 12) * (10 / 12) / 27
    assert footing.value == pytest.approx(round(volume, 2))
    assert footing.cost == pytest.approx(volume * 135.0)


def test_foundation_backfill_never_negative():
    results = FoundationCalculator().calculate(_foundation(stemWallHeight=0.5)).results
    backfill = _by_label(results, "Gravel Backfill")
    assert backfill.value == 0
    assert backfill.cost == 0


def test_foundation_icf_walls():
    results = FoundationCalculator().calculate(_foundation(includeIcf=True, icfWallHeight=8)).results
    blocks = _by_label(results, 'ICF Blocks (6" core)')
    # 140 ft x 8 ft x 1.05 / 5.33 sq ft per block
    assert blocks.value == 221
    assert blocks.cost == pytest.approx(221 * 24.98)


# ============================================================
# Veneer
# ============================================================

def test_veneer_square_footage_cost():
    results = VeneerCalculator().calculate({"length": 20, "height": 10, "costPerSqFt": 12.5}).results
    assert [item.label for item in results] == ["Total Square Footage", "Veneer Materials", "Total Estimated Cost"]
    assert results[1].cost == pytest.approx(2500)
    assert results[2].value == pytest.approx(2500)


def test_veneer_requires_cost_per_sqft():
    outcome = VeneerCalculator().calculate({"length": 20, "height": 10})
    assert outcome.failure.missing == ["cost_per_sq_ft"]


# ============================================================
# Junk removal
# ============================================================

def _junk(**overrides):
    data = {
        "items": [{"type": "misc-boxes", "volume": 100, "weight": 200}],
        "needsLabor": False,
        "distance": 10,
        "accessDifficulty": "moderate",
        "floors": 2,
    }
    data.update(overrides)
    return data


def test_junk_removal_multipliers_apply_to_whole_subtotal():
    """(150 + 25) x 1.25 x 1.15"""
    results = JunkRemovalCalculator().calculate(_junk()).results
    assert _by_label(results, "Base Removal Cost").cost == pytest.approx(150)
    assert _by_label(results, "Distance Fee").cost == pytest.approx(25)
    adjustment = _by_label(results, "Access Difficulty & Floor Adjustment")
    assert adjustment.value == 1.44
    assert results[-1].value == pytest.approx(251.5625)


def test_junk_removal_base_is_the_higher_rate():
    # 20 ft3 of dirt at 300 lb: weight rate wins (150 > 30)
    results = JunkRemovalCalculator().calculate(_junk(
        items=[{"type": "yard-dirt", "volume": 20, "weight": 300}], accessDifficulty="easy", floors=1,
    )).results
    assert _by_label(results, "Base Removal Cost").cost == pytest.approx(150)
    assert not any(item.label == "Access Difficulty & Floor Adjustment" for item in results)
    assert results[-1].value == pytest.approx(175)


def test_junk_removal_labor_and_fees():
    results = JunkRemovalCalculator().calculate(_junk(
        items=[JunkItem.from_catalog("electronics", "tv-crt").to_dict()],
        needsLabor=True, needsPermit=True, isHazardous=True, accessDifficulty="easy", floors=1,
    )).results
    labor = _by_label(results, "Labor (2 workers, 1 hours)")
    assert labor.cost == pytest.approx(90)
    assert _by_label(results, "Special Disposal Fee").cost == pytest.approx(25)
    assert _by_label(results, "Disposal Permit").cost == pytest.approx(150)
    assert _by_label(results, "Hazardous Material Fee").cost == pytest.approx(60 * 0.75)


def test_junk_removal_rate_override():
    entries = [MaterialEntry(name="Volume Rate", category="rates", price=2.0)]
    results = JunkRemovalCalculator().calculate(
        _junk(accessDifficulty="easy", floors=1), PriceResolver(PricingMode.CUSTOM, entries)).results
    assert _by_label(results, "Base Removal Cost").cost == pytest.approx(200)


def test_junk_removal_negative_quantity_counts_once():
    results = JunkRemovalCalculator().calculate(_junk(
        items=[{"type": "misc-boxes", "volume": 100, "weight": 200, "quantity": -3}],
    )).results
    assert _by_label(results, "Base Removal Cost").cost == pytest.approx(150)
    assert results[-1].value == pytest.approx(251.5625)


def test_junk_removal_validity():
    outcome = JunkRemovalCalculator().calculate({"items": [], "floors": 0})
    assert outcome.failure.missing == ["items", "distance", "floors"]
