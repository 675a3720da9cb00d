"""
HTTP API tests.

Tests:
1-2.   Health, calculator list
3-6.   Calculate (results, validation failure, unknown type, default mode)
7-11.  Override catalog (custom pricing, archive, reset, account scope, fetch failure)
12-16. Estimates (save, list, load, normalize, update, delete)
"""

import pytest

from estimator import catalog


FENCE_INPUTS = {"length": 100, "height": 6, "concreteDepth": 24}


def _calculate(client, calculator_type, inputs, headers=None, **extra):
    return client.post(f"/api/calculators/{calculator_type}/calculate",
                       json={"inputs": inputs, **extra}, headers=headers or {})


def _by_label(results, label):
    matches = [item for item in results if item["label"] == label]
    assert matches, f"No line labelled {label!r}"
    return matches[0]


def _add_material(client, headers, calculator_type="fence", **fields):
    body = {"name": "Wood Post", "category": "posts", "price": 19.99}
    body.update(fields)
    resp = client.post(f"/api/materials/{calculator_type}", json=body, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def _save_estimate(client, headers, name="Back yard", calculator_type="fence", inputs=None, **extra):
    body = {"calculatorType": calculator_type, "estimateName": name,
            "estimateData": FENCE_INPUTS if inputs is None else inputs}
    body.update(extra)
    return client.post("/api/estimates/", json=body, headers=headers)


# ============================================================
# Basics
# ============================================================

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_list_calculators(client):
    resp = client.get("/api/calculators/")
    assert resp.status_code == 200
    calcs = resp.json()["calculators"]
    assert len(calcs) == 12
    assert "junk_removal" in calcs and "doors_windows" in calcs


# ============================================================
# Calculate
# ============================================================

def test_calculate_returns_line_items(client):
    resp = _calculate(client, "fence", FENCE_INPUTS)
    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is True
    assert data["calculatorType"] == "fence"
    assert data["pricingMode"] == "default"
    assert data["failure"] is None
    posts = _by_label(data["results"], "Wood Posts")
    assert posts["value"] == 14
    assert posts["cost"] == pytest.approx(14 * 24.98)
    total = data["results"][-1]
    assert total["isTotal"] is True
    assert "isWarning" not in total


def test_calculate_invalid_input_is_not_an_http_error(client):
    resp = _calculate(client, "concrete", {"length": 10})
    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is False
    assert data["results"] == []
    assert data["failure"]["missing"] == ["width", "height"]
    assert data["failure"]["calculatorType"] == "concrete"


def test_calculate_unknown_type(client):
    resp = _calculate(client, "roofing", {})
    assert resp.status_code == 404


def test_calculate_rejects_unknown_pricing_mode(client):
    resp = _calculate(client, "fence", FENCE_INPUTS, pricingMode="cheapest")
    assert resp.status_code == 422


# ============================================================
# Override catalog
# ============================================================

def test_custom_pricing_uses_account_overrides(client, account_headers):
    _add_material(client, account_headers)

    catalog_resp = client.get("/api/materials/fence", headers=account_headers)
    assert catalog_resp.json()["is_configured"] is True
    assert [m["name"] for m in catalog_resp.json()["materials"]] == ["Wood Post"]

    custom = _calculate(client, "fence", FENCE_INPUTS, account_headers, pricingMode="custom").json()
    default = _calculate(client, "fence", FENCE_INPUTS, account_headers, pricingMode="default").json()
    assert custom["pricingMode"] == "custom"
    assert _by_label(custom["results"], "Wood Posts")["cost"] == pytest.approx(14 * 19.99)
    assert _by_label(default["results"], "Wood Posts")["cost"] == pytest.approx(14 * 24.98)


def test_archived_override_falls_back_to_default(client, account_headers):
    material = _add_material(client, account_headers)

    resp = client.post(f"/api/materials/item/{material['id']}/archive", headers=account_headers)
    assert resp.json()["is_archived"] is True
    custom = _calculate(client, "fence", FENCE_INPUTS, account_headers, pricingMode="custom").json()
    assert _by_label(custom["results"], "Wood Posts")["cost"] == pytest.approx(14 * 24.98)

    client.post(f"/api/materials/item/{material['id']}/unarchive", headers=account_headers)
    custom = _calculate(client, "fence", FENCE_INPUTS, account_headers, pricingMode="custom").json()
    assert _by_label(custom["results"], "Wood Posts")["cost"] == pytest.approx(14 * 19.99)


def test_update_and_delete_override(client, account_headers):
    material = _add_material(client, account_headers)

    resp = client.patch(f"/api/materials/item/{material['id']}", json={"price": 21.5}, headers=account_headers)
    assert resp.status_code == 200
    assert resp.json()["price"] == 21.5
    assert resp.json()["name"] == "Wood Post"

    assert client.delete(f"/api/materials/item/{material['id']}", headers=account_headers).json() == {"ok": True}
    assert client.get("/api/materials/fence", headers=account_headers).json()["materials"] == []


def test_reset_and_account_scope(client, account_headers):
    material = _add_material(client, account_headers)

    # another account sees neither the entry nor its prices
    other = {"X-Account-Id": "acct-other"}
    assert client.get("/api/materials/fence", headers=other).json()["materials"] == []
    assert client.post(f"/api/materials/item/{material['id']}/archive", headers=other).status_code == 404
    custom = _calculate(client, "fence", FENCE_INPUTS, other, pricingMode="custom").json()
    assert _by_label(custom["results"], "Wood Posts")["cost"] == pytest.approx(14 * 24.98)

    resp = client.post("/api/materials/fence/reset", headers=account_headers)
    assert resp.status_code == 200
    assert resp.json()["materials"] == []
    assert resp.json()["is_configured"] is False

    assert client.get("/api/materials/roofing", headers=account_headers).status_code == 404


def test_catalog_failure_reports_pricing_error(client, account_headers, monkeypatch):
    def broken(db, account_id, calculator_type):
        raise RuntimeError("catalog offline")

    monkeypatch.setattr(catalog, "fetch_materials", broken)
    data = _calculate(client, "fence", FENCE_INPUTS, account_headers, pricingMode="custom").json()
    assert data["ok"] is True
    assert data["pricingMode"] == "default"
    assert "catalog offline" in data["pricingError"]
    assert _by_label(data["results"], "Wood Posts")["cost"] == pytest.approx(14 * 24.98)


# ============================================================
# Estimates
# ============================================================

def test_save_and_load_estimate(client, account_headers):
    results = _calculate(client, "fence", FENCE_INPUTS).json()["results"]
    resp = _save_estimate(client, account_headers, resultsData={"results": results}, clientId="smith")
    assert resp.status_code == 200
    saved = resp.json()
    assert saved["estimateName"] == "Back yard"

    loaded = client.get(f"/api/estimates/fence/{saved['id']}", headers=account_headers)
    assert loaded.status_code == 200
    data = loaded.json()
    assert data["estimateData"] == FENCE_INPUTS
    assert data["resultsData"]["results"] == results
    assert data["clientId"] == "smith"


def test_save_estimate_validation(client, account_headers):
    assert _save_estimate(client, account_headers, name="  ").status_code == 422
    assert _save_estimate(client, account_headers, calculator_type="roofing").status_code == 404


def test_list_estimates(client, account_headers):
    _save_estimate(client, account_headers, name="Smith fence")
    _save_estimate(client, account_headers, name="Jones tile", calculator_type="tile", inputs={"length": 10})
    _save_estimate(client, {"X-Account-Id": "acct-other"}, name="Not mine")

    rows = client.get("/api/estimates/", headers=account_headers).json()
    assert [row["estimateName"] for row in rows] == ["Jones tile", "Smith fence"]
    rows = client.get("/api/estimates/", params={"calculator_type": "fence"}, headers=account_headers).json()
    assert [row["estimateName"] for row in rows] == ["Smith fence"]
    rows = client.get("/api/estimates/", params={"search": "jones"}, headers=account_headers).json()
    assert [row["calculatorType"] for row in rows] == ["tile"]


def test_load_estimate_normalized(client, account_headers):
    stale = {"length": 100, "height": 6, "retiredField": True}
    estimate_id = _save_estimate(client, account_headers, inputs=stale).json()["id"]

    raw = client.get(f"/api/estimates/fence/{estimate_id}", headers=account_headers).json()
    assert raw["estimateData"] == stale

    normalized = client.get(f"/api/estimates/fence/{estimate_id}", params={"normalize": True},
                            headers=account_headers).json()
    data = normalized["estimateData"]
    assert "retiredField" not in data
    assert data["length"] == 100
    assert data["postSpacing"] == 8
    assert data["gates"] == []

    assert client.get(f"/api/estimates/tile/{estimate_id}", headers=account_headers).status_code == 404


def test_update_and_delete_estimate(client, account_headers):
    estimate_id = _save_estimate(client, account_headers).json()["id"]

    resp = client.patch(f"/api/estimates/{estimate_id}", json={"estimateName": "Back yard v2"},
                        headers=account_headers)
    assert resp.status_code == 200
    assert resp.json()["estimateName"] == "Back yard v2"
    assert resp.json()["estimateData"] == FENCE_INPUTS, "Unsent fields are left alone"

    assert client.patch(f"/api/estimates/{estimate_id}", json={"estimateName": ""},
                        headers=account_headers).status_code == 422

    assert client.delete(f"/api/estimates/{estimate_id}", headers=account_headers).json() == {"ok": True}
    assert client.get(f"/api/estimates/fence/{estimate_id}", headers=account_headers).status_code == 404
    assert client.delete(f"/api/estimates/{estimate_id}", headers=account_headers).status_code == 404
