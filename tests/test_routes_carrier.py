"""Tests for the reference data endpoints."""


def test_cities_returns_branch_list(client, ncm_client):
    resp = client.get("/ncm/cities")
    assert resp.status_code == 200
    assert resp.json() == {"data": ncm_client.branches}


def test_cities_served_from_cache(client, ncm_client):
    client.get("/ncm/cities")
    client.get("/ncm/cities")
    assert ncm_client.count("branch_list") == 1


def test_shipping_cost(client, ncm_client):
    resp = client.get("/ncm/shipping-cost", params={"destination": "pokhara"})
    assert resp.status_code == 200
    assert resp.json() == {"data": {"charge": 150}}
    _, params = ncm_client.calls[0]
    assert params["destination"] == "POKHARA"


def test_shipping_cost_requires_destination(client):
    resp = client.get("/ncm/shipping-cost")
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"


def test_config_masks_api_key(client):
    resp = client.get("/ncm/config")
    assert resp.status_code == 200
    assert resp.json() == {
        "api_key_set": True,
        "api_key_masked": "test...1234",
        "api_url": "https://portal.nepalcanmove.com/api/v1",
        "origin_branch": "BIRGUNJ",
    }
