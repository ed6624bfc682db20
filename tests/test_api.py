from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from netdim.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_gsm_erlang_b(client):
    r = client.post("/api/gsm/erlang-b", json={"traffic": 10, "blocking_probability": 0.02})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["data"]["channels"] == 17


def test_gsm_erlang_b_failure_is_structured(client):
    r = client.post("/api/gsm/erlang-b", json={"traffic": 2000, "blocking_probability": 0.01})
    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    assert "Erlang B" in body["error"]


def test_request_validation(client):
    r = client.post("/api/gsm/bts-count", json={"coverage_area": -1, "cell_radius": 2})
    assert r.status_code == 422


def test_non_finite_results_become_null(client):
    r = client.post("/api/gsm/bts-count", json={"coverage_area": 100, "cell_radius": 0})
    assert r.status_code == 200
    assert r.json()["data"]["bts_count"] is None


def test_gsm_dimensioning(client):
    payload = {
        "coverage_area": 100,
        "traffic_per_subscriber": 0.025,
        "subscriber_count": 10000,
        "frequency": 900,
        "bts_power": 43,
        "mobile_reception_threshold": -102,
    }
    r = client.post("/api/gsm/dimensioning", json=payload)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["final_bts_count"] == 4
    assert data["propagation_model"] == "OKUMURA_HATA"


def test_umts_dimensioning_fallback(client):
    payload = {
        "services": [{"type": "VOICE", "bit_rate": 12.2, "activity_factor": 0.5}],
        "ebno": 5,
        "transmit_power": 10,
        "sensitivity": 0,
        "margin": 20,
    }
    r = client.post("/api/umts/dimensioning", json=payload)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["cell_coverage"]["radius_fallback_applied"] is True
    assert data["cell_coverage"]["radius"] == 0.8
    assert data["services"][0]["type"] == "VOICE"


def test_umts_uplink_empty_services(client):
    r = client.post("/api/umts/uplink-capacity", json={"services": [], "ebno": 5})
    assert r.status_code == 200
    assert r.json()["data"]["max_users"] is None


def test_hertzian_free_space_loss(client):
    r = client.post("/api/hertzian/free-space-loss", json={"frequency": 2, "distance": 10})
    assert r.status_code == 200
    assert r.json()["data"]["free_space_loss"] == 118.47


def test_hertzian_link_budget(client):
    payload = {
        "frequency": 18,
        "distance": 10,
        "transmit_power": 20,
        "antenna_gain1": 38,
        "antenna_gain2": 38,
        "rain_zone": "Z",
    }
    r = client.post("/api/hertzian/link-budget", json=payload)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["link_availability"]["rain_zone"] == "Z"
    assert data["receiver_threshold"] == -85


def test_optical_link_budget(client):
    payload = {
        "fiber_type": "MONOMODE",
        "link_length": 10,
        "wavelength": 1550,
        "transmitter_power": 0,
        "receiver_sensitivity": -28,
        "connector_count": 2,
        "splice_count": 4,
    }
    r = client.post("/api/optical/link-budget", json=payload)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["max_range"] == 94.4
    assert data["fiber_attenuation"] == 0.25


def test_optical_max_range_clamp(client):
    r = client.post(
        "/api/optical/max-range",
        json={"optical_budget": 3, "linear_attenuation": 0.25, "connection_losses": 5},
    )
    assert r.status_code == 200
    assert r.json()["data"]["max_range"] == 0.0


def test_hertzian_secondary_losses(client):
    r = client.post(
        "/api/hertzian/secondary-losses",
        json={"frequency": 20, "distance": 9, "terrain_type": "HILLY", "fog_density": 1, "fresnel_clearance": 100},
    )
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["terrain_loss"] == 2.0
    assert data["fog_loss"] == 1.3
    assert data["fresnel_loss"] == 0.0


def test_hertzian_link_budget_zero_threshold(client):
    payload = {
        "frequency": 18,
        "distance": 10,
        "transmit_power": 20,
        "antenna_gain1": 38,
        "antenna_gain2": 38,
        "receiver_threshold": 0,
    }
    r = client.post("/api/hertzian/link-budget", json=payload)
    assert r.status_code == 200
    assert r.json()["data"]["receiver_threshold"] == -85
