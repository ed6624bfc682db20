from __future__ import annotations

import math

import pytest

from netdim.calculators import umts

VOICE = umts.ServiceDescriptor(umts.ServiceType.VOICE, 12.2, 0.5)


def _voice_load(scale: float) -> float:
    gp = 3.84e6 / 12200.0
    return 10 ** (5 / 10) * 0.5 / gp * scale


def test_uplink_voice_capacity():
    out = umts.uplink_capacity([VOICE], 5.0)
    eta = _voice_load(1.65)
    assert out["total_load_factor"] > 0
    assert out["max_users"] == math.floor(0.75 / eta)
    assert out["max_users"] == 90
    assert out["noise_rise"] == round(-10 * math.log10(1 - eta), 2)
    assert out["max_load_factor"] == 0.75

    detail = out["service_details"][0]
    assert detail["service_type"] == "VOICE"
    assert detail["processing_gain"] == pytest.approx(314.75, abs=0.01)
    assert detail["processing_gain_db"] == pytest.approx(24.98, abs=0.01)


def test_downlink_voice_capacity():
    out = umts.downlink_capacity([VOICE], 5.0)
    assert out["max_users"] == math.floor(0.75 / _voice_load(0.4 + 0.65))
    assert out["orthogonality_factor"] == 0.6


def test_services_accept_mappings_and_bit_rates_in_bps():
    as_kbps = umts.uplink_capacity([{"type": "DATA", "bitRate": 64, "activityFactor": 1.0}], 3.0)
    as_bps = umts.uplink_capacity([{"type": "DATA", "bit_rate": 64000, "activity_factor": 1.0}], 3.0)
    assert as_kbps["max_users"] == as_bps["max_users"]
    assert as_kbps["total_load_factor"] == as_bps["total_load_factor"]


def test_service_order_does_not_matter():
    video = umts.ServiceDescriptor(umts.ServiceType.VIDEO, 384, 1.0)
    a = umts.uplink_capacity([VOICE, video], 5.0)
    b = umts.uplink_capacity([video, VOICE], 5.0)
    assert a["total_load_factor"] == b["total_load_factor"]
    assert a["max_users"] == b["max_users"]


def test_overloaded_cell_has_no_noise_rise_bound():
    heavy = [umts.ServiceDescriptor(umts.ServiceType.VIDEO, 2000000, 1.0)] * 3
    out = umts.uplink_capacity(heavy, 10.0)
    assert out["total_load_factor"] > 1
    assert math.isnan(out["noise_rise"])
    assert out["max_users"] == 0


def test_empty_service_list():
    out = umts.uplink_capacity([], 5.0)
    assert out["service_details"] == []
    assert out["total_load_factor"] == 0
    assert out["max_users"] == math.inf
    assert out["noise_rise"] == 0


def test_cell_coverage_urban():
    out = umts.cell_coverage(43, -110, 5)
    assert out["mapl"] == 148
    assert out["radius"] == pytest.approx(1.86, abs=0.01)
    assert out["cell_area"] == pytest.approx(2.6 * out["radius"] ** 2, abs=0.05)
    assert out["environment_type"] == "URBAN"
    assert out["frequency"] == 2100


def test_metropolitan_cells_are_smaller():
    urban = umts.cell_coverage(43, -110, 5)
    metro = umts.cell_coverage(43, -110, 5, umts.PropagationParams(environment_type=umts.EnvironmentType.METROPOLITAN))
    assert metro["radius"] < urban["radius"]


def test_low_frequency_coverage_uses_small_city_correction():
    out = umts.cell_coverage(43, -110, 5, umts.PropagationParams(frequency=300))
    assert out["radius"] > 0
    assert math.isfinite(out["cell_area"])


def test_unusable_link_budget_is_returned_as_is():
    out = umts.cell_coverage(10, 0, 20)
    assert out["mapl"] == -10
    assert out["radius"] == 0.0


def test_cell_area():
    assert umts.cell_area(0.8) == 1.66


def test_frequency_planning():
    plan = umts.frequency_planning(20)
    assert plan["number_of_carriers"] == 4
    assert plan["total_voice_capacity"] == 400
    assert umts.frequency_planning(12)["number_of_carriers"] == 2
