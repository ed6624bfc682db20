from __future__ import annotations

import math

import pytest

from netdim.calculators import gsm
from netdim.errors import CalculationError, ErlangConvergenceError


def test_erlang_b_minimal_channels():
    channels = gsm.erlang_b(10.0, 0.02)
    assert channels == 17
    assert gsm.erlang_b_blocking(10.0, channels) <= 0.02
    assert gsm.erlang_b_blocking(10.0, channels - 1) > 0.02


def test_erlang_b_zero_traffic_needs_one_channel():
    assert gsm.erlang_b(0.0, 0.01) == 1


def test_erlang_b_gives_up_after_channel_bound():
    with pytest.raises(ErlangConvergenceError) as excinfo:
        gsm.erlang_b(2000.0, 0.01)
    err = excinfo.value
    assert isinstance(err, CalculationError)
    assert err.traffic == 2000.0
    assert err.blocking_probability == 0.01
    assert err.max_channels == gsm.MAX_ERLANG_CHANNELS


def test_okumura_hata_radius_round_trip():
    # 145 dB allowable path loss at 900 MHz
    radius = gsm.cell_radius(900, 43, -102, gsm.PropagationModel.OKUMURA_HATA)
    assert radius == pytest.approx(3.37, abs=0.01)
    assert gsm.okumura_hata_path_loss(900, radius) == pytest.approx(145.0, abs=0.1)


def test_cost231_radius_round_trip():
    radius = gsm.cell_radius(1800, 43, -102, "COST231")
    assert radius > 0
    assert gsm.cost231_path_loss(1800, radius) == pytest.approx(145.0, abs=0.1)


def test_unknown_model_uses_free_space():
    free_space = gsm.cell_radius(900, 43, -102, "FREE_SPACE")
    assert gsm.cell_radius(900, 43, -102, "NOT_A_MODEL") == free_space
    assert gsm.cell_radius(900, 43, -102) == free_space
    assert gsm.free_space_path_loss(900, free_space) == pytest.approx(145.0, abs=0.1)


def test_bts_count_is_non_increasing_in_radius():
    counts = [gsm.bts_count(100.0, r) for r in (0.5, 1.0, 2.0, 3.5, 5.0)]
    assert counts == sorted(counts, reverse=True)
    assert all(isinstance(c, int) for c in counts)


def test_bts_count_degenerate_radius():
    assert gsm.bts_count(100.0, 0.0) == math.inf
    assert math.isnan(gsm.bts_count(100.0, float("nan")))


def test_hexagonal_cell_area():
    assert gsm.hexagonal_cell_area(1.0) == pytest.approx(3 * math.sqrt(3) / 2)


def test_traffic_capacity():
    assert gsm.traffic_capacity(8, 0.5) == 4.0


def test_frequency_planning():
    plan = gsm.frequency_planning(120, 7)
    assert plan["channels_per_cell"] == 17
    assert plan["frequency_reuse_factor"] == 0.14
    assert plan["cochannel_ratio"] == 4.58
