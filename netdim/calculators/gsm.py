"""GSM network dimensioning.

Cell radius from an inverted path-loss model, BTS count on a hexagonal grid,
traffic capacity, Erlang-B channel sizing and frequency reuse planning.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, TypedDict, Union

import numpy as np

from ..errors import ErlangConvergenceError
from ._numeric import Count, ceil_count, f64, floor_count, ieee754, round2

logger = logging.getLogger(__name__)

# Antenna heights assumed by the radius inversion (m)
BASE_STATION_HEIGHT_M = 30.0
MOBILE_HEIGHT_M = 1.5

# COST-231 city-size offset, 0 dB for medium cities and suburban areas
COST231_CITY_OFFSET_DB = 0.0

# Free-space loss intercept for f in MHz and d in km
FSPL_CONSTANT_DB = 32.45

MAX_ERLANG_CHANNELS = 1000


class PropagationModel(str, Enum):
    """Path-loss models understood by :func:`cell_radius`."""
    OKUMURA_HATA = "OKUMURA_HATA"
    COST231 = "COST231"
    FREE_SPACE = "FREE_SPACE"


class FrequencyPlan(TypedDict):
    channels_per_cell: Count
    frequency_reuse_factor: float
    cochannel_ratio: float


def _mobile_height_correction(mobile_height: float) -> np.float64:
    # large-city form, f > 300 MHz
    return 3.2 * np.log10(11.75 * f64(mobile_height)) ** 2 - 4.97


def _hata_coefficients(
    model: PropagationModel,
    frequency: float,
    base_station_height: float,
    mobile_height: float,
) -> tuple[np.float64, np.float64]:
    """Intercept ``a`` and slope ``b`` of ``L = a + b·log10(d)``."""
    f = f64(frequency)
    hb = f64(base_station_height)
    a_hm = _mobile_height_correction(mobile_height)
    if model == PropagationModel.OKUMURA_HATA:
        a = 69.55 + 26.16 * np.log10(f) - 13.82 * np.log10(hb) - a_hm
    else:
        a = 46.3 + 33.9 * np.log10(f) - 13.82 * np.log10(hb) - a_hm + COST231_CITY_OFFSET_DB
    b = 44.9 - 6.55 * np.log10(hb)
    return a, b


@ieee754
def okumura_hata_path_loss(
    frequency: float,
    distance: float,
    base_station_height: float = BASE_STATION_HEIGHT_M,
    mobile_height: float = MOBILE_HEIGHT_M,
) -> float:
    """Okumura-Hata urban path loss in dB (f in MHz, d in km), unrounded."""
    a, b = _hata_coefficients(PropagationModel.OKUMURA_HATA, frequency, base_station_height, mobile_height)
    return float(a + b * np.log10(f64(distance)))


@ieee754
def cost231_path_loss(
    frequency: float,
    distance: float,
    base_station_height: float = BASE_STATION_HEIGHT_M,
    mobile_height: float = MOBILE_HEIGHT_M,
) -> float:
    """COST-231-Hata path loss in dB for a medium city, unrounded."""
    a, b = _hata_coefficients(PropagationModel.COST231, frequency, base_station_height, mobile_height)
    return float(a + b * np.log10(f64(distance)))


@ieee754
def free_space_path_loss(frequency: float, distance: float) -> float:
    """Free-space path loss in dB (f in MHz, d in km), unrounded."""
    return float(FSPL_CONSTANT_DB + 20.0 * np.log10(f64(frequency)) + 20.0 * np.log10(f64(distance)))


@ieee754
def cell_radius(
    frequency: float,
    bts_power: float,
    mobile_threshold: float,
    model: Optional[Union[PropagationModel, str]] = None,
) -> float:
    """Invert the selected path-loss model for the cell radius.

    Args:
        frequency: Carrier frequency in MHz
        bts_power: BTS transmit power in dBm
        mobile_threshold: Mobile reception threshold in dBm
        model: ``OKUMURA_HATA`` or ``COST231``; anything else selects free space

    Returns:
        Cell radius in km, rounded to 2 decimals. When the link budget is
        below the model intercept the radius is tiny or degenerate; it is
        returned as computed, never clamped.
    """
    link_budget = f64(bts_power) - f64(mobile_threshold)

    if model == PropagationModel.OKUMURA_HATA or model == PropagationModel.COST231:
        a, b = _hata_coefficients(PropagationModel(model), frequency, BASE_STATION_HEIGHT_M, MOBILE_HEIGHT_M)
        log_d = (link_budget - a) / b
    else:
        log_d = (link_budget - FSPL_CONSTANT_DB - 20.0 * np.log10(f64(frequency))) / 20.0

    return round2(np.power(10.0, log_d))


@ieee754
def hexagonal_cell_area(radius: float) -> float:
    """Area of a hexagonal cell of circumradius ``radius`` (km²), unrounded."""
    return float(3.0 * np.sqrt(3.0) * f64(radius) ** 2 / 2.0)


@ieee754
def bts_count(coverage_area: float, cell_radius: float) -> Count:
    """Number of BTS needed to cover ``coverage_area`` km² with hexagonal cells.

    A zero radius yields ``inf``; a NaN radius yields ``nan``.
    """
    cell_area = f64(hexagonal_cell_area(cell_radius))
    return ceil_count(f64(coverage_area) / cell_area)


@ieee754
def traffic_capacity(channel_count: float, occupancy_rate: float) -> float:
    """Traffic capacity in Erlang: channels × occupancy."""
    return round2(f64(channel_count) * f64(occupancy_rate))


@ieee754
def erlang_b_blocking(traffic: float, channels: int) -> float:
    """Erlang-B blocking probability with ``channels`` servers, unrounded."""
    a = f64(traffic)
    blocking = f64(1.0)
    for i in range(1, int(channels) + 1):
        blocking = a * blocking / (i + a * blocking)
    return float(blocking)


@ieee754
def erlang_b(traffic: float, blocking_probability: float) -> int:
    """Minimal channel count whose Erlang-B blocking is within target.

    Uses the forward recursion ``E(i) = A·E(i-1) / (i + A·E(i-1))`` with
    ``E(0) = 1``, growing ``n`` one channel at a time.

    Raises:
        ErlangConvergenceError: no channel count up to
            ``MAX_ERLANG_CHANNELS`` meets the target.
    """
    a = f64(traffic)
    target = f64(blocking_probability)
    blocking = f64(1.0)
    for channels in range(1, MAX_ERLANG_CHANNELS + 1):
        blocking = a * blocking / (channels + a * blocking)
        if blocking <= target:
            return channels

    logger.debug(
        "Erlang B search exhausted %d channels (traffic=%s, target=%s, last=%s)",
        MAX_ERLANG_CHANNELS, traffic, blocking_probability, float(blocking),
    )
    raise ErlangConvergenceError(traffic, blocking_probability, MAX_ERLANG_CHANNELS)


@ieee754
def frequency_planning(total_channels: float, cluster_size: float) -> FrequencyPlan:
    """Channels per cell, reuse factor and co-channel reuse ratio D/R."""
    total = f64(total_channels)
    cluster = f64(cluster_size)
    return {
        "channels_per_cell": floor_count(total / cluster),
        "frequency_reuse_factor": round2(1.0 / cluster),
        "cochannel_ratio": round2(np.sqrt(3.0 * cluster)),
    }
