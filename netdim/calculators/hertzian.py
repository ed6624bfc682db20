"""Hertzian (microwave point-to-point) link budget.

Free-space loss, link margin, ITU-R style rain attenuation with a
Vigants-Barnett availability estimate, knife-edge diffraction and the
inverse free-space range, plus the secondary losses of a link budget
(terrain, fog, Fresnel clearance), receiver threshold and achievable rate.
"""
from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Mapping, TypedDict

import numpy as np

from ._numeric import f64, ieee754, round2

logger = logging.getLogger(__name__)

FSPL_CONSTANT_DB = 32.45  # f in MHz, d in km
MINUTES_PER_YEAR = 365 * 24 * 60

# Vigants-Barnett factors, fixed in this version
CLIMATE_FACTOR = 4.0
TERRAIN_FACTOR = 1.0

DEFAULT_RAIN_ZONE = "K"

# ITU-R P.837 rain rates exceeded 0.01 % of the time (mm/h)
RAIN_RATES_MM_H: Mapping[str, float] = MappingProxyType({
    "A": 8.0,
    "B": 12.0,
    "C": 15.0,
    "D": 19.0,
    "E": 22.0,
    "F": 28.0,
    "G": 30.0,
    "H": 32.0,
    "J": 35.0,
    "K": 42.0,
    "L": 60.0,
    "M": 63.0,
    "N": 95.0,
    "P": 145.0,
    "Q": 115.0,
})

TERRAIN_LOSS_FACTORS: Mapping[str, float] = MappingProxyType({
    "WATER": 0.1,
    "FLAT": 0.25,
    "AVERAGE": 0.5,
    "HILLY": 1.0,
    "MOUNTAINOUS": 2.0,
    "URBAN": 3.0,
})

# Required Eb/N0 (dB) per modulation, keyed by target BER
_BPSK_EBNO = MappingProxyType({
    1e-1: 4.3, 1e-2: 8.4, 1e-3: 9.8, 1e-4: 10.5, 1e-5: 12.0,
    1e-6: 13.5, 1e-7: 14.9, 1e-8: 16.5, 1e-9: 18.2,
})
EBNO_REQUIREMENTS_DB: Mapping[str, Mapping[float, float]] = MappingProxyType({
    "BPSK": _BPSK_EBNO,
    "QPSK": _BPSK_EBNO,
    "QAM16": MappingProxyType({
        1e-1: 7.5, 1e-2: 10.5, 1e-3: 13.5, 1e-4: 16.5, 1e-5: 18.0,
        1e-6: 19.5, 1e-7: 21.0, 1e-8: 22.5, 1e-9: 24.0,
    }),
    "QAM64": MappingProxyType({
        1e-1: 11.5, 1e-2: 14.5, 1e-3: 17.5, 1e-4: 20.5, 1e-5: 22.0,
        1e-6: 23.5, 1e-7: 25.0, 1e-8: 26.5, 1e-9: 28.0,
    }),
    "QAM256": MappingProxyType({
        1e-1: 15.5, 1e-2: 18.5, 1e-3: 21.5, 1e-4: 24.5, 1e-5: 26.0,
        1e-6: 27.5, 1e-7: 29.0, 1e-8: 30.5, 1e-9: 32.0,
    }),
    "QAM1024": MappingProxyType({
        1e-1: 19.5, 1e-2: 22.5, 1e-3: 25.5, 1e-4: 28.5, 1e-5: 30.0,
        1e-6: 31.5, 1e-7: 33.0, 1e-8: 34.5, 1e-9: 36.0,
    }),
})

# Spectral efficiency in bit/s/Hz
SPECTRAL_EFFICIENCY: Mapping[str, float] = MappingProxyType({
    "BPSK": 1.0,
    "QPSK": 2.0,
    "QAM16": 4.0,
    "QAM64": 6.0,
    "QAM256": 8.0,
    "QAM1024": 10.0,
})

THERMAL_NOISE_DBM_HZ = -174.0
RECEIVER_NOISE_FIGURE_DB = 5.0
IMPLEMENTATION_MARGIN_DB = 2.0
DEFAULT_TARGET_BER = 1e-6
MIN_DATA_RATE_MBPS = 0.01


class Modulation(str, Enum):
    BPSK = "BPSK"
    QPSK = "QPSK"
    QAM16 = "QAM16"
    QAM64 = "QAM64"
    QAM256 = "QAM256"
    QAM1024 = "QAM1024"


class TerrainType(str, Enum):
    WATER = "WATER"
    FLAT = "FLAT"
    AVERAGE = "AVERAGE"
    HILLY = "HILLY"
    MOUNTAINOUS = "MOUNTAINOUS"
    URBAN = "URBAN"


class LinkAvailability(TypedDict):
    availability: float
    unavailability: float
    rain_attenuation: float
    fade_margin: float
    downtime_minutes: float
    rain_zone: str


def _key(value: object) -> str:
    return value.value if isinstance(value, Enum) else str(value)


@ieee754
def free_space_loss(frequency: float, distance: float) -> float:
    """Free-space path loss in dB.

    Args:
        frequency: Frequency in GHz
        distance: Path length in km
    """
    frequency_mhz = f64(frequency) * 1000.0
    return round2(FSPL_CONSTANT_DB + 20.0 * np.log10(frequency_mhz) + 20.0 * np.log10(f64(distance)))


@ieee754
def link_margin(system_gain: float, receiver_threshold: float, total_losses: float) -> float:
    """Link margin in dB: ``system_gain - |receiver_threshold| - total_losses``.

    The threshold enters through its absolute value so either sign
    convention gives the same margin.
    """
    margin = f64(system_gain) - np.abs(f64(receiver_threshold)) - f64(total_losses)
    logger.debug(
        "Link margin: system_gain=%s receiver_threshold=%s total_losses=%s margin=%s",
        system_gain, receiver_threshold, total_losses, float(margin),
    )
    return round2(margin)


def rain_rate(rain_zone: str) -> float:
    """Rain rate (mm/h) of an ITU-R rain zone; unknown zones read as zone K."""
    return RAIN_RATES_MM_H.get(str(rain_zone), RAIN_RATES_MM_H[DEFAULT_RAIN_ZONE])


def _rain_coefficients(frequency: np.float64) -> tuple[np.float64, np.float64]:
    # simplified ITU-R P.838 regression
    if frequency < 2.5:
        return 3.87e-5 * frequency ** 0.912, f64(0.88)
    if frequency < 54:
        return 3.72e-5 * frequency ** 0.913, 1.258 - 0.126 * np.log(frequency)
    return 3.35e-5 * frequency ** 0.929, f64(0.93)


def _rain_attenuation_for_rate(frequency: float, distance: float, rate: float) -> np.float64:
    f = f64(frequency)
    d = f64(distance)
    r_mm_h = f64(rate)
    k, alpha = _rain_coefficients(f)
    specific_attenuation = k * r_mm_h ** alpha
    d0 = 35.0 * np.exp(-0.015 * r_mm_h)
    reduction = 1.0 / (1.0 + d / d0)
    return specific_attenuation * d * reduction


@ieee754
def rain_attenuation(frequency: float, distance: float, rain_zone: str = DEFAULT_RAIN_ZONE) -> float:
    """Path rain attenuation in dB for a rain zone (f in GHz, d in km)."""
    return round2(_rain_attenuation_for_rate(frequency, distance, rain_rate(rain_zone)))


@ieee754
def rain_attenuation_for_rate(frequency: float, distance: float, rate_mm_h: float) -> float:
    """Path rain attenuation in dB for an explicit rain rate, unrounded."""
    return float(_rain_attenuation_for_rate(frequency, distance, rate_mm_h))


@ieee754
def link_availability(
    link_margin: float,
    frequency: float,
    distance: float,
    rain_zone: str = DEFAULT_RAIN_ZONE,
) -> LinkAvailability:
    """Availability of a link after rain fading.

    Unavailability (%) follows Vigants-Barnett,
    ``c·t·10^(-FM/10)·d³·f² / 1e6`` with climate factor 4 and terrain
    factor 1, where the fade margin FM is the link margin minus the rain
    attenuation of the zone.

    Args:
        link_margin: Clear-sky link margin in dB
        frequency: Frequency in GHz
        distance: Path length in km
        rain_zone: ITU-R rain zone letter (A-Q); unknown zones use K

    Returns:
        Availability and unavailability in %, rain attenuation and fade
        margin in dB, and yearly downtime in minutes.
    """
    f = f64(frequency)
    d = f64(distance)
    attenuation = _rain_attenuation_for_rate(f, d, rain_rate(rain_zone))
    fade_margin = f64(link_margin) - attenuation

    unavailability = CLIMATE_FACTOR * TERRAIN_FACTOR * np.power(10.0, -fade_margin / 10.0) * d ** 3 * f ** 2 / 1e6
    availability = 100.0 - unavailability
    downtime = unavailability / 100.0 * MINUTES_PER_YEAR

    return {
        "availability": round2(availability),
        "unavailability": round2(unavailability),
        "rain_attenuation": round2(attenuation),
        "fade_margin": round2(fade_margin),
        "downtime_minutes": round2(downtime),
        "rain_zone": str(rain_zone),
    }


@ieee754
def diffraction_loss(frequency: float, clearance: float, distance: float) -> float:
    """Knife-edge diffraction loss in dB for an obstacle at mid-path.

    Args:
        frequency: Frequency in GHz
        clearance: Obstacle height relative to the line of sight in m
        distance: Path length in km
    """
    d = f64(distance)
    d1 = d / 2.0
    d2 = d / 2.0
    wavelength = 0.3 / f64(frequency)  # m
    v = f64(clearance) * np.sqrt(2.0 * d / (wavelength * d1 * d2 * 1000.0))

    if v <= -0.7:
        loss = f64(0.0)
    elif v <= 2.4:
        loss = 6.9 + 20.0 * np.log10(np.sqrt((v - 0.1) ** 2 + 1.0) + v - 0.1)
    else:
        loss = 13.0 + 20.0 * np.log10(v)
    return round2(loss)


@ieee754
def max_distance(
    system_gain: float,
    receiver_threshold: float,
    frequency: float,
    additional_losses: float = 0.0,
) -> float:
    """Longest free-space path (km) that fits the allowable path loss.

    The allowable loss is ``system_gain - |receiver_threshold| -
    additional_losses``; frequency is in GHz.
    """
    max_path_loss = f64(system_gain) - np.abs(f64(receiver_threshold)) - f64(additional_losses)
    frequency_mhz = f64(frequency) * 1000.0
    log_d = (max_path_loss - FSPL_CONSTANT_DB - 20.0 * np.log10(frequency_mhz)) / 20.0
    return round2(np.power(10.0, log_d))


@ieee754
def terrain_loss(terrain_type: str = TerrainType.AVERAGE, distance: float = 0.0) -> float:
    """Terrain loss in dB growing with ``log10(d + 1)``; unknown terrain is AVERAGE."""
    factor = TERRAIN_LOSS_FACTORS.get(_key(terrain_type), TERRAIN_LOSS_FACTORS["AVERAGE"])
    return round2(factor * np.log10(f64(distance) + 1.0) * 2.0)


@ieee754
def fog_loss(fog_density: float, frequency: float) -> float:
    """Fog loss in dB (density in g/m³, frequency in GHz), after ITU-R P.840."""
    rho = f64(fog_density)
    f = f64(frequency)
    if rho <= 0:
        return 0.0
    if f > 10:
        loss = rho * 0.05 * f * np.log10(f)
    elif f > 5:
        loss = rho * 0.02 * f
    else:
        loss = rho * 0.005 * f
    return round2(loss)


@ieee754
def fresnel_loss(clearance_percent: float = 60.0) -> float:
    """Loss in dB for partial clearance of the first Fresnel zone."""
    c = f64(clearance_percent)
    if c >= 100:
        return 0.0
    if c >= 60:
        return round2(0.5 * (100.0 - c) / 40.0)
    return round2(0.5 + (60.0 - c) / 60.0 * 19.5)


def required_ebno(modulation: str = Modulation.QPSK, target_ber: float = DEFAULT_TARGET_BER) -> float:
    """Required Eb/N0 in dB; unknown modulation reads as QPSK, unknown BER as 1e-6."""
    table = EBNO_REQUIREMENTS_DB.get(_key(modulation), EBNO_REQUIREMENTS_DB["QPSK"])
    for ber, ebno in table.items():
        if np.isclose(ber, target_ber, rtol=1e-9, atol=0.0):
            return ebno
    return table[DEFAULT_TARGET_BER]


@ieee754
def receiver_threshold(
    modulation: str = Modulation.QPSK,
    bandwidth_mhz: float = 20.0,
    target_ber: float = DEFAULT_TARGET_BER,
) -> float:
    """Receiver threshold in dBm: kTB + noise figure + Eb/N0 + implementation margin."""
    thermal_noise = THERMAL_NOISE_DBM_HZ + 10.0 * np.log10(f64(bandwidth_mhz) * 1e6)
    noise_floor = thermal_noise + RECEIVER_NOISE_FIGURE_DB
    return round2(noise_floor + required_ebno(modulation, target_ber) + IMPLEMENTATION_MARGIN_DB)


@ieee754
def max_data_rate(
    modulation: str = Modulation.QPSK,
    bandwidth_mhz: float = 20.0,
    link_margin: float = 10.0,
) -> float:
    """Achievable data rate in Mbit/s for a modulation, bandwidth and margin.

    Negative margins give a degraded rate that decays with ``e^(margin/20)``;
    positive margins scale the nominal ``bandwidth × efficiency`` by 0.5-1.0
    below 5 dB and by up to 1.5 above 20 dB.
    """
    efficiency = SPECTRAL_EFFICIENCY.get(_key(modulation), SPECTRAL_EFFICIENCY["QPSK"])
    bandwidth = f64(bandwidth_mhz)
    margin = f64(link_margin)

    if margin < 0:
        degraded = bandwidth * efficiency * 0.01 * np.exp(margin / 20.0)
        return round2(max(MIN_DATA_RATE_MBPS, float(degraded)))

    if margin < 5:
        correction = 0.5 + margin / 10.0
    elif margin > 20:
        correction = 1.0 + min(float(margin) - 20.0, 10.0) / 20.0
    else:
        correction = 1.0
    return round2(max(float(bandwidth * efficiency * correction), MIN_DATA_RATE_MBPS))
