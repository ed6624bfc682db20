"""UMTS (WCDMA) network dimensioning.

Load-factor capacity for the uplink and downlink, COST-231-Hata cell
coverage and carrier planning.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, TypedDict, Union

import numpy as np

from ._numeric import Count, f64, floor_count, ieee754, round2

CHIP_RATE_CPS = 3.84e6  # WCDMA chip rate
OTHER_CELL_INTERFERENCE = 0.65  # urban i factor
ORTHOGONALITY_FACTOR = 0.6  # downlink alpha
DEFAULT_LOAD_FACTOR = 0.75
METROPOLITAN_OFFSET_DB = 3.0
# hexagonal area constant used for UMTS coverage (three-sector site)
UMTS_CELL_AREA_FACTOR = 2.6
DEFAULT_CARRIER_BANDWIDTH_MHZ = 5.0
VOICE_USERS_PER_CARRIER = 100


class ServiceType(str, Enum):
    VOICE = "VOICE"
    DATA = "DATA"
    VIDEO = "VIDEO"


class EnvironmentType(str, Enum):
    URBAN = "URBAN"
    SUBURBAN = "SUBURBAN"
    RURAL = "RURAL"
    METROPOLITAN = "METROPOLITAN"


@dataclass(frozen=True)
class ServiceDescriptor:
    """One service of the traffic mix.

    Attributes:
        type: Service class
        bit_rate: Bit rate; values below 1000 are read as kbit/s
        activity_factor: Fraction of time the service transmits (0-1)
    """
    type: ServiceType
    bit_rate: float
    activity_factor: float


@dataclass(frozen=True)
class PropagationParams:
    """Radio environment for :func:`cell_coverage`."""
    frequency: float = 2100.0  # MHz
    base_station_height: float = 30.0  # m
    mobile_height: float = 1.5  # m
    environment_type: Union[EnvironmentType, str] = EnvironmentType.URBAN


class ServiceLoad(TypedDict):
    service_type: str
    bit_rate: float
    activity_factor: float
    processing_gain: float
    processing_gain_db: float
    service_load_factor: float


class UplinkCapacity(TypedDict):
    service_details: List[ServiceLoad]
    total_load_factor: float
    max_users: Count
    noise_rise: float
    max_load_factor: float


class DownlinkCapacity(TypedDict):
    service_details: List[ServiceLoad]
    total_load_factor: float
    max_users: Count
    orthogonality_factor: float
    max_load_factor: float


class CellCoverage(TypedDict):
    mapl: float
    radius: float
    cell_area: float
    transmit_power: float
    sensitivity: float
    margin: float
    frequency: float
    environment_type: str


class CarrierPlan(TypedDict):
    number_of_carriers: Count
    carrier_bandwidth: float
    total_bandwidth: float
    voice_capacity_per_carrier: int
    total_voice_capacity: Count


ServiceInput = Union[ServiceDescriptor, Mapping[str, Any]]


def as_service(service: ServiceInput) -> ServiceDescriptor:
    """Accept a :class:`ServiceDescriptor` or a plain mapping."""
    if isinstance(service, ServiceDescriptor):
        return service
    bit_rate = service.get("bit_rate", service.get("bitRate"))
    activity = service.get("activity_factor", service.get("activityFactor"))
    return ServiceDescriptor(type=ServiceType(service["type"]), bit_rate=bit_rate, activity_factor=activity)


def _enum_value(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _service_loads(services: Iterable[ServiceInput], ebno_linear: np.float64, scale: float) -> tuple[List[ServiceLoad], np.float64]:
    details: List[ServiceLoad] = []
    total = f64(0.0)
    for raw in services:
        service = as_service(raw)
        bit_rate = f64(service.bit_rate)
        # kbit/s convention, not unit detection
        bps = bit_rate * 1000.0 if bit_rate < 1000 else bit_rate
        gp = CHIP_RATE_CPS / bps
        eta = ebno_linear * f64(service.activity_factor) / gp * scale
        total = total + eta
        details.append(
            {
                "service_type": _enum_value(service.type),
                "bit_rate": round2(bit_rate),
                "activity_factor": round2(service.activity_factor),
                "processing_gain": round2(gp),
                "processing_gain_db": round2(10.0 * np.log10(gp)),
                "service_load_factor": round2(eta),
            }
        )
    return details, total


@ieee754
def uplink_capacity(
    services: Iterable[ServiceInput],
    ebno: float,
    load_factor: float = DEFAULT_LOAD_FACTOR,
) -> UplinkCapacity:
    """Uplink load factor and pole-capacity based user count.

    Each service contributes ``η = (1 + i)·(Eb/N0)·v / Gp`` with ``i = 0.65``.
    ``noise_rise`` is ``-10·log10(1 - η_total)``: infinite or NaN once the
    total load reaches 1, which signals that capacity is exceeded.

    Args:
        services: Service mix (order irrelevant, duplicates allowed)
        ebno: Eb/N0 target in dB
        load_factor: Planned maximum cell load (0-1)
    """
    ebno_linear = np.power(10.0, f64(ebno) / 10.0)
    details, total = _service_loads(services, ebno_linear, 1.0 + OTHER_CELL_INTERFERENCE)
    return {
        "service_details": details,
        "total_load_factor": round2(total),
        "max_users": floor_count(f64(load_factor) / total),
        "noise_rise": round2(-10.0 * np.log10(1.0 - total)),
        "max_load_factor": round2(load_factor),
    }


@ieee754
def downlink_capacity(
    services: Iterable[ServiceInput],
    ebno: float,
    load_factor: float = DEFAULT_LOAD_FACTOR,
) -> DownlinkCapacity:
    """Downlink load factor with ``η = (Eb/N0)·v / Gp · ((1 - α) + i)``."""
    ebno_linear = np.power(10.0, f64(ebno) / 10.0)
    scale = (1.0 - ORTHOGONALITY_FACTOR) + OTHER_CELL_INTERFERENCE
    details, total = _service_loads(services, ebno_linear, scale)
    return {
        "service_details": details,
        "total_load_factor": round2(total),
        "max_users": floor_count(f64(load_factor) / total),
        "orthogonality_factor": ORTHOGONALITY_FACTOR,
        "max_load_factor": round2(load_factor),
    }


def _mobile_height_correction(frequency: np.float64, mobile_height: np.float64) -> np.float64:
    if frequency >= 400:
        return 3.2 * np.log10(11.75 * mobile_height) ** 2 - 4.97
    return (1.1 * np.log10(frequency) - 0.7) * mobile_height - (1.56 * np.log10(frequency) - 0.8)


@ieee754
def cell_coverage(
    transmit_power: float,
    sensitivity: float,
    margin: float,
    propagation: Optional[PropagationParams] = None,
) -> CellCoverage:
    """Cell radius and area from the maximum allowable path loss.

    ``MAPL = transmit_power - sensitivity - margin`` is inverted through
    COST-231-Hata. A radius that comes out non-positive or NaN is returned
    as is; substituting a usable value is the caller's decision.
    """
    params = propagation or PropagationParams()
    mapl = f64(transmit_power) - f64(sensitivity) - f64(margin)

    f = f64(params.frequency)
    hb = f64(params.base_station_height)
    hm = f64(params.mobile_height)
    environment = _enum_value(params.environment_type)

    a_hm = _mobile_height_correction(f, hm)
    c = METROPOLITAN_OFFSET_DB if environment == EnvironmentType.METROPOLITAN.value else 0.0

    a = 46.3 + 33.9 * np.log10(f) - 13.82 * np.log10(hb) - a_hm + c
    b = 44.9 - 6.55 * np.log10(hb)
    radius = np.power(10.0, (mapl - a) / b)

    return {
        "mapl": round2(mapl),
        "radius": round2(radius),
        "cell_area": round2(UMTS_CELL_AREA_FACTOR * radius ** 2),
        "transmit_power": round2(transmit_power),
        "sensitivity": round2(sensitivity),
        "margin": round2(margin),
        "frequency": round2(f),
        "environment_type": environment,
    }


@ieee754
def cell_area(radius: float) -> float:
    """UMTS cell area ``2.6·R²`` (km²), rounded."""
    return round2(UMTS_CELL_AREA_FACTOR * f64(radius) ** 2)


@ieee754
def frequency_planning(
    total_bandwidth: float,
    carrier_bandwidth: float = DEFAULT_CARRIER_BANDWIDTH_MHZ,
) -> CarrierPlan:
    """Number of carriers in ``total_bandwidth`` MHz and their voice capacity."""
    carriers = floor_count(f64(total_bandwidth) / f64(carrier_bandwidth))
    return {
        "number_of_carriers": carriers,
        "carrier_bandwidth": round2(carrier_bandwidth),
        "total_bandwidth": round2(total_bandwidth),
        "voice_capacity_per_carrier": VOICE_USERS_PER_CARRIER,
        "total_voice_capacity": carriers * VOICE_USERS_PER_CARRIER,
    }
