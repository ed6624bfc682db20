"""End-to-end dimensioning for each network type.

These functions chain the calculators the way a planning request needs them
and own the caller policies the calculators deliberately leave out: GSM
capacity assumptions, the UMTS fallback radius and the receiver threshold
defaults of a hertzian link.
"""
from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..calculators import gsm, hertzian, optical, umts
from ..calculators._numeric import ceil_count, round2
from ..config import Settings, get_settings

logger = logging.getLogger(__name__)

TIMESLOTS_PER_TRX = 8  # GSM TDMA frame
ERLANG_PER_TIMESLOT = 0.9
ERLANG_PER_CHANNEL = 0.8
DEFAULT_BLOCKING_PROBABILITY = 0.02


@dataclass
class GsmDimensioningParameters:
    """Inputs of a GSM dimensioning run"""
    coverage_area: float  # km²
    traffic_per_subscriber: float  # Erlang
    subscriber_count: int
    frequency: float  # MHz
    bts_power: float  # dBm
    mobile_reception_threshold: float  # dBm
    propagation_model: str = gsm.PropagationModel.OKUMURA_HATA.value
    sectors: Optional[int] = None
    trx_per_sector: Optional[int] = None
    blocking_probability: float = DEFAULT_BLOCKING_PROBABILITY
    total_channels: Optional[int] = None
    cluster_size: Optional[int] = None


@dataclass
class UmtsDimensioningParameters:
    """Inputs of a UMTS dimensioning run"""
    services: List[umts.ServiceInput]
    ebno: float  # dB
    transmit_power: float  # dBm
    sensitivity: float  # dBm
    margin: float  # dB
    propagation: umts.PropagationParams = field(default_factory=umts.PropagationParams)
    soft_handover_margin: float = 0.0  # dB
    load_factor: float = umts.DEFAULT_LOAD_FACTOR
    total_bandwidth: Optional[float] = None  # MHz


@dataclass
class HertzianLinkParameters:
    """Inputs of a point-to-point microwave link budget"""
    frequency: float  # GHz
    distance: float  # km
    transmit_power: float  # dBm
    antenna_gain1: float  # dBi
    antenna_gain2: float  # dBi
    losses: float = 0.0  # dB, feeders and branching
    receiver_threshold: Optional[float] = None  # dBm
    modulation: Optional[str] = None
    target_ber: Optional[float] = None
    bandwidth_mhz: float = 20.0
    data_rate: Optional[float] = None  # Mbit/s
    rain_zone: Optional[str] = None
    terrain_type: str = hertzian.TerrainType.AVERAGE.value
    fresnel_clearance: float = 60.0  # %
    fog_density: float = 0.0  # g/m³
    obstacle_clearance: Optional[float] = None  # m, relative to line of sight


@dataclass
class OpticalLinkParameters:
    """Inputs of an optical fiber link budget"""
    fiber_type: str
    link_length: float  # km
    wavelength: float  # nm
    transmitter_power: float  # dBm
    receiver_sensitivity: float  # dBm
    connector_count: int
    splice_count: int
    connector_loss: Optional[float] = None  # dB
    splice_loss: Optional[float] = None  # dB
    safety_margin: Optional[float] = None  # dB
    spectral_width: Optional[float] = None  # nm
    bit_rate: Optional[float] = None  # Gbit/s
    noise_figure: Optional[float] = None  # dB
    amplifier_count: Optional[int] = None


def _finite(value: Any) -> bool:
    return isinstance(value, int) or math.isfinite(value)


def _label(value: Any) -> str:
    return getattr(value, "value", value)


def gsm_dimensioning(params: GsmDimensioningParameters, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Dimension a GSM network for coverage and capacity.

    The BTS count is the larger of the coverage-driven count (hexagonal
    cells of the computed radius) and the capacity-driven count (offered
    traffic over the Erlang capacity of one BTS).

    Raises:
        ErlangConvergenceError: the per-BTS traffic needs more than
            1000 channels at the requested blocking probability.
    """
    settings = settings or get_settings()
    sectors = params.sectors or settings.gsm_sectors
    trx_per_sector = params.trx_per_sector or settings.gsm_trx_per_sector

    radius = gsm.cell_radius(
        params.frequency,
        params.bts_power,
        params.mobile_reception_threshold,
        params.propagation_model,
    )
    coverage_bts = gsm.bts_count(params.coverage_area, radius)

    total_traffic = params.traffic_per_subscriber * params.subscriber_count
    traffic_per_bts = sectors * trx_per_sector * TIMESLOTS_PER_TRX * ERLANG_PER_TIMESLOT
    capacity_bts = ceil_count(total_traffic / traffic_per_bts)
    final_bts = max(coverage_bts, capacity_bts) if _finite(coverage_bts) else coverage_bts

    channels_required = ceil_count(total_traffic / ERLANG_PER_CHANNEL)
    offered_per_bts = total_traffic / final_bts if _finite(final_bts) and final_bts > 0 else 0.0
    erlang_channels = gsm.erlang_b(offered_per_bts, params.blocking_probability)

    result: Dict[str, Any] = {
        "cell_radius": radius,
        "bts_count": coverage_bts,
        "bts_count_for_capacity": capacity_bts,
        "final_bts_count": final_bts,
        "total_traffic": round2(total_traffic),
        "channels_required": channels_required,
        "traffic_per_bts": round2(offered_per_bts),
        "erlang_channels_per_bts": erlang_channels,
        "blocking_probability": params.blocking_probability,
        "coverage_area": params.coverage_area,
        "propagation_model": _label(params.propagation_model),
        "capacity_params": {
            "sectors": sectors,
            "trx_per_sector": trx_per_sector,
            "timeslots_per_trx": TIMESLOTS_PER_TRX,
            "erlang_per_timeslot": ERLANG_PER_TIMESLOT,
            "traffic_per_bts": round2(traffic_per_bts),
        },
    }
    if params.total_channels is not None and params.cluster_size is not None:
        result["frequency_plan"] = gsm.frequency_planning(params.total_channels, params.cluster_size)

    logger.info(
        "GSM dimensioning: radius=%s km, coverage BTS=%s, capacity BTS=%s, final=%s",
        radius, coverage_bts, capacity_bts, final_bts,
    )
    return result


def umts_dimensioning(params: UmtsDimensioningParameters, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Dimension a UMTS cell for uplink/downlink capacity and coverage.

    A coverage radius that is not positive (or NaN) is replaced by the
    configured fallback radius and the cell area recomputed from it.
    """
    settings = settings or get_settings()

    uplink = umts.uplink_capacity(params.services, params.ebno, params.load_factor)
    downlink = umts.downlink_capacity(params.services, params.ebno, params.load_factor)
    coverage = dict(umts.cell_coverage(params.transmit_power, params.sensitivity, params.margin, params.propagation))

    fallback_applied = not coverage["radius"] > 0
    if fallback_applied:
        logger.warning(
            "UMTS coverage radius %s km is unusable (MAPL %s dB), using fallback radius %s km",
            coverage["radius"], coverage["mapl"], settings.umts_fallback_radius_km,
        )
        coverage["radius"] = settings.umts_fallback_radius_km
        coverage["cell_area"] = umts.cell_area(settings.umts_fallback_radius_km)
    coverage["radius_fallback_applied"] = fallback_applied

    ul_users = uplink["max_users"]
    dl_users = downlink["max_users"]
    limiting_factor = "UPLINK" if ul_users < dl_users else "DOWNLINK"
    max_users_per_cell = ul_users if limiting_factor == "UPLINK" else dl_users

    result: Dict[str, Any] = {
        "uplink_capacity": uplink,
        "downlink_capacity": downlink,
        "cell_coverage": coverage,
        "limiting_factor": limiting_factor,
        "max_users_per_cell": max_users_per_cell,
        "soft_handover_margin": params.soft_handover_margin,
        "services": [asdict(umts.as_service(s)) for s in params.services],
    }
    if params.total_bandwidth is not None:
        result["frequency_plan"] = umts.frequency_planning(params.total_bandwidth)

    logger.info(
        "UMTS dimensioning: limiting=%s, max users/cell=%s, radius=%s km",
        limiting_factor, max_users_per_cell, coverage["radius"],
    )
    return result


def _resolve_threshold(params: HertzianLinkParameters, settings: Settings) -> float:
    # 0 dBm is treated as unset
    if params.receiver_threshold:
        threshold = params.receiver_threshold
    elif params.modulation and params.target_ber:
        threshold = hertzian.receiver_threshold(params.modulation, params.bandwidth_mhz, params.target_ber)
    else:
        threshold = settings.default_receiver_threshold_dbm
    # thresholds are quoted as negative dBm
    return -abs(threshold)


def hertzian_link_budget(params: HertzianLinkParameters, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Full link budget of a microwave hop.

    Total losses are free-space loss, fixed losses, terrain, fog, Fresnel
    clearance and, when an obstacle clearance is given, knife-edge
    diffraction. The margin left against the receiver threshold drives the
    rain availability and the achievable data rate.
    """
    settings = settings or get_settings()
    rain_zone = params.rain_zone or settings.default_rain_zone
    modulation = params.modulation or hertzian.Modulation.QPSK.value

    free_space = hertzian.free_space_loss(params.frequency, params.distance)
    system_gain = round2(params.transmit_power + params.antenna_gain1 + params.antenna_gain2)

    terrain = hertzian.terrain_loss(params.terrain_type, params.distance)
    fog = hertzian.fog_loss(params.fog_density, params.frequency)
    fresnel = hertzian.fresnel_loss(params.fresnel_clearance)
    diffraction = None
    if params.obstacle_clearance is not None:
        diffraction = hertzian.diffraction_loss(params.frequency, params.obstacle_clearance, params.distance)

    additional = params.losses + terrain + fog + fresnel + (diffraction or 0.0)
    total_losses = round2(free_space + additional)

    threshold = _resolve_threshold(params, settings)
    margin = hertzian.link_margin(system_gain, threshold, total_losses)
    availability = hertzian.link_availability(margin, params.frequency, params.distance, rain_zone)

    max_rate = hertzian.max_data_rate(modulation, params.bandwidth_mhz, margin)
    if params.data_rate is not None:
        feasible = margin >= 0 and max_rate >= params.data_rate
    else:
        feasible = margin >= 0

    logger.info(
        "Hertzian link: f=%s GHz d=%s km margin=%s dB availability=%s%%",
        params.frequency, params.distance, margin, availability["availability"],
    )
    return {
        "frequency": params.frequency,
        "distance": params.distance,
        "free_space_loss": free_space,
        "system_gain": system_gain,
        "terrain_loss": terrain,
        "fog_loss": fog,
        "fresnel_loss": fresnel,
        "diffraction_loss": diffraction,
        "total_losses": total_losses,
        "receiver_threshold": threshold,
        "link_margin": margin,
        "link_availability": availability,
        "modulation": modulation,
        "bandwidth_mhz": params.bandwidth_mhz,
        "max_data_rate": max_rate,
        "data_rate": params.data_rate,
        "data_rate_feasible": feasible,
        "max_distance": hertzian.max_distance(system_gain, threshold, params.frequency, additional),
    }


def optical_link_budget(params: OpticalLinkParameters) -> Dict[str, Any]:
    """
    Power budget, losses, reach and impairments of a fiber link.

    Dispersion is reported when a source spectral width is given, with its
    power penalty when the bit rate is known too. OSNR needs the amplifier
    noise figure and count.
    """
    default_connector, default_splice = optical.unit_losses(params.fiber_type)
    connector_loss = default_connector if params.connector_loss is None else params.connector_loss
    splice_loss = default_splice if params.splice_loss is None else params.splice_loss
    safety_margin = optical.DEFAULT_SAFETY_MARGIN_DB if params.safety_margin is None else params.safety_margin

    budget = optical.optical_budget(params.transmitter_power, params.receiver_sensitivity)
    losses = optical.total_losses(
        params.fiber_type,
        params.link_length,
        params.wavelength,
        params.connector_count,
        params.splice_count,
        connector_loss,
        splice_loss,
        safety_margin,
    )
    attenuation = optical.fiber_attenuation(params.fiber_type, params.wavelength)
    connection_losses = round2(params.connector_count * connector_loss + params.splice_count * splice_loss)

    result: Dict[str, Any] = {
        "optical_budget": budget,
        "total_losses": losses,
        "system_margin": round2(budget - losses),
        "max_range": optical.max_range(budget, attenuation, connection_losses, safety_margin),
        "fiber_type": _label(params.fiber_type),
        "link_length": params.link_length,
        "wavelength": params.wavelength,
        "fiber_attenuation": attenuation,
        "connector_loss": connector_loss,
        "splice_loss": splice_loss,
        "connection_losses": connection_losses,
        "received_power": round2(params.transmitter_power - losses),
    }

    if params.spectral_width is not None:
        dispersion = optical.chromatic_dispersion(params.wavelength, params.link_length, params.spectral_width)
        result["dispersion_coefficient"] = optical.dispersion_coefficient(params.wavelength)
        result["chromatic_dispersion"] = dispersion
        if params.bit_rate is not None:
            result["dispersion_penalty"] = optical.dispersion_penalty(params.bit_rate, dispersion)

    if params.noise_figure is not None and params.amplifier_count is not None:
        result["osnr"] = optical.osnr(
            params.transmitter_power,
            result["received_power"],
            params.noise_figure,
            params.amplifier_count,
        )

    logger.info(
        "Optical link: %s km at %s nm, margin=%s dB, max range=%s km",
        params.link_length, params.wavelength, result["system_margin"], result["max_range"],
    )
    return result
