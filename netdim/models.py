from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from .calculators.umts import EnvironmentType, ServiceType


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


class ApiResponse(BaseModel):
    success: bool = True
    data: Any = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str


# GSM

class CellRadiusRequest(BaseModel):
    frequency: float = Field(..., gt=0, description="Carrier frequency in MHz")
    bts_power: float = Field(..., description="BTS transmit power in dBm")
    mobile_reception_threshold: float = Field(..., description="Mobile threshold in dBm")
    propagation_model: str = Field("OKUMURA_HATA")  # OKUMURA_HATA, COST231, anything else: free space


class BtsCountRequest(BaseModel):
    coverage_area: float = Field(..., ge=0, description="Area to cover in km²")
    cell_radius: float = Field(..., ge=0, description="Cell radius in km")


class TrafficCapacityRequest(BaseModel):
    channel_count: int = Field(..., ge=0)
    occupancy_rate: float = Field(..., ge=0, le=1)


class ErlangBRequest(BaseModel):
    traffic: float = Field(..., ge=0, description="Offered traffic in Erlang")
    blocking_probability: float = Field(0.02, gt=0, lt=1)


class GsmFrequencyPlanRequest(BaseModel):
    total_channels: int = Field(..., ge=1)
    cluster_size: int = Field(..., ge=1)


class GsmDimensioningRequest(BaseModel):
    coverage_area: float = Field(..., ge=0)
    traffic_per_subscriber: float = Field(..., ge=0, description="Erlang per subscriber")
    subscriber_count: int = Field(..., ge=0)
    frequency: float = Field(..., gt=0)
    bts_power: float
    mobile_reception_threshold: float
    propagation_model: str = "OKUMURA_HATA"
    sectors: Optional[int] = Field(None, ge=1)
    trx_per_sector: Optional[int] = Field(None, ge=1)
    blocking_probability: float = Field(0.02, gt=0, lt=1)
    total_channels: Optional[int] = Field(None, ge=1)
    cluster_size: Optional[int] = Field(None, ge=1)


# UMTS

class ServiceModel(BaseModel):
    type: ServiceType
    bit_rate: float = Field(..., gt=0, description="kbit/s below 1000, bit/s otherwise")
    activity_factor: float = Field(..., ge=0, le=1)


class CapacityRequest(BaseModel):
    services: List[ServiceModel]
    ebno: float = Field(..., description="Eb/N0 target in dB")
    load_factor: float = Field(0.75, gt=0, lt=1)


class PropagationModelParams(BaseModel):
    frequency: float = Field(2100.0, gt=0, description="MHz")
    base_station_height: float = Field(30.0, gt=0)
    mobile_height: float = Field(1.5, gt=0)
    environment_type: EnvironmentType = EnvironmentType.URBAN


class CellCoverageRequest(BaseModel):
    transmit_power: float
    sensitivity: float
    margin: float = Field(0.0, ge=0)
    propagation: PropagationModelParams = Field(default_factory=PropagationModelParams)


class UmtsFrequencyPlanRequest(BaseModel):
    total_bandwidth: float = Field(..., gt=0, description="MHz")
    carrier_bandwidth: float = Field(5.0, gt=0)


class UmtsDimensioningRequest(BaseModel):
    services: List[ServiceModel] = Field(..., min_length=1)
    ebno: float
    transmit_power: float
    sensitivity: float
    margin: float = Field(0.0, ge=0)
    propagation: PropagationModelParams = Field(default_factory=PropagationModelParams)
    soft_handover_margin: float = Field(0.0, ge=0)
    load_factor: float = Field(0.75, gt=0, lt=1)
    total_bandwidth: Optional[float] = Field(None, gt=0)


# Hertzian

class FreeSpaceLossRequest(BaseModel):
    frequency: float = Field(..., gt=0, description="GHz")
    distance: float = Field(..., gt=0, description="km")


class LinkMarginRequest(BaseModel):
    system_gain: float
    receiver_threshold: float
    total_losses: float = Field(..., ge=0)


class RainAttenuationRequest(BaseModel):
    frequency: float = Field(..., gt=0)
    distance: float = Field(..., gt=0)
    rain_zone: str = "K"


class LinkAvailabilityRequest(BaseModel):
    link_margin: float
    frequency: float = Field(..., gt=0)
    distance: float = Field(..., gt=0)
    rain_zone: str = "K"


class DiffractionLossRequest(BaseModel):
    frequency: float = Field(..., gt=0)
    clearance: float = Field(..., description="Obstacle height relative to line of sight in m")
    distance: float = Field(..., gt=0)


class MaxDistanceRequest(BaseModel):
    system_gain: float
    receiver_threshold: float
    frequency: float = Field(..., gt=0)
    additional_losses: float = Field(0.0, ge=0)


class ReceiverThresholdRequest(BaseModel):
    modulation: str = "QPSK"
    bandwidth_mhz: float = Field(20.0, gt=0)
    target_ber: float = Field(1e-6, gt=0, lt=1)


class MaxDataRateRequest(BaseModel):
    modulation: str = "QPSK"
    bandwidth_mhz: float = Field(20.0, gt=0)
    link_margin: float = 10.0


class HertzianLinkBudgetRequest(BaseModel):
    frequency: float = Field(..., gt=0, description="GHz")
    distance: float = Field(..., gt=0, description="km")
    transmit_power: float
    antenna_gain1: float
    antenna_gain2: float
    losses: float = Field(0.0, ge=0)
    receiver_threshold: Optional[float] = None
    modulation: Optional[str] = None
    target_ber: Optional[float] = Field(None, gt=0, lt=1)
    bandwidth_mhz: float = Field(20.0, gt=0)
    data_rate: Optional[float] = Field(None, gt=0, description="Mbit/s")
    rain_zone: Optional[str] = None
    terrain_type: str = "AVERAGE"
    fresnel_clearance: float = Field(60.0, ge=0, le=100)
    fog_density: float = Field(0.0, ge=0)
    obstacle_clearance: Optional[float] = None


# Optical

class OpticalBudgetRequest(BaseModel):
    transmitter_power: float
    receiver_sensitivity: float


class OpticalLossesRequest(BaseModel):
    fiber_type: str = "MONOMODE"
    link_length: float = Field(..., ge=0, description="km")
    wavelength: float = Field(..., gt=0, description="nm")
    connector_count: int = Field(0, ge=0)
    splice_count: int = Field(0, ge=0)
    connector_loss: Optional[float] = Field(None, ge=0)
    splice_loss: Optional[float] = Field(None, ge=0)
    safety_margin: Optional[float] = Field(None, ge=0)


class MaxRangeRequest(BaseModel):
    optical_budget: float
    linear_attenuation: float = Field(..., gt=0, description="dB/km")
    connection_losses: float = Field(..., ge=0)
    safety_margin: float = Field(3.0, ge=0)


class DispersionRequest(BaseModel):
    wavelength: float = Field(..., gt=0)
    link_length: float = Field(..., ge=0)
    spectral_width: float = Field(..., ge=0, description="nm")
    bit_rate: Optional[float] = Field(None, gt=0, description="Gbit/s")


class OsnrRequest(BaseModel):
    launch_power: float
    received_power: float
    noise_figure: float = Field(..., ge=0)
    amplifier_count: int = Field(..., ge=1)


class OpticalLinkBudgetRequest(OpticalLossesRequest):
    transmitter_power: float
    receiver_sensitivity: float
    spectral_width: Optional[float] = Field(None, ge=0)
    bit_rate: Optional[float] = Field(None, gt=0)
    noise_figure: Optional[float] = Field(None, ge=0)
    amplifier_count: Optional[int] = Field(None, ge=1)


class SecondaryLossesRequest(BaseModel):
    frequency: float = Field(..., gt=0, description="GHz")
    distance: float = Field(..., ge=0, description="km")
    terrain_type: str = "AVERAGE"
    fog_density: float = Field(0.0, ge=0, description="g/m³")
    fresnel_clearance: float = Field(60.0, ge=0, le=100, description="% of the first Fresnel zone")
