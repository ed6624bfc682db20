from fastapi import APIRouter

from ...calculators import gsm
from ...models import (
    ApiResponse,
    BtsCountRequest,
    CellRadiusRequest,
    ErlangBRequest,
    GsmDimensioningRequest,
    GsmFrequencyPlanRequest,
    TrafficCapacityRequest,
)
from ...services import GsmDimensioningParameters, gsm_dimensioning
from ..utils import ok

router = APIRouter()


@router.post("/dimensioning", response_model=ApiResponse)
async def dimensioning(req: GsmDimensioningRequest) -> ApiResponse:
    """Coverage and capacity dimensioning of a GSM network."""
    return ok(gsm_dimensioning(GsmDimensioningParameters(**req.model_dump())))


@router.post("/cell-radius", response_model=ApiResponse)
async def cell_radius(req: CellRadiusRequest) -> ApiResponse:
    radius = gsm.cell_radius(req.frequency, req.bts_power, req.mobile_reception_threshold, req.propagation_model)
    return ok({"cell_radius": radius, **req.model_dump()})


@router.post("/bts-count", response_model=ApiResponse)
async def bts_count(req: BtsCountRequest) -> ApiResponse:
    return ok({"bts_count": gsm.bts_count(req.coverage_area, req.cell_radius), **req.model_dump()})


@router.post("/traffic-capacity", response_model=ApiResponse)
async def traffic_capacity(req: TrafficCapacityRequest) -> ApiResponse:
    capacity = gsm.traffic_capacity(req.channel_count, req.occupancy_rate)
    return ok({"traffic_capacity": capacity, **req.model_dump()})


@router.post("/erlang-b", response_model=ApiResponse)
async def erlang_b(req: ErlangBRequest) -> ApiResponse:
    """Minimal channel count for the offered traffic and blocking target."""
    channels = gsm.erlang_b(req.traffic, req.blocking_probability)
    return ok({"channels": channels, **req.model_dump()})


@router.post("/frequency-planning", response_model=ApiResponse)
async def frequency_planning(req: GsmFrequencyPlanRequest) -> ApiResponse:
    return ok(gsm.frequency_planning(req.total_channels, req.cluster_size))
