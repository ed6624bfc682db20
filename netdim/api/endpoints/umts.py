from typing import List

from fastapi import APIRouter

from ...calculators import umts
from ...models import (
    ApiResponse,
    CapacityRequest,
    CellCoverageRequest,
    PropagationModelParams,
    ServiceModel,
    UmtsDimensioningRequest,
    UmtsFrequencyPlanRequest,
)
from ...services import UmtsDimensioningParameters, umts_dimensioning
from ..utils import ok

router = APIRouter()


def _services(services: List[ServiceModel]) -> List[umts.ServiceDescriptor]:
    return [umts.ServiceDescriptor(s.type, s.bit_rate, s.activity_factor) for s in services]


def _propagation(params: PropagationModelParams) -> umts.PropagationParams:
    return umts.PropagationParams(**params.model_dump())


@router.post("/dimensioning", response_model=ApiResponse)
async def dimensioning(req: UmtsDimensioningRequest) -> ApiResponse:
    """Uplink/downlink capacity and coverage of a UMTS cell."""
    params = UmtsDimensioningParameters(
        services=_services(req.services),
        ebno=req.ebno,
        transmit_power=req.transmit_power,
        sensitivity=req.sensitivity,
        margin=req.margin,
        propagation=_propagation(req.propagation),
        soft_handover_margin=req.soft_handover_margin,
        load_factor=req.load_factor,
        total_bandwidth=req.total_bandwidth,
    )
    return ok(umts_dimensioning(params))


@router.post("/uplink-capacity", response_model=ApiResponse)
async def uplink_capacity(req: CapacityRequest) -> ApiResponse:
    return ok(umts.uplink_capacity(_services(req.services), req.ebno, req.load_factor))


@router.post("/downlink-capacity", response_model=ApiResponse)
async def downlink_capacity(req: CapacityRequest) -> ApiResponse:
    return ok(umts.downlink_capacity(_services(req.services), req.ebno, req.load_factor))


@router.post("/cell-coverage", response_model=ApiResponse)
async def cell_coverage(req: CellCoverageRequest) -> ApiResponse:
    """Raw coverage result; no fallback radius is applied here."""
    return ok(umts.cell_coverage(req.transmit_power, req.sensitivity, req.margin, _propagation(req.propagation)))


@router.post("/frequency-planning", response_model=ApiResponse)
async def frequency_planning(req: UmtsFrequencyPlanRequest) -> ApiResponse:
    return ok(umts.frequency_planning(req.total_bandwidth, req.carrier_bandwidth))
