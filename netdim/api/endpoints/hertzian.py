from fastapi import APIRouter

from ...calculators import hertzian
from ...models import (
    ApiResponse,
    DiffractionLossRequest,
    FreeSpaceLossRequest,
    HertzianLinkBudgetRequest,
    LinkAvailabilityRequest,
    LinkMarginRequest,
    MaxDataRateRequest,
    MaxDistanceRequest,
    RainAttenuationRequest,
    ReceiverThresholdRequest,
    SecondaryLossesRequest,
)
from ...services import HertzianLinkParameters, hertzian_link_budget
from ..utils import ok

router = APIRouter()


@router.post("/link-budget", response_model=ApiResponse)
async def link_budget(req: HertzianLinkBudgetRequest) -> ApiResponse:
    """Complete budget of a microwave hop, including availability and data rate."""
    return ok(hertzian_link_budget(HertzianLinkParameters(**req.model_dump())))


@router.post("/free-space-loss", response_model=ApiResponse)
async def free_space_loss(req: FreeSpaceLossRequest) -> ApiResponse:
    return ok({"free_space_loss": hertzian.free_space_loss(req.frequency, req.distance), **req.model_dump()})


@router.post("/link-margin", response_model=ApiResponse)
async def link_margin(req: LinkMarginRequest) -> ApiResponse:
    margin = hertzian.link_margin(req.system_gain, req.receiver_threshold, req.total_losses)
    return ok({"link_margin": margin, **req.model_dump()})


@router.post("/rain-attenuation", response_model=ApiResponse)
async def rain_attenuation(req: RainAttenuationRequest) -> ApiResponse:
    attenuation = hertzian.rain_attenuation(req.frequency, req.distance, req.rain_zone)
    return ok({"rain_attenuation": attenuation, "rain_rate": hertzian.rain_rate(req.rain_zone), **req.model_dump()})


@router.post("/link-availability", response_model=ApiResponse)
async def link_availability(req: LinkAvailabilityRequest) -> ApiResponse:
    return ok(hertzian.link_availability(req.link_margin, req.frequency, req.distance, req.rain_zone))


@router.post("/diffraction-loss", response_model=ApiResponse)
async def diffraction_loss(req: DiffractionLossRequest) -> ApiResponse:
    loss = hertzian.diffraction_loss(req.frequency, req.clearance, req.distance)
    return ok({"diffraction_loss": loss, **req.model_dump()})


@router.post("/max-distance", response_model=ApiResponse)
async def max_distance(req: MaxDistanceRequest) -> ApiResponse:
    distance = hertzian.max_distance(req.system_gain, req.receiver_threshold, req.frequency, req.additional_losses)
    return ok({"max_distance": distance, **req.model_dump()})


@router.post("/receiver-threshold", response_model=ApiResponse)
async def receiver_threshold(req: ReceiverThresholdRequest) -> ApiResponse:
    threshold = hertzian.receiver_threshold(req.modulation, req.bandwidth_mhz, req.target_ber)
    return ok({"receiver_threshold": threshold, **req.model_dump()})


@router.post("/max-data-rate", response_model=ApiResponse)
async def max_data_rate(req: MaxDataRateRequest) -> ApiResponse:
    rate = hertzian.max_data_rate(req.modulation, req.bandwidth_mhz, req.link_margin)
    return ok({"max_data_rate": rate, **req.model_dump()})


@router.post("/secondary-losses", response_model=ApiResponse)
async def secondary_losses(req: SecondaryLossesRequest) -> ApiResponse:
    """Terrain, fog and Fresnel clearance losses of a hop."""
    return ok({
        "terrain_loss": hertzian.terrain_loss(req.terrain_type, req.distance),
        "fog_loss": hertzian.fog_loss(req.fog_density, req.frequency),
        "fresnel_loss": hertzian.fresnel_loss(req.fresnel_clearance),
        **req.model_dump(),
    })
