from fastapi import APIRouter

from ...calculators import optical
from ...models import (
    ApiResponse,
    DispersionRequest,
    MaxRangeRequest,
    OpticalBudgetRequest,
    OpticalLinkBudgetRequest,
    OpticalLossesRequest,
    OsnrRequest,
)
from ...services import OpticalLinkParameters, optical_link_budget
from ..utils import ok

router = APIRouter()


@router.post("/link-budget", response_model=ApiResponse)
async def link_budget(req: OpticalLinkBudgetRequest) -> ApiResponse:
    """Budget, losses, reach and impairments of a fiber link."""
    return ok(optical_link_budget(OpticalLinkParameters(**req.model_dump())))


@router.post("/optical-budget", response_model=ApiResponse)
async def optical_budget(req: OpticalBudgetRequest) -> ApiResponse:
    budget = optical.optical_budget(req.transmitter_power, req.receiver_sensitivity)
    return ok({"optical_budget": budget, **req.model_dump()})


@router.post("/total-losses", response_model=ApiResponse)
async def total_losses(req: OpticalLossesRequest) -> ApiResponse:
    losses = optical.total_losses(
        req.fiber_type,
        req.link_length,
        req.wavelength,
        req.connector_count,
        req.splice_count,
        req.connector_loss,
        req.splice_loss,
        req.safety_margin,
    )
    return ok({
        "total_losses": losses,
        "fiber_attenuation": optical.fiber_attenuation(req.fiber_type, req.wavelength),
        **req.model_dump(),
    })


@router.post("/max-range", response_model=ApiResponse)
async def max_range(req: MaxRangeRequest) -> ApiResponse:
    reach = optical.max_range(req.optical_budget, req.linear_attenuation, req.connection_losses, req.safety_margin)
    return ok({"max_range": reach, **req.model_dump()})


@router.post("/dispersion", response_model=ApiResponse)
async def dispersion(req: DispersionRequest) -> ApiResponse:
    """Chromatic dispersion, with its power penalty when the bit rate is given."""
    total = optical.chromatic_dispersion(req.wavelength, req.link_length, req.spectral_width)
    data = {
        "dispersion_coefficient": optical.dispersion_coefficient(req.wavelength),
        "chromatic_dispersion": total,
        **req.model_dump(),
    }
    if req.bit_rate is not None:
        data["dispersion_penalty"] = optical.dispersion_penalty(req.bit_rate, total)
    return ok(data)


@router.post("/osnr", response_model=ApiResponse)
async def osnr(req: OsnrRequest) -> ApiResponse:
    value = optical.osnr(req.launch_power, req.received_power, req.noise_figure, req.amplifier_count)
    return ok({"osnr": value, **req.model_dump()})
