from .dimensioning import (
    GsmDimensioningParameters,
    HertzianLinkParameters,
    OpticalLinkParameters,
    UmtsDimensioningParameters,
    gsm_dimensioning,
    hertzian_link_budget,
    optical_link_budget,
    umts_dimensioning,
)

__all__ = [
    "GsmDimensioningParameters",
    "HertzianLinkParameters",
    "OpticalLinkParameters",
    "UmtsDimensioningParameters",
    "gsm_dimensioning",
    "hertzian_link_budget",
    "optical_link_budget",
    "umts_dimensioning",
]
