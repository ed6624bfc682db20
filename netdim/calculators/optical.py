"""Optical fiber link budget.

Power budget, fiber/connector/splice losses, attenuation-limited range,
chromatic dispersion with its power penalty, and OSNR across amplified spans.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from ._numeric import f64, ieee754, round2

DEFAULT_SAFETY_MARGIN_DB = 3.0
OSNR_REFERENCE_DB = 58.0  # 0.1 nm reference bandwidth at 1550 nm

# (lower nm, upper nm, dB/km), checked in order; None means open-ended
MONOMODE_WINDOWS: Tuple[Tuple[float, Optional[float], float], ...] = (
    (1300.0, 1400.0, 0.35),
    (1500.0, 1600.0, 0.25),
    (1600.0, None, 0.30),
)
MONOMODE_OTHER_DB_KM = 0.40

MULTIMODE_WINDOWS: Tuple[Tuple[float, Optional[float], float], ...] = (
    (800.0, 900.0, 3.0),
    (1200.0, 1400.0, 1.0),
)
MULTIMODE_OTHER_DB_KM = 3.5

# per-unit (connector, splice) losses in dB
MONOMODE_UNIT_LOSSES = (0.5, 0.1)
MULTIMODE_UNIT_LOSSES = (1.0, 0.3)

# (upper nm, ps/(nm·km)); last band is open-ended
DISPERSION_BANDS: Tuple[Tuple[Optional[float], float], ...] = (
    (1300.0, -100.0),
    (1500.0, 2.0),
    (None, 17.0),
)


class FiberType(str, Enum):
    MONOMODE = "MONOMODE"
    MULTIMODE = "MULTIMODE"


def _is_monomode(fiber_type: Union[FiberType, str]) -> bool:
    return fiber_type == FiberType.MONOMODE


@ieee754
def optical_budget(tx_power: float, rx_sensitivity: float) -> float:
    """Optical power budget in dB: transmitter power minus receiver sensitivity."""
    return round2(f64(tx_power) - f64(rx_sensitivity))


def fiber_attenuation(fiber_type: Union[FiberType, str], wavelength: float) -> float:
    """Attenuation coefficient in dB/km for the wavelength window.

    Pure step lookup by window, no interpolation. Fiber types other than
    MONOMODE use the multimode table.
    """
    if _is_monomode(fiber_type):
        windows, other = MONOMODE_WINDOWS, MONOMODE_OTHER_DB_KM
    else:
        windows, other = MULTIMODE_WINDOWS, MULTIMODE_OTHER_DB_KM
    for lower, upper, attenuation in windows:
        if wavelength >= lower and (upper is None or wavelength < upper):
            return attenuation
    return other


def unit_losses(fiber_type: Union[FiberType, str]) -> Tuple[float, float]:
    """Default (connector, splice) losses in dB for a fiber type."""
    return MONOMODE_UNIT_LOSSES if _is_monomode(fiber_type) else MULTIMODE_UNIT_LOSSES


@ieee754
def total_losses(
    fiber_type: Union[FiberType, str],
    length: float,
    wavelength: float,
    connector_count: int,
    splice_count: int,
    connector_loss: Optional[float] = None,
    splice_loss: Optional[float] = None,
    safety_margin: Optional[float] = None,
) -> float:
    """Total link loss in dB.

    ``attenuation·length + connectors·connector_loss + splices·splice_loss +
    safety_margin``. A ``None`` override takes the fiber-type default
    (MONOMODE 0.5/0.1 dB, MULTIMODE 1.0/0.3 dB) and a 3 dB safety margin.
    """
    default_connector, default_splice = unit_losses(fiber_type)
    connector = default_connector if connector_loss is None else connector_loss
    splice = default_splice if splice_loss is None else splice_loss
    margin = DEFAULT_SAFETY_MARGIN_DB if safety_margin is None else safety_margin

    fiber_loss = f64(fiber_attenuation(fiber_type, wavelength)) * f64(length)
    connection = f64(connector_count) * f64(connector) + f64(splice_count) * f64(splice)
    return round2(fiber_loss + connection + f64(margin))


@ieee754
def max_range(
    optical_budget: float,
    linear_attenuation: float,
    connection_losses: float,
    safety_margin: float = DEFAULT_SAFETY_MARGIN_DB,
) -> float:
    """Attenuation-limited reach in km.

    Clamped to 0 when the budget left after connection losses and safety
    margin is not positive.
    """
    available = f64(optical_budget) - f64(connection_losses) - f64(safety_margin)
    if not available > 0:
        return 0.0
    reach = available / f64(linear_attenuation)
    return round2(reach) if reach > 0 else 0.0


def dispersion_coefficient(wavelength: float) -> float:
    """Chromatic dispersion coefficient in ps/(nm·km) for the wavelength band."""
    for upper, coefficient in DISPERSION_BANDS:
        if upper is None or wavelength < upper:
            return coefficient
    return DISPERSION_BANDS[-1][1]


@ieee754
def chromatic_dispersion(wavelength: float, length: float, spectral_width: float) -> float:
    """Total chromatic dispersion in ps: ``|D|·Δλ·L``."""
    return round2(abs(dispersion_coefficient(wavelength)) * f64(spectral_width) * f64(length))


@ieee754
def dispersion_penalty(bit_rate: float, dispersion: float) -> float:
    """Power penalty in dB, ``5·log10(1 + (D/T)²)`` with T = 1000/bit_rate ps.

    Args:
        bit_rate: Line rate in Gbit/s
        dispersion: Accumulated dispersion in ps
    """
    bit_period = 1000.0 / f64(bit_rate)
    return round2(5.0 * np.log10(1.0 + (f64(dispersion) / bit_period) ** 2))


@ieee754
def osnr(launch_power: float, received_power: float, noise_figure: float, amplifier_count: float) -> float:
    """OSNR in dB after a chain of ``amplifier_count`` amplifiers.

    ``received_power`` does not enter the approximation; it is kept so
    callers pass the full span description.
    """
    return round2(f64(launch_power) - f64(noise_figure) - 10.0 * np.log10(f64(amplifier_count)) - OSNR_REFERENCE_DB)
