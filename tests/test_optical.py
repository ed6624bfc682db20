from __future__ import annotations

import math

import pytest

from netdim.calculators import optical
from netdim.calculators.optical import FiberType


def test_optical_budget():
    assert optical.optical_budget(0, -28) == 28.0


@pytest.mark.parametrize(
    "fiber_type, wavelength, expected",
    [
        (FiberType.MONOMODE, 1310, 0.35),
        (FiberType.MONOMODE, 1550, 0.25),
        (FiberType.MONOMODE, 1625, 0.30),
        (FiberType.MONOMODE, 850, 0.40),
        (FiberType.MULTIMODE, 850, 3.0),
        (FiberType.MULTIMODE, 1300, 1.0),
        (FiberType.MULTIMODE, 1550, 3.5),
        ("PLASTIC", 850, 3.0),
    ],
)
def test_fiber_attenuation_table(fiber_type, wavelength, expected):
    assert optical.fiber_attenuation(fiber_type, wavelength) == expected


def test_total_losses_with_defaults():
    # 10 km x 0.25 + 2 x 0.5 + 4 x 0.1 + 3
    assert optical.total_losses("MONOMODE", 10, 1550, 2, 4) == 6.9


def test_total_losses_zero_override_is_not_default():
    assert optical.total_losses("MONOMODE", 10, 1550, 2, 4, connector_loss=0) == 5.9
    assert optical.total_losses("MONOMODE", 10, 1550, 2, 4, safety_margin=0) == 3.9


def test_total_losses_multimode_defaults():
    # 1 km x 3.0 + 2 x 1.0 + 1 x 0.3 + 3
    assert optical.total_losses(FiberType.MULTIMODE, 1, 850, 2, 1) == 8.3


def test_max_range():
    assert optical.max_range(28, 0.25, 1.4) == 94.4


@pytest.mark.parametrize(
    "budget, attenuation, connection_losses",
    [(3, 0.25, 5), (10, 0.25, 7), (20, -0.25, 1), (float("nan"), 0.25, 1)],
)
def test_max_range_is_never_negative(budget, attenuation, connection_losses):
    assert optical.max_range(budget, attenuation, connection_losses) == 0.0


def test_dispersion_coefficient_bands():
    assert optical.dispersion_coefficient(850) == -100
    assert optical.dispersion_coefficient(1310) == 2
    assert optical.dispersion_coefficient(1550) == 17


def test_chromatic_dispersion_uses_magnitude():
    assert optical.chromatic_dispersion(1550, 100, 0.1) == 170.0
    assert optical.chromatic_dispersion(850, 1, 2) == 200.0


def test_dispersion_penalty():
    assert optical.dispersion_penalty(10, 0) == 0.0
    assert optical.dispersion_penalty(10, 170) == pytest.approx(5 * math.log10(1 + 1.7 ** 2), abs=0.01)


def test_osnr():
    assert optical.osnr(0, -20, 5, 10) == -73.0
    assert optical.osnr(0, -20, 5, 1) > optical.osnr(0, -20, 5, 10)
