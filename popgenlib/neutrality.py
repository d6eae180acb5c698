r"""Tajima's D neutrality test.

References:
    Tajima (1989): Statistical method for testing the neutral mutation hypothesis by DNA
    polymorphism, Genetics 123(3).
"""
import logging
from typing import Callable, NamedTuple

import numpy as np

from . import diversity
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class VarianceConstants(NamedTuple):
    r"""Constants of the variance of :math:`d = \pi - \theta_W` (formulas 36 and 37 in Tajima
    1989), which only depend on the number of samples."""

    e1: float
    e2: float

    def standard_deviation(self, segregating_sites: int) -> float:
        "Standard deviation of d for `segregating_sites` (denominator of formula 38)."
        S = segregating_sites
        return float(np.sqrt(self.e1 * S + self.e2 * S * (S - 1)))


def tajimas_d(number_of_samples: int, pi_estimate: float, segregating_sites: int) -> float:
    """Tajima's D from sample summaries (formula 38 in Tajima 1989).

    Args:
        number_of_samples: number of samples used to count the segregating sites.
        pi_estimate: average number of pair-wise differences between samples.
        segregating_sites: number of segregating sites in the sample.

    Returns:
        Tajima's D, or 0 if the variance is 0 (e.g. no segregating sites).
    """
    validate_tajimas_d_params(number_of_samples, segregating_sites)
    constants = variance_constants(number_of_samples)
    return lazy_tajimas_d(
        pi_estimate,
        lambda: diversity.wattersons_theta(number_of_samples, segregating_sites),
        constants.standard_deviation(segregating_sites),
    )


def validate_tajimas_d_params(number_of_samples: int, segregating_sites: int) -> None:
    if segregating_sites < 0:
        raise InvalidArgumentError(
            "Number of segregating sites should be 0 or a positive integer: %s"
            % segregating_sites
        )
    if number_of_samples < 2:
        raise InvalidArgumentError(
            "number_of_samples should be at least 2: %s" % number_of_samples
        )


def lazy_tajimas_d(
    pi_estimate: float, theta: Callable[[], float], standard_deviation: float
) -> float:
    "Formula 38 for a precomputed standard deviation; `theta` is only called if it is not 0."
    if standard_deviation == 0:
        return 0.0
    return (pi_estimate - theta()) / standard_deviation


def variance_constants(number_of_samples: int) -> VarianceConstants:
    """Compute e1 and e2 for `number_of_samples`.

    Raises:
        InvalidArgumentError: if the number of samples is lower than 2.
    """
    a1 = diversity.harmonic_denominator(number_of_samples)
    return variance_constants_from_denominator(a1, number_of_samples)


def variance_constants_from_denominator(a1: float, number_of_samples: int) -> VarianceConstants:
    """Compute e1 and e2 reusing an already computed Watterson's denominator `a1`.

    See Also:
        :func:`popgenlib.diversity.harmonic_denominator`
    """
    n = number_of_samples
    # formula 4
    a2 = (1.0 / np.arange(1.0, n) ** 2).sum()
    # formulas 8 and 9
    b1 = (n + 1.0) / (3.0 * (n - 1.0))
    b2 = 2.0 * (n ** 2 + n + 3.0) / (9.0 * n * (n - 1.0))
    a1_square = a1 * a1
    # formulas 31 and 32
    c1 = b1 - 1.0 / a1
    c2 = b2 - (n + 2.0) / (a1 * n) + a2 / a1_square
    # formulas 36 and 37
    e1 = c1 / a1
    e2 = c2 / (a1_square + a2)
    return VarianceConstants(e1=float(e1), e2=float(e2))
