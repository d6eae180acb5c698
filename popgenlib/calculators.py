"""Calculators caching the constants that only depend on the number of samples.

These are more efficient than the functions in :mod:`popgenlib.diversity` and
:mod:`popgenlib.neutrality` when many statistics are computed for the same number of samples,
e.g. over windows along a chromosome.
"""
import logging
from typing import Optional

from . import diversity, neutrality
from .cache import LoadingCache
from .errors import InvalidArgumentError
from .neutrality import VarianceConstants

logger = logging.getLogger(__name__)


def denominator_cache(maxsize: Optional[int] = None) -> "LoadingCache[int, float]":
    "Create a cache of Watterson's denominators keyed by number of samples."
    return LoadingCache(diversity.harmonic_denominator, maxsize=maxsize)


class WattersonsThetaCalculator:
    """Watterson's theta with cached denominators.

    Args:
        maxsize: maximum number of cached denominators (None for no limit).
        denominators: cache of denominators to use instead of a new one; it can be shared with
            other calculators.
    """

    def __init__(
        self,
        maxsize: Optional[int] = None,
        denominators: Optional[LoadingCache] = None,
    ):
        if denominators is None:
            denominators = denominator_cache(maxsize)
        self.denominator_cache = denominators

    def wattersons_theta(self, number_of_samples: int, number_of_segregating_sites: int) -> float:
        """Watterson's theta using the cached denominator.

        See Also:
            :func:`popgenlib.diversity.wattersons_theta`
        """
        if number_of_segregating_sites < 0:
            raise InvalidArgumentError(
                "Number of segregating sites should be 0 or a positive integer: %s"
                % number_of_segregating_sites
            )
        return number_of_segregating_sites / self.denominator_cache.get(number_of_samples)


class TajimasDCalculator(WattersonsThetaCalculator):
    """Tajima's D with cached variance constants and Watterson's denominators.

    The variance constants for a number of samples are computed from the cached denominator
    for the same number of samples, so each denominator is computed at most once.

    Args:
        maxsize: maximum number of entries in each cache (None for no limit).
        denominators: cache of denominators to use instead of a new one.
    """

    def __init__(
        self,
        maxsize: Optional[int] = None,
        denominators: Optional[LoadingCache] = None,
    ):
        super().__init__(maxsize=maxsize, denominators=denominators)
        self.constants_cache = LoadingCache(self._load_constants, maxsize=maxsize)

    def _load_constants(self, number_of_samples: int) -> VarianceConstants:
        a1 = self.denominator_cache.get(number_of_samples)
        return neutrality.variance_constants_from_denominator(a1, number_of_samples)

    def variance_constants(self, number_of_samples: int) -> VarianceConstants:
        "Cached :func:`popgenlib.neutrality.variance_constants`."
        return self.constants_cache.get(number_of_samples)

    def tajimas_d(self, number_of_samples: int, pi_estimate: float, segregating_sites: int) -> float:
        """Tajima's D using cached constants.

        See Also:
            :func:`popgenlib.neutrality.tajimas_d`
        """
        neutrality.validate_tajimas_d_params(number_of_samples, segregating_sites)
        constants = self.variance_constants(number_of_samples)
        return neutrality.lazy_tajimas_d(
            pi_estimate,
            lambda: self.wattersons_theta(number_of_samples, segregating_sites),
            constants.standard_deviation(segregating_sites),
        )
