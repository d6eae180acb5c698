r"""Nucleotide diversity estimators for individually sequenced samples.

References:
    Tajima (1989): Statistical method for testing the neutral mutation hypothesis by DNA
    polymorphism, Genetics 123(3).

    Watterson (1975): On the number of segregating sites in genetical models without
    recombination, Theor. Popul. Biol. 7(2).
"""
import logging
from typing import Sequence

import numpy as np
from scipy.special import digamma

from .errors import InvalidArgumentError
from .frequencies import counts_to_frequencies, validate_frequencies

logger = logging.getLogger(__name__)

# below this sample size the harmonic number is summed directly
HARMONIC_EXACT_THRESHOLD = 49


def tajimas_pi(number_of_samples: int, allele_frequencies: Sequence[float]) -> float:
    r"""Tajima's :math:`\pi` for a single site (formula 12 in Tajima 1989):

    .. math:: \pi = \frac{n (1 - \sum_i p_i^2)}{n - 1}

    Args:
        number_of_samples: number of samples used to estimate the frequencies.
        allele_frequencies: frequency of each allele.

    Raises:
        InvalidFrequencyError: if the frequencies are not valid.
        InvalidArgumentError: if there are less than 2 samples.
    """
    validate_frequencies(allele_frequencies)
    if number_of_samples < 2:
        raise InvalidArgumentError(
            "number_of_samples should be at least 2 for computing Tajima's pi: %s"
            % number_of_samples
        )
    p = np.asarray(allele_frequencies, dtype=np.float64)
    p_square_sum = (p ** 2).sum()
    return float(number_of_samples * (1.0 - p_square_sum) / (number_of_samples - 1))


def tajimas_pi_from_counts(allele_counts: Sequence[int]) -> float:
    """Tajima's pi for a single site from allele counts. The number of samples is the sum of
    all the counts.

    See Also:
        :func:`tajimas_pi`
    """
    total, freqs = counts_to_frequencies(allele_counts)
    return tajimas_pi(total, freqs)


def wattersons_theta(number_of_samples: int, number_of_segregating_sites: int) -> float:
    r"""Watterson's :math:`\theta` (formula 1.4a in Watterson 1975): :math:`S / a_1`.

    Args:
        number_of_samples: number of samples used to count the segregating sites.
        number_of_segregating_sites: number of segregating sites in the sample.
    """
    if number_of_segregating_sites < 0:
        raise InvalidArgumentError(
            "Number of segregating sites should be 0 or a positive integer: %s"
            % number_of_segregating_sites
        )
    return number_of_segregating_sites / harmonic_denominator(number_of_samples)


def harmonic_denominator(number_of_samples: int) -> float:
    r"""Denominator of Watterson's :math:`\theta` (:math:`a_1`, formula 3 in Tajima 1989), the
    :math:`(n - 1)`-th harmonic number.

    For `number_of_samples < HARMONIC_EXACT_THRESHOLD` the harmonic number is summed directly.
    Otherwise it is evaluated as :math:`\gamma + \psi(n)`, where :math:`\gamma` is the
    Euler-Mascheroni constant and :math:`\psi` the digamma function.

    Raises:
        InvalidArgumentError: if the number of samples is lower than 2.
    """
    if number_of_samples < 2:
        raise InvalidArgumentError(
            "number_of_samples should be at least 2: %s" % number_of_samples
        )
    if number_of_samples < HARMONIC_EXACT_THRESHOLD:
        return _harmonic_sum(number_of_samples)
    return _harmonic_digamma(number_of_samples)


def _harmonic_sum(n: int) -> float:
    return float((1.0 / np.arange(1, n)).sum())


def _harmonic_digamma(n: int) -> float:
    # H_{n-1} = gamma + psi(n)
    return float(np.euler_gamma + digamma(n))
