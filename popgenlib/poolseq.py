r"""Nucleotide diversity estimators corrected for pooled sequencing (Pool-Seq) data.

Reads are modelled as a binomial draw from the pool: if `i` of the `n` pooled chromosomes
carry an allele, the number of reads supporting it out of a coverage `C` follows
:math:`\mathrm{Binomial}(C, i / n)`. Only read counts within `[m, C - m]` are accepted as real
polymorphisms, where `m` is the minimum count.

References:
    Kofler et al. (2011): PoPoolation: A Toolbox for Population Genetic Analysis of Next
    Generation Sequencing Data from Pooled Individuals, PLOS ONE 6(1).
"""
import logging
from collections import Counter
from typing import NamedTuple, Sequence, Union

import numpy as np
from scipy.stats import binom

from . import diversity
from .errors import InvalidArgumentError
from .frequencies import counts_to_frequencies

logger = logging.getLogger(__name__)

ArrayLike = Union[int, np.ndarray]


class PoolSeqParameters(NamedTuple):
    """Parameters of a Pool-Seq experiment.

    Args:
        min_count: minimum number of reads supporting an allele to consider it real rather than
            a sequencing error.
        pool_size: number of chromosomes pooled together.
    """

    min_count: int
    pool_size: int

    def validate(self) -> "PoolSeqParameters":
        "Return self if both parameters are positive; raise :class:`InvalidArgumentError` otherwise."
        if self.min_count <= 0:
            raise InvalidArgumentError(
                "Minimum count should be a positive integer: %s" % self.min_count
            )
        if self.pool_size <= 0:
            raise InvalidArgumentError(
                "Pool-size should be a positive integer: %s" % self.pool_size
            )
        return self


def validate_pool_seq_params(min_count: int, pool_size: int) -> PoolSeqParameters:
    return PoolSeqParameters(min_count=min_count, pool_size=pool_size).validate()


def tajimas_pi(min_count: int, pool_size: int, allele_counts: Sequence[int]) -> float:
    """Tajima's pi for a single site from read counts, corrected for Pool-Seq (Kofler et al.
    2011, page 7, first formula). The coverage is the sum of all the counts.

    Args:
        min_count: minimum count used to call alleles.
        pool_size: number of chromosomes pooled together.
        allele_counts: read counts for each allele.
    """
    validate_pool_seq_params(min_count, pool_size)
    coverage, freqs = counts_to_frequencies(allele_counts)
    uncorrected = diversity.tajimas_pi(coverage, freqs)
    return pi_correction_factor(min_count, pool_size, coverage) * uncorrected


def wattersons_theta(
    number_of_segregating_sites: int, min_count: int, pool_size: int, coverage: int
) -> float:
    """Watterson's theta corrected for Pool-Seq (Kofler et al. 2011, page 7), assuming the same
    coverage for every segregating site.

    Note:
        Watterson's denominator cancels out in the correction, so the result is not divided by
        the harmonic number.

    See Also:
        :func:`wattersons_theta_from_coverages` for sites with different coverages.
    """
    validate_pool_seq_params(min_count, pool_size)
    if number_of_segregating_sites < 0:
        raise InvalidArgumentError(
            "Number of segregating sites should be 0 or a positive integer: %s"
            % number_of_segregating_sites
        )
    if coverage <= 0:
        raise InvalidArgumentError("Coverage should be a positive integer: %s" % coverage)
    r = _read_counts(min_count, coverage)
    correction = float(correction_summation_term(r, coverage, pool_size).sum())
    logger.debug(
        "Theta correction for coverage=%d pool_size=%d min_count=%d: %f",
        coverage,
        pool_size,
        min_count,
        correction,
    )
    return number_of_segregating_sites / correction


def wattersons_theta_from_coverages(
    min_count: int, pool_size: int, coverages: Sequence[int]
) -> float:
    """Watterson's theta corrected for Pool-Seq (Kofler et al. 2011, page 7, second formula).

    Args:
        min_count: minimum count used to call alleles.
        pool_size: number of chromosomes pooled together.
        coverages: coverage of each segregating site; its length is the number of segregating
            sites.

    Notes:
        The correction is computed once for each distinct coverage.
    """
    if coverages is None or len(coverages) == 0:
        raise InvalidArgumentError("Empty coverages for segregating sites")
    validate_pool_seq_params(min_count, pool_size)
    return sum(
        wattersons_theta(sites, min_count, pool_size, coverage)
        for coverage, sites in Counter(coverages).items()
    )


def pi_correction_factor(min_count: int, pool_size: int, coverage: int) -> float:
    """Correction factor for Tajima's pi (Kofler et al. 2011, page 7, denominator of the first
    formula), to be multiplied with a pi estimate already corrected by sample size.

    Raises:
        ZeroDivisionError: if no read count is in `[min_count, coverage - min_count]`.
    """
    validate_pool_seq_params(min_count, pool_size)
    r = _read_counts(min_count, coverage)
    term1 = 2.0 * r * (coverage - r) / (coverage * (coverage - 1.0))
    total = float((term1 * correction_summation_term(r, coverage, pool_size)).sum())
    logger.debug(
        "Pi correction for coverage=%d pool_size=%d min_count=%d: %f",
        coverage,
        pool_size,
        min_count,
        total,
    )
    return 1.0 / total


def correction_summation_term(read_count: ArrayLike, coverage: int, pool_size: int) -> ArrayLike:
    r"""Term shared by the pi and theta corrections:

    .. math:: \sum_{k=1}^{n-1} \frac{P(m | C, n, k)}{k}

    where `m` is the read count, `C` the coverage and `n` the pool size. Vectorised over
    `read_count`.
    """
    k = np.arange(1, pool_size)
    m = np.asarray(read_count)[..., None]
    return (count_probability(m, coverage, pool_size, k) / k).sum(axis=-1)


def count_probability(
    read_count: ArrayLike, coverage: int, pool_size: int, pool_count: ArrayLike
) -> ArrayLike:
    """Probability of observing `read_count` reads of an allele among `coverage` reads from a
    pool of `pool_size` chromosomes where `pool_count` of them carry the allele (formula 2 in
    the PoPoolation notes), i.e. the binomial pmf with `p = pool_count / pool_size`.

    Arguments are broadcast against each other. The pmf is evaluated without computing the
    binomial coefficient, so it stays finite for coverages where the coefficient overflows.
    """
    pool_count = np.asarray(pool_count, dtype=np.float64)
    return binom.pmf(read_count, coverage, pool_count / pool_size)


def _read_counts(min_count: int, coverage: int) -> np.ndarray:
    # read counts accepted as polymorphic, [min_count, coverage - min_count]
    return np.arange(min_count, coverage - min_count + 1)
