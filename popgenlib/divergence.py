r"""Population differentiation (:math:`F_{ST}`) from nucleotide diversity.

References:
    Hudson, Slatkin & Maddison (1992): Estimation of levels of gene flow from DNA sequence
    data, Genetics 132(2).
"""
from typing import Sequence

import numpy as np

from .diversity import tajimas_pi
from .errors import InvalidArgumentError
from .frequencies import validate_frequencies


def pairwise_fst(
    number_of_samples1: int,
    allele_frequencies1: Sequence[float],
    number_of_samples2: int,
    allele_frequencies2: Sequence[float],
) -> float:
    "F_ST for a pair of populations. See :func:`fst`."
    return fst(
        [number_of_samples1, number_of_samples2],
        [allele_frequencies1, allele_frequencies2],
    )


def fst(
    samples_per_population: Sequence[int],
    frequencies_per_population: Sequence[Sequence[float]],
) -> float:
    r"""F_ST for several populations (formula 3 in Hudson et al. 1992):

    .. math:: F_{ST} = 1 - \frac{\bar{\pi}_{within}}{\pi_{between}}

    where the between-population diversity is Tajima's pi of the averaged frequencies with the
    pooled number of samples, and the within-population diversity is the average of Tajima's
    pi of each population.

    Args:
        samples_per_population: number of samples of each population.
        frequencies_per_population: allele frequencies of each population, in the same allele
            order.

    Returns:
        F_ST, or 0 if there is no diversity between populations.
    """
    if not samples_per_population or not frequencies_per_population:
        raise InvalidArgumentError("No populations to compute F_ST")
    if len(samples_per_population) != len(frequencies_per_population):
        raise InvalidArgumentError(
            "Different number of populations for sample sizes (%d) and frequencies (%d)"
            % (len(samples_per_population), len(frequencies_per_population))
        )
    n_alleles = {len(f) for f in frequencies_per_population}
    if len(n_alleles) != 1:
        raise InvalidArgumentError("Different number of alleles per population: %s" % n_alleles)
    for f in frequencies_per_population:
        validate_frequencies(f)
    combined = np.mean(np.asarray(frequencies_per_population, dtype=np.float64), axis=0)
    between_pi = tajimas_pi(int(sum(samples_per_population)), combined.tolist())
    if between_pi == 0:
        return 0.0
    within_pi = np.mean(
        [tajimas_pi(n, f) for n, f in zip(samples_per_population, frequencies_per_population)]
    )
    return float(1.0 - within_pi / between_pi)
