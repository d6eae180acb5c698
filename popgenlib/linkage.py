r"""Linkage disequilibrium between two bi-allelic loci.

All the statistics assume haplotype frequencies from phased data, and polarised allele
frequencies: `pA` and `pB` are the major allele frequencies of each locus and `pAB` the
frequency of the haplotype carrying both major alleles. Use `1 - p` if `p < 0.5`.

References:
    Lewontin (1964): The interaction of selection and linkage. I. General considerations;
    heterotic models, Genetics 49.

    Hill & Robertson (1968): Linkage disequilibrium in finite populations, Theor. Appl. Genet. 38.

    Langley & Crow (1974): The direction of linkage disequilibrium, Genetics 78.

    VanLiere & Rosenberg (2008): Mathematical properties of the :math:`r^2` measure of linkage
    disequilibrium, Theor. Popul. Biol. 74(1).

    Charlesworth & Charlesworth (2010): Elements of Evolutionary Genetics, Roberts & Company.
"""
import numpy as np
from scipy.stats import chi2

from .errors import InvalidArgumentError, InvalidFrequencyError
from .frequencies import validate_frequency_range, validate_major_frequency


def d(pA: float, pB: float, pAB: float) -> float:
    r"""Directional linkage disequilibrium :math:`D_\omega = p_{AB} - p_A p_B` (Langley & Crow
    1974, formula 1)."""
    validate_major_frequency(pA, "locus A (pA)")
    validate_major_frequency(pB, "locus B (pB)")
    validate_frequency_range(pAB)
    return pAB - pA * pB


def d_prime(pA: float, pB: float, pAB: float) -> float:
    "Normalized linkage disequilibrium D' (VanLiere & Rosenberg 2008, formula 13)."
    D = d(pA, pB, pAB)
    if D == 0:
        return D
    if D < 0:
        d_max = min(pA * pB, (1 - pA) * (1 - pB))
    else:
        d_max = min(pA * (1 - pB), (1 - pA) * pB)
    return D / d_max


def rw(pA: float, pB: float, pAB: float) -> float:
    r"""Signed allele frequency correlation :math:`r_\omega`.

    Raises:
        InvalidFrequencyError: if any of the loci is monomorphic.
    """
    D = d(pA, pB, pAB)
    denominator = pA * (1 - pA) * pB * (1 - pB)
    if denominator == 0:
        raise InvalidFrequencyError(
            "Correlation is not defined for monomorphic loci: pA=%s, pB=%s" % (pA, pB)
        )
    return D / np.sqrt(denominator)


def r2(pA: float, pB: float, pAB: float) -> float:
    "Allele frequency correlation :math:`r^2` (Hill & Robertson 1968)."
    return rw(pA, pB, pAB) ** 2


def r2_max(pA: float, pB: float) -> float:
    """Maximum :math:`r^2` reachable for the given major allele frequencies (VanLiere &
    Rosenberg 2008, formulas 2 and 3)."""
    validate_major_frequency(pA, "locus A (pA)")
    validate_major_frequency(pB, "locus B (pB)")
    if pA == pB:
        return 1.0
    # both frequencies are major, so only cases S2 and S3 of table 1 apply; they are the same
    # formula with the loci swapped
    smaller, higher = sorted((pA, pB))
    return (smaller * (1 - higher)) / ((1 - smaller) * higher)


def r2_prime(pA: float, pB: float, pAB: float) -> float:
    r"Normalized correlation :math:`r^2 / r^2_{max}`."
    return r2(pA, pB, pAB) / r2_max(pA, pB)


def r2_significant_threshold(number_of_samples: int, quantile: float) -> float:
    r"""Minimum :math:`r^2` that is significantly different from 0 for the number of samples,
    based on the :math:`\chi^2_1` distribution of :math:`n r^2` (Charlesworth & Charlesworth,
    formula B8.3.1).

    Args:
        number_of_samples: number of samples used to compute the correlation (more than 5).
        quantile: quantile of the chi-squared distribution (e.g. 0.95).
    """
    if number_of_samples <= 5:
        raise InvalidArgumentError(
            "number_of_samples should be larger than 5: %s" % number_of_samples
        )
    if not 0 <= quantile <= 1:
        raise InvalidArgumentError("quantile should be in [0, 1]: %s" % quantile)
    return float(chi2.ppf(quantile, df=1) / number_of_samples)


def r2_significant_test(r2: float, number_of_samples: int, quantile: float) -> bool:
    "Whether `r2` is significant for the number of samples and chi-squared quantile."
    if not 0 <= r2 <= 1:
        raise InvalidArgumentError("r2 should be in [0, 1]: %s" % r2)
    return r2 >= r2_significant_threshold(number_of_samples, quantile)
