"""Validation and normalization of allele frequencies and counts.

Frequencies are represented as plain sequences of floats. A valid frequency vector is
non-empty, has every value in the range [0, 1] and sums to one.
"""
import math
from fractions import Fraction
from typing import List, NamedTuple, Sequence

from .errors import InvalidArgumentError, InvalidFrequencyError

FREQUENCY_ZERO = 0.0
FREQUENCY_ONE = 1.0

# the sum is exactly rounded (math.fsum), so this only absorbs the rounding of each value
FREQUENCY_TOLERANCE = 1e-12

MAJOR_FREQUENCY_THRESHOLD = 0.5


class AlleleFrequencies(NamedTuple):
    """Frequencies derived from allele counts.

    Args:
        total: sum of all the counts (the sample size).
        frequencies: frequency of each allele, in the same order as the counts.
    """

    total: int
    frequencies: List[float]


def validate_frequency_range(freq: float) -> float:
    "Return `freq` if it is within [0, 1]; raise :class:`InvalidFrequencyError` otherwise."
    if freq is None:
        raise InvalidFrequencyError("Missing frequency value")
    if not FREQUENCY_ZERO <= freq <= FREQUENCY_ONE:
        raise InvalidFrequencyError(
            "Frequency out of range [%s, %s]: %s" % (FREQUENCY_ZERO, FREQUENCY_ONE, freq)
        )
    return freq


def validate_major_frequency(freq: float, name: str = "frequency") -> float:
    """Return `freq` if it is a valid major-allele frequency (`freq >= 0.5`) for a bi-allelic
    locus.

    Raises:
        InvalidFrequencyError: if the frequency is out of range or is a minor frequency.
    """
    validate_frequency_range(freq)
    if freq < MAJOR_FREQUENCY_THRESHOLD:
        raise InvalidFrequencyError("Non-major frequency for %s: %s" % (name, freq))
    return freq


def validate_frequencies(frequencies: Sequence[float]) -> None:
    """Check that `frequencies` is a valid frequency vector.

    Raises:
        InvalidFrequencyError: if the vector is empty, contains missing or out of range values,
            or does not sum to one.
    """
    if frequencies is None or len(frequencies) == 0:
        raise InvalidFrequencyError("Empty frequencies: %s" % (frequencies,))
    for f in frequencies:
        validate_frequency_range(f)
    total = math.fsum(frequencies)
    if abs(total - FREQUENCY_ONE) > FREQUENCY_TOLERANCE:
        raise InvalidFrequencyError(
            "Frequencies should sum 1 but found %s: %s" % (total, list(frequencies))
        )


def counts_to_frequencies(counts: Sequence[int]) -> AlleleFrequencies:
    """Convert allele counts to frequencies.

    Each frequency is computed as an exact fraction of the total and rounded once, so that the
    original counts can be recovered by multiplying by the total.

    Raises:
        InvalidArgumentError: if counts are empty, contain negative or non-integral values, or are
            all zero.
    """
    if counts is None or len(counts) == 0:
        raise InvalidArgumentError("Empty allele counts: %s" % (counts,))
    for c in counts:
        if c is None or c < 0 or not float(c).is_integer():
            raise InvalidArgumentError("Counts should be 0 or positive integers: %s" % (c,))
    total = int(sum(counts))
    if total == 0:
        raise InvalidArgumentError("All counts are zero: %s" % list(counts))
    freqs = [float(Fraction(int(c), total)) if c else FREQUENCY_ZERO for c in counts]
    return AlleleFrequencies(total=total, frequencies=freqs)


def sort_frequencies(frequencies: Sequence[float]) -> List[float]:
    "Return a new list with the (validated) frequencies sorted from major to minor."
    validate_frequencies(frequencies)
    return sorted(frequencies, reverse=True)
