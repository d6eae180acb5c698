import numpy as np
import pytest

from popgenlib import diversity
from popgenlib.diversity import (
    HARMONIC_EXACT_THRESHOLD,
    harmonic_denominator,
    tajimas_pi,
    tajimas_pi_from_counts,
    wattersons_theta,
)
from popgenlib.errors import InvalidArgumentError, InvalidFrequencyError

STATISTICAL_PRECISION = 1e-6


@pytest.mark.parametrize(
    "n,freqs,expected",
    [
        # low diversity
        (100, [0.95, 0.05], 0.0959596),
        (50, [0.95, 0.05], 0.09693878),
        (10, [0.95, 0.05], 0.1055556),
        # intermediate frequency
        (100, [0.1, 0.9], 0.1818182),
        (50, [0.1, 0.9], 0.1836735),
        (10, [0.1, 0.9], 0.2),
        # high diversity
        (100, [0.55, 0.45], 0.5),
        (50, [0.55, 0.45], 0.505102),
        (10, [0.55, 0.45], 0.55),
        (100, [0.5, 0.5], 0.5050505),
        (50, [0.5, 0.5], 0.5102041),
        (10, [0.5, 0.5], 0.5555555),
        # tri-allelic
        (10, [0.5, 0.4, 0.1], 0.6444444),
        (50, [0.5, 0.4, 0.1], 0.5918367),
        (100, [0.5, 0.4, 0.1], 0.5858586),
    ],
)
def test_tajimas_pi(n, freqs, expected):
    np.testing.assert_allclose(tajimas_pi(n, freqs), expected, atol=STATISTICAL_PRECISION)


@pytest.mark.parametrize("n", [2, 10, 50, 100])
def test_tajimas_pi_permutation(n):
    assert tajimas_pi(n, [0.45, 0.55]) == tajimas_pi(n, [0.55, 0.45])
    np.testing.assert_allclose(
        tajimas_pi(n, [0.5, 0.4, 0.1]), tajimas_pi(n, [0.1, 0.5, 0.4]), rtol=1e-15
    )


@pytest.mark.parametrize("n", [2, 10, 50, 100])
def test_tajimas_pi_monomorphic(n):
    assert tajimas_pi(n, [1.0]) == 0.0
    assert tajimas_pi(n, [0.0, 1.0, 0.0]) == 0.0


@pytest.mark.parametrize(
    "counts,expected",
    [
        ([2], 0.0),
        ([2, 0, 0], 0.0),
        ([5, 5], 0.5555555),
        ([5, 4, 1], 0.6444444),
    ],
)
def test_tajimas_pi_from_counts(counts, expected):
    np.testing.assert_allclose(
        tajimas_pi_from_counts(counts), expected, atol=STATISTICAL_PRECISION
    )


@pytest.mark.parametrize("n", [-1, 0, 1])
def test_tajimas_pi_invalid_samples(n):
    with pytest.raises(InvalidArgumentError):
        tajimas_pi(n, [1.0])


def test_tajimas_pi_invalid_input():
    with pytest.raises(InvalidFrequencyError):
        tajimas_pi(10, [0.5, 0.6])
    with pytest.raises(InvalidArgumentError):
        tajimas_pi_from_counts([])
    with pytest.raises(InvalidArgumentError):
        tajimas_pi_from_counts([0, 0])
    with pytest.raises(InvalidArgumentError):
        tajimas_pi_from_counts([3, -1])
    # a single count is not enough samples
    with pytest.raises(InvalidArgumentError):
        tajimas_pi_from_counts([1])


WATTERSONS_THETA = [
    (2, 0, 0.0),
    (2, 1, 1.0),
    (100, 0, 0.0),
    (10, 0, 0.0),
    (20, 1, 0.2818696),
    (100, 1, 0.1931480),
    (20, 2, 0.5637392),
    (100, 2, 0.3862960),
    (20, 3, 0.8456088),
    (100, 3, 0.5794439),
    (20, 20, 5.6373922),
    (100, 100, 19.3147978),
    # large sample sizes use the approximation
    (10000, 3, 0.3065132),
    (10000, 100, 10.2171074),
    (10000, 200, 20.4342147),
    (10000, 1000, 102.1710736),
]

INVALID_WATTERSONS_THETA = [(-1, 10), (0, 10), (1, 10), (10, -1)]


@pytest.mark.parametrize("n,S,expected", WATTERSONS_THETA)
def test_wattersons_theta(n, S, expected):
    np.testing.assert_allclose(wattersons_theta(n, S), expected, atol=STATISTICAL_PRECISION)


@pytest.mark.parametrize("n", [2, 10, 48, 49, 50, 1000])
def test_wattersons_theta_linear(n):
    assert wattersons_theta(n, 0) == 0.0
    np.testing.assert_allclose(wattersons_theta(n, 20), 2 * wattersons_theta(n, 10))


@pytest.mark.parametrize("n,S", INVALID_WATTERSONS_THETA)
def test_wattersons_theta_invalid(n, S):
    with pytest.raises(InvalidArgumentError):
        wattersons_theta(n, S)


@pytest.fixture(params=list(range(2, 100)) + list(range(1000, 1100)))
def number_of_samples(request):
    return request.param


def test_harmonic_denominator(number_of_samples):
    summation = sum(1.0 / i for i in range(1, number_of_samples))
    np.testing.assert_allclose(
        harmonic_denominator(number_of_samples), summation, atol=STATISTICAL_PRECISION
    )


def test_harmonic_branches_agree():
    for n in range(HARMONIC_EXACT_THRESHOLD - 5, HARMONIC_EXACT_THRESHOLD + 200):
        np.testing.assert_allclose(
            diversity._harmonic_sum(n),
            diversity._harmonic_digamma(n),
            atol=STATISTICAL_PRECISION,
        )


@pytest.mark.parametrize("n", [-1, 0, 1])
def test_harmonic_denominator_invalid(n):
    with pytest.raises(InvalidArgumentError):
        harmonic_denominator(n)
