"Summaries of tree sequences using the estimators in this package."
from typing import Optional

import tskit

from ..calculators import TajimasDCalculator
from ..diversity import wattersons_theta
from ..neutrality import tajimas_d as _tajimas_d


def watterson(ts: tskit.TreeSequence) -> float:
    "Returns Watterson's estimate of `4 * N0 * mu` per base computed from tree sequence."
    K = ts.num_sites
    n = ts.num_samples
    L = ts.sequence_length
    return wattersons_theta(n, K) / L


def tajimas_d(ts: tskit.TreeSequence, calculator: Optional[TajimasDCalculator] = None) -> float:
    """Tajima's D of all the samples in a tree sequence.

    Args:
        ts: Tree sequence containing the data. Each site is assumed to be bi-allelic.
        calculator: If not None, used to cache the constants for the number of samples.
    """
    n = ts.num_samples
    pi = float(ts.diversity(mode="site", span_normalise=False))
    S = int(round(float(ts.segregating_sites(mode="site", span_normalise=False))))
    if calculator is None:
        return _tajimas_d(n, pi, S)
    return calculator.tajimas_d(n, pi, S)
