"Exceptions raised when the arguments of a statistic are not valid."


class InvalidArgumentError(ValueError):
    """A precondition of a statistic was violated (sample size, pool size, coverage,
    counts, segregating sites...)."""


class InvalidFrequencyError(InvalidArgumentError):
    "Allele or haplotype frequencies are not valid."
