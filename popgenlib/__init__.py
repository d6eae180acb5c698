import logging

from .calculators import TajimasDCalculator, WattersonsThetaCalculator
from .diversity import tajimas_pi, tajimas_pi_from_counts, wattersons_theta
from .errors import InvalidArgumentError, InvalidFrequencyError
from .neutrality import tajimas_d, variance_constants

logging.basicConfig(
    format="%(asctime)s %(levelname)s %(name)s %(threadName)s %(message)s"
)
logging.getLogger(__name__).setLevel(logging.INFO)

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("popgenlib")
except PackageNotFoundError:
    # package is not installed
    pass
