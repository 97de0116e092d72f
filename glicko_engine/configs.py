"""options for the glicko 2 update"""
from dataclasses import dataclass, fields
from typing import Mapping, Optional
from glicko_engine.errors import InvalidInput
from glicko_engine.utils.log_utils import get_logger

logger = get_logger(__name__)

DEFAULT_SYSTEM_CONSTANT = 0.8
DEFAULT_CONVERGENCE_TOLERANCE = 1.0e-7
DEFAULT_MAX_ITERATIONS = 100

# Glickman suggests tau between 0.3 and 1.2, anything else is accepted but can make root-finding unstable
TYPICAL_SYSTEM_CONSTANT_RANGE = (0.3, 1.2)


@dataclass(frozen=True)
class Glicko2Options:
    """
    Tunable constants of the Glicko-2 update.

    Attributes:
        system_constant (float): tau, constrains how far volatility can move in one rating period.
        convergence_tolerance (float): the root-finding stops once the bracket is narrower than this.
        max_iterations (int): cap on both the bracket search and the Illinois iteration.
    """

    system_constant: float = DEFAULT_SYSTEM_CONSTANT
    convergence_tolerance: float = DEFAULT_CONVERGENCE_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self):
        if not self.system_constant > 0.0:
            raise InvalidInput(f'system_constant must be positive, got {self.system_constant}')
        if not self.convergence_tolerance > 0.0:
            raise InvalidInput(f'convergence_tolerance must be positive, got {self.convergence_tolerance}')
        if self.max_iterations < 1:
            raise InvalidInput(f'max_iterations must be at least 1, got {self.max_iterations}')
        low, high = TYPICAL_SYSTEM_CONSTANT_RANGE
        if not low <= self.system_constant <= high:
            logger.debug(f'system_constant {self.system_constant} is outside the typical range [{low}, {high}]')

    @classmethod
    def from_dict(cls, opts: Optional[Mapping] = None) -> 'Glicko2Options':
        """build options from a mapping, unrecognized keys are ignored"""
        if opts is None:
            return DEFAULT_OPTIONS
        if isinstance(opts, cls):
            return opts
        known = {field.name for field in fields(cls)}
        return cls(**{key: value for key, value in opts.items() if key in known})


DEFAULT_OPTIONS = Glicko2Options()
