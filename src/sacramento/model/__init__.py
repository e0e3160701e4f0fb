"""Sacramento model subpackage.

Public API for the Sacramento (modified, 9-parameter) hydrological model.
"""

from .delay import buffer_length
from .run import run, step, validate
from .types import Parameters, State

__all__ = ["Parameters", "State", "buffer_length", "run", "step", "validate"]
