"""Sacramento hydrological model.

A lumped conceptual rainfall-runoff model in the Sacramento soil moisture
accounting family, in its modified 9-parameter form: interception, soil,
ground and two routing reservoirs followed by a delay buffer.
"""

from .errors import ConfigError, DomainError, SacramentoError
from .inputs import ForcingData
from .model import Parameters, State, buffer_length, run, step, validate
from .outputs import FlowComponents, ModelOutput, SacramentoFluxes, StepDiagnostics

__all__ = [
    "ConfigError",
    "DomainError",
    "FlowComponents",
    "ForcingData",
    "ModelOutput",
    "Parameters",
    "SacramentoError",
    "SacramentoFluxes",
    "State",
    "StepDiagnostics",
    "buffer_length",
    "run",
    "step",
    "validate",
]
