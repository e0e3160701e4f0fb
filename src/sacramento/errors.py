"""Error taxonomy for the Sacramento model.

- DomainError: a parameter used as a divisor would yield NaN or infinity
- ConfigError: the delay buffer configuration is inconsistent

Both derive from ValueError so callers validating inputs generically keep working.
"""


class SacramentoError(Exception):
    """Base class for all errors raised by the model."""


class DomainError(SacramentoError, ValueError):
    """A rate or capacity parameter is outside the domain of the water balance."""


class ConfigError(SacramentoError, ValueError):
    """The delay buffer length is invalid or does not match the state."""
