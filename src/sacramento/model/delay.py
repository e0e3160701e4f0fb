"""Delay buffer handling.

The delay buffer is a fixed-length shift register holding discharge already in
transit. Each step shifts it left by one slot, adds the scaled routed flow to
every slot and emits the leading slot as simulated streamflow.
"""

# ruff: noqa: I001
# Import order matters: _compat must patch numpy before numba import
import sacramento._compat  # noqa: F401

import math

import numpy as np
from numba import njit

from ..errors import ConfigError
from .constants import DELAY_ROUNDINGS


def buffer_length(delay: float, rounding: str = "ceil") -> int:
    """Convert the real-valued delay parameter to a delay buffer length.

    Args:
        delay: Delay parameter x9 [time steps].
        rounding: "ceil" (default), "floor", or "round". "round" rounds
            halves up, so 1.5 gives 2 and 2.5 gives 3.

    Returns:
        Number of slots in the delay buffer, at least 1.

    Raises:
        ConfigError: If the rounding mode is unknown, the delay is not finite,
            or the resulting length is below 1.
    """
    if rounding not in DELAY_ROUNDINGS:
        msg = f"Unknown delay rounding '{rounding}', expected one of {list(DELAY_ROUNDINGS)}"
        raise ConfigError(msg)
    if not math.isfinite(delay):
        msg = f"Delay parameter must be finite, got {delay}"
        raise ConfigError(msg)

    if rounding == "ceil":
        n = math.ceil(delay)
    elif rounding == "floor":
        n = math.floor(delay)
    else:
        n = math.floor(delay + 0.5)

    if n < 1:
        msg = f"Delay {delay} gives buffer length {n} with '{rounding}' rounding; need at least 1"
        raise ConfigError(msg)
    return int(n)


@njit(cache=True)
def shift_delay_buffer(buffer: np.ndarray, routed_flow: float, delay_scale: float) -> tuple[np.ndarray, float]:
    """Advance the delay buffer by one time step.

    Args:
        buffer: Current delay buffer.
        routed_flow: Total routed flow for this step (Qr + Qm + Qt1) [mm].
        delay_scale: Fraction of routed flow added to each slot [-].

    Returns:
        Tuple of (new_buffer, streamflow):
        - new_buffer: Shifted buffer with the new contribution added. The
          leading slot holds this step's discharge and is shifted out next step.
        - streamflow: max(0, new_buffer[0]) [mm]
    """
    n_buf = len(buffer)
    new_buffer = np.zeros(n_buf, dtype=np.float64)

    for i in range(n_buf - 1):
        new_buffer[i] = buffer[i + 1]

    contribution = delay_scale * routed_flow
    for i in range(n_buf):
        new_buffer[i] += contribution

    streamflow = max(0.0, new_buffer[0])
    return new_buffer, streamflow
