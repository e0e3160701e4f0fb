"""Sacramento model orchestration functions.

This module provides the main entry points for running the Sacramento model:
- step(): Execute a single timestep
- run(): Execute the model over a timeseries
"""

from __future__ import annotations

# ruff: noqa: I001
# Import order matters: _compat must patch numpy before numba import
import sacramento._compat  # noqa: F401
import logging

import numpy as np
from numba import njit

from ..errors import ConfigError, DomainError
from ..inputs import ForcingData
from ..outputs import ModelOutput, SacramentoFluxes
from .constants import DIVISOR_PARAMS, FLUX_NAMES, N_FLUXES
from .delay import shift_delay_buffer
from .processes import (
    direct_routing_update,
    groundwater_update,
    interception_store_update,
    soil_store_update,
)
from .types import Parameters, State

logger = logging.getLogger(__name__)

# Constants inlined for Numba compatibility (from .constants)
_STORE_COUNT: int = 5
_N_FLUXES: int = 21


@njit(cache=True)
def _step_numba(
    state_arr: np.ndarray,  # shape (5 + n_delay,) - modified in place
    params_arr: np.ndarray,  # shape (12,)
    precip: float,
    pet: float,
    output_arr: np.ndarray,  # shape (21,) - output written here
) -> None:
    """Execute one timestep of the Sacramento model using arrays (Numba-optimized).

    State layout: [S, T, R, L, M, delay_buffer...]
    Params layout: [x1, x2, x3, x4, x5, x6, x7, x8, x9, xf1, xf2, delay_scale]
    Output layout: FLUX_NAMES order
    """
    # Unpack parameters
    x1 = params_arr[0]
    x2 = params_arr[1]
    x3 = params_arr[2]
    x4 = params_arr[3]
    x5 = params_arr[4]
    x6 = params_arr[5]
    x7 = params_arr[6]
    x8 = params_arr[7]
    # x9 is not used in step (only for the buffer length, fixed at setup)
    xf1 = params_arr[9]
    xf2 = params_arr[10]
    delay_scale = params_arr[11]

    # 1. Interception store (S)
    s, es, er, is_ = interception_store_update(state_arr[0], precip, pet, xf1)

    # 2. Soil store (T), throttled by R at the start of the step
    t, it, qt1, et, ez, qt0 = soil_store_update(state_arr[1], is_, er, state_arr[2], x2, x4, x5, x6)

    # 3. Groundwater stores (L and R)
    l_store, r, il, el, ir, qr = groundwater_update(state_arr[3], state_arr[2], it, ez, x2, x3, x7, x8, xf1, xf2)

    # 4. Direct routing store (M)
    m, qm = direct_routing_update(state_arr[4], qt0, x1)

    # 5. Delay buffer and total discharge
    routed_flow = qr + qm + qt1
    new_buffer, streamflow = shift_delay_buffer(state_arr[_STORE_COUNT:], routed_flow, delay_scale)

    # Update state array in place
    state_arr[0] = s
    state_arr[1] = t
    state_arr[2] = r
    state_arr[3] = l_store
    state_arr[4] = m
    for k in range(len(new_buffer)):
        state_arr[_STORE_COUNT + k] = new_buffer[k]

    # Write outputs
    output_arr[0] = pet
    output_arr[1] = precip
    output_arr[2] = s
    output_arr[3] = es
    output_arr[4] = is_
    output_arr[5] = t
    output_arr[6] = it
    output_arr[7] = qt1
    output_arr[8] = et
    output_arr[9] = ez
    output_arr[10] = qt0
    output_arr[11] = r
    output_arr[12] = l_store
    output_arr[13] = il
    output_arr[14] = el
    output_arr[15] = ir
    output_arr[16] = qr
    output_arr[17] = m
    output_arr[18] = qm
    output_arr[19] = routed_flow
    output_arr[20] = streamflow


@njit(cache=True)
def _run_numba(
    state_arr: np.ndarray,  # shape (5 + n_delay,)
    params_arr: np.ndarray,  # shape (12,)
    precip_arr: np.ndarray,  # shape (n_timesteps,)
    pet_arr: np.ndarray,  # shape (n_timesteps,)
    outputs_arr: np.ndarray,  # shape (n_timesteps, 21)
) -> None:
    """Run the Sacramento model over a timeseries using arrays (Numba-optimized).

    State is modified in place. Outputs are written to outputs_arr.
    """
    n_timesteps = len(precip_arr)
    output_single = np.zeros(_N_FLUXES)

    for t in range(n_timesteps):
        _step_numba(
            state_arr,
            params_arr,
            precip_arr[t],
            pet_arr[t],
            output_single,
        )
        for i in range(_N_FLUXES):
            outputs_arr[t, i] = output_single[i]


def validate(state: State, params: Parameters) -> None:
    """Check that a state and parameter set can be stepped.

    Args:
        state: Model state to be advanced.
        params: Model parameters.

    Raises:
        DomainError: If a divisor parameter is not strictly positive, or the
            overflow thresholds sum to zero or less.
        ConfigError: If the delay buffer length from x9 is invalid, or the
            state's delay buffer has a different length.
    """
    for name in DIVISOR_PARAMS:
        value = getattr(params, name)
        if not value > 0.0:
            msg = f"Parameter {name}={value} is used as a divisor and must be strictly positive"
            raise DomainError(msg)

    threshold_sum = params.xf1 + params.xf2
    if not threshold_sum > 0.0:
        msg = f"Overflow thresholds xf1 + xf2 = {threshold_sum} are used as a divisor and must be positive"
        raise DomainError(msg)

    expected = params.buffer_length
    if state.n_delay != expected:
        msg = (
            f"State delay buffer has {state.n_delay} slots but x9={params.x9} "
            f"('{params.delay_rounding}' rounding) requires {expected}"
        )
        raise ConfigError(msg)


def _clamp_negative(name: str, values: np.ndarray) -> np.ndarray:
    """Replace negative forcing values with zero, logging how many were changed."""
    negative = values < 0.0
    n_negative = int(np.count_nonzero(negative))
    if n_negative:
        logger.warning("Clamped %d negative %s value(s) to 0.0", n_negative, name)
        values = np.where(negative, 0.0, values)
    return values


def step(
    state: State,
    params: Parameters,
    precip: float,
    pet: float,
) -> tuple[State, dict[str, float]]:
    """Execute one timestep of the Sacramento model.

    Implements the complete algorithm:
    1. Interception store update (evaporation and overflow)
    2. Soil store update (infiltration, interflow, evaporation, overflow)
    3. Groundwater split between L and R, with deep loss and L correction
    4. Direct routing store update
    5. Delay buffer shift and total discharge

    Negative precip or pet are clamped to 0.0 with a warning. NaN and infinite
    forcing values are passed through unchanged.

    Args:
        state: Current model state (stores and delay buffer). Not modified.
        params: Model parameters.
        precip: Precipitation for the interval [mm].
        pet: Potential evapotranspiration for the interval [mm].

    Returns:
        Tuple of (new_state, fluxes) where:
        - new_state: Updated State object after the timestep
        - fluxes: Dictionary of all model outputs, keyed by FLUX_NAMES.
          fluxes["streamflow"] is the simulated discharge.

    Raises:
        DomainError: If a divisor parameter is zero or negative.
        ConfigError: If the delay buffer does not match params.buffer_length.
    """
    validate(state, params)

    precip = float(_clamp_negative("precip", np.array([precip], dtype=np.float64))[0])
    pet = float(_clamp_negative("pet", np.array([pet], dtype=np.float64))[0])

    # Work on a copy so the caller's state survives unchanged
    state_arr = np.asarray(state).copy()
    params_arr = np.asarray(params)
    output_arr = np.zeros(N_FLUXES)

    _step_numba(state_arr, params_arr, precip, pet, output_arr)

    new_state = State.from_array(state_arr)
    fluxes: dict[str, float] = {name: float(output_arr[i]) for i, name in enumerate(FLUX_NAMES)}

    return new_state, fluxes


def run(
    params: Parameters,
    forcing: ForcingData,
    initial_state: State | None = None,
) -> ModelOutput:
    """Run the Sacramento model over a timeseries.

    Executes the model for each timestep in the input forcing data, threading
    the state from one step to the next.

    Args:
        params: Model parameters.
        forcing: Input forcing data with precip and pet arrays.
        initial_state: Initial model state. If None, uses State.initialize(params).
            Not modified.

    Returns:
        ModelOutput with all fluxes and the final state.
        Access streamflow via result.streamflow (numpy array).
        Convert to DataFrame via result.to_dataframe().

    Raises:
        DomainError: If a divisor parameter is zero or negative.
        ConfigError: If the delay buffer does not match params.buffer_length.

    Example:
        >>> params = Parameters(x1=10, x2=50, x3=5, x4=20, x5=4, x6=3, x7=0.3, x8=1, x9=2, xf1=5, xf2=10)
        >>> forcing = ForcingData(
        ...     time=np.array(['2020-01-01', '2020-01-02', '2020-01-03'], dtype='datetime64'),
        ...     precip=np.array([10.0, 5.0, 0.0]),
        ...     pet=np.array([2.0, 3.0, 4.0]),
        ... )
        >>> result = run(params, forcing)
        >>> result.streamflow
        array([...])
    """
    state = State.initialize(params) if initial_state is None else initial_state
    validate(state, params)

    precip = _clamp_negative("precip", forcing.precip.astype(np.float64))
    pet = _clamp_negative("pet", forcing.pet.astype(np.float64))

    state_arr = np.asarray(state).copy()
    params_arr = np.asarray(params)
    n_timesteps = len(forcing)

    outputs_arr = np.zeros((n_timesteps, N_FLUXES), dtype=np.float64)

    _run_numba(state_arr, params_arr, precip, pet, outputs_arr)

    logger.debug("Ran %d timesteps with %d-slot delay buffer", n_timesteps, state.n_delay)

    fluxes = SacramentoFluxes(**{name: outputs_arr[:, i] for i, name in enumerate(FLUX_NAMES)})

    return ModelOutput(
        time=forcing.time,
        fluxes=fluxes,
        final_state=State.from_array(state_arr),
    )
