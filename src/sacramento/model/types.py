"""Sacramento data structures for parameters and state variables.

This module defines the core data types used by the Sacramento model:
- Parameters: The 9 calibrated parameters plus thresholds and delay settings
- State: The five storage levels and the delay buffer tracked during simulation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .constants import DEFAULT_BOUNDS, PARAMS_SIZE, STORE_COUNT
from .delay import buffer_length

logger = logging.getLogger(__name__)


def _warn_if_outside_bounds(params: Parameters) -> None:
    """Log warnings for parameters outside typical calibration ranges.

    This does not raise errors - divisor checks happen when the model runs.
    """
    for name, (lower, upper) in DEFAULT_BOUNDS.items():
        value = getattr(params, name)
        if value < lower or value > upper:
            logger.warning(
                "Parameter %s=%.4f is outside typical range [%.2f, %.2f]",
                name,
                value,
                lower,
                upper,
            )


@dataclass(frozen=True)
class Parameters:
    """Sacramento calibrated parameters.

    The 9 calibrated parameters, the two overflow thresholds, and the delay
    buffer settings. This is a frozen dataclass to prevent accidental
    modification during simulation.

    Attributes:
        x1: Routing reservoir capacity [-]. Direct routing store empties at M/x1.
        x2: Ground reservoir capacity [mm].
        x3: Emptying constant of the ground reservoir [-].
        x4: Percolation coefficient [mm]. Also the soil store capacity.
        x5: Infiltration constant [mm].
        x6: Emptying constant of the hypodermic flow [-].
        x7: Partitioning coefficient [-]. Fraction of infiltration sent to L.
        x8: Deep percolation coefficient [-]. Divides ground discharge.
        x9: Delay [time steps]. Converted to the delay buffer length.
        xf1: Interception overflow threshold [mm].
        xf2: Groundwater overflow threshold [mm].
        delay_scale: Fraction of each step's routed flow added to every delay
            buffer slot. None uses 1 / buffer_length, which releases the
            routed flow evenly over the buffer.
        delay_rounding: How x9 becomes a buffer length: "ceil", "round"
            (halves up) or "floor".
    """

    x1: float  # Routing reservoir capacity [-]
    x2: float  # Ground reservoir capacity [mm]
    x3: float  # Ground reservoir emptying constant [-]
    x4: float  # Percolation coefficient [mm]
    x5: float  # Infiltration constant [mm]
    x6: float  # Hypodermic flow emptying constant [-]
    x7: float  # Partitioning coefficient [-]
    x8: float  # Deep percolation coefficient [-]
    x9: float  # Delay [time steps]
    xf1: float  # Interception overflow threshold [mm]
    xf2: float  # Groundwater overflow threshold [mm]
    delay_scale: float | None = None
    delay_rounding: str = "ceil"

    BOUNDS: ClassVar[dict[str, tuple[float, float]]] = DEFAULT_BOUNDS

    def __post_init__(self) -> None:
        """Warn if calibrated parameters are outside typical ranges."""
        _warn_if_outside_bounds(self)

    @property
    def buffer_length(self) -> int:
        """Delay buffer length derived from x9.

        Raises:
            ConfigError: If x9 does not give a positive integer length.
        """
        return buffer_length(self.x9, self.delay_rounding)

    @property
    def effective_delay_scale(self) -> float:
        """Delay scale used by the kernel, resolving the None default."""
        if self.delay_scale is None:
            return 1.0 / self.buffer_length
        return float(self.delay_scale)

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert parameters to a 1D array for array protocol.

        Layout: [x1, ..., x9, xf1, xf2, delay_scale] (12 elements)
        """
        arr = np.array(
            [
                self.x1,
                self.x2,
                self.x3,
                self.x4,
                self.x5,
                self.x6,
                self.x7,
                self.x8,
                self.x9,
                self.xf1,
                self.xf2,
                self.effective_delay_scale,
            ],
            dtype=np.float64,
        )
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(
        cls,
        arr: np.ndarray,
        delay_rounding: str = "ceil",
        keep_delay_scale: bool = True,
    ) -> Parameters:
        """Reconstruct Parameters from array.

        The array carries neither the rounding mode nor whether the delay
        scale was left at its default, so both are chosen here.

        Args:
            arr: 12-element array in the __array__ layout.
            delay_rounding: Rounding mode of the rebuilt parameters.
            keep_delay_scale: If True, element 11 becomes a fixed delay_scale.
                If False, delay_scale is None and follows the buffer length.
        """
        if len(arr) != PARAMS_SIZE:
            msg = f"Parameter array must have {PARAMS_SIZE} elements, got {len(arr)}"
            raise ValueError(msg)
        return cls(
            x1=float(arr[0]),
            x2=float(arr[1]),
            x3=float(arr[2]),
            x4=float(arr[3]),
            x5=float(arr[4]),
            x6=float(arr[5]),
            x7=float(arr[6]),
            x8=float(arr[7]),
            x9=float(arr[8]),
            xf1=float(arr[9]),
            xf2=float(arr[10]),
            delay_scale=float(arr[11]) if keep_delay_scale else None,
            delay_rounding=delay_rounding,
        )


@dataclass
class State:
    """Sacramento model state variables.

    Mutable state owned by the caller and threaded through every step. Each
    simulation (ensemble member, calibration trial) needs its own instance.

    Attributes:
        interception_store: S - interception reservoir level [mm].
        soil_store: T - soil reservoir level [mm].
        ground_store: R - ground reservoir level [mm].
        ground_routing_store: L - ground routing reservoir level [mm].
        direct_routing_store: M - direct routing reservoir level [mm].
        delay_buffer: HY - discharge in transit, one slot per future step [mm].
    """

    interception_store: float  # S [mm]
    soil_store: float  # T [mm]
    ground_store: float  # R [mm]
    ground_routing_store: float  # L [mm]
    direct_routing_store: float  # M [mm]
    delay_buffer: np.ndarray  # HY, length fixed by Parameters.buffer_length

    @classmethod
    def initialize(cls, params: Parameters) -> State:
        """Create a cold-start state: all stores and the delay buffer at zero.

        Args:
            params: Model parameters, used for the delay buffer length.

        Returns:
            Initialized State object ready for simulation.

        Raises:
            ConfigError: If x9 does not give a positive integer buffer length.
        """
        return cls(
            interception_store=0.0,
            soil_store=0.0,
            ground_store=0.0,
            ground_routing_store=0.0,
            direct_routing_store=0.0,
            delay_buffer=np.zeros(params.buffer_length, dtype=np.float64),
        )

    @property
    def n_delay(self) -> int:
        """Number of slots in the delay buffer."""
        return len(self.delay_buffer)

    def copy(self) -> State:
        """Return an independent copy, e.g. to seed another ensemble member."""
        return State.from_array(np.asarray(self))

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert state to a 1D array for array protocol.

        Layout: [S, T, R, L, M, delay_buffer...]
        Total: 5 + n_delay elements
        """
        arr = np.empty(STORE_COUNT + self.n_delay, dtype=np.float64)
        arr[0] = self.interception_store
        arr[1] = self.soil_store
        arr[2] = self.ground_store
        arr[3] = self.ground_routing_store
        arr[4] = self.direct_routing_store
        arr[STORE_COUNT:] = self.delay_buffer
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> State:
        """Reconstruct State from array. Everything past the stores is the delay buffer."""
        return cls(
            interception_store=float(arr[0]),
            soil_store=float(arr[1]),
            ground_store=float(arr[2]),
            ground_routing_store=float(arr[3]),
            direct_routing_store=float(arr[4]),
            delay_buffer=np.array(arr[STORE_COUNT:], dtype=np.float64),
        )
