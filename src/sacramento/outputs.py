"""Sacramento model outputs.

This module provides dataclasses for organizing and accessing model outputs:
- StepDiagnostics: the eleven intermediate values of a single step
- FlowComponents: the fifteen-slot flow component breakdown of a single step
- SacramentoFluxes: every flux of a simulation, one array per flux
- ModelOutput: a simulation result with time index and final state
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from .model.constants import FLOW_COMPONENT_NAMES, INTERNAL_NAMES, N_FLOW_COMPONENTS

if TYPE_CHECKING:
    from .model.types import State


@dataclass(frozen=True)
class StepDiagnostics:
    """Intermediate storages and fluxes after one step.

    Field order matches the diagnostic vector [S T R L M Is It Qt0 Qt1 Qr Qm].

    Attributes:
        interception_store: S after the step [mm].
        soil_store: T after the step [mm].
        ground_store: R after the step [mm].
        ground_routing_store: L after the step [mm].
        direct_routing_store: M after the step [mm].
        interception_overflow: Is, overflow from S into T [mm].
        infiltration: It, infiltration from T to groundwater [mm].
        soil_overflow: Qt0, overflow from T into M [mm].
        quick_interflow: Qt1, hypodermic flow from T [mm].
        ground_discharge: Qr, discharge from R [mm].
        direct_discharge: Qm, discharge from M [mm].
    """

    interception_store: float
    soil_store: float
    ground_store: float
    ground_routing_store: float
    direct_routing_store: float
    interception_overflow: float
    infiltration: float
    soil_overflow: float
    quick_interflow: float
    ground_discharge: float
    direct_discharge: float

    @classmethod
    def from_fluxes(cls, fluxes: dict[str, float]) -> StepDiagnostics:
        """Pick the diagnostic values out of a step() flux dictionary."""
        return cls(**{name: float(fluxes[name]) for name in INTERNAL_NAMES})

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Layout: [S, T, R, L, M, Is, It, Qt0, Qt1, Qr, Qm] (11 elements)"""
        arr = np.array([getattr(self, name) for name in INTERNAL_NAMES], dtype=np.float64)
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr


@dataclass(frozen=True)
class FlowComponents:
    """Flow component breakdown of one step.

    The layout is shared with the wider multi-path model family. This model
    only has three routed paths, so most slots are always zero:

    - qs1: quick interflow Qt1; qs = qs1 + qs2
    - qrs1: direct routing discharge Qm; qrs = qrs1 + qrs2
    - qn: ground discharge Qr
    - qsf, qs2, qrs2, qss1, qss2, qss, qrss1, qrss2, qrss, qr: always 0.0
    """

    qsf: float
    qs1: float
    qs2: float
    qs: float
    qrs1: float
    qrs2: float
    qrs: float
    qss1: float
    qss2: float
    qss: float
    qrss1: float
    qrss2: float
    qrss: float
    qn: float
    qr: float

    @classmethod
    def from_routed(cls, quick_interflow: float, direct_discharge: float, ground_discharge: float) -> FlowComponents:
        """Build the breakdown from the three routed fluxes Qt1, Qm and Qr."""
        qs1, qs2 = quick_interflow, 0.0
        qrs1, qrs2 = direct_discharge, 0.0
        qss1, qss2 = 0.0, 0.0
        qrss1, qrss2 = 0.0, 0.0
        return cls(
            qsf=0.0,
            qs1=qs1,
            qs2=qs2,
            qs=qs1 + qs2,
            qrs1=qrs1,
            qrs2=qrs2,
            qrs=qrs1 + qrs2,
            qss1=qss1,
            qss2=qss2,
            qss=qss1 + qss2,
            qrss1=qrss1,
            qrss2=qrss2,
            qrss=qrss1 + qrss2,
            qn=ground_discharge,
            qr=0.0,
        )

    @classmethod
    def from_fluxes(cls, fluxes: dict[str, float]) -> FlowComponents:
        """Build the breakdown from a step() flux dictionary."""
        return cls.from_routed(
            float(fluxes["quick_interflow"]),
            float(fluxes["direct_discharge"]),
            float(fluxes["ground_discharge"]),
        )

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Layout: FLOW_COMPONENT_NAMES order (15 elements)"""
        arr = np.array([getattr(self, name) for name in FLOW_COMPONENT_NAMES], dtype=np.float64)
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr


@dataclass(frozen=True)
class SacramentoFluxes:
    """Sacramento model flux outputs as arrays.

    All arrays have the same length as the input forcing data. Storage levels
    are values after each timestep.

    Attributes:
        pet: Potential evapotranspiration input [mm].
        precip: Precipitation input [mm].
        interception_store: S - interception store level [mm].
        interception_evaporation: Es - evaporation from interception [mm].
        interception_overflow: Is - overflow from S into T [mm].
        soil_store: T - soil store level [mm].
        infiltration: It - infiltration from T to groundwater [mm].
        quick_interflow: Qt1 - hypodermic flow from T [mm].
        soil_evaporation: Et - evaporation from T [mm].
        residual_demand: Ez - evaporative demand left unmet [mm].
        soil_overflow: Qt0 - overflow from T into M [mm].
        ground_store: R - ground store level [mm].
        ground_routing_store: L - ground routing store level [mm].
        ground_overflow: Il - overflow from L into R [mm].
        deep_loss: El - loss taken from L [mm].
        ground_reclaim: Ir - water moved from R back to L [mm].
        ground_discharge: Qr - ground discharge after deep percolation [mm].
        direct_routing_store: M - direct routing store level [mm].
        direct_discharge: Qm - discharge from M [mm].
        routed_flow: Qr + Qm + Qt1 entering the delay buffer [mm].
        streamflow: Simulated discharge leaving the delay buffer [mm].
    """

    pet: np.ndarray
    precip: np.ndarray
    interception_store: np.ndarray
    interception_evaporation: np.ndarray
    interception_overflow: np.ndarray
    soil_store: np.ndarray
    infiltration: np.ndarray
    quick_interflow: np.ndarray
    soil_evaporation: np.ndarray
    residual_demand: np.ndarray
    soil_overflow: np.ndarray
    ground_store: np.ndarray
    ground_routing_store: np.ndarray
    ground_overflow: np.ndarray
    deep_loss: np.ndarray
    ground_reclaim: np.ndarray
    ground_discharge: np.ndarray
    direct_routing_store: np.ndarray
    direct_discharge: np.ndarray
    routed_flow: np.ndarray
    streamflow: np.ndarray

    def to_dict(self) -> dict[str, np.ndarray]:
        """Convert to dictionary of arrays.

        Returns:
            Dictionary mapping field names to their numpy array values.
        """
        return {field.name: getattr(self, field.name) for field in fields(self)}

    def flow_components(self) -> np.ndarray:
        """Flow component breakdown for every timestep.

        Returns:
            Array of shape (n_timesteps, 15) in FLOW_COMPONENT_NAMES order.
            See FlowComponents for which slots are populated.
        """
        out = np.zeros((len(self.streamflow), N_FLOW_COMPONENTS), dtype=np.float64)
        idx = {name: i for i, name in enumerate(FLOW_COMPONENT_NAMES)}
        out[:, idx["qs1"]] = self.quick_interflow
        out[:, idx["qs"]] = self.quick_interflow
        out[:, idx["qrs1"]] = self.direct_discharge
        out[:, idx["qrs"]] = self.direct_discharge
        out[:, idx["qn"]] = self.ground_discharge
        return out


@dataclass(frozen=True)
class ModelOutput:
    """Result of a Sacramento simulation.

    Attributes:
        time: Timestamps of the forcing data.
        fluxes: All model fluxes and storage levels as arrays.
        final_state: State after the last timestep, for warm starts.
    """

    time: np.ndarray
    fluxes: SacramentoFluxes
    final_state: State

    @property
    def streamflow(self) -> np.ndarray:
        """Simulated streamflow [mm]."""
        return self.fluxes.streamflow

    def __len__(self) -> int:
        return len(self.time)

    def to_dataframe(self, include_flow_components: bool = False) -> pd.DataFrame:
        """Convert outputs to a DataFrame indexed by time.

        Args:
            include_flow_components: Also add one column per flow component,
                prefixed with "component_".

        Returns:
            DataFrame with one column per flux.
        """
        df = pd.DataFrame(self.fluxes.to_dict(), index=pd.DatetimeIndex(self.time, name="time"))
        if include_flow_components:
            components = self.fluxes.flow_components()
            for i, name in enumerate(FLOW_COMPONENT_NAMES):
                df[f"component_{name}"] = components[:, i]
        return df
