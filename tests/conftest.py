"""Shared fixtures for the Sacramento test suite."""

import pytest

from sacramento import Parameters, State


@pytest.fixture
def reference_params() -> Parameters:
    """Round-number parameters used for the hand-computed reference step."""
    return Parameters(
        x1=10.0,  # Routing reservoir capacity
        x2=50.0,  # Ground reservoir capacity [mm]
        x3=5.0,  # Ground reservoir emptying constant
        x4=20.0,  # Percolation coefficient [mm]
        x5=4.0,  # Infiltration constant [mm]
        x6=3.0,  # Hypodermic flow emptying constant
        x7=0.3,  # Partitioning coefficient
        x8=1.0,  # Deep percolation coefficient
        x9=2.0,  # Delay [time steps]
        xf1=5.0,  # Interception overflow threshold [mm]
        xf2=10.0,  # Groundwater overflow threshold [mm]
    )


@pytest.fixture
def zero_state(reference_params: Parameters) -> State:
    """Cold-start state for the reference parameters."""
    return State.initialize(reference_params)
