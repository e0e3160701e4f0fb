"""Sacramento model constants.

Parameter names, typical calibration ranges, and the canonical layouts of the
state, parameter and output arrays exchanged with the Numba kernels.
"""

# Model parameter names in canonical order
PARAM_NAMES: tuple[str, ...] = (
    "x1",
    "x2",
    "x3",
    "x4",
    "x5",
    "x6",
    "x7",
    "x8",
    "x9",
)

# Typical calibration ranges, used for warnings only
DEFAULT_BOUNDS: dict[str, tuple[float, float]] = {
    "x1": (1.0, 100.0),  # Routing reservoir capacity [-]
    "x2": (1.0, 1000.0),  # Ground reservoir capacity [mm]
    "x3": (1.0, 1000.0),  # Ground reservoir emptying constant [-]
    "x4": (1.0, 1000.0),  # Percolation coefficient [mm]
    "x5": (0.0, 100.0),  # Infiltration constant [mm]
    "x6": (1.0, 100.0),  # Hypodermic flow emptying constant [-]
    "x7": (0.0, 1.0),  # Partitioning coefficient [-]
    "x8": (1.0, 10.0),  # Deep percolation coefficient [-]
    "x9": (0.5, 20.0),  # Delay [time steps]
}

# Parameters that appear as divisors in the water balance
DIVISOR_PARAMS: tuple[str, ...] = ("x1", "x2", "x3", "x4", "x6", "x8")

# Rounding modes for converting the delay x9 to a buffer length
DELAY_ROUNDINGS: tuple[str, ...] = ("ceil", "round", "floor")

# Storage levels in state-array order: S, T, R, L, M
STORE_NAMES: tuple[str, ...] = (
    "interception_store",
    "soil_store",
    "ground_store",
    "ground_routing_store",
    "direct_routing_store",
)
STORE_COUNT: int = len(STORE_NAMES)

# Parameter array: 9 model parameters + xf1, xf2, delay scale
PARAMS_SIZE: int = 12

# Outputs written by the step kernel, in array order
FLUX_NAMES: tuple[str, ...] = (
    "pet",
    "precip",
    "interception_store",  # S
    "interception_evaporation",  # Es
    "interception_overflow",  # Is
    "soil_store",  # T
    "infiltration",  # It
    "quick_interflow",  # Qt1
    "soil_evaporation",  # Et
    "residual_demand",  # Ez
    "soil_overflow",  # Qt0
    "ground_store",  # R
    "ground_routing_store",  # L
    "ground_overflow",  # Il
    "deep_loss",  # El
    "ground_reclaim",  # Ir
    "ground_discharge",  # Qr
    "direct_routing_store",  # M
    "direct_discharge",  # Qm
    "routed_flow",  # Qr + Qm + Qt1
    "streamflow",  # Qsim
)
N_FLUXES: int = len(FLUX_NAMES)

# Intermediate values exposed as step diagnostics: S T R L M Is It Qt0 Qt1 Qr Qm
INTERNAL_NAMES: tuple[str, ...] = (
    "interception_store",
    "soil_store",
    "ground_store",
    "ground_routing_store",
    "direct_routing_store",
    "interception_overflow",
    "infiltration",
    "soil_overflow",
    "quick_interflow",
    "ground_discharge",
    "direct_discharge",
)

# Flow component breakdown shared with the wider multi-path model family
FLOW_COMPONENT_NAMES: tuple[str, ...] = (
    "qsf",
    "qs1",
    "qs2",
    "qs",
    "qrs1",
    "qrs2",
    "qrs",
    "qss1",
    "qss2",
    "qss",
    "qrss1",
    "qrss2",
    "qrss",
    "qn",
    "qr",
)
N_FLOW_COMPONENTS: int = len(FLOW_COMPONENT_NAMES)
