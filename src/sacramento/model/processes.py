"""Sacramento storage update functions.

One function per reservoir, applied in this order by the step kernel:
interception (S), soil (T), groundwater (L and R), direct routing (M).
Each takes the storage level before the update and returns the level after it
together with the fluxes it produced. Clamp placement is part of the water
balance; moving a single min/max changes the results.
"""

# ruff: noqa: I001
# Import order matters: _compat must patch numpy before numba import
import sacramento._compat  # noqa: F401

from numba import njit


@njit(cache=True)
def interception_store_update(
    interception_store: float, precip: float, pet: float, xf1: float
) -> tuple[float, float, float, float]:
    """Update the interception store S.

    Rain fills S, evaporation is taken from S first, and anything above the
    overflow threshold infiltrates into the soil.

    Args:
        interception_store: S before the step [mm].
        precip: Precipitation [mm].
        pet: Potential evapotranspiration [mm].
        xf1: Interception overflow threshold [mm].

    Returns:
        Tuple of (new_store, es, er, is_):
        - new_store: S after the step, at most xf1 [mm]
        - es: Evaporation from interception [mm]
        - er: Evaporative demand left for the soil [mm]
        - is_: Overflow into the soil store [mm]
    """
    s = interception_store + precip
    es = min(pet, s)
    s = s - es
    er = pet - es
    is_ = max(0.0, s - xf1)
    s = s - is_
    return s, es, er, is_


@njit(cache=True)
def soil_store_update(
    soil_store: float,
    inflow: float,
    residual_pet: float,
    ground_store: float,
    x2: float,
    x4: float,
    x5: float,
    x6: float,
) -> tuple[float, float, float, float, float, float]:
    """Update the soil store T.

    Infiltration to groundwater is throttled by how full the ground store
    already is and by T itself. The quick interflow, evaporation and overflow
    are then removed in that order.

    Args:
        soil_store: T before the step [mm].
        inflow: Interception overflow entering T [mm].
        residual_pet: Evaporative demand not met by interception [mm].
        ground_store: R at the start of the step [mm].
        x2: Ground reservoir capacity [mm].
        x4: Percolation coefficient (soil capacity) [mm].
        x5: Infiltration constant [mm].
        x6: Hypodermic flow emptying constant [-].

    Returns:
        Tuple of (new_store, it, qt1, et, ez, qt0):
        - new_store: T after the step, at most x4 [mm]
        - it: Infiltration into groundwater [mm]
        - qt1: Quick interflow [mm]
        - et: Evaporation from the soil [mm]
        - ez: Evaporative demand still unmet [mm]
        - qt0: Soil overflow to direct routing [mm]
    """
    t = soil_store + inflow

    it = max(0.0, min(t, x5 * (1.0 - ground_store / x2) * (t / x4)))
    t = t - it

    qt1 = t / x6
    t = t - qt1

    et = min(residual_pet * min(1.0, t / x4), t)
    t = t - et
    ez = residual_pet - et

    qt0 = max(0.0, t - x4)
    t = t - qt0

    return t, it, qt1, et, ez, qt0


@njit(cache=True)
def groundwater_update(
    ground_routing_store: float,
    ground_store: float,
    infiltration: float,
    unmet_demand: float,
    x2: float,
    x3: float,
    x7: float,
    x8: float,
    xf1: float,
    xf2: float,
) -> tuple[float, float, float, float, float, float]:
    """Update the ground routing store L and the ground store R.

    Infiltration is split between L and R. L spills into R above xf2, then
    loses the deep-loss term. A negative L takes back what it can from R's
    content above x2 - xf2 and is then floored at 0, so any deficit R cannot
    cover is dropped from the balance. R finally drains by R/x3, and the
    discharge is divided by the deep percolation coefficient.

    Args:
        ground_routing_store: L before the step [mm].
        ground_store: R before the step [mm].
        infiltration: Infiltration from the soil store [mm].
        unmet_demand: Evaporative demand left after soil evaporation [mm].
        x2: Ground reservoir capacity [mm].
        x3: Ground reservoir emptying constant [-].
        x7: Partitioning coefficient [-].
        x8: Deep percolation coefficient [-].
        xf1: Interception overflow threshold [mm].
        xf2: Groundwater overflow threshold [mm].

    Returns:
        Tuple of (new_l, new_r, il, el, ir, qr):
        - new_l: L after the step [mm]. Floored at 0 by the correction.
        - new_r: R after the step [mm]
        - il: Overflow from L into R [mm]
        - el: Deep loss taken from L [mm]
        - ir: Water moved from R back to L [mm]
        - qr: Ground discharge after the deep percolation divisor [mm]
    """
    l_store = ground_routing_store + x7 * infiltration
    il = max(0.0, l_store - xf2)
    l_store = l_store - il
    r_store = ground_store + (1.0 - x7) * infiltration + il

    # Applied unconditionally, corrected below
    el = unmet_demand / (xf1 + xf2)
    l_store = l_store - el

    ir = 0.0
    if l_store < 0.0:
        ir = min(-l_store, max(0.0, r_store - (x2 - xf2)))
        l_store = max(0.0, l_store + ir)
        r_store = r_store - ir

    qr = r_store / x3
    r_store = r_store - qr
    qr = qr / x8

    return l_store, r_store, il, el, ir, qr


@njit(cache=True)
def direct_routing_update(direct_routing_store: float, inflow: float, x1: float) -> tuple[float, float]:
    """Update the direct routing store M.

    Args:
        direct_routing_store: M before the step [mm].
        inflow: Soil overflow entering M [mm].
        x1: Routing reservoir capacity [-].

    Returns:
        Tuple of (new_store, qm):
        - new_store: M after the step [mm]
        - qm: Direct routing discharge [mm]
    """
    m = direct_routing_store + inflow
    qm = m / x1
    m = m - qm
    return m, qm
