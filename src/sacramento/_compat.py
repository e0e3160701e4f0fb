"""NumPy/Numba compatibility shim.

Numba still resolves a handful of NumPy aliases that NumPy 2.0 removed. Any
module that imports numba must import this module first so the aliases are
back in place by the time Numba loads its NumPy extensions.
"""

import numpy as np

# Removed alias -> current NumPy name
_REMOVED_ALIASES: dict[str, str] = {
    "trapz": "trapezoid",
    "in1d": "isin",
    "product": "prod",
    "cumproduct": "cumprod",
    "sometrue": "any",
    "alltrue": "all",
}


def _restore_aliases() -> None:
    for alias, current in _REMOVED_ALIASES.items():
        if hasattr(np, alias) or not hasattr(np, current):
            continue
        setattr(np, alias, getattr(np, current))


_restore_aliases()
