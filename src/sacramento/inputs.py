"""Input data structures for the Sacramento model."""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class ForcingData(BaseModel):
    """Areal forcing time series.

    Validated on construction: arrays are coerced to datetime64[ns] and
    float64, must be 1D, and must all have the same length.

    Attributes:
        time: Timestamps, datetime64 array.
        precip: Mean areal precipitation per interval [mm].
        pet: Mean areal potential evapotranspiration per interval [mm].
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    time: np.ndarray
    precip: np.ndarray
    pet: np.ndarray

    @field_validator("time", mode="before")
    @classmethod
    def _coerce_time(cls, value: Any) -> np.ndarray:
        arr = np.asarray(value, dtype="datetime64[ns]")
        if arr.ndim != 1:
            msg = f"time array must be 1D, got shape {arr.shape}"
            raise ValueError(msg)
        return arr

    @field_validator("precip", "pet", mode="before")
    @classmethod
    def _coerce_series(cls, value: Any) -> np.ndarray:
        arr = np.asarray(value, dtype=np.float64)
        if arr.ndim != 1:
            msg = f"array must be 1D, got shape {arr.shape}"
            raise ValueError(msg)
        return arr

    @model_validator(mode="after")
    def _check_lengths(self) -> ForcingData:
        n = len(self.time)
        for name in ("precip", "pet"):
            length = len(getattr(self, name))
            if length != n:
                msg = f"{name} length {length} does not match time length {n}"
                raise ValueError(msg)
        return self

    def __len__(self) -> int:
        return len(self.time)
