"""Input validation utilities shared by the miners, containers and builders."""

from __future__ import annotations

from typing import Any

import numpy as np


def ensure_not_none(value: Any, name: str) -> None:
    if value is None:
        raise ValueError(f"`{name}` may not be None.")


def ensure_at_least(value: float, minimum: float, name: str) -> None:
    if value < minimum:
        raise ValueError(f"`{name}` must be at least {minimum}. Got {value}.")


def ensure_at_most(value: float, maximum: float, name: str) -> None:
    if value > maximum:
        raise ValueError(f"`{name}` must be at most {maximum}. Got {value}.")


def ensure_greater(value: float, minimum: float, name: str) -> None:
    if value <= minimum:
        raise ValueError(f"`{name}` must be greater than {minimum}. Got {value}.")


def ensure_unit_interval(value: float, name: str) -> None:
    """Raise ``ValueError`` unless *value* lies within ``[0, 1]``."""
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"`{name}` must be a number within the interval `[0, 1]`. Got {value}.")


def valid_one_hot_check(values: np.ndarray) -> None:
    """Validate a one-hot / boolean matrix before turning its rows into transactions.

    Parameters
    ----------
    values:
        2-D array.  Allowed values: 0/1 or True/False.
    """
    if values.ndim != 2:
        raise ValueError(f"One-hot input must be 2-D, got shape {values.shape}")

    if values.size == 0 or values.dtype == np.bool_:
        return

    idxs = np.where((values != 1) & (values != 0))
    if len(idxs[0]) > 0:
        val = values[tuple(loc[0] for loc in idxs)]
        raise ValueError("The allowed values for a DataFrame are True, False, 0, 1. Found value %s" % (val,))
