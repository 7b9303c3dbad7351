# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
Backend and Precision Types

Defines types related to:
- Array backends accepted at the component boundary (NumPy, PyTorch, JAX)
- Scalar precision (the real field every component computes in)
- Validation helpers for both

NumPy is the computational backend of every component. PyTorch tensors
and JAX arrays are accepted as inputs and results are handed back in the
caller's backend.

Usage
-----
>>> from haptic_toolbox.types.backends import Backend, validate_dtype
>>>
>>> dtype = validate_dtype('float32')  # np.dtype('float32')
"""

from typing import Any, Literal, NamedTuple, Optional, Union

import numpy as np

# ============================================================================
# Backend Types
# ============================================================================

Backend = Literal["numpy", "torch", "jax"]
"""
Backend identifier of an array crossing the component boundary.

Valid values:
- 'numpy': NumPy arrays (native, no conversion)
- 'torch': PyTorch tensors (converted to NumPy on entry, back on exit)
- 'jax': JAX arrays (converted to NumPy on entry, back on exit)

Examples
--------
>>> backend: Backend = 'torch'
>>> mgr.convert(x, backend)
"""

Precision = Literal["float32", "float64"]
"""
Name of the scalar field a component computes in.

- 'float32': single precision (embedded targets, GPU pipelines)
- 'float64': double precision (default)
"""

DTypeLike = Union[Precision, np.dtype, type]
"""Anything validate_dtype() accepts: a name, np.dtype or scalar type."""


class SampleOrigin(NamedTuple):
    """
    Where a sample came from, so a result can be handed back in kind.

    Attributes:
        backend: Backend of the sample
        device: torch.device or jax Device holding the sample, None for NumPy
    """

    backend: Backend
    device: Optional[Any] = None


# ============================================================================
# Constants - Valid Values
# ============================================================================

VALID_BACKENDS = ("numpy", "torch", "jax")
"""
Tuple of valid backend names.

Use for validation:
>>> if backend not in VALID_BACKENDS:
...     raise ValueError(f"Invalid backend: {backend}")
"""

VALID_PRECISIONS = ("float32", "float64")
"""Tuple of supported scalar field names."""

DEFAULT_BACKEND: Backend = "numpy"
"""
Default backend if not specified.

NumPy is default because it is the only required dependency.
"""

DEFAULT_DTYPE = np.float64
"""
Default numerical precision.

Float64 is default: energy bookkeeping in passivity controllers
accumulates over thousands of ticks and rounding drift matters.
"""


# ============================================================================
# Validation Utilities
# ============================================================================


def validate_backend(backend: str) -> Backend:
    """
    Validate and normalize backend string.

    Parameters
    ----------
    backend : str
        Backend name to validate

    Returns
    -------
    Backend
        Validated backend (typed)

    Raises
    ------
    ValueError
        If backend is not valid

    Examples
    --------
    >>> validate_backend('numpy')
    'numpy'
    >>> validate_backend('pytorch')  # ValueError
    """
    if backend not in VALID_BACKENDS:
        raise ValueError(f"Invalid backend '{backend}'. " f"Choose from: {VALID_BACKENDS}")
    return backend


def validate_dtype(dtype: DTypeLike) -> np.dtype:
    """
    Validate a scalar field specification.

    Parameters
    ----------
    dtype : DTypeLike
        'float32', 'float64', np.float32, np.float64 or an equivalent np.dtype

    Returns
    -------
    np.dtype
        Normalized NumPy dtype

    Raises
    ------
    ValueError
        If dtype is not a supported real floating type

    Examples
    --------
    >>> validate_dtype('float32')
    dtype('float32')
    >>> validate_dtype(np.float64)
    dtype('float64')
    >>> validate_dtype('int32')  # ValueError
    """
    try:
        normalized = np.dtype(dtype)
    except TypeError as e:
        raise ValueError(f"Invalid dtype {dtype!r}. Choose from: {VALID_PRECISIONS}") from e

    if normalized.name not in VALID_PRECISIONS:
        raise ValueError(
            f"Invalid dtype '{normalized.name}'. Choose from: {VALID_PRECISIONS}"
        )
    return normalized


__all__ = [
    "Backend",
    "Precision",
    "DTypeLike",
    "VALID_BACKENDS",
    "VALID_PRECISIONS",
    "DEFAULT_BACKEND",
    "DEFAULT_DTYPE",
    "validate_backend",
    "validate_dtype",
]
