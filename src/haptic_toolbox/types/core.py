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
Core Types - Fundamental Building Blocks

Defines the basic types used throughout the toolbox:
- Multi-backend array types (NumPy, PyTorch, JAX)
- Scalar types
- Semantic vector types (force, velocity, position, wave)

Every vector in the toolbox is a fixed-dimension 1-D array of shape
(dim,). The dimension is a property of the component instance (1 for a
scalar channel, 3 for a spatial force/velocity, 6 for a wrench/twist)
and never changes over its lifetime.

Usage
-----
>>> from haptic_toolbox.types.core import ForceVector, VelocityVector
>>>
>>> def power(f: ForceVector, v: VelocityVector) -> float:
...     return float(f @ v)
"""

from typing import TYPE_CHECKING, Sequence, Union

import numpy as np

if TYPE_CHECKING:
    import jax.numpy as jnp
    import torch


# ============================================================================
# Basic Array Types - Multi-Backend Support
# ============================================================================

ArrayLike = Union[np.ndarray, "torch.Tensor", "jnp.ndarray"]
"""
Array-like type supporting multiple backends.

Can be NumPy array, PyTorch tensor, or JAX array.
"""

NumpyArray = np.ndarray
"""Pure NumPy array."""

ScalarLike = Union[float, int, np.floating, np.integer]
"""
Real scalar value (gain, threshold, impedance, time step).

Stored internally as a NumPy scalar of the component's dtype.
"""

VectorLike = Union[ArrayLike, Sequence[float], float]
"""
Anything a component accepts as a vector sample.

A plain float is accepted by one-dimensional components.
"""


# ============================================================================
# Semantic Vector Types
# ============================================================================

Vector = np.ndarray
"""Fixed-dimension vector, shape (dim,)."""

ForceVector = np.ndarray
"""
Force (or torque/wrench) sample, shape (dim,).

Examples
--------
>>> f: ForceVector = np.array([0.0, 0.0, -9.81])
"""

VelocityVector = np.ndarray
"""Velocity (or twist) sample, shape (dim,)."""

PositionVector = np.ndarray
"""Position sample, shape (dim,)."""

WaveVector = np.ndarray
"""
Wave variable, shape (dim,).

Encodes a force/velocity pair for transmission over a delayed channel.
Units are sqrt(power).
"""


__all__ = [
    "ArrayLike",
    "NumpyArray",
    "ScalarLike",
    "VectorLike",
    "Vector",
    "ForceVector",
    "VelocityVector",
    "PositionVector",
    "WaveVector",
]
