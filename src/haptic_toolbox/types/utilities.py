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
Backend type guards.

Used by BackendManager to tell which backend an incoming sample lives in.
The optional libraries are imported lazily so that NumPy-only installs
never pay for them.
"""

import numpy as np

from .backends import Backend
from .core import ArrayLike


def is_numpy(x: ArrayLike) -> bool:
    """
    Check if array is NumPy ndarray.

    Examples
    --------
    >>> is_numpy(np.array([1.0, 2.0]))
    True
    >>> is_numpy([1.0, 2.0])
    False
    """
    return isinstance(x, np.ndarray)


def is_torch(x: ArrayLike) -> bool:
    """
    Check if array is PyTorch tensor.

    Returns False when PyTorch is not installed.
    """
    try:
        import torch

        return isinstance(x, torch.Tensor)
    except ImportError:
        return False


def is_jax(x: ArrayLike) -> bool:
    """
    Check if array is JAX array.

    Returns False when JAX is not installed.
    """
    try:
        import jax

        return isinstance(x, jax.Array)
    except ImportError:
        return False


def get_backend(x: ArrayLike) -> Backend:
    """
    Detect backend from array type.

    Python scalars, lists and tuples are reported as 'numpy' since they
    are converted with np.asarray.

    Raises
    ------
    TypeError
        If x is none of the above
    """
    if is_torch(x):
        return "torch"
    if is_jax(x):
        return "jax"
    if is_numpy(x) or isinstance(x, (int, float, np.number, list, tuple)):
        return "numpy"
    raise TypeError(
        f"Unknown input type: {type(x)}. "
        f"Expected np.ndarray, torch.Tensor, jax.Array, sequence or scalar"
    )


__all__ = ["is_numpy", "is_torch", "is_jax", "get_backend"]
