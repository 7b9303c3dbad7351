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
Fixed-Dimension Vector Space

Every component in the toolbox computes over vectors of a fixed
dimension D with entries in a real scalar field N. VectorSpace binds the
two together at construction time and is the single place where
incoming samples are checked and normalized:

- backend conversion (PyTorch/JAX -> NumPy) via BackendManager
- cast to the space's dtype (float32 or float64)
- shape check: every operand must be exactly (dim,)

Inner product and norm are computed as sqrt(x . x) for every dtype so
that comparisons against a norm-derived radius (deadband) are
reproducible bit for bit.

Usage
-----
>>> space = VectorSpace(dim=3, dtype='float32')
>>> f = space.vector([1.0, 2.0, 2.0], name='force')
>>> space.norm(f)
3.0
>>> space.vector([1.0, 2.0], name='force')  # ValueError: shape mismatch
"""

from typing import Optional, Tuple

import numpy as np

from haptic_toolbox.types.backends import DEFAULT_DTYPE, DTypeLike, SampleOrigin, validate_dtype
from haptic_toolbox.types.core import ArrayLike, ScalarLike, Vector, VectorLike
from haptic_toolbox.utils.backend_manager import BackendManager


class VectorSpace:
    """
    Real vector space of fixed dimension over a NumPy floating dtype.

    Attributes:
        dim: Vector dimension D (>= 1)
        dtype: Scalar field N as np.dtype
        backend_manager: Converter used at the boundary
    """

    def __init__(
        self,
        dim: int = 1,
        dtype: DTypeLike = DEFAULT_DTYPE,
        backend_manager: Optional[BackendManager] = None,
    ):
        if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim < 1:
            raise ValueError(f"dim must be a positive integer, got {dim!r}")

        self.dim = int(dim)
        self.dtype = validate_dtype(dtype)
        self.backend_manager = backend_manager or BackendManager()

    # ========================================================================
    # Coercion
    # ========================================================================

    def vector(self, x: VectorLike, name: str = "vector") -> Vector:
        """
        Convert a sample into a fresh NumPy vector of this space.

        Scalars are accepted when dim == 1. The result never aliases the
        caller's buffer, so components can keep it as state.

        Raises:
            ValueError: If the sample does not have shape (dim,) or holds
                NaN/Inf entries
        """
        arr = np.array(self.backend_manager.to_numpy(x), dtype=self.dtype, copy=True)
        if arr.ndim == 0 and self.dim == 1:
            arr = arr.reshape(1)
        if arr.shape != (self.dim,):
            raise ValueError(f"{name} must have shape ({self.dim},), got {arr.shape}")
        if not np.all(np.isfinite(arr)):
            raise ValueError(f"{name} must be finite, got {arr}")
        return arr

    def vector_with_origin(
        self, x: VectorLike, name: str = "vector"
    ) -> Tuple[Vector, SampleOrigin]:
        """Like vector(), also returning the backend and device the sample came from."""
        return self.vector(x, name), self.backend_manager.origin(x)

    def restore(self, x: Vector, origin: SampleOrigin) -> ArrayLike:
        """Hand a result back in the caller's backend, on the caller's device."""
        return self.backend_manager.restore(x, origin)

    def scalar(self, value: ScalarLike, name: str = "value") -> np.floating:
        """
        Convert a parameter to a scalar of this space's dtype.

        Raises:
            ValueError: If value is not a finite real number
        """
        if np.ndim(value) != 0:
            raise ValueError(f"{name} must be a scalar, got shape {np.shape(value)}")
        try:
            s = self.dtype.type(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{name} must be a real number, got {value!r}") from e
        if not np.isfinite(s):
            raise ValueError(f"{name} must be finite, got {value!r}")
        return s

    # ========================================================================
    # Vector operations
    # ========================================================================

    def zeros(self) -> Vector:
        """Zero vector of this space."""
        return np.zeros(self.dim, dtype=self.dtype)

    def dot(self, a: Vector, b: Vector) -> np.floating:
        """Inner product a . b"""
        return self.dtype.type(np.dot(a, b))

    def norm_squared(self, a: Vector) -> np.floating:
        """Squared Euclidean norm a . a"""
        return self.dot(a, a)

    def norm(self, a: Vector) -> np.floating:
        """Euclidean norm sqrt(a . a)"""
        return np.sqrt(self.norm_squared(a))

    def __eq__(self, other) -> bool:
        if not isinstance(other, VectorSpace):
            return NotImplemented
        return self.dim == other.dim and self.dtype == other.dtype

    def __repr__(self) -> str:
        return f"VectorSpace(dim={self.dim}, dtype='{self.dtype.name}')"
