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
PD Controller

A proportional-derivative controller makes a simple system track a
reference position and velocity:

    f = k_p (x_ref - x) + k_d (v_ref - v)
"""

from typing import Optional

import numpy as np

from haptic_toolbox.types.backends import DEFAULT_DTYPE, DTypeLike
from haptic_toolbox.types.controllers import PDConfig
from haptic_toolbox.types.core import ArrayLike, ScalarLike, VectorLike
from haptic_toolbox.utils.backend_manager import BackendManager
from haptic_toolbox.utils.vector_space import VectorSpace


class PD:
    """
    Stateless PD tracker.

    Example:
        >>> pd = PD(k_p=100.0, k_d=2.0, dim=3)
        >>> f = pd.calculate_force(x_ref, x, v_ref, v)
    """

    def __init__(
        self,
        k_p: ScalarLike,
        k_d: ScalarLike,
        dim: int = 1,
        dtype: DTypeLike = DEFAULT_DTYPE,
        backend_manager: Optional[BackendManager] = None,
    ):
        self._space = VectorSpace(dim=dim, dtype=dtype, backend_manager=backend_manager)
        self._k_p = self._space.scalar(k_p, name="k_p")
        self._k_d = self._space.scalar(k_d, name="k_d")

    @classmethod
    def from_config(cls, config: PDConfig) -> "PD":
        return cls(
            config["k_p"],
            config["k_d"],
            dim=config.get("dim", 1),
            dtype=config.get("dtype", DEFAULT_DTYPE),
        )

    def calculate_force(
        self,
        pos_ref: VectorLike,
        pos: VectorLike,
        vel_ref: VectorLike,
        vel: VectorLike,
    ) -> ArrayLike:
        """Calculates the force for tracking reference position and velocity."""
        pos_ref, origin = self._space.vector_with_origin(pos_ref, name="pos_ref")
        pos = self._space.vector(pos, name="pos")
        vel_ref = self._space.vector(vel_ref, name="vel_ref")
        vel = self._space.vector(vel, name="vel")

        return self._space.restore((pos_ref - pos) * self._k_p + (vel_ref - vel) * self._k_d, origin)

    @property
    def k_p(self) -> float:
        return float(self._k_p)

    @property
    def k_d(self) -> float:
        return float(self._k_d)

    def set_k_p(self, k_p: ScalarLike):
        self._k_p = self._space.scalar(k_p, name="k_p")

    def set_k_d(self, k_d: ScalarLike):
        self._k_d = self._space.scalar(k_d, name="k_d")

    @property
    def dim(self) -> int:
        return self._space.dim

    @property
    def dtype(self) -> np.dtype:
        return self._space.dtype

    def get_config(self) -> PDConfig:
        config: PDConfig = {
            "dim": self.dim,
            "dtype": self.dtype.name,
            "k_p": self.k_p,
            "k_d": self.k_d,
        }
        return config

    def __repr__(self) -> str:
        return f"PD(k_p={self.k_p}, k_d={self.k_d}, dim={self.dim})"
