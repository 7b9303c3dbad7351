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
PID Controller

A proportional-integral-derivative controller continuously computes the
error between a setpoint and a measured process variable and applies a
correction from proportional, integral and derivative terms:

    e      = x_ref - x
    I     += e dt
    f      = k_p e + k_i I + k_d (v_ref - v)

The derivative term uses the measured velocity rather than a finite
difference of e, which is what haptic devices provide natively.
"""

from typing import Optional

import numpy as np

from haptic_toolbox.types.backends import DEFAULT_DTYPE, DTypeLike
from haptic_toolbox.types.controllers import PIDConfig, PIDState
from haptic_toolbox.types.core import ArrayLike, ScalarLike, Vector, VectorLike
from haptic_toolbox.utils.backend_manager import BackendManager
from haptic_toolbox.utils.vector_space import VectorSpace


class PID:
    """
    PID tracker with an accumulated position-error integral.

    Attributes:
        k_p, k_i, k_d: Gains
        integral_error: Accumulated error, starts at zero

    Example:
        >>> pid = PID(k_p=200.0, k_i=10.0, k_d=5.0, dim=3)
        >>> for k in range(steps):
        ...     f = pid.calculate_force(x_ref, x, v_ref, v, dt)
    """

    def __init__(
        self,
        k_p: ScalarLike,
        k_i: ScalarLike,
        k_d: ScalarLike,
        dim: int = 1,
        dtype: DTypeLike = DEFAULT_DTYPE,
        backend_manager: Optional[BackendManager] = None,
    ):
        self._space = VectorSpace(dim=dim, dtype=dtype, backend_manager=backend_manager)
        self._k_p = self._space.scalar(k_p, name="k_p")
        self._k_i = self._space.scalar(k_i, name="k_i")
        self._k_d = self._space.scalar(k_d, name="k_d")
        self._integral_error = self._space.zeros()

    @classmethod
    def from_config(cls, config: PIDConfig) -> "PID":
        return cls(
            config["k_p"],
            config["k_i"],
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
        dt: ScalarLike,
    ) -> ArrayLike:
        """Calculates the force for tracking reference position and velocity."""
        pos_ref, origin = self._space.vector_with_origin(pos_ref, name="pos_ref")
        pos = self._space.vector(pos, name="pos")
        vel_ref = self._space.vector(vel_ref, name="vel_ref")
        vel = self._space.vector(vel, name="vel")
        dt = self._space.scalar(dt, name="dt")

        error = pos_ref - pos
        self._integral_error = self._integral_error + error * dt
        comp_p = error * self._k_p
        comp_i = self._integral_error * self._k_i
        comp_d = (vel_ref - vel) * self._k_d

        return self._space.restore(comp_p + comp_i + comp_d, origin)

    def reset(self):
        """Clear the accumulated integral error."""
        self._integral_error = self._space.zeros()

    @property
    def k_p(self) -> float:
        return float(self._k_p)

    @property
    def k_i(self) -> float:
        return float(self._k_i)

    @property
    def k_d(self) -> float:
        return float(self._k_d)

    def set_k_p(self, k_p: ScalarLike):
        self._k_p = self._space.scalar(k_p, name="k_p")

    def set_k_i(self, k_i: ScalarLike):
        self._k_i = self._space.scalar(k_i, name="k_i")

    def set_k_d(self, k_d: ScalarLike):
        self._k_d = self._space.scalar(k_d, name="k_d")

    @property
    def integral_error(self) -> Vector:
        return self._integral_error.copy()

    @property
    def dim(self) -> int:
        return self._space.dim

    @property
    def dtype(self) -> np.dtype:
        return self._space.dtype

    def get_config(self) -> PIDConfig:
        config: PIDConfig = {
            "dim": self.dim,
            "dtype": self.dtype.name,
            "k_p": self.k_p,
            "k_i": self.k_i,
            "k_d": self.k_d,
        }
        return config

    def get_state(self) -> PIDState:
        return {"integral_error": self.integral_error}

    def __repr__(self) -> str:
        return f"PID(k_p={self.k_p}, k_i={self.k_i}, k_d={self.k_d}, dim={self.dim})"
