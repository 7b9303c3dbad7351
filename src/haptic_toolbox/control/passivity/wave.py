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
Wave Variable Transformation

Control strategy for bilateral haptic data exchange over a channel with
time delay. Instead of force and velocity, both sites transmit wave
variables

    u = (f + b v) / sqrt(2b)    (master -> slave)
    v = (f - b v) / sqrt(2b)    (slave -> master)

whose power ||u||^2/2 - ||v||^2/2 equals f . v. A delayed channel only
stores wave energy, so the teleoperator stays passive for any constant
delay. The wave impedance b trades off the feel of free motion (small b)
against the stiffness of contact (large b).

Conventions
-----------
- calculate_v_m / calculate_v_s are the same functions as
  calculate_u_s / calculate_u_m: the outgoing wave of one site is the
  incoming-wave formula of the other site.
- Velocity recovery is asymmetric on purpose: the master subtracts its
  measured velocity, the slave adds it, so
  calculate_vel_s(a, w) == calculate_vel_m(a, -w).
- Velocity recovery works on unnormalized waves U = u sqrt(2b) = f + b v
  and V = v sqrt(2b) = f - b v. It inverts them exactly:
  calculate_vel_m(U, V) == v and calculate_vel_s(U, -V) == v.

Usage
-----
>>> wave = WAVE(b=10.0, dim=3)
>>>
>>> # Master site
>>> u_m = wave.calculate_u_m(f_m, v_m)
>>> channel.send(u_m)
>>>
>>> # Slave site
>>> f_s = wave.calculate_force_s(u_s, v_s_wave)
"""

from typing import Optional

import numpy as np

from haptic_toolbox.types.backends import DEFAULT_DTYPE, DTypeLike
from haptic_toolbox.types.controllers import WaveConfig
from haptic_toolbox.types.core import ArrayLike, ScalarLike, VectorLike
from haptic_toolbox.utils.backend_manager import BackendManager
from haptic_toolbox.utils.vector_space import VectorSpace


class WAVE:
    """
    Wave variable transform with fixed impedance b.

    Holds no sample history: every method is a pure function of b and
    its arguments. b cannot be changed after construction.

    Attributes:
        b: Wave impedance (> 0)
    """

    def __init__(
        self,
        b: ScalarLike,
        dim: int = 1,
        dtype: DTypeLike = DEFAULT_DTYPE,
        backend_manager: Optional[BackendManager] = None,
    ):
        """
        Create a WAVE transform with the wave impedance b.

        Raises:
            ValueError: If b <= 0
        """
        self._space = VectorSpace(dim=dim, dtype=dtype, backend_manager=backend_manager)
        b = self._space.scalar(b, name="b")
        if b <= 0:
            raise ValueError(f"wave impedance b must be positive, got {b}")

        self._b = b
        two = self._space.scalar(2.0)
        self._sqrt_2b = np.sqrt(two * b)
        self._sqrt_b_half = np.sqrt(b / two)
        self._two_b = two * b

    @classmethod
    def from_config(cls, config: WaveConfig) -> "WAVE":
        return cls(
            config["b"],
            dim=config.get("dim", 1),
            dtype=config.get("dtype", DEFAULT_DTYPE),
        )

    # ========================================================================
    # Force/velocity -> waves
    # ========================================================================

    def calculate_u_m(self, force_m: VectorLike, vel_m: VectorLike) -> ArrayLike:
        """Calculates the incoming wave at the master: (f + v b) / sqrt(2b)"""
        force_m, origin = self._space.vector_with_origin(force_m, name="force_m")
        vel_m = self._space.vector(vel_m, name="vel_m")
        return self._space.restore((force_m + vel_m * self._b) / self._sqrt_2b, origin)

    def calculate_u_s(self, force_s: VectorLike, vel_s: VectorLike) -> ArrayLike:
        """Calculates the incoming wave at the slave: (f - v b) / sqrt(2b)"""
        force_s, origin = self._space.vector_with_origin(force_s, name="force_s")
        vel_s = self._space.vector(vel_s, name="vel_s")
        return self._space.restore((force_s - vel_s * self._b) / self._sqrt_2b, origin)

    # Outgoing waves use the other site's convention.
    calculate_v_m = calculate_u_s
    calculate_v_s = calculate_u_m

    # ========================================================================
    # Waves -> force/velocity
    # ========================================================================

    def calculate_force_m(self, u_m: VectorLike, v_m: VectorLike) -> ArrayLike:
        """Calculates the force for the master: (u + v) sqrt(b/2)"""
        u_m, origin = self._space.vector_with_origin(u_m, name="u_m")
        v_m = self._space.vector(v_m, name="v_m")
        return self._space.restore((u_m + v_m) * self._sqrt_b_half, origin)

    def calculate_force_s(self, u_s: VectorLike, v_s: VectorLike) -> ArrayLike:
        """Calculates the force for the slave: (u + v) sqrt(b/2)"""
        u_s, origin = self._space.vector_with_origin(u_s, name="u_s")
        v_s = self._space.vector(v_s, name="v_s")
        return self._space.restore((u_s + v_s) * self._sqrt_b_half, origin)

    def calculate_vel_m(self, u_m: VectorLike, vel_m: VectorLike) -> ArrayLike:
        """Calculates the velocity for the master: (u - v) / (2b)"""
        u_m, origin = self._space.vector_with_origin(u_m, name="u_m")
        vel_m = self._space.vector(vel_m, name="vel_m")
        return self._space.restore((u_m - vel_m) / self._two_b, origin)

    def calculate_vel_s(self, u_s: VectorLike, vel_s: VectorLike) -> ArrayLike:
        """Calculates the velocity for the slave: (u + v) / (2b)"""
        u_s, origin = self._space.vector_with_origin(u_s, name="u_s")
        vel_s = self._space.vector(vel_s, name="vel_s")
        return self._space.restore((u_s + vel_s) / self._two_b, origin)

    # ========================================================================
    # Configuration
    # ========================================================================

    @property
    def b(self) -> float:
        return float(self._b)

    @property
    def dim(self) -> int:
        return self._space.dim

    @property
    def dtype(self) -> np.dtype:
        return self._space.dtype

    def get_config(self) -> WaveConfig:
        config: WaveConfig = {"dim": self.dim, "dtype": self.dtype.name, "b": self.b}
        return config

    def __repr__(self) -> str:
        return f"WAVE(b={self.b}, dim={self.dim}, dtype='{self.dtype.name}')"
