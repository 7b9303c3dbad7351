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
Input-to-State Stable (ISS) Compensator

Similar to other passivity approaches but less conservative: where
strict passivity forbids the system from generating any energy, ISS
allows energy generation bounded by a constant.

Given the raw force f[k] and time step dt, the compensator produces

    f_iss[k] = f[k] + tau * (f[k] - f[k-1]) / dt
    v_iss[k] = v[k] - (f[k] - f_prev) / dt / mu_max

where tau is a time constant and mu_max bounds the gradient of the
environment's force/velocity characteristic, 0 <= f'(x) <= mu_max.

Usage
-----
>>> iss = ISS(tau=0.01, mu_max=50.0, dim=3)
>>>
>>> for f, v in samples:
...     f_out = iss.calculate_force(f, dt)
...     v_out = iss.calculate_vel(v, f, dt)
"""

from typing import Optional

import numpy as np

from haptic_toolbox.types.backends import DEFAULT_DTYPE, DTypeLike
from haptic_toolbox.types.controllers import ISSConfig, ISSState
from haptic_toolbox.types.core import ArrayLike, ForceVector, ScalarLike, VectorLike
from haptic_toolbox.utils.backend_manager import BackendManager
from haptic_toolbox.utils.vector_space import VectorSpace


class ISS:
    """
    ISS force/velocity compensator.

    Attributes:
        tau: Time constant (>= 0)
        mu_max: Upper bound of the force/velocity gradient (> 0)
        prev_force: Force sample of the last calculate_force() call

    Notes:
        - calculate_force() is the only mutating operation.
        - calculate_vel() reads prev_force without updating it; pass the
          force sample of the most recent calculate_force() call.
        - dt must be strictly positive; dt <= 0 raises ValueError and
          leaves the state untouched.
    """

    def __init__(
        self,
        tau: ScalarLike,
        mu_max: ScalarLike,
        dim: int = 1,
        dtype: DTypeLike = DEFAULT_DTYPE,
        backend_manager: Optional[BackendManager] = None,
    ):
        """
        Initialize ISS compensator.

        Args:
            tau: Time constant (>= 0)
            mu_max: Gradient bound, must satisfy 0 <= f'(x) <= mu_max and
                mu_max != 0
            dim: Vector dimension
            dtype: Scalar field ('float32' or 'float64')

        Raises:
            ValueError: If mu_max <= 0 or tau < 0
        """
        self._space = VectorSpace(dim=dim, dtype=dtype, backend_manager=backend_manager)
        self._tau = self._validate_tau(tau)
        self._mu_max = self._validate_mu_max(mu_max)
        self._prev_force = self._space.zeros()

    @classmethod
    def from_config(cls, config: ISSConfig) -> "ISS":
        return cls(
            config["tau"],
            config["mu_max"],
            dim=config.get("dim", 1),
            dtype=config.get("dtype", DEFAULT_DTYPE),
        )

    def _validate_tau(self, tau: ScalarLike) -> np.floating:
        tau = self._space.scalar(tau, name="tau")
        if tau < 0:
            raise ValueError(f"tau must be non-negative, got {tau}")
        return tau

    def _validate_mu_max(self, mu_max: ScalarLike) -> np.floating:
        mu_max = self._space.scalar(mu_max, name="mu_max")
        if mu_max <= 0:
            raise ValueError(f"mu_max must be positive, got {mu_max}")
        return mu_max

    def _validate_dt(self, dt: ScalarLike) -> np.floating:
        dt = self._space.scalar(dt, name="dt")
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        return dt

    # ========================================================================
    # Compensation
    # ========================================================================

    def calculate_force(self, force: VectorLike, dt: ScalarLike) -> ArrayLike:
        """
        Calculate the ISS force and remember the force sample.

        Args:
            force: Raw force, shape (dim,)
            dt: Time step since the previous sample (> 0)

        Returns:
            force + (force - prev_force) * tau / dt
        """
        force, origin = self._space.vector_with_origin(force, name="force")
        dt = self._validate_dt(dt)

        iss_force = force + (force - self._prev_force) * self._tau / dt
        self._prev_force = force
        return self._space.restore(iss_force, origin)

    def calculate_vel(self, vel: VectorLike, force: VectorLike, dt: ScalarLike) -> ArrayLike:
        """
        Calculate the ISS velocity.

        Args:
            vel: Raw velocity, shape (dim,)
            force: Force sample of the most recent calculate_force() call
            dt: Time step (> 0)

        Returns:
            vel - (force - prev_force) / dt / mu_max
        """
        vel, origin = self._space.vector_with_origin(vel, name="vel")
        force = self._space.vector(force, name="force")
        dt = self._validate_dt(dt)

        return self._space.restore(vel - (force - self._prev_force) / dt / self._mu_max, origin)

    def reset(self):
        """Forget the previous force sample (back to the zero vector)."""
        self._prev_force = self._space.zeros()

    # ========================================================================
    # Configuration
    # ========================================================================

    @property
    def tau(self) -> float:
        return float(self._tau)

    @property
    def mu_max(self) -> float:
        return float(self._mu_max)

    def set_tau(self, tau: ScalarLike):
        """
        Set tau.

        Raises:
            ValueError: If tau < 0 (previous value kept)
        """
        self._tau = self._validate_tau(tau)

    def set_mu_max(self, mu_max: ScalarLike):
        """
        Set mu max.

        Raises:
            ValueError: If mu_max <= 0 (previous value kept)
        """
        self._mu_max = self._validate_mu_max(mu_max)

    @property
    def prev_force(self) -> ForceVector:
        return self._prev_force.copy()

    @property
    def dim(self) -> int:
        return self._space.dim

    @property
    def dtype(self) -> np.dtype:
        return self._space.dtype

    def get_config(self) -> ISSConfig:
        config: ISSConfig = {
            "dim": self.dim,
            "dtype": self.dtype.name,
            "tau": self.tau,
            "mu_max": self.mu_max,
        }
        return config

    def get_state(self) -> ISSState:
        return {"prev_force": self.prev_force}

    def __repr__(self) -> str:
        return (
            f"ISS(tau={self.tau}, mu_max={self.mu_max}, dim={self.dim}, "
            f"dtype='{self.dtype.name}')"
        )
