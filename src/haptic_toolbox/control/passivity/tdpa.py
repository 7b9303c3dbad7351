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
Time Domain Passivity Approach (TDPA)

Energy-based controller that keeps a haptic interface passive, and
therefore stable in contact, under a wide range of operating conditions.

A passivity observer integrates the power flowing through the port,

    E[k] = E[k-1] + f[k] . v[k] + alpha[k-1] * ||v[k-1]||^2

(the last term credits the energy dissipated by the previous
correction). Whenever the ledger turns negative, the port has produced
more energy than it received and a passivity controller injects a
variable damper

    alpha[k] = -E[k] / ||v[k]||^2,    f_out[k] = f[k] + alpha[k] * v[k]

sized to dissipate exactly the deficit.

Zero-Velocity Policy
--------------------
A damper cannot act without motion. When E[k] < 0 and ||v[k]||^2 is at
or below vel_epsilon, alpha is set to 0, the force passes through
unchanged and a RuntimeWarning is issued. The deficit stays on the
ledger and is dissipated on the next tick with usable velocity. The
same applies when ||v[k]||^2 is above vel_epsilon but so small that
-E[k] / ||v[k]||^2 overflows.

Non-Finite Values
-----------------
NaN/Inf samples are rejected with ValueError. If finite samples drive
the energy ledger or the corrected force past the range of dtype, the
call raises ValueError and the ledger is left as it was, so a single
bad tick can never disable the controller.

Usage
-----
>>> pid = PID(k_p=200.0, k_i=0.0, k_d=5.0, dim=3)
>>> tdpa = TDPA(dim=3)
>>>
>>> for k in range(steps):
...     f = pid.calculate_force(x_ref, x, v_ref, v, dt)
...     f = tdpa.calculate_force(v, f)
"""

import warnings
from typing import Optional

import numpy as np

from haptic_toolbox.types.backends import DEFAULT_DTYPE, DTypeLike
from haptic_toolbox.types.controllers import TDPAConfig, TDPAState
from haptic_toolbox.types.core import ArrayLike, ScalarLike, VectorLike, VelocityVector
from haptic_toolbox.utils.backend_manager import BackendManager
from haptic_toolbox.utils.vector_space import VectorSpace


class TDPA:
    """
    Time domain passivity observer/controller pair.

    Attributes:
        alpha: Damping injected on the last tick (>= 0)
        energy: Running energy ledger (only ever accumulated)
        prev_vel: Velocity of the last tick
        vel_epsilon: Squared-velocity floor for the zero-velocity policy

    Example:
        >>> tdpa = TDPA(dim=1)
        >>> tdpa.calculate_force(1.0, -2.0)  # E = -2 -> alpha = 2
        array([0.])
        >>> tdpa.alpha
        2.0
    """

    def __init__(
        self,
        dim: int = 1,
        dtype: DTypeLike = DEFAULT_DTYPE,
        vel_epsilon: Optional[ScalarLike] = None,
        backend_manager: Optional[BackendManager] = None,
    ):
        """
        Initialize TDPA with an empty energy ledger.

        Args:
            dim: Vector dimension
            dtype: Scalar field ('float32' or 'float64')
            vel_epsilon: Squared-velocity floor (>= 0). None uses the
                smallest normal number of dtype, which only excludes
                zero and subnormal velocities.

        Raises:
            ValueError: If vel_epsilon is negative
        """
        self._space = VectorSpace(dim=dim, dtype=dtype, backend_manager=backend_manager)

        if vel_epsilon is None:
            vel_epsilon = np.finfo(self._space.dtype).tiny
        self._vel_epsilon = self._space.scalar(vel_epsilon, name="vel_epsilon")
        if self._vel_epsilon < 0:
            raise ValueError(f"vel_epsilon must be non-negative, got {vel_epsilon}")

        self._zero = self._space.scalar(0.0)
        self._alpha = self._zero
        self._energy = self._zero
        self._prev_vel = self._space.zeros()

    @classmethod
    def from_config(cls, config: TDPAConfig) -> "TDPA":
        return cls(
            dim=config.get("dim", 1),
            dtype=config.get("dtype", DEFAULT_DTYPE),
            vel_epsilon=config.get("vel_epsilon"),
        )

    def calculate_force(self, vel: VectorLike, force: VectorLike) -> ArrayLike:
        """
        Calculate the TDPA force while ensuring passivity.

        Args:
            vel: Velocity at the port, shape (dim,)
            force: Force about to be applied, shape (dim,)

        Returns:
            force if no correction is needed, force + alpha * vel otherwise
        """
        vel, origin = self._space.vector_with_origin(vel, name="vel")
        force = self._space.vector(force, name="force")

        # Stage the update; state is only committed once every value is finite
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            energy = self._energy + (
                self._space.dot(force, vel)
                + self._alpha * self._space.norm_squared(self._prev_vel)
            )
            if not np.isfinite(energy):
                raise ValueError(
                    f"TDPA energy ledger overflowed ({float(energy)}); "
                    f"vel and force are out of the representable range of {self.dtype.name}"
                )

            alpha = self._zero
            if energy < 0:
                vel_sq = self._space.norm_squared(vel)
                candidate = -energy / vel_sq if vel_sq > self._vel_epsilon else None
                if candidate is not None and np.isfinite(candidate):
                    alpha = self.dtype.type(candidate)
                else:
                    warnings.warn(
                        f"TDPA energy deficit {float(energy):.3e} cannot be dissipated: "
                        f"||vel||^2 = {float(vel_sq):.3e} is too small for a finite damper. "
                        f"Passing force through uncorrected.",
                        RuntimeWarning,
                        stacklevel=2,
                    )

            out = force if alpha == 0 else force + vel * alpha
            if not np.all(np.isfinite(out)):
                raise ValueError(
                    f"TDPA corrected force overflowed {self.dtype.name} (alpha={float(alpha)})"
                )

        self._energy = energy
        self._alpha = alpha
        self._prev_vel = vel
        return self._space.restore(out, origin)

    # ========================================================================
    # Inspection
    # ========================================================================

    @property
    def alpha(self) -> float:
        return float(self._alpha)

    @property
    def energy(self) -> float:
        return float(self._energy)

    @property
    def prev_vel(self) -> VelocityVector:
        return self._prev_vel.copy()

    @property
    def vel_epsilon(self) -> float:
        return float(self._vel_epsilon)

    @property
    def dim(self) -> int:
        return self._space.dim

    @property
    def dtype(self) -> np.dtype:
        return self._space.dtype

    def get_config(self) -> TDPAConfig:
        config: TDPAConfig = {
            "dim": self.dim,
            "dtype": self.dtype.name,
            "vel_epsilon": self.vel_epsilon,
        }
        return config

    def get_state(self) -> TDPAState:
        """Snapshot of the energy ledger."""
        state: TDPAState = {
            "alpha": self.alpha,
            "energy": self.energy,
            "prev_vel": self.prev_vel,
        }
        return state

    def __repr__(self) -> str:
        return (
            f"TDPA(dim={self.dim}, dtype='{self.dtype.name}', "
            f"energy={self.energy:.6g}, alpha={self.alpha:.6g})"
        )
