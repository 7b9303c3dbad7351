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
Deadband Detector

Detector for samples that fall in the deadband of the last retained
sample.

A sample V is in the deadband of the reference P when

    ||P - V|| <= threshold * ||P||

Deadband compression filters out samples whose change is not
significant. In haptic teleoperation users cannot tell apart forces that
are very close to one another; just-noticeable-difference thresholds are
usually derived from Weber's law (a relative threshold, here typically
5-15%). Dropping imperceptible updates cuts network traffic between the
two sites without a perceivable loss in transparency.

Usage
-----
>>> # 10% threshold, starting from a zero reference
>>> detector = DeadbandDetector(0.1, 0.0)
>>>
>>> detector.is_in_deadband(0.1)   # False: zero reference has zero radius
>>> detector.is_in_deadband(0.11)  # True: within 10% of 0.1
>>> detector.is_in_deadband(0.12)  # False: 0.12 becomes the new reference
>>>
>>> # Spatial force samples
>>> detector = DeadbandDetector(0.1, [0.0, 0.0, 0.0])
>>> for f in force_stream:
...     if not detector.is_in_deadband(f):
...         channel.send(f)
"""

from typing import Optional

import numpy as np

from haptic_toolbox.types.backends import DEFAULT_DTYPE, DTypeLike
from haptic_toolbox.types.controllers import DeadbandConfig, DeadbandState
from haptic_toolbox.types.core import ScalarLike, Vector, VectorLike
from haptic_toolbox.utils.backend_manager import BackendManager
from haptic_toolbox.utils.vector_space import VectorSpace


class DeadbandDetector:
    """
    Relative deadband detector over fixed-dimension vectors.

    The dimension is taken from the initial sample (a scalar gives a
    one-dimensional detector) and is fixed afterwards.

    Attributes:
        threshold: Relative threshold, intended for [0, 1]
        deadband: Absolute radius, always threshold * ||prev_vals||
        prev_vals: Last retained sample

    Notes:
        - A zero reference yields a zero radius, so any nonzero sample
          leaves the deadband. This is how the detector re-arms itself
          after a reset to rest.
        - The boundary belongs to the deadband (<=).
    """

    def __init__(
        self,
        threshold: ScalarLike,
        initial_vals: VectorLike,
        dtype: DTypeLike = DEFAULT_DTYPE,
        backend_manager: Optional[BackendManager] = None,
    ):
        """
        Initialize the detector.

        Args:
            threshold: Relative threshold (>= 0)
            initial_vals: Reference sample, scalar or 1-D array
            dtype: Scalar field ('float32' or 'float64')

        Raises:
            ValueError: If threshold is negative or initial_vals is not 1-D
        """
        mgr = backend_manager or BackendManager()
        initial = mgr.to_numpy(initial_vals)
        if initial.ndim > 1:
            raise ValueError(f"initial_vals must be a scalar or 1-D, got shape {initial.shape}")

        self._space = VectorSpace(dim=initial.size if initial.ndim else 1, dtype=dtype, backend_manager=mgr)
        self._threshold = self._validate_threshold(threshold)
        self._prev_vals = self._space.vector(initial, name="initial_vals")
        self._update_deadband()

    @classmethod
    def from_config(cls, config: DeadbandConfig) -> "DeadbandDetector":
        """
        Build a detector from a DeadbandConfig.

        Raises:
            ValueError: If 'dim' is given and disagrees with 'initial_vals'
        """
        detector = cls(
            config["threshold"],
            config["initial_vals"],
            dtype=config.get("dtype", DEFAULT_DTYPE),
        )
        if "dim" in config and config["dim"] != detector.dim:
            raise ValueError(
                f"dim {config['dim']} does not match initial_vals of length {detector.dim}"
            )
        return detector

    def _validate_threshold(self, threshold: ScalarLike) -> np.floating:
        threshold = self._space.scalar(threshold, name="threshold")
        if threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {threshold}")
        return threshold

    def _update_deadband(self):
        self._deadband = self._threshold * self._space.norm(self._prev_vals)

    # ========================================================================
    # Detection
    # ========================================================================

    def is_in_deadband(self, vals: VectorLike) -> bool:
        """
        Check whether vals is in the deadband of the last retained sample.

        If vals is outside the deadband it becomes the new reference and
        the deadband radius is recomputed.

        Args:
            vals: Candidate sample, shape (dim,)

        Returns:
            True if the sample is suppressed, False if it was retained
        """
        vals = self._space.vector(vals, name="vals")
        if self._space.norm(self._prev_vals - vals) <= self._deadband:
            return True

        self._prev_vals = vals
        self._update_deadband()
        return False

    # ========================================================================
    # Configuration
    # ========================================================================

    @property
    def threshold(self) -> float:
        return float(self._threshold)

    def set_threshold(self, threshold: ScalarLike):
        """
        Set the relative threshold.

        Raises:
            ValueError: If threshold is negative (previous threshold kept)
        """
        self._threshold = self._validate_threshold(threshold)
        self._update_deadband()

    def set_prev_vals(self, vals: VectorLike):
        """Reseed the reference sample without passing the deadband test."""
        self._prev_vals = self._space.vector(vals, name="vals")
        self._update_deadband()

    @property
    def prev_vals(self) -> Vector:
        return self._prev_vals.copy()

    @property
    def deadband(self) -> float:
        return float(self._deadband)

    @property
    def dim(self) -> int:
        return self._space.dim

    @property
    def dtype(self) -> np.dtype:
        return self._space.dtype

    def get_config(self) -> DeadbandConfig:
        """Configuration that rebuilds this detector (current reference as initial)."""
        config: DeadbandConfig = {
            "dim": self.dim,
            "dtype": self.dtype.name,
            "threshold": self.threshold,
            "initial_vals": self._prev_vals.tolist(),
        }
        return config

    def get_state(self) -> DeadbandState:
        state: DeadbandState = {
            "prev_vals": self.prev_vals,
            "deadband": self.deadband,
        }
        return state

    def __repr__(self) -> str:
        return (
            f"DeadbandDetector(threshold={self.threshold}, dim={self.dim}, "
            f"dtype='{self.dtype.name}', deadband={self.deadband})"
        )
