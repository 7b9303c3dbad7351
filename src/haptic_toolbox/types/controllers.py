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
Component Configuration and State Types

TypedDicts describing how each component is configured and what its
internal memory looks like at a given tick.

Configs are what get_config() returns and from_config() accepts, so a
component can be stored (e.g. as JSON/YAML next to an experiment) and
rebuilt identically. State snapshots are what get_state() returns; they
are copies, mutating them never affects the component.

Usage
-----
>>> from haptic_toolbox import TDPA
>>> from haptic_toolbox.types.controllers import TDPAConfig
>>>
>>> config: TDPAConfig = {'dim': 3, 'dtype': 'float32'}
>>> tdpa = TDPA.from_config(config)
>>> tdpa.get_config()
{'dim': 3, 'dtype': 'float32', 'vel_epsilon': 1.1754943508222875e-38}
"""

from typing import List, Optional

from typing_extensions import TypedDict

from .backends import Precision
from .core import Vector


# ============================================================================
# Configuration Types
# ============================================================================


class ComponentConfig(TypedDict, total=False):
    """
    Fields shared by every component.

    Attributes
    ----------
    dim : int
        Vector dimension (fixed for the instance lifetime)
    dtype : Precision
        Scalar field ('float32' or 'float64')
    """

    dim: int
    dtype: Precision


class DeadbandConfig(ComponentConfig, total=False):
    """
    DeadbandDetector configuration.

    Attributes
    ----------
    threshold : float
        Relative threshold, intended range [0, 1]
    initial_vals : List[float]
        Reference sample the detector starts from

    Examples
    --------
    >>> config: DeadbandConfig = {'threshold': 0.1, 'initial_vals': [0.0, 0.0, 0.0]}
    """

    threshold: float
    initial_vals: List[float]


class ISSConfig(ComponentConfig, total=False):
    """
    ISS compensator configuration.

    Attributes
    ----------
    tau : float
        Time constant (>= 0)
    mu_max : float
        Upper bound on the force/velocity gradient (> 0)
    """

    tau: float
    mu_max: float


class TDPAConfig(ComponentConfig, total=False):
    """
    TDPA controller configuration.

    Attributes
    ----------
    vel_epsilon : Optional[float]
        Squared-velocity floor below which no damping can be injected.
        None selects the smallest normal number of the dtype.
    """

    vel_epsilon: Optional[float]


class WaveConfig(ComponentConfig, total=False):
    """
    WAVE transform configuration.

    Attributes
    ----------
    b : float
        Wave impedance (> 0)
    """

    b: float


class PDConfig(ComponentConfig, total=False):
    """PD controller gains."""

    k_p: float
    k_d: float


class PIDConfig(ComponentConfig, total=False):
    """PID controller gains."""

    k_p: float
    k_i: float
    k_d: float


# ============================================================================
# State Snapshot Types
# ============================================================================


class DeadbandState(TypedDict):
    """Last retained sample and the current deadband radius."""

    prev_vals: Vector
    deadband: float


class ISSState(TypedDict):
    """Force sample of the previous tick."""

    prev_force: Vector


class TDPAState(TypedDict):
    """
    Energy ledger of a TDPA controller.

    Attributes
    ----------
    alpha : float
        Damping coefficient injected on the last tick (>= 0)
    energy : float
        Running energy accumulator
    prev_vel : Vector
        Velocity sample of the last tick
    """

    alpha: float
    energy: float
    prev_vel: Vector


class PIDState(TypedDict):
    """Accumulated integral of the position error."""

    integral_error: Vector


__all__ = [
    "ComponentConfig",
    "DeadbandConfig",
    "ISSConfig",
    "TDPAConfig",
    "WaveConfig",
    "PDConfig",
    "PIDConfig",
    "DeadbandState",
    "ISSState",
    "TDPAState",
    "PIDState",
]
