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
Type System for haptic_toolbox

- backends: backend and precision identifiers, validators
- core: array, scalar and semantic vector aliases
- controllers: configuration and state TypedDicts
- utilities: backend type guards
"""

from .backends import (
    DEFAULT_BACKEND,
    DEFAULT_DTYPE,
    VALID_BACKENDS,
    VALID_PRECISIONS,
    Backend,
    DTypeLike,
    Precision,
    SampleOrigin,
    validate_backend,
    validate_dtype,
)
from .controllers import (
    ComponentConfig,
    DeadbandConfig,
    DeadbandState,
    ISSConfig,
    ISSState,
    PDConfig,
    PIDConfig,
    PIDState,
    TDPAConfig,
    TDPAState,
    WaveConfig,
)
from .core import (
    ArrayLike,
    ForceVector,
    NumpyArray,
    PositionVector,
    ScalarLike,
    Vector,
    VectorLike,
    VelocityVector,
    WaveVector,
)
from .utilities import get_backend, is_jax, is_numpy, is_torch

__all__ = [
    # Backends
    "Backend",
    "Precision",
    "DTypeLike",
    "SampleOrigin",
    "VALID_BACKENDS",
    "VALID_PRECISIONS",
    "DEFAULT_BACKEND",
    "DEFAULT_DTYPE",
    "validate_backend",
    "validate_dtype",
    # Core
    "ArrayLike",
    "NumpyArray",
    "ScalarLike",
    "VectorLike",
    "Vector",
    "ForceVector",
    "VelocityVector",
    "PositionVector",
    "WaveVector",
    # Configs and states
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
    # Utilities
    "get_backend",
    "is_numpy",
    "is_torch",
    "is_jax",
]
