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
haptic_toolbox
==============

Stateful numeric filters and compensators for bilateral haptic
teleoperation: deadband compression, ISS and time domain passivity
compensation, wave variables, and PD/PID trackers.

All components work on fixed-dimension vectors of float32 or float64,
accept NumPy arrays, PyTorch tensors and JAX arrays, and keep O(1)
memory.

>>> from haptic_toolbox import TDPA, WAVE
>>>
>>> tdpa = TDPA(dim=3)
>>> wave = WAVE(b=10.0, dim=3)

License
-------
GNU Affero General Public License v3.0
"""

from .control import ISS, PD, PID, TDPA, WAVE, DeadbandDetector
from .utils import BackendManager, VectorSpace

__version__ = "0.1.0"

__all__ = [
    "DeadbandDetector",
    "ISS",
    "TDPA",
    "WAVE",
    "PD",
    "PID",
    "BackendManager",
    "VectorSpace",
]
