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
Haptic Control Components
=========================

Online, sample-by-sample filters and compensators for bilateral haptic
teleoperation. No component depends on another; they are wired together
in the application control loop.

Data Reduction
--------------
>>> from haptic_toolbox.control import DeadbandDetector
>>>
>>> detector = DeadbandDetector(0.1, [0.0, 0.0, 0.0])
>>> if not detector.is_in_deadband(f):
...     channel.send(f)

Passivity
---------
>>> from haptic_toolbox.control import ISS, TDPA, WAVE
>>>
>>> tdpa = TDPA(dim=3)
>>> f_out = tdpa.calculate_force(v, f)
>>>
>>> wave = WAVE(b=10.0, dim=3)
>>> u_m = wave.calculate_u_m(f_m, v_m)

Tracking
--------
>>> from haptic_toolbox.control import PD, PID
>>>
>>> pid = PID(k_p=200.0, k_i=10.0, k_d=5.0, dim=3)
>>> f = pid.calculate_force(x_ref, x, v_ref, v, dt)
"""

from .compression import DeadbandDetector
from .controllers import PD, PID
from .passivity import ISS, TDPA, WAVE

__all__ = [
    # Data reduction
    "DeadbandDetector",
    # Passivity
    "ISS",
    "TDPA",
    "WAVE",
    # Tracking
    "PD",
    "PID",
]
