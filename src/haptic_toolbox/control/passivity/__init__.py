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
Passivity and stability compensators.

- ISS: input-to-state stable force/velocity compensation
- TDPA: time domain passivity observer and controller
- WAVE: wave variable transform for delayed channels
"""

from .iss import ISS
from .tdpa import TDPA
from .wave import WAVE

__all__ = ["ISS", "TDPA", "WAVE"]
