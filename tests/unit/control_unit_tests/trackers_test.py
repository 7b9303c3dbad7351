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
Unit Tests for the PD and PID trackers

Tests cover:
1. PD law and gain accessors
2. PID integral accumulation, reset and gain accessors
3. Configuration round-trip
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from haptic_toolbox import PD, PID


class TestPD:
    def test_force(self):
        pd = PD(k_p=10.0, k_d=2.0, dim=2)
        result = pd.calculate_force([1.0, 0.0], [0.5, 0.5], [0.0, 1.0], [1.0, 0.0])

        assert_allclose(result, [10.0 * 0.5 + 2.0 * -1.0, 10.0 * -0.5 + 2.0 * 1.0])

    def test_stateless(self):
        pd = PD(k_p=1.0, k_d=1.0)
        first = pd.calculate_force(1.0, 0.0, 0.0, 0.0)
        second = pd.calculate_force(1.0, 0.0, 0.0, 0.0)
        assert_allclose(first, second)

    def test_gains(self):
        pd = PD(k_p=1.0, k_d=2.0)
        pd.set_k_p(3.0)
        pd.set_k_d(4.0)

        assert (pd.k_p, pd.k_d) == (3.0, 4.0)
        assert_allclose(pd.calculate_force(1.0, 0.0, 1.0, 0.0), [7.0])

    def test_config_round_trip(self):
        pd = PD(k_p=5.0, k_d=0.5, dim=3, dtype="float32")
        rebuilt = PD.from_config(pd.get_config())

        assert rebuilt.get_config() == pd.get_config()


class TestPID:
    def test_first_step(self):
        pid = PID(k_p=2.0, k_i=10.0, k_d=1.0)
        # e = 1, I = 0.1, f = 2 + 1 + (0 - 0.5)
        assert_allclose(pid.calculate_force(1.0, 0.0, 0.0, 0.5, 0.1), [2.5])

    def test_integral_accumulates(self):
        pid = PID(k_p=0.0, k_i=1.0, k_d=0.0, dim=2)
        for _ in range(4):
            out = pid.calculate_force([1.0, -2.0], [0.0, 0.0], [0.0, 0.0], [0.0, 0.0], 0.5)

        assert_allclose(pid.integral_error, [2.0, -4.0])
        assert_allclose(out, [2.0, -4.0])

    def test_reset(self):
        pid = PID(k_p=0.0, k_i=1.0, k_d=0.0)
        pid.calculate_force(1.0, 0.0, 0.0, 0.0, 1.0)
        pid.reset()

        assert_allclose(pid.get_state()["integral_error"], [0.0])

    def test_gains(self):
        pid = PID(k_p=1.0, k_i=2.0, k_d=3.0)
        pid.set_k_p(4.0)
        pid.set_k_i(5.0)
        pid.set_k_d(6.0)

        assert (pid.k_p, pid.k_i, pid.k_d) == (4.0, 5.0, 6.0)

    def test_invalid_gain(self):
        pid = PID(k_p=1.0, k_i=2.0, k_d=3.0)
        with pytest.raises(ValueError, match="k_i must be finite"):
            pid.set_k_i(np.inf)
        assert pid.k_i == 2.0

    def test_config_round_trip(self):
        pid = PID(k_p=1.0, k_i=0.5, k_d=0.25, dim=3)
        assert PID.from_config(pid.get_config()).get_config() == pid.get_config()
