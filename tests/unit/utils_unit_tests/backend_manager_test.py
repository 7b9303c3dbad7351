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
Unit tests for BackendManager

Tests cover:
1. Initialization and availability
2. Backend detection
3. Conversion to/from NumPy with dtype preserved
4. Components handing results back in the caller's backend and device
"""

import numpy as np
import pytest

# Conditional imports for backends
torch_available = True
try:
    import torch
except ImportError:
    torch_available = False

jax_available = True
try:
    import jax
    import jax.numpy as jnp
except ImportError:
    jax_available = False

from haptic_toolbox import ISS, TDPA, WAVE, DeadbandDetector
from haptic_toolbox.types.backends import SampleOrigin
from haptic_toolbox.utils.backend_manager import BackendManager

# ============================================================================
# Test Class 1: Initialization
# ============================================================================


class TestInitialization:
    def test_default(self):
        mgr = BackendManager()
        assert mgr.default_backend == "numpy"
        assert "numpy" in mgr.available_backends

    def test_invalid_default(self):
        with pytest.raises(ValueError, match="Invalid backend"):
            BackendManager(default_backend="tensorflow")

    def test_available_backends_is_copy(self):
        mgr = BackendManager()
        mgr.available_backends.append("fake")
        assert "fake" not in mgr.available_backends

    @pytest.mark.skipif(torch_available, reason="PyTorch installed")
    def test_require_missing_torch(self):
        with pytest.raises(RuntimeError, match="pip install torch"):
            BackendManager().require_backend("torch")

    def test_repr(self):
        assert repr(BackendManager()).startswith("BackendManager(default='numpy'")


# ============================================================================
# Test Class 2: Detection and NumPy Conversion
# ============================================================================


class TestNumpy:
    def test_detect_numpy(self):
        assert BackendManager().detect(np.zeros(3)) == "numpy"

    def test_detect_python_values(self):
        mgr = BackendManager()
        assert mgr.detect(1.0) == "numpy"
        assert mgr.detect([1.0, 2.0]) == "numpy"

    def test_to_numpy_cast(self):
        arr = BackendManager().to_numpy([1, 2], dtype=np.float32)
        assert arr.dtype == np.float32

    def test_convert_numpy_noop(self):
        arr = np.zeros(3)
        assert BackendManager().convert(arr, "numpy") is arr

    def test_origin_of_python_values(self):
        mgr = BackendManager()
        assert mgr.origin([1.0, 2.0]) == SampleOrigin("numpy", None)
        assert mgr.origin(np.zeros(2)) == SampleOrigin("numpy")

    def test_restore_numpy_noop(self):
        arr = np.zeros(3)
        assert BackendManager().restore(arr, SampleOrigin("numpy")) is arr


# ============================================================================
# Test Class 3: PyTorch
# ============================================================================


@pytest.mark.skipif(not torch_available, reason="PyTorch not installed")
class TestTorch:
    def test_detect(self):
        assert BackendManager().detect(torch.zeros(3)) == "torch"

    def test_round_trip_preserves_dtype(self):
        mgr = BackendManager()
        x = torch.tensor([1.0, 2.0], dtype=torch.float64)

        x_np = mgr.to_numpy(x)
        assert x_np.dtype == np.float64

        back = mgr.convert(x_np, "torch")
        assert isinstance(back, torch.Tensor)
        assert back.dtype == torch.float64

    def test_tdpa_returns_tensor(self):
        tdpa = TDPA(dim=3)
        out = tdpa.calculate_force(torch.tensor([1.0, 0.0, 0.0]), torch.tensor([-1.0, 0.0, 0.0]))

        assert isinstance(out, torch.Tensor)
        assert torch.allclose(out, torch.zeros(3, dtype=out.dtype))

    def test_iss_returns_tensor(self):
        iss = ISS(tau=0.0, mu_max=1.0, dim=2, dtype="float32")
        out = iss.calculate_force(torch.tensor([1.0, 2.0]), 0.01)

        assert isinstance(out, torch.Tensor)
        assert out.dtype == torch.float32

    def test_origin_records_device(self):
        origin = BackendManager().origin(torch.zeros(3))
        assert origin == SampleOrigin("torch", torch.device("cpu"))

    def test_convert_places_on_device(self):
        out = BackendManager().convert(np.ones(2), "torch", device=torch.device("meta"))

        assert out.device.type == "meta"
        assert out.dtype == torch.float64

    @pytest.mark.skipif(
        not (torch_available and torch.cuda.is_available()), reason="CUDA not available"
    )
    def test_cuda_input_returns_cuda_tensor(self):
        tdpa = TDPA(dim=3)
        vel = torch.tensor([1.0, 0.0, 0.0], device="cuda")
        out = tdpa.calculate_force(vel, torch.tensor([-1.0, 0.0, 0.0], device="cuda"))

        assert out.device.type == "cuda"

    def test_deadband_accepts_tensor(self):
        detector = DeadbandDetector(0.1, torch.zeros(3))
        assert not detector.is_in_deadband(torch.ones(3))


# ============================================================================
# Test Class 4: JAX
# ============================================================================


@pytest.mark.skipif(not jax_available, reason="JAX not installed")
class TestJax:
    def test_detect(self):
        assert BackendManager().detect(jnp.zeros(3)) == "jax"

    def test_wave_returns_jax_array(self):
        wave = WAVE(b=2.0, dim=2, dtype="float32")
        out = wave.calculate_u_m(jnp.array([1.0, 1.0]), jnp.array([0.0, 0.0]))

        assert BackendManager().detect(out) == "jax"
        np.testing.assert_allclose(np.asarray(out), [0.5, 0.5], rtol=1e-6)

    def test_origin_records_device(self):
        origin = BackendManager().origin(jnp.zeros(3))
        assert origin.backend == "jax"
        assert origin.device is not None

    def test_float64_result_keeps_precision_or_warns(self):
        mgr = BackendManager()
        x_np = np.array([1.0, 2.0])
        x64_enabled = jnp.asarray(np.zeros(1)).dtype == np.float64

        if x64_enabled:
            assert mgr.convert(x_np, "jax").dtype == np.float64
        else:
            with pytest.warns(RuntimeWarning, match="jax_enable_x64"):
                out = mgr.convert(x_np, "jax")
            assert out.dtype == np.float32

    def test_restore_places_on_origin_device(self):
        mgr = BackendManager()
        device = jax.devices()[0]
        out = mgr.restore(np.ones(2, dtype=np.float32), SampleOrigin("jax", device))

        assert device in out.devices()
