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
Backend Manager for Multi-Backend Sample Handling

Handles:
- Backend detection from array types
- Array conversion between backends (dtype preserved)
- Backend availability checking

Components compute in NumPy. A BackendManager sits at their boundary:
incoming PyTorch/JAX samples are brought to NumPy and results are sent
back to the backend the caller used.
"""

import warnings
from typing import Any, List, Optional

import numpy as np

from haptic_toolbox.types.backends import (
    DEFAULT_BACKEND,
    Backend,
    SampleOrigin,
    validate_backend,
)
from haptic_toolbox.types.core import ArrayLike
from haptic_toolbox.types.utilities import get_backend


class BackendManager:
    """
    Manages backend detection and conversion.

    Supports NumPy, PyTorch, and JAX with automatic detection and
    conversion between them. Conversions keep the floating precision of
    the source array.

    Example:
        >>> mgr = BackendManager()
        >>>
        >>> # Auto-detect backend
        >>> x = torch.tensor([1.0])
        >>> backend = mgr.detect(x)  # Returns 'torch'
        >>>
        >>> # Convert between backends
        >>> x_np = mgr.to_numpy(x)
        >>> x_back = mgr.convert(x_np, 'torch')
    """

    def __init__(self, default_backend: Backend = DEFAULT_BACKEND):
        """
        Initialize backend manager.

        Args:
            default_backend: Backend returned for inputs with no backend of
                their own (Python scalars and sequences)
        """
        self._default_backend: Backend = validate_backend(default_backend)
        self._available_backends = self._detect_available_backends()

        if default_backend not in self._available_backends:
            raise RuntimeError(
                f"Default backend '{default_backend}' is not available. "
                f"Available backends: {self._available_backends}"
            )

    @property
    def default_backend(self) -> Backend:
        """Get current default backend"""
        return self._default_backend

    @property
    def available_backends(self) -> List[Backend]:
        """Get list of available backends"""
        return self._available_backends.copy()

    def _detect_available_backends(self) -> List[Backend]:
        available: List[Backend] = ["numpy"]

        try:
            import torch  # noqa: F401

            available.append("torch")
        except ImportError:
            pass

        try:
            import jax  # noqa: F401

            available.append("jax")
        except ImportError:
            pass

        return available

    def detect(self, array: ArrayLike) -> Backend:
        """
        Detect backend from array type.

        Plain Python scalars and sequences map to the default backend.

        Raises:
            TypeError: If array type is not recognized
        """
        backend = get_backend(array)
        if backend == "numpy" and not isinstance(array, np.ndarray):
            return self._default_backend
        return backend

    def origin(self, array: ArrayLike) -> SampleOrigin:
        """
        Detect backend and device of a sample.

        Example:
            >>> mgr.origin(torch.zeros(3, device='cuda'))
            SampleOrigin(backend='torch', device=device(type='cuda', index=0))
        """
        backend = self.detect(array)
        device = None
        source_backend = get_backend(array)
        if source_backend == "torch":
            device = array.device
        elif source_backend == "jax":
            devices = array.devices()
            if len(devices) == 1:
                device = next(iter(devices))
        return SampleOrigin(backend, device)

    def check_available(self, backend: Backend) -> bool:
        """Check if a backend is available."""
        return backend in self._available_backends

    def require_backend(self, backend: Backend):
        """
        Raise error if backend is not available.

        Raises:
            RuntimeError: If backend is not available
        """
        if not self.check_available(backend):
            if backend == "torch":
                msg = "PyTorch backend not available. Install with: pip install torch"
            elif backend == "jax":
                msg = "JAX backend not available. Install with: pip install jax jaxlib"
            else:
                msg = f"Backend '{backend}' not available"

            raise RuntimeError(msg)

    def to_numpy(self, array: ArrayLike, dtype: Optional[np.dtype] = None) -> np.ndarray:
        """
        Convert any supported input to a NumPy array.

        Args:
            array: NumPy array, PyTorch tensor, JAX array, sequence or scalar
            dtype: Optional target dtype (no cast if None)
        """
        source_backend = get_backend(array)

        if source_backend == "torch":
            array_np = array.detach().cpu().numpy()
        else:
            array_np = np.asarray(array)

        if dtype is not None and array_np.dtype != dtype:
            array_np = array_np.astype(dtype)
        return array_np

    def convert(
        self, array: np.ndarray, target_backend: Backend, device: Optional[Any] = None
    ) -> ArrayLike:
        """
        Convert a NumPy array to target backend.

        Args:
            array: Source NumPy array
            target_backend: Target backend
            device: torch.device or jax Device to place the result on
                (None leaves it on the backend's default device)

        Returns:
            Array in target backend format, same dtype

        Raises:
            RuntimeError: If target backend is not available
            ValueError: If target backend is invalid

        Notes:
            JAX stores float64 only with 64-bit mode enabled
            (jax.config.update("jax_enable_x64", True)). Without it the
            result is float32 and a RuntimeWarning is issued.

        Example:
            >>> mgr = BackendManager()
            >>> x_np = np.array([1.0, 2.0], dtype=np.float32)
            >>> x_torch = mgr.convert(x_np, 'torch')  # torch.float32 tensor
        """
        target_backend = validate_backend(target_backend)
        self.require_backend(target_backend)

        if target_backend == "numpy":
            return array
        elif target_backend == "torch":
            import torch

            tensor = torch.from_numpy(np.ascontiguousarray(array))
            if device is not None and tensor.device != device:
                tensor = tensor.to(device)
            return tensor
        elif target_backend == "jax":
            import jax
            import jax.numpy as jnp

            array_jax = jnp.asarray(array)
            if device is not None:
                array_jax = jax.device_put(array_jax, device)
            if array_jax.dtype != array.dtype:
                warnings.warn(
                    f"JAX stored a {array.dtype} result as {array_jax.dtype}; "
                    f"enable 64-bit mode with jax.config.update('jax_enable_x64', True)",
                    RuntimeWarning,
                    stacklevel=2,
                )
            return array_jax
        else:
            raise RuntimeError(f"Unhandled target backend: {target_backend}")

    def restore(self, array: np.ndarray, origin: SampleOrigin) -> ArrayLike:
        """Convert a NumPy result back to the backend and device of origin."""
        return self.convert(array, origin.backend, device=origin.device)

    def __repr__(self) -> str:
        return (
            f"BackendManager("
            f"default='{self._default_backend}', "
            f"available={self.available_backends})"
        )
