"""
Kernel presets for the convolution filters.

Kernels are built once when a filter is constructed; none of this runs in
the per-pixel path.
"""

import numpy as np

from ..core import Kernel, FilterParameterError


def box_kernel(size_x: int = 3, size_y: int = 3) -> Kernel:
    """Uniform box blur, every weight 1 / (size_x * size_y)."""
    weights = np.full((size_x, size_y), 1.0 / (size_x * size_y), dtype=np.float32)
    return Kernel(weights)


def sobel_kernel() -> Kernel:
    """3x3 Sobel gradient. Not normalised; strong edges saturate."""
    return Kernel([
        [-1, 0, 1],
        [-2, 0, 2],
        [-1, 0, 1],
    ])


def sharpness_kernel() -> Kernel:
    """3x3 sharpen: -1 on odd-parity cells, 0 on even, 5 at the center."""
    weights = np.zeros((3, 3), dtype=np.float32)
    for i in range(3):
        for j in range(3):
            weights[i, j] = 0 if (i + j) % 2 == 0 else -1
    weights[1, 1] = 5
    return Kernel(weights)


def gaussian_kernel(radius: int, sigma: float) -> Kernel:
    """
    Square Gaussian kernel of size 2 * radius + 1.

    Raw weight at offset (i, j) is exp(-(i^2 + j^2) / sigma^2); every cell is
    then divided by the total so the weights sum to 1.
    """
    if isinstance(radius, bool) or not isinstance(radius, (int, np.integer)) or radius < 0:
        raise FilterParameterError(f"Gaussian radius must be an integer >= 0, got {radius!r}")
    if not sigma > 0:
        raise FilterParameterError(f"Gaussian sigma must be > 0, got {sigma!r}")

    size = 2 * radius + 1
    weights = np.zeros((size, size), dtype=np.float32)
    norm = np.float32(0)
    # Divide by sigma twice: sigma * sigma underflows to 0 for tiny sigma.
    # Off-center exponents may then overflow to -inf, which exp maps to 0.
    with np.errstate(over="ignore"):
        for i in range(-radius, radius + 1):
            for j in range(-radius, radius + 1):
                exponent = -np.float64(i * i + j * j) / sigma / sigma
                weights[i + radius, j + radius] = np.exp(exponent)
                norm += weights[i + radius, j + radius]
    weights /= norm
    return Kernel(weights)
