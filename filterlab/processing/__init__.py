"""
Processing system for Filter Lab.

Per-pixel and convolution filters that compute a new image of identical
dimensions, the executor that drives them, and pipelines that chain them.
"""

from .pipeline import FilterPipeline
from .filters import (
    ImageFilter,
    FilterParameter,
    ParameterType,
    InvertFilter,
    BrightnessFilter,
    GrayscaleFilter,
    SepiaFilter,
    MatrixFilter,
    BlurFilter,
    SobelFilter,
    SharpnessFilter,
    GaussianFilter,
)
from .kernels import box_kernel, sobel_kernel, sharpness_kernel, gaussian_kernel
from .executor import ProcessingExecutor
from .filters import (
    create_filter,
    get_filters_by_category,
    get_all_categories,
    FILTER_REGISTRY,
)

__all__ = [
    "FilterPipeline",
    "ImageFilter",
    "FilterParameter",
    "ParameterType",
    "ProcessingExecutor",
    # Helpers
    "create_filter",
    "get_filters_by_category",
    "get_all_categories",
    "FILTER_REGISTRY",
    # Kernels
    "box_kernel",
    "sobel_kernel",
    "sharpness_kernel",
    "gaussian_kernel",
    # Filters
    "InvertFilter",
    "BrightnessFilter",
    "GrayscaleFilter",
    "SepiaFilter",
    "MatrixFilter",
    "BlurFilter",
    "SobelFilter",
    "SharpnessFilter",
    "GaussianFilter",
]
