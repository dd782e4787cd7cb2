"""
Filter Lab - pixel remap and convolution filters for 8-bit RGB images.

The Qt background runner lives in filterlab.services and is not imported
here, so the processing core can be used without PySide6 loaded.
"""

from .core import Color, PixelBuffer, Kernel, clamp
from .processing import (
    ImageFilter,
    InvertFilter,
    BrightnessFilter,
    GrayscaleFilter,
    SepiaFilter,
    MatrixFilter,
    BlurFilter,
    SobelFilter,
    SharpnessFilter,
    GaussianFilter,
    FilterPipeline,
    ProcessingExecutor,
    create_filter,
)

__version__ = "1.0.0"

__all__ = [
    "Color",
    "PixelBuffer",
    "Kernel",
    "clamp",
    "ImageFilter",
    "InvertFilter",
    "BrightnessFilter",
    "GrayscaleFilter",
    "SepiaFilter",
    "MatrixFilter",
    "BlurFilter",
    "SobelFilter",
    "SharpnessFilter",
    "GaussianFilter",
    "FilterPipeline",
    "ProcessingExecutor",
    "create_filter",
]
