"""Core types module initialization."""
from .errors import FilterLabError, KernelError, FilterParameterError
from .types import (
    CHANNEL_MIN,
    CHANNEL_MAX,
    clamp,
    Color,
    BLACK,
    WHITE,
    PixelBuffer,
    Kernel,
)

__all__ = [
    "FilterLabError",
    "KernelError",
    "FilterParameterError",
    "CHANNEL_MIN",
    "CHANNEL_MAX",
    "clamp",
    "Color",
    "BLACK",
    "WHITE",
    "PixelBuffer",
    "Kernel",
]
