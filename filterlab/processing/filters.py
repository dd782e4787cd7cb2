"""
Filter definitions for the processing pipeline.

Each filter computes one output pixel from the source image via
compute_pixel(). The loop that drives it over the whole image lives in
the executor and is shared by every filter.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Optional, List, Dict, TYPE_CHECKING

from ..core import (
    CHANNEL_MIN,
    CHANNEL_MAX,
    clamp,
    Color,
    Kernel,
    KernelError,
    FilterParameterError,
    PixelBuffer,
)
from .kernels import box_kernel, sobel_kernel, sharpness_kernel, gaussian_kernel

if TYPE_CHECKING:
    from ..core.types import KernelLike


ProgressCallback = Callable[[int], None]
CancelPredicate = Callable[[], bool]

CATEGORY_COLOR = "Color Transforms"
CATEGORY_TONE = "Tone"
CATEGORY_CONVOLUTION = "Convolution"


class ParameterType(Enum):
    """Type of filter parameter."""
    FLOAT = auto()
    INT = auto()
    MATRIX = auto()


@dataclass
class FilterParameter:
    """A single parameter for a filter."""
    name: str
    param_type: ParameterType
    value: Any
    min_val: Optional[float] = None
    max_val: Optional[float] = None
    description: str = ""

    def validate(self) -> tuple[bool, str]:
        """Validate parameter value. Returns (is_valid, error_message)."""

        if self.param_type == ParameterType.FLOAT:
            if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
                return False, f"{self.name} must be a number"
            if self.min_val is not None and self.value < self.min_val:
                return False, f"{self.name} must be >= {self.min_val}"
            if self.max_val is not None and self.value > self.max_val:
                return False, f"{self.name} must be <= {self.max_val}"

        elif self.param_type == ParameterType.INT:
            if isinstance(self.value, bool) or not isinstance(self.value, int):
                return False, f"{self.name} must be an integer"
            if self.min_val is not None and self.value < self.min_val:
                return False, f"{self.name} must be >= {int(self.min_val)}"
            if self.max_val is not None and self.value > self.max_val:
                return False, f"{self.name} must be <= {int(self.max_val)}"

        elif self.param_type == ParameterType.MATRIX:
            try:
                Kernel(self.value)
            except KernelError as e:
                return False, f"{self.name}: {e}"

        return True, ""


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def _channel(value: int) -> int:
    return clamp(value, CHANNEL_MIN, CHANNEL_MAX)


@dataclass
class ImageFilter:
    """Base class for all image filters."""
    filter_id: str
    name: str
    category: str
    enabled: bool = True
    order: int = 0
    parameters: Dict[str, FilterParameter] = field(default_factory=dict)

    def compute_pixel(self, source: PixelBuffer, x: int, y: int) -> Color:
        """Compute the output color at (x, y). Must not modify source."""
        raise NotImplementedError

    def prepare(self) -> None:
        """Derive cached state (kernels, constants) from current parameter values."""

    def apply(
        self,
        source: PixelBuffer,
        on_progress: Optional[ProgressCallback] = None,
        is_cancelled: Optional[CancelPredicate] = None,
    ) -> Optional[PixelBuffer]:
        """Run this filter over source. Returns None if cancelled."""
        from .executor import ProcessingExecutor
        return ProcessingExecutor().execute_filter(source, self, on_progress, is_cancelled)

    def validate_parameters(self) -> tuple[bool, List[str]]:
        """Validate all parameters. Returns (is_valid, list_of_errors)."""
        errors = []
        for param in self.parameters.values():
            is_valid, error_msg = param.validate()
            if not is_valid:
                errors.append(error_msg)
        return len(errors) == 0, errors

    def get_parameter(self, name: str) -> Optional[FilterParameter]:
        """Get a parameter by name."""
        return self.parameters.get(name)

    def set_parameter(self, name: str, value: Any) -> bool:
        """Set a parameter value. Returns success."""
        if name not in self.parameters:
            return False
        self.parameters[name].value = value
        is_valid, _ = self.validate_parameters()
        if is_valid:
            self.prepare()
        return is_valid

    def clone(self) -> "ImageFilter":
        """Create a deep copy of this filter with same parameters."""
        from copy import deepcopy
        return deepcopy(self)

    def _check_parameters(self) -> None:
        is_valid, errors = self.validate_parameters()
        if not is_valid:
            raise FilterParameterError(f"Invalid parameters for {self.name}: {'; '.join(errors)}")


# ============================================================================
# PER-PIXEL FILTERS
# ============================================================================

class InvertFilter(ImageFilter):
    """Invert each channel (255 - value)."""

    def __init__(self):
        super().__init__(
            filter_id="invert",
            name="Invert",
            category=CATEGORY_COLOR,
        )

    def compute_pixel(self, source: PixelBuffer, x: int, y: int) -> Color:
        r, g, b = source.get_rgb(x, y)
        return Color(255 - r, 255 - g, 255 - b)


class BrightnessFilter(ImageFilter):
    """Add a fixed offset to every channel."""

    def __init__(self, offset: int = 20):
        super().__init__(
            filter_id="brightness",
            name="Brightness",
            category=CATEGORY_TONE,
            parameters={
                "offset": FilterParameter(
                    name="Offset",
                    param_type=ParameterType.INT,
                    value=offset,
                    min_val=-255,
                    max_val=255,
                    description="Value added to each channel"
                ),
            }
        )
        self._check_parameters()
        self.prepare()

    def prepare(self) -> None:
        self._offset = self.parameters["offset"].value

    def compute_pixel(self, source: PixelBuffer, x: int, y: int) -> Color:
        r, g, b = source.get_rgb(x, y)
        k = self._offset
        return Color(_channel(r + k), _channel(g + k), _channel(b + k))


# Luminance weights in hundredths: 0.36 R + 0.53 G + 0.11 B
LUMA_WEIGHTS = (36, 53, 11)


def intensity_hundredths(r: int, g: int, b: int) -> int:
    """Luminance scaled by 100, exact."""
    wr, wg, wb = LUMA_WEIGHTS
    return wr * r + wg * g + wb * b


class GrayscaleFilter(ImageFilter):
    """Replace every channel with the truncated luminance."""

    def __init__(self):
        super().__init__(
            filter_id="grayscale",
            name="Grayscale",
            category=CATEGORY_COLOR,
        )

    def compute_pixel(self, source: PixelBuffer, x: int, y: int) -> Color:
        intensity = _channel(_trunc_div(intensity_hundredths(*source.get_rgb(x, y)), 100))
        return Color(intensity, intensity, intensity)


class SepiaFilter(ImageFilter):
    """Luminance tinted by +2k red, +0.5k green, -k blue."""

    def __init__(self, depth: int = 40):
        super().__init__(
            filter_id="sepia",
            name="Sepia",
            category=CATEGORY_COLOR,
            parameters={
                "depth": FilterParameter(
                    name="Depth",
                    param_type=ParameterType.INT,
                    value=depth,
                    min_val=0,
                    max_val=255,
                    description="Tint strength k"
                ),
            }
        )
        self._check_parameters()
        self.prepare()

    def prepare(self) -> None:
        self._depth = self.parameters["depth"].value

    def compute_pixel(self, source: PixelBuffer, x: int, y: int) -> Color:
        intensity = intensity_hundredths(*source.get_rgb(x, y))
        k = self._depth
        return Color(
            _channel(_trunc_div(intensity + 200 * k, 100)),
            _channel(_trunc_div(intensity + 50 * k, 100)),
            _channel(_trunc_div(intensity - 100 * k, 100)),
        )


# ============================================================================
# CONVOLUTION FILTERS
# ============================================================================

IDENTITY_KERNEL = Kernel([[1.0]])


class MatrixFilter(ImageFilter):
    """
    Convolve the image with a kernel.

    Neighbors outside the image are replaced by the nearest edge pixel.
    Each channel sum is truncated, then clamped to [0, 255].
    """

    def __init__(
        self,
        kernel: Optional["KernelLike"] = None,
        filter_id: str = "matrix",
        name: str = "Matrix",
        parameters: Optional[Dict[str, FilterParameter]] = None,
    ):
        kernel = Kernel(kernel) if kernel is not None else IDENTITY_KERNEL
        if parameters is None:
            parameters = {
                "kernel": FilterParameter(
                    name="Kernel",
                    param_type=ParameterType.MATRIX,
                    value=kernel.to_list(),
                    description="Weights indexed [x][y], odd dimensions"
                ),
            }
        super().__init__(
            filter_id=filter_id,
            name=name,
            category=CATEGORY_CONVOLUTION,
            parameters=parameters,
        )
        self.kernel = kernel

    @property
    def kernel(self) -> Kernel:
        return self._kernel

    @kernel.setter
    def kernel(self, kernel: "KernelLike") -> None:
        self._kernel = Kernel(kernel)
        # Plain floats are much faster to index than numpy scalars
        self._weights = self._kernel.to_list()

    def prepare(self) -> None:
        param = self.parameters.get("kernel")
        if param is not None:
            self.kernel = param.value

    def compute_pixel(self, source: PixelBuffer, x: int, y: int) -> Color:
        radius_x = self._kernel.radius_x
        radius_y = self._kernel.radius_y
        weights = self._weights
        max_x = source.width - 1
        max_y = source.height - 1

        result_r = 0.0
        result_g = 0.0
        result_b = 0.0
        for l in range(-radius_y, radius_y + 1):
            id_y = clamp(y + l, 0, max_y)
            for k in range(-radius_x, radius_x + 1):
                id_x = clamp(x + k, 0, max_x)
                r, g, b = source.get_rgb(id_x, id_y)
                weight = weights[k + radius_x][l + radius_y]
                result_r += r * weight
                result_g += g * weight
                result_b += b * weight

        return Color(
            _channel(int(result_r)),
            _channel(int(result_g)),
            _channel(int(result_b)),
        )


class BlurFilter(MatrixFilter):
    """3x3 box blur."""

    def __init__(self):
        super().__init__(box_kernel(3, 3), filter_id="blur", name="Blur", parameters={})


class SobelFilter(MatrixFilter):
    """3x3 Sobel edge detection."""

    def __init__(self):
        super().__init__(sobel_kernel(), filter_id="sobel", name="Sobel", parameters={})


class SharpnessFilter(MatrixFilter):
    """3x3 sharpen."""

    def __init__(self):
        super().__init__(sharpness_kernel(), filter_id="sharpness", name="Sharpness", parameters={})


class GaussianFilter(MatrixFilter):
    """Normalised Gaussian blur."""

    def __init__(self, radius: int = 3, sigma: float = 2.0):
        super().__init__(
            filter_id="gaussian",
            name="Gaussian Blur",
            parameters={
                "radius": FilterParameter(
                    name="Radius",
                    param_type=ParameterType.INT,
                    value=radius,
                    min_val=0,
                    max_val=25,
                    description="Kernel radius in pixels"
                ),
                "sigma": FilterParameter(
                    name="Sigma",
                    param_type=ParameterType.FLOAT,
                    value=sigma,
                    min_val=1e-3,
                    max_val=100.0,
                    description="Spread of the Gaussian"
                ),
            }
        )
        self._check_parameters()
        self.prepare()

    def prepare(self) -> None:
        self.kernel = gaussian_kernel(
            self.parameters["radius"].value,
            self.parameters["sigma"].value,
        )


# Registry of all available filters
FILTER_REGISTRY = {
    "invert": InvertFilter,
    "brightness": BrightnessFilter,
    "grayscale": GrayscaleFilter,
    "sepia": SepiaFilter,
    "matrix": MatrixFilter,
    "blur": BlurFilter,
    "sobel": SobelFilter,
    "sharpness": SharpnessFilter,
    "gaussian": GaussianFilter,
}


def create_filter(filter_id: str, **params) -> Optional[ImageFilter]:
    """Create a filter instance by ID. Returns None if filter not found."""
    if filter_id not in FILTER_REGISTRY:
        return None
    return FILTER_REGISTRY[filter_id](**params)


def get_filters_by_category(category: str) -> List[ImageFilter]:
    """Get all filters in a specific category."""
    filters = []
    for filter_class in FILTER_REGISTRY.values():
        f = filter_class()
        if f.category == category:
            filters.append(f)
    return filters


def get_all_categories() -> List[str]:
    """Get all filter categories in order."""
    categories = []
    seen = set()
    for filter_class in FILTER_REGISTRY.values():
        f = filter_class()
        if f.category not in seen:
            categories.append(f.category)
            seen.add(f.category)

    preferred_order = [
        CATEGORY_COLOR,
        CATEGORY_TONE,
        CATEGORY_CONVOLUTION,
    ]

    result = [cat for cat in preferred_order if cat in categories]
    for cat in categories:
        if cat not in result:
            result.append(cat)

    return result
