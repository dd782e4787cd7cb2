"""Exception types for Filter Lab."""


class FilterLabError(Exception):
    """Base class for Filter Lab errors."""


class KernelError(FilterLabError, ValueError):
    """Malformed convolution kernel."""


class FilterParameterError(FilterLabError, ValueError):
    """Filter parameter missing or out of range."""
