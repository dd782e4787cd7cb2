"""Services module initialization."""
from .settings import Settings
from .log import setup_logger
from .filter_runner import FilterRunner, FilterManager, FilterSignals

__all__ = ["Settings", "setup_logger", "FilterRunner", "FilterManager", "FilterSignals"]
