"""
Threaded filter runner.

Runs a filter or pipeline in a QRunnable on a QThreadPool, emits
progress/log signals and supports cooperative stopping. The processing
core stays free of Qt: the runner hands it a progress callback and a
cancellation predicate.
"""

import logging
import threading
from typing import Optional, Union

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from ..core import PixelBuffer
from ..processing import ImageFilter, FilterPipeline, ProcessingExecutor


logger = logging.getLogger(__name__)

FilterJob = Union[ImageFilter, FilterPipeline]


class FilterSignals(QObject):
    """Signals emitted by FilterRunner."""
    progress = Signal(int)  # percent
    finished = Signal(object)  # result PixelBuffer, or None when stopped
    failed = Signal(str)  # error message
    log = Signal(str)  # log message


class FilterRunner(QRunnable):
    """Runnable applying one filter or pipeline to one image."""

    def __init__(self, source: PixelBuffer, job: FilterJob):
        super().__init__()
        # The manager holds the reference until finished/failed is delivered
        self.setAutoDelete(False)
        self.source = source
        self.job = job
        self.signals = FilterSignals()
        self.executor = ProcessingExecutor()
        self._stop_event = threading.Event()

    def request_stop(self) -> None:
        """Request the run to stop at the next column boundary."""
        self._stop_event.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def _job_name(self) -> str:
        if isinstance(self.job, FilterPipeline):
            return f"pipeline of {len(self.job.stages())} filter(s)"
        return self.job.name

    def run(self) -> None:
        """Execute the job and report the outcome through signals."""
        try:
            self._log(f"Applying {self._job_name()} to {self.source.width}x{self.source.height} image")

            if isinstance(self.job, FilterPipeline):
                result = self.executor.execute(
                    self.source, self.job, self.signals.progress.emit, self._stop_event.is_set
                )
            else:
                result = self.executor.execute_filter(
                    self.source, self.job, self.signals.progress.emit, self._stop_event.is_set
                )

            if result is None:
                self._log("Stopped by user")
            else:
                self.signals.progress.emit(100)
                self._log("Filter completed")
            self.signals.finished.emit(result)

        except Exception as e:
            logger.exception("Filter run failed")
            self._log(f"FATAL: {e}")
            self.signals.failed.emit(str(e))

    def _log(self, message: str) -> None:
        logger.info(message)
        self.signals.log.emit(message)


class FilterManager(QObject):
    """Manages the filter thread pool. One run at a time."""

    finished = Signal(object)  # result PixelBuffer, or None when stopped
    failed = Signal(str)
    log = Signal(str)
    progress = Signal(int)

    def __init__(self, thread_pool: Optional[QThreadPool] = None):
        super().__init__()
        self.thread_pool = thread_pool or QThreadPool()
        self.current_runner: Optional[FilterRunner] = None

    def is_running(self) -> bool:
        return self.current_runner is not None

    def start(self, source: PixelBuffer, job: FilterJob) -> bool:
        """Start a filter run in a worker thread. Returns False if one is already running."""
        if self.current_runner:
            self.log.emit("Filter already in progress")
            return False

        self.current_runner = FilterRunner(source, job)
        self.current_runner.signals.finished.connect(self._on_finished)
        self.current_runner.signals.failed.connect(self._on_failed)
        self.current_runner.signals.log.connect(self.log.emit)
        self.current_runner.signals.progress.connect(self.progress.emit)

        self.thread_pool.start(self.current_runner)
        return True

    def stop(self) -> None:
        """Request the current run to stop."""
        if self.current_runner:
            self.current_runner.request_stop()

    def wait(self, msecs: int = -1) -> bool:
        """Block until the pool is idle."""
        return self.thread_pool.waitForDone(msecs)

    def _on_finished(self, result: Optional[PixelBuffer]) -> None:
        self.current_runner = None
        self.finished.emit(result)

    def _on_failed(self, message: str) -> None:
        self.current_runner = None
        self.failed.emit(message)
