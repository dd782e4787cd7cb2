"""
Processing executor - drives filters over whole images.

This module holds the one loop every filter shares: walk the image column
by column, report progress and poll for cancellation before each column,
and collect compute_pixel() results into a fresh buffer.
"""

import logging
from typing import Optional

from ..core import FilterParameterError, PixelBuffer
from .filters import ImageFilter, ProgressCallback, CancelPredicate
from .pipeline import FilterPipeline


logger = logging.getLogger(__name__)


def _no_progress(percent: int) -> None:
    pass


def _never_cancelled() -> bool:
    return False


class ProcessingExecutor:
    """Executes filters and filter pipelines on PixelBuffer objects."""

    def execute(
        self,
        source: PixelBuffer,
        pipeline: FilterPipeline,
        on_progress: Optional[ProgressCallback] = None,
        is_cancelled: Optional[CancelPredicate] = None,
    ) -> Optional[PixelBuffer]:
        """
        Apply all enabled filters in pipeline to image sequentially.

        Args:
            source: Input image buffer
            pipeline: Filter pipeline
            on_progress: Receives overall percentage (0-100)
            is_cancelled: Polled before every column of every stage

        Returns:
            Processed image buffer, or None if cancelled
        """
        on_progress = on_progress or _no_progress
        is_cancelled = is_cancelled or _never_cancelled

        stages = pipeline.stages()
        if not stages:
            return source.copy().freeze()

        is_valid, errors = pipeline.validate()
        if not is_valid:
            raise FilterParameterError(f"Invalid pipeline: {errors}")

        stage_count = len(stages)
        result = source
        for stage, image_filter in enumerate(stages):
            def stage_progress(percent: int, stage: int = stage) -> None:
                on_progress((stage * 100 + percent) // stage_count)

            result = self.execute_filter(result, image_filter, stage_progress, is_cancelled)
            if result is None:
                return None

        return result

    def execute_filter(
        self,
        source: PixelBuffer,
        image_filter: ImageFilter,
        on_progress: Optional[ProgressCallback] = None,
        is_cancelled: Optional[CancelPredicate] = None,
    ) -> Optional[PixelBuffer]:
        """
        Apply a single filter to image buffer.

        Traverses columns (x) in the outer loop and rows (y) in the inner
        loop. Before each column, progress floor(x / width * 100) is
        reported and the cancellation predicate polled.

        Returns:
            New frozen buffer of identical dimensions, or None if cancelled
        """
        on_progress = on_progress or _no_progress
        is_cancelled = is_cancelled or _never_cancelled

        is_valid, errors = image_filter.validate_parameters()
        if not is_valid:
            raise FilterParameterError(f"Invalid filter parameters for {image_filter.name}: {errors}")
        image_filter.prepare()

        width = source.width
        height = source.height
        logger.debug("Applying %s to %dx%d image", image_filter.name, width, height)

        result = PixelBuffer(width, height)
        for x in range(width):
            on_progress(x * 100 // width)
            if is_cancelled():
                logger.info("%s cancelled at column %d of %d", image_filter.name, x, width)
                return None
            for y in range(height):
                result.set_pixel(x, y, image_filter.compute_pixel(source, x, y))

        logger.debug("Finished %s", image_filter.name)
        return result.freeze()
