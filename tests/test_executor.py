import pytest

from filterlab.core import Color, PixelBuffer, FilterParameterError
from filterlab.processing import (
    ImageFilter,
    InvertFilter,
    BrightnessFilter,
    ProcessingExecutor,
)


class RecordingFilter(ImageFilter):
    """Returns the source pixel and records visit order."""

    def __init__(self):
        super().__init__(filter_id="recording", name="Recording", category="Test")
        self.visits = []

    def compute_pixel(self, source, x, y):
        self.visits.append((x, y))
        return source.get_pixel(x, y)


def test_traversal_is_column_major():
    f = RecordingFilter()
    ProcessingExecutor().execute_filter(PixelBuffer(3, 2), f)
    assert f.visits == [(0, 0), (0, 1), (1, 0), (1, 1), (2, 0), (2, 1)]


@pytest.mark.parametrize("width, expected", [
    (1, [0]),
    (3, [0, 33, 66]),
    (4, [0, 25, 50, 75]),
])
def test_progress_reported_once_per_column(width, expected):
    reported = []
    ProcessingExecutor().execute_filter(PixelBuffer(width, 2), InvertFilter(), reported.append)
    assert reported == expected


def test_cancel_before_first_column_returns_none():
    f = RecordingFilter()
    reported = []
    result = ProcessingExecutor().execute_filter(
        PixelBuffer(4, 4), f, reported.append, lambda: True
    )
    assert result is None
    assert f.visits == []
    assert reported == [0]


def test_cancel_mid_pass_stops_between_columns():
    f = RecordingFilter()
    polls = []

    def is_cancelled():
        polls.append(True)
        return len(polls) > 2

    result = ProcessingExecutor().execute_filter(PixelBuffer(5, 3), f, None, is_cancelled)
    assert result is None
    # two full columns computed, none of the third
    assert len(f.visits) == 6
    assert {x for x, _ in f.visits} == {0, 1}


def test_apply_delegates_to_executor():
    source = PixelBuffer.filled(2, 2, Color(10, 20, 30))
    reported = []
    result = InvertFilter().apply(source, reported.append)
    assert result.get_pixel(1, 1) == Color(245, 235, 225)
    assert reported == [0, 50]


def test_result_is_frozen_new_buffer():
    source = PixelBuffer(2, 2)
    result = InvertFilter().apply(source)
    assert result is not source
    assert result.frozen
    assert not source.frozen


def test_invalid_parameters_raise_before_pass():
    f = BrightnessFilter()
    f.get_parameter("offset").value = 999
    reported = []
    with pytest.raises(FilterParameterError):
        ProcessingExecutor().execute_filter(PixelBuffer(2, 2), f, reported.append)
    assert reported == []


def test_prepare_picks_up_direct_parameter_edits():
    f = BrightnessFilter()
    f.get_parameter("offset").value = 5
    result = f.apply(PixelBuffer(1, 1))
    assert result.get_pixel(0, 0) == Color(5, 5, 5)


def test_cancelled_distinct_from_black_result():
    result = ProcessingExecutor().execute_filter(
        PixelBuffer.filled(1, 1, Color(255, 255, 255)), InvertFilter()
    )
    assert result is not None
    assert result.get_pixel(0, 0) == Color(0, 0, 0)
