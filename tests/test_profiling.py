"""Tests for tagline.profiling — format metrics API."""

import pytest

from tagline import format_string
from tagline.errors import TagMismatchError
from tagline.profiling import (
    FormatAccumulator,
    get_format_accumulator,
    profiled_format,
)


class TestGetFormatAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_format_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_format():
            pass
        assert get_format_accumulator() is None


class TestProfiledFormat:
    def test_accumulator_available_inside_context(self) -> None:
        with profiled_format() as acc:
            assert get_format_accumulator() is acc

    def test_records_run(self) -> None:
        source = "<a><b></b><c>t</c></a>"
        with profiled_format() as acc:
            format_string(source)
        assert acc.documents == 1
        assert acc.chars_read == len(source)
        assert acc.tags == 6
        assert acc.lines_written == 4

    def test_records_multiple_runs(self) -> None:
        with profiled_format() as acc:
            format_string("<a/>")
            format_string("<b/>")
        assert acc.documents == 2
        assert acc.lines_written == 2

    def test_failed_run_not_recorded(self) -> None:
        with profiled_format() as acc:
            with pytest.raises(TagMismatchError):
                format_string("<a></b>")
        assert acc.documents == 0

    def test_total_duration_positive(self) -> None:
        with profiled_format() as acc:
            format_string("<a><b/></a>")
        assert acc.total_duration_ms > 0


class TestSummary:
    def test_empty_summary(self) -> None:
        summary = FormatAccumulator().summary()
        assert summary["documents"] == 0
        assert summary["chars_read"] == 0
        assert summary["tags"] == 0
        assert summary["lines_written"] == 0

    def test_summary_keys(self) -> None:
        with profiled_format() as acc:
            format_string("<a/>")
        assert set(acc.summary()) == {"total_ms", "documents", "chars_read", "tags", "lines_written"}
