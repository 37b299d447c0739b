"""Tests for report option validation."""

import pytest

from mission_report.exceptions import (
    ConfigurationError,
    InvalidColorFormatError,
    InvalidOptionsError,
    TableTooWideError,
)
from mission_report.report_options import ReportOptions


class TestReportOptions:
    def test_defaults_are_valid(self):
        options = ReportOptions()
        assert options.content_width == pytest.approx(495.28, abs=0.01)
        assert options.content_height == pytest.approx(721.89, abs=0.01)
        assert options.color("hit") == (0, 204, 0)
        assert options.color("miss") == (255, 0, 0)
        assert options.style("title").bold

    def test_shot_table_fits_content_width(self):
        options = ReportOptions()
        assert sum(options.shot_column_widths) <= options.content_width

    def test_invalid_color(self):
        with pytest.raises(InvalidColorFormatError):
            ReportOptions(colors={**ReportOptions().colors, "navy": "#12G"})

    def test_table_too_wide(self):
        with pytest.raises(TableTooWideError):
            ReportOptions(shot_column_widths=[200.0] * 5)

    def test_column_count_mismatch(self):
        with pytest.raises(InvalidOptionsError):
            ReportOptions(shot_column_widths=[99.0] * 4)

    def test_status_column_out_of_range(self):
        with pytest.raises(InvalidOptionsError):
            ReportOptions(shot_status_column=5)

    def test_margins_leave_no_room(self):
        with pytest.raises(InvalidOptionsError):
            ReportOptions(margin_top=500, margin_bottom=400)

    def test_text_style_with_unknown_color(self):
        styles = {"body": {"size": "body", "bold": False, "color": "purple"}}
        with pytest.raises(InvalidOptionsError):
            ReportOptions(text_styles=styles)

    def test_unknown_lookups(self):
        options = ReportOptions()
        with pytest.raises(InvalidOptionsError):
            options.color("chartreuse")
        with pytest.raises(InvalidOptionsError):
            options.style("caption")

    def test_errors_are_configuration_errors(self):
        with pytest.raises(ConfigurationError):
            ReportOptions(row_height=0)

    def test_instances_do_not_share_mutable_defaults(self):
        first = ReportOptions()
        first.colors["navy"] = "#000000"
        assert ReportOptions().colors["navy"] == "#1C3062"
