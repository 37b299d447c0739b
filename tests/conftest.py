"""Shared fixtures: generated PNG images, sample mission data, metrics-only fonts."""

import io
from datetime import date

import pytest
from PIL import Image

from mission_report.layout import FontManager
from mission_report.models import MissionReportData, RoundRecord, ShotRecord
from mission_report.report_options import ReportOptions


def make_png(width: int, height: int, color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_shots(count: int):
    return tuple(
        ShotRecord(number=i + 1, speed=350.0 + i, altitude=1200.5, distance=800.0, hit=i % 2 == 0)
        for i in range(count)
    )


@pytest.fixture
def png_bytes():
    return make_png(40, 20)


@pytest.fixture
def chart_file(tmp_path):
    path = tmp_path / "chart.png"
    path.write_bytes(make_png(400, 200))
    return path


@pytest.fixture
def fonts():
    """Built-in Helvetica metrics, independent of fonts installed on the host."""
    return FontManager(font_paths=[], bold_font_paths=[])


@pytest.fixture
def options():
    return ReportOptions()


@pytest.fixture
def generated_on():
    return date(2024, 3, 15)


@pytest.fixture
def sample_data(chart_file):
    return MissionReportData(
        pilot_name="Jane Doe",
        instructor_name="John Roe",
        date="2024-03-15",
        mission_type="Air Combat",
        aircraft="Rafale",
        mission_name="Red Flag",
        map_name="Desert",
        rounds=(
            RoundRecord(number=1, chart_image=str(chart_file), shots=make_shots(3)),
            RoundRecord(number=2, chart_image=str(chart_file), shots=make_shots(3)),
        ),
    )


def make_noise_png(width: int = 200, height: int = 100) -> bytes:
    """PNG whose pixel data does not compress away, so truncation hits the image data."""
    buffer = io.BytesIO()
    Image.effect_noise((width, height), 64).convert("RGB").save(buffer, format="PNG")
    return buffer.getvalue()
