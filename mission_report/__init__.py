"""Mission Report

Renders mission-report data (pilot, instructor, mission metadata and
per-round shooting results) into a styled multi-page PDF.
"""

# The layout package must load before report_options, which imports geometry
from .layout import DocumentAssembler, LaidOutDocument, generate
from .models import MissionReportData, RoundRecord, ShotRecord
from .report_options import ReportOptions
from .report_result import ReportResult
from .pipeline import ReportPipeline, generate_report
from .utils import build_report_filename
from .exceptions import (
    MissionReportError,
    InvalidMissionDataError,
    ConfigurationError,
    InvalidOptionsError,
    InvalidColorFormatError,
    BlockTooTallError,
    TableTooWideError,
    NoRoundsError,
    RecoverableAssetError,
    MissingOptionalAssetError,
    AssetDecodeError,
    OutputWriteError,
)

__version__ = "0.1.0"

__all__ = [
    'DocumentAssembler',
    'LaidOutDocument',
    'generate',
    'generate_report',
    'ReportPipeline',
    'ReportOptions',
    'ReportResult',
    'MissionReportData',
    'RoundRecord',
    'ShotRecord',
    'build_report_filename',
    'MissionReportError',
    'InvalidMissionDataError',
    'ConfigurationError',
    'InvalidOptionsError',
    'InvalidColorFormatError',
    'BlockTooTallError',
    'TableTooWideError',
    'NoRoundsError',
    'RecoverableAssetError',
    'MissingOptionalAssetError',
    'AssetDecodeError',
    'OutputWriteError',
]
