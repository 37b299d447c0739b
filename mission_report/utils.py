"""Utilities Module

Helper functions for naming and placing generated reports.
"""
import re

from .models import MissionReportData


def clean_filename_component(value: str, max_length: int = 50) -> str:
    """
    Clean one component of a file name for safe saving.

    Args:
        value: Raw component (pilot name, mission type ...)
        max_length: Maximum component length

    Returns:
        Component with path separators, punctuation and whitespace removed
    """
    # Replace invalid characters, path separators included
    value = re.sub(r'[^\w\s-]', '', str(value))

    # Replace spaces with underscores
    value = re.sub(r'\s+', '_', value.strip())

    if len(value) > max_length:
        value = value[:max_length]

    return value


def format_file_date(data: MissionReportData) -> str:
    """
    Mission date as YYYYMMDD, for use in file names.

    Falls back to the digits of the raw date string, or ``"undated"``.
    """
    parsed = data.mission_date
    if parsed is not None:
        return parsed.strftime("%Y%m%d")
    digits = re.sub(r'\D', '', str(data.date or ''))
    return digits or "undated"


def build_report_filename(data: MissionReportData, prefix: str) -> str:
    """
    Build the output file name of a mission report.

    Args:
        data: Mission data
        prefix: File name prefix (e.g. "Mission_Report")

    Returns:
        ``{prefix}_{pilot}_{missionType}_{YYYYMMDD}.pdf``

    Examples:
        >>> from mission_report.models import MissionReportData
        >>> data = MissionReportData("Jane Doe", "John Roe", "2024-03-15", "Air Combat", "Rafale")
        >>> build_report_filename(data, "Mission_Report")
        'Mission_Report_Jane_Doe_Air_Combat_20240315.pdf'
    """
    parts = [
        clean_filename_component(prefix),
        clean_filename_component(data.pilot_name) or "pilot",
        clean_filename_component(data.mission_type) or "mission",
        format_file_date(data),
    ]
    return "_".join(part for part in parts if part) + ".pdf"
