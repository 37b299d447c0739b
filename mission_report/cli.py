"""mission-report CLI: render a mission report PDF from a JSON payload."""

import json
import logging
import os

import click

from . import config
from .exceptions import MissionReportError
from .layout import ImageResolver
from .models import MissionReportData
from .pipeline import generate_report
from .report_options import ReportOptions


@click.group()
@click.version_option(version="0.1.0", prog_name="mission-report")
def main():
    """mission-report: render mission training results as PDF reports."""
    pass


@main.command()
@click.argument("mission_json", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o", "--output",
    "output_dir",
    type=click.Path(file_okay=False),
    default="./output",
    help="Output directory (default: ./output).",
)
@click.option(
    "--prefix",
    default=config.FILENAME_PREFIX,
    help=f"File name prefix (default: {config.FILENAME_PREFIX}).",
)
@click.option(
    "--brand",
    default=config.BRAND_NAME,
    help=f"Brand printed in page footers (default: {config.BRAND_NAME}).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def generate(mission_json: str, output_dir: str, prefix: str, brand: str, verbose: bool):
    """Generate a mission report from MISSION_JSON.

    Image references in the payload (pilot photo, round charts) may be
    file paths relative to the JSON file, data URIs or http(s) URLs.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        with open(mission_json, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Cannot read {mission_json}: {e}")

    try:
        data = MissionReportData.from_dict(payload)
        options = ReportOptions(filename_prefix=prefix, brand_name=brand)
        resolver = ImageResolver(base_dir=os.path.dirname(os.path.abspath(mission_json)))
        result = generate_report(data, output_dir, options=options, resolver=resolver)
    except MissionReportError as e:
        raise click.ClickException(str(e))

    for note in result.substitutions:
        click.echo(f"placeholder: {note}", err=True)
    click.echo(result.output_path)


if __name__ == "__main__":
    main()
