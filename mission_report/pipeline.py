"""Mission Report Pipeline

Main orchestration logic: lay out a mission report and write it to disk.
"""
import logging
import os
from datetime import date
from typing import Optional

from .exceptions import OutputWriteError
from .layout import DocumentAssembler, FontManager, ImageResolver, PDFRenderer
from .models import MissionReportData
from .report_options import ReportOptions
from .report_result import ReportResult
from .utils import build_report_filename

log = logging.getLogger(__name__)


class ReportPipeline:
    """Mission report generation orchestrator.

    This class runs the complete workflow:
    1. Layout - build blocks and paginate them into draw commands
    2. Rendering - paint the commands onto a PDF canvas
    3. Writing - move the finished PDF into place atomically

    Configuration errors propagate unmodified; asset problems have already
    been replaced by placeholders during layout.

    Attributes:
        options: Validated report options
        fonts: Font manager shared by layout measurement and rendering
    """

    def __init__(self, options: Optional[ReportOptions] = None, fonts: Optional[FontManager] = None):
        self.options = options or ReportOptions()
        self.fonts = fonts or FontManager()

    def generate(
        self,
        data: MissionReportData,
        output_dir: str,
        resolver: Optional[ImageResolver] = None,
        generated_on: Optional[date] = None,
        filename: Optional[str] = None,
    ) -> ReportResult:
        """
        Generate a mission report PDF.

        Args:
            data: Mission data
            output_dir: Directory the PDF is written to (created if needed)
            resolver: Image resolver for this run (a fresh one by default)
            generated_on: Date printed in footers (defaults to today)
            filename: Output file name (defaults to ``build_report_filename``)

        Returns:
            ReportResult describing the written document

        Raises:
            ConfigurationError: If the report cannot be laid out
            OutputWriteError: If the output cannot be written
        """
        assembler = DocumentAssembler(
            options=self.options,
            fonts=self.fonts,
            resolver=resolver or ImageResolver(),
        )
        document = assembler.assemble(data, generated_on=generated_on)

        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(output_dir, str(e)) from e

        name = filename or build_report_filename(data, self.options.filename_prefix)
        output_path = os.path.join(output_dir, name)

        renderer = PDFRenderer(
            fonts=self.fonts,
            metadata={
                "title": f"{self.options.report_title} - {data.pilot_name}",
                "author": self.options.brand_name,
                "subject": data.mission_type,
            },
        )
        renderer.render(document, output_path)

        log.info(
            "Generated %s (%d pages, %d placeholders)",
            output_path, document.page_count, len(document.substitutions),
        )
        return ReportResult(
            output_path=output_path,
            page_count=document.page_count,
            page_breaks=document.page_breaks,
            substitutions=list(document.substitutions),
        )


def generate_report(
    data: MissionReportData,
    output_dir: str,
    options: Optional[ReportOptions] = None,
    resolver: Optional[ImageResolver] = None,
    generated_on: Optional[date] = None,
    filename: Optional[str] = None,
) -> ReportResult:
    """Convenience wrapper around ``ReportPipeline.generate``."""
    pipeline = ReportPipeline(options=options)
    return pipeline.generate(
        data,
        output_dir,
        resolver=resolver,
        generated_on=generated_on,
        filename=filename,
    )
