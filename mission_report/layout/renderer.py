"""PDF Renderer Module

Paints a ``LaidOutDocument`` onto a ReportLab canvas. Draw commands are in
layout space (top-left origin); every drawing call converts to PDF space
(bottom-left origin) through the geometry helpers.

The PDF is written to a temporary file next to the target and moved into
place only once the canvas is saved, so a failed run never leaves a partial
document behind.
"""
import io
import logging
import os
import tempfile
from typing import Dict, Optional

from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdfcanvas

from .assembler import LaidOutDocument
from .blocks import BlockKind
from .flow import DrawCommand
from .font_manager import FontManager
from .geometry import rgb_to_unit, top_left_to_bottom_left
from ..exceptions import OutputWriteError

log = logging.getLogger(__name__)


def _color(rgb) -> colors.Color:
    return colors.Color(*rgb_to_unit(rgb))


class PDFRenderer:
    """Renders draw commands to a PDF file.

    Attributes:
        fonts: Font manager providing the registered font names
        metadata: PDF document info (title, author, subject)
    """

    def __init__(self, fonts: Optional[FontManager] = None, metadata: Optional[Dict[str, str]] = None):
        self.fonts = fonts or FontManager()
        self.metadata = metadata or {}
        self._canvas = None
        self._page_height = 0.0
        self._images: Dict[int, ImageReader] = {}

    def render(self, document: LaidOutDocument, output_path: str) -> str:
        """
        Write the document to ``output_path`` atomically.

        Args:
            document: Paginated draw commands
            output_path: Destination PDF path

        Returns:
            The output path

        Raises:
            OutputWriteError: If the destination cannot be written
        """
        directory = os.path.dirname(os.path.abspath(output_path))
        try:
            fd, tmp_path = tempfile.mkstemp(suffix=".pdf.part", dir=directory)
            os.close(fd)
        except OSError as e:
            raise OutputWriteError(output_path, str(e)) from e

        try:
            self._draw_document(document, tmp_path)
            os.replace(tmp_path, output_path)
        except OSError as e:
            self._discard(tmp_path)
            raise OutputWriteError(output_path, str(e)) from e
        except Exception:
            self._discard(tmp_path)
            raise
        finally:
            self._canvas = None
            self._images.clear()

        log.debug("Wrote %d pages to %s", document.page_count, output_path)
        return output_path

    @staticmethod
    def _discard(path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass

    def _draw_document(self, document: LaidOutDocument, path: str) -> None:
        self._page_height = document.page_height
        self._canvas = pdfcanvas.Canvas(path, pagesize=(document.page_width, document.page_height))
        if self.metadata.get("title"):
            self._canvas.setTitle(self.metadata["title"])
        if self.metadata.get("author"):
            self._canvas.setAuthor(self.metadata["author"])
        if self.metadata.get("subject"):
            self._canvas.setSubject(self.metadata["subject"])

        for page_commands in document.pages():
            for command in page_commands:
                self._draw(command)
            self._canvas.showPage()
        self._canvas.save()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _draw(self, command: DrawCommand) -> None:
        handler = {
            BlockKind.TEXT: self._draw_text,
            BlockKind.IMAGE: self._draw_image,
            BlockKind.RULE: self._draw_rule,
            BlockKind.SECTION_HEADER: self._draw_section_header,
            BlockKind.PLACEHOLDER: self._draw_placeholder,
            BlockKind.TABLE_ROW: self._draw_table_cell,
            BlockKind.CARD_ROW: self._draw_card,
            BlockKind.FOOTER: self._draw_footer,
        }.get(command.kind)
        if handler is not None:
            handler(command)

    def _bottom(self, y: float, height: float) -> float:
        return top_left_to_bottom_left(y, height, self._page_height)

    def _baseline(self, top: float, font_size: float) -> float:
        """PDF-space baseline of a text line whose box starts at ``top``."""
        return self._bottom(top, font_size)

    # ------------------------------------------------------------------
    # Block painters
    # ------------------------------------------------------------------

    def _draw_text(self, command: DrawCommand) -> None:
        p = command.payload
        c = self._canvas
        c.setFont(self.fonts.get_font_name(p.bold), p.font_size)
        c.setFillColor(_color(p.color))
        top = command.y
        for line in p.lines:
            c.drawString(command.x, self._baseline(top, p.font_size), line)
            top += p.leading

    def _draw_image(self, command: DrawCommand) -> None:
        p = command.payload
        c = self._canvas
        reader = self._image_reader(p.source)
        bottom = self._bottom(command.y, p.draw_height)
        c.drawImage(reader, command.x, bottom, width=p.draw_width, height=p.draw_height, mask='auto')
        if p.frame_color is not None:
            c.setStrokeColor(_color(p.frame_color))
            c.setLineWidth(1)
            c.rect(command.x, bottom, p.draw_width, p.draw_height, fill=0, stroke=1)

    def _image_reader(self, source) -> ImageReader:
        # Same source may be drawn on several pages; decode it once
        key = id(source)
        reader = self._images.get(key)
        if reader is None:
            reader = ImageReader(io.BytesIO(source) if isinstance(source, bytes) else source)
            self._images[key] = reader
        return reader

    def _draw_rule(self, command: DrawCommand) -> None:
        p = command.payload
        c = self._canvas
        y = self._bottom(command.y, command.height / 2)
        c.setStrokeColor(_color(p.color))
        c.setLineWidth(p.thickness)
        c.line(command.x, y, command.x + command.width, y)

    def _draw_section_header(self, command: DrawCommand) -> None:
        p = command.payload
        c = self._canvas
        bottom = self._bottom(command.y, p.bar_height)
        c.setFillColor(_color(p.fill))
        c.rect(command.x, bottom, command.width, p.bar_height, fill=1, stroke=0)

        c.setFillColor(_color(p.text_color))
        text_y = bottom + (p.bar_height - p.font_size) / 2 + p.font_size * 0.2
        c.setFont(self.fonts.get_font_name(bold=True), p.font_size)
        c.drawString(command.x + 8, text_y, p.title)
        if p.caption:
            c.setFont(self.fonts.get_font_name(bold=False), p.caption_font_size)
            c.drawRightString(command.x + command.width - 8, text_y, p.caption)

    def _draw_placeholder(self, command: DrawCommand) -> None:
        p = command.payload
        c = self._canvas
        bottom = self._bottom(command.y, command.height)
        c.setFillColor(_color(p.fill))
        c.setStrokeColor(_color(p.border))
        c.setLineWidth(1)
        c.rect(command.x, bottom, command.width, command.height, fill=1, stroke=1)

        c.setFillColor(_color(p.text_color))
        c.setFont(self.fonts.get_font_name(bold=False), p.font_size)
        text_y = bottom + (command.height - p.font_size) / 2 + p.font_size * 0.2
        c.drawCentredString(command.x + command.width / 2, text_y, p.message)

    def _draw_table_cell(self, command: DrawCommand) -> None:
        p = command.payload
        c = self._canvas
        bottom = self._bottom(command.y, command.height)
        if p.fill is not None:
            c.setFillColor(_color(p.fill))
            c.rect(command.x, bottom, command.width, command.height, fill=1, stroke=0)
        c.setStrokeColor(_color(p.border))
        c.setLineWidth(0.75)
        c.rect(command.x, bottom, command.width, command.height, fill=0, stroke=1)

        c.setFillColor(_color(p.text_color))
        c.setFont(self.fonts.get_font_name(p.bold), p.font_size)
        text_y = bottom + (command.height - p.font_size) / 2 + p.font_size * 0.2
        c.drawCentredString(command.x + command.width / 2, text_y, p.text)

    def _draw_card(self, command: DrawCommand) -> None:
        p = command.payload
        c = self._canvas
        bottom = self._bottom(command.y, command.height)

        c.setFillColor(_color(p.body_fill))
        c.setStrokeColor(_color(p.title_fill))
        c.setLineWidth(1.5)
        c.rect(command.x, bottom, command.width, command.height, fill=1, stroke=1)

        bar_bottom = self._bottom(command.y, p.title_bar_height)
        c.setFillColor(_color(p.title_fill))
        c.rect(command.x, bar_bottom, command.width, p.title_bar_height, fill=1, stroke=0)
        c.setFillColor(_color(p.title_color))
        c.setFont(self.fonts.get_font_name(bold=True), p.title_font_size)
        c.drawString(
            command.x + p.padding,
            bar_bottom + (p.title_bar_height - p.title_font_size) / 2 + p.title_font_size * 0.2,
            p.title,
        )

        c.setFillColor(_color(p.text_color))
        c.setFont(self.fonts.get_font_name(bold=False), p.font_size)
        top = command.y + p.title_bar_height + p.padding
        for line in p.lines:
            c.drawString(command.x + p.padding, self._baseline(top, p.font_size), line)
            top += p.leading

    def _draw_footer(self, command: DrawCommand) -> None:
        p = command.payload
        c = self._canvas
        rule_y = self._bottom(command.y, 0)
        c.setStrokeColor(_color(p.rule_color))
        c.setLineWidth(1)
        c.line(command.x, rule_y, command.x + command.width, rule_y)

        text_y = self._bottom(command.y, command.height / 2 + p.font_size / 2)
        c.setFillColor(_color(p.text_color))
        c.setFont(self.fonts.get_font_name(bold=False), p.font_size)
        c.drawString(command.x, text_y, p.left)
        c.drawRightString(command.x + command.width, text_y, p.right)

        c.setFillColor(_color(p.brand_color))
        c.setFont(self.fonts.get_font_name(bold=True), p.font_size)
        c.drawCentredString(command.x + command.width / 2, text_y, p.center)
