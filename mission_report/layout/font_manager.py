"""Font Manager Module

Handles font registration, accented-glyph support and text measurement.
"""
import logging
import os
from typing import Optional, Sequence

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .geometry import estimate_text_width

log = logging.getLogger(__name__)

_FONTS_DIR = os.path.join(os.path.dirname(__file__), '..', 'fonts')

DEFAULT_FONT_PATHS = (
    os.path.join(_FONTS_DIR, 'DejaVuSans.ttf'),
    '/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf',
    '/usr/share/fonts/dejavu/DejaVuSans.ttf',
    '/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf',
    '/System/Library/Fonts/Supplemental/Arial Unicode.ttf',  # macOS
    'C:\\Windows\\Fonts\\arial.ttf',  # Windows
)

DEFAULT_BOLD_FONT_PATHS = (
    os.path.join(_FONTS_DIR, 'DejaVuSans-Bold.ttf'),
    '/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf',
    '/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf',
    '/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf',
)


class FontManager:
    """Registers report fonts and measures text with their metrics.

    Pilot names, map names and generated-on dates often carry accented
    characters, so a TrueType font is preferred over the built-in Helvetica.
    Fallback chain: bundled DejaVu → system DejaVu → Liberation → Arial →
    Helvetica.

    Attributes:
        font_name: Name of the registered regular font (e.g., 'ReportSans' or 'Helvetica')
        font_name_bold: Name of the registered bold font
    """

    REGULAR_NAME = 'ReportSans'
    BOLD_NAME = 'ReportSans-Bold'

    def __init__(
        self,
        font_paths: Optional[Sequence[str]] = None,
        bold_font_paths: Optional[Sequence[str]] = None,
    ):
        """
        Initialize FontManager and register the first usable font.

        Args:
            font_paths: Candidate regular TTF paths in order of preference
            bold_font_paths: Candidate bold TTF paths in order of preference
        """
        self.font_name = 'Helvetica'
        self.font_name_bold = 'Helvetica-Bold'
        self._setup_fonts(
            DEFAULT_FONT_PATHS if font_paths is None else font_paths,
            DEFAULT_BOLD_FONT_PATHS if bold_font_paths is None else bold_font_paths,
        )

    def _setup_fonts(self, font_paths: Sequence[str], bold_font_paths: Sequence[str]):
        regular = self._register_first(self.REGULAR_NAME, font_paths)
        if regular is None:
            log.warning(
                "No TrueType font found, using Helvetica; accented characters may not render"
            )
            return
        self.font_name = regular

        bold = self._register_first(self.BOLD_NAME, bold_font_paths)
        if bold is None:
            log.warning("Bold font not found, using regular font for bold text")
            self.font_name_bold = self.font_name
        else:
            self.font_name_bold = bold

    @staticmethod
    def _register_first(name: str, paths: Sequence[str]) -> Optional[str]:
        for path in paths:
            if not os.path.exists(path):
                continue
            if name in pdfmetrics.getRegisteredFontNames():
                return name
            try:
                pdfmetrics.registerFont(TTFont(name, path))
            except Exception as e:
                log.debug("Failed to register font %s: %s", path, e)
                continue
            log.debug("Registered font %s from %s", name, path)
            return name
        return None

    def get_font_name(self, bold: bool = False) -> str:
        """
        Get the registered font name.

        Args:
            bold: If True, return the bold variant; otherwise return regular font

        Returns:
            Font name string suitable for use with ReportLab
        """
        return self.font_name_bold if bold else self.font_name

    def measure(self, text: str, font_size: float, bold: bool = False) -> float:
        """
        Width of ``text`` in points, estimated when the font has no metrics.
        """
        try:
            return pdfmetrics.stringWidth(text, self.get_font_name(bold), font_size)
        except KeyError:
            return estimate_text_width(text, font_size)
