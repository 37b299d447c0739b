"""Report Options Dataclass

Configuration for one report generation run: page geometry, typography,
palette, shot table geometry and fixed report content.
"""
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Tuple

from . import config
from .exceptions import InvalidOptionsError, TableTooWideError
from .layout.geometry import hex_to_rgb


class TextStyle(NamedTuple):
    """Resolved text preset: size in points, weight, RGB color, space after."""
    font_size: float
    bold: bool
    color: Tuple[int, int, int]
    space_after: float


@dataclass
class ReportOptions:
    """Configuration options for mission report generation.

    All lengths are PDF points. Colors are hex strings keyed by palette name
    and are parsed once in ``__post_init__``; text styles name a font size
    and a palette color.

    Attributes:
        page_width, page_height: Page size
        margin_top, margin_bottom, margin_left, margin_right: Page margins
        footer_height: Height reserved for the footer below the content area

        font_sizes: Font size table keyed by role name
        colors: Palette of hex colors keyed by name
        text_styles: Named text presets (size name, bold, color name, space_after)
        line_spacing: Leading as a multiple of font size

        shot_columns: Shot table header labels
        shot_column_widths: Fixed shot table column widths
        shot_status_column: Index of the hit/miss column
        row_height: Shot table row height

        section_header_height, card_gap, card_title_bar_height, card_padding:
            Cover and round section geometry
        chart_max_height: Maximum draw height of a round chart
        photo_max_width, photo_max_height: Pilot photo bounding box
        placeholder_height: Height of placeholders for missing content
        block_spacing: Vertical space between cover/round sections

        report_title, report_subtitle, report_heading: Cover page titles
        round_caption: Caption printed in every round header
        hit_labels: Status column texts for hit and miss
        brand_name: Brand printed in every footer
        filename_prefix: Prefix of generated file names
        info_pages: Trailing informational pages
    """

    # Page Geometry
    page_width: float = config.PAGE_WIDTH
    page_height: float = config.PAGE_HEIGHT
    margin_top: float = config.MARGIN_TOP
    margin_bottom: float = config.MARGIN_BOTTOM
    margin_left: float = config.MARGIN_LEFT
    margin_right: float = config.MARGIN_RIGHT
    footer_height: float = config.FOOTER_HEIGHT

    # Typography & Palette
    font_sizes: Dict[str, float] = field(default_factory=lambda: dict(config.DEFAULT_FONT_SIZES))
    colors: Dict[str, str] = field(default_factory=lambda: dict(config.DEFAULT_COLORS))
    text_styles: Dict[str, Dict[str, Any]] = field(
        default_factory=lambda: copy.deepcopy(config.DEFAULT_TEXT_STYLES)
    )
    line_spacing: float = config.LINE_SPACING

    # Shot Table
    shot_columns: List[str] = field(default_factory=lambda: list(config.SHOT_TABLE_COLUMNS))
    shot_column_widths: List[float] = field(
        default_factory=lambda: list(config.SHOT_TABLE_COLUMN_WIDTHS)
    )
    shot_status_column: int = config.SHOT_TABLE_STATUS_COLUMN
    row_height: float = config.SHOT_TABLE_ROW_HEIGHT

    # Block Geometry
    section_header_height: float = config.SECTION_HEADER_HEIGHT
    card_gap: float = config.CARD_GAP
    card_title_bar_height: float = config.CARD_TITLE_BAR_HEIGHT
    card_padding: float = config.CARD_PADDING
    chart_max_height: float = config.CHART_MAX_HEIGHT
    photo_max_width: float = config.PHOTO_MAX_WIDTH
    photo_max_height: float = config.PHOTO_MAX_HEIGHT
    placeholder_height: float = config.PLACEHOLDER_HEIGHT
    block_spacing: float = config.BLOCK_SPACING

    # Content
    report_title: str = config.REPORT_TITLE
    report_subtitle: str = config.REPORT_SUBTITLE
    report_heading: str = config.REPORT_HEADING
    round_caption: str = config.ROUND_CAPTION
    hit_labels: Tuple[str, str] = config.HIT_LABELS
    brand_name: str = config.BRAND_NAME
    filename_prefix: str = config.FILENAME_PREFIX
    info_pages: List[Dict[str, Any]] = field(default_factory=lambda: copy.deepcopy(config.INFO_PAGES))

    def __post_init__(self):
        """Validate the whole configuration once, before any layout happens."""
        if self.content_width <= 0:
            raise InvalidOptionsError(
                f"Horizontal margins leave no content width on a {self.page_width}pt wide page"
            )
        if self.content_height <= 0:
            raise InvalidOptionsError(
                f"Margins and footer leave no content height on a {self.page_height}pt tall page"
            )
        for name in ("row_height", "section_header_height", "placeholder_height",
                     "chart_max_height", "photo_max_width", "photo_max_height"):
            if getattr(self, name) <= 0:
                raise InvalidOptionsError(f"{name} must be positive, got {getattr(self, name)}")

        # Raises InvalidColorFormatError on the first malformed color
        self.palette: Dict[str, Tuple[int, int, int]] = {
            name: hex_to_rgb(value) for name, value in self.colors.items()
        }

        self.styles: Dict[str, TextStyle] = {}
        for role, preset in self.text_styles.items():
            size_name = preset.get("size")
            color_name = preset.get("color")
            if size_name not in self.font_sizes:
                raise InvalidOptionsError(f"Text style '{role}' uses unknown font size '{size_name}'")
            if color_name not in self.palette:
                raise InvalidOptionsError(f"Text style '{role}' uses unknown color '{color_name}'")
            self.styles[role] = TextStyle(
                font_size=self.font_sizes[size_name],
                bold=bool(preset.get("bold", False)),
                color=self.palette[color_name],
                space_after=float(preset.get("space_after", 0)),
            )

        if len(self.shot_columns) != len(self.shot_column_widths):
            raise InvalidOptionsError(
                f"{len(self.shot_columns)} shot columns but "
                f"{len(self.shot_column_widths)} column widths"
            )
        if not 0 <= self.shot_status_column < len(self.shot_columns):
            raise InvalidOptionsError(f"shot_status_column {self.shot_status_column} out of range")
        table_width = sum(self.shot_column_widths)
        if table_width > self.content_width:
            raise TableTooWideError(table_width, self.content_width)

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def content_height(self) -> float:
        """Usable page height (the flow engine's budget)."""
        return self.page_height - self.margin_top - self.margin_bottom - self.footer_height

    def color(self, name: str) -> Tuple[int, int, int]:
        try:
            return self.palette[name]
        except KeyError:
            raise InvalidOptionsError(f"Unknown palette color '{name}'") from None

    def style(self, role: str) -> TextStyle:
        try:
            return self.styles[role]
        except KeyError:
            raise InvalidOptionsError(f"Unknown text style '{role}'") from None
