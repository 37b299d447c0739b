"""Document Assembler Module

Builds the fixed section sequence of a mission report and feeds it through
the flow engine:

1. Cover: titles, pilot/instructor cards, training details card, pilot photo
2. One section per round, each on a new page: header, chart, shot table
3. Trailing informational pages
4. A footer stamped on every page once the page count is known

Missing or undecodable images become placeholders; configuration errors
propagate to the caller.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from . import blocks
from .blocks import BlockKind, Cell, CardPayload, ContentBlock, FooterPayload
from .flow import DrawCommand, FlowEngine
from .font_manager import FontManager
from .images import ImageResolver
from .table import TableLayout, TableRowData, TableStyle
from ..exceptions import NoRoundsError, RecoverableAssetError
from ..models import MissionReportData, RoundRecord, ShotRecord
from ..report_options import ReportOptions

log = logging.getLogger(__name__)

NO_PHOTO_MESSAGE = "No pilot photo provided"
NO_CHART_MESSAGE = "No chart available for this round"
NO_SHOTS_MESSAGE = "No shots recorded for this round"
NO_ROUND_DATA_MESSAGE = "No chart or shot data provided for this round"
SHOTS_CAPTION = "Shots Details:"
SHOTS_CONTINUED_CAPTION = "Shots Details (continued)"


@dataclass
class LaidOutDocument:
    """Result of pagination: draw commands for every page.

    Attributes:
        page_width, page_height: Page size in points
        page_count: Number of pages
        commands: All draw commands, in placement order, footers last
        page_breaks: Page breaks taken by the flow engine
        substitutions: Human-readable notes for every placeholder substituted
    """
    page_width: float
    page_height: float
    page_count: int
    commands: List[DrawCommand]
    page_breaks: int = 0
    substitutions: List[str] = field(default_factory=list)

    def pages(self) -> List[List[DrawCommand]]:
        """Draw commands grouped by page index."""
        grouped: List[List[DrawCommand]] = [[] for _ in range(self.page_count)]
        for command in self.commands:
            grouped[command.page].append(command)
        return grouped


class DocumentAssembler:
    """Turns mission data into paginated draw commands.

    The assembler only builds blocks and hands them to a ``FlowEngine``; it
    never moves the cursor itself. Each call to ``assemble`` creates its own
    engine and, unless a resolver was passed in, its own ``ImageResolver``,
    so runs share no layout state and no image cache.
    """

    def __init__(
        self,
        options: Optional[ReportOptions] = None,
        fonts: Optional[FontManager] = None,
        resolver: Optional[ImageResolver] = None,
    ):
        self.options = options or ReportOptions()
        self.fonts = fonts or FontManager()
        self.resolver = resolver

    def assemble(self, data: MissionReportData, generated_on: Optional[date] = None) -> LaidOutDocument:
        """
        Lay out the full report.

        Args:
            data: Validated mission data
            generated_on: Date printed in footers (defaults to today)

        Returns:
            LaidOutDocument with every page's draw commands

        Raises:
            NoRoundsError: If the mission has no rounds
            ConfigurationError: If a block can never fit on a page
        """
        if not data.rounds:
            raise NoRoundsError()

        opts = self.options
        engine = FlowEngine(
            page_width=opts.page_width,
            page_height=opts.page_height,
            margin_top=opts.margin_top,
            margin_bottom=opts.margin_bottom,
            margin_left=opts.margin_left,
            margin_right=opts.margin_right,
            footer_height=opts.footer_height,
        )
        resolver = self.resolver if self.resolver is not None else ImageResolver()
        substitutions: List[str] = []

        engine.place_all(self._cover_blocks(data, resolver, substitutions))

        table = self._shot_table()
        for round_record in data.rounds:
            engine.new_page()
            self._place_round(engine, table, round_record, resolver, substitutions)

        for info_page in opts.info_pages:
            engine.new_page()
            engine.place_all(self._info_page_blocks(info_page))

        footers = self._footer_commands(engine.page_count, generated_on or date.today())
        log.debug(
            "Laid out %d pages (%d breaks, %d placeholders)",
            engine.page_count, engine.page_breaks, len(substitutions),
        )
        return LaidOutDocument(
            page_width=opts.page_width,
            page_height=opts.page_height,
            page_count=engine.page_count,
            commands=engine.commands + footers,
            page_breaks=engine.page_breaks,
            substitutions=substitutions,
        )

    # ------------------------------------------------------------------
    # Cover
    # ------------------------------------------------------------------

    def _cover_blocks(
        self,
        data: MissionReportData,
        resolver: ImageResolver,
        substitutions: List[str],
    ) -> List[ContentBlock]:
        opts = self.options
        card_width = (opts.content_width - opts.card_gap) / 2

        details = [
            f"Date: {data.formatted_date}",
            f"Mission Type: {data.mission_type}",
            f"Mission Name: {data.mission_name or '-'}",
            f"Aircraft: {data.aircraft}",
            f"Map: {data.map_name or '-'}",
            f"Total Rounds: {data.total_rounds}",
        ]

        cover = [
            self._text("title", opts.report_title),
            self._text("subtitle", opts.report_subtitle),
            blocks.rule(opts.color("blue"), opts.block_spacing, thickness=2),
            self._text("heading", opts.report_heading),
            blocks.card_row(
                [
                    self._card("PILOT", [f"Name: {data.pilot_name}"], card_width),
                    self._card("INSTRUCTOR", [f"Name: {data.instructor_name}"], card_width),
                ],
                gap=opts.card_gap,
            ),
            blocks.spacer(opts.block_spacing),
            blocks.card_row(
                [self._card("TRAINING DETAILS", details, opts.content_width)],
                gap=opts.card_gap,
            ),
            blocks.spacer(opts.block_spacing),
            self._image_or_placeholder(
                resolver,
                data.pilot_photo,
                opts.photo_max_width,
                opts.photo_max_height,
                NO_PHOTO_MESSAGE,
                "pilot photo",
                substitutions,
            ),
        ]
        return cover

    def _card(self, title: str, lines: Sequence[str], width: float) -> Cell:
        opts = self.options
        body = opts.style("body")
        title_style = opts.style("subheading")
        inner_width = width - 2 * opts.card_padding

        wrapped: List[str] = []
        for line in lines:
            wrapped.extend(blocks.wrap_text(
                line, inner_width, lambda s: self.fonts.measure(s, body.font_size, body.bold)
            ))

        return Cell(
            width=width,
            payload=CardPayload(
                title=title,
                lines=tuple(wrapped),
                title_font_size=min(title_style.font_size, opts.card_title_bar_height * 0.7),
                font_size=body.font_size,
                leading=body.font_size * opts.line_spacing,
                title_bar_height=opts.card_title_bar_height,
                padding=opts.card_padding,
                title_fill=opts.color("navy"),
                title_color=opts.color("white"),
                body_fill=opts.color("light_gray"),
                text_color=body.color,
            ),
        )

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def _shot_table(self) -> TableLayout:
        opts = self.options
        body = opts.style("body")
        return TableLayout(
            columns=opts.shot_columns,
            column_widths=opts.shot_column_widths,
            content_width=opts.content_width,
            row_height=opts.row_height,
            style=TableStyle(
                font_size=opts.font_sizes["small"],
                header_font_size=opts.font_sizes["small"],
                text_color=body.color,
                header_fill=opts.color("navy"),
                header_text_color=opts.color("white"),
                border=opts.color("table_border"),
                positive_fill=opts.color("hit"),
                negative_fill=opts.color("miss"),
                status_text_color=opts.color("white"),
            ),
            status_column=opts.shot_status_column,
        )

    def _place_round(
        self,
        engine: FlowEngine,
        table: TableLayout,
        round_record: RoundRecord,
        resolver: ImageResolver,
        substitutions: List[str],
    ) -> None:
        opts = self.options
        engine.place(blocks.section_header(
            title=f"Round {round_record.number}",
            caption=opts.round_caption,
            bar_height=opts.section_header_height,
            font_size=opts.font_sizes["heading"],
            caption_font_size=opts.font_sizes["small"],
            fill=opts.color("blue"),
            text_color=opts.color("white"),
            space_after=opts.block_spacing,
        ))

        chart = self._image(
            resolver,
            round_record.chart_image,
            opts.content_width,
            opts.chart_max_height,
            f"round {round_record.number} chart",
            substitutions,
        )

        if chart is None and not round_record.shots:
            engine.place(self._placeholder(NO_ROUND_DATA_MESSAGE))
            return

        engine.place(chart if chart is not None else self._placeholder(NO_CHART_MESSAGE))

        if not round_record.shots:
            engine.place(blocks.spacer(opts.block_spacing))
            engine.place(self._placeholder(NO_SHOTS_MESSAGE))
            substitutions.append(f"round {round_record.number} shots: none recorded")
            return

        engine.place(blocks.spacer(opts.block_spacing))
        engine.place(self._text("subheading", SHOTS_CAPTION))
        header = table.header_block()
        engine.place(header)
        continued = (self._text("subheading", SHOTS_CONTINUED_CAPTION), header)
        for shot in round_record.shots:
            engine.place(table.row_block(self._shot_row(shot)), continuation=continued)

    def _shot_row(self, shot: ShotRecord) -> TableRowData:
        hit_label, miss_label = self.options.hit_labels
        return TableRowData(
            values=[
                str(shot.number),
                _format_measure(shot.speed),
                _format_measure(shot.altitude),
                _format_measure(shot.distance),
                hit_label if shot.hit else miss_label,
            ],
            status=shot.hit,
        )

    # ------------------------------------------------------------------
    # Informational pages
    # ------------------------------------------------------------------

    def _info_page_blocks(self, page: dict) -> List[ContentBlock]:
        opts = self.options
        page_blocks = [self._text("title", page.get("title", ""))]
        for line in page.get("subtitle", ()):
            page_blocks.append(self._text("subtitle", line))
        page_blocks.append(blocks.rule(opts.color("blue"), opts.block_spacing, thickness=2))

        for section in page.get("sections", ()):
            heading, lines = section[0], section[1]
            role = section[2] if len(section) > 2 else "body"
            page_blocks.append(self._text("heading", heading))
            for line in lines:
                page_blocks.append(self._text(role, line))
            page_blocks.append(blocks.spacer(opts.block_spacing))
        return page_blocks

    # ------------------------------------------------------------------
    # Footer pass
    # ------------------------------------------------------------------

    def _footer_commands(self, page_count: int, generated_on: date) -> List[DrawCommand]:
        """One footer per page; runs after pagination so the page total is known."""
        opts = self.options
        y = opts.page_height - opts.margin_bottom - opts.footer_height
        generated = generated_on.strftime("%d/%m/%Y")
        footers = []
        for page in range(page_count):
            footers.append(DrawCommand(
                page=page,
                x=opts.margin_left,
                y=y,
                width=opts.content_width,
                height=opts.footer_height,
                kind=BlockKind.FOOTER,
                payload=FooterPayload(
                    left=f"Generated on {generated}",
                    center=opts.brand_name,
                    right=f"Page {page + 1} / {page_count}",
                    font_size=opts.font_sizes["tiny"],
                    text_color=opts.color("dark_gray"),
                    brand_color=opts.color("navy"),
                    rule_color=opts.color("blue"),
                ),
            ))
        return footers

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _text(self, role: str, text: str) -> ContentBlock:
        style = self.options.style(role)
        return blocks.text_line(
            text,
            font_size=style.font_size,
            color=style.color,
            measure=self.fonts.measure,
            bold=style.bold,
            max_width=self.options.content_width,
            line_spacing=self.options.line_spacing,
            space_after=style.space_after,
        )

    def _placeholder(self, message: str) -> ContentBlock:
        opts = self.options
        return blocks.placeholder(
            message,
            height=opts.placeholder_height,
            font_size=opts.font_sizes["body"],
            fill=opts.color("placeholder_fill"),
            border=opts.color("placeholder_border"),
            text_color=opts.color("dark_gray"),
        )

    def _image(
        self,
        resolver: ImageResolver,
        ref,
        max_width: float,
        max_height: float,
        label: str,
        substitutions: List[str],
    ) -> Optional[ContentBlock]:
        """Image block scaled into the box, or None when the asset is missing or unreadable."""
        try:
            resolved = resolver.resolve(ref)
        except RecoverableAssetError as e:
            log.warning("Using placeholder for %s: %s", label, e)
            substitutions.append(f"{label}: {e}")
            return None
        return blocks.image_block(
            resolved.source,
            resolved.width,
            resolved.height,
            max_width,
            max_height,
            frame_color=self.options.color("navy"),
        )

    def _image_or_placeholder(
        self,
        resolver: ImageResolver,
        ref,
        max_width: float,
        max_height: float,
        message: str,
        label: str,
        substitutions: List[str],
    ) -> ContentBlock:
        image = self._image(resolver, ref, max_width, max_height, label, substitutions)
        return image if image is not None else self._placeholder(message)


def _format_measure(value: float) -> str:
    """Two decimals at most, trailing zeros dropped (350.0 -> '350', 12.50 -> '12.5')."""
    return f"{value:.2f}".rstrip("0").rstrip(".")


def generate(
    data: MissionReportData,
    options: Optional[ReportOptions] = None,
    resolver: Optional[ImageResolver] = None,
    generated_on: Optional[date] = None,
    fonts: Optional[FontManager] = None,
) -> LaidOutDocument:
    """
    Lay out a mission report into draw commands grouped by page.

    Each call builds a fresh assembler and flow engine; pass a resolver only
    to control how image references are loaded for this run.
    """
    assembler = DocumentAssembler(options=options, fonts=fonts, resolver=resolver)
    return assembler.assemble(data, generated_on=generated_on)
