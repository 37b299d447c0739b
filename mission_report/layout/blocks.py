"""Content Block Model

Immutable renderable units handed to the flow engine. Each block knows its
own height (and optionally width); the payload carries everything the
rendering backend needs to paint it. Multi-cell blocks (table rows, card
rows) carry one ``Cell`` per column and the flow engine emits one draw
command per cell.

Block construction is pure: measuring text goes through a ``measure``
callable and image sizes are resolved before a block is built.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .geometry import scale_to_fit

# measure(text, font_size, bold) -> width in points
MeasureFn = Callable[[str, float, bool], float]


class BlockKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    TABLE_ROW = "table_row"
    RULE = "rule"
    SECTION_HEADER = "section_header"
    PLACEHOLDER = "placeholder"
    CARD_ROW = "card_row"
    SPACER = "spacer"
    FOOTER = "footer"


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextPayload:
    lines: Tuple[str, ...]
    font_size: float
    bold: bool
    color: Tuple[int, int, int]
    leading: float


@dataclass(frozen=True)
class ImagePayload:
    source: Any
    intrinsic_width: float
    intrinsic_height: float
    draw_width: float
    draw_height: float
    frame_color: Optional[Tuple[int, int, int]] = None


@dataclass(frozen=True)
class RulePayload:
    color: Tuple[int, int, int]
    thickness: float


@dataclass(frozen=True)
class SectionHeaderPayload:
    title: str
    caption: str
    bar_height: float
    font_size: float
    caption_font_size: float
    fill: Tuple[int, int, int]
    text_color: Tuple[int, int, int]


@dataclass(frozen=True)
class PlaceholderPayload:
    message: str
    font_size: float
    fill: Tuple[int, int, int]
    border: Tuple[int, int, int]
    text_color: Tuple[int, int, int]


@dataclass(frozen=True)
class TableCellPayload:
    text: str
    font_size: float
    bold: bool
    text_color: Tuple[int, int, int]
    border: Tuple[int, int, int]
    fill: Optional[Tuple[int, int, int]] = None


@dataclass(frozen=True)
class CardPayload:
    title: str
    lines: Tuple[str, ...]
    title_font_size: float
    font_size: float
    leading: float
    title_bar_height: float
    padding: float
    title_fill: Tuple[int, int, int]
    title_color: Tuple[int, int, int]
    body_fill: Tuple[int, int, int]
    text_color: Tuple[int, int, int]


@dataclass(frozen=True)
class FooterPayload:
    left: str
    center: str
    right: str
    font_size: float
    text_color: Tuple[int, int, int]
    brand_color: Tuple[int, int, int]
    rule_color: Tuple[int, int, int]


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Cell:
    """One column of a multi-cell block."""
    width: float
    payload: Any


@dataclass(frozen=True)
class ContentBlock:
    """A single renderable unit of fixed height.

    Attributes:
        kind: Block type tag
        height: Vertical space the block consumes on a page
        width: Required width, or None to span the content width
        payload: Render payload for single-cell blocks
        cells: Per-column payloads for multi-cell blocks
        gap: Horizontal space between cells
    """
    kind: BlockKind
    height: float
    width: Optional[float] = None
    payload: Any = None
    cells: Tuple[Cell, ...] = field(default_factory=tuple)
    gap: float = 0.0

    @property
    def is_multi_cell(self) -> bool:
        return bool(self.cells)


# ---------------------------------------------------------------------------
# Text wrapping
# ---------------------------------------------------------------------------

def wrap_text(text: str, max_width: Optional[float], measure: Callable[[str], float]) -> List[str]:
    """
    Greedy word wrap.

    Breaks at the last whitespace that keeps a line within ``max_width``.
    A single word wider than ``max_width`` is placed alone on its line
    without truncation. Explicit newlines always start a new line.

    Args:
        text: Text to wrap
        max_width: Maximum line width, or None to disable wrapping
        measure: Callable returning the rendered width of a string

    Returns:
        List of lines (at least one, possibly empty)
    """
    paragraphs = text.split("\n")
    if max_width is None:
        return paragraphs

    lines: List[str] = []
    for paragraph in paragraphs:
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if measure(candidate) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def text_line(
    text: str,
    font_size: float,
    color: Tuple[int, int, int],
    measure: MeasureFn,
    bold: bool = False,
    max_width: Optional[float] = None,
    line_spacing: float = 1.25,
    space_after: float = 0.0,
) -> ContentBlock:
    """Build a TEXT block, wrapping to ``max_width`` when given."""
    lines = wrap_text(text, max_width, lambda s: measure(s, font_size, bold))
    leading = font_size * line_spacing
    payload = TextPayload(
        lines=tuple(lines),
        font_size=font_size,
        bold=bold,
        color=color,
        leading=leading,
    )
    return ContentBlock(
        kind=BlockKind.TEXT,
        height=len(lines) * leading + space_after,
        width=max_width,
        payload=payload,
    )


def image_block(
    source: Any,
    intrinsic_width: float,
    intrinsic_height: float,
    max_width: float,
    max_height: float,
    frame_color: Optional[Tuple[int, int, int]] = None,
) -> ContentBlock:
    """Build an IMAGE block whose height is the scaled draw height."""
    draw_width, draw_height = scale_to_fit(
        intrinsic_width, intrinsic_height, max_width, max_height
    )
    payload = ImagePayload(
        source=source,
        intrinsic_width=intrinsic_width,
        intrinsic_height=intrinsic_height,
        draw_width=draw_width,
        draw_height=draw_height,
        frame_color=frame_color,
    )
    return ContentBlock(
        kind=BlockKind.IMAGE,
        height=draw_height,
        width=draw_width,
        payload=payload,
    )


def rule(color: Tuple[int, int, int], height: float, thickness: float = 1.0) -> ContentBlock:
    """Horizontal rule drawn across the content width, centered in ``height``."""
    return ContentBlock(
        kind=BlockKind.RULE,
        height=height,
        payload=RulePayload(color=color, thickness=thickness),
    )


def section_header(
    title: str,
    caption: str,
    bar_height: float,
    font_size: float,
    caption_font_size: float,
    fill: Tuple[int, int, int],
    text_color: Tuple[int, int, int],
    space_after: float = 0.0,
) -> ContentBlock:
    """Filled title bar; the block reserves ``space_after`` below the bar."""
    return ContentBlock(
        kind=BlockKind.SECTION_HEADER,
        height=bar_height + space_after,
        payload=SectionHeaderPayload(
            title=title,
            caption=caption,
            bar_height=bar_height,
            font_size=font_size,
            caption_font_size=caption_font_size,
            fill=fill,
            text_color=text_color,
        ),
    )


def placeholder(
    message: str,
    height: float,
    font_size: float,
    fill: Tuple[int, int, int],
    border: Tuple[int, int, int],
    text_color: Tuple[int, int, int],
    width: Optional[float] = None,
) -> ContentBlock:
    """Fixed-size filler substituted for missing visual content."""
    return ContentBlock(
        kind=BlockKind.PLACEHOLDER,
        height=height,
        width=width,
        payload=PlaceholderPayload(
            message=message,
            font_size=font_size,
            fill=fill,
            border=border,
            text_color=text_color,
        ),
    )


def spacer(height: float) -> ContentBlock:
    return ContentBlock(kind=BlockKind.SPACER, height=height)


def table_row(cells: Sequence[Cell], height: float) -> ContentBlock:
    return ContentBlock(
        kind=BlockKind.TABLE_ROW,
        height=height,
        width=sum(cell.width for cell in cells),
        cells=tuple(cells),
    )


def card_row(cards: Sequence[Cell], gap: float) -> ContentBlock:
    """
    Place cards side by side; the row is as tall as its tallest card.

    Card height is the title bar plus padded body lines.
    """
    heights = []
    for card in cards:
        p = card.payload
        heights.append(p.title_bar_height + 2 * p.padding + len(p.lines) * p.leading)
    total_width = sum(card.width for card in cards) + gap * max(len(cards) - 1, 0)
    return ContentBlock(
        kind=BlockKind.CARD_ROW,
        height=max(heights) if heights else 0.0,
        width=total_width,
        cells=tuple(cards),
        gap=gap,
    )
