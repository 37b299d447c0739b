"""Flow Engine

Greedy fit-or-break pagination. Blocks are placed one at a time onto
fixed-size pages; a block that does not fit in the remaining height moves
to a fresh page. There is no lookahead and no widow/orphan control, so a
table splits between rows but never inside one.

The engine works in layout space: points measured from the top-left corner
of the page.
"""
import logging
from dataclasses import dataclass
from typing import Any, List, Sequence

from .blocks import BlockKind, ContentBlock
from .geometry import column_offsets
from ..exceptions import BlockTooTallError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawCommand:
    """Absolute placement of one block (or one cell of a block) on a page."""
    page: int
    x: float
    y: float
    width: float
    height: float
    kind: BlockKind
    payload: Any


@dataclass
class PageCursor:
    """Current position within the page sequence.

    Attributes:
        page: 0-based index of the current page
        offset: Distance already consumed below the top margin
        budget: Usable content height of a page
    """
    budget: float
    page: int = 0
    offset: float = 0.0

    @property
    def remaining(self) -> float:
        return self.budget - self.offset

    @property
    def is_empty(self) -> bool:
        return self.offset == 0


class FlowEngine:
    """Places content blocks onto pages and emits draw commands.

    One engine is created per document generation run and owns that run's
    ``PageCursor``. Page index and offset only ever move forward.

    Attributes:
        commands: Draw commands emitted so far, in placement order
        page_breaks: Number of page breaks taken
    """

    def __init__(
        self,
        page_width: float,
        page_height: float,
        margin_top: float,
        margin_bottom: float,
        margin_left: float,
        margin_right: float,
        footer_height: float = 0.0,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin_top = margin_top
        self.margin_left = margin_left
        self.content_width = page_width - margin_left - margin_right
        budget = page_height - margin_top - margin_bottom - footer_height
        if budget <= 0 or self.content_width <= 0:
            raise ValueError(
                f"Margins leave no content area on a {page_width}x{page_height} page"
            )
        self.cursor = PageCursor(budget=budget)
        self.commands: List[DrawCommand] = []
        self.page_breaks = 0

    @property
    def page_count(self) -> int:
        return self.cursor.page + 1

    def place(
        self,
        block: ContentBlock,
        continuation: Sequence[ContentBlock] = (),
    ) -> List[DrawCommand]:
        """
        Place a block at the cursor, breaking to a new page if it does not fit.

        A block that exactly fills the remaining height stays on the current
        page. If a break is taken, ``continuation`` blocks (for example a
        repeated table header) are placed at the top of the new page first.

        Args:
            block: Block to place
            continuation: Blocks to re-emit after a page break caused by this block

        Returns:
            Draw commands emitted for the block (continuation excluded)

        Raises:
            BlockTooTallError: If the block cannot fit on any page
        """
        self._check_fits(block)
        if self.cursor.offset + block.height > self.cursor.budget:
            self.break_page()
            if continuation:
                self._check_fits_with(block, continuation)
                for repeated in continuation:
                    self._emit(repeated)
        return self._emit(block)

    def place_all(
        self,
        blocks: Sequence[ContentBlock],
        continuation: Sequence[ContentBlock] = (),
    ) -> List[DrawCommand]:
        emitted = []
        for block in blocks:
            emitted.extend(self.place(block, continuation))
        return emitted

    def break_page(self) -> None:
        """Finalize the current page and move the cursor to the top of the next."""
        log.debug(
            "Page break after page %d (%.1f/%.1fpt used)",
            self.cursor.page, self.cursor.offset, self.cursor.budget,
        )
        self.cursor.page += 1
        self.cursor.offset = 0.0
        self.page_breaks += 1

    def new_page(self) -> None:
        """Start a section on a fresh page; a still-empty page is reused."""
        if not self.cursor.is_empty:
            self.break_page()

    def commands_for_page(self, page: int) -> List[DrawCommand]:
        return [command for command in self.commands if command.page == page]

    # ------------------------------------------------------------------

    def _check_fits(self, block: ContentBlock) -> None:
        if block.height > self.cursor.budget:
            raise BlockTooTallError(block.kind.value, block.height, self.cursor.budget)

    def _check_fits_with(self, block: ContentBlock, continuation: Sequence[ContentBlock]) -> None:
        total = block.height + sum(repeated.height for repeated in continuation)
        if total > self.cursor.budget:
            raise BlockTooTallError(block.kind.value, total, self.cursor.budget)

    def _emit(self, block: ContentBlock) -> List[DrawCommand]:
        y = self.margin_top + self.cursor.offset
        emitted = []
        if block.is_multi_cell:
            offsets = column_offsets([cell.width for cell in block.cells], block.gap)
            for cell, dx in zip(block.cells, offsets):
                emitted.append(DrawCommand(
                    page=self.cursor.page,
                    x=self.margin_left + dx,
                    y=y,
                    width=cell.width,
                    height=block.height,
                    kind=block.kind,
                    payload=cell.payload,
                ))
        else:
            emitted.append(DrawCommand(
                page=self.cursor.page,
                x=self.margin_left,
                y=y,
                width=block.width if block.width is not None else self.content_width,
                height=block.height,
                kind=block.kind,
                payload=block.payload,
            ))
        self.commands.extend(emitted)
        self.cursor.offset += block.height
        return emitted
