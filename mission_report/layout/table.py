"""Table Layout

Fixed-column-width table rows for the flow engine. Every row, header
included, becomes one TABLE_ROW block of uniform height so a table can
split across pages between rows.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .blocks import Cell, ContentBlock, TableCellPayload, table_row
from ..exceptions import TableTooWideError

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class TableRowData:
    """Values for one body row.

    Attributes:
        values: Cell texts, one per column
        status: Drives the status column fill (True = positive style);
                None leaves the status cell unstyled
    """
    values: Sequence[str]
    status: Optional[bool] = None


@dataclass(frozen=True)
class TableStyle:
    font_size: float
    header_font_size: float
    text_color: RGB
    header_fill: RGB
    header_text_color: RGB
    border: RGB
    positive_fill: RGB
    negative_fill: RGB
    status_text_color: RGB


class TableLayout:
    """Builds table row blocks from column definitions and row values.

    Args:
        columns: Header labels
        column_widths: Fixed width of each column
        content_width: Width available on the page
        row_height: Uniform height of every row
        style: Colors and font sizes
        status_column: Index of the column filled according to ``TableRowData.status``

    Raises:
        TableTooWideError: If the column widths add up to more than ``content_width``
        ValueError: If labels and widths disagree in length
    """

    def __init__(
        self,
        columns: Sequence[str],
        column_widths: Sequence[float],
        content_width: float,
        row_height: float,
        style: TableStyle,
        status_column: Optional[int] = None,
    ):
        if len(columns) != len(column_widths):
            raise ValueError(
                f"{len(columns)} column labels but {len(column_widths)} column widths"
            )
        total_width = sum(column_widths)
        if total_width > content_width:
            raise TableTooWideError(total_width, content_width)
        if status_column is not None and not 0 <= status_column < len(columns):
            raise ValueError(f"status_column {status_column} out of range")

        self.columns = list(columns)
        self.column_widths = list(column_widths)
        self.row_height = row_height
        self.style = style
        self.status_column = status_column

    @property
    def width(self) -> float:
        return sum(self.column_widths)

    def header_block(self) -> ContentBlock:
        """Header row, also used as the continuation header after a page break."""
        cells = [
            Cell(
                width=width,
                payload=TableCellPayload(
                    text=label,
                    font_size=self.style.header_font_size,
                    bold=True,
                    text_color=self.style.header_text_color,
                    border=self.style.border,
                    fill=self.style.header_fill,
                ),
            )
            for label, width in zip(self.columns, self.column_widths)
        ]
        return table_row(cells, self.row_height)

    def row_block(self, row: TableRowData) -> ContentBlock:
        if len(row.values) != len(self.columns):
            raise ValueError(
                f"Row has {len(row.values)} values for {len(self.columns)} columns"
            )
        cells = []
        for index, (value, width) in enumerate(zip(row.values, self.column_widths)):
            fill = None
            text_color = self.style.text_color
            if index == self.status_column and row.status is not None:
                fill = self.style.positive_fill if row.status else self.style.negative_fill
                text_color = self.style.status_text_color
            cells.append(Cell(
                width=width,
                payload=TableCellPayload(
                    text=str(value),
                    font_size=self.style.font_size,
                    bold=False,
                    text_color=text_color,
                    border=self.style.border,
                    fill=fill,
                ),
            ))
        return table_row(cells, self.row_height)

    def build(self, rows: Sequence[TableRowData]) -> List[ContentBlock]:
        """Header block followed by one block per row."""
        return [self.header_block()] + [self.row_block(row) for row in rows]
