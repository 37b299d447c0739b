"""Layout Package

This package lays mission reports out onto fixed-size pages:

Core Classes:
- DocumentAssembler: Builds the report section sequence (from assembler.py)
- FlowEngine: Page cursor and page-break decisions
- TableLayout: Fixed-column tables with a data-driven status column
- FontManager: Font registration and text measurement
- ImageResolver: Image reference decoding with a per-run cache
- PDFRenderer: Paints draw commands onto a ReportLab canvas

Utilities:
- geometry: Scaling, color and coordinate conversion functions
- blocks: Content block model and block factories

Helper Functions:
- generate: Lay out mission data into draw commands grouped by page
"""

# Import building blocks first; the assembler depends on all of them
from . import geometry
from . import blocks
from .blocks import BlockKind, Cell, ContentBlock, wrap_text
from .flow import DrawCommand, FlowEngine, PageCursor
from .table import TableLayout, TableRowData, TableStyle
from .font_manager import FontManager
from .images import ImageResolver, ResolvedImage
from .assembler import DocumentAssembler, LaidOutDocument, generate
from .renderer import PDFRenderer

# Expose public API
__all__ = [
    # Main assembler
    'DocumentAssembler',
    'LaidOutDocument',
    'generate',

    # Pagination
    'FlowEngine',
    'PageCursor',
    'DrawCommand',

    # Block model
    'BlockKind',
    'Cell',
    'ContentBlock',
    'wrap_text',

    # Component classes
    'TableLayout',
    'TableRowData',
    'TableStyle',
    'FontManager',
    'ImageResolver',
    'ResolvedImage',
    'PDFRenderer',

    # Utility modules
    'geometry',
    'blocks',
]
