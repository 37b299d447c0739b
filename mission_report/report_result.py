"""Report Result Dataclass

Outputs of one report generation run.
"""
from dataclasses import dataclass, field
from typing import List


@dataclass
class ReportResult:
    """Result of generating a mission report.

    Attributes:
        output_path: Path of the written PDF
        page_count: Number of pages in the document
        page_breaks: Page breaks forced by content overflow
        substitutions: Placeholders substituted for missing or unreadable assets
    """

    output_path: str
    page_count: int
    page_breaks: int = 0
    substitutions: List[str] = field(default_factory=list)

    @property
    def has_substitutions(self) -> bool:
        """True if any image was replaced by a placeholder."""
        return bool(self.substitutions)
