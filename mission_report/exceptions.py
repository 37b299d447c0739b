"""Custom Exception Hierarchy

Exception hierarchy for the mission report generator. Configuration errors
abort a run, asset errors are recovered from by substituting placeholders,
and output errors are surfaced to the caller.
"""


class MissionReportError(Exception):
    """Base exception for all mission report errors.

    This is the root of the exception hierarchy. Catching this exception
    will catch all custom exceptions raised while building a report.
    """
    pass


# Input Errors
class InvalidMissionDataError(MissionReportError):
    """Raised when a mission payload cannot be turned into MissionReportData."""

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(f"Invalid mission data field '{field}': {reason}")


# Configuration Errors
class ConfigurationError(MissionReportError):
    """Base class for fatal configuration errors.

    These abort generation and propagate unmodified to the caller.
    """
    pass


class InvalidOptionsError(ConfigurationError):
    """Raised when report options are out of range or inconsistent."""
    pass


class InvalidColorFormatError(ConfigurationError):
    """Raised when a color is not 6 hex digits after an optional '#'."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid color format: {value!r} (expected '#RRGGBB')")


class BlockTooTallError(ConfigurationError):
    """Raised when a block is taller than the usable page height."""

    def __init__(self, block_kind: str, height: float, budget: float):
        self.block_kind = block_kind
        self.height = height
        self.budget = budget
        super().__init__(
            f"Block '{block_kind}' of height {height:.1f}pt can never fit "
            f"on a page with {budget:.1f}pt of usable height"
        )


class TableTooWideError(ConfigurationError):
    """Raised when table column widths exceed the content width."""

    def __init__(self, total_width: float, content_width: float):
        self.total_width = total_width
        self.content_width = content_width
        super().__init__(
            f"Table columns need {total_width:.1f}pt but only "
            f"{content_width:.1f}pt of content width is available"
        )


class NoRoundsError(ConfigurationError):
    """Raised when a mission has no rounds to report on."""

    def __init__(self):
        super().__init__("A mission report needs at least one round")


# Asset Errors (recoverable, converted to placeholders)
class RecoverableAssetError(MissionReportError):
    """Base class for asset problems the assembler recovers from."""
    pass


class MissingOptionalAssetError(RecoverableAssetError):
    """Raised when an optional image was not supplied."""
    pass


class AssetDecodeError(RecoverableAssetError):
    """Raised when an image reference cannot be decoded into dimensions."""

    def __init__(self, image_ref: str, reason: str):
        self.image_ref = image_ref
        super().__init__(f"Failed to decode image '{image_ref}': {reason}")


# Output Errors
class OutputWriteError(MissionReportError):
    """Raised when the output document cannot be written."""

    def __init__(self, output_path: str, reason: str):
        self.output_path = output_path
        super().__init__(f"Cannot write report to '{output_path}': {reason}")
