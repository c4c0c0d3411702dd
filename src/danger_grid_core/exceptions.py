"""
Exception hierarchy for the danger grid.

Every error derives from DangerGridError and also from the builtin that
callers would naturally expect (ValueError, IndexError, RuntimeError), so
existing ``except ValueError`` handlers keep working.
"""


class DangerGridError(Exception):
    """Base exception for all danger grid errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigurationError(DangerGridError, ValueError):
    """Raised for invalid tuning values or a degenerate map size."""


class TimeOffsetError(DangerGridError, IndexError):
    """
    Raised when a time offset lies outside [-look_behind, look_ahead].
    """

    def __init__(self, seconds, look_behind: int, look_ahead: int):
        super().__init__(
            f"Time offset {seconds} outside [-{look_behind}, {look_ahead}]",
            {"seconds": seconds, "look_behind": look_behind, "look_ahead": look_ahead},
        )
        self.seconds = seconds


class CellIndexError(DangerGridError, IndexError):
    """Raised on unchecked access to a cell outside the layer."""

    def __init__(self, x, y, width: int, height: int):
        super().__init__(
            f"Cell ({x}, {y}) outside {width}x{height} grid",
            {"x": x, "y": y, "width": width, "height": height},
        )


class NegativeDangerError(DangerGridError, ValueError):
    """Raised when a negative danger value is written to the grid."""


class DistanceCostsNotComputedError(DangerGridError, RuntimeError):
    """Raised when distance costs are queried before they were calculated."""

    def __init__(self, message: str = "calculate_distance_costs() has not been called"):
        super().__init__(message)


class DistanceCostsAlreadyComputedError(DangerGridError, RuntimeError):
    """Raised when distance costs are fused into the grid a second time."""

    def __init__(self, message: str = "distance costs were already fused into this grid"):
        super().__init__(message)


class CourseFileError(DangerGridError, ValueError):
    """
    Raised when a course file line cannot be parsed.

    Carries the offending line number and text.
    """

    def __init__(self, message: str, line_number: int = None, line: str = None):
        super().__init__(message, {"line_number": line_number, "line": line})
        self.line_number = line_number
        self.line = line
