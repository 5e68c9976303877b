from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when chart input cannot be turned into observations."""


class MalformedObservationError(ChartDataError):
    def __init__(self, message: str, *, index: int | None = None) -> None:
        if index is not None:
            message = f"observation {index}: {message}"
        super().__init__(message)
        self.index = index
