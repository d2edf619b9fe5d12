"""Exceptions raised when a page cannot be extracted at all."""


class ExtractionError(RuntimeError):
    """Raised when the page structure needed for extraction is missing."""

    def __init__(self, message: str, suggestion: str = ""):
        super().__init__(message)
        self.suggestion = suggestion
