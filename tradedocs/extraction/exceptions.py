class ExtractionError(Exception):
    """Raised when document extraction fails."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class ExtractionResponseError(ExtractionError):
    """Raised when the AI provider returns a response without usable text content."""


class ExtractionCancelledError(ExtractionError):
    """Raised when a run is cancelled or its deadline expires."""
