class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class UnsupportedFormatError(ProcessorError):
    """Raised when the input file is not a PDF."""


class EmptyFileError(ProcessorError):
    """Raised when the input file has no content."""


class FileTooLargeError(ProcessorError):
    """Raised when the input file exceeds the configured size limit."""
