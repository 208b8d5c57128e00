from pathlib import Path

from tradedocs.processor.exceptions import (
    EmptyFileError,
    FileTooLargeError,
    UnsupportedFormatError,
)


class FileLoader:
    """Validates a PDF path on disk and reads its bytes."""

    MAX_SIZE_BYTES = 50 * 1024 * 1024

    def __init__(self, max_size_bytes: int | None = None) -> None:
        self._max_size_bytes = (
            max_size_bytes if max_size_bytes is not None else self.MAX_SIZE_BYTES
        )

    def load(self, path: Path) -> bytes:
        """Read document bytes from disk.

        Raises:
            UnsupportedFormatError: if the file does not have a .pdf suffix.
            FileNotFoundError: if the file does not exist.
            EmptyFileError: if the file is empty.
            FileTooLargeError: if the file exceeds the size limit.
        """
        if path.suffix.lower() != ".pdf":
            raise UnsupportedFormatError(
                f"Unsupported file format '{path.suffix or path.name}': only PDF files are accepted"
            )
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        size = path.stat().st_size
        if size == 0:
            raise EmptyFileError(f"File is empty: {path}")
        if size > self._max_size_bytes:
            raise FileTooLargeError(
                f"File {path} is {size} bytes, limit is {self._max_size_bytes} bytes"
            )
        return path.read_bytes()
