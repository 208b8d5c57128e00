from abc import ABC, abstractmethod


class BasePdfInspector(ABC):
    """Contract for all PDF inspection adapters."""

    @abstractmethod
    def page_count(self, pdf_bytes: bytes) -> int:
        """Open PDF bytes and count their pages.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Number of pages in the document.

        Raises:
            PdfInspectionError: if the bytes are not a readable PDF.
        """
