import io

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def _render_pages(*pages: list[str]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    for lines in pages:
        for offset, line in enumerate(lines):
            c.drawString(72, 770 - offset * 16, line)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single-page PDF laid out like a SWIFT payment confirmation."""
    return _render_pages(["MT103 Single Customer Credit Transfer", "32A: USD 100,00"])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Two-page PDF laid out like a packing list; page count is 2."""
    return _render_pages(
        ["PACKING LIST PL-2024-17", "Consignee: Importadora Ltda"],
        ["Container MSCU1234567", "Total G.W.: 1520.00 KG"],
    )


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Valid PDF with one blank page, still counted as one page."""
    return _render_pages([])
