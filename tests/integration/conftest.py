from pathlib import Path

import pytest

from tradedocs.config.settings import Settings


@pytest.fixture()
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        extraction_provider="example",
        pdf_engine="pdfplumber",
        output_dir=str(tmp_path / "output"),
    )


@pytest.fixture()
def sample_pdf_on_disk(tmp_path: Path, multi_page_pdf_bytes: bytes) -> Path:
    path = tmp_path / "input" / "shipment.pdf"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(multi_page_pdf_bytes)
    return path
