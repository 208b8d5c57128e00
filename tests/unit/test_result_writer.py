import json
from pathlib import Path

from tradedocs.extraction.models import (
    FinalResult,
    MultiPromptResult,
    RunMetadata,
    StructuredResult,
    TokenUsage,
)
from tradedocs.processor.result_writer import ResultWriter


def _make_result(document_type: str = "swift") -> MultiPromptResult:
    return MultiPromptResult(
        success=True,
        document_type=document_type,
        total_steps=0,
        steps=[],
        final_result=FinalResult(
            raw_text="{}",
            extracted_data={"beneficiário": "São Paulo"},
            structured_result=StructuredResult(),
        ),
        metadata=RunMetadata(total_processing_time_ms=1, total_token_usage=TokenUsage()),
    )


class TestResultWriter:
    def test_writes_result_named_after_source_and_type(self, tmp_path: Path) -> None:
        writer = ResultWriter(tmp_path / "out")

        path = writer.write(Path("/docs/payment.pdf"), _make_result("swift"), page_count=2)

        assert path == tmp_path / "out" / "payment.swift.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["documentType"] == "swift"
        assert data["totalPages"] == 2
        assert data["success"] is True

    def test_keeps_non_ascii_text(self, tmp_path: Path) -> None:
        path = ResultWriter(tmp_path).write(Path("a.pdf"), _make_result())
        text = path.read_text(encoding="utf-8")
        assert "São Paulo" in text
        assert "totalPages" not in json.loads(text)

    def test_writes_error_record(self, tmp_path: Path) -> None:
        writer = ResultWriter(tmp_path)

        path = writer.write_error(Path("/docs/di.pdf"), "di", "AI provider network error: boom")

        assert path == tmp_path / "di.error.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "success": False,
            "documentType": "di",
            "source": "/docs/di.pdf",
            "error": "AI provider network error: boom",
        }
