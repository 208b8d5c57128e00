import json
from pathlib import Path

from tradedocs.extraction.models import MultiPromptResult


class ResultWriter:
    """Writes extraction results and failure records as JSON files."""

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    def write(
        self,
        source_path: Path,
        result: MultiPromptResult,
        page_count: int | None = None,
    ) -> Path:
        """Write ``<stem>.<document_type>.json`` and return its path."""
        payload = result.to_dict()
        if page_count is not None:
            payload["totalPages"] = page_count
        path = self._output_dir / f"{source_path.stem}.{result.document_type}.json"
        self._dump(path, payload)
        return path

    def write_error(self, source_path: Path, document_type: str, message: str) -> Path:
        """Write ``<stem>.error.json`` describing a failed run and return its path."""
        path = self._output_dir / f"{source_path.stem}.error.json"
        self._dump(
            path,
            {
                "success": False,
                "documentType": document_type,
                "source": str(source_path),
                "error": message,
            },
        )
        return path

    def _dump(self, path: Path, payload: dict[str, object]) -> None:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
