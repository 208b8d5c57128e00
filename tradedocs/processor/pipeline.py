from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from tradedocs.extraction.models import MultiPromptResult


@dataclass(slots=True)
class PipelineContext:
    source_path: Path
    document_type: str
    raw_bytes: bytes = b""
    page_count: int = 0
    result: MultiPromptResult | None = None
    output_path: Path | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
