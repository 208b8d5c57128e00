from pathlib import Path

from tradedocs.config.settings import Settings
from tradedocs.extraction.factory import ExtractorFactory
from tradedocs.extraction.models import ProgressCallback
from tradedocs.logging.logger import Log
from tradedocs.pdf.factory import PdfInspectorFactory
from tradedocs.processor.file_loader import FileLoader
from tradedocs.processor.pipeline import PipelineContext, PipelineStep
from tradedocs.processor.result_writer import ResultWriter
from tradedocs.processor.steps import (
    ExtractStep,
    InspectPdfStep,
    LoadDocumentStep,
    PersistResultStep,
    RecordFailureStep,
)


class Processor:
    """Orchestrates the document processing pipeline.

    Pipeline: load -> inspect -> extract -> persist.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, source_path: Path, document_type: str) -> PipelineContext:
        """Run every step for one document; on failure record it and re-raise."""
        Log.info(f"Processing {source_path} as '{document_type}'")
        context = PipelineContext(source_path=source_path, document_type=document_type)
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or type(exc).__name__
            try:
                self._failed_step.run(context)
            except Exception as record_exc:
                Log.error(f"Failed to record failure for {source_path}: {record_exc}")
            raise
        return context


def build_processor(
    settings: Settings,
    on_progress: ProgressCallback | None = None,
    output_dir: Path | None = None,
    deadline_seconds: float | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    file_loader = FileLoader(max_size_bytes=settings.max_file_size_bytes)
    pdf_inspector = PdfInspectorFactory.create(settings)
    extractor = ExtractorFactory.create(settings)
    result_writer = ResultWriter(
        output_dir if output_dir is not None else Path(settings.output_dir)
    )
    steps: list[PipelineStep] = [
        LoadDocumentStep(file_loader=file_loader),
        InspectPdfStep(pdf_inspector=pdf_inspector),
        ExtractStep(
            extractor=extractor,
            on_progress=on_progress,
            deadline_seconds=(
                deadline_seconds
                if deadline_seconds is not None
                else settings.extraction_deadline_seconds
            ),
        ),
        PersistResultStep(result_writer=result_writer),
    ]
    return Processor(steps=steps, failed_step=RecordFailureStep(result_writer))
