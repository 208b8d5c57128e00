from tradedocs.extraction.base import BaseExtractor
from tradedocs.extraction.cancellation import CancellationToken
from tradedocs.extraction.models import ProgressCallback
from tradedocs.logging.logger import Log
from tradedocs.pdf.base import BasePdfInspector
from tradedocs.processor.file_loader import FileLoader
from tradedocs.processor.pipeline import PipelineContext, PipelineStep
from tradedocs.processor.result_writer import ResultWriter


class LoadDocumentStep(PipelineStep):
    def __init__(self, file_loader: FileLoader) -> None:
        self._file_loader = file_loader

    def run(self, context: PipelineContext) -> PipelineContext:
        context.raw_bytes = self._file_loader.load(context.source_path)
        Log.info(f"Loaded {len(context.raw_bytes)} bytes from {context.source_path}")
        return context


class InspectPdfStep(PipelineStep):
    def __init__(self, pdf_inspector: BasePdfInspector) -> None:
        self._pdf_inspector = pdf_inspector

    def run(self, context: PipelineContext) -> PipelineContext:
        context.page_count = self._pdf_inspector.page_count(context.raw_bytes)
        Log.info(f"{context.source_path.name} has {context.page_count} pages")
        return context


class ExtractStep(PipelineStep):
    def __init__(
        self,
        extractor: BaseExtractor,
        on_progress: ProgressCallback | None = None,
        deadline_seconds: float | None = None,
    ) -> None:
        self._extractor = extractor
        self._on_progress = on_progress
        self._deadline_seconds = deadline_seconds

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.raw_bytes:
            raise ValueError("PipelineContext.raw_bytes must be set before extraction")
        cancel_token = CancellationToken(deadline_seconds=self._deadline_seconds)
        context.result = self._extractor.run(
            context.raw_bytes,
            context.document_type,
            on_progress=self._on_progress,
            cancel_token=cancel_token,
        )
        return context


class PersistResultStep(PipelineStep):
    def __init__(self, result_writer: ResultWriter) -> None:
        self._result_writer = result_writer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.result is None:
            raise ValueError("PipelineContext.result must be set before persist")
        context.output_path = self._result_writer.write(
            context.source_path,
            context.result,
            page_count=context.page_count,
        )
        Log.info(f"Wrote result to {context.output_path}")
        return context


class RecordFailureStep(PipelineStep):
    def __init__(self, result_writer: ResultWriter) -> None:
        self._result_writer = result_writer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.output_path = self._result_writer.write_error(
            context.source_path,
            context.document_type,
            context.error_message,
        )
        Log.error(f"Processing {context.source_path} failed: {context.error_message}")
        return context
