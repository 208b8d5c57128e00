"""AI-powered multi-step document extractor."""

import time

from tradedocs.extraction.assembler import assemble
from tradedocs.extraction.base import BaseExtractor
from tradedocs.extraction.cancellation import CancellationToken
from tradedocs.extraction.catalog import StepCatalog
from tradedocs.extraction.client_base import BaseModelClient
from tradedocs.extraction.models import (
    FinalResult,
    ModelResponse,
    MultiPromptResult,
    ProgressCallback,
    PromptStep,
    RunMetadata,
    StepResult,
    TokenUsage,
)
from tradedocs.extraction.sanitizer import sanitize
from tradedocs.extraction.validator import validate_required_fields
from tradedocs.logging.logger import Log

PRIOR_OUTPUT_LABEL = "\n\nOutput from the previous step:\n"


class MultiPromptExtractor(BaseExtractor):
    """Runs a document through its prompt steps and assembles the structured result.

    Steps run strictly in order; a step may receive the previous step's output.
    The instance holds no per-run state, so one extractor can serve concurrent runs.
    """

    def __init__(
        self,
        *,
        client: BaseModelClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 32000,
        catalog: StepCatalog | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_tokens = max_tokens
        self._catalog = catalog if catalog is not None else StepCatalog()

    def run(
        self,
        document_bytes: bytes,
        document_type: str,
        on_progress: ProgressCallback | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> MultiPromptResult:
        run_started = time.perf_counter()
        steps = self._catalog.get_steps(document_type)
        total_steps = len(steps)
        Log.info(f"Processing '{document_type}' document with {total_steps} prompt steps")

        step_results: list[StepResult] = []
        total_usage = TokenUsage()
        previous_output = ""

        for prompt_step in steps:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            if on_progress is not None:
                on_progress(
                    prompt_step.step, total_steps, prompt_step.name, prompt_step.description
                )

            step_started = time.perf_counter()
            prompt = self._build_prompt(prompt_step, previous_output)
            Log.debug(f"Step {prompt_step.step} prompt ({len(prompt)} chars):\n{prompt}")

            response = self._call_ai(prompt, document_bytes, cancel_token)
            cleaned = sanitize(response.raw_text)
            Log.debug(f"Step {prompt_step.step} AI raw response:\n{response.raw_text}")

            step_result = StepResult(
                step=prompt_step.step,
                step_name=prompt_step.name,
                step_description=prompt_step.description,
                raw_result=cleaned,
                token_usage=response.usage,
                processing_time_ms=_elapsed_ms(step_started),
            )
            step_results.append(step_result)
            previous_output = cleaned
            total_usage = total_usage + response.usage

            Log.info(
                f"Completed step {prompt_step.step}/{total_steps}: {prompt_step.name} "
                f"({step_result.processing_time_ms}ms, {response.usage.input} input / "
                f"{response.usage.output} output tokens, {len(cleaned)} chars)"
            )

        assembly = assemble(document_type, step_results)
        validation = validate_required_fields(document_type, assembly.structured_result)
        if not validation.is_valid:
            Log.warning(
                f"'{document_type}' result is missing required fields: "
                f"{', '.join(validation.missing_fields)}"
            )

        result = MultiPromptResult(
            success=True,
            document_type=document_type,
            total_steps=total_steps,
            steps=step_results,
            final_result=FinalResult(
                raw_text=assembly.final_raw_text(),
                extracted_data=assembly.extracted_data,
                structured_result=assembly.structured_result,
                validation=validation,
            ),
            metadata=RunMetadata(
                total_processing_time_ms=_elapsed_ms(run_started),
                total_token_usage=total_usage,
                steps_completed=[step.step for step in step_results],
            ),
        )
        Log.info(
            f"Completed all {total_steps} steps for '{document_type}' in "
            f"{result.metadata.total_processing_time_ms}ms: "
            f"{len(assembly.structured_result.sections)} sections"
        )
        return result

    @staticmethod
    def _build_prompt(prompt_step: PromptStep, previous_output: str) -> str:
        if prompt_step.expects_prior_output and previous_output:
            return f"{prompt_step.prompt_text}{PRIOR_OUTPUT_LABEL}{previous_output}"
        return prompt_step.prompt_text

    def _call_ai(
        self,
        prompt: str,
        document_bytes: bytes,
        cancel_token: CancellationToken | None,
    ) -> ModelResponse:
        return self._client.create_document_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            prompt=prompt,
            document_bytes=document_bytes,
            cancel_token=cancel_token,
        )


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
