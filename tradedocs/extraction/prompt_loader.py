from pathlib import Path

from tradedocs.extraction.exceptions import ExtractionError

DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt(name: str, prompts_dir: Path | None = None) -> str:
    """Load a step prompt from a text file.

    Args:
        name: Prompt file stem, e.g. ``di_step2``.
        prompts_dir: Directory holding ``<name>.txt`` files.
                     Defaults to the bundled prompts directory.

    Returns:
        The prompt text with surrounding whitespace removed.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    directory = prompts_dir if prompts_dir is not None else DEFAULT_PROMPT_DIR
    path = directory / f"{name}.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt '{name}': {exc}") from exc
